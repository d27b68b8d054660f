import json
import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from ttl_file_cache.cache.engine import FileCache
from ttl_file_cache.config import CacheConfig, Config, load_config
from ttl_file_cache.util.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


def _cache(ctx: typer.Context) -> FileCache:
    cfg: Config = ctx.obj
    try:
        return cfg.build_cache()
    except (OSError, ValueError) as exc:
        _fail(f"Cannot open cache at {cfg.root}: {exc}")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = None,
    root: str | None = None,
    ttl: int | None = None,
    verbose: bool = False,
) -> None:
    """Inspect and edit a TTL file cache."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    try:
        cfg = load_config(config)
    except FileNotFoundError as exc:
        _fail(str(exc))
    ctx.obj = Config(
        cache=CacheConfig(
            root=root or cfg.cache.root,
            ttl=ttl if ttl is not None else cfg.cache.ttl,
        )
    )


@app.command("get")
def get_value(ctx: typer.Context, key: str) -> None:
    """Print the JSON value stored under KEY."""
    cache = _cache(ctx)
    try:
        value = cache.get(key)
    except json.JSONDecodeError as exc:
        _fail(f"Corrupt entry for {key}: {exc}")
    if value is None:
        console.print("[yellow]miss[/yellow]")
        raise typer.Exit(code=1)
    console.print_json(data=value)


@app.command("set")
def set_value(ctx: typer.Context, key: str, value: str, ttl: int | None = None) -> None:
    """Store VALUE (JSON, or plain text) under KEY."""
    cache = _cache(ctx)
    try:
        cache.set(key, _parse_value(value), ttl=ttl)
    except (OSError, ValueError) as exc:
        _fail(f"Failed to store {key}: {exc}")
    console.print(f"Stored {cache.path_for(key).name}")


@app.command()
def has(ctx: typer.Context, key: str) -> None:
    """Exit 0 if KEY is live, 1 otherwise."""
    cache = _cache(ctx)
    if cache.has(key):
        console.print("[green]hit[/green]")
        return
    console.print("[yellow]miss[/yellow]")
    raise typer.Exit(code=1)


@app.command()
def delete(ctx: typer.Context, key: str) -> None:
    """Remove KEY from the cache."""
    cache = _cache(ctx)
    try:
        removed = cache.delete(key)
    except OSError as exc:
        _fail(f"Failed to delete {key}: {exc}")
    console.print("Deleted" if removed else "Not present")


@app.command()
def keys(ctx: typer.Context) -> None:
    """List stored identifiers (hashed keys)."""
    cache = _cache(ctx)
    for identifier in sorted(cache.get_all_keys()):
        console.print(identifier)


@app.command()
def prune(ctx: typer.Context) -> None:
    """Remove every expired entry now."""
    cache = _cache(ctx)
    console.print(f"Pruned: {cache.prune()}")


@app.command()
def clear(ctx: typer.Context) -> None:
    """Remove every entry and keep the cache root."""
    cache = _cache(ctx)
    try:
        cache.clear()
    except OSError as exc:
        _fail(f"Failed to clear {cache.root}: {exc}")
    console.print(f"Cleared {cache.root}")


@app.command()
def delete_all(ctx: typer.Context) -> None:
    """Remove the cache root and everything in it."""
    cache = _cache(ctx)
    try:
        cache.delete_all()
    except OSError as exc:
        _fail(f"Failed to remove {cache.root}: {exc}")
    console.print(f"Removed {cache.root}")


if __name__ == "__main__":
    app()
