from dataclasses import dataclass
from pathlib import Path
import tomllib

from ttl_file_cache.cache.engine import DEFAULT_TTL, FileCache


@dataclass(frozen=True)
class CacheConfig:
    root: str
    ttl: int = DEFAULT_TTL


@dataclass(frozen=True)
class Config:
    cache: CacheConfig

    @property
    def root(self) -> str:
        return self.cache.root

    def build_cache(self) -> FileCache:
        return FileCache(Path(self.cache.root), ttl=self.cache.ttl)


DEFAULT_CONFIG_PATH = Path("config.toml")
DEFAULT_ROOT = ".cache/ttl"


def default_config() -> Config:
    return Config(cache=CacheConfig(root=DEFAULT_ROOT))


def load_config(path: Path | None = None) -> Config:
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return default_config()
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = path
        if not config_path.exists():
            raise FileNotFoundError(
                f"Missing {config_path}. Copy config.example.toml and edit it."
            )

    raw = tomllib.loads(config_path.read_text(encoding="utf-8"))
    cache = raw.get("cache", {})
    return Config(cache=CacheConfig(**{"root": DEFAULT_ROOT, **cache}))
