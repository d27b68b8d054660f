from __future__ import annotations

import os
from pathlib import Path

from ttl_file_cache.util.logging import get_logger

LOG = get_logger(__name__)

TEMP_PREFIX = "."


def ensure_root(root: Path) -> None:
    created = not root.exists()
    root.mkdir(parents=True, exist_ok=True)
    if created:
        LOG.info("Created cache root at %s", root)


def list_entries(root: Path) -> list[str]:
    """Return identifiers of the root's direct children.

    Dot-prefixed names are temporary files from an in-flight write and are
    skipped. A missing root yields an empty list.
    """
    try:
        names = os.listdir(root)
    except FileNotFoundError:
        return []
    return [name for name in names if not name.startswith(TEMP_PREFIX)]


def remove_temp_files(root: Path) -> int:
    """Delete temporary files left behind by writes that never finished."""
    try:
        names = os.listdir(root)
    except FileNotFoundError:
        return 0
    removed = 0
    for name in names:
        path = root / name
        if name.startswith(TEMP_PREFIX) and path.is_file() and _unlink_quiet(path):
            removed += 1
    if removed:
        LOG.info("Removed %s abandoned temp files from %s", removed, root)
    return removed


def wipe_root(root: Path) -> None:
    """Remove the root and everything below it, depth-first.

    Files or directories that disappear while the walk is in progress are
    treated as already removed.
    """
    if _remove_tree(root):
        LOG.info("Wiped cache root %s", root)


def _remove_tree(folder: Path) -> bool:
    try:
        children = list(os.scandir(folder))
    except FileNotFoundError:
        return False

    for child in children:
        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except FileNotFoundError:
            continue
        if is_dir:
            _remove_tree(Path(child.path))
        else:
            _unlink_quiet(Path(child.path))

    try:
        folder.rmdir()
    except FileNotFoundError:
        return False
    return True


def _unlink_quiet(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
