from __future__ import annotations

import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any

from ttl_file_cache.cache.directory import (
    TEMP_PREFIX,
    ensure_root,
    list_entries,
    remove_temp_files,
    wipe_root,
)
from ttl_file_cache.cache.validate import validate
from ttl_file_cache.util.hashing import hash_key
from ttl_file_cache.util.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_TTL = 60 * 60 * 24


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


FILE_MODE = 0o666 & ~_current_umask()


def _check_ttl(ttl: int | None, fallback: int) -> int:
    if not ttl:
        return fallback
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise ValueError(f"ttl must be a whole number of seconds, got {ttl!r}")
    if ttl < 0:
        raise ValueError("ttl must be a positive number of seconds")
    return ttl


class FileCache:
    """Key/value cache stored as one JSON file per key.

    Each file is named after the SHA-1 of its key, and its mtime holds the
    expiry deadline. Expired entries are removed lazily when they are read
    and in a full pass at construction.
    """

    def __init__(self, root: Path | str, ttl: int | None = None) -> None:
        self.root = Path(root)
        self.ttl = _check_ttl(ttl, DEFAULT_TTL)
        ensure_root(self.root)
        self.prune()

    def clock(self) -> float:
        return time.time()

    def time(self) -> int:
        return int(self.clock())

    def path_for(self, key: str) -> Path:
        return self.root / hash_key(key)

    def prune(self) -> int:
        # Temp files never outlive a set() call; any seen here were abandoned.
        remove_temp_files(self.root)
        removed = 0
        now = self.time()
        for identifier in list_entries(self.root):
            path = self.root / identifier
            if path.is_file() and not validate(path, now=now):
                removed += 1
        if removed:
            LOG.info("Pruned %s expired entries from %s", removed, self.root)
        return removed

    def has(self, key: str) -> bool:
        try:
            return validate(self.path_for(key), now=self.time())
        except OSError as exc:
            LOG.warning("Treating %r as a miss: %s", key, exc)
            return False

    def get(self, key: str) -> Any | None:
        if not self.has(key):
            return None
        try:
            data = self.path_for(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            LOG.warning("Treating %r as a miss: %s", key, exc)
            return None
        return json.loads(data)

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        effective_ttl = _check_ttl(ttl, self.ttl)
        data = json.dumps(value, ensure_ascii=False)
        ensure_root(self.root)

        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=TEMP_PREFIX, suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.chmod(tmp_path, FILE_MODE)
            now = self.clock()
            os.utime(tmp_path, (now, now + effective_ttl))
            os.replace(tmp_path, self.path_for(key))
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        LOG.debug("Stored %r for %ss", key, effective_ttl)

    def delete(self, key: str) -> bool:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def delete_all(self) -> None:
        wipe_root(self.root)

    def clear(self) -> None:
        wipe_root(self.root)
        ensure_root(self.root)

    def get_all_keys(self) -> list[str]:
        return list_entries(self.root)
