from __future__ import annotations

import math
import stat
import time
from pathlib import Path

from ttl_file_cache.util.logging import get_logger

LOG = get_logger(__name__)


def now_seconds() -> int:
    return math.floor(time.time())


def validate(path: Path, now: int | None = None) -> bool:
    """Report whether the entry at ``path`` is live, deleting it if expired.

    The file's mtime is the expiry deadline; an entry is live only while
    ``now < mtime``. Missing files and non-regular files are not live.
    """
    try:
        info = path.stat()
    except FileNotFoundError:
        return False

    if not stat.S_ISREG(info.st_mode):
        return False

    current = now_seconds() if now is None else now
    if current < info.st_mtime:
        return True

    try:
        path.unlink()
        LOG.debug("Removed expired entry %s", path.name)
    except FileNotFoundError:
        pass
    return False
