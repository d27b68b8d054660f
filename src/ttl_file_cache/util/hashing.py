from __future__ import annotations

import hashlib


def hash_key(key: str) -> str:
    """Map an arbitrary cache key to a 40-char lowercase hex identifier."""
    return hashlib.sha1(key.encode("utf-8")).hexdigest()
