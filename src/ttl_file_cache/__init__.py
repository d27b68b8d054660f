"""Filesystem-backed key/value cache with per-entry TTL."""

from ttl_file_cache.cache.engine import DEFAULT_TTL, FileCache
from ttl_file_cache.util.hashing import hash_key

__all__ = [
    "DEFAULT_TTL",
    "FileCache",
    "hash_key",
]
