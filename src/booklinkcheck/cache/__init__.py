"""Persistent cache of external link outcomes."""

from booklinkcheck.cache.persistence import load_cache, save_cache
from booklinkcheck.cache.store import Cache, CacheEntry

__all__ = ["Cache", "CacheEntry", "load_cache", "save_cache"]
