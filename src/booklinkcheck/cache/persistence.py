"""Link-cache persistence helpers."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from booklinkcheck.cache.store import Cache, CacheEntry
from booklinkcheck.contracts.exceptions import CacheError

_LOG = logging.getLogger(__name__)

CACHE_FORMAT_VERSION = 1


class CacheFile(BaseModel):
    version: int = CACHE_FORMAT_VERSION
    entries: dict[str, CacheEntry] = Field(default_factory=dict)


def load_cache(path: Path, *, timeout: float, clock: Callable[[], float] = time.time) -> Cache:
    """Read a persisted cache; a missing, unreadable or corrupt file yields an empty cache."""
    if not path.exists():
        return Cache(timeout, clock=clock)
    try:
        payload = CacheFile.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        _LOG.warning("ignoring unreadable link cache %s: %s", path, exc)
        return Cache(timeout, clock=clock)
    if payload.version != CACHE_FORMAT_VERSION:
        _LOG.warning("ignoring link cache %s with unsupported version %d", path, payload.version)
        return Cache(timeout, clock=clock)
    _LOG.debug("loaded %d cached link outcomes from %s", len(payload.entries), path)
    return Cache(timeout, entries=payload.entries, clock=clock)


def save_cache(cache: Cache, path: Path) -> None:
    """Write *cache* to *path* atomically, replacing any previous file."""
    payload = CacheFile(entries=cache.snapshot())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload.model_dump_json(indent=2))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise CacheError(f"failed to persist link cache: {path}") from exc
