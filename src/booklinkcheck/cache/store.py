"""Thread-safe, time-boxed cache of external link outcomes."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from booklinkcheck.contracts.diagnostic import LinkOutcome


class CacheEntry(BaseModel):
    outcome: LinkOutcome
    checked_at: float

    model_config = ConfigDict(frozen=True)


class Cache:
    """Map of normalized URL → :class:`CacheEntry` guarded by a single lock.

    Entries are never mutated; :meth:`insert` replaces the previous entry for a
    URL. :meth:`lookup` treats entries older than *timeout* seconds as absent.
    """

    def __init__(
        self,
        timeout: float,
        *,
        entries: dict[str, CacheEntry] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._timeout = timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, CacheEntry] = dict(entries or {})

    @property
    def timeout(self) -> float:
        return self._timeout

    def lookup(self, url: str) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(url)
        if entry is None:
            return None
        if self._clock() - entry.checked_at > self._timeout:
            return None
        return entry

    def insert(self, url: str, outcome: LinkOutcome, now: float | None = None) -> CacheEntry:
        entry = CacheEntry(outcome=outcome, checked_at=self._clock() if now is None else now)
        with self._lock:
            self._entries[url] = entry
        return entry

    def snapshot(self) -> dict[str, CacheEntry]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
