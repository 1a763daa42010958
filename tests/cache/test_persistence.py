from __future__ import annotations

import json
from pathlib import Path

import pytest

from booklinkcheck import Cache, CacheError, LinkOutcome, load_cache, save_cache


def test_missing_file_loads_empty_cache(tmp_path: Path) -> None:
    cache = load_cache(tmp_path / "cache.json", timeout=60)

    assert len(cache) == 0
    assert cache.timeout == 60


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "cache.json"
    cache = Cache(60, clock=lambda: 1_000.0)
    cache.insert("https://example.com/", LinkOutcome.success())
    cache.insert("https://example.com/gone", LinkOutcome.http_error(410, "410 Gone"))

    save_cache(cache, path)
    loaded = load_cache(path, timeout=60, clock=lambda: 1_030.0)

    assert loaded.snapshot() == cache.snapshot()
    entry = loaded.lookup("https://example.com/gone")
    assert entry is not None
    assert entry.outcome.status == 410


def test_saved_file_format(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    cache = Cache(60, clock=lambda: 12.5)
    cache.insert("https://example.com/", LinkOutcome.success())

    save_cache(cache, path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert payload["entries"]["https://example.com/"]["checked_at"] == 12.5
    assert payload["entries"]["https://example.com/"]["outcome"]["ok"] is True
    assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]


@pytest.mark.parametrize(
    "content",
    ["{not json", '{"version": 1, "entries": {"u": {"outcome": "bad"}}}', '{"version": 99, "entries": {}}', "[]"],
)
def test_corrupt_file_degrades_to_empty_cache(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")

    cache = load_cache(path, timeout=60)

    assert len(cache) == 0


def test_save_failure_raises_cache_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(CacheError, match="failed to persist link cache"):
        save_cache(Cache(60), blocker / "cache.json")
