"""Shared test fixtures for booklinkcheck tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from booklinkcheck import LinkcheckConfig


@pytest.fixture
def book_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def default_config() -> LinkcheckConfig:
    return LinkcheckConfig()
