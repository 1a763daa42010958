"""Build a :class:`Book` from a source directory or a renderer's JSON context."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import ValidationError

from booklinkcheck.contracts.document import Book, SourceFile
from booklinkcheck.contracts.exceptions import DocumentError

_LOG = logging.getLogger(__name__)

_SKIPPED_DIRS = {".git", "node_modules"}


def load_book_dir(root: str | Path) -> Book:
    """Read every markdown file under *root*; rendered text equals the source."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise DocumentError(f"book source directory not found: {root_path}")

    files: list[SourceFile] = []
    for path in sorted(root_path.rglob("*.md")):
        relative = path.relative_to(root_path)
        if any(part in _SKIPPED_DIRS or part.startswith(".") for part in relative.parts[:-1]):
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f"failed reading book file: {path}") from exc
        files.append(SourceFile(path=PurePosixPath(relative.as_posix()), content=content))

    _LOG.debug("loaded %d page(s) from %s", len(files), root_path)
    return Book(root=root_path, files=files)


def load_render_context(payload: Mapping[str, Any]) -> tuple[Book, dict[str, Any]]:
    """Build a book from a render context and return it with its ``output.linkcheck`` table.

    The context looks like::

        {"root": "/path/to/book",
         "config": {"book": {"src": "src"}, "output": {"linkcheck": {...}}},
         "book": {"sections": [{"Chapter": {"content": "...", "path": "intro.md", "sub_items": [...]}}]}}
    """
    try:
        root = Path(payload["root"])
        config = payload.get("config") or {}
        src = (config.get("book") or {}).get("src", "src")
        sections = payload["book"]["sections"]
        table = dict((config.get("output") or {}).get("linkcheck") or {})
    except (KeyError, TypeError, AttributeError) as exc:
        raise DocumentError(f"malformed render context: {exc}") from exc

    try:
        files = [_source_file(chapter) for chapter in _iter_chapters(sections)]
        return Book(root=root / src, files=files), table
    except ValidationError as exc:
        raise DocumentError(f"malformed chapter in render context: {exc}") from exc


def read_render_context(path: str | Path) -> tuple[Book, dict[str, Any]]:
    """Load a render context from a JSON file (``-`` reads standard input)."""
    try:
        text = sys.stdin.read() if str(path) == "-" else Path(path).read_text(encoding="utf-8")
        payload = json.loads(text)
    except OSError as exc:
        raise DocumentError(f"failed reading render context: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"invalid JSON in render context: {path}") from exc
    if not isinstance(payload, dict):
        raise DocumentError(f"render context root must be an object: {path}")
    return load_render_context(payload)


def _iter_chapters(items: Any) -> Iterator[Mapping[str, Any]]:
    if not isinstance(items, list):
        raise DocumentError("render context sections must be a list")
    for item in items:
        if not isinstance(item, Mapping):
            continue  # "Separator" and "PartTitle" entries
        chapter = item.get("Chapter")
        if not isinstance(chapter, Mapping):
            continue
        if chapter.get("path"):
            yield chapter
        yield from _iter_chapters(chapter.get("sub_items") or [])


def _source_file(chapter: Mapping[str, Any]) -> SourceFile:
    return SourceFile(
        path=PurePosixPath(str(chapter["path"]).replace("\\", "/")),
        content=chapter.get("content", ""),
        source=chapter.get("source"),
        position_map=chapter.get("position_map"),
    )
