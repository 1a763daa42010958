"""Link classification and internal target resolution."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from booklinkcheck.contracts.config import LinkcheckConfig
from booklinkcheck.contracts.diagnostic import Diagnostic, ErrorKind
from booklinkcheck.contracts.document import Book, SourceFile
from booklinkcheck.contracts.link import ExcludedTarget, ExternalTarget, InternalTarget, Link, LinkType, ResolvedTarget
from booklinkcheck.resolve.slugs import page_anchors

_LOG = logging.getLogger(__name__)

_INDEX_PAGES = ("index.md", "README.md")


def split_target(raw: str) -> tuple[str, str | None]:
    """Split a relative target into its decoded path and fragment."""
    path, sep, fragment = raw.partition("#")
    path = path.split("?", 1)[0]
    return unquote(path), (unquote(fragment) if sep and fragment else None)


class Resolver:
    """Classify links and check internal targets against a book."""

    def __init__(self, book: Book, config: LinkcheckConfig) -> None:
        self._book = book
        self._config = config
        self._pages: dict[PurePosixPath, SourceFile] = {page.path: page for page in book.files}
        self._anchors: dict[PurePosixPath, set[str]] = {}

    def classify(self, link: Link) -> ResolvedTarget:
        pattern = self._config.should_skip(link.raw_target)
        if pattern is not None:
            _LOG.debug(
                "skipping %s (%s:%d) excluded by `%s`", link.raw_target, link.source_file, link.span.line, pattern
            )
            return ExcludedTarget(pattern=pattern)

        if link.link_type is LinkType.EXTERNAL:
            return ExternalTarget(url=link.raw_target)

        path, fragment = split_target(link.raw_target)
        if not path:
            return InternalTarget(file=link.source_file, fragment=fragment)
        if path.startswith("/"):
            joined = path.lstrip("/")
        else:
            joined = posixpath.join(str(link.source_file.parent), path)
        return InternalTarget(file=PurePosixPath(posixpath.normpath(joined or ".")), fragment=fragment)

    def check(self, link: Link, target: InternalTarget) -> Diagnostic | None:
        """Return a diagnostic when *target* does not exist in the book, else ``None``."""
        escapes_root = bool(target.file.parts) and target.file.parts[0] == ".."
        if escapes_root and not self._config.traverse_parent_directories:
            return Diagnostic.for_link(
                link,
                ErrorKind.OUTSIDE_ROOT,
                f"`{link.raw_target}` points outside the book root; set traverse-parent-directories to allow it",
            )

        found = self._locate(target.file)
        if found is None:
            return Diagnostic.for_link(
                link,
                ErrorKind.MISSING_FILE,
                f"file not found: `{target.file}` (linked as `{link.raw_target}`)",
            )
        if isinstance(found, Path) or target.fragment is None:
            return None

        if target.fragment not in self.anchors(found):
            return Diagnostic.for_link(
                link,
                ErrorKind.BROKEN_ANCHOR,
                f"anchor `#{target.fragment}` not found in `{found}`",
            )
        return None

    def anchors(self, page: PurePosixPath) -> set[str]:
        cached = self._anchors.get(page)
        if cached is None:
            cached = page_anchors(self._pages[page].content)
            self._anchors[page] = cached
        return cached

    def _locate(self, file: PurePosixPath) -> PurePosixPath | Path | None:
        """Find the book page (or, failing that, the file on disk) a target names."""
        if file in self._pages:
            return file
        if file.suffix == ".html":
            for candidate in self._html_sources(file):
                if candidate in self._pages:
                    return candidate
        for index in _INDEX_PAGES:
            if file / index in self._pages:
                return file / index

        on_disk = self._book.root / file
        if on_disk.is_file() or on_disk.is_dir():
            return on_disk
        return None

    @staticmethod
    def _html_sources(file: PurePosixPath) -> list[PurePosixPath]:
        markdown = file.with_suffix(".md")
        if file.name == "index.html":
            return [markdown, file.with_name("README.md")]
        return [markdown]
