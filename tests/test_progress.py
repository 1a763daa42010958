"""Tests for CheckProgress and RichCheckProgress."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from booklinkcheck import CheckProgress, LinkcheckConfig, LinkChecker
from booklinkcheck.cli.progress.rich import RichCheckProgress
from tests.fakes.book import make_book


def _console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=120)


def test_base_progress_hooks_are_noops() -> None:
    progress = CheckProgress()
    progress.phase_start("Extract", total=5)
    progress.item_done("Extract", broken=True)
    progress.phase_done("Extract")
    progress.phase_error("Extract", RuntimeError("boom"))


class TestRichCheckProgress:
    def test_counts_broken_items_per_phase(self) -> None:
        with RichCheckProgress(console=_console()) as progress:
            progress.phase_start("Web", total=3)
            progress.item_done("Web")
            progress.item_done("Web", broken=True)
            progress.item_done("Web", broken=True)
            progress.phase_done("Web")
            task = progress._progress.tasks[0]

        assert progress.broken("Web") == 2
        assert task.completed == 3
        assert task.fields["problems"] == "[red]2 broken[/red]"

    def test_indeterminate_phase_completes(self) -> None:
        with RichCheckProgress(console=_console()) as progress:
            progress.phase_start("Resolve", total=None)
            progress.phase_done("Resolve")
            task = progress._progress.tasks[0]

        assert task.finished

    def test_unknown_phase_is_ignored(self) -> None:
        with RichCheckProgress(console=_console()) as progress:
            progress.item_done("Unknown", broken=True)
            progress.phase_done("Unknown")
            progress.phase_error("Unknown", RuntimeError("boom"))

        assert progress.broken("Unknown") == 0

    def test_phase_error_marks_the_phase(self) -> None:
        with RichCheckProgress(console=_console()) as progress:
            progress.phase_start("Extract", total=3)
            progress.phase_error("Extract", RuntimeError("boom"))
            task = progress._progress.tasks[0]

        assert task.description == "[red]✗ Pages[/red]"

    @pytest.mark.asyncio
    async def test_counts_broken_links_of_a_run(self, book_root: Path) -> None:
        book = make_book(book_root, {"a.md": "[b](b.md) [gone](missing.md) [bad](b.md#nope)\n", "b.md": "# B\n"})

        with RichCheckProgress(console=_console()) as progress:
            report = await LinkChecker(LinkcheckConfig(), progress=progress).check(book)

        assert len(report.diagnostics) == 2
        assert progress.broken("Extract") == 0
        assert progress.broken("Resolve") == 2
