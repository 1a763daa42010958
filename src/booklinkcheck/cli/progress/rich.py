"""Rich progress display for ``booklinkcheck check``."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from booklinkcheck.engine.progress import CheckProgress

PHASE_LABELS = {"Extract": "Pages", "Resolve": "Links", "Web": "Web links"}


class RichCheckProgress(CheckProgress):
    """One bar per phase on stderr, with a running count of broken items.

    ::

        with RichCheckProgress() as progress:
            report = await LinkChecker(config, progress=progress).check(book)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>10}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("{task.fields[problems]}"),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._tasks: dict[str, RichTaskID] = {}
        self._broken: dict[str, int] = {}

    def __enter__(self) -> RichCheckProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def broken(self, phase: str) -> int:
        return self._broken.get(phase, 0)

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self._broken[phase] = 0
        self._tasks[phase] = self._progress.add_task(PHASE_LABELS.get(phase, phase), total=total, problems="")

    def item_done(self, phase: str, *, broken: bool = False) -> None:
        task_id = self._tasks.get(phase)
        if task_id is None:
            return
        if broken:
            self._broken[phase] += 1
            self._progress.update(task_id, problems=f"[red]{self._broken[phase]} broken[/red]")
        self._progress.advance(task_id)

    def phase_done(self, phase: str) -> None:
        task_id = self._tasks.get(phase)
        if task_id is None:
            return
        total = self._progress.tasks[task_id].total
        self._progress.update(task_id, total=total or 1, completed=total or 1)

    def phase_error(self, phase: str, error: BaseException) -> None:
        task_id = self._tasks.get(phase)
        if task_id is not None:
            self._progress.update(task_id, description=f"[red]✗ {PHASE_LABELS.get(phase, phase)}[/red]")
