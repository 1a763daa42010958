"""Progress events emitted while a book is checked.

The engine reports three phases: ``Extract`` (one item per page), ``Resolve``
(one item per link) and ``Web`` (one item per unique URL). Each finished item
says whether it turned out broken, so a display can keep a running count of
problems next to the bar.
"""

from __future__ import annotations


class CheckProgress:
    """Observer for link-check progress; every hook is a no-op by default."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str, *, broken: bool = False) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
