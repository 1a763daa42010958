"""Diagnostic collection, ordering and the warning policy."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from booklinkcheck.contracts.config import WarningPolicy
from booklinkcheck.contracts.diagnostic import Diagnostic, LinkcheckReport, Severity

_LOG = logging.getLogger(__name__)


class DiagnosticAggregator:
    """Buffer diagnostics in completion order and report them in source order.

    The final list is sorted by ``(file, line, column)``; ties keep insertion
    order. Run-level diagnostics without a location sort first.
    """

    def __init__(self, policy: WarningPolicy) -> None:
        self._policy = policy
        self._diagnostics: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def finish(self, *, links_checked: int = 0) -> LinkcheckReport:
        ordered = sorted(self._diagnostics, key=Diagnostic.sort_key)
        if self._policy is WarningPolicy.ERROR:
            ordered = [
                d.model_copy(update={"severity": Severity.ERROR}) if d.severity is Severity.WARNING else d
                for d in ordered
            ]
        success = self._policy is not WarningPolicy.ERROR or not ordered

        _LOG.info(
            "%d link(s) checked, %d problem(s) found, policy=%s, success=%s",
            links_checked,
            len(ordered),
            self._policy,
            success,
        )
        return LinkcheckReport(success=success, policy=self._policy, diagnostics=ordered, links_checked=links_checked)
