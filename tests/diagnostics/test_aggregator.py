from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from booklinkcheck import Diagnostic, ErrorKind, Link, LinkType, Severity, Span, WarningPolicy
from booklinkcheck.diagnostics.aggregator import DiagnosticAggregator


def _diagnostic(path: str, line: int, column: int, message: str = "broken") -> Diagnostic:
    link = Link(
        source_file=PurePosixPath(path),
        span=Span(line=line, column=column, start=0, end=1),
        raw_target="x.md",
        link_type=LinkType.INTERNAL,
    )
    return Diagnostic.for_link(link, ErrorKind.MISSING_FILE, message)


def _run_level(message: str) -> Diagnostic:
    return Diagnostic(severity=Severity.ERROR, kind=ErrorKind.CONFIG_INTERPOLATION, message=message)


def test_diagnostics_are_sorted_by_file_line_column() -> None:
    aggregator = DiagnosticAggregator(WarningPolicy.WARN)
    aggregator.extend(
        [
            _diagnostic("b.md", 1, 1),
            _diagnostic("a.md", 3, 5),
            _diagnostic("a.md", 3, 2),
            _diagnostic("a.md", 1, 9),
        ]
    )

    report = aggregator.finish(links_checked=4)

    assert [(str(d.source_file), d.location.line, d.location.column) for d in report.diagnostics if d.location] == [
        ("a.md", 1, 9),
        ("a.md", 3, 2),
        ("a.md", 3, 5),
        ("b.md", 1, 1),
    ]
    assert report.links_checked == 4


def test_ties_keep_insertion_order_and_run_level_sorts_first() -> None:
    aggregator = DiagnosticAggregator(WarningPolicy.WARN)
    aggregator.add(_diagnostic("a.md", 2, 1, "first"))
    aggregator.add(_diagnostic("a.md", 2, 1, "second"))
    aggregator.add(_run_level("header dropped"))

    report = aggregator.finish()

    assert [d.message for d in report.diagnostics] == ["header dropped", "first", "second"]
    assert len(aggregator) == 3


def test_warn_policy_always_succeeds() -> None:
    aggregator = DiagnosticAggregator(WarningPolicy.WARN)
    aggregator.add(_diagnostic("a.md", 1, 1))

    report = aggregator.finish()

    assert report.success is True
    assert report.diagnostics[0].severity is Severity.WARNING
    assert report.emitted == report.diagnostics


def test_ignore_policy_succeeds_and_emits_nothing() -> None:
    aggregator = DiagnosticAggregator(WarningPolicy.IGNORE)
    aggregator.add(_diagnostic("a.md", 1, 1))

    report = aggregator.finish()

    assert report.success is True
    assert len(report.diagnostics) == 1
    assert report.emitted == []


def test_error_policy_promotes_warnings_and_fails() -> None:
    aggregator = DiagnosticAggregator(WarningPolicy.ERROR)
    aggregator.add(_diagnostic("a.md", 1, 1))
    aggregator.add(_run_level("bad header"))

    report = aggregator.finish()

    assert report.success is False
    assert {d.severity for d in report.diagnostics} == {Severity.ERROR}


@pytest.mark.parametrize("policy", list(WarningPolicy))
def test_no_diagnostics_always_succeeds(policy: WarningPolicy) -> None:
    report = DiagnosticAggregator(policy).finish(links_checked=10)

    assert report.success is True
    assert report.diagnostics == []


def test_diagnostic_rendering() -> None:
    assert str(_diagnostic("ch/a.md", 4, 7, "`x.md` does not exist")) == "warning: ch/a.md:4:7: `x.md` does not exist"
    assert str(_run_level("bad header")) == "error: bad header"
