"""Diagnostic aggregation."""

from booklinkcheck.diagnostics.aggregator import DiagnosticAggregator

__all__ = ["DiagnosticAggregator"]
