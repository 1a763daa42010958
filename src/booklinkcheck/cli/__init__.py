"""Command-line interface for booklinkcheck."""

from __future__ import annotations

from booklinkcheck.cli.app import main as main
from booklinkcheck.cli.commands.check import format_report as format_report
from booklinkcheck.cli.commands.check import run_check as run_check
from booklinkcheck.cli.parser import build_parser as build_parser

__all__ = ["build_parser", "format_report", "main", "run_check"]
