"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("booklinkcheck")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="booklinkcheck")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check every link of a book")
    source = check_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--root", help="Book source directory; every *.md file below it is checked")
    source.add_argument(
        "--render-context",
        help="Path to a JSON render context describing the rendered book ('-' reads stdin)",
    )
    check_parser.add_argument("--config", default=None, help="Path to book.toml or a linkcheck TOML/JSON file")
    check_parser.add_argument(
        "--cache",
        default=None,
        help="Path to the link cache (default: <book root>/.linkcheck-cache.json)",
    )
    check_parser.add_argument("--no-cache", action="store_true", help="Neither read nor write the link cache")
    check_parser.add_argument("--no-progress", action="store_true", help="Disable the progress display")
    check_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
