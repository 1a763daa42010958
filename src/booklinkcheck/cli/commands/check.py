"""Check command: load inputs, run the engine, print the report."""

from __future__ import annotations

import argparse
from pathlib import Path

from booklinkcheck import Book, LinkcheckConfig, LinkcheckReport, LinkChecker, load_config, parse_config
from booklinkcheck.book import load_book_dir, read_render_context
from booklinkcheck.cache import Cache, load_cache, save_cache
from booklinkcheck.cli.progress.rich import RichCheckProgress

DEFAULT_CACHE_NAME = ".linkcheck-cache.json"


def load_inputs(args: argparse.Namespace) -> tuple[Book, LinkcheckConfig]:
    if args.render_context is not None:
        book, table = read_render_context(args.render_context)
        config = load_config(args.config) if args.config else parse_config(table)
        return book, config

    book = load_book_dir(args.root)
    if args.config:
        return book, load_config(args.config)
    book_toml = book.root.parent / "book.toml"
    return book, (load_config(book_toml) if book_toml.is_file() else LinkcheckConfig())


def cache_path(args: argparse.Namespace, book: Book) -> Path | None:
    if args.no_cache:
        return None
    if args.cache:
        return Path(args.cache).expanduser()
    return book.root / DEFAULT_CACHE_NAME


def format_report(report: LinkcheckReport) -> str:
    lines = [str(diagnostic) for diagnostic in report.emitted]
    if lines:
        lines.append("")
    status = "ok" if report.success else "failed"
    lines.extend(
        [
            f"booklinkcheck - {report.links_checked} link(s) checked",
            "",
            f"  Problems:  {len(report.emitted)}",
            f"  Policy:    {report.policy}",
            f"  Status:    {status}",
            "",
        ]
    )
    return "\n".join(lines)


async def run_check(args: argparse.Namespace) -> LinkcheckReport:
    book, config = load_inputs(args)
    path = cache_path(args, book)
    cache = load_cache(path, timeout=config.cache_timeout) if path is not None else Cache(config.cache_timeout)

    if not args.verbose and not args.no_progress:
        with RichCheckProgress() as progress:
            report = await LinkChecker(config, cache=cache, progress=progress).check(book)
    else:
        report = await LinkChecker(config, cache=cache).check(book)

    if path is not None and config.follow_web_links:
        save_cache(cache, path)

    print(format_report(report))
    return report


__all__ = ["format_report", "load_inputs", "run_check"]
