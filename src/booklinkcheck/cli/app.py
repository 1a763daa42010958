"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import asyncio
import logging
import sys

from booklinkcheck import CacheError, ConfigError, DocumentError


def main(argv: list[str] | None = None) -> int:
    import booklinkcheck.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        report = asyncio.run(cli.run_check(args))
    except (ConfigError, DocumentError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except CacheError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0 if report.success else 2


__all__ = ["main"]
