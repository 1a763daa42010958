"""Module entrypoint for ``python -m booklinkcheck``."""

from __future__ import annotations

from booklinkcheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
