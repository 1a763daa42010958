"""Engine module exports."""

from booklinkcheck.engine.engine import LinkChecker, check_book
from booklinkcheck.engine.progress import CheckProgress

__all__ = ["CheckProgress", "LinkChecker", "check_book"]
