"""Public API surface for booklinkcheck."""

from booklinkcheck.book import load_book_dir, load_render_context, read_render_context
from booklinkcheck.cache import Cache, CacheEntry, load_cache, save_cache
from booklinkcheck.config import interpolate_env, load_config, parse_config
from booklinkcheck.contracts.config import HttpHeader, LinkcheckConfig, WarningPolicy
from booklinkcheck.contracts.diagnostic import Diagnostic, ErrorKind, LinkcheckReport, LinkOutcome, Severity
from booklinkcheck.contracts.document import Book, SourceFile
from booklinkcheck.contracts.exceptions import (
    CacheError,
    ConfigError,
    ConfigInterpolationError,
    DocumentError,
    LinkcheckError,
)
from booklinkcheck.contracts.link import ExcludedTarget, ExternalTarget, InternalTarget, Link, LinkType, Span
from booklinkcheck.engine import CheckProgress, LinkChecker, check_book

__all__ = [
    "Book",
    "Cache",
    "CacheEntry",
    "CacheError",
    "CheckProgress",
    "ConfigError",
    "ConfigInterpolationError",
    "Diagnostic",
    "DocumentError",
    "ErrorKind",
    "ExcludedTarget",
    "ExternalTarget",
    "HttpHeader",
    "InternalTarget",
    "Link",
    "LinkChecker",
    "LinkOutcome",
    "LinkType",
    "LinkcheckConfig",
    "LinkcheckError",
    "LinkcheckReport",
    "Severity",
    "SourceFile",
    "Span",
    "WarningPolicy",
    "check_book",
    "interpolate_env",
    "load_book_dir",
    "load_cache",
    "load_config",
    "load_render_context",
    "parse_config",
    "read_render_context",
    "save_cache",
]
