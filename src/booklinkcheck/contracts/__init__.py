"""Public contracts for booklinkcheck."""

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
from booklinkcheck.contracts.link import (
    ExcludedTarget,
    ExternalTarget,
    InternalTarget,
    Link,
    LinkType,
    ResolvedTarget,
    Span,
)

__all__ = [
    "Book",
    "CacheError",
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
    "LinkOutcome",
    "LinkType",
    "LinkcheckConfig",
    "LinkcheckError",
    "LinkcheckReport",
    "ResolvedTarget",
    "Severity",
    "SourceFile",
    "Span",
    "WarningPolicy",
]
