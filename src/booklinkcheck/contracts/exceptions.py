"""Exception hierarchy for booklinkcheck."""

from __future__ import annotations


class LinkcheckError(Exception):
    """Base exception for all booklinkcheck errors."""


class ConfigError(LinkcheckError):
    """Configuration loading or validation failure."""


class ConfigInterpolationError(ConfigError):
    """An HTTP header value references an environment variable that is not set."""

    def __init__(self, message: str, *, variable: str) -> None:
        super().__init__(message)
        self.variable = variable


class DocumentError(LinkcheckError):
    """The input book cannot be read or mapped back to its sources."""


class CacheError(LinkcheckError):
    """The link cache could not be persisted."""
