"""External link validation."""

from booklinkcheck.validate.headers import HeaderRule, headers_for, resolve_header_rules
from booklinkcheck.validate.urls import is_web_url, normalize_url
from booklinkcheck.validate.validator import WebValidator, default_concurrency

__all__ = [
    "HeaderRule",
    "WebValidator",
    "default_concurrency",
    "headers_for",
    "is_web_url",
    "normalize_url",
    "resolve_header_rules",
]
