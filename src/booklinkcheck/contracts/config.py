"""Configuration contracts.

:class:`LinkcheckConfig` is an immutable snapshot of the user-facing options.
Keys use the kebab-case spelling of the ``[output.linkcheck]`` table
(``follow-web-links``, ``cache-timeout``, ...) but may also be populated by
their Python names.
"""

from __future__ import annotations

import re
from enum import StrEnum
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer

DEFAULT_CACHE_TIMEOUT = 60 * 60 * 12


def _package_version() -> str:
    try:
        return version("booklinkcheck")
    except PackageNotFoundError:
        return "0.0.0"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


def default_user_agent() -> str:
    return f"booklinkcheck-{_package_version()}"


class WarningPolicy(StrEnum):
    """How diagnostics affect the overall verdict."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


class HttpHeader(BaseModel):
    """A ``Name: value`` header sent to matching hosts.

    ``value`` is kept exactly as written so that interpolated secrets never
    end up in logs, diagnostics or a re-serialized config.
    """

    name: str
    value: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, raw: str) -> HttpHeader:
        name, sep, value = raw.partition(": ")
        if not sep:
            raise ValueError(f"The `{raw}` HTTP header must contain `: ` but it doesn't")
        return cls(name=name, value=value)

    @model_serializer
    def _to_string(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"


class LinkcheckConfig(BaseModel):
    follow_web_links: bool = False
    traverse_parent_directories: bool = False
    exclude: list[str] = Field(default_factory=list)
    user_agent: str = Field(default_factory=default_user_agent)
    cache_timeout: int = Field(default=DEFAULT_CACHE_TIMEOUT, ge=0)
    warning_policy: WarningPolicy = WarningPolicy.WARN
    http_headers: dict[str, list[HttpHeader]] = Field(default_factory=dict)
    request_timeout: float = Field(default=10.0, gt=0)
    max_concurrency: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True, alias_generator=_kebab, populate_by_name=True)

    @field_validator("exclude")
    @classmethod
    def _compile_exclude(cls, patterns: list[str]) -> list[str]:
        for pattern in patterns:
            _compile(pattern)
        return patterns

    @field_validator("user_agent")
    @classmethod
    def _ascii_user_agent(cls, value: str) -> str:
        if not value.isascii():
            raise ValueError("user-agent must be ASCII")
        return value

    @field_validator("http_headers", mode="before")
    @classmethod
    def _parse_headers(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        parsed: dict[str, list[Any]] = {}
        for pattern, headers in value.items():
            _compile(pattern)
            if isinstance(headers, str) or not isinstance(headers, list):
                raise ValueError(f"http-headers entry for `{pattern}` must be a list of header strings")
            parsed[pattern] = [HttpHeader.parse(h) if isinstance(h, str) else h for h in headers]
        return parsed

    def exclude_patterns(self) -> list[re.Pattern[str]]:
        return [_compile(pattern) for pattern in self.exclude]

    def header_rules(self) -> list[tuple[re.Pattern[str], list[HttpHeader]]]:
        return [(_compile(pattern), headers) for pattern, headers in self.http_headers.items()]

    def should_skip(self, target: str) -> str | None:
        """Return the first exclusion pattern matching *target*, if any."""
        for pattern in self.exclude_patterns():
            if pattern.search(target):
                return pattern.pattern
        return None


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"invalid regex `{pattern}`: {exc}") from exc
