"""Per-host HTTP header rules."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from booklinkcheck.config.interpolation import interpolate_env
from booklinkcheck.contracts.config import LinkcheckConfig
from booklinkcheck.contracts.diagnostic import Diagnostic, ErrorKind, Severity
from booklinkcheck.contracts.exceptions import ConfigInterpolationError

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeaderRule:
    pattern: re.Pattern[str]
    headers: tuple[tuple[str, str], ...]

    def matches(self, url: str) -> bool:
        return self.pattern.search(url) is not None


def resolve_header_rules(
    config: LinkcheckConfig,
    environ: Mapping[str, str] | None = None,
) -> tuple[list[HeaderRule], list[Diagnostic]]:
    """Interpolate every configured header once.

    A header whose value names a missing environment variable, or that is not
    ASCII once interpolated, is dropped and reported as a single run-level
    diagnostic.
    """
    rules: list[HeaderRule] = []
    diagnostics: list[Diagnostic] = []
    for pattern, headers in config.header_rules():
        resolved: list[tuple[str, str]] = []
        for header in headers:
            try:
                value = interpolate_env(header.value, environ)
            except ConfigInterpolationError as exc:
                diagnostics.append(_dropped(pattern, header.name, str(exc)))
                continue
            if not (header.name.isascii() and value.isascii()):
                # HTTP header fields are encoded as ASCII
                diagnostics.append(_dropped(pattern, header.name, "name and value must be ASCII"))
                continue
            resolved.append((header.name, value))
        rules.append(HeaderRule(pattern=pattern, headers=tuple(resolved)))
    return rules, diagnostics


def headers_for(url: str, rules: list[HeaderRule]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for rule in rules:
        if rule.matches(url):
            headers.update(rule.headers)
    return headers


def _dropped(pattern: re.Pattern[str], name: str, reason: str) -> Diagnostic:
    _LOG.debug("dropping `%s` header for /%s/: %s", name, pattern.pattern, reason)
    return Diagnostic(
        severity=Severity.ERROR,
        kind=ErrorKind.CONFIG_INTERPOLATION,
        message=f"http-headers /{pattern.pattern}/: `{name}` header: {reason}",
    )
