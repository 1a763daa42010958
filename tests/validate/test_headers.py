from __future__ import annotations

import pytest

from booklinkcheck import ErrorKind, LinkcheckConfig, Severity
from booklinkcheck.validate import headers_for, resolve_header_rules


def _config(headers: dict[str, list[str]]) -> LinkcheckConfig:
    return LinkcheckConfig.model_validate({"http-headers": headers})


def test_header_value_is_interpolated_from_environment() -> None:
    config = _config({r"https://example\.com": ["Authorization: Basic $TOKEN"]})

    rules, diagnostics = resolve_header_rules(config, {"TOKEN": "abc123"})

    assert diagnostics == []
    assert headers_for("https://example.com/private", rules) == {"Authorization": "Basic abc123"}


def test_headers_only_apply_to_matching_urls() -> None:
    config = _config({r"example\.com": ["X-Token: one"], r"other\.org": ["X-Other: two"]})

    rules, _ = resolve_header_rules(config, {})

    assert headers_for("https://example.com/", rules) == {"X-Token": "one"}
    assert headers_for("https://unrelated.net/", rules) == {}


def test_later_matching_rules_override_earlier_ones() -> None:
    config = _config({"example": ["X-Token: first"], r"example\.com": ["X-Token: second"]})

    rules, _ = resolve_header_rules(config, {})

    assert headers_for("https://example.com/", rules) == {"X-Token": "second"}


def test_missing_variable_drops_header_and_reports_once() -> None:
    config = _config({r"example\.com": ["Authorization: Bearer $MISSING", "Accept: text/html"]})

    rules, diagnostics = resolve_header_rules(config, {})

    assert headers_for("https://example.com/", rules) == {"Accept": "text/html"}
    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.kind is ErrorKind.CONFIG_INTERPOLATION
    assert diagnostic.severity is Severity.ERROR
    assert diagnostic.location is None
    assert "MISSING" in diagnostic.message
    assert "Authorization" in diagnostic.message


def test_escaped_dollar_is_literal() -> None:
    config = _config({r"example\.com": [r"X-Price: \$5"]})

    rules, diagnostics = resolve_header_rules(config, {})

    assert diagnostics == []
    assert headers_for("https://example.com/", rules) == {"X-Price": "$5"}


@pytest.mark.parametrize(
    ("raw", "environ"),
    [("X-Name: café", {}), ("X-Name: $NAME", {"NAME": "café"}), ("X-Naïve: yes", {})],
)
def test_non_ascii_header_is_dropped_and_reported(raw: str, environ: dict[str, str]) -> None:
    config = _config({r"example\.com": [raw, "Accept: text/html"]})

    rules, diagnostics = resolve_header_rules(config, environ)

    assert headers_for("https://example.com/", rules) == {"Accept": "text/html"}
    assert len(diagnostics) == 1
    assert diagnostics[0].kind is ErrorKind.CONFIG_INTERPOLATION
    assert "must be ASCII" in diagnostics[0].message
    assert "café" not in diagnostics[0].message
