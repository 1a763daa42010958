from __future__ import annotations

import pytest

from booklinkcheck import ConfigInterpolationError, interpolate_env


def test_substitutes_environment_variable() -> None:
    assert interpolate_env("Basic $TOKEN", {"TOKEN": "abc123"}) == "Basic abc123"


def test_escaped_dollar_is_literal() -> None:
    assert interpolate_env(r"\$TOKEN", {"TOKEN": "abc123"}) == "$TOKEN"


def test_escaped_backslash_is_literal() -> None:
    assert interpolate_env(r"a\\b", {}) == "a\\b"


def test_escaped_backslash_then_variable() -> None:
    assert interpolate_env(r"\\$TOKEN", {"TOKEN": "abc"}) == "\\abc"


def test_other_escapes_are_kept() -> None:
    assert interpolate_env(r"a\nb", {}) == r"a\nb"


def test_trailing_backslash_is_kept() -> None:
    assert interpolate_env("abc\\", {}) == "abc\\"


def test_identifier_ends_at_non_identifier_character() -> None:
    assert interpolate_env("$USER-$HOST.example", {"USER": "me", "HOST": "box"}) == "me-box.example"


def test_variable_at_end_of_value() -> None:
    assert interpolate_env("token=$T", {"T": "x"}) == "token=x"


def test_missing_variable_raises() -> None:
    with pytest.raises(ConfigInterpolationError) as exc_info:
        interpolate_env("Bearer $MISSING", {})

    assert exc_info.value.variable == "MISSING"


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOKEN", "QWxhZGRpbjpPcGVuU2VzYW1l")

    assert interpolate_env("Basic $TOKEN") == "Basic QWxhZGRpbjpPcGVuU2VzYW1l"
