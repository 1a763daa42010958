"""Environment-variable interpolation for HTTP header values.

``$IDENT`` is replaced by the value of the environment variable ``IDENT``
(identifiers are ASCII letters, digits and ``_``). ``\\$`` produces a literal
``$`` and ``\\\\`` a literal backslash; a backslash before any other character,
or at the end of the value, is kept as written.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum, auto

from booklinkcheck.contracts.exceptions import ConfigInterpolationError


class _State(Enum):
    LITERAL = auto()
    BACKSLASH = auto()
    IDENT = auto()


def _is_ident(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def interpolate_env(value: str, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    out: list[str] = []
    ident: list[str] = []
    state = _State.LITERAL

    def flush_ident() -> None:
        name = "".join(ident)
        ident.clear()
        try:
            out.append(env[name])
        except KeyError:
            raise ConfigInterpolationError(
                f"Failed to retrieve `{name}` env var: environment variable not found", variable=name
            ) from None

    for ch in value:
        if state is _State.IDENT:
            if _is_ident(ch):
                ident.append(ch)
                continue
            flush_ident()
            state = _State.LITERAL

        if state is _State.BACKSLASH:
            if ch not in "$\\":
                out.append("\\")
            out.append(ch)
            state = _State.LITERAL
        elif ch == "\\":
            state = _State.BACKSLASH
        elif ch == "$":
            state = _State.IDENT
        else:
            out.append(ch)

    if state is _State.IDENT:
        flush_ident()
    elif state is _State.BACKSLASH:
        out.append("\\")

    return "".join(out)
