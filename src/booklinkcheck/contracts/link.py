"""Link and resolved-target contracts."""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator


class LinkType(StrEnum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    ANCHOR = "anchor"


class Span(BaseModel):
    """Location of a link in its original source file.

    ``line`` and ``column`` are 1-based; ``start``/``end`` are byte offsets into
    the UTF-8 encoded source text.
    """

    line: int
    column: int
    start: int
    end: int

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_range(self) -> Span:
        if self.line < 1 or self.column < 1:
            raise ValueError("line and column are 1-based")
        if self.start < 0 or self.end <= self.start:
            raise ValueError("span must cover at least one byte")
        return self


class Link(BaseModel):
    source_file: PurePosixPath
    span: Span
    raw_target: str
    link_type: LinkType

    model_config = ConfigDict(frozen=True)


class InternalTarget(BaseModel):
    kind: Literal["internal"] = "internal"
    file: PurePosixPath
    fragment: str | None = None

    model_config = ConfigDict(frozen=True)


class ExternalTarget(BaseModel):
    kind: Literal["external"] = "external"
    url: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_web(self) -> bool:
        return self.url.lower().startswith(("http://", "https://"))


class ExcludedTarget(BaseModel):
    kind: Literal["excluded"] = "excluded"
    pattern: str

    model_config = ConfigDict(frozen=True)


ResolvedTarget = InternalTarget | ExternalTarget | ExcludedTarget
