"""Input document model: a rendered book and its source mapping."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceFile(BaseModel):
    """One rendered page.

    ``position_map`` is a table of ``(rendered_offset, source_offset)`` segment
    starts, in character offsets. A rendered offset maps to the source offset of
    the last segment starting at or before it, shifted by the distance into that
    segment. ``None`` means the rendered content is the source text verbatim.
    """

    path: PurePosixPath
    content: str
    source: str | None = None
    position_map: list[tuple[int, int]] | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("path", mode="before")
    @classmethod
    def _posix_path(cls, value: object) -> object:
        if isinstance(value, Path):
            return PurePosixPath(value.as_posix())
        return value

    @property
    def source_text(self) -> str:
        return self.content if self.source is None else self.source


class Book(BaseModel):
    root: Path
    files: list[SourceFile] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get(self, path: PurePosixPath) -> SourceFile | None:
        for source_file in self.files:
            if source_file.path == path:
                return source_file
        return None

    def paths(self) -> set[PurePosixPath]:
        return {source_file.path for source_file in self.files}
