"""Map rendered offsets back to source line/column/byte positions."""

from __future__ import annotations

from bisect import bisect_right

from booklinkcheck.contracts.document import SourceFile
from booklinkcheck.contracts.exceptions import DocumentError
from booklinkcheck.contracts.link import Span


class LineIndex:
    """Character offset → (line, column, byte offset) lookups for one text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts = [0]
        self._byte_starts = [0]
        byte_offset = 0
        for line in text.splitlines(keepends=True):
            byte_offset += len(line.encode("utf-8"))
            self._line_starts.append(self._line_starts[-1] + len(line))
            self._byte_starts.append(byte_offset)

    def __len__(self) -> int:
        return len(self._text)

    def line_col(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self._line_starts, offset) - 1
        line = min(line, len(self._line_starts) - 1)
        return line + 1, offset - self._line_starts[line] + 1

    def byte_offset(self, offset: int) -> int:
        line = min(bisect_right(self._line_starts, offset) - 1, len(self._line_starts) - 1)
        line_start = self._line_starts[line]
        return self._byte_starts[line] + len(self._text[line_start:offset].encode("utf-8"))


class PositionMapper:
    """Translate ranges of a page's rendered content into source :class:`Span` s."""

    def __init__(self, source_file: SourceFile) -> None:
        self._segments = _validated_segments(source_file)
        self._index = LineIndex(source_file.source_text)

    def to_source(self, rendered: int) -> int | None:
        if self._segments is None:
            return rendered
        i = bisect_right(self._segments, (rendered, float("inf"))) - 1
        if i < 0:
            return None
        rendered_start, source_start = self._segments[i]
        return source_start + (rendered - rendered_start)

    def span(self, start: int, end: int) -> Span | None:
        """Return the source span for the rendered range ``[start, end)``, or ``None``."""
        source_start = self.to_source(start)
        source_last = self.to_source(end - 1)
        if source_start is None or source_last is None:
            return None
        source_end = source_last + 1
        if source_end <= source_start:
            source_end = source_start + (end - start)
        if source_start < 0 or source_end > len(self._index):
            return None

        line, column = self._index.line_col(source_start)
        byte_start = self._index.byte_offset(source_start)
        byte_end = self._index.byte_offset(source_end)
        if byte_end <= byte_start:
            return None
        return Span(line=line, column=column, start=byte_start, end=byte_end)


def _validated_segments(source_file: SourceFile) -> list[tuple[int, int]] | None:
    segments = source_file.position_map
    if segments is None:
        return None
    if not segments:
        raise DocumentError(f"empty position map for {source_file.path}")
    previous = -1
    for rendered, source in segments:
        if rendered < 0 or source < 0:
            raise DocumentError(f"negative offset in position map for {source_file.path}")
        if rendered <= previous:
            raise DocumentError(f"position map for {source_file.path} is not strictly increasing")
        previous = rendered
    return list(segments)
