"""Conversion between (row, column) points and absolute character offsets."""

from bisect import bisect_right

from lint40.models import Position, Range


class PositionMapper:
    """Line-start index over one source text.

    Rows and columns are zero-based and counted in characters. Coordinates outside
    the text are clamped rather than rejected.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_of(self, row: int, column: int) -> int:
        if row < 0:
            return 0
        if row >= len(self._line_starts):
            return len(self.text)
        start = self._line_starts[row]
        end = self._line_starts[row + 1] - 1 if row + 1 < len(self._line_starts) else len(self.text)
        return start + max(0, min(column, end - start))

    def position_of(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.text)))
        row = bisect_right(self._line_starts, offset) - 1
        return Position(row=row, column=offset - self._line_starts[row])

    def range_of(self, start_offset: int, end_offset: int) -> Range:
        return Range(start=self.position_of(start_offset), end=self.position_of(end_offset))


def offset_of(text: str, row: int, column: int) -> int:
    return PositionMapper(text).offset_of(row, column)


def position_of(text: str, offset: int) -> Position:
    return PositionMapper(text).position_of(offset)


def byte_column_to_char(line: str, byte_column: int) -> int:
    """Translate a UTF-8 byte column (as reported by tree-sitter) into a character column."""
    if byte_column <= 0:
        return 0
    return len(line.encode("utf-8")[:byte_column].decode("utf-8", errors="ignore"))


def line_range(row: int, start: int, end: int) -> Range:
    return Range(start=Position(row=row, column=start), end=Position(row=row, column=end))
