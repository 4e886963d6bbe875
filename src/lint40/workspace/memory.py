from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lint40.core.positions import PositionMapper
from lint40.models import Diagnostic, TextEdit


class InMemoryDocument:
    """A text buffer implementing the ``Document`` protocol."""

    def __init__(self, text: str, uri: str = "untitled:1", file_name: str = "unknown.c") -> None:
        self.uri = uri
        self.file_name = file_name
        self._text = text
        self.version = 0

    @classmethod
    def from_path(cls, path: str | Path) -> InMemoryDocument:
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
        return cls(text, uri=file_path.resolve().as_uri(), file_name=file_path.name)

    @property
    def text(self) -> str:
        return self._text

    def line_at(self, row: int) -> str:
        lines = self._text.split("\n")
        if 0 <= row < len(lines):
            return lines[row]
        return ""

    def replace_text(self, text: str) -> None:
        self._text = text
        self.version += 1

    def apply_edits(self, edits: Sequence[TextEdit]) -> None:
        """Apply insertions in the given order; each position is resolved against the text as it is at that point."""
        text = self._text
        for edit in edits:
            offset = PositionMapper(text).offset_of(edit.position.row, edit.position.column)
            text = text[:offset] + edit.text + text[offset:]
        if edits:
            self.replace_text(text)


class InMemoryDiagnosticsSink:
    def __init__(self) -> None:
        self.collections: dict[str, list[Diagnostic]] = {}

    def set(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.collections[uri] = list(diagnostics)

    def get(self, uri: str) -> list[Diagnostic]:
        return list(self.collections.get(uri, []))

    def delete(self, uri: str) -> None:
        self.collections.pop(uri, None)

    def clear(self) -> None:
        self.collections.clear()

    def total(self) -> int:
        return sum(len(d) for d in self.collections.values())
