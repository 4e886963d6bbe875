from collections.abc import Sequence
from typing import Protocol

from lint40.models import TextEdit


class Document(Protocol):
    uri: str
    file_name: str

    @property
    def text(self) -> str: ...

    def line_at(self, row: int) -> str: ...

    def apply_edits(self, edits: Sequence[TextEdit]) -> None: ...
