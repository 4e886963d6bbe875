from collections.abc import Sequence
from typing import Protocol

from lint40.models import Diagnostic


class DiagnosticsSink(Protocol):
    def set(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None: ...

    def get(self, uri: str) -> list[Diagnostic]: ...

    def delete(self, uri: str) -> None: ...

    def clear(self) -> None: ...
