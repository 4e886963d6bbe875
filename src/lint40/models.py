from enum import Enum

from pydantic import BaseModel, ConfigDict

DIAGNOSTIC_SOURCE = "lint40"


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Severity(str, Enum):
    INFO = "info"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    range: Range
    message: str
    code: str
    severity: Severity = Severity.INFO
    source: str = DIAGNOSTIC_SOURCE


class TextEdit(BaseModel):
    """Insert ``text`` at ``position`` (zero-based row and character column)."""

    model_config = ConfigDict(frozen=True)

    position: Position
    text: str


class GenerationKind(str, Enum):
    FILE_HEADER = "header"
    FUNCTION_CONTRACTS = "contracts"
    STRUCT_DOCS = "structs"


class GenerationReport(BaseModel):
    kind: GenerationKind
    generated: int = 0
    edits: list[TextEdit] = []
    message: str = ""
