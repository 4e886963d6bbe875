from pydantic import BaseModel

from lint40.core.modes import Mode
from lint40.models import Diagnostic, GenerationKind


class HealthResponse(BaseModel):
    status: str = "ok"


class ModeResponse(BaseModel):
    mode: Mode
    label: str


class LintRequest(BaseModel):
    code: str
    file_name: str = "untitled.c"
    mode: Mode | None = None


class LintResponse(BaseModel):
    mode: Mode
    diagnostics: list[Diagnostic]


class GenerateRequest(BaseModel):
    code: str
    file_name: str = "untitled.c"


class GenerateResponse(BaseModel):
    kind: GenerationKind
    generated: int
    message: str
    text: str
