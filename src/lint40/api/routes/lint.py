from __future__ import annotations

from fastapi import APIRouter, Depends

from lint40.api.dependencies import get_session
from lint40.api.schemas import GenerateRequest, GenerateResponse, LintRequest, LintResponse
from lint40.core.session import LintSession
from lint40.core.templates import TemplateGenerator
from lint40.models import GenerationKind
from lint40.workspace.memory import InMemoryDocument

router = APIRouter(tags=["lint"])


@router.post("/lint", response_model=LintResponse)
async def lint(body: LintRequest, session: LintSession = Depends(get_session)) -> LintResponse:
    """Lint a snippet. Without an explicit ``mode`` the session's current mode applies."""
    mode = body.mode or session.mode
    document = InMemoryDocument(body.code, uri=f"untitled:{body.file_name}", file_name=body.file_name)
    return LintResponse(mode=mode, diagnostics=session.engine.lint_document(document, mode))


@router.post("/generate/{kind}", response_model=GenerateResponse)
async def generate(kind: GenerationKind, body: GenerateRequest) -> GenerateResponse:
    document = InMemoryDocument(body.code, uri=f"untitled:{body.file_name}", file_name=body.file_name)
    report = TemplateGenerator().generate(kind, document)
    return GenerateResponse(kind=kind, generated=report.generated, message=report.message, text=document.text)
