from fastapi import APIRouter, Depends

from lint40.api.dependencies import get_session
from lint40.api.schemas import HealthResponse, ModeResponse
from lint40.core.session import LintSession

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/mode", response_model=ModeResponse)
async def current_mode(session: LintSession = Depends(get_session)) -> ModeResponse:
    return ModeResponse(mode=session.mode, label=session.status_label())


@router.post("/mode/toggle", response_model=ModeResponse)
async def toggle_mode(session: LintSession = Depends(get_session)) -> ModeResponse:
    """Advance Draft -> Review -> Off -> Draft."""
    session.toggle()
    return ModeResponse(mode=session.mode, label=session.status_label())
