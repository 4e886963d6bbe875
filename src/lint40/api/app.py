from __future__ import annotations

from fastapi import FastAPI

from lint40.api.routes.health import router as health_router
from lint40.api.routes.lint import router as lint_router
from lint40.config import Lint40Settings, get_settings
from lint40.core.engine import RuleEngine
from lint40.core.session import LintSession
from lint40.workspace.memory import InMemoryDiagnosticsSink


def create_app(settings: Lint40Settings | None = None) -> FastAPI:
    resolved = settings or get_settings()
    app = FastAPI(
        title="lint40 API",
        description="C style diagnostics and documentation templates.",
        version="0.1.0",
    )
    app.state.session = LintSession(RuleEngine(resolved), InMemoryDiagnosticsSink(), mode=resolved.mode)

    app.include_router(health_router)
    app.include_router(lint_router)

    return app
