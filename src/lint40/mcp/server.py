"""FastMCP server exposing lint40 tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from lint40.config import Lint40Settings, get_settings
from lint40.core.engine import RuleEngine
from lint40.core.modes import Mode
from lint40.core.session import LintSession
from lint40.core.templates import TemplateGenerator
from lint40.models import GenerationKind
from lint40.workspace.memory import InMemoryDiagnosticsSink, InMemoryDocument


def _load(path: str | None, code: str | None) -> InMemoryDocument:
    if code is not None:
        return InMemoryDocument(code)
    assert path is not None
    return InMemoryDocument.from_path(path)


def create_mcp_server(settings: Lint40Settings | None = None) -> FastMCP:
    """Create a FastMCP server with its own lint session."""
    resolved = settings or get_settings()
    session = LintSession(RuleEngine(resolved), InMemoryDiagnosticsSink(), mode=resolved.mode)

    mcp = FastMCP("lint40", instructions="Check C sources for style issues and insert documentation templates.")

    @mcp.tool()
    async def lint(path: str | None = None, code: str | None = None, mode: str | None = None) -> list[dict[str, Any]]:
        """Lint a C file or snippet; ``mode`` overrides the session mode (draft or review)."""
        if path is None and code is None:
            return [{"error": "either 'path' or 'code' must be provided."}]
        try:
            resolved_mode = Mode.parse(mode) if mode else session.mode
        except ValueError as exc:
            return [{"error": str(exc)}]
        document = _load(path, code)
        return [d.model_dump(mode="json") for d in session.engine.lint_document(document, resolved_mode)]

    @mcp.tool()
    async def generate(kind: str, path: str | None = None, code: str | None = None) -> dict[str, Any]:
        """Insert templates (header, contracts or structs) and return the resulting text."""
        if path is None and code is None:
            return {"error": "either 'path' or 'code' must be provided."}
        try:
            generation_kind = GenerationKind(kind.strip().lower())
        except ValueError:
            expected = ", ".join(k.value for k in GenerationKind)
            return {"error": f"unknown kind '{kind}'; expected one of: {expected}"}
        document = _load(path, code)
        report = TemplateGenerator().generate(generation_kind, document)
        return {"generated": report.generated, "message": report.message, "text": document.text}

    @mcp.tool()
    async def toggle_mode() -> str:
        """Advance the session mode Draft -> Review -> Off -> Draft."""
        session.toggle()
        return session.status_label()

    return mcp
