from typing import Annotated

import typer

from lint40.cli._render import console
from lint40.config import Lint40Settings, get_settings

serve_app = typer.Typer(help="Run lint40 as a service.")

ModeOption = Annotated[str | None, typer.Option(help="Initial session mode: off, draft or review.")]


def _settings(mode: str | None) -> Lint40Settings:
    settings = get_settings()
    if mode is None:
        return settings
    return settings.model_copy(update={"mode": Lint40Settings(mode=mode).mode})


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
    mode: ModeOption = None,
) -> None:
    """Serve /lint, /generate and /mode over HTTP."""
    import uvicorn

    from lint40.api.app import create_app

    settings = _settings(mode)
    console.print(f"[green]lint40 API on {host}:{port}[/green] (mode: {settings.mode.label})")
    uvicorn.run(create_app(settings), host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
    mode: ModeOption = None,
) -> None:
    """Expose the lint, generate and toggle_mode tools over MCP."""
    from lint40.mcp.server import create_mcp_server

    settings = _settings(mode)
    server = create_mcp_server(settings)
    # stdout carries the protocol on stdio
    if transport != "stdio":
        console.print(f"[green]lint40 MCP server[/green] (transport: {transport}, mode: {settings.mode.label})")
    server.run(transport=transport)  # type: ignore[arg-type]
