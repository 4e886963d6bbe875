from pathlib import Path
from typing import Annotated

import typer

from lint40.cli._render import console, render_diagnostics
from lint40.config import get_settings
from lint40.core.engine import RuleEngine
from lint40.core.languages import collect_sources, detect_language_from_path
from lint40.core.modes import Mode
from lint40.core.session import LintSession
from lint40.workspace.memory import InMemoryDiagnosticsSink, InMemoryDocument


def check(
    paths: Annotated[list[Path], typer.Argument(help="C files or directories to check.")],
    mode: Annotated[str | None, typer.Option(help="Rule set to run: draft or review.")] = None,
) -> None:
    """Check C sources and report style diagnostics."""
    settings = get_settings()
    resolved_mode = Mode.parse(mode) if mode else settings.mode
    if resolved_mode is Mode.OFF:
        console.print("lint40 is off; nothing to check.")
        return

    sink = InMemoryDiagnosticsSink()
    session = LintSession(RuleEngine(settings), sink, mode=resolved_mode)

    for path in collect_sources(paths):
        try:
            detect_language_from_path(path)
            document = InMemoryDocument.from_path(path)
        except (ValueError, FileNotFoundError) as exc:
            console.print(f"[yellow]Skipped[/yellow] {path}: {exc}")
            continue
        render_diagnostics(path, session.open(document))

    if sink.total():
        raise typer.Exit(code=1)
