import asyncio
from pathlib import Path
from typing import Annotated

import typer

from lint40.cli._render import console, render_diagnostics
from lint40.config import get_settings
from lint40.core.engine import RuleEngine
from lint40.core.languages import collect_sources
from lint40.core.modes import Mode
from lint40.core.session import LintSession
from lint40.watcher.watchfiles_adapter import WatchfilesWatcher, relint_on_change
from lint40.workspace.memory import InMemoryDiagnosticsSink, InMemoryDocument


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
    mode: Annotated[str | None, typer.Option(help="Rule set to run: draft or review.")] = None,
) -> None:
    """Re-lint C files in a directory whenever they change."""
    settings = get_settings()
    session = LintSession(
        RuleEngine(settings),
        InMemoryDiagnosticsSink(),
        mode=Mode.parse(mode) if mode else settings.mode,
    )
    for path in collect_sources([directory]):
        render_diagnostics(path, session.open(InMemoryDocument.from_path(path)))

    watcher = WatchfilesWatcher(directory, relint_on_change(session, render_diagnostics))

    async def _run() -> None:
        await watcher.start()
        console.print(f"[green]Watching[/green] {directory} ({session.status_label()}); Ctrl+C to stop")
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
