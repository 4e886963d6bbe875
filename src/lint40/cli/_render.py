from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.table import Table

from lint40.models import Diagnostic

console = Console()


def render_diagnostics(path: Path, diagnostics: Sequence[Diagnostic]) -> None:
    if not diagnostics:
        console.print(f"[green]{path}[/green]: no issues")
        return
    table = Table(title=str(path), show_lines=False)
    for header in ("line", "col", "code", "message"):
        table.add_column(header)
    for d in diagnostics:
        table.add_row(str(d.range.start.row + 1), str(d.range.start.column + 1), d.code, d.message)
    console.print(table)
    console.print(f"({len(diagnostics)} diagnostics)")
