from pathlib import Path
from typing import Annotated

import typer

from lint40.cli._render import console
from lint40.core.templates import TemplateGenerator
from lint40.models import GenerationKind
from lint40.workspace.memory import InMemoryDocument

generate_app = typer.Typer(help="Insert documentation templates into a C file.")

DryRunOption = Annotated[bool, typer.Option("--dry-run", help="Print the result instead of writing the file.")]


def _generate(kind: GenerationKind, path: Path, dry_run: bool) -> None:
    try:
        document = InMemoryDocument.from_path(path)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2) from None

    report = TemplateGenerator().generate(kind, document)
    if report.generated and not dry_run:
        path.write_text(document.text, encoding="utf-8")
    if dry_run:
        console.print(document.text, markup=False, highlight=False)
    console.print(f"{report.message} ({report.generated} block(s))")


@generate_app.command("header")
def header(path: Annotated[Path, typer.Argument(help="C file to update.")], dry_run: DryRunOption = False) -> None:
    """Prepend a file header comment."""
    _generate(GenerationKind.FILE_HEADER, path, dry_run)


@generate_app.command("contracts")
def contracts(path: Annotated[Path, typer.Argument(help="C file to update.")], dry_run: DryRunOption = False) -> None:
    """Insert a contract above every undocumented function."""
    _generate(GenerationKind.FUNCTION_CONTRACTS, path, dry_run)


@generate_app.command("structs")
def structs(path: Annotated[Path, typer.Argument(help="C file to update.")], dry_run: DryRunOption = False) -> None:
    """Insert documentation above every undocumented struct."""
    _generate(GenerationKind.STRUCT_DOCS, path, dry_run)
