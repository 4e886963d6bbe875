import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from lint40.cli.check import check
from lint40.cli.generate import generate_app
from lint40.cli.serve import serve_app
from lint40.cli.watch import watch
from lint40.config import get_settings

app = typer.Typer(
    name="lint40",
    help="lint40: C style checks and documentation templates.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )


app.command("check")(check)
app.add_typer(generate_app, name="generate")
app.command("watch")(watch)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
