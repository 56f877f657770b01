from __future__ import annotations

import typer

from cihelper import __version__
from cihelper.cli.commands import Command, dispatch
from cihelper.cli.context import build_context

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def run(
    subcommand: str | None = typer.Argument(
        None,
        metavar="SUBCOMMAND",
        help=f"One of: {', '.join(c.value for c in Command)}",
        show_default=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Determine build metadata, build the binary and package its artifacts."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    dispatch(subcommand, build_context())


def main() -> None:
    app(prog_name="ci-helper")
