"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="cohesion-report",
    help="cohesion-report - class cohesion metrics, outliers and usage matrix",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Analyze class cohesion and write a report directory.

    [bold cyan]Examples:[/bold cyan]

      cohesion-report analyze src/ report/

      cohesion-report analyze skeleton.json report/ -m LCOM -m LCOM4

      cohesion-report metrics
    """
    if version:
        console.print(
            f"[bold cyan]cohesion-report[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .metrics import metrics as _metrics  # noqa: F401, E402
