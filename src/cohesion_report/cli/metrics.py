"""Metrics CLI command -- list the registered metrics."""

import typer
from rich.table import Table

from ..metrics import get_registry
from . import app
from ._common import console


@app.command()
def metrics():
    """
    List the cohesion metrics that can be passed to [bold]--metric[/bold].
    """
    table = Table(show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Name")
    table.add_column("Worse when", justify="center")
    table.add_column("Description", style="dim")

    for definition in get_registry():
        worse = "high" if definition.direction == "high_is_bad" else "low"
        table.add_row(definition.name, definition.display_name, worse, definition.description)

    console.print(table)
    raise typer.Exit(0)
