"""Analyze command: runs the full pipeline into a fresh output directory."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import CohesionReportError
from ..logging_config import setup_logging
from ..pipeline import CohesionPipeline, RunResult
from ..skeleton import skeleton_source_for
from . import app
from ._common import console, format_value, resolve_config, verbosity_from_flags


@app.command()
def analyze(
    source: Path = typer.Argument(
        ...,
        help="Source directory to scan, or a skeleton JSON file",
        exists=True,
    ),
    output: Path = typer.Argument(
        ...,
        help="Output directory (must not exist)",
    ),
    metric: Optional[List[str]] = typer.Option(
        None,
        "--metric",
        "-m",
        help="Metric to compute (repeatable, default LCOM)",
    ),
    high: Optional[float] = typer.Option(
        None,
        "--high",
        help="Diff above this flags a defect (default 10.0)",
    ),
    low: Optional[float] = typer.Option(
        None,
        "--low",
        help="Diff below this flags a defect (default -5.0)",
    ),
    normalization: Optional[str] = typer.Option(
        None,
        "--normalization",
        "-n",
        help="Diff normalization: zscore (default) or percent",
    ),
    exclude_constructors: Optional[bool] = typer.Option(
        None,
        "--exclude-constructors/--include-constructors",
        help="Ignore __init__ methods when scoring",
    ),
    param: Optional[List[str]] = typer.Option(
        None,
        "--param",
        "-p",
        help="Rendering parameter KEY=VALUE (repeatable), e.g. title=MyProject",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel metric workers",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append logs to this file",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print errors",
    ),
):
    """
    Score every class, flag outliers and write the report.

    Writes skeleton.json, per-class metric files, index.json, matrix.json,
    index.html, matrix.html and badge.svg into OUTPUT.

    [bold cyan]Examples:[/bold cyan]

      cohesion-report analyze src/ report/

      cohesion-report analyze skeleton.json report/ -m LCOM -m TCC --high 25

      cohesion-report analyze src/ report/ -p title=MyProject -p badge_style=round
    """
    verbosity = verbosity_from_flags(verbose, quiet)
    logger = setup_logging(verbosity, log_file)

    try:
        settings = resolve_config(
            config=config,
            metrics=metric,
            high=high,
            low=low,
            normalization=normalization,
            exclude_constructors=exclude_constructors,
            workers=workers,
            params=param,
            verbose=verbose,
            quiet=quiet,
        )
        if settings.verbosity != verbosity:
            verbosity = settings.verbosity
            logger = setup_logging(verbosity, log_file)

        pipeline = CohesionPipeline(skeleton_source_for(source), output, settings)
        if verbosity == "quiet":
            result = pipeline.run()
        else:
            with console.status("[bold cyan]Analyzing...[/bold cyan]") as status:
                pipeline.on_progress = lambda msg: status.update(f"[bold cyan]{escape(msg)}[/bold cyan]")
                result = pipeline.run()
            _print_summary(result)

    except CohesionReportError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbosity == "verbose":
            console.print_exception()
        raise typer.Exit(1)


def _print_summary(result: RunResult) -> None:
    report = result.report
    for index in report.indexes:
        table = Table(title=f"{index.metric}  (score {index.overall_score:.1f})", show_header=True)
        table.add_column("Class", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Diff", justify="right")
        table.add_column("Defect", justify="center")
        for entry in index.entries:
            table.add_row(
                escape(entry.class_name),
                format_value(entry.raw_value),
                f"{entry.diff:.2f}",
                "[red]yes[/red]" if entry.defect else "",
            )
        console.print(table)

    console.print(
        f"\n[bold]Overall score:[/bold] [green]{report.score:.1f}[/green] / 100  "
        f"[dim]({len(result.skeleton)} classes, report in {escape(str(result.output))})[/dim]"
    )
