"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import CohesionConfig, load_config
from ..exceptions import ConfigurationError

console = Console()


def parse_params(pairs: Optional[list[str]]) -> dict[str, str]:
    """Turn ``["title=My project", "badge_style=round"]`` into a dict."""
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Invalid --param '{pair}', expected KEY=VALUE")
        params[key.strip()] = value
    return params


def resolve_config(
    config: Optional[Path] = None,
    metrics: Optional[list[str]] = None,
    high: Optional[float] = None,
    low: Optional[float] = None,
    normalization: Optional[str] = None,
    exclude_constructors: Optional[bool] = None,
    workers: Optional[int] = None,
    params: Optional[list[str]] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> CohesionConfig:
    """Build the run configuration from CLI options."""
    overrides = {
        "metrics": tuple(metrics) if metrics else None,
        "high_threshold": high,
        "low_threshold": low,
        "normalization": normalization,
        "exclude_constructors": exclude_constructors,
        "workers": workers,
        "params": parse_params(params),
        "verbose": verbose,
        "quiet": quiet,
    }
    return load_config(config_file=config, **overrides)


def format_value(value: Optional[float], digits: int = 3) -> str:
    return "n/a" if value is None else f"{value:.{digits}f}"


def verbosity_from_flags(verbose: bool, quiet: bool) -> str:
    """--quiet wins over --verbose, as in load_config."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"
