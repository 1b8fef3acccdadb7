"""
Logging configuration for cohesion-report.

Modules log through ``get_logger(__name__)`` into the ``cohesion_report``
namespace. ``setup_logging`` maps a run's verbosity onto that namespace:

    quiet    ERROR    failed runs only
    normal   WARNING  also skipped source files
    verbose  DEBUG    stage progress and every class score

Metric jobs run on worker threads named ``metric_N``. The optional log file
records the thread so interleaved jobs can be told apart.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "cohesion_report"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(
    verbosity: str = "normal", log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Install a rich stderr handler (and optionally a file handler) on the
    cohesion_report logger.

    Calling it again replaces the handlers of the previous call, so the CLI
    can re-apply the verbosity resolved from config files and environment.

    Args:
        verbosity: "quiet", "normal" or "verbose"
        log_file: Optional file path to append logs to

    Returns:
        The configured cohesion_report logger

    Raises:
        ValueError: If verbosity is unknown
    """
    try:
        level = LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"Unknown verbosity: {verbosity!r}") from None
    verbose = verbosity == "verbose"

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger in the cohesion_report namespace.

    Args:
        name: Module name (e.g., 'cohesion_report.pipeline')
              If None, returns the cohesion_report logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
