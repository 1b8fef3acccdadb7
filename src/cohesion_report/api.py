"""Public API for cohesion-report.

Example:
    >>> from cohesion_report import analyze
    >>>
    >>> result = analyze("src/", "cohesion-out")
    >>> result.score
    87.5
    >>>
    >>> result = analyze(
    ...     "skeleton.json",
    ...     "cohesion-out-2",
    ...     metrics=["LCOM", "LCOM4"],
    ...     high_threshold=20.0,
    ... )
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import CohesionConfig, load_config
from .logging_config import get_logger
from .pipeline import CohesionPipeline, RunResult
from .pipeline.coordinator import ProgressCallback
from .skeleton import Skeleton, SkeletonSource, StaticSkeletonSource, skeleton_source_for

logger = get_logger(__name__)

Source = Union[str, Path, Skeleton, SkeletonSource]


def analyze(
    source: Source,
    output: Union[str, Path],
    config: Optional[CohesionConfig] = None,
    config_file: Optional[Path] = None,
    on_progress: ProgressCallback = None,
    **overrides,
) -> RunResult:
    """Run the full pipeline and return its result.

    Args:
        source: Source directory, skeleton JSON file, Skeleton or SkeletonSource
        output: Output directory; must not exist yet
        config: Ready-made configuration (``config_file``/``overrides`` are then ignored)
        config_file: Optional TOML file merged over discovered config files
        on_progress: Called with a short message at each stage
        **overrides: CohesionConfig fields (metrics, high_threshold, ...)

    Returns:
        RunResult

    Raises:
        CohesionReportError: Any fatal pipeline or configuration error
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)
    return CohesionPipeline(_as_source(source), output, config, on_progress).run()


def _as_source(source: Source) -> SkeletonSource:
    if isinstance(source, SkeletonSource):
        return source
    if isinstance(source, Skeleton):
        return StaticSkeletonSource(source)
    return skeleton_source_for(source)
