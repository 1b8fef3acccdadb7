"""
cohesion-report - structural cohesion analysis for object-oriented code

Scores every class with named cohesion metrics (LCOM family, TCC), flags
statistical outliers against the project's own population, and builds a
cross-class attribute usage matrix. Results are written as JSON, HTML and an
SVG badge.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import CohesionConfig, Thresholds, load_config
from .exceptions import CohesionReportError
from .pipeline import CohesionPipeline, PipelineState, RunResult
from .skeleton import AttributeRef, ClassInfo, Method, Skeleton

__all__ = [
    "analyze",  # Main entry point
    "CohesionPipeline",  # Advanced usage (custom sources, progress)
    "RunResult",
    "PipelineState",
    "CohesionConfig",
    "Thresholds",
    "load_config",
    "CohesionReportError",
    "Skeleton",
    "ClassInfo",
    "Method",
    "AttributeRef",
]
