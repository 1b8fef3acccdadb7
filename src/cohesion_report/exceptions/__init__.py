"""Exception hierarchy for cohesion-report."""

from .base import CohesionReportError
from .config import ConfigurationError, InvalidConfigError
from .pipeline import (
    MetricComputationError,
    PersistenceError,
    PipelineError,
    PipelineStateError,
    PreconditionError,
    RenderingError,
    SchemaViolation,
    StructuralInvariantError,
)

__all__ = [
    "CohesionReportError",
    "ConfigurationError",
    "InvalidConfigError",
    "PipelineError",
    "PreconditionError",
    "StructuralInvariantError",
    "MetricComputationError",
    "PersistenceError",
    "SchemaViolation",
    "RenderingError",
    "PipelineStateError",
]
