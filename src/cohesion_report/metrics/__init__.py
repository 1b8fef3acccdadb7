"""Metric engine: named cohesion metrics over the method/attribute incidence."""

from . import cohesion  # noqa: F401  (registers the built-in metrics)
from .engine import MetricEngine, compute_scores
from .models import Incidence, MetricScore, MetricScoreSet
from .registry import (
    MetricDefinition,
    available_metrics,
    get_metric,
    get_registry,
    register_metric,
    unregister_metric,
)

__all__ = [
    "Incidence",
    "MetricScore",
    "MetricScoreSet",
    "MetricDefinition",
    "MetricEngine",
    "compute_scores",
    "register_metric",
    "unregister_metric",
    "get_metric",
    "get_registry",
    "available_metrics",
]
