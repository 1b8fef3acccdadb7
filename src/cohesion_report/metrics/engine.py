"""MetricEngine computes one named metric for every class of a skeleton."""

from __future__ import annotations

import math
import threading
from typing import Optional

from ..artifacts import ArtifactWriter, metric_artifact_path
from ..config import CohesionConfig
from ..exceptions import MetricComputationError, StructuralInvariantError
from ..logging_config import get_logger
from ..skeleton.models import ClassInfo, Skeleton, validate_skeleton
from .models import Incidence, MetricScore, MetricScoreSet
from .registry import MetricDefinition, available_metrics, get_metric

logger = get_logger(__name__)


class MetricEngine:
    """Scores every class for one metric and persists a per-class artifact.

    The engine fails fast: the first class that cannot be scored or written
    aborts the metric, so no caller ever sees a partial MetricScoreSet.
    Artifacts already written for that metric stay on disk for diagnosis.
    """

    def __init__(self, writer: Optional[ArtifactWriter] = None):
        self.writer = writer

    def compute(
        self,
        skeleton: Skeleton,
        metric_name: str,
        config: Optional[CohesionConfig] = None,
        cancel: Optional[threading.Event] = None,
    ) -> MetricScoreSet:
        """Compute ``metric_name`` for every class, in skeleton order.

        Args:
            skeleton: Read-only skeleton
            metric_name: Registered metric name
            config: Run configuration (defaults when None)
            cancel: Set by the coordinator when a sibling job failed

        Returns:
            MetricScoreSet with one score per class

        Raises:
            MetricComputationError: Unknown metric, duplicate class names,
                a failing scoring function, or cancellation
            PersistenceError: A per-class artifact could not be written
        """
        config = config or CohesionConfig()
        definition = self._definition(metric_name)

        try:
            validate_skeleton(skeleton)
        except StructuralInvariantError as e:
            raise MetricComputationError(metric_name, e.reason, e.class_name) from e

        scores = []
        for info in skeleton:
            if cancel is not None and cancel.is_set():
                logger.debug(f"{metric_name}: cancelled after {len(scores)} classes")
                raise MetricComputationError(metric_name, "cancelled")
            score = self._score(definition, info, config)
            if self.writer is not None:
                self.writer.write_json(
                    metric_artifact_path(metric_name, info.name), score.to_dict(metric_name)
                )
            scores.append(score)

        applicable = sum(1 for s in scores if s.applicable)
        logger.info(f"{metric_name}: scored {len(scores)} classes ({applicable} applicable)")
        return MetricScoreSet(metric=metric_name, scores=tuple(scores))

    @staticmethod
    def _definition(metric_name: str) -> MetricDefinition:
        try:
            return get_metric(metric_name)
        except KeyError:
            raise MetricComputationError(
                metric_name, f"unknown metric (available: {', '.join(available_metrics())})"
            ) from None

    @staticmethod
    def _score(definition: MetricDefinition, info: ClassInfo, config: CohesionConfig) -> MetricScore:
        incidence = Incidence.of(info, exclude_constructors=config.exclude_constructors)
        if not incidence.applicable:
            return MetricScore(class_name=info.name, raw_value=None)

        try:
            value = float(definition.compute(incidence))
        except Exception as e:
            raise MetricComputationError(definition.name, str(e) or type(e).__name__, info.name) from e

        if not math.isfinite(value):
            raise MetricComputationError(definition.name, f"non-finite value {value}", info.name)

        logger.debug(f"{definition.name}: {info.name} = {value}")
        return MetricScore(class_name=info.name, raw_value=value)


def compute_scores(
    skeleton: Skeleton, metric_name: str, config: Optional[CohesionConfig] = None
) -> MetricScoreSet:
    """Score a skeleton without writing artifacts."""
    return MetricEngine().compute(skeleton, metric_name, config)
