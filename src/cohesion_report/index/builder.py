"""Index builder: turns a MetricScoreSet into a defect-annotated Index.

Diff normalizations (both pure functions of raw, mean, stddev):

    zscore:  (raw - mean) / stddev            (0 when stddev == 0)
    percent: 100 * (raw - mean) / |mean|      (0 when mean == 0)

zscore is the default. Its magnitude is bounded by the population size
(at most (n - 1) / sqrt(n)), so small populations stay within the default
thresholds.

Not-applicable classes, and every class of a population without applicable
values, get diff 0 and are never defects.

Overall score = 100 * non-defective / total. With the population mean and
stddev held fixed, moving one class's raw value towards the mean can only
keep or clear its flag and so never lowers the score. Recomputing the
statistics after such a move can flag other classes.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..config import Thresholds
from ..logging_config import get_logger
from ..math.statistics import Statistics
from ..metrics.models import MetricScore, MetricScoreSet
from .models import Index, IndexEntry, IndexReport, PopulationStatistics

logger = get_logger(__name__)

NEUTRAL_DIFF = 0.0
EMPTY_SCORE = 0.0

DiffFunction = Callable[[float, float, float], float]


def percent_diff(raw: float, mean: float, stddev: float) -> float:
    return Statistics.percent_deviation(raw, mean)


def zscore_diff(raw: float, mean: float, stddev: float) -> float:
    return Statistics.z_score(raw, mean, stddev)


NORMALIZATIONS: dict[str, DiffFunction] = {
    "percent": percent_diff,
    "zscore": zscore_diff,
}


def population_statistics(score_set: MetricScoreSet) -> PopulationStatistics:
    values = score_set.applicable_values()
    return PopulationStatistics(
        mean=Statistics.mean(values),
        stddev=Statistics.stdev(values),
        count=len(values),
    )


def build_entry(
    score: MetricScore,
    stats: PopulationStatistics,
    thresholds: Thresholds,
    diff_of: DiffFunction,
) -> IndexEntry:
    """Diff and defect flag of one class against fixed population statistics."""
    if score.raw_value is None or stats.count == 0:
        return IndexEntry(class_name=score.class_name, raw_value=score.raw_value, diff=NEUTRAL_DIFF, defect=False)
    diff = diff_of(score.raw_value, stats.mean, stats.stddev)
    return IndexEntry(
        class_name=score.class_name,
        raw_value=score.raw_value,
        diff=diff,
        defect=thresholds.is_defect(diff),
    )


def overall_score(entries: Iterable[IndexEntry]) -> float:
    """Percentage of non-defective entries; EMPTY_SCORE for no entries."""
    entries = list(entries)
    if not entries:
        return EMPTY_SCORE
    healthy = sum(1 for e in entries if not e.defect)
    return 100.0 * healthy / len(entries)


def build_index(
    score_set: MetricScoreSet,
    thresholds: Optional[Thresholds] = None,
    normalization: str = "zscore",
) -> Index:
    """Aggregate one metric's scores.

    Args:
        score_set: Scores in skeleton order
        thresholds: Defect thresholds (defaults 10.0 / -5.0)
        normalization: Key of NORMALIZATIONS

    Returns:
        Index whose entries keep the score set's order
    """
    thresholds = thresholds or Thresholds()
    try:
        diff_of = NORMALIZATIONS[normalization]
    except KeyError:
        raise ValueError(f"Unknown normalization: {normalization!r}") from None

    stats = population_statistics(score_set)

    entries = [build_entry(score, stats, thresholds, diff_of) for score in score_set]

    index = Index(
        metric=score_set.metric,
        statistics=stats,
        entries=tuple(entries),
        overall_score=overall_score(entries),
    )
    logger.info(
        f"{index.metric}: mean={stats.mean:.3f} stddev={stats.stddev:.3f} "
        f"defects={len(index.defects)}/{len(entries)} score={index.overall_score:.1f}"
    )
    return index


def build_report(
    score_sets: Iterable[MetricScoreSet],
    thresholds: Optional[Thresholds] = None,
    normalization: str = "zscore",
) -> IndexReport:
    """Build every metric's index; report score = mean of metric scores."""
    thresholds = thresholds or Thresholds()
    indexes = tuple(build_index(s, thresholds, normalization) for s in score_sets)
    score = Statistics.mean([i.overall_score for i in indexes]) if indexes else EMPTY_SCORE
    return IndexReport(
        indexes=indexes,
        thresholds=thresholds,
        normalization=normalization,
        score=score,
    )
