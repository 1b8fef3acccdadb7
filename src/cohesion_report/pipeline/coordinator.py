"""CohesionPipeline: runs one full analysis into a fresh output directory.

Stages, each gated on the previous one finishing:

    1. extraction    skeleton from the source, invariants checked, skeleton.json
    2. metrics       one MetricEngine job per metric on a worker pool (barrier)
    3. aggregation   indexes and matrix, concurrently
    4. validation    index/matrix documents against their schemas, then written
    5. rendering     index.html, matrix.html, badge.svg
    6. publication   stylesheet and schemas copied next to the artifacts

Any error moves the pipeline to FAILED and is re-raised with the stage name
in ``details["stage"]``. Nothing is retried.
"""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ..artifacts import ArtifactWriter
from ..config import CohesionConfig
from ..exceptions import (
    CohesionReportError,
    PipelineStateError,
    PreconditionError,
    RenderingError,
)
from ..index import IndexReport, build_report
from ..logging_config import get_logger
from ..matrix import Matrix, build_matrix
from ..metrics import MetricEngine, MetricScoreSet
from ..rendering import ASSETS_DIR, render_badge_svg, render_index_html, render_matrix_html
from ..skeleton import Skeleton, SkeletonSource, skeleton_to_dict, validate_skeleton
from ..validation import (
    SCHEMA_NAMES,
    schema_path,
    validate_index_document,
    validate_matrix_document,
)
from .states import PipelineState, StateMachine

ProgressCallback = Optional[Callable[[str], None]]

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Everything one successful run produced."""

    output: Path
    skeleton: Skeleton
    score_sets: dict[str, MetricScoreSet]
    report: IndexReport
    matrix: Matrix
    artifacts: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def score(self) -> float:
        return self.report.score


class CohesionPipeline:
    """Orchestrate a run: extract -> compute -> aggregate -> validate -> render."""

    def __init__(
        self,
        source: SkeletonSource,
        output: Union[str, Path],
        config: Optional[CohesionConfig] = None,
        on_progress: ProgressCallback = None,
    ):
        self.source = source
        self.output = Path(output)
        self.config = config or CohesionConfig()
        self.on_progress = on_progress
        self.writer = ArtifactWriter(self.output)
        self.machine = StateMachine()
        self._stage = "extraction"
        self._written: list[Path] = []

    @property
    def state(self) -> PipelineState:
        return self.machine.state

    def run(self) -> RunResult:
        """Execute every stage once.

        Returns:
            RunResult describing the produced artifacts

        Raises:
            CohesionReportError: The first fatal error, with ``details["stage"]``
            PipelineStateError: If this pipeline already ran
        """
        if self.state is not PipelineState.FRESH:
            raise PipelineStateError(self.state.value, PipelineState.EXTRACTED.value)

        try:
            skeleton = self._extract()
            score_sets = self._compute_metrics(skeleton)
            report, matrix = self._aggregate(skeleton, score_sets)
            index_doc, matrix_doc = self._validate(report, matrix)
            self._render(index_doc, matrix_doc)
            self._publish()
        except CohesionReportError as e:
            e.add_detail("stage", self._stage)
            self.machine.fail()
            logger.error(f"Analysis failed: {e}")
            raise
        except Exception:
            self.machine.fail()
            logger.exception(f"Unexpected error during {self._stage}")
            raise

        logger.info(f"Analysis complete: {len(self._written)} artifacts in {self.output}")
        return RunResult(
            output=self.output,
            skeleton=skeleton,
            score_sets=score_sets,
            report=report,
            matrix=matrix,
            artifacts=tuple(self._written),
        )

    # ── Stages ───────────────────────────────────────────────────────

    def _extract(self) -> Skeleton:
        self._begin("extraction", f"Reading skeleton from {self.source.description}...")
        if self.output.exists():
            raise PreconditionError(self.output.resolve())

        skeleton = self.source.extract()
        validate_skeleton(skeleton)

        self.writer.create()
        self._save_json("skeleton.json", skeleton_to_dict(skeleton))
        logger.info(f"Skeleton: {len(skeleton)} classes")
        self.machine.advance(PipelineState.EXTRACTED)
        return skeleton

    def _compute_metrics(self, skeleton: Skeleton) -> dict[str, MetricScoreSet]:
        metrics = self.config.metrics
        self._begin("metrics", f"Computing {', '.join(metrics)}...")
        engine = MetricEngine(self.writer)
        cancel = threading.Event()

        with ThreadPoolExecutor(
            max_workers=self.config.worker_count, thread_name_prefix="metric"
        ) as pool:
            futures = {
                name: pool.submit(engine.compute, skeleton, name, self.config, cancel)
                for name in metrics
            }
            done, pending = wait(futures.values(), return_when=FIRST_EXCEPTION)

            failed = [
                name for name in metrics
                if futures[name] in done and futures[name].exception() is not None
            ]
            if failed:
                cancel.set()
                for future in pending:
                    future.cancel()
                logger.debug(f"Metric job {failed[0]} failed, cancelling {len(pending)} siblings")
                raise futures[failed[0]].exception()  # type: ignore[misc]

            score_sets = {name: futures[name].result() for name in metrics}

        self.machine.advance(PipelineState.METRICS_COMPUTED)
        return score_sets

    def _aggregate(
        self, skeleton: Skeleton, score_sets: dict[str, MetricScoreSet]
    ) -> tuple[IndexReport, Matrix]:
        self._begin("aggregation", "Aggregating scores...")
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="aggregate") as pool:
            report_future = pool.submit(
                build_report,
                list(score_sets.values()),
                self.config.thresholds,
                self.config.normalization,
            )
            matrix_future = pool.submit(build_matrix, skeleton)
            report = report_future.result()
            matrix = matrix_future.result()

        self.machine.advance(PipelineState.AGGREGATED)
        return report, matrix

    def _validate(self, report: IndexReport, matrix: Matrix) -> tuple[dict, dict]:
        self._begin("validation", "Validating index and matrix...")
        index_doc = report.to_dict()
        matrix_doc = matrix.to_dict()
        validate_index_document(index_doc)
        validate_matrix_document(matrix_doc)

        self._save_json("index.json", index_doc)
        self._save_json("matrix.json", matrix_doc)
        self.machine.advance(PipelineState.VALIDATED)
        return index_doc, matrix_doc

    def _render(self, index_doc: dict[str, Any], matrix_doc: dict[str, Any]) -> None:
        self._begin("rendering", "Rendering pages...")
        params = self.config.params
        renderers: dict[str, Callable[[], str]] = {
            "index.html": lambda: render_index_html(index_doc, params),
            "matrix.html": lambda: render_matrix_html(matrix_doc, params),
            "badge.svg": lambda: render_badge_svg(
                index_doc["score"], style=str(params.get("badge_style", "flat"))
            ),
        }

        # Render everything before writing anything
        pages: dict[str, str] = {}
        for name, render in renderers.items():
            try:
                pages[name] = render()
            except CohesionReportError:
                raise
            except Exception as e:
                raise RenderingError(name, str(e) or type(e).__name__) from e

        for name, text in pages.items():
            self._written.append(self.writer.write_text(name, text))
        self.machine.advance(PipelineState.RENDERED)

    def _publish(self) -> None:
        self._begin("publication", "Publishing assets...")
        self._written.append(self.writer.copy_file(ASSETS_DIR / "cohesion.css", "cohesion.css"))
        for name in SCHEMA_NAMES:
            self._written.append(
                self.writer.copy_file(schema_path(name), f"schemas/{name}.schema.json")
            )
        self.machine.advance(PipelineState.DONE)

    # ── Helpers ──────────────────────────────────────────────────────

    def _begin(self, stage: str, message: str) -> None:
        self._stage = stage
        logger.info(message)
        if self.on_progress is not None:
            self.on_progress(message)

    def _save_json(self, name: str, document: Any) -> None:
        self._written.append(self.writer.write_json(name, document))
