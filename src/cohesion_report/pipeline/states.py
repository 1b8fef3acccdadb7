"""Pipeline state machine.

    FRESH -> EXTRACTED -> METRICS_COMPUTED -> AGGREGATED -> VALIDATED -> RENDERED -> DONE
      \\__________\\________________\\______________\\____________\\___________\\-> FAILED
"""

from __future__ import annotations

from enum import Enum

from ..exceptions import PipelineStateError
from ..logging_config import get_logger

logger = get_logger(__name__)


class PipelineState(Enum):
    FRESH = "fresh"
    EXTRACTED = "extracted"
    METRICS_COMPUTED = "metrics_computed"
    AGGREGATED = "aggregated"
    VALIDATED = "validated"
    RENDERED = "rendered"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.FAILED)


_NEXT = {
    PipelineState.FRESH: PipelineState.EXTRACTED,
    PipelineState.EXTRACTED: PipelineState.METRICS_COMPUTED,
    PipelineState.METRICS_COMPUTED: PipelineState.AGGREGATED,
    PipelineState.AGGREGATED: PipelineState.VALIDATED,
    PipelineState.VALIDATED: PipelineState.RENDERED,
    PipelineState.RENDERED: PipelineState.DONE,
}


class StateMachine:
    """Tracks the current state and the path taken to reach it."""

    def __init__(self) -> None:
        self.state = PipelineState.FRESH
        self.history: list[PipelineState] = [PipelineState.FRESH]

    def advance(self, target: PipelineState) -> None:
        """Move to the next state; only the successor of the current state is legal."""
        if _NEXT.get(self.state) is not target:
            raise PipelineStateError(self.state.value, target.value)
        self._enter(target)

    def fail(self) -> None:
        if self.state.terminal:
            raise PipelineStateError(self.state.value, PipelineState.FAILED.value)
        self._enter(PipelineState.FAILED)

    def _enter(self, target: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)
