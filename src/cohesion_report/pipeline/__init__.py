"""Pipeline coordinator: staged, barrier-gated analysis runs."""

from .coordinator import CohesionPipeline, RunResult
from .states import PipelineState, StateMachine

__all__ = ["CohesionPipeline", "RunResult", "PipelineState", "StateMachine"]
