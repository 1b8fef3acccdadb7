"""Pipeline exceptions: one class per fatal failure of an analysis run.

None of these are recovered or retried. The coordinator records the stage it
was in under ``details["stage"]`` before re-raising to the caller.
"""

from pathlib import Path
from typing import Optional

from .base import CohesionReportError


class PipelineError(CohesionReportError):
    """Base class for errors that abort an analysis run."""

    pass


class PreconditionError(PipelineError):
    """Raised when the output location already exists."""

    def __init__(self, path: Path):
        super().__init__(
            f"Directory/file already exists: {path}",
            details={"path": str(path)},
        )
        self.path = path


class StructuralInvariantError(PipelineError):
    """Raised for duplicate class names or a malformed skeleton."""

    def __init__(self, reason: str, class_name: Optional[str] = None):
        details = {"reason": reason}
        if class_name is not None:
            details["class"] = class_name
        super().__init__("Skeleton violates structural invariants", details=details)
        self.reason = reason
        self.class_name = class_name


class MetricComputationError(PipelineError):
    """Raised when a metric is unknown or cannot be computed for a class."""

    def __init__(self, metric: str, reason: str, class_name: Optional[str] = None):
        details = {"metric": metric, "reason": reason}
        if class_name is not None:
            details["class"] = class_name
        super().__init__(f"Failed to compute metric {metric}", details=details)
        self.metric = metric
        self.reason = reason
        self.class_name = class_name

    @property
    def cancelled(self) -> bool:
        return self.reason == "cancelled"


class PersistenceError(PipelineError):
    """Raised when an artifact cannot be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot write artifact: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class SchemaViolation(PipelineError):
    """Raised when a structured document does not conform to its schema."""

    def __init__(self, document: str, reason: str, location: str = ""):
        details = {"document": document, "reason": reason}
        if location:
            details["location"] = location
        super().__init__(f"{document} does not conform to its schema", details=details)
        self.document = document
        self.reason = reason
        self.location = location


class RenderingError(PipelineError):
    """Raised when a human-facing page cannot be produced."""

    def __init__(self, artifact: str, reason: str):
        super().__init__(
            f"Failed to render {artifact}",
            details={"artifact": artifact, "reason": reason},
        )
        self.artifact = artifact
        self.reason = reason


class PipelineStateError(PipelineError):
    """Raised on an illegal pipeline state transition."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Illegal transition {current} -> {target}",
            details={"from": current, "to": target},
        )
        self.current = current
        self.target = target
