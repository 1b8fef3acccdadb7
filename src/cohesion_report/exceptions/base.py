"""Base exception for cohesion-report.

Every error carries a message plus ``details`` naming the class, metric,
artifact or configuration key involved. Once a failure leaves the pipeline
it also carries the ``stage`` it escaped from.
"""

from typing import Any, Dict, Optional


class CohesionReportError(Exception):
    """Base exception for all cohesion-report errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    @property
    def stage(self) -> Optional[str]:
        """Pipeline stage that was running when the error was raised, if known."""
        return self.details.get("stage")

    def add_detail(self, key: str, value: Any) -> None:
        """Record ``key`` unless the code that raised the error already set it."""
        self.details.setdefault(key, value)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        # stage goes last so the failing class or metric reads first
        items = [(k, v) for k, v in self.details.items() if k != "stage"]
        if self.stage is not None:
            items.append(("stage", self.stage))
        return f"{self.message} ({', '.join(f'{k}={v}' for k, v in items)})"
