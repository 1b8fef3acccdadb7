"""Metric registry: maps a metric name to a pure scoring function.

Adding a new metric requires one decorated function:

    @register_metric("MY", display_name="My Metric", description="...")
    def my_metric(incidence: Incidence) -> float:
        ...

The engine, the index and the renderers pick it up by name. The function only
sees classes with at least one method and one attribute; it must return a
finite number.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List

from .models import Incidence

ScoringFunction = Callable[[Incidence], float]


@dataclass(frozen=True)
class MetricDefinition:
    name: str              # "LCOM"
    display_name: str      # "Lack of Cohesion in Methods"
    description: str       # human-readable description
    direction: str         # "high_is_bad" | "low_is_bad"
    compute: ScoringFunction


_REGISTRY: dict[str, MetricDefinition] = {}
_LOCK = threading.Lock()


def register_metric(
    name: str,
    display_name: str = "",
    description: str = "",
    direction: str = "high_is_bad",
) -> Callable[[ScoringFunction], ScoringFunction]:
    """Decorator registering ``func`` under ``name``. Re-registering replaces."""
    if direction not in ("high_is_bad", "low_is_bad"):
        raise ValueError(f"Invalid direction for {name!r}: {direction!r}")

    def decorator(func: ScoringFunction) -> ScoringFunction:
        definition = MetricDefinition(
            name=name,
            display_name=display_name or name,
            description=description or _first_line(func.__doc__),
            direction=direction,
            compute=func,
        )
        with _LOCK:
            _REGISTRY[name] = definition
        return func

    return decorator


def _first_line(doc: str | None) -> str:
    lines = (doc or "").strip().splitlines()
    return lines[0] if lines else ""


def unregister_metric(name: str) -> None:
    with _LOCK:
        _REGISTRY.pop(name, None)


def get_metric(name: str) -> MetricDefinition:
    """Look up a metric by name."""
    with _LOCK:
        try:
            return _REGISTRY[name]
        except KeyError:
            raise KeyError(f"Unknown metric: {name!r}") from None


def available_metrics() -> List[str]:
    """Registered metric names, sorted."""
    with _LOCK:
        return sorted(_REGISTRY)


def get_registry() -> List[MetricDefinition]:
    """Return the current registry (snapshot), sorted by name."""
    with _LOCK:
        return [_REGISTRY[name] for name in sorted(_REGISTRY)]
