"""Configuration loading and management for cohesion-report.

Configuration sources are merged in priority order:
    1. Defaults (defined in CohesionConfig)
    2. Global config (~/.cohesion-report.toml)
    3. Project config (./cohesion-report.toml)
    4. Explicit config file
    5. Environment variables (COHESION_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(metrics=["LCOM", "LCOM4"], high_threshold=15.0)
    >>> config.metrics
    ('LCOM', 'LCOM4')
    >>> config.thresholds.high
    15.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Normalization = Literal["percent", "zscore"]
Verbosity = Literal["quiet", "normal", "verbose"]

_NORMALIZATIONS = ("percent", "zscore")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class Thresholds:
    """Defect thresholds applied to each class's diff.

    A class is a defect when ``diff > high`` or ``diff < low``. Any pair is
    accepted: with ``low > high`` every diff is flagged.
    """

    high: float = 10.0
    low: float = -5.0

    def is_defect(self, diff: float) -> bool:
        return diff > self.high or diff < self.low


@dataclass(frozen=True)
class CohesionConfig:
    """Configuration for one analysis run.

    Attributes:
        Metrics:
            metrics: Names of the registered metrics to compute
            exclude_constructors: Drop __init__/<init> methods before scoring

        Aggregation:
            high_threshold: Diff above this flags a defect
            low_threshold: Diff below this flags a defect
            normalization: "zscore" (deviation in stddevs) or "percent" (deviation as % of mean)

        Execution:
            workers: Metric worker pool size (None = one per metric, capped at CPU count)

        Rendering:
            params: Named parameters passed through to the rendering stage

        Output control:
            verbosity: Logging verbosity level
    """

    metrics: tuple[str, ...] = ("LCOM",)
    exclude_constructors: bool = False

    high_threshold: float = 10.0
    low_threshold: float = -5.0
    normalization: Normalization = "zscore"

    workers: Optional[int] = None

    params: dict[str, Any] = field(default_factory=dict)

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # Accept any iterable of names, keep first occurrence order
        if isinstance(self.metrics, str):
            object.__setattr__(self, "metrics", (self.metrics,))
        else:
            object.__setattr__(self, "metrics", tuple(dict.fromkeys(self.metrics)))

        if not self.metrics:
            raise InvalidConfigError("metrics", self.metrics, "at least one metric is required")
        for name in self.metrics:
            if not isinstance(name, str) or not name:
                raise InvalidConfigError("metrics", name, "metric names must be non-empty strings")

        if self.normalization not in _NORMALIZATIONS:
            raise InvalidConfigError(
                "normalization", self.normalization, f"must be one of {', '.join(_NORMALIZATIONS)}"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

        for key in ("high_threshold", "low_threshold"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigError(key, value, "must be a number")

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds(high=float(self.high_threshold), low=float(self.low_threshold))

    @property
    def worker_count(self) -> int:
        """Worker pool size for metric jobs."""
        if self.workers is not None:
            return self.workers
        return max(1, min(len(self.metrics), os.cpu_count() or 1))


def load_config(config_file: Optional[Path] = None, **overrides) -> CohesionConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated CohesionConfig instance

    Raises:
        ConfigurationError: If a config file is missing/invalid or a value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".cohesion-report.toml"
    if global_config.exists():
        merged.update(_load_config_file(global_config, "global config"))

    project_config = Path.cwd() / "cohesion-report.toml"
    if project_config.exists():
        merged.update(_load_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    # [params] tables merge key by key instead of replacing each other
    params = dict(merged.pop("params", None) or {})
    params.update(overrides.pop("params", None) or {})

    merged.update({k: v for k, v in overrides.items() if v is not None})
    merged["params"] = params

    try:
        return CohesionConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")

    # Accept both a flat file and a [cohesion] table
    section = data.get("cohesion", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {label} '{path}': [cohesion] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COHESION_* environment variables.

    Supported environment variables:
        COHESION_METRICS: comma-separated metric names
        COHESION_HIGH_THRESHOLD: float
        COHESION_LOW_THRESHOLD: float
        COHESION_NORMALIZATION: percent/zscore
        COHESION_EXCLUDE_CONSTRUCTORS: bool (true/false/1/0)
        COHESION_WORKERS: int
        COHESION_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any COHESION_* vars found.
    """
    type_hints = get_type_hints(CohesionConfig)

    result: dict[str, Any] = {}

    for field_name in CohesionConfig.__dataclass_fields__:
        env_key = f"COHESION_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint, field_name)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any, field_name: str) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass
        field_name: Field name for error messages

    Returns:
        Parsed value or None if the field can't be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    # Skip dict types (params) - set them from TOML or the CLI
    if origin is dict or type_hint is dict:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
