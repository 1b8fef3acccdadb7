"""Configuration exceptions."""

from typing import Any

from .base import CohesionReportError


class ConfigurationError(CohesionReportError):
    """Raised when configuration sources or values are invalid."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when a single configuration value is invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
