"""Tests for the cohesion-report exception hierarchy."""

from pathlib import Path

import pytest

from cohesion_report.exceptions import (
    CohesionReportError,
    ConfigurationError,
    InvalidConfigError,
    MetricComputationError,
    PersistenceError,
    PipelineError,
    PipelineStateError,
    PreconditionError,
    RenderingError,
    SchemaViolation,
    StructuralInvariantError,
)


class TestHierarchy:
    """Every error is catchable as CohesionReportError."""

    @pytest.mark.parametrize(
        "error",
        [
            PreconditionError(Path("out")),
            StructuralInvariantError("duplicate class names"),
            MetricComputationError("LCOM", "boom"),
            PersistenceError(Path("out/x.json"), "disk full"),
            SchemaViolation("index", "bad"),
            RenderingError("index.html", "bad"),
            PipelineStateError("fresh", "done"),
        ],
    )
    def test_pipeline_errors(self, error):
        assert isinstance(error, PipelineError)
        assert isinstance(error, CohesionReportError)

    def test_config_errors(self):
        error = InvalidConfigError("workers", 0, "must be at least 1")
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, CohesionReportError)
        assert not isinstance(error, PipelineError)


class TestMessages:
    """String rendering with details."""

    def test_plain_message(self):
        assert str(CohesionReportError("failed")) == "failed"

    def test_details_appended(self):
        error = MetricComputationError("LCOM", "boom", class_name="pkg.A")
        assert str(error) == "Failed to compute metric LCOM (metric=LCOM, reason=boom, class=pkg.A)"

    def test_optional_details_omitted(self):
        assert "class" not in StructuralInvariantError("bad").details
        assert "location" not in SchemaViolation("index", "bad").details

    def test_cancelled_flag(self):
        assert MetricComputationError("LCOM", "cancelled").cancelled
        assert not MetricComputationError("LCOM", "boom").cancelled

    def test_precondition_path(self):
        error = PreconditionError(Path("/tmp/out"))
        assert error.details == {"path": "/tmp/out"}
        assert "already exists" in str(error)

    def test_stage_rendered_last(self):
        error = MetricComputationError("LCOM", "boom", class_name="pkg.A")
        error.add_detail("stage", "metrics")
        assert error.stage == "metrics"
        assert str(error).endswith("(metric=LCOM, reason=boom, class=pkg.A, stage=metrics)")


class TestAddDetail:
    """Details added after raising."""

    def test_adds_missing_key(self):
        error = RenderingError("badge.svg", "bad style")
        assert error.stage is None
        error.add_detail("stage", "rendering")
        assert error.details["stage"] == "rendering"

    def test_keeps_existing_key(self):
        error = CohesionReportError("failed", {"stage": "extraction"})
        error.add_detail("stage", "metrics")
        assert error.stage == "extraction"

    def test_details_copied(self):
        details = {"metric": "LCOM"}
        error = CohesionReportError("failed", details)
        error.add_detail("stage", "metrics")
        assert details == {"metric": "LCOM"}
