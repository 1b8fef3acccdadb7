"""Tests for cohesion_report.math.statistics module."""

import pytest

from cohesion_report.math.statistics import Statistics


class TestMeanAndStdev:
    """Tests for basic statistics."""

    def test_mean_empty(self):
        """Mean of empty list is 0."""
        assert Statistics.mean([]) == 0.0

    def test_mean_known(self):
        assert Statistics.mean([1.0, 2.0, 6.0]) == pytest.approx(3.0)

    def test_stdev_single_value(self):
        """Stdev of single value is 0."""
        assert Statistics.stdev([42.0]) == 0.0

    def test_stdev_is_sample_stdev(self):
        """Sample stdev of [1, 2, 3] is 1."""
        assert Statistics.stdev([1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_stdev_constant(self):
        assert Statistics.stdev([5.0, 5.0, 5.0]) == 0.0


class TestDeviations:
    """Tests for z-score and percent deviation."""

    def test_z_score_single(self):
        assert Statistics.z_score(10.0, 5.0, 2.5) == 2.0
        assert Statistics.z_score(5.0, 5.0, 2.5) == 0.0
        assert Statistics.z_score(5.0, 5.0, 0.0) == 0.0  # zero std

    def test_percent_deviation(self):
        assert Statistics.percent_deviation(4.0, 2.0) == pytest.approx(100.0)
        assert Statistics.percent_deviation(1.0, 2.0) == pytest.approx(-50.0)

    def test_percent_deviation_negative_mean(self):
        """Sign follows raw - mean, not the sign of the mean."""
        assert Statistics.percent_deviation(-1.0, -2.0) == pytest.approx(50.0)

    def test_percent_deviation_zero_mean(self):
        assert Statistics.percent_deviation(3.0, 0.0) == 0.0


class TestSummary:
    """Tests for display summary."""

    def test_empty(self):
        assert Statistics.summary([]) == {"min": 0.0, "q1": 0.0, "median": 0.0, "q3": 0.0, "max": 0.0}

    def test_known(self):
        summary = Statistics.summary([1.0, 2.0, 3.0, 4.0, 5.0])
        assert summary["min"] == 1.0
        assert summary["median"] == 3.0
        assert summary["max"] == 5.0
        assert summary["q1"] == pytest.approx(2.0)
        assert summary["q3"] == pytest.approx(4.0)
