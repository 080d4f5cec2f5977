"""Unit tests for timing statistics."""

import pytest

from method_timing.application.services import TimingStats, calculate_statistics
from method_timing.domain.entities import TimingRecord


def _records(name, durations, failures=()):
    return [
        TimingRecord(
            method_name=name,
            start_time=float(i),
            duration=duration,
            ordinal=i + 1,
            success=i not in failures,
            error_type="ValueError" if i in failures else None,
        )
        for i, duration in enumerate(durations)
    ]


class TestStatisticsCalculation:
    """Test statistical calculations."""

    def test_no_matching_records(self):
        """Test returns None when the method was never recorded."""
        assert calculate_statistics("load", _records("save", [0.1])) is None

    def test_single_sample(self):
        """Test one sample gives identical mean, median and percentiles."""
        stats = calculate_statistics("load", _records("load", [0.2]))

        assert isinstance(stats, TimingStats)
        assert stats.sample_count == 1
        assert stats.mean_ms == pytest.approx(200.0)
        assert stats.median_ms == pytest.approx(200.0)
        assert stats.p99_ms == pytest.approx(200.0)

    def test_other_methods_ignored(self):
        """Test only records with the requested name count."""
        records = _records("load", [0.1, 0.3]) + _records("save", [5.0])

        stats = calculate_statistics("load", records)

        assert stats.sample_count == 2
        assert stats.total_ms == pytest.approx(400.0)

    def test_mean_and_median(self):
        """Test mean and median with an even sample count."""
        stats = calculate_statistics("load", _records("load", [0.1, 0.4, 0.2, 0.3]))

        assert stats.mean_ms == pytest.approx(250.0)
        assert stats.median_ms == pytest.approx(250.0)
        assert stats.max_ms == pytest.approx(400.0)

    def test_percentiles_interpolate(self):
        """Test P95 interpolates near the top of the range."""
        durations = [0.4 + i * 0.01 for i in range(20)]

        stats = calculate_statistics("read", _records("read", durations))

        assert 580.0 < stats.p95_ms <= 590.0
        assert stats.p99_ms <= stats.max_ms

    def test_success_rate_and_errors(self):
        """Test failed calls lower the success rate."""
        stats = calculate_statistics(
            "save", _records("save", [0.1, 0.1, 0.1, 0.1], failures={1})
        )

        assert stats.success_rate == 0.75
        assert stats.error_count == 1
