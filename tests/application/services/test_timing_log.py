"""Unit tests for TimingLog."""

import threading

import pytest

from method_timing.application.services import TimingLog


class TestTimingLogAppend:
    """Test record appending and ordinals."""

    def test_empty_log(self):
        """Test new log has no records."""
        log = TimingLog()

        assert len(log) == 0
        assert log.records() == ()

    def test_append_assigns_increasing_ordinals(self):
        """Test ordinals follow insertion order."""
        log = TimingLog()

        log.append("a", start_time=1.0, duration=0.1)
        log.append("b", start_time=1.2, duration=0.1)
        log.append("a", start_time=1.4, duration=0.1)

        assert [r.ordinal for r in log.records()] == [1, 2, 3]
        assert [r.method_name for r in log.records()] == ["a", "b", "a"]

    def test_append_returns_record(self):
        """Test the appended record is returned."""
        log = TimingLog()

        record = log.append("a", 1.0, 0.5, success=False, error_type="KeyError")

        assert record.success is False
        assert record.error_type == "KeyError"
        assert log.records()[0] is record

    def test_records_is_snapshot(self):
        """Test returned records do not change with later appends."""
        log = TimingLog()
        log.append("a", 1.0, 0.1)

        snapshot = log.records()
        log.append("b", 2.0, 0.1)

        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)

    def test_iteration(self):
        """Test iterating yields records in order."""
        log = TimingLog()
        log.append("a", 1.0, 0.1)
        log.append("b", 2.0, 0.1)

        assert [r.method_name for r in log] == ["a", "b"]

    def test_concurrent_appends_keep_unique_ordinals(self):
        """Test ordinal assignment is atomic across threads."""
        log = TimingLog()

        def worker():
            for _ in range(200):
                log.append("work", 0.0, 0.001)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ordinals = [r.ordinal for r in log.records()]
        assert len(ordinals) == 1600
        assert ordinals == list(range(1, 1601))


class TestTimingLogQueries:
    """Test totals, counts and statistics."""

    def test_total_for(self):
        """Test durations are summed per method name."""
        log = TimingLog()
        log.append("slow", 0.0, 0.5)
        log.append("fast", 0.5, 0.01)
        log.append("slow", 1.0, 0.25)

        assert log.total_for("slow") == pytest.approx(0.75)
        assert log.total_for("fast") == pytest.approx(0.01)

    def test_total_for_unknown_method(self):
        """Test unknown methods total zero."""
        assert TimingLog().total_for("missing") == 0

    def test_count_for(self):
        """Test records are counted per method name."""
        log = TimingLog()
        log.append("a", 0.0, 0.1)
        log.append("a", 0.1, 0.1)
        log.append("b", 0.2, 0.1)

        assert log.count_for("a") == 2
        assert log.count_for("b") == 1

    def test_method_names_in_first_completion_order(self):
        """Test distinct names keep first-seen order."""
        log = TimingLog()
        for name in ["inner", "outer", "inner", "report"]:
            log.append(name, 0.0, 0.1)

        assert log.method_names() == ["inner", "outer", "report"]

    def test_statistics(self):
        """Test statistics for a recorded method."""
        log = TimingLog()
        log.append("load", 0.0, 0.1)
        log.append("load", 0.1, 0.3)

        stats = log.statistics("load")

        assert stats.sample_count == 2
        assert stats.mean_ms == pytest.approx(200.0)

    def test_statistics_unknown_method(self):
        """Test statistics of an unrecorded method is None."""
        assert TimingLog().statistics("missing") is None

    def test_summary(self):
        """Test summary covers every method."""
        log = TimingLog()
        log.append("a", 0.0, 0.1)
        log.append("b", 0.1, 0.2)

        summary = log.summary()

        assert set(summary) == {"a", "b"}
        assert summary["b"].total_ms == pytest.approx(200.0)


class TestTimingLogReset:
    """Test reset behavior."""

    def test_reset_clears_records(self):
        """Test reset empties the log."""
        log = TimingLog()
        log.append("a", 0.0, 0.1)

        log.reset()

        assert len(log) == 0
        assert log.total_for("a") == 0

    def test_ordinals_keep_increasing_after_reset(self):
        """Test reset does not reuse ordinals."""
        log = TimingLog()
        log.append("a", 0.0, 0.1)
        log.append("a", 0.1, 0.1)

        log.reset()
        record = log.append("a", 0.2, 0.1)

        assert record.ordinal == 3
