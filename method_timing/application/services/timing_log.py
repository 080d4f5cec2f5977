"""Timing log for one instrumented object.

Ordered, append-only sequence of TimingRecord. Records appear in
completion order, so a nested call lands before the call enclosing it.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

from ...domain.entities import TimingRecord
from .timing_stats import TimingStats, calculate_statistics

_LOGGER = logging.getLogger(__name__)


class TimingLog:
    """Append-only log of timing records.

    Appends are serialized by a lock so ordinals stay strictly
    increasing even when the owning object is called from several
    threads. Ordinals keep increasing across ``reset()``.

    Example:
        >>> log = TimingLog()
        >>> log.append("load", start_time=1.0, duration=0.5)
        >>> log.total_for("load")
        0.5
    """

    def __init__(self) -> None:
        """Initialize empty log."""
        self._records: list[TimingRecord] = []
        self._next_ordinal = 1
        self._lock = threading.Lock()

    def append(
        self,
        method_name: str,
        start_time: float,
        duration: float,
        success: bool = True,
        error_type: Optional[str] = None,
    ) -> TimingRecord:
        """Create a record with the next ordinal and append it.

        Args:
            method_name: Name of the timed method
            start_time: Monotonic start reading
            duration: Elapsed seconds (>= 0)
            success: Whether the call returned normally
            error_type: Exception class name for failed calls

        Returns:
            The appended record
        """
        with self._lock:
            record = TimingRecord(
                method_name=method_name,
                start_time=start_time,
                duration=duration,
                ordinal=self._next_ordinal,
                success=success,
                error_type=error_type,
            )
            self._records.append(record)
            self._next_ordinal += 1
        return record

    def records(self) -> tuple[TimingRecord, ...]:
        """Return a read-only snapshot in insertion order."""
        with self._lock:
            return tuple(self._records)

    def reset(self) -> None:
        """Drop all records."""
        with self._lock:
            dropped = len(self._records)
            self._records.clear()
        _LOGGER.debug("Reset timing log (%d records dropped)", dropped)

    def total_for(self, method_name: str) -> float:
        """Sum of durations of every record for ``method_name``."""
        return sum(r.duration for r in self.records() if r.method_name == method_name)

    def count_for(self, method_name: str) -> int:
        """Number of records for ``method_name``."""
        return sum(1 for r in self.records() if r.method_name == method_name)

    def method_names(self) -> list[str]:
        """Distinct method names in order of first completion."""
        return list(dict.fromkeys(r.method_name for r in self.records()))

    def statistics(self, method_name: str) -> Optional[TimingStats]:
        """Statistics for one method, or None if it was never recorded."""
        return calculate_statistics(method_name, self.records())

    def summary(self) -> dict[str, TimingStats]:
        """Statistics for every recorded method."""
        records = self.records()
        result = {}
        for name in dict.fromkeys(r.method_name for r in records):
            stats = calculate_statistics(name, records)
            if stats:
                result[name] = stats
        return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[TimingRecord]:
        return iter(self.records())

    def __repr__(self) -> str:
        return f"TimingLog(records={len(self)})"
