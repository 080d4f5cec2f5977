"""Timing statistics data structure.

Statistical summary of the records one method accumulated in a log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ...domain.entities import TimingRecord


@dataclass(frozen=True)
class TimingStats:
    """Statistical summary of timing records for one method.

    All durations are in milliseconds, rounded to 3 decimals.

    Attributes:
        method_name: Method the records belong to
        sample_count: Number of records
        total_ms: Sum of durations
        mean_ms: Mean duration
        median_ms: Median duration
        p95_ms: 95th percentile duration
        p99_ms: 99th percentile duration
        max_ms: Slowest call
        success_rate: Ratio of calls that returned normally (0.0-1.0)
        error_count: Number of calls that raised
    """

    method_name: str
    sample_count: int
    total_ms: float
    mean_ms: float
    median_ms: float
    p95_ms: float
    p99_ms: float
    max_ms: float
    success_rate: float
    error_count: int = 0


def calculate_statistics(
    method_name: str, records: Iterable[TimingRecord]
) -> Optional[TimingStats]:
    """Calculate statistics for the records matching ``method_name``.

    Args:
        method_name: Method to summarize
        records: Records to pick from (other method names are ignored)

    Returns:
        TimingStats, or None when there is no matching record
    """
    matching = [r for r in records if r.method_name == method_name]
    if not matching:
        return None

    durations = [r.duration_ms for r in matching]
    sorted_durations = sorted(durations)
    count = len(sorted_durations)
    total = sum(durations)
    errors = sum(1 for r in matching if not r.success)

    return TimingStats(
        method_name=method_name,
        sample_count=count,
        total_ms=round(total, 3),
        mean_ms=round(total / count, 3),
        median_ms=round(_calculate_percentile(sorted_durations, 50), 3),
        p95_ms=round(_calculate_percentile(sorted_durations, 95), 3),
        p99_ms=round(_calculate_percentile(sorted_durations, 99), 3),
        max_ms=round(sorted_durations[-1], 3),
        success_rate=round((count - errors) / count, 3),
        error_count=errors,
    )


def _calculate_percentile(sorted_values: list[float], percentile: int) -> float:
    """Calculate percentile from sorted list.

    Uses linear interpolation between values when percentile falls
    between samples (standard numpy behavior).

    Args:
        sorted_values: Pre-sorted list of values
        percentile: Percentile to calculate (0-100)

    Returns:
        Interpolated percentile value
    """
    if not sorted_values:
        return 0.0

    if len(sorted_values) == 1:
        return sorted_values[0]

    rank = (percentile / 100.0) * (len(sorted_values) - 1)
    lower_idx = int(rank)
    upper_idx = min(lower_idx + 1, len(sorted_values) - 1)

    fraction = rank - lower_idx
    lower_val = sorted_values[lower_idx]
    upper_val = sorted_values[upper_idx]

    return lower_val + fraction * (upper_val - lower_val)
