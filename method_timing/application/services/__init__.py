"""Application services for method timing.

One class per file.
"""

from .timing_stats import TimingStats, calculate_statistics
from .timing_log import TimingLog
from .log_store import LogStore
from .timer import Timer

__all__ = [
    "TimingStats",
    "calculate_statistics",
    "TimingLog",
    "LogStore",
    "Timer",
]
