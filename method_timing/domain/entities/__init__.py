"""Domain entities for method timing."""

from .timing_record import TimingRecord

__all__ = [
    "TimingRecord",
]
