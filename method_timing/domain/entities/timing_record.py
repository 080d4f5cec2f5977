"""TimingRecord value object.

One completed (or failed) call of an instrumented method.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimingRecord:
    """Immutable timing of a single method call.

    Attributes:
        method_name: Name the method was called by
        start_time: Monotonic clock reading when the call started
        duration: Elapsed seconds, never negative
        ordinal: Sequence number assigned when appended to a log
        success: False when the call raised
        error_type: Exception class name of a failed call

    Example:
        >>> record = TimingRecord("render", 10.0, 0.25, ordinal=1)
        >>> record.duration_ms
        250.0
    """

    method_name: str
    start_time: float
    duration: float
    ordinal: int
    success: bool = True
    error_type: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate record.

        Raises:
            ValueError: If duration is negative or ordinal is not positive
        """
        if self.duration < 0:
            raise ValueError(
                f"Duration must be non-negative, got {self.duration!r}"
            )
        if self.ordinal < 1:
            raise ValueError(f"Ordinal must be >= 1, got {self.ordinal!r}")

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        return self.duration * 1000.0

    @property
    def end_time(self) -> float:
        """Monotonic clock reading when the call completed."""
        return self.start_time + self.duration
