"""Timer measuring wall-clock duration around a single call.

The timer never alters what the call returns or raises. The record is a
side effect appended to the owning object's log.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Any, Awaitable, Callable, Optional

from ...const import MAX_DIAGNOSTICS
from ...domain.entities import TimingRecord
from ...domain.exceptions import ClockError
from .timing_log import TimingLog

_LOGGER = logging.getLogger(__name__)


class Timer:
    """Measures calls and appends TimingRecords.

    Example:
        >>> timer = Timer()
        >>> log = TimingLog()
        >>> timer.measure(log, "answer", lambda: 42)
        42
        >>> len(log)
        1
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        strict_clock: bool = False,
        log_calls: bool = False,
    ) -> None:
        """Initialize timer.

        Args:
            clock: Monotonic clock returning seconds
            strict_clock: Raise ClockError from a successful call whose
                measured duration is negative instead of only reporting it
            log_calls: Emit one DEBUG line per timed call
        """
        self._clock = clock
        self._strict_clock = strict_clock
        self._log_calls = log_calls
        self._diagnostics: deque[ClockError] = deque(maxlen=MAX_DIAGNOSTICS)

    @property
    def diagnostics(self) -> list[ClockError]:
        """Most recent clock anomalies (oldest first, at most MAX_DIAGNOSTICS)."""
        return list(self._diagnostics)

    def clear_diagnostics(self) -> None:
        """Forget reported clock anomalies."""
        self._diagnostics.clear()

    def measure(
        self, log: TimingLog, method_name: str, thunk: Callable[[], Any]
    ) -> Any:
        """Run ``thunk`` and record how long it took.

        Args:
            log: Log receiving the record
            method_name: Name stored on the record
            thunk: Zero-argument callable running the original method

        Returns:
            Whatever ``thunk`` returned

        Raises:
            ClockError: Only with strict_clock, when the clock went
                backwards around a call that succeeded
        """
        start = self._clock()
        try:
            result = thunk()
        except BaseException as err:
            self._complete(log, method_name, start, err)
            raise
        self._complete(log, method_name, start, None)
        return result

    async def measure_async(
        self,
        log: TimingLog,
        method_name: str,
        thunk: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Coroutine counterpart of ``measure``; times until the result is ready."""
        start = self._clock()
        try:
            result = await thunk()
        except BaseException as err:
            self._complete(log, method_name, start, err)
            raise
        self._complete(log, method_name, start, None)
        return result

    def _complete(
        self,
        log: TimingLog,
        method_name: str,
        start: float,
        error: Optional[BaseException],
    ) -> Optional[TimingRecord]:
        end = self._clock()
        duration = end - start

        if duration < 0:
            clock_error = ClockError(method_name, start, end)
            self._diagnostics.append(clock_error)
            _LOGGER.error("Timing discarded: %s", clock_error)
            if self._strict_clock and error is None:
                raise clock_error
            return None

        record = log.append(
            method_name,
            start_time=start,
            duration=duration,
            success=error is None,
            error_type=type(error).__name__ if error is not None else None,
        )

        if self._log_calls and _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Timing: %s %s in %.3fms (#%d)",
                method_name,
                "SUCCESS" if record.success else "FAILURE",
                record.duration_ms,
                record.ordinal,
            )
        return record
