"""Test doubles for unit testing.

Fakes are lightweight working implementations used instead of mocks.
FakeClock stands in for the monotonic clock so durations are exact and
a clock going backwards can be simulated.

Example:
    >>> from tests.doubles import FakeClock
    >>> clock = FakeClock(start=10.0)
    >>> clock.advance(0.5)
    >>> clock()
    10.5
"""

from .fake_clock import FakeClock

__all__ = ["FakeClock"]
