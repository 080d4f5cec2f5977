"""Custom exceptions for the method timing facility.

Instrumentation errors are raised synchronously at wrapping time so a
misconfigured class fails on import rather than on first call. Errors
raised by the timed methods themselves are never wrapped in any of these.
"""


class MethodTimingError(Exception):
    """Base exception for the method timing facility."""


class NoSuchMethodError(MethodTimingError, AttributeError):
    """Wrap requested for a name that is not a method of the type.

    Example:
        >>> wrap(Report, "missing")
        Traceback (most recent call last):
        ...
        NoSuchMethodError: Report has no method 'missing'
    """

    def __init__(self, owner: type, method_name: str, reason: str = "") -> None:
        self.owner = owner
        self.method_name = method_name
        message = f"{owner.__qualname__} has no method {method_name!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnwrappableMethodError(MethodTimingError, TypeError):
    """Wrap requested for a reserved or non-instance method.

    Constructors, dunder protocol methods, alias attributes and the
    facility's own bookkeeping methods are reserved.
    """

    def __init__(self, owner: type, method_name: str, reason: str) -> None:
        self.owner = owner
        self.method_name = method_name
        self.reason = reason
        super().__init__(
            f"Cannot wrap {owner.__qualname__}.{method_name}: {reason}"
        )


class ClockError(MethodTimingError):
    """Monotonic clock went backwards during a timed call.

    This should never happen on a correct host clock. The negative
    duration is not stored; the anomaly is reported instead.
    """

    def __init__(self, method_name: str, start: float, end: float) -> None:
        self.method_name = method_name
        self.start = start
        self.end = end
        super().__init__(
            f"Clock went backwards timing {method_name!r}: "
            f"start={start!r} end={end!r} (duration {end - start!r})"
        )


class ConfigurationError(MethodTimingError, ValueError):
    """Invalid timer configuration."""
