# Copyright (c) 2026 method_timing Contributors
# Licensed under the MIT License
# See LICENSE file for full license text

"""Per-method wall-clock timing for Python classes.

Wraps instance methods of a class with timing capture without touching
method bodies, and keeps one ordered log of TimingRecords per instance.

Example:
    >>> import method_timing
    >>> @method_timing.attach_to
    ... class Checkout:
    ...     def total(self, items):
    ...         return sum(items)
    >>> cart = Checkout()
    >>> cart.total([1, 2])
    3
    >>> method_timing.records(cart)[0].method_name
    'total'
"""

from __future__ import annotations

from typing import Any, Optional

from .application.services import TimingLog, TimingStats
from .config_loader import CONFIG_SCHEMA, TimerConfig, load_timer_config
from .domain.entities import TimingRecord
from .domain.exceptions import (
    ClockError,
    ConfigurationError,
    MethodTimingError,
    NoSuchMethodError,
    UnwrappableMethodError,
)
from .infrastructure.interception import TimedMeta
from .presentation import MethodTimer, Timed, create_method_timer, default_timer

__version__ = "1.0.0"


def attach_to(cls):
    """Time every current and future public method of ``cls``."""
    return default_timer.attach_to(cls)


def wrap(cls, method_name: str):
    """Time only ``cls.method_name``."""
    return default_timer.wrap(cls, method_name)


def unwrap(cls, method_name: str) -> None:
    """Restore the original ``cls.method_name``."""
    default_timer.unwrap(cls, method_name)


def records(instance: Any) -> tuple[TimingRecord, ...]:
    """Records of ``instance`` in completion order."""
    return default_timer.records(instance)


def reset(instance: Any) -> None:
    """Drop all records of ``instance``."""
    default_timer.reset(instance)


def discard(instance: Any) -> None:
    """Forget the log of ``instance``, releasing it if it was kept alive."""
    default_timer.discard(instance)


def total_for(instance: Any, method_name: str) -> float:
    """Total seconds ``instance`` spent in ``method_name``."""
    return default_timer.total_for(instance, method_name)


def statistics(instance: Any, method_name: str) -> Optional[TimingStats]:
    """Statistics of ``method_name`` on ``instance``, or None if never timed."""
    return default_timer.statistics(instance, method_name)


def summary(instance: Any) -> dict[str, TimingStats]:
    """Statistics of every recorded method of ``instance``."""
    return default_timer.summary(instance)


def format_report(instance: Any) -> str:
    """Plain-text table of per-method totals of ``instance``, slowest first."""
    return default_timer.format_report(instance)


__all__ = [
    "CONFIG_SCHEMA",
    "ClockError",
    "ConfigurationError",
    "MethodTimer",
    "MethodTimingError",
    "NoSuchMethodError",
    "Timed",
    "TimedMeta",
    "TimerConfig",
    "TimingLog",
    "TimingRecord",
    "TimingStats",
    "UnwrappableMethodError",
    "attach_to",
    "create_method_timer",
    "default_timer",
    "discard",
    "format_report",
    "load_timer_config",
    "records",
    "reset",
    "statistics",
    "summary",
    "total_for",
    "unwrap",
    "wrap",
]
