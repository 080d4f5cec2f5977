"""MethodTimer facade.

Wires configuration, registry, log store, timer and interceptor together
and exposes the attachment API client code uses.

Pattern: Facade + Factory
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from ..application.services import LogStore, Timer, TimingLog, TimingStats
from ..config_loader import TimerConfig, load_timer_config
from ..const import REPORT_COLUMNS
from ..domain.entities import TimingRecord
from ..domain.exceptions import ClockError
from ..infrastructure.interception import (
    MethodInterceptor,
    TimedMeta,
    attachment_for,
    register_attachment,
)
from ..infrastructure.registry import DecorationRegistry

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class MethodTimer:
    """Instrumentation facility timing instance method calls.

    Each MethodTimer owns its own registry and logs, so independent
    facilities never see each other's records.

    Example:
        >>> method_timer = MethodTimer()
        >>> @method_timer.attach_to
        ... class Report:
        ...     def render(self):
        ...         return "done"
        >>> report = Report()
        >>> report.render()
        'done'
        >>> [r.method_name for r in method_timer.records(report)]
        ['render']
    """

    def __init__(
        self,
        config: Optional[TimerConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize facility.

        Args:
            config: Validated configuration (defaults when omitted)
            clock: Monotonic clock in seconds
        """
        self._config = config or TimerConfig()
        self._enabled = self._config.enabled
        self._registry = DecorationRegistry()
        self._store = LogStore()
        self._timer = Timer(
            clock=clock,
            strict_clock=self._config.strict_clock,
            log_calls=self._config.log_calls,
        )
        self._interceptor = MethodInterceptor(
            registry=self._registry,
            timer=self._timer,
            store=self._store,
            is_enabled=lambda: self._enabled,
            prefix=self._config.prefix,
            exclude_methods=self._config.exclude_methods,
        )

    @property
    def config(self) -> TimerConfig:
        """Configuration in use."""
        return self._config

    @property
    def registry(self) -> DecorationRegistry:
        """Registry of wrapped methods."""
        return self._registry

    @property
    def diagnostics(self) -> list[ClockError]:
        """Clock anomalies reported by the timer."""
        return self._timer.diagnostics

    # Attachment

    def attach_to(self, cls: T) -> T:
        """Time every current and future public method of ``cls``.

        Usable as a class decorator. Calling it again is a no-op apart
        from wrapping methods added to a plain class since. A class
        already attached to another MethodTimer stays with that one.

        Raises:
            TypeError: If ``cls`` is not a class
        """
        if not isinstance(cls, type):
            raise TypeError(f"attach_to expects a class, got {type(cls).__name__}")
        owner = register_attachment(cls, self)
        if owner is not self:
            _LOGGER.debug(
                "%s is already timed by another MethodTimer, keeping it",
                cls.__qualname__,
            )
            return cls
        self._interceptor.attach(cls)
        return cls

    def method_defined(self, cls: type, name: str) -> None:
        """Definition hook entry point used by TimedMeta."""
        self._interceptor.on_method_defined(cls, name)

    def wrap(self, cls: T, method_name: str) -> T:
        """Time only ``cls.method_name``.

        Raises:
            NoSuchMethodError: Name missing or not callable
            UnwrappableMethodError: Reserved or non-instance method
        """
        self._interceptor.wrap(cls, method_name)
        return cls

    def unwrap(self, cls: type, method_name: str) -> None:
        """Put the original ``cls.method_name`` back."""
        self._interceptor.unwrap(cls, method_name)

    def is_wrapped(self, cls: type, method_name: str) -> bool:
        """Check whether calls of ``method_name`` on ``cls`` instances are timed."""
        return self._interceptor.is_wrapped(cls, method_name)

    def alias_name(self, method_name: str) -> str:
        """Private alias attribute holding the original of ``method_name``."""
        return self._interceptor.alias_name(method_name)

    # Records

    def log_for(self, instance: Any) -> TimingLog:
        """TimingLog owned by ``instance`` (created on first use)."""
        return self._store.log_for(instance)

    def records(self, instance: Any) -> tuple[TimingRecord, ...]:
        """Records of ``instance`` in completion order."""
        log = self._store.get(instance)
        return log.records() if log is not None else ()

    def reset(self, instance: Any) -> None:
        """Drop all records of ``instance``."""
        log = self._store.get(instance)
        if log is not None:
            log.reset()

    def discard(self, instance: Any) -> None:
        """Forget the log of ``instance``.

        Logs of weak-referenceable instances go away with the instance.
        Instances whose class has ``__slots__`` without ``__weakref__``
        are kept alive by their log until discarded.
        """
        self._store.discard(instance)

    def total_for(self, instance: Any, method_name: str) -> float:
        """Total seconds ``instance`` spent in ``method_name``."""
        log = self._store.get(instance)
        return log.total_for(method_name) if log is not None else 0.0

    def statistics(self, instance: Any, method_name: str) -> Optional[TimingStats]:
        """Statistics of one method of ``instance``."""
        log = self._store.get(instance)
        return log.statistics(method_name) if log is not None else None

    def summary(self, instance: Any) -> dict[str, TimingStats]:
        """Statistics of every recorded method of ``instance``."""
        log = self._store.get(instance)
        return log.summary() if log is not None else {}

    def format_report(self, instance: Any) -> str:
        """Plain-text table of per-method totals, slowest first."""
        rows = sorted(
            self.summary(instance).values(),
            key=lambda stats: stats.total_ms,
            reverse=True,
        )
        width = max([len(REPORT_COLUMNS[0])] + [len(s.method_name) for s in rows])
        lines = [
            f"{REPORT_COLUMNS[0]:<{width}}  "
            + "  ".join(f"{column:>10}" for column in REPORT_COLUMNS[1:])
        ]
        for stats in rows:
            lines.append(
                f"{stats.method_name:<{width}}  "
                f"{stats.sample_count:>10}  "
                f"{stats.total_ms:>10.3f}  "
                f"{stats.mean_ms:>10.3f}  "
                f"{stats.max_ms:>10.3f}  "
                f"{stats.error_count:>10}"
            )
        return "\n".join(lines)

    # Switches

    def enable(self) -> None:
        """Enable timing."""
        self._enabled = True
        _LOGGER.debug("Method timing enabled")

    def disable(self) -> None:
        """Disable timing.

        Wrappers stay installed but call straight through; records are
        retained.
        """
        self._enabled = False
        _LOGGER.debug("Method timing disabled")

    @property
    def is_enabled(self) -> bool:
        """Check if timing is enabled."""
        return self._enabled


def create_method_timer(
    config: Union[TimerConfig, Mapping[str, Any], str, Path, None] = None,
    clock: Callable[[], float] = time.perf_counter,
) -> MethodTimer:
    """Factory function creating a MethodTimer.

    Args:
        config: TimerConfig, a mapping validated against CONFIG_SCHEMA,
            a path to a YAML file, or None for defaults
        clock: Monotonic clock in seconds

    Returns:
        Configured MethodTimer

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if isinstance(config, (str, Path)):
        config = load_timer_config(config)
    elif config is not None and not isinstance(config, TimerConfig):
        config = TimerConfig.from_dict(config)
    return MethodTimer(config=config, clock=clock)


default_timer = MethodTimer()


def _timer_of(instance: Any) -> MethodTimer:
    facility = attachment_for(type(instance))
    return facility if facility is not None else default_timer


class Timed(metaclass=TimedMeta, timer=default_timer):
    """Base class timing every public method of its subclasses.

    Subclasses are attached to ``default_timer`` unless they pass their
    own facility: ``class Job(Timed, timer=my_timer)``. Methods assigned
    to a subclass after its creation are timed as well.

    A subclass declaring ``__slots__`` should list ``"__weakref__"``;
    otherwise each instance stays alive until ``discard_timing()`` is
    called.
    """

    __slots__ = ()

    def timing_records(self) -> tuple[TimingRecord, ...]:
        """Records of this instance in completion order."""
        return _timer_of(self).records(self)

    def reset_timing(self) -> None:
        """Drop all records of this instance."""
        _timer_of(self).reset(self)

    def discard_timing(self) -> None:
        """Forget the log of this instance."""
        _timer_of(self).discard(self)

    def timing_total(self, method_name: str) -> float:
        """Total seconds spent in ``method_name`` by this instance."""
        return _timer_of(self).total_for(self, method_name)
