"""Per-instance ownership of timing logs.

Logs are keyed by object identity instead of being stored on the
instance, so classes with ``__slots__``, custom ``__setattr__`` or an
unhashable ``__eq__`` can be instrumented unchanged.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Optional

from .timing_log import TimingLog

_LOGGER = logging.getLogger(__name__)


class LogStore:
    """Maps live instrumented objects to their TimingLog.

    An entry is dropped when its object is garbage collected. Objects
    that cannot be weakly referenced (``__slots__`` without
    ``__weakref__``) are pinned by a strong reference until ``discard()``
    is called, so their id is never reused while the entry exists. The
    first pinned instance of each class is reported with a warning.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self._logs: dict[int, TimingLog] = {}
        self._pinned: dict[int, Any] = {}
        self._pinned_types: weakref.WeakSet[type] = weakref.WeakSet()
        # Reentrant: a finalizer may fire from a collection triggered
        # while the lock is held by the same thread.
        self._lock = threading.RLock()

    def log_for(self, instance: Any) -> TimingLog:
        """Return the log owned by ``instance``, creating it on first use."""
        key = id(instance)
        with self._lock:
            log = self._logs.get(key)
            if log is not None:
                return log

            log = TimingLog()
            self._logs[key] = log
            try:
                weakref.finalize(instance, self._drop, key)
            except TypeError:
                self._pinned[key] = instance
                self._warn_pinned(type(instance))
            return log

    def get(self, instance: Any) -> Optional[TimingLog]:
        """Return the log of ``instance`` without creating one."""
        with self._lock:
            return self._logs.get(id(instance))

    def discard(self, instance: Any) -> None:
        """Forget the log of ``instance`` if there is one."""
        self._drop(id(instance))

    def pinned_count(self) -> int:
        """Number of instances kept alive until discarded."""
        with self._lock:
            return len(self._pinned)

    def _warn_pinned(self, cls: type) -> None:
        if cls in self._pinned_types:
            return
        self._pinned_types.add(cls)
        _LOGGER.warning(
            "%s instances cannot be weakly referenced (add '__weakref__' "
            "to __slots__); their timing logs live until discarded",
            cls.__qualname__,
        )

    def _drop(self, key: int) -> None:
        with self._lock:
            self._logs.pop(key, None)
            self._pinned.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)
