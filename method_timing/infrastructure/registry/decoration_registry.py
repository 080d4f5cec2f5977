"""Registry of wrapped methods and attached types.

Answers "has (owner, method_name) already been wrapped?" so no method is
ever wrapped twice, even when a definition hook fires again while the
wrapper itself is being installed.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Optional

_LOGGER = logging.getLogger(__name__)


class DecorationRegistry:
    """Set of (owner type, method name) pairs already wrapped.

    Types are weakly referenced, so registering a class does not keep it
    alive. The registry lock is reentrant and exposed through ``lock``
    so a caller can hold it across check, mark and install.

    Example:
        >>> registry = DecorationRegistry()
        >>> registry.mark_decorated(Report, "render")
        True
        >>> registry.mark_decorated(Report, "render")
        False
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._decorated: weakref.WeakKeyDictionary[type, set[str]] = (
            weakref.WeakKeyDictionary()
        )
        self._attached: weakref.WeakSet[type] = weakref.WeakSet()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding every registry mutation."""
        return self._lock

    def is_decorated(self, owner: type, method_name: str) -> bool:
        """Check whether ``owner.method_name`` has been wrapped."""
        with self._lock:
            return method_name in self._decorated.get(owner, ())

    def mark_decorated(self, owner: type, method_name: str) -> bool:
        """Mark ``owner.method_name`` as wrapped.

        Check and mark happen under one lock acquisition.

        Returns:
            True if newly marked, False if it was already marked
        """
        with self._lock:
            names = self._decorated.setdefault(owner, set())
            if method_name in names:
                return False
            names.add(method_name)
            return True

    def check_and_mark(self, owner: type, method_name: str) -> bool:
        """Alias of ``mark_decorated`` named after what it does atomically."""
        return self.mark_decorated(owner, method_name)

    def forget(self, owner: type, method_name: str) -> None:
        """Remove the mark for ``owner.method_name`` if present."""
        with self._lock:
            names = self._decorated.get(owner)
            if names is not None:
                names.discard(method_name)

    def decorated_names(self, owner: type) -> frozenset[str]:
        """Names wrapped directly on ``owner`` (inherited ones excluded)."""
        with self._lock:
            return frozenset(self._decorated.get(owner, ()))

    def attach(self, owner: type) -> bool:
        """Record ``owner`` as being in auto-apply mode.

        Returns:
            True if newly attached
        """
        with self._lock:
            if owner in self._attached:
                return False
            self._attached.add(owner)
            _LOGGER.debug("Attached auto-apply timing to %s", owner.__qualname__)
            return True

    def is_attached(self, owner: type) -> bool:
        """Check whether ``owner`` itself is in auto-apply mode."""
        with self._lock:
            return owner in self._attached

    def attached_ancestor(self, owner: type) -> Optional[type]:
        """Nearest base class of ``owner`` in auto-apply mode, if any."""
        with self._lock:
            for base in owner.__mro__[1:]:
                if base in self._attached:
                    return base
        return None
