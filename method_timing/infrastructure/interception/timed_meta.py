"""Metaclass hook observing method definitions.

A plain ``type`` cannot observe ``setattr(cls, name, value)``. Classes
built by ``TimedMeta`` can: once attached, every method assigned to the
class afterwards is reported to the facility that attached it, and every
subclass created afterwards is attached as well.
"""

from __future__ import annotations

import logging
import threading
import weakref
from contextlib import contextmanager
from typing import Any, Iterator, Optional

_LOGGER = logging.getLogger(__name__)

_SUPPRESSION = threading.local()

# type -> facility that attached it (anything with attach_to/method_defined)
_ATTACHMENTS: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()
_ATTACHMENTS_LOCK = threading.RLock()


@contextmanager
def suppress_definition_hook() -> Iterator[None]:
    """Silence the definition hook in this thread while the block runs.

    Used while the facility writes aliases and wrappers onto a class.
    """
    depth = getattr(_SUPPRESSION, "depth", 0)
    _SUPPRESSION.depth = depth + 1
    try:
        yield
    finally:
        _SUPPRESSION.depth = depth


def definition_hook_suppressed() -> bool:
    """Check whether the definition hook is silenced in this thread."""
    return getattr(_SUPPRESSION, "depth", 0) > 0


def register_attachment(owner: type, facility: Any) -> Any:
    """Remember which facility attached ``owner``.

    The first facility to attach a class keeps it.

    Returns:
        The facility owning ``owner`` after the call
    """
    with _ATTACHMENTS_LOCK:
        return _ATTACHMENTS.setdefault(owner, facility)


def attachment_for(owner: type) -> Optional[Any]:
    """Facility attached to ``owner`` or its nearest attached base."""
    with _ATTACHMENTS_LOCK:
        for klass in owner.__mro__:
            facility = _ATTACHMENTS.get(klass)
            if facility is not None:
                return facility
    return None


class TimedMeta(type):
    """Metaclass reporting method definitions to an attached facility.

    Example:
        >>> class Service(metaclass=TimedMeta, timer=method_timer):
        ...     def load(self): ...
        >>> Service.save = lambda self: None  # wrapped on assignment
    """

    def __new__(mcls, name, bases, namespace, timer=None, **kwargs):
        return super().__new__(mcls, name, bases, namespace, **kwargs)

    def __init__(cls, name, bases, namespace, timer=None, **kwargs):
        super().__init__(name, bases, namespace, **kwargs)
        facility = timer if timer is not None else attachment_for(cls)
        if facility is not None:
            facility.attach_to(cls)

    def __setattr__(cls, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if definition_hook_suppressed():
            return
        facility = attachment_for(cls)
        if facility is not None:
            facility.method_defined(cls, name)
