"""Timed wrapper construction.

The wrapper holds the original implementation in its closure and calls
it directly. It never looks the original up by name on the instance, so
a class that instruments ``__getattribute__``, ``__getattr__`` or routes
calls through ``getattr(self, name)`` cannot send the wrapper back into
itself.
"""

import functools
import inspect
from typing import Any, Callable, Optional

from ...application.services import LogStore, Timer
from ...const import TIMED_ORIGINAL_ATTR


def build_timed_wrapper(
    original: Callable,
    method_name: str,
    timer: Timer,
    store: LogStore,
    is_enabled: Callable[[], bool],
    defined_on_owner: bool = True,
) -> Callable:
    """Build a wrapper timing every call of ``original``.

    Args:
        original: Original method implementation (unbound)
        method_name: Name stored on every TimingRecord
        timer: Timer performing the measurement
        store: Store owning one TimingLog per instance
        is_enabled: Returns False to call straight through untimed
        defined_on_owner: Whether ``original`` lived in the owner's own
            ``__dict__`` (False when it was inherited)

    Returns:
        Sync or async wrapper matching ``original``
    """

    if inspect.iscoroutinefunction(original):

        @functools.wraps(original)
        async def async_wrapper(self, *args, **kwargs):
            if not is_enabled():
                return await original(self, *args, **kwargs)
            return await timer.measure_async(
                store.log_for(self),
                method_name,
                functools.partial(original, self, *args, **kwargs),
            )

        wrapper = async_wrapper
    else:

        @functools.wraps(original)
        def sync_wrapper(self, *args, **kwargs):
            if not is_enabled():
                return original(self, *args, **kwargs)
            return timer.measure(
                store.log_for(self),
                method_name,
                functools.partial(original, self, *args, **kwargs),
            )

        wrapper = sync_wrapper

    setattr(wrapper, TIMED_ORIGINAL_ATTR, original)
    wrapper.__timed_defined_on_owner__ = defined_on_owner
    return wrapper


def is_timed_wrapper(value: Any) -> bool:
    """Check whether ``value`` is a wrapper built by ``build_timed_wrapper``."""
    return callable(value) and getattr(value, TIMED_ORIGINAL_ATTR, None) is not None


def original_of(value: Any) -> Optional[Callable]:
    """Original implementation behind a timed wrapper, or None."""
    if not is_timed_wrapper(value):
        return None
    return getattr(value, TIMED_ORIGINAL_ATTR)
