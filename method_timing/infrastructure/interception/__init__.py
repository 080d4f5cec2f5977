"""Method interception and definition hooks."""

from .method_interceptor import MethodInterceptor
from .timed_meta import (
    TimedMeta,
    attachment_for,
    definition_hook_suppressed,
    register_attachment,
    suppress_definition_hook,
)

__all__ = [
    "MethodInterceptor",
    "TimedMeta",
    "attachment_for",
    "definition_hook_suppressed",
    "register_attachment",
    "suppress_definition_hook",
]
