"""Infrastructure layer decorators."""

from .timed_wrapper import build_timed_wrapper, is_timed_wrapper, original_of

__all__ = [
    "build_timed_wrapper",
    "is_timed_wrapper",
    "original_of",
]
