"""Presentation layer: the attachment API client code talks to.

This layer depends on application, infrastructure and domain layers
but NOT vice versa.
"""

from .method_timer import MethodTimer, Timed, create_method_timer, default_timer

__all__ = [
    "MethodTimer",
    "Timed",
    "create_method_timer",
    "default_timer",
]
