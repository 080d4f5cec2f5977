"""Decoration bookkeeping."""

from .decoration_registry import DecorationRegistry

__all__ = ["DecorationRegistry"]
