"""Domain layer for method timing.

Holds the value types and the error taxonomy. Nothing in this layer
knows how methods are wrapped or where logs are kept.
"""
