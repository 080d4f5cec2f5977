"""Application layer: timing, logs and statistics.

Services here operate on plain callables and logs; they do not know how
methods end up routed through them.
"""
