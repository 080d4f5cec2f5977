"""Infrastructure layer: registry, wrappers and interception hooks.

Everything that touches class dictionaries lives here.
"""
