"""Constants for the method timing facility."""

from typing import Final

# Alias attribute for an original implementation is "_" + prefix + name.
DEFAULT_PREFIX: Final = "original_"

# Bookkeeping methods of the Timed base class. Never wrapped.
RESERVED_METHODS: Final = frozenset(
    {
        "timing_records",
        "reset_timing",
        "timing_total",
        "discard_timing",
    }
)

# Attribute set on every timed wrapper, pointing at the original callable.
TIMED_ORIGINAL_ATTR: Final = "__timed_original__"

# Top-level section name accepted in YAML configuration files.
CONFIG_SECTION: Final = "method_timing"

REPORT_COLUMNS: Final = ("Method", "Calls", "Total ms", "Mean ms", "Max ms", "Errors")

# Clock anomalies kept by a Timer; older ones are dropped first.
MAX_DIAGNOSTICS: Final = 100
