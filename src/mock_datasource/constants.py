"""Shared column names and defaults."""

COL_TIME = "time"
COL_VALUE = "value"

# Generation window ends at build time and reaches back this many days.
DEFAULT_WINDOW_DAYS = 28
