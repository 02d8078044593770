"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

OFF_SHIFT_CODE = "OFF"
DEFAULT_TOP_N = 10
HOURS_DECIMALS = 2
DEFAULT_REJECTION_NOTE = "Ditolak oleh atasan."
EMPTY_TIME_DISPLAY = "--:--"
EMPTY_HOURS_DISPLAY = "--.-"
