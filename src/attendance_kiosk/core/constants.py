"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_HOUR = 9
DEFAULT_SCAN_COOLDOWN_SECONDS = 8
DEFAULT_LIVENESS_SAMPLES = 5
DEFAULT_LIVENESS_MIN_CONFIDENCE = 0.7
DEFAULT_DEVICE_ID = "CAMPUS_GATE_01"
DEFAULT_CURRENCY = "INR"
DEFAULT_OVERTIME_MULTIPLIER = "1.5"
DEFAULT_HISTORY_LIMIT = 30

DEFAULT_SHIFT_ID = "SCHED-DEFAULT"
