"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINS = 15
DEFAULT_MAX_GRACE_ALLOWED = 3
DEFAULT_BREAK_DURATION_MINS = 60
DEFAULT_MIN_OVERTIME_MINS = 0
DEFAULT_WORKING_DAYS_PER_MONTH = 26

HALF_DAY_MIN_HOURS = 4.0
PRESENT_MIN_HOURS = 6.0

STANDARD_HOURS_PER_DAY = 8
OVERTIME_MULTIPLIER = 2.0
DEFAULT_OVERTIME_LIMIT_HOURS = 4.0

NIGHT_SHIFT_FROM_HOUR = 22
NIGHT_SHIFT_UNTIL_HOUR = 5

DEFAULT_PUNCH_COOLDOWN_SECONDS = 10
DEFAULT_OT_DAILY_LIMIT_HOURS = 2.0
DEFAULT_OT_WEEKLY_LIMIT_HOURS = 60.0

MANUAL_OVERRIDE_DEVICE = "MANUAL_OVERRIDE_BY_ADMIN"
KIOSK_DEVICE = "Kiosk"
