"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440
MINUTES_PER_HOUR = 60

DEFAULT_LIST_LIMIT = 50
DEFAULT_CURRENCY = "GBP"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
