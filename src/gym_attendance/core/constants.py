"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_ID_PREFIX = "att_"
SUBSCRIPTION_ID_PREFIX = "sub_"
GENERATED_ID_LENGTH = 10

DATE_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"
DATE_KEY_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
