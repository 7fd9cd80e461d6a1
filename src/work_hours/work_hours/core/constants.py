"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60
DEFAULT_SESSION_DAYS = 7
DEFAULT_RECENT_LIMIT = 5
DEFAULT_REPORT_DAYS = 30
MIN_PASSWORD_LENGTH = 6

# Group label for records that carry no owner.
UNASSIGNED_OWNER = "Unassigned"

DEFAULT_SEED_ADMIN_USERNAME = "admin"
