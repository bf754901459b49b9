"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ADMIN_EMAIL = "admin@super.com"
DEFAULT_ADMIN_NAME = "Administrador"

DEFAULT_HOURLY_RATES = {
    "permanent": 2500,
    "reinforcement": 2000,
}
DEFAULT_EMPLOYEE_COLOR = "#3B82F6"

MIN_PASSWORD_LENGTH = 6

WORKDAY_HOURS = 8
DEFAULT_WEEKLY_START = "09:00"
DEFAULT_WEEKLY_END = "17:00"

RECENT_ITEMS_LIMIT = 5
