"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PASSWORD_LENGTH = 8
DEFAULT_TOKEN_TTL_DAYS = 7
DEFAULT_TOKEN_COOKIE = "token"
JWT_ALGORITHM = "HS256"

HOURS_QUANTUM = "0.01"
DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
