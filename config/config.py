import os


class Config:
    """Shared defaults; the per-environment modules read from here."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "worklog-dev-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "worklog_db")
    # Session time zone for every connection (work dates are local dates)
    DB_TIME_ZONE = os.environ.get("DB_TIME_ZONE", "+09:00")

    JWT_SECRET = os.environ.get("JWT_SECRET") or "change-me-in-production"
    TOKEN_TTL_DAYS = int(os.environ.get("TOKEN_TTL_DAYS", "7"))
    TOKEN_COOKIE_NAME = os.environ.get("TOKEN_COOKIE_NAME", "token")

    DEFAULT_HOURLY_RATE = int(os.environ.get("DEFAULT_HOURLY_RATE", "9000"))

    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
    ADMIN_NAME = os.environ.get("ADMIN_NAME", "Administrator")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def db_config() -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
        "time_zone": Config.DB_TIME_ZONE,
    }
