import os

from config.config import Config, db_config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = db_config()

JWT_SECRET = Config.JWT_SECRET
TOKEN_TTL_DAYS = Config.TOKEN_TTL_DAYS
TOKEN_COOKIE_NAME = Config.TOKEN_COOKIE_NAME
TOKEN_COOKIE_SECURE = False

DEFAULT_HOURLY_RATE = Config.DEFAULT_HOURLY_RATE

ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD
ADMIN_NAME = Config.ADMIN_NAME

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app applies database/schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
