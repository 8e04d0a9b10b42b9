import os

from config.config import Config, db_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = db_config()

JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")
TOKEN_TTL_DAYS = Config.TOKEN_TTL_DAYS
TOKEN_COOKIE_NAME = Config.TOKEN_COOKIE_NAME
TOKEN_COOKIE_SECURE = True

DEFAULT_HOURLY_RATE = Config.DEFAULT_HOURLY_RATE

ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD
ADMIN_NAME = Config.ADMIN_NAME

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
