import os

from config.config import db_config

SECRET_KEY = "test-secret"
DB_CONFIG = db_config()

JWT_SECRET = "test-jwt-secret"
TOKEN_TTL_DAYS = 7
TOKEN_COOKIE_NAME = "token"
TOKEN_COOKIE_SECURE = False

DEFAULT_HOURLY_RATE = 9000

ADMIN_EMAIL = None
ADMIN_PASSWORD = None
ADMIN_NAME = "Administrator"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
