import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

LEAVE_PRECEDENCE = os.getenv("LEAVE_PRECEDENCE", "activity_first")
WEEK_OFF_RULE = os.getenv("WEEK_OFF_RULE", "lookback")
MINIMAL_ACTIVITY_STATUS = os.getenv("MINIMAL_ACTIVITY_STATUS", "P")

REPORT_FETCH_WORKERS = int(os.getenv("REPORT_FETCH_WORKERS", "3"))
