import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance_test"),
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

TIMEZONE = None

LEAVE_PRECEDENCE = "activity_first"
WEEK_OFF_RULE = "lookback"
MINIMAL_ACTIVITY_STATUS = "P"

REPORT_FETCH_WORKERS = 1
