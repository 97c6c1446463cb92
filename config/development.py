import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance"),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

# Múi giờ dùng để xác định ngày của một lần chấm công
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

# activity_first | leave_first
LEAVE_PRECEDENCE = os.getenv("LEAVE_PRECEDENCE", "activity_first")
# lookback | weekly_presence
WEEK_OFF_RULE = os.getenv("WEEK_OFF_RULE", "lookback")
# Trạng thái cho ngày có chấm công nhưng dưới 3 giờ: P | 0.5P | A
MINIMAL_ACTIVITY_STATUS = os.getenv("MINIMAL_ACTIVITY_STATUS", "P")

REPORT_FETCH_WORKERS = int(os.getenv("REPORT_FETCH_WORKERS", "3"))
