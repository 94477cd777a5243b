import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

BARCODE_PREFIX = os.getenv("BARCODE_PREFIX", "MAPH")
SCAN_CHECK_IN_TIME = os.getenv("SCAN_CHECK_IN_TIME", "09:00")
SCAN_CHECK_OUT_TIME = os.getenv("SCAN_CHECK_OUT_TIME", "16:00")
