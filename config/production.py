import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geoattend_db"),
}

MATCH_PREFIX_OCTETS = int(os.getenv("MATCH_PREFIX_OCTETS", "3"))

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "geoattend.log")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
