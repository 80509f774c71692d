"""Shared defaults for every environment module."""

import os

SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": int(os.environ.get("DB_PORT", "3306")),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "checkin_db"),
}
DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "5"))
DB_POOL_TIMEOUT = float(os.environ.get("DB_POOL_TIMEOUT", "10"))

API_PREFIX = os.environ.get("API_PREFIX", "/api")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# mark_absent | delete
UNDO_POLICY = os.environ.get("UNDO_POLICY", "mark_absent")

DEFAULT_COLLEGE = os.environ.get("DEFAULT_COLLEGE", "Malnad College of Engineering")
ROSTER_FILE = os.environ.get("ROSTER_FILE", "data/SelectedTeams.xlsx")
