"""Settings shared by every environment; values come from the environment."""

import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workforce_db"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Minimum seconds between two kiosk punches of the same worker
PUNCH_COOLDOWN_SECONDS = int(os.getenv("PUNCH_COOLDOWN_SECONDS", "10"))

# Monthly flat charges, e.g. [{"description": "Canteen Charges", "amount": 550}]
FLAT_DEDUCTIONS = json.loads(os.getenv("FLAT_DEDUCTIONS", "[]"))

OT_DAILY_LIMIT_HOURS = float(os.getenv("OT_DAILY_LIMIT_HOURS", "2"))
OT_WEEKLY_LIMIT_HOURS = float(os.getenv("OT_WEEKLY_LIMIT_HOURS", "60"))
