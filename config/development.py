import os

from config.base import *  # noqa: F401,F403

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Load database/seed.sql (demo tenant) on startup; REPLACE-based, safe to repeat
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
