import os

from config.base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

PUNCH_COOLDOWN_SECONDS = 0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
