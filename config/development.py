import os

from config import db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env("event_checkin")

EVENT_NAME = os.getenv("EVENT_NAME", "RYLA 2024")
EVENT_DAYS = int(os.getenv("EVENT_DAYS", "3"))
# YYYY-MM-DD of day 1; empty means "always day 1" unless a day is given explicitly
EVENT_START_DATE = os.getenv("EVENT_START_DATE", "")

DEBUG = True

# Applies schema.sql on startup (idempotent: CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", True)
# Demo registrants for a fresh desk laptop
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", False)
