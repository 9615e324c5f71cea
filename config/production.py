import os

from config import db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env("event_checkin")

EVENT_NAME = os.getenv("EVENT_NAME", "RYLA 2024")
EVENT_DAYS = int(os.getenv("EVENT_DAYS", "3"))
EVENT_START_DATE = os.getenv("EVENT_START_DATE", "")

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
AUTO_SEED_DB = False
