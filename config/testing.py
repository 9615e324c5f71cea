from config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env("event_checkin_test")

EVENT_NAME = "Test Event"
EVENT_DAYS = 3
EVENT_START_DATE = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
