"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EVENT_DAYS = 3
RECENT_CHECKINS_LIMIT = 10
DASHBOARD_REFRESH_SECONDS = 30
EXPORT_FILENAME = "event-data.xlsx"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
BADGE_CODE_PREFIX = "REG-"
