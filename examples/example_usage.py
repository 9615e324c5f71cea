"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the dashboard numbers come straight from DashboardService.
"""

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [str(REPO_ROOT), str(REPO_ROOT / "src" / "event_checkin")]

from config import get_settings_module

from event_checkin.container import EventSettings, build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, event=EventSettings.from_settings(settings))
    print(json.dumps(container.dashboard_service.build(), indent=2))


if __name__ == "__main__":
    main()
