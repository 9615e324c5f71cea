"""Make the repo's config and the event_checkin package importable without installing."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

for path in (REPO_ROOT, REPO_ROOT / "src" / "event_checkin"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
