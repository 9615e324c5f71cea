import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src" / "event_checkin"))

from event_checkin.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
