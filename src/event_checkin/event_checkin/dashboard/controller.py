from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template

from ..container import Container
from ..core.constants import DASHBOARD_REFRESH_SECONDS
from ..common.responses import json_error

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="dashboard")
    def dashboard():
        return render_template(
            "dashboard.html",
            refresh_seconds=DASHBOARD_REFRESH_SECONDS,
            active_page="dashboard",
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        try:
            return jsonify(container.dashboard_service.build())
        except Exception:
            logger.exception("Dashboard error")
            return json_error("Server error", 500)
