from __future__ import annotations

import io
import logging

from flask import Flask, render_template, send_file

from ..common.responses import json_error
from ..container import Container
from ..core.constants import EXPORT_FILENAME, XLSX_MIMETYPE

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/export", endpoint="export_page")
    def export_page():
        return render_template("export.html", active_page="export")

    @app.route("/api/export", methods=["GET"], endpoint="api_export")
    def api_export():
        try:
            payload = container.export_service.build_workbook()
        except Exception:
            logger.exception("Export error")
            return json_error("Error exporting data", 500)

        return send_file(
            io.BytesIO(payload),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )
