from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, render_template, request
from werkzeug.utils import secure_filename

from ..common.responses import json_error
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import ImportResult
from .parser import FIELD_LABELS, REQUIRED_FIELDS

logger = logging.getLogger(__name__)


def _read_upload() -> str:
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise ValidationError("Please select a file first")
    filename = secure_filename(upload.filename)
    if not filename.lower().endswith(".csv"):
        raise ValidationError("Please select a valid CSV file")
    logger.info("Importing upload %s", filename)
    try:
        return upload.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("The CSV file must be UTF-8 encoded")


def register(app: Flask, container: Container) -> None:
    service = container.import_service

    def _run_import() -> ImportResult:
        if request.files:
            return service.import_csv(_read_upload())

        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Invalid data format")
        if "csvData" in body:
            return service.import_csv(str(body.get("csvData") or ""))
        if isinstance(body.get("data"), list):
            return service.import_records(body["data"])
        raise ValidationError("Invalid data format")

    def _page(results=None):
        return render_template(
            "import.html",
            results=results,
            required=[FIELD_LABELS[f] for f in REQUIRED_FIELDS],
            active_page="import",
        )

    @app.route("/import-registrants", methods=["GET"], endpoint="import_page")
    def import_page():
        return _page()

    @app.route("/import-registrants", methods=["POST"], endpoint="import_submit")
    def import_submit():
        try:
            result = service.import_csv(_read_upload())
        except DomainError as e:
            flash(str(e), "danger")
            return _page()
        except Exception:
            logger.exception("Import error")
            flash("Error importing registrants", "danger")
            return _page()

        flash(
            f"Imported {result.imported}, skipped {result.skipped} duplicate(s)",
            "success" if result.success else "warning",
        )
        return _page(result.as_dict())

    @app.route("/api/import-registrants", methods=["POST"], endpoint="api_import")
    def api_import():
        try:
            return jsonify(_run_import().as_dict()), 200
        except DomainError as e:
            return jsonify({"error": str(e), "message": str(e)}), 400
        except Exception:
            logger.exception("Import error")
            return json_error("Error importing registrants", 500)
