from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.responses import domain_error, json_error, request_payload
from ..container import Container
from ..core.enums import RegistrantType
from ..core.exceptions import DomainError, ValidationError
from .badge import render_badge_png
from .service import registrant_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.registrant_service

    @app.route("/registrants", methods=["GET"], endpoint="registrants")
    def registrants():
        try:
            filters = service.parse_filter(request.args)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("registrants"))

        rows = [service.to_ui(r) for r in service.list_registrants(filters)]
        return render_template(
            "registrants.html",
            rows=rows,
            filters=filters,
            clubs=service.list_clubs(),
            types=[t.value for t in RegistrantType],
            active_page="registrants",
        )

    @app.route("/registrants", methods=["POST"], endpoint="add_registrant")
    def add_registrant():
        try:
            r = service.create_registrant(request.form)
            flash(f"Added registrant {r.full_name}", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Add registrant error")
            flash("Server error while adding registrant", "danger")
        return redirect(url_for("registrants"))

    @app.route("/api/registrants", methods=["GET"], endpoint="api_registrants")
    def api_registrants():
        try:
            filters = service.parse_filter(request.args)
            rows = service.list_registrants(filters)
            return jsonify([registrant_payload(r, event_days=service.event_days) for r in rows])
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Fetch registrants error")
            return json_error("Server error", 500)

    @app.route("/api/registrants", methods=["POST"], endpoint="api_add_registrant")
    def api_add_registrant():
        try:
            r = service.create_registrant(request_payload())
            return jsonify(registrant_payload(r, event_days=service.event_days)), 201
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Create registrant error")
            return json_error("Server error", 500)

    @app.route("/registrants/<int:registrant_id>/badge.png", endpoint="registrant_badge")
    def registrant_badge(registrant_id: int):
        try:
            r = service.get(registrant_id)
        except DomainError as e:
            return domain_error(e)
        return app.response_class(render_badge_png(r.registrant_id), mimetype="image/png")
