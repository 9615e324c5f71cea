from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlsplit

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.responses import domain_error, json_error, request_payload
from ..common.validators import optional_text
from ..container import Container
from ..core.constants import BADGE_CODE_PREFIX
from ..core.exceptions import DomainError, ValidationError
from ..registrants.service import registrant_payload
from .lookups.base import CheckInQuery

logger = logging.getLogger(__name__)


def _registrant_id(value: Any) -> int | None:
    text = optional_text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"Invalid registrant id: {text}")


def _local_url(value: Any) -> str | None:
    """`next` target if it is a path on this site; anything with a host or scheme is dropped."""
    text = optional_text(value)
    if not text or not text.startswith("/") or text[1:2] in ("/", "\\"):
        return None
    parts = urlsplit(text)
    if parts.scheme or parts.netloc:
        return None
    return text


def query_from(data: Mapping[str, Any]) -> CheckInQuery:
    return CheckInQuery(
        registrant_id=_registrant_id(data.get("registrantId")),
        email=optional_text(data.get("email")),
        phone=optional_text(data.get("phone")),
        code=optional_text(data.get("code")),
    )


def register(app: Flask, container: Container) -> None:
    service = container.checkin_service
    event_days = container.event.days

    @app.route("/check-in", methods=["GET"], endpoint="check_in_page")
    def check_in_page():
        return render_template("check_in.html", active_page="check_in")

    @app.route("/check-in", methods=["POST"], endpoint="check_in_submit")
    def check_in_submit():
        day = request.form.get("day")
        identifier = (request.form.get("identifier") or "").strip()
        data = dict(request.form)
        # The desk form has a single box: badge scans, emails and phones all land in it
        if identifier:
            if "@" in identifier:
                data["email"] = identifier
            elif identifier.upper().startswith(BADGE_CODE_PREFIX):
                data["code"] = identifier
            else:
                data["phone"] = identifier

        try:
            r = service.check_in(query_from(data), day=day)
            flash(f"Check-in successful: {r.full_name} ({r.club_name})", "success")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Check-in error")
            flash("Server error during check-in", "danger")

        return redirect(_local_url(request.form.get("next")) or url_for("check_in_page", day=day))

    @app.route("/check-in/undo", methods=["POST"], endpoint="undo_check_in_submit")
    def undo_check_in_submit():
        try:
            registrant_id = _registrant_id(request.form.get("registrantId"))
            if registrant_id is None:
                raise ValidationError("registrantId is required")
            r = service.undo_check_in(registrant_id, day=request.form.get("day"))
            flash(f"Check-in undone: {r.full_name}", "info")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Undo check-in error")
            flash("Server error while undoing check-in", "danger")
        return redirect(request.referrer or url_for("registrants"))

    @app.route("/api/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in():
        data = request_payload()
        try:
            r = service.check_in(query_from(data), day=data.get("day"))
            return jsonify(registrant_payload(r, event_days=event_days)), 200
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Check-in error")
            return json_error("Server error", 500)

    @app.route("/api/check-in/undo", methods=["POST"], endpoint="api_undo_check_in")
    def api_undo_check_in():
        data = request_payload()
        try:
            registrant_id = _registrant_id(data.get("registrantId"))
            if registrant_id is None:
                raise ValidationError("registrantId is required")
            r = service.undo_check_in(registrant_id, day=data.get("day"))
            return jsonify(registrant_payload(r, event_days=event_days)), 200
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Undo check-in error")
            return json_error("Server error", 500)
