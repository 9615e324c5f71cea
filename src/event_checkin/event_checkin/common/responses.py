from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify, request

from ..core.exceptions import DomainError, NotFoundError


def status_for(exc: DomainError) -> int:
    # Conflicts ("already checked in") stay 400 for existing desk clients
    return 404 if isinstance(exc, NotFoundError) else 400


def json_error(message: str, status: int):
    return jsonify({"message": message}), status


def domain_error(exc: DomainError):
    return json_error(str(exc), status_for(exc))


def request_payload() -> Mapping[str, Any]:
    """JSON body if present, otherwise the submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(405)
    def method_not_allowed(_e):
        if request.path.startswith("/api/"):
            return json_error("Method not allowed", 405)
        return "Method not allowed", 405

    @app.errorhandler(404)
    def not_found(_e):
        if request.path.startswith("/api/"):
            return json_error("Not found", 404)
        return "Not found", 404
