from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import DomainError, NotFoundError, SessionClosedError, StoreError, ValidationError

logger = logging.getLogger("geoattend.http")

ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    SessionClosedError: 409,
    StoreError: 503,
}


def error_response(exc: DomainError):
    status = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 400)
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc)}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def client_ip(value) -> str:
    """Address reported in the body, else the address the request came from."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return request.remote_addr or ""


def parse_flag(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes"}
