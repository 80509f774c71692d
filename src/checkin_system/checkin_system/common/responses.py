from __future__ import annotations

from flask import jsonify

from ..core.exceptions import DomainError


def error_response(e: DomainError):
    """JSON error envelope: {success: false, message, ...extra}."""
    body = {"success": False, "message": e.message}
    body.update(e.payload())
    return jsonify(body), e.status_code
