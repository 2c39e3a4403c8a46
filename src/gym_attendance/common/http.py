from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    """JSON error responses: one status per failure kind, no internals leaked."""

    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Lỗi hệ thống, vui lòng thử lại sau"}), 500
