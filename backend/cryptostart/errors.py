"""Application exceptions, global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any

from flask import Flask, jsonify
from loguru import logger
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    status_code: int = 400
    code: str = "bad_request"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(AppError):
    status_code = 400
    code = "validation_error"


class AuthenticationRequired(AppError):
    status_code = 401
    code = "unauthorized"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class PermissionDenied(AppError):
    status_code = 403
    code = "forbidden"

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)


class NotFound(AppError):
    status_code = 404
    code = "not_found"


class Conflict(AppError):
    status_code = 409
    code = "conflict"


class RateLimited(AppError):
    status_code = 429
    code = "rate_limit_exceeded"

    def __init__(self, message: str = "Too many requests. Please try again later.") -> None:
        super().__init__(message)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def app_error(err: AppError):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def pydantic_error(err: ValidationError):
        details = [
            {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
            for e in err.errors()
        ]
        return jsonify({"error": "validation_error", "message": "Validation failed", "details": details}), 400

    @app.errorhandler(400)
    def bad_request(err: Exception):  # type: ignore[override]
        return jsonify({"error": "bad_request", "message": str(err)}), 400

    @app.errorhandler(404)
    def not_found(err: Exception):  # type: ignore[override]
        return jsonify({"error": "not_found", "message": str(err)}), 404

    @app.errorhandler(405)
    def method_not_allowed(err: Exception):  # type: ignore[override]
        return jsonify({"error": "method_not_allowed", "message": str(err)}), 405

    @app.errorhandler(422)
    def unprocessable(err: Exception):  # type: ignore[override]
        return jsonify({"error": "unprocessable_entity", "message": str(err)}), 422

    @app.errorhandler(Exception)
    def internal(err: Exception):  # type: ignore[override]
        if isinstance(err, HTTPException):
            return jsonify({"error": err.name.lower().replace(" ", "_"), "message": err.description}), err.code
        logger.exception("Unhandled error: {}", err)
        return jsonify({"error": "internal_server_error", "message": "unexpected error"}), 500


def ok(data: Any, status: int = 200):
    return jsonify({"data": data}), status
