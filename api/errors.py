from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
import logging

logger = logging.getLogger(__name__)

# HTTP status -> envelope error code
ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def classify_integrity_error(err: IntegrityError) -> tuple:
    """Map an engine constraint violation to (error code, message, HTTP status)."""
    lower_msg = str(getattr(err, "orig", err)).lower()
    # SQLite: "UNIQUE constraint failed", PostgreSQL: "duplicate key value",
    # MySQL: "Duplicate entry"
    if "unique" in lower_msg or "duplicate" in lower_msg:
        return "CONFLICT", "Unique constraint violated.", 409
    if "foreign key" in lower_msg:
        return "BAD_REQUEST", "Foreign key constraint failed.", 400
    if "not null" in lower_msg or "cannot be null" in lower_msg or "null value" in lower_msg:
        return "BAD_REQUEST", "Required column missing.", 400
    if "check constraint" in lower_msg or "constraint failed" in lower_msg:
        return "BAD_REQUEST", "Check constraint failed.", 400
    return "BAD_REQUEST", "Integrity error.", 400


def _log_if_debug(err):
    if current_app and current_app.debug:
        logger.exception("Request failed", exc_info=err)


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # abort(400, description=...) and every other werkzeug error
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        _log_if_debug(err)
        status = err.code or 400
        return error_response(ERROR_CODES.get(status, "BAD_REQUEST"), err.description, status)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        _log_if_debug(err)
        return error_response("VALIDATION_ERROR", "Invalid input", 422, details=err.messages)

    # Unique / FK / NOT NULL / CHECK violations; DBStorage.save() has rolled back already
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        _log_if_debug(err)
        code, message, status = classify_integrity_error(err)
        return error_response(code, message, status, details={"db_error": str(getattr(err, "orig", err))})

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        logger.error("Database unavailable: %s", err.orig)
        return error_response("SERVICE_UNAVAILABLE", "Database unavailable", 503)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
