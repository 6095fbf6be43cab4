from datetime import datetime, timezone

from flask import jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500
    default_message = 'An internal server error occurred. Please try again later.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Invalid request'


class Unauthenticated(ApiError):
    status_code = 401
    default_message = 'Authentication required'


class Forbidden(ApiError):
    status_code = 403
    default_message = "You do not have access to this player's resources"


class NotFound(ApiError):
    status_code = 404
    default_message = 'Resource not found'


class Conflict(ApiError):
    # Duplicate usernames/emails are reported as a bad request
    status_code = 400
    default_message = 'Resource already exists'


class Internal(ApiError):
    status_code = 500


def _internal_error_body():
    return {
        'error': Internal.default_message,
        'statusCode': 500,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }


def register_error_handlers(flask_app):
    from gameapi import db

    @flask_app.errorhandler(ApiError)
    def handle_api_error(exc):
        if exc.status_code >= 500:
            flask_app.logger.error(f"[error] {exc.message}")
            db.session.rollback()
            return jsonify(_internal_error_body()), 500
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected(exc):
        flask_app.logger.exception(f"[error] unhandled {type(exc).__name__}")
        db.session.rollback()
        return jsonify(_internal_error_body()), 500
