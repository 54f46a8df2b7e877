# Error taxonomy shared by the core and the HTTP layer
import logging

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class SocialError(Exception):
    """Base class for failures the core reports to its callers.

    ``kind`` is a stable identifier clients can switch on, ``message`` is the
    human readable reason.
    """
    kind = 'error'
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.kind, "message": self.message}


class InvalidArgument(SocialError):
    kind = 'invalid_argument'
    status_code = 400


class NotFound(SocialError):
    kind = 'not_found'
    status_code = 404


class Conflict(SocialError):
    kind = 'conflict'
    status_code = 409


class StorageFailure(SocialError):
    kind = 'storage_failure'
    status_code = 503


def _describe_validation_error(exc):
    first = exc.errors()[0]
    field = '.'.join(str(part) for part in first.get('loc', ())) or 'body'
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app):
    @app.errorhandler(SocialError)
    def handle_social_error(exc):
        if isinstance(exc, StorageFailure):
            logger.error("Storage failure: %s", exc.message, exc_info=exc.__cause__)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        error = InvalidArgument(_describe_validation_error(exc))
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        kind = 'not_found' if exc.code == 404 else 'http_error'
        return jsonify({"error": kind, "message": exc.description}), exc.code
