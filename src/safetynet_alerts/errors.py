"""
errors.py
----------
The closed set of business failures raised by the update protocol, and the
Flask error handlers that turn them (and request/validation errors) into JSON
error responses:

    {"type": "SERVICE", "status": 409, "code": "INTERFERING_NAMES", "message": "..."}
"""

import logging
from enum import Enum

from flask import jsonify
from jsonschema import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Every business failure the protocol can report."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INTERFERING_NAMES = "INTERFERING_NAMES"
    INTERFERING_ADDRESS = "INTERFERING_ADDRESS"
    IMMUTABLE_NAMES = "IMMUTABLE_NAMES"
    IMMUTABLE_ADDRESS = "IMMUTABLE_ADDRESS"
    PERSON_NOT_FOUND = "PERSON_NOT_FOUND"


# kind -> (HTTP status, error type, error code)
ERROR_RESPONSES = {
    ErrorKind.NOT_FOUND: (404, "SERVICE", "NOT_FOUND"),
    ErrorKind.ALREADY_EXISTS: (409, "SERVICE", "ALREADY_EXISTS"),
    ErrorKind.INTERFERING_NAMES: (409, "SERVICE", "INTERFERING_NAMES"),
    ErrorKind.INTERFERING_ADDRESS: (409, "SERVICE", "INTERFERING_ADDRESS"),
    ErrorKind.IMMUTABLE_NAMES: (400, "CLIENT", "BAD_REQUEST"),
    ErrorKind.IMMUTABLE_ADDRESS: (400, "CLIENT", "BAD_REQUEST"),
    ErrorKind.PERSON_NOT_FOUND: (404, "SERVICE", "NOT_FOUND"),
}


class ServiceError(Exception):
    """
    A business rule refused the operation.
    Callers branch on .kind; .message is for humans only.
    """

    def __init__(self, kind: ErrorKind, message: str = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    def __repr__(self):
        return f"ServiceError({self.kind.name}, {self.message!r})"


class InvalidRequest(Exception):
    """A query parameter or a body field failed validation (400 VALIDATION_FAILED)."""

    def __init__(self, message, parameter=None, constraint=None):
        self.message = message
        self.parameter = parameter
        self.constraint = constraint
        super().__init__(message)


def error_response(status, error_type, code, message, metadata=None):
    """Build the JSON error body and its status code."""
    body = {"type": error_type, "status": status, "code": code, "message": message}
    if metadata:
        body["metadata"] = metadata
    return jsonify(body), status


def validation_failed(message, parameter=None, constraint=None):
    """400 VALIDATION_FAILED, e.g. for a missing query parameter or a bad body field."""
    metadata = {}
    if parameter:
        message = f"{parameter} {message}"
        metadata["parameter"] = parameter
    if constraint:
        metadata["constraint"] = constraint
    return error_response(400, "CLIENT", "VALIDATION_FAILED", "Validation failed: " + message, metadata)


def register_error_handlers(app):
    """Install the JSON error handlers on a Flask app."""

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        status, error_type, code = ERROR_RESPONSES[error.kind]
        return error_response(status, error_type, code, error.message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        parameter = ".".join(str(p) for p in error.absolute_path) or "body"
        return validation_failed(error.message, parameter, error.validator)

    @app.errorhandler(InvalidRequest)
    def handle_invalid_request(error):
        return validation_failed(error.message, error.parameter, error.constraint)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        # malformed JSON, unknown routes, unsupported methods, ...
        return error_response(error.code, "CLIENT", "BAD_REQUEST", error.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled request exception")
        return error_response(
            500, "UNKNOWN", "SERVER_EXCEPTION",
            f"Internal server error ({type(error).__name__})",
        )
