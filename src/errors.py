import logging
from flask import jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from localization import get_message, request_lang
from src.extensions import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An expected failure mapped to an HTTP status and a localized message."""
    status_code = 400

    def __init__(self, message_key, **params):
        super().__init__(message_key)
        self.message_key = message_key
        self.params = params

    def to_body(self, lang):
        return {"error": get_message(self.message_key, lang, **self.params)}


class BadRequest(ApiError):
    status_code = 400


class ValidationFailed(ApiError):
    status_code = 400

    def __init__(self, errors):
        super().__init__("validation_failed")
        self.errors = list(errors)

    def to_body(self, lang):
        return {"error": self.errors}


class Unauthorized(ApiError):
    status_code = 401

    def __init__(self):
        super().__init__("unauthorized")


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_body(request_lang())), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        lang = request_lang()
        if error.code == 404:
            message = get_message("route_not_found", lang)
        elif error.code == 405:
            message = get_message("method_not_allowed", lang)
        else:
            message = error.description
        return jsonify({"error": message}), error.code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        # concurrent duplicates and rows still referenced elsewhere
        logger.warning("Integrity error: %s", error.orig)
        db.session.rollback()
        return jsonify({"error": get_message("record_conflict", request_lang())}), 409

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error while processing request: %s", error)
        db.session.rollback()
        return jsonify({"error": get_message("server_error", request_lang())}), 500
