"""Error taxonomy and the Flask handlers that turn it into JSON responses.

Workflows raise these; routes never build error responses by hand.
"""
import logging

from flask import jsonify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class SkillSwapError(Exception):
    """Base class for every error the API reports to callers."""

    code = 'INTERNAL_ERROR'
    http_status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return {'message': self.message, 'code': self.code}


class NotFound(SkillSwapError):
    code = 'NOT_FOUND'
    http_status = 404

    def __init__(self, resource, resource_id):
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class Unauthorized(SkillSwapError):
    code = 'UNAUTHORIZED'
    http_status = 401

    def __init__(self, message='Invalid credentials'):
        super().__init__(message)


class Conflict(SkillSwapError):
    code = 'CONFLICT'
    http_status = 409


class ValidationFailure(SkillSwapError):
    code = 'VALIDATION_ERROR'
    http_status = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

    def to_response(self):
        response = super().to_response()
        if self.field:
            response['field'] = self.field
        return response


class StorageFailure(SkillSwapError):
    code = 'STORAGE_ERROR'
    http_status = 503

    def __init__(self, message='Storage is unavailable, try again later'):
        super().__init__(message)


def register_error_handlers(app):
    from skillswap import db

    @app.errorhandler(SkillSwapError)
    def handle_skillswap_error(exc):
        if exc.http_status >= 500:
            logger.error("%s: %s", exc.code, exc.message)
        else:
            logger.warning("%s: %s", exc.code, exc.message)
        return jsonify(exc.to_response()), exc.http_status

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(exc):
        db.session.rollback()
        logger.warning("Integrity constraint violated: %s", exc.orig)
        error = Conflict('Request conflicts with existing data')
        return jsonify(error.to_response()), error.http_status

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(exc):
        db.session.rollback()
        logger.error("Database failure: %s", exc, exc_info=True)
        error = StorageFailure()
        return jsonify(error.to_response()), error.http_status

    @app.errorhandler(500)
    def handle_unexpected_error(exc):
        # Unhandled exceptions reach here only outside testing; never echo them back
        logger.error("Unhandled exception: %s", getattr(exc, 'original_exception', exc))
        return jsonify({'message': 'An unexpected error occurred', 'code': SkillSwapError.code}), 500
