import logging

from flask import jsonify

from hydroplan.errors import AppError
from hydroplan.extensions import db

logger = logging.getLogger(__name__)


def handle_app_error(error: AppError):
    db.session.rollback()
    if error.status >= 500:
        logger.error("[%s] %s", error.code, error.message)
    return jsonify({
        "error": error.message,
        "code": error.code,
        "details": error.details,
    }), error.status


def register_error_handlers(app):
    app.register_error_handler(AppError, handle_app_error)
