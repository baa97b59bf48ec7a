"""Flask route handlers for the camera shake service."""

import logging

from flask import jsonify

from .health import health_bp
from .api import api_bp

logger = logging.getLogger(__name__)


def not_found(error):
    return jsonify({"error": "Not found"}), 404


def method_not_allowed(error):
    return jsonify({"error": "Method not allowed"}), 405


def internal_error(error):
    logger.error(f"Internal error: {error}", exc_info=True)
    return jsonify({"error": "Internal server error"}), 500


def register_routes(app):
    """
    Register blueprints and JSON error handlers on the given Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp)
    app.register_error_handler(404, not_found)
    app.register_error_handler(405, method_not_allowed)
    app.register_error_handler(500, internal_error)


__all__ = [
    "register_routes",
    "health_bp",
    "api_bp",
]
