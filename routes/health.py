"""Health check endpoint."""

import logging

from flask import Blueprint, jsonify, request

from config import Config

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint for Docker/Kubernetes."""
    logger.debug(f"[HEALTH] Health check - IP: {request.remote_addr}")
    return jsonify({
        "status": "healthy",
        "service": Config.DD_SERVICE,
        "version": Config.DD_VERSION,
    })
