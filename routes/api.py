"""REST API endpoints."""

import base64
import logging
import os

from flask import Blueprint, jsonify, request
from ddtrace import tracer

from config import Config
from shaker import (
    ClipShaker,
    ErrorCategory,
    InputValidationError,
    PreviewRenderer,
    Project,
    Rectangle,
    ShakeError,
    Track,
    VideoEvent,
    build_settings_form,
    make_error_response,
    parse_settings,
)
from shaker.preview import open_image

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

ERROR_STATUS = {
    ErrorCategory.INPUT_VALIDATION: 400,
    ErrorCategory.NO_SELECTION: 404,
    ErrorCategory.DEGENERATE_GEOMETRY: 422,
    ErrorCategory.PREVIEW_FAILED: 400,
}


def _error_response(error: ShakeError):
    status = ERROR_STATUS.get(error.category, 500)
    logger.warning(f"[API] {error.category.value}: {error}")
    return jsonify(make_error_response(error)), status


def _parse_frame_count(value, limit: int = None) -> int:
    """Parse a positive frame count, optionally capped at ``limit``."""
    # JSON true would pass int(); 2.9 would truncate
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InputValidationError(f"Invalid parameter! frame_count: '{value}' is not an integer")
    try:
        frame_count = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InputValidationError(f"Invalid parameter! frame_count: '{value}' is not an integer")
    if frame_count <= 0:
        raise InputValidationError(f"Invalid parameter! frame_count must be positive, got {frame_count}")
    if limit is not None:
        frame_count = min(frame_count, limit)
    return frame_count


def _parse_bounds(data: dict) -> Rectangle:
    """Bounds from ``bounds`` corners, or a full frame from ``width``/``height``."""
    try:
        if "bounds" in data:
            return Rectangle.from_dict(data["bounds"])
        width, height = float(data["width"]), float(data["height"])
    except KeyError:
        raise InputValidationError("Either 'bounds' or 'width' and 'height' is required")
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"Invalid bounds: {e}")
    if width <= 0 or height <= 0:
        raise InputValidationError("width and height must be positive")
    return Rectangle.full_frame(width, height)


def _tag_span(parameters, **tags):
    span = tracer.current_span()
    if span:
        for key, value in parameters.to_dict().items():
            span.set_tag(f"shake.{key}", value)
        for key, value in tags.items():
            span.set_tag(f"shake.{key}", value)


@api_bp.route("/api/settings", methods=["GET"])
@tracer.wrap(service="camera-shake", resource="api.settings")
def api_settings():
    """Fields of the settings form with their default values."""
    return jsonify({"title": "Camera Shake Settings", "fields": build_settings_form()})


@api_bp.route("/api/transforms", methods=["POST"])
@tracer.wrap(service="camera-shake", resource="api.transforms")
def api_transforms():
    """Per-frame scale and translation for a clip, without a timeline."""
    logger.info(f"[API] /api/transforms request - IP: {request.remote_addr}")

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "frame_count" not in data:
            logger.warning("[API] Bad request - frame_count missing")
            return jsonify({"error": "frame_count is required"}), 400

        parameters = parse_settings(data.get("settings"))
        frame_count = _parse_frame_count(data["frame_count"])
        rectangle = _parse_bounds(data)
        _tag_span(parameters, frame_count=frame_count)

        transforms = ClipShaker().transforms_for(frame_count, parameters, rectangle)

        logger.info(f"[API] Transforms computed - frames: {len(transforms)}")
        return jsonify({
            "success": True,
            "settings": parameters.to_dict(),
            "transforms": [transform.to_dict() for transform in transforms],
        })

    except ShakeError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"[API] Transform error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@api_bp.route("/api/shake", methods=["POST"])
@tracer.wrap(service="camera-shake", resource="api.shake")
def api_shake():
    """Shake the selected clip of a project and return the updated project."""
    logger.info(f"[API] /api/shake request - IP: {request.remote_addr}")

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "project" not in data:
            logger.warning("[API] Bad request - project missing")
            return jsonify({"error": "project is required"}), 400

        # Settings are parsed before the timeline is touched
        parameters = parse_settings(data.get("settings"))
        project = Project.from_dict(data["project"])

        event = ClipShaker().shake_project(project, parameters)
        _tag_span(parameters, event=event.name, keyframes=len(event.keyframes))

        logger.info(f"[API] Shake complete - event: '{event.name}', keyframes: {len(event.keyframes)}")
        return jsonify({
            "success": True,
            "event": event.name,
            "keyframe_count": len(event.keyframes),
            "project": project.to_dict(),
        })

    except ShakeError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"[API] Shake error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@api_bp.route("/api/preview", methods=["POST"])
@tracer.wrap(service="camera-shake", resource="api.preview")
def api_preview():
    """Shake a still image as if it were a clip and return an animated GIF."""
    logger.info(f"[API] /api/preview request - IP: {request.remote_addr}")

    try:
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            logger.warning("[API] Bad request - image missing")
            return jsonify({"error": "image is required"}), 400

        extension = os.path.splitext(upload.filename)[1].lstrip(".").lower()
        if extension not in Config.PREVIEW_IMAGE_TYPES:
            return jsonify({"error": f"unsupported image type '{extension}'"}), 400

        form = request.form.to_dict()
        frame_count = _parse_frame_count(
            form.pop("frame_count", Config.PREVIEW_DEFAULT_FRAMES),
            limit=Config.PREVIEW_MAX_FRAMES,
        )
        parameters = parse_settings(form)
        image = open_image(upload.read())

        width, height = image.size
        event = VideoEvent(
            name=upload.filename,
            length=frame_count,
            width=width,
            height=height,
            selected=True,
        )
        ClipShaker().shake_project(Project([Track(events=[event])]), parameters)
        _tag_span(parameters, frame_count=frame_count)

        renderer = PreviewRenderer()
        image_bytes, ext = renderer.to_gif(renderer.render(image, event.keyframes))

        logger.info(f"[API] Preview complete - format: {ext}, size: {len(image_bytes)} bytes")
        return jsonify({
            "success": True,
            "image": base64.b64encode(image_bytes).decode("utf-8"),
            "format": ext,
            "frames": min(frame_count, renderer.max_frames),
        })

    except ShakeError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"[API] Preview error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500
