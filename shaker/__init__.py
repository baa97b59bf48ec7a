from .base import ClipShaker
from .errors import (
    DegenerateGeometryError,
    ErrorCategory,
    InputValidationError,
    NoSelectionError,
    PreviewError,
    ShakeError,
    make_error_response,
)
from .geometry import Rectangle, Vertex
from .motion import FrameTransform, ShakeSequence, compute_scale_margin, compute_translation, generate
from .parameters import ShakeParameters, build_settings_form, parse_settings
from .preview import PreviewRenderer
from .timeline import Keyframe, Project, Track, VideoEvent

__all__ = [
    "ClipShaker",
    "ShakeParameters",
    "parse_settings",
    "build_settings_form",
    "Rectangle",
    "Vertex",
    "FrameTransform",
    "ShakeSequence",
    "compute_scale_margin",
    "compute_translation",
    "generate",
    "Keyframe",
    "VideoEvent",
    "Track",
    "Project",
    "PreviewRenderer",
    "ShakeError",
    "InputValidationError",
    "NoSelectionError",
    "DegenerateGeometryError",
    "PreviewError",
    "ErrorCategory",
    "make_error_response",
]
