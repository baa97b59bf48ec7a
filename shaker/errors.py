"""Error categories and exceptions raised while shaking a clip."""

from enum import Enum


class ErrorCategory(str, Enum):
    """Categories of errors surfaced to the user."""

    INPUT_VALIDATION = "INPUT_VALIDATION"
    NO_SELECTION = "NO_SELECTION"
    DEGENERATE_GEOMETRY = "DEGENERATE_GEOMETRY"
    PREVIEW_FAILED = "PREVIEW_FAILED"
    UNKNOWN = "UNKNOWN"


class ShakeError(Exception):
    """Base class for errors that abort a shake without touching keyframes."""

    category = ErrorCategory.UNKNOWN
    hint = "Unexpected error"


class InputValidationError(ShakeError):
    """A settings field or timeline payload could not be parsed."""

    category = ErrorCategory.INPUT_VALIDATION
    hint = "Check the settings form: numeric fields must be plain numbers"


class NoSelectionError(ShakeError):
    """No video event is selected in the project."""

    category = ErrorCategory.NO_SELECTION
    hint = "Select a clip on a video track before shaking"


class DegenerateGeometryError(ShakeError):
    """The zoom-in margin would collapse or invert a keyframe rectangle."""

    category = ErrorCategory.DEGENERATE_GEOMETRY
    hint = "Lower 'Pixels to displace' or the H/V ratio, or zoom out the clip"


class PreviewError(ShakeError):
    """The preview image could not be decoded or rendered."""

    category = ErrorCategory.PREVIEW_FAILED
    hint = "Upload a PNG, JPG, GIF or WEBP still image"


def make_error_response(error: Exception) -> dict:
    """Create a serialisable error payload from an exception."""
    if isinstance(error, ShakeError):
        category, hint = error.category, error.hint
    else:
        category, hint = ErrorCategory.UNKNOWN, str(error)
    return {
        "error": str(error),
        "category": category.value,
        "hint": hint,
    }
