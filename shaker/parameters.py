"""
Shake parameters and settings form parsing.
"""
import math
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional

from config import Config
from .errors import InputValidationError


@dataclass(frozen=True)
class ShakeParameters:
    """The six tunables confirmed on the settings form."""

    speed: float = Config.SHAKE_SPEED  # degrees of phase per frame
    sync_factor: float = Config.SHAKE_SYNC_FACTOR
    amplitude: float = Config.SHAKE_AMPLITUDE  # pixels
    xy_ratio: float = Config.SHAKE_XY_RATIO
    reset_pan_on_first_frame: bool = Config.SHAKE_RESET_PAN
    clear_existing_keyframes: bool = Config.SHAKE_CLEAR_FRAMES

    @property
    def horizontal_amplitude(self) -> float:
        return self.amplitude * self.xy_ratio

    def with_changes(self, **changes) -> "ShakeParameters":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "speed": self.speed,
            "sync_factor": self.sync_factor,
            "amplitude": self.amplitude,
            "xy_ratio": self.xy_ratio,
            "reset_pan": self.reset_pan_on_first_frame,
            "clear_frames": self.clear_existing_keyframes,
        }


# Form field -> (dataclass attribute, label, tooltip)
NUMERIC_FIELDS = {
    "speed": (
        "speed",
        "Shake speed",
        "Lower values for slower camera movement.",
    ),
    "sync_factor": (
        "sync_factor",
        "H/V synchronicity",
        "Changes the relative vertical speed. Set to 1 to move in a circle.",
    ),
    "amplitude": (
        "amplitude",
        "Pixels to displace",
        "Number of pixels the camera will shift away from the center. "
        "It is also the margin of zoom-in.",
    ),
    "xy_ratio": (
        "xy_ratio",
        "H/V ratio of displacement",
        "Multiply horizontal distance. Values above 1 will produce a greater zoom-in.",
    ),
}

CHECKBOX_FIELDS = {
    "reset_pan": (
        "reset_pan_on_first_frame",
        "Reset Pan/Crop on first frame",
        "Leave unchecked to shake within the current video zoom.",
    ),
    "clear_frames": (
        "clear_existing_keyframes",
        "Reset all frames before shaking.",
        "Leave unchecked to multiply the new shake effect with a previous shake effect.",
    ),
}

_TRUE_VALUES = {"on", "true", "yes", "1"}
_FALSE_VALUES = {"off", "false", "no", "0", ""}

# Fields that size the zoom-in margin; zero or negative would zoom out
_POSITIVE_FIELDS = ("amplitude", "xy_ratio")


def _parse_number(field: str, value: Any) -> float:
    # bool is an int subclass; a checkbox value in a numeric field is a form bug
    if isinstance(value, bool):
        raise InputValidationError(f"Invalid parameter! {field}: expected a number, got {value!r}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise InputValidationError(f"Invalid parameter! {field}: '{value}' is not a number")
    if not math.isfinite(number):
        raise InputValidationError(f"Invalid parameter! {field}: '{value}' is not a finite number")
    return number


def parse_checkbox(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InputValidationError(f"Invalid parameter! {field}: '{value}' is not a checkbox value")


def parse_settings(
    form: Optional[Mapping[str, Any]],
    defaults: Optional[ShakeParameters] = None,
) -> ShakeParameters:
    """
    Parse the settings form into ShakeParameters.

    Numeric fields are free text (or numbers from a JSON body); missing
    fields keep their default value.

    Args:
        form: Mapping of form field name to raw value
        defaults: Values used for missing fields (default from config)

    Returns:
        Validated ShakeParameters

    Raises:
        InputValidationError: If any field fails to parse, amplitude or
            xy_ratio is not positive, or speed is negative
    """
    defaults = defaults or ShakeParameters()
    form = form or {}
    if not isinstance(form, Mapping):
        raise InputValidationError("Invalid parameter! settings must be an object")

    changes = {}
    for field, (attribute, _label, _tooltip) in NUMERIC_FIELDS.items():
        if field in form:
            changes[attribute] = _parse_number(field, form[field])
    for field, (attribute, _label, _tooltip) in CHECKBOX_FIELDS.items():
        if field in form:
            changes[attribute] = parse_checkbox(field, form[field])

    parameters = defaults.with_changes(**changes)
    for field in _POSITIVE_FIELDS:
        if getattr(parameters, field) <= 0:
            raise InputValidationError(f"Invalid parameter! {field}: must be positive")
    if parameters.speed < 0:
        raise InputValidationError("Invalid parameter! speed: must not be negative")
    return parameters


def build_settings_form(defaults: Optional[ShakeParameters] = None) -> List[dict]:
    """Describe the "Camera Shake Settings" form with its pre-filled values."""
    defaults = defaults or ShakeParameters()
    fields = []
    for field, (attribute, label, tooltip) in NUMERIC_FIELDS.items():
        fields.append({
            "name": field,
            "type": "text",
            "label": label,
            "tooltip": tooltip,
            "value": f"{getattr(defaults, attribute):g}",
        })
    for field, (attribute, label, tooltip) in CHECKBOX_FIELDS.items():
        fields.append({
            "name": field,
            "type": "checkbox",
            "label": label,
            "tooltip": tooltip,
            "value": getattr(defaults, attribute),
        })
    return fields
