"""
Sinusoidal camera shake.

Horizontal motion follows a sine and vertical motion a cosine of the frame
index, so with a sync factor of 1 the camera traces an ellipse (a circle
when the H/V ratio is 1). Every frame is computed from its index alone.
"""
import math
from typing import Iterator, NamedTuple, Tuple

from .geometry import Rectangle
from .parameters import ShakeParameters


class FrameTransform(NamedTuple):
    """Scale (about the bounds' center) then translation for one frame."""

    index: int
    scale_x: float
    scale_y: float
    dx: float
    dy: float

    def to_dict(self) -> dict:
        return self._asdict()


def compute_scale_margin(
    rectangle: Rectangle,
    amplitude: float,
    xy_ratio: float,
) -> Tuple[float, float]:
    """
    Scale factors that shrink the bounds inward by the displacement.

    Scaled about its center, the rectangle loses ``amplitude * xy_ratio``
    pixels on the left and right sides and ``amplitude`` pixels on the top
    and bottom, which is the room the translation moves within.

    Args:
        rectangle: Current pan/crop bounds
        amplitude: Vertical displacement in pixels
        xy_ratio: Horizontal displacement as a multiple of vertical

    Returns:
        Tuple of (horizontal scale, vertical scale)
    """
    width = rectangle.width
    height = rectangle.height
    scale_x = (width - 2 * amplitude * xy_ratio) / width
    scale_y = (height - 2 * amplitude) / height
    return scale_x, scale_y


def compute_translation(n: int, parameters: ShakeParameters) -> Tuple[float, float]:
    """Displacement of frame ``n`` (0-based)."""
    dx = math.sin(math.radians(n * parameters.speed)) * parameters.amplitude * parameters.xy_ratio
    dy = math.cos(math.radians(n * parameters.speed * parameters.sync_factor)) * parameters.amplitude
    return dx, dy


def is_degenerate(rectangle: Rectangle, parameters: ShakeParameters) -> bool:
    """True if the zoom-in margin would leave no positive width or height."""
    return (
        rectangle.width <= 2 * parameters.horizontal_amplitude
        or rectangle.height <= 2 * parameters.amplitude
    )


class ShakeSequence:
    """
    Lazy, restartable sequence of per-frame transforms.

    Nothing is stored but the inputs; each item is evaluated on access, so
    iterating twice yields identical transforms.
    """

    def __init__(self, frame_count: int, parameters: ShakeParameters, rectangle: Rectangle):
        if frame_count < 0:
            raise ValueError(f"frame_count must be >= 0, got {frame_count}")
        self.frame_count = frame_count
        self.parameters = parameters
        self.rectangle = rectangle
        self.scale = compute_scale_margin(rectangle, parameters.amplitude, parameters.xy_ratio)

    def __len__(self) -> int:
        return self.frame_count

    def __getitem__(self, index: int) -> FrameTransform:
        if index < 0:
            index += self.frame_count
        if not 0 <= index < self.frame_count:
            raise IndexError("frame index out of range")
        dx, dy = compute_translation(index, self.parameters)
        return FrameTransform(index, self.scale[0], self.scale[1], dx, dy)

    def __iter__(self) -> Iterator[FrameTransform]:
        for index in range(self.frame_count):
            yield self[index]

    def __repr__(self) -> str:
        return f"ShakeSequence(frame_count={self.frame_count}, parameters={self.parameters!r})"


def generate(
    frame_count: int,
    parameters: ShakeParameters,
    initial_rectangle: Rectangle,
) -> ShakeSequence:
    """
    Transforms for frames ``0..frame_count-1``.

    The scale margin is constant, derived from ``initial_rectangle``; the
    translation varies per frame.
    """
    return ShakeSequence(frame_count, parameters, initial_rectangle)
