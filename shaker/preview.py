"""
Preview rendering.
Plays a clip's pan/crop keyframes over a still image as an animated GIF.
"""
import io
import logging
from typing import List, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from config import Config
from .errors import PreviewError
from .timeline import Keyframe

logger = logging.getLogger(__name__)


class PreviewRenderer:
    """Renders what the camera sees at each keyframe."""

    def __init__(
        self,
        width: int = None,
        frame_duration: int = None,
        max_frames: int = None,
    ):
        """
        Initialize renderer.

        Args:
            width: Output width in pixels (default from config)
            frame_duration: Milliseconds per GIF frame (default from config)
            max_frames: Keyframes rendered at most (default from config)
        """
        self.width = width or Config.PREVIEW_WIDTH
        self.frame_duration = frame_duration or Config.PREVIEW_FRAME_DURATION
        self.max_frames = max_frames or Config.PREVIEW_MAX_FRAMES

    def output_size(self, image: Image.Image) -> Tuple[int, int]:
        source_width, source_height = image.size
        return self.width, max(1, round(self.width * source_height / source_width))

    def render(self, image: Image.Image, keyframes: Sequence[Keyframe]) -> List[Image.Image]:
        """
        Map each keyframe's bounds onto a full output frame.

        Args:
            image: Still image standing in for the clip's media
            keyframes: Keyframes in playback order

        Returns:
            One RGB frame per keyframe (up to max_frames)
        """
        if image.mode != "RGB":
            image = image.convert("RGB")

        size = self.output_size(image)
        frames = []
        for key in keyframes[:self.max_frames]:
            top_left, top_right, bottom_right, bottom_left = key.bounds
            # QUAD wants upper-left, lower-left, lower-right, upper-right
            quad = (
                top_left.x, top_left.y,
                bottom_left.x, bottom_left.y,
                bottom_right.x, bottom_right.y,
                top_right.x, top_right.y,
            )
            frames.append(image.transform(size, Image.Transform.QUAD, quad, resample=Image.Resampling.BILINEAR))

        logger.info(f"[PREVIEW] Rendered {len(frames)} frames at {size[0]}x{size[1]}")
        return frames

    def to_gif(self, frames: List[Image.Image]) -> Tuple[bytes, str]:
        """Save frames as looping animated GIF bytes."""
        if not frames:
            raise PreviewError("Nothing to render: the clip has no keyframes")

        buffer = io.BytesIO()
        converted_frames = [
            frame.convert("P", palette=Image.Palette.ADAPTIVE, colors=256)
            for frame in frames
        ]
        converted_frames[0].save(
            buffer,
            format="GIF",
            save_all=True,
            append_images=converted_frames[1:],
            duration=self.frame_duration,
            loop=0,
            optimize=True,
        )
        return buffer.getvalue(), "gif"

    def render_bytes(self, image_data: bytes, keyframes: Sequence[Keyframe]) -> Tuple[bytes, str]:
        """Decode, render and encode in one step."""
        image = open_image(image_data)
        return self.to_gif(self.render(image, keyframes))


def open_image(image_data: bytes) -> Image.Image:
    """
    Decode an uploaded still image.

    Raises:
        PreviewError: If the bytes are not a readable image
    """
    try:
        image = Image.open(io.BytesIO(image_data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise PreviewError(f"Cannot read image: {e}") from e
    return image
