"""Tests for GIF preview rendering."""

import io

import pytest
from PIL import Image

from shaker import ClipShaker, Keyframe, PreviewError, PreviewRenderer, Rectangle, ShakeParameters, VideoEvent
from shaker.preview import open_image

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)

SHAKE = ShakeParameters(speed=30, sync_factor=1, amplitude=4, xy_ratio=2.5)


@pytest.fixture
def quadrants():
    """100x100 image: red, green on top; blue, white below."""
    image = Image.new("RGB", (100, 100), WHITE)
    image.paste(RED, (0, 0, 50, 50))
    image.paste(GREEN, (50, 0, 100, 50))
    image.paste(BLUE, (0, 50, 50, 100))
    return image


def _quadrant(left, top):
    return Keyframe(0, Rectangle.full_frame(50, 50).move_by(left, top))


class TestRender:
    def test_output_keeps_aspect_ratio(self, png_bytes):
        renderer = PreviewRenderer(width=320)
        image = open_image(png_bytes)
        assert renderer.output_size(image) == (320, 180)

    def test_bounds_select_what_the_camera_sees(self, quadrants):
        renderer = PreviewRenderer(width=40)
        frames = renderer.render(quadrants, [_quadrant(50, 0), _quadrant(0, 50)])
        assert len(frames) == 2
        assert frames[0].size == (40, 40)
        assert frames[0].getpixel((20, 20)) == GREEN
        assert frames[1].getpixel((20, 20)) == BLUE

    def test_max_frames(self, quadrants):
        renderer = PreviewRenderer(width=10, max_frames=3)
        keyframes = [_quadrant(0, 0) for _ in range(10)]
        assert len(renderer.render(quadrants, keyframes)) == 3

    def test_shaken_clip(self, png_bytes):
        image = open_image(png_bytes)
        event = VideoEvent("still", 12, image.width, image.height, selected=True)
        ClipShaker().shake_event(event, SHAKE)
        image_bytes, ext = PreviewRenderer(width=80).render_bytes(png_bytes, event.keyframes)
        assert ext == "gif"
        gif = Image.open(io.BytesIO(image_bytes))
        assert gif.size == (80, 45)
        assert gif.is_animated


class TestErrors:
    def test_unreadable_bytes(self):
        with pytest.raises(PreviewError):
            open_image(b"\x00\x01garbage")

    def test_empty_frames(self):
        with pytest.raises(PreviewError):
            PreviewRenderer().to_gif([])
