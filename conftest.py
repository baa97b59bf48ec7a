"""Shared test fixtures for the camera shake service."""

import io
import os
import sys

# Keep Datadog quiet before anything imports ddtrace
os.environ.setdefault("DD_TRACE_ENABLED", "false")

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest
from flask import Flask
from PIL import Image

from routes import register_routes
from shaker import Keyframe, Project, Rectangle, ShakeParameters, Track, VideoEvent


@pytest.fixture
def client():
    """Flask test client with all routes registered."""
    flask_app = Flask(__name__)
    flask_app.config["TESTING"] = True
    register_routes(flask_app)
    with flask_app.test_client() as test_client:
        yield test_client


@pytest.fixture
def params():
    return ShakeParameters(
        speed=12,
        sync_factor=1.5,
        amplitude=4,
        xy_ratio=2.5,
        reset_pan_on_first_frame=False,
        clear_existing_keyframes=True,
    )


@pytest.fixture
def clip():
    """A selected 1920x1080 clip, 10 frames long, zoomed in slightly."""
    return VideoEvent(
        name="clip",
        length=10,
        width=1920,
        height=1080,
        selected=True,
        keyframes=[Keyframe(0, Rectangle.full_frame(1920, 1080).scale_by(0.5, 0.5))],
    )


@pytest.fixture
def project(clip):
    return Project([
        Track(name="Audio", kind=Track.AUDIO, events=[{"name": "music", "selected": True}]),
        Track(name="Other", events=[VideoEvent("unselected", 10, 1920, 1080)]),
        Track(name="Main", events=[clip]),
    ])


@pytest.fixture
def png_bytes():
    """A 160x90 gradient PNG."""
    image = Image.new("RGB", (160, 90))
    image.putdata([(x * 255 // 160, y * 255 // 90, 128) for y in range(90) for x in range(160)])
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
