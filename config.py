import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Application configuration from environment variables."""

    # Service Configuration
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5000"))
    DEBUG = _env_bool("DEBUG", "false")

    # Datadog Configuration
    DD_SERVICE = os.getenv("DD_SERVICE", "camera-shake")
    DD_ENV = os.getenv("DD_ENV", "development")
    DD_VERSION = os.getenv("DD_VERSION", "1.0.0")

    # Shake defaults (pre-filled values of the settings form)
    SHAKE_SPEED = float(os.getenv("SHAKE_SPEED", "12"))
    SHAKE_SYNC_FACTOR = float(os.getenv("SHAKE_SYNC_FACTOR", "1.5"))
    SHAKE_AMPLITUDE = float(os.getenv("SHAKE_AMPLITUDE", "4"))  # pixels
    SHAKE_XY_RATIO = float(os.getenv("SHAKE_XY_RATIO", "2.5"))
    SHAKE_RESET_PAN = _env_bool("SHAKE_RESET_PAN", "false")
    SHAKE_CLEAR_FRAMES = _env_bool("SHAKE_CLEAR_FRAMES", "true")

    # Preview Configuration
    PREVIEW_WIDTH = int(os.getenv("PREVIEW_WIDTH", "320"))  # output width in pixels
    PREVIEW_FRAME_DURATION = int(os.getenv("PREVIEW_FRAME_DURATION", "40"))  # milliseconds per frame
    PREVIEW_DEFAULT_FRAMES = int(os.getenv("PREVIEW_DEFAULT_FRAMES", "30"))
    PREVIEW_MAX_FRAMES = int(os.getenv("PREVIEW_MAX_FRAMES", "120"))

    # Accepted image uploads for preview
    PREVIEW_IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]
