import logging

# Datadog APM - must be first
from ddtrace import patch_all, tracer
patch_all()

from flask import Flask

from config import Config
from routes import register_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if Config.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),  # Console output
    ]
)

# Set log levels for different modules
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("werkzeug").setLevel(logging.INFO)
logging.getLogger("PIL").setLevel(logging.WARNING)

# Suppress ddtrace verbose logging
logging.getLogger("ddtrace").setLevel(logging.WARNING)
logging.getLogger("ddtrace.tracer").setLevel(logging.WARNING)
logging.getLogger("ddtrace.internal").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Set Datadog tracer tags
tracer.set_tags({
    "env": Config.DD_ENV,
    "version": Config.DD_VERSION,
    "service": Config.DD_SERVICE,
})


def create_app() -> Flask:
    """Build the Flask app with all routes registered."""
    flask_app = Flask(__name__)
    register_routes(flask_app)
    return flask_app


app = create_app()


def main():
    logger.info("=" * 50)
    logger.info(f"{Config.DD_SERVICE} - Starting up on {Config.HOST}:{Config.PORT}")
    logger.info("=" * 50)
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)


if __name__ == "__main__":
    main()
