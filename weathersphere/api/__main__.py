"""Entry point for running the API server: ``python -m weathersphere.api``."""

import argparse
import logging
import sys

import uvicorn

from .. import __version__
from ..exceptions import ConfigurationError
from .app import create_app
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "info") -> None:
    """Configure process-wide logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def check_configuration(settings: Settings) -> None:
    """Validate startup configuration.

    A missing provider key is fatal outside production. In production the
    server still starts and answers 500 per request.

    Raises:
        ConfigurationError: If the key is missing in a non-production environment.
    """
    if settings.has_api_key:
        return
    if settings.is_production:
        logger.warning("OWM_API_KEY is not set; weather routes will answer 500")
        return
    raise ConfigurationError("Please set OWM_API_KEY in the environment or .env file")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="WeatherSphere API - OpenWeatherMap proxy server")
    parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT or 5000)")
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    args = parser.parse_args(argv)

    if args.version:
        print(f"WeatherSphere API v{__version__}")
        sys.exit(0)

    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        check_configuration(settings)
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    host = args.host or settings.host
    port = args.port or settings.port

    logger.info("WeatherSphere Backend Server")
    logger.info(f"Server running on http://{host}:{port} (API at /api)")
    logger.info(f"API key configured: {'yes' if settings.has_api_key else 'no'}")

    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
