"""Dashboard entry point: ``python -m weathersphere``."""

import argparse
import logging
import signal
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import __version__
from .app import WeatherApp
from .models.config import DashboardConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = Path("logs") / "weathersphere.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def setup_logging(level: str, log_file: Path = LOG_FILE) -> None:
    """Log to stderr, and to a rotating file when the log directory is writable."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
            )
        )
    except OSError as e:
        print(f"File logging disabled: {e}", file=sys.stderr)

    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, handlers=handlers)


def exit_on_signals(app: WeatherApp) -> None:
    """Ask the app to exit on SIGINT/SIGTERM instead of dying mid-render."""

    def handle(signum: int, frame: object) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, closing dashboard")
        app.exit()

    signal.signal(signal.SIGINT, handle)
    signal.signal(signal.SIGTERM, handle)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weathersphere",
        description="WeatherSphere - terminal weather dashboard with offline cache and advice",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.json"),
        help="Dashboard config file (default: config.json)",
    )
    parser.add_argument("--city", help="Show this city first instead of the saved location")
    parser.add_argument("--api", help="Override the API base URL from the config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-V", "--version", action="version", version=f"WeatherSphere v{__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    config = DashboardConfig.load_or_default(args.config)
    if args.api:
        config = DashboardConfig.model_validate({**config.model_dump(), "api_base": args.api})

    setup_logging("DEBUG" if args.verbose else config.log_level)
    if not args.config.exists():
        logger.info(f"No config at {args.config}, using defaults")
    logger.info(f"Starting WeatherSphere dashboard against {config.api_base}")

    app = WeatherApp(config=config, initial_city=args.city)
    exit_on_signals(app)
    app.run()
    logger.info("WeatherSphere dashboard closed")


if __name__ == "__main__":
    main()
