"""Process-wide logging: console plus a rotating file under ``settings.log_dir``."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Chatty at INFO; only their warnings are useful here
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "apscheduler.executors.default")


def _log_dir() -> Path:
    if settings.log_dir:
        return Path(settings.log_dir)
    return Path(__file__).resolve().parent.parent / "logs"


def configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if settings.log_to_file:
        log_dir = _log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_dir / "tripdesk.log",
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        ))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", handlers=handlers)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
