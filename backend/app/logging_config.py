"""Process-wide logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_DIR_ENV = "LOG_DIR"
DATABASE_LOGGER = "backend.app.database"

LOGGER = logging.getLogger(__name__)


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure_logging() -> None:
    """Configure console logging and, when ``LOG_DIR`` is set, per-stream log files."""

    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in logging.getLogger().handlers:
        # keeps DEBUG statement records of the database logger off the console
        if type(handler) is logging.StreamHandler and handler.level == logging.NOTSET:
            handler.setLevel(level)

    # httpx logs every outbound request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    log_dir = os.getenv(LOG_DIR_ENV)
    if not log_dir:
        return

    directory = Path(log_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.error("Cannot create log directory %s: %s", directory, exc)
        return

    root = logging.getLogger()
    known = {getattr(handler, "baseFilename", None) for handler in root.handlers}

    info_path = directory / "info.log"
    error_path = directory / "error.log"
    if str(info_path.resolve()) not in known:
        root.addHandler(_file_handler(info_path, logging.INFO))
    if str(error_path.resolve()) not in known:
        root.addHandler(_file_handler(error_path, logging.ERROR))

    database_logger = logging.getLogger(DATABASE_LOGGER)
    database_path = directory / "database.log"
    if not any(
        getattr(handler, "baseFilename", None) == str(database_path.resolve())
        for handler in database_logger.handlers
    ):
        database_logger.addHandler(_file_handler(database_path, logging.DEBUG))
        database_logger.setLevel(logging.DEBUG)

    LOGGER.info("Writing log files to %s", directory.resolve())
