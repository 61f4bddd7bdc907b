"""
Log output for the bot, the CLI and the protocol client.

Everything logs under the "craftbot" namespace. The console shows the level
name coloured; an optional log file gets plain records with the calling
function and line.
"""

import logging
import sys
from pathlib import Path

from craftbot.config.settings import Settings

ROOT_LOGGER = "craftbot"

_DATEFMT = "%Y-%m-%d %H:%M:%S"
_CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter; wraps the level name in an ANSI colour."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Colour a copy; other handlers share the original record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(settings: Settings) -> None:
    """
    Attach console (and, if settings.log_file is set, file) handlers to the
    craftbot logger. Safe to call again: previous handlers are replaced.
    """
    level = getattr(logging, settings.log_level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColoredFormatter(fmt=_CONSOLE_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(console)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        to_file = logging.FileHandler(log_path)
        to_file.setLevel(level)
        to_file.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(to_file)

    logger.info(f"Log level {settings.log_level}")
    if settings.log_file:
        logger.info(f"Writing log file {settings.log_file}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for `name`, placed under the craftbot namespace."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
