# gfilekit/utils/logger.py
"""
Logging for gfilekit.

Every module logs through a child of the "gfilekit" logger. Handlers live
on that one parent only: a console handler on stderr and, once file
logging is switched on, two rotating files under the config directory.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import List

PACKAGE_LOGGER = "gfilekit"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

CONSOLE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)-8s | %(funcName)s:%(lineno)d | %(message)s"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def get_log_dir() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / "gfilekit" / "logs"


class LevelColorFormatter(logging.Formatter):
    """Pads the level name to eight columns and colors it on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def __init__(self, fmt: str, datefmt: str, use_color: bool):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        # The record is shared with the file handlers, work on a copy
        shown = logging.makeLogRecord(record.__dict__)
        padding = " " * max(0, 8 - len(record.levelname))
        color = self.LEVEL_COLORS.get(record.levelno)
        if self.use_color and color:
            shown.levelname = f"\033[{color}m{record.levelname}\033[0m{padding}"
        else:
            shown.levelname = f"{record.levelname}{padding}"
        return super().formatMessage(shown)


class StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at the time of the record."""

    def __init__(self, level: int):
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


class LoggerManager:
    """Owns the handlers of the package logger."""

    def __init__(self, name: str = PACKAGE_LOGGER):
        self.package_logger = logging.getLogger(name)
        self.package_logger.setLevel(logging.DEBUG)
        self.package_logger.propagate = False

        self.console_handler = StderrHandler(logging.WARNING)
        self.console_handler.setFormatter(
            LevelColorFormatter(CONSOLE_FORMAT, "%H:%M:%S", sys.stderr.isatty())
        )
        self.package_logger.addHandler(self.console_handler)
        self.file_handlers: List[logging.Handler] = []

        # PyGObject's own warnings are only interesting when they are loud
        logging.getLogger("gi").setLevel(logging.WARNING)

    @property
    def console_level(self) -> int:
        return self.console_handler.level

    def set_console_level(self, level: int):
        self.console_handler.setLevel(level)

    @property
    def log_to_file(self) -> bool:
        return bool(self.file_handlers)

    def set_log_to_file_enabled(self, enabled: bool):
        if enabled == self.log_to_file:
            return
        if not enabled:
            for handler in self.file_handlers:
                self.package_logger.removeHandler(handler)
                handler.close()
            self.file_handlers = []
            return

        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        for filename, level in (
            ("gfilekit.log", logging.DEBUG),
            ("gfilekit_errors.log", logging.ERROR),
        ):
            handler = logging.handlers.RotatingFileHandler(
                log_dir / filename,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(formatter)
            self.package_logger.addHandler(handler)
            self.file_handlers.append(handler)


_logger_manager = LoggerManager()


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Get a logger below the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_console_log_level(level_str: str):
    """Set the console level from a name such as "INFO"."""
    _logger_manager.set_console_level(LEVELS[level_str.upper()])


def set_log_to_file_enabled(enabled: bool):
    _logger_manager.set_log_to_file_enabled(enabled)


def enable_debug_mode():
    _logger_manager.set_console_level(logging.DEBUG)
    os.environ["GFILEKIT_DEBUG"] = "1"


def log_file_operation(operation: str, location: str, details: str = ""):
    """Log a completed filesystem operation."""
    message = f"{operation} '{location}'"
    if details:
        message += f": {details}"
    get_logger("gfilekit.operations").info(message)


def log_error_with_context(error: Exception, context: str, logger_name: str = None):
    get_logger(logger_name or PACKAGE_LOGGER).error(
        f"Error in {context}: {error}", exc_info=True
    )
