"""Structured logging for the view layer.

Records go to two places: a rotating JSON file for machines and the
console for people. Structured context travels in ``extra`` and every
event carries an ``event_type``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE_NAME = "view_layer.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Template compilation and the ASGI access log are chatty at DEBUG
QUIET_LOGGERS = ("jinja2", "uvicorn.access")

# Attributes LogRecord already owns; passing them in ``extra`` raises KeyError
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _json_file_handler(log_dir: Path) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT, timestamp=True))
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(level)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path | str | None = None) -> logging.Logger:
    """Install the JSON file handler and the console handler on the root logger.

    Any handlers already on the root logger are replaced, so calling this
    twice does not duplicate output.

    Args:
        log_level: Console and root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the JSON log file; ``logs/`` at the repo root when omitted

    Returns:
        The configured root logger
    """
    level = getattr(logging, log_level.upper())
    directory = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_json_file_handler(directory))
    root_logger.addHandler(_console_handler(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with structured context fields.

    Field names that collide with LogRecord attributes (``name``,
    ``filename``, ``message`` ...) are prefixed with ``ctx_``.

    Args:
        logger: Logger to emit on
        level: Method name: debug, info, warning, error or critical
        message: Log message
        **extra_fields: Context for the JSON log (e.g. template, event_type)
    """
    extra = {(f"ctx_{key}" if key in _RESERVED_ATTRS else key): value for key, value in extra_fields.items()}
    getattr(logger, level.lower())(message, extra=extra)
