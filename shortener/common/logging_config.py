"""Logging setup for the service and its scripts."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "url_shortener"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; message and exception text are escaped."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``url_shortener`` logger tree.

    Records go to stdout and, when ``log_file`` is set, to that file too.
    Calling this again replaces the previous handlers.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``name`` as a child of the ``url_shortener`` logger."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
