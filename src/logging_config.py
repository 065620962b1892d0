from __future__ import annotations

import logging

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(LOG_FORMAT)


def configure_logging(level: str = "INFO") -> None:
    """Send structured JSON records, including ``extra`` fields, to stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [handler]
