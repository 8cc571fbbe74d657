"""
Logging setup for the Jobly data-access layer.

Records go to stdout, either as one JSON object per line or in a plain
human-readable format. Modules obtain their logger through get_logger() and
never configure handlers themselves; configure_logging() applies the levels
and format chosen in settings.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger import jsonlogger

from jobly.core.config import settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JoblyJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that stamps every record with the service name, a UTC
    timestamp and the emitting logger. Warnings and errors also carry the
    source location.
    """

    def __init__(self, *args: Any, service: str = "jobly", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record["timestamp"] = created.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self.service

        if record.levelno >= logging.WARNING:
            log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logging(log_level: str = "INFO", json_logs: bool = True, stream: Optional[TextIO] = None) -> None:
    """
    Replace the root handlers with a single stream handler.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        json_logs: JSON lines when True, plain text otherwise
        stream: Where to write (defaults to stdout)

    Raises:
        ValueError: if log_level is not a known level name
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_logs:
        handler.setFormatter(JoblyJsonFormatter("%(message)s", service=settings.PROJECT_NAME.lower()))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_logging() -> None:
    """Apply LOG_LEVEL and JSON_LOGS from settings."""
    setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass __name__."""
    return logging.getLogger(name)
