"""
Structured Logging Configuration Module

JSON lines for interest calculations. Records may carry the calculation fields
below, set through log_action or a plain `extra=` mapping on any logger call.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

STRUCTURED_FIELDS = ("calculation_id", "jurisdiction", "mode", "action", "extra")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def level_number(level: str) -> int:
    """Numeric level for a name such as "info"; unknown names raise ValueError"""
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level {level!r}")
    return number


class JSONFormatter(logging.Formatter):
    """One JSON object per record, keeping only the calculation fields that are set"""

    def format(self, record):
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    logger_name: str = "judgment_interest",
    fmt: str = "json"
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to configure; child module loggers inherit it
        fmt: "json" for one JSON object per line, "text" for plain lines

    Returns:
        The configured logger

    Raises:
        ValueError: If the level name is unknown
    """
    numeric_level = level_number(level)
    logger = logging.getLogger(logger_name)

    # Calling again replaces the handler rather than adding a second one
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(TEXT_FORMAT) if fmt == "text" else JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    return logger


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, jurisdiction: Optional[str] = None,
               mode: Optional[str] = None, calculation_id: Optional[str] = None,
               extra: Optional[dict] = None):
    """
    Log one calculation step with its structured fields.

    Fields left as None are not attached to the record.
    """
    fields = {
        "action": action,
        "jurisdiction": jurisdiction,
        "mode": mode,
        "calculation_id": calculation_id,
        "extra": extra,
    }
    logger.log(
        level_number(level),
        message,
        extra={name: value for name, value in fields.items() if value is not None}
    )
