"""
Structured Logging Configuration Module

JSON-formatted logging for ledger operations. The library itself only ever
calls ``logging.getLogger(__name__)``; applications (main.py, a host service)
call ``setup_logging`` once to decide where records go.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

import ledger.config as cfg

# Structured fields picked up from ``extra=`` when present on a record
STRUCTURED_FIELDS = ("account_number", "operation", "amount", "scenario")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: Optional[str] = None, logger_name: str = cfg.LOGGER_NAME,
                  stream=None) -> logging.Logger:
    """
    Setup structured JSON logging.

    Args:
        level: Log level name; defaults to cfg.LOG_LEVEL
        logger_name: Logger to configure (child module loggers propagate to it)
        stream: Target stream for the handler; defaults to stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates on repeated setup
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or cfg.LOG_LEVEL).upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = cfg.LOGGER_NAME) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
