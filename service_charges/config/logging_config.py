"""Logging setup for the service charges CLI.

The level, format and output targets come from ServiceChargesConfig, so
LOG_* variables work the same whether they are exported or kept in a
.env file.
"""

import json
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

from service_charges.config.settings import ServiceChargesConfig
from service_charges.utils.logging_utils import _ContextFilter

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came from extra= or LogContext
_BUILTIN_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """Render each log record as a single JSON line.

    Context fields such as ``run_id``, ``entry_index`` and ``record_date``
    become top-level keys next to the standard ones.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _BUILTIN_ATTRIBUTES and not key.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_handlers(config: ServiceChargesConfig) -> List[logging.Handler]:
    """Create the console and rotating file handlers the settings ask for."""
    handlers: List[logging.Handler] = []
    if config.log_console:
        handlers.append(logging.StreamHandler())
    if config.log_file_enabled and config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.log_max_file_size,
                backupCount=config.log_backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def configure_logging(
    config: ServiceChargesConfig, log_level: Optional[str] = None
) -> None:
    """
    Configure the root logger from the application settings.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        config: Loaded settings (LOG_LEVEL, LOG_FORMAT, LOG_FILE, ...)
        log_level: Optional level overriding LOG_LEVEL for this run
    """
    level = getattr(logging, (log_level or config.log_level).upper())
    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    reset_logging()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    context_filter = _ContextFilter()
    for handler in build_handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def reset_logging() -> None:
    """
    Remove all root handlers and restore the default WARNING level.

    Useful for testing and cleanup.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.WARNING)
