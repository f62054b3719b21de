"""
AtomSplitter Logging
====================

Logging for the fetch and parse paths: JSON lines for files, a plain
one-line layout for the console, and per-component loggers that carry the
feed URL being worked on.
"""

import logging
import logging.handlers
import sys
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, Optional

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_FIELDS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logger(
    name: str = "atomsplitter",
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    structured: bool = False,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Replace the handlers of logger ``name``.

    Args:
        name: Logger name
        level: Logging level name
        log_file: Rotating JSON log file (optional)
        console: Whether to log to stdout
        structured: Use JSON on the console too
        max_file_size: Rotation size in bytes
        backup_count: Rotated files to keep

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            StructuredFormatter() if structured else logging.Formatter(CONSOLE_FORMAT, "%H:%M:%S")
        )
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


class LoggerAdapter(logging.LoggerAdapter):
    """Merges the adapter context into any ``extra`` passed per call."""

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> tuple:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def get_logger_for_component(
    component_name: str,
    feed_url: Optional[str] = None,
) -> LoggerAdapter:
    """Logger ``atomsplitter.<component_name>`` tagged with its component and feed."""
    context = {"component": component_name}
    if feed_url:
        context["feed_url"] = feed_url

    return LoggerAdapter(logging.getLogger(f"atomsplitter.{component_name}"), context)


def configure_application_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True,
    structured_logging: bool = False,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """Configure the ``atomsplitter`` logger tree and quiet the HTTP stack."""
    setup_logger(
        name="atomsplitter",
        level=log_level,
        log_file=log_file,
        console=enable_console,
        structured=structured_logging,
        max_file_size=max_file_size_mb * 1024 * 1024,
        backup_count=backup_count,
    )

    for noisy in ("urllib3", "requests"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def configure_logging_from_settings(settings) -> None:
    """Apply the ``logging`` section of loaded settings."""
    configure_application_logging(
        log_level=settings.get_effective_log_level(),
        log_file=settings.logging.file_path,
        enable_console=settings.logging.console_logging,
        structured_logging=settings.logging.structured_logging,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )


class PerformanceLogger:
    """Times a block and logs "Completed <operation>" or "Failed <operation>"."""

    def __init__(self, logger: logging.Logger, operation: str, **kwargs):
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time = None
        self.duration = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = datetime.now(timezone.utc)
        self.logger.debug(f"Starting {self.operation}", extra=self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration = (datetime.now(timezone.utc) - self.start_time).total_seconds()
        context = {**self.context, "duration_seconds": self.duration, "success": exc_type is None}

        if exc_type:
            self.logger.error(f"Failed {self.operation} in {self.duration:.3f}s", extra=context)
        else:
            self.logger.info(f"Completed {self.operation} in {self.duration:.3f}s", extra=context)
