"""Structlog configuration: JSON lines to a rotating file, colors to the console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from notifications.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE = "./logs/notification-service.log"


def setup_logging() -> None:
    """Configure structlog on top of the standard library logging tree.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/notification-service.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - LOG_MAX_BYTES: Rotation size per file (default: 100MB)
    - LOG_BACKUP_COUNT: Rotated files kept (default: 240)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE)
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(100 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "240")),
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                *shared_processors,
                add_service_context,
                add_process_info,
            ],
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path,
        log_level=log_level_name,
    )
