"""
Structured logging configuration using structlog.
JSON lines for production, coloured console for dev.

Logs go to stderr: stdout is reserved for extracted records when the
engine runs from the command line.
"""

import logging
import sys
from typing import IO, Optional

import structlog

from ugc_extractor.config import settings


def _add_service_info(logger, method_name, event_dict):
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("version", settings.APP_VERSION)
    return event_dict


def _cap_long_values(logger, method_name, event_dict):
    """Document text can be huge; keep any single string field to the preview size."""
    limit = settings.TEXT_PREVIEW_CHARS
    for key, value in event_dict.items():
        if key != "exception" and isinstance(value, str) and len(value) > limit:
            event_dict[key] = value[:limit] + "..."
    return event_dict


def setup_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    """Configure structlog over stdlib logging for the extraction engine."""

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _cap_long_values,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.DEBUG:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    level_name = (level or settings.LOG_LEVEL).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # pdfminer logs every parsed object at DEBUG
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
