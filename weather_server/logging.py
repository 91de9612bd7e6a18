"""Structured logging setup utilities."""

from __future__ import annotations

import logging
from typing import Iterable

import structlog

from weather_server.redaction import SecretRedactionFilter, redact_secrets


def configure_logging(level: str = "INFO", handlers: Iterable[logging.Handler] | None = None) -> None:
    """Configure stdlib logging and structlog with JSON output and secret redaction."""

    if handlers is None:
        handlers = [logging.StreamHandler()]
    handlers = list(handlers)
    for handler in handlers:
        handler.addFilter(SecretRedactionFilter())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_secrets,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
