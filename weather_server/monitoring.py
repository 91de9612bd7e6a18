"""Monitoring helpers for structured logging and timing of tool invocations."""

from __future__ import annotations

import time
import uuid
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from weather_server.exceptions import WeatherToolError


FuncType = TypeVar("FuncType", bound=Callable[..., Awaitable[Any]])


def with_correlation_id(func: FuncType) -> FuncType:
    """Bind a fresh ``correlation_id`` to structlog contextvars for the call."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        with structlog.contextvars.bound_contextvars(correlation_id=uuid.uuid4().hex):
            return await func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timed(func: FuncType) -> FuncType:
    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger = structlog.get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except WeatherToolError as exc:
            logger.warning(
                "tool.error",
                function=func.__name__,
                duration_seconds=time.perf_counter() - started,
                kind=exc.kind.value,
                error=str(exc),
            )
            raise
        except Exception as exc:
            logger.exception(
                "tool.error",
                function=func.__name__,
                duration_seconds=time.perf_counter() - started,
                error=str(exc),
            )
            raise
        logger.info("tool.complete", function=func.__name__, duration_seconds=time.perf_counter() - started)
        return result

    return wrapper  # type: ignore[return-value]
