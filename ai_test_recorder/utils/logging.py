"""Structured logging for the AI test recorder.

Everything goes through structlog on top of the stdlib logging module, so
library users can route records with ordinary handlers. Secrets that may
travel in log context (API keys, auth headers) are masked before rendering.
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

# Context keys whose values are never rendered
SENSITIVE_KEYS = frozenset({"api_key", "apiKey", "authorization", "Authorization", "x-api-key"})
MASK = "***"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def mask_secrets(_logger: Any, _method: str, event_dict: dict) -> dict:
    """structlog processor replacing sensitive values with a mask."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = MASK
    return event_dict


def configure_logging(
    level: str | int = "INFO",
    json_format: bool = False,
    include_timestamp: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Logs go to stderr so that CLI output on stdout stays machine readable.

    Args:
        level: Level name or number; unknown names fall back to INFO
        json_format: Render one JSON object per line
        include_timestamp: Add an ISO timestamp to every record
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=_resolve_level(level))
    logging.getLogger().setLevel(_resolve_level(level))

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        mask_secrets,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(structlog.processors.format_exc_info)
    processors.append(
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context) -> structlog.BoundLogger:
    """Logger with optional bound context (e.g. ``component="ai_client"``)."""
    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


class LogContext:
    """Bind request-scoped values (request id, tab id) for nested log calls.

    Values live in contextvars, so concurrent asyncio tasks each keep their
    own request id.

    Usage:
        with LogContext(request_id="req_abc", tab_id=3):
            logger.info("Requesting selector suggestions")
    """

    def __init__(self, **context):
        self.context = context
        self._tokens: Optional[dict] = None

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._tokens:
            structlog.contextvars.reset_contextvars(**self._tokens)
            self._tokens = None


@contextmanager
def log_operation(
    operation: str,
    logger: Optional[structlog.BoundLogger] = None,
    **context,
) -> Iterator[dict]:
    """Log start, outcome and duration of an outbound call.

    The yielded dict is logged with the outcome, so callers can attach
    details such as a status code. Exceptions are logged and re-raised.

    Example:
        with log_operation("selector_request", self.log, model=model) as op:
            body = await self._post(request)
            op["bytes"] = len(body)
    """
    log = (logger or get_logger()).bind(operation=operation, **context)
    details: dict = {}
    started = time.monotonic()
    log.debug(f"{operation} started")

    try:
        yield details
    except Exception as e:
        log.warning(
            f"{operation} failed",
            duration_ms=round((time.monotonic() - started) * 1000),
            error=str(e) or type(e).__name__,
            **details,
        )
        raise

    log.debug(
        f"{operation} completed",
        duration_ms=round((time.monotonic() - started) * 1000),
        **details,
    )
