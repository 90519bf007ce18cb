"""Structured logging for Cognet.

Every entry carries whatever is bound in the structlog context: the
request ID set by the HTTP middleware, and the concept ID while a concept
is being searched or its chains built. Output is JSON unless debugging,
where the console renderer is used.

Usage:
    from cognet.observ import get_logger

    logger = get_logger(__name__)
    logger.info("chains_discovered", chain_count=2)
"""

import sys
import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Iterator, Optional

import structlog
from structlog.contextvars import bind_contextvars, bound_contextvars, clear_contextvars

from cognet.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the stdlib root logger it writes through."""
    settings = settings or get_settings()
    level = settings.log_level.upper()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level))

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.debug or level == "DEBUG":
        processors += [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer()]
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# ═════════════════════════════════════════════════════════════════════════════
# Log Context
# ═════════════════════════════════════════════════════════════════════════════

def bind_request(request_id: str) -> None:
    """Tag every entry of the current request with its ID."""
    bind_contextvars(request_id=request_id)


def clear_context() -> None:
    clear_contextvars()


def concept_context(concept_id: str):
    """Tag entries with `concept_id` for the duration of a with block."""
    return bound_contextvars(concept_id=concept_id)


# ═════════════════════════════════════════════════════════════════════════════
# Timing
# ═════════════════════════════════════════════════════════════════════════════

@contextmanager
def timer(logger: structlog.stdlib.BoundLogger, operation: str, **context) -> Iterator[None]:
    """Log `<operation>_completed` or `<operation>_failed` with its duration.

    Exceptions propagate unchanged.
    """
    start = perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(
            f"{operation}_failed",
            duration_ms=round((perf_counter() - start) * 1000, 2),
            error_type=type(e).__name__,
            **context
        )
        raise
    logger.info(
        f"{operation}_completed",
        duration_ms=round((perf_counter() - start) * 1000, 2),
        **context
    )


def log_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float
) -> None:
    """One entry per HTTP request; 4xx warn and 5xx error."""
    if status_code >= 500:
        log = logger.error
    elif status_code >= 400:
        log = logger.warning
    else:
        log = logger.info
    log("api_request", method=method, path=path, status_code=status_code,
        duration_ms=round(duration_ms, 2))
