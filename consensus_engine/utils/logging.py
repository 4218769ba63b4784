"""structlog setup for the async orchestrator and the budget tracker.

Events are snake_case names with key/value context
(``log.info("batch_complete", batch_size=3)``). A pipeline run binds its
run_id into contextvars so every event emitted while the run is active,
including from concurrently evaluated claims, carries it.
"""

import sys
import uuid
from typing import Any, Optional

import structlog
from structlog.contextvars import bind_contextvars, merge_contextvars, unbind_contextvars
from structlog.processors import JSONRenderer

from consensus_engine.config.settings import settings

RUN_CONTEXT_KEYS = ("run_id",)


def configure_structured_logging(
    log_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Install the structlog processor chain.

    JSON lines on stderr unless stderr is a terminal and the format is
    "console".

    Args:
        log_format: "console" or "json" (defaults to settings.log_format)
        log_level: Level name (defaults to settings.log_level)
    """
    fmt = (log_format or settings.log_format).lower()
    level = (log_level or settings.log_level).upper()

    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if sys.stderr.isatty() and fmt == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_structured_logger(
    name: str,
    run_id: Optional[str] = None,
    **additional_context: Any,
) -> structlog.BoundLogger:
    """
    Get a named structlog logger with context already bound.

    Example:
        >>> log = get_structured_logger("pipeline", component="AdjudicationPipeline")
        >>> log.info("claim_evaluated", claim_id="c1", level="strong_consensus")
    """
    context = dict(additional_context)
    if run_id:
        context["run_id"] = run_id
    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


def get_correlation_id() -> str:
    """New run ID (UUID4 string)."""
    return str(uuid.uuid4())


def bind_run_context(run_id: str) -> None:
    """Attach run_id to every event logged in the current context."""
    bind_contextvars(run_id=run_id)


def clear_run_context() -> None:
    unbind_contextvars(*RUN_CONTEXT_KEYS)


__all__ = [
    "bind_run_context",
    "clear_run_context",
    "configure_structured_logging",
    "get_correlation_id",
    "get_structured_logger",
]
