"""loguru setup for the synchronous adjudicators.

Nothing is configured on import: an embedding application keeps its own
sinks unless it calls configure_logging(). Console output is used only on
an interactive terminal with LOG_FORMAT=console; everything else gets
one JSON object per line on stdout.
"""

import sys
from typing import Optional

from loguru import logger

from consensus_engine.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | <level>{message}</level>"
)


def configure_logging(
    log_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Replace loguru's sinks with the engine's console or JSON sink.

    Args:
        log_format: "console" or "json" (defaults to settings.log_format)
        log_level: Level name (defaults to settings.log_level)
    """
    fmt = (log_format or settings.log_format).lower()
    level = (log_level or settings.log_level).upper()

    logger.remove()
    # Unbound records still need a component for the console format
    logger.configure(extra={"component": "consensus_engine"})

    if sys.stderr.isatty() and fmt == "console":
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,  # no variable dumps of claim text in prod logs
        )


def get_logger(component: str):
    """
    Get a logger bound to an adjudicator component.

    Example:
        >>> log = get_logger("adjudicators.consensus")
        >>> log.info("Assessing claim")
    """
    return logger.bind(component=component)


__all__ = ["logger", "get_logger", "configure_logging"]
