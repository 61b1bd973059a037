"""
Structured logging configuration for the simulation engine.

Uses structlog for JSON-formatted logs suitable for log aggregation systems.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: str = "propsim",
) -> None:
    """
    Configure structured logging for the package.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON format (production). If False, pretty console format (dev)
        service_name: Service name for log context
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Production: JSON format for log aggregation
        shared_processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ])
    else:
        # Development: Pretty console format
        shared_processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=True),
        ])

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_error(
    logger: structlog.BoundLogger,
    error: Exception,
    context: dict[str, Any] | None = None,
) -> None:
    """Log error with full context."""
    logger.error(
        "error_occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        exc_info=True,
        **(context or {}),
    )


def log_simulation(
    logger: structlog.BoundLogger,
    player_name: str,
    stat_type: str,
    platform: str,
    recommendation: str,
    edge: float,
    **kwargs: Any,
) -> None:
    """Log a single prop simulation."""
    logger.debug(
        "prop_simulated",
        player_name=player_name,
        stat_type=stat_type,
        platform=platform,
        recommendation=recommendation,
        edge=edge,
        **kwargs,
    )


def log_batch_summary(
    logger: structlog.BoundLogger,
    total_bets: int,
    average_edge: float,
    strong_plays: int,
    **kwargs: Any,
) -> None:
    """Log a batch simulation summary."""
    logger.info(
        "batch_summarized",
        total_bets=total_bets,
        average_edge=average_edge,
        strong_plays=strong_plays,
        **kwargs,
    )
