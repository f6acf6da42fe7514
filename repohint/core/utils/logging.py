"""
Structured logging utilities.

Provides process-level logging setup and a context manager for structured
operation logging with timing and error tracking.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import structlog

from repohint.core.config.logging_config import LoggingConfig

logger = structlog.get_logger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """Configure the stdlib root logger for an entry point (CLI or server)."""
    logging.basicConfig(
        level=getattr(logging, logging_config.level.upper(), logging.INFO),
        format=logging_config.format,
    )


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.
    Errors are re-raised after being logged.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"repo": "owner/repo", "pr": "123"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("code_rules", pr_number=number):
            await run_rules(...)
    """
    start_time = time.time()
    log_context = {
        "operation": operation,
        **(subject_ids or {}),
        **context,
    }

    logger.info(f"🚀 Starting {operation}", **log_context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.error(
            f"❌ {operation} failed after {latency_ms}ms",
            error=str(e),
            latency_ms=latency_ms,
            exc_info=True,
            **log_context,
        )
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"✅ {operation} completed in {latency_ms}ms", latency_ms=latency_ms, **log_context)
