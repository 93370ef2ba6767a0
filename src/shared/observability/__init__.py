"""Observability module for structured logging."""

from .logging import (
    bind_task_logger,
    get_logger,
    log_external_call_end,
    log_external_call_start,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "bind_task_logger",
    # Logging helpers
    "log_external_call_start",
    "log_external_call_end",
]
