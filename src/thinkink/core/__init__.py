"""Core ThinkInk utilities: configuration, logging and the error taxonomy."""

from thinkink.core.config import Settings, get_settings
from thinkink.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "clear_context",
]
