"""Logging configuration for the Ordering domain."""

import logging

from shared.logging import add_context, clear_context, configure_logging, get_logger

__all__ = ["add_context", "clear_context", "configure_logging", "get_logger", "logger"]

logger = get_logger("ordering")

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)
