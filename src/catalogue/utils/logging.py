"""Logging configuration for the catalogue domain.

Reuses the shared structlog setup so both contexts log the same way.
"""

from shared.logging import add_context, clear_context, configure_logging, get_logger

__all__ = ["add_context", "clear_context", "configure_logging", "get_logger"]
