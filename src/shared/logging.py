"""Logging configuration shared by the Talex bounded contexts.

Standard library logging owns the sinks: stdout always, plus rotating files
under ``logs/`` outside the test environment. structlog renders structured
events on top of it, as coloured console output while developing and as JSON
lines in staging and production.

Environment variables:
    PROTEAN_ENV / ENVIRONMENT / ENV   selects defaults (development, test, staging, production)
    LOG_LEVEL                         overrides the level picked for the environment
    LOG_FORMAT                        ``json`` or ``console``, overrides the renderer
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

JSON_ENVIRONMENTS = ("production", "staging")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

QUIET_LIBRARIES = ("urllib3", "asyncio", "protean", "httpx", "multipart")


def current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("ENV") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level(environment: str | None = None) -> str:
    environment = environment or current_environment()
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENVIRONMENT.get(environment, "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str, log_dir: str | None, log_file_prefix: str) -> None:
    """Route the root logger to stdout and, when ``log_dir`` is set, to rotating files."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setLevel(level)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_file(log_path / f"{log_file_prefix}.log", level))
        handlers.append(_rotating_file(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = handlers

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    log_format = os.getenv("LOG_FORMAT", "").lower()
    if log_format == "json" or (not log_format and environment in JSON_ENVIRONMENTS):
        return structlog.processors.JSONRenderer()

    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def setup_structlog(environment: str) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str | None = "logs", log_file_prefix: str = "talex") -> None:
    """Configure stdlib sinks and structlog rendering for the whole process.

    File sinks are skipped in the test environment.
    """
    environment = current_environment()
    if environment == "test":
        log_dir = None

    setup_stdlib_logging(level or get_log_level(environment), log_dir, log_file_prefix)
    setup_structlog(environment)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every log line written until clear_context() runs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
