"""
Structured logging configuration.

Ledger events (``goal_created``, ``deposit_added``, ``deposit_removed``,
``goal_deleted``, ``commit_failed``) are emitted through structlog with their
figures as key-value pairs. The request logging middleware binds the request
id into structlog's context variables, so every event raised while serving a
request carries it.

Usage:
    from cashsaver.core.logging_config import setup_logging, get_logger

    setup_logging()  # once, from the application lifespan

    logger = get_logger(__name__)
    logger.info("deposit_added", goal_id=str(goal.id), amount=str(amount))
"""

import logging
import sys
from typing import List

import structlog
from pythonjsonlogger import jsonlogger

from cashsaver.config import settings

# Loggers that never go through structlog but should match its output format
STDLIB_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def use_json_output() -> bool:
    return settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production"


def _processors(use_json: bool) -> List:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def setup_logging() -> None:
    """
    Configure stdlib logging and structlog for the application.

    JSON lines in production or when ``LOG_FORMAT=json``, readable console
    output otherwise.
    """
    use_json = use_json_output()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=_processors(use_json),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if use_json:
        _install_json_handler(STDLIB_LOGGERS)

    # Quieter access and SQL logs in production
    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _install_json_handler(logger_names) -> None:
    """Give plain stdlib loggers a python-json-logger formatter."""
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    for name in logger_names:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers.clear()
        stdlib_logger.addHandler(handler)


def bind_request_id(request_id: str) -> None:
    """Attach ``request_id`` to every structlog event in the current context."""
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
