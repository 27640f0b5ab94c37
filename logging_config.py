"""Structured logging configuration for the application using structlog."""

import logging
import sys
import os
from typing import Optional, List

import structlog
from structlog.types import EventDict, Processor


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add Flask request context to log entries.

    Adds the authenticated user_id and the request_id when available.
    """
    try:
        from flask import g, has_request_context

        if has_request_context():
            user_id = g.get("user_id")
            if user_id:
                event_dict["user_id"] = user_id

            request_id = g.get("request_id")
            if request_id:
                event_dict["request_id"] = request_id
    except (ImportError, RuntimeError):
        # Flask not available or not in request context
        pass

    return event_dict


def setup_logging(
    app_name: str = "recipe_box",
    level: Optional[str] = None,
    use_json: Optional[bool] = None,
) -> structlog.BoundLogger:
    """
    Configure and return a structured logger for the application.

    Args:
        app_name: Name of the application/logger
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               If None, uses LOG_LEVEL, then INFO for production and DEBUG otherwise
        use_json: If True, output JSON format (recommended for production)
                  If None, JSON is used only when FLASK_ENV is production

    Returns:
        Configured structlog logger instance
    """
    env = os.environ.get("FLASK_ENV", "development")

    if level is None:
        level = os.environ.get("LOG_LEVEL") or ("INFO" if env == "production" else "DEBUG")

    if use_json is None:
        use_json = env == "production"

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        # Add request context (user, request_id)
        add_app_context,
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(app_name)


# Create default logger instance
logger = setup_logging()
