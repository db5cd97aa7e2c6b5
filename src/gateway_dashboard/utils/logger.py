"""
Module: logger.py
Description: structlog setup for the gateway dashboard.

Every record is one JSON line on stdout carrying the event text, its
keyword context, the emitting module, the service name, a UTC
timestamp and the level. Records below ``settings.log_level`` are
discarded before any processor runs.

Dependencies: structlog, logging, datetime
"""

import logging
from datetime import datetime, timezone

import structlog

from gateway_dashboard.config.settings import settings


def _stamp(logger, method_name, event_dict):
    """Stamp a record with time, level and the service it came from."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    event_dict["level"] = method_name.upper()
    event_dict["service"] = settings.app_name
    return event_dict


def configure_logging(log_level: str) -> None:
    """
    Route structlog to JSON lines on stdout, filtered at ``log_level``.

    Loggers are cached on first use, so this has to run before the
    first record is written; importing this module does that.
    """
    structlog.configure(
        processors=[
            _stamp,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        cache_logger_on_first_use=True,
    )


configure_logging(settings.log_level)


def get_logger(name: str):
    """
    Logger that tags every record with the emitting module.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Session list request timed out", sessions_url=url)
        {"sessions_url": "...", "module": "gateway_dashboard.services.session_directory", "event": "Session list request timed out", ...}
    """
    return structlog.get_logger().bind(module=name)
