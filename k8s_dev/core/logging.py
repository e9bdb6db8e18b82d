import logging
import sys

import structlog

from k8s_dev.core.config import Settings, settings as default_settings

# Prefixes of the installer's console lines
MARK_SUCCESS = "✓"
MARK_ERROR = "✗"
MARK_INFO = "ℹ"


def mark_outcome(logger, method_name, event_dict):
    """
    Prefix console events with ✓, ✗ or ℹ.

    Events logged with ``success=True`` get ✓, errors get ✗, and the
    remaining info/warning events get ℹ. Debug events are left alone.
    """
    success = event_dict.pop("success", False)
    if success:
        mark = MARK_SUCCESS
    elif method_name in ("error", "critical", "exception"):
        mark = MARK_ERROR
    elif method_name in ("info", "warning"):
        mark = MARK_INFO
    else:
        return event_dict
    event_dict["event"] = f"{mark} {event_dict.get('event', '')}"
    return event_dict


def configure_logging(settings: Settings | None = None):
    """
    Configure structlog from the installer settings.

    Configuration:
        LOG_LEVEL: Sets the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default is INFO.
        LOG_JSON_FORMAT: When set to True, logs are one JSON object per line, for CI logs. Default is False.
        LOG_COLORS: Colored console output. Defaults to on when stderr is a terminal.

    Returns:
        A configured structlog logger
    """
    settings = settings or default_settings
    log_level = settings.LOG_LEVEL.upper()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_JSON_FORMAT:
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        colors = settings.LOG_COLORS if settings.LOG_COLORS is not None else sys.stderr.isatty()
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            mark_outcome,
            structlog.dev.ConsoleRenderer(colors=colors, exception_formatter=structlog.dev.plain_traceback),
        ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    # stderr, so the summary tables on stdout stay clean
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    return structlog.get_logger()


def get_logger(name=None, **context) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger with optional context.

    Args:
        name: Optional name for the logger
        **context: Additional context to bind to the logger

    Returns:
        A configured structlog logger with bound context
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger
