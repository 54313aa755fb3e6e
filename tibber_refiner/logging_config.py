"""
Structured logging setup using structlog on top of the standard logging module.
Logs go to stdout and to a daily rolling file in the configured log directory.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

LOG_FILE_NAME = "tibber-refiner.log"

# The service accepts the same level names as the deployment descriptor documents
_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str) -> int:
    """Map a level name to a logging level, falling back to INFO."""
    return _LEVELS.get(str(name).strip().lower(), logging.INFO)


def setup_logging(level: str = "info", log_format: str = "text", log_dir: str = None) -> None:
    """
    Configure structlog and the root logger.

    Args:
        level: Level name (trace/debug/info/warn/error)
        log_format: "json" for JSON lines, anything else for plain key=value text
        log_dir: Directory for the daily rolling log file; None logs to stdout only
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers = [logging.StreamHandler(sys.stdout)]

    file_error = None
    if log_dir:
        try:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.TimedRotatingFileHandler(
                    Path(log_dir) / LOG_FILE_NAME,
                    when="midnight",
                    encoding="utf-8",
                )
            )
        except OSError as e:
            file_error = e

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(resolve_level(level))

    # Chatty third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if file_error is not None:
        get_logger(__name__).warning("Log directory not writable, logging to stdout only",
                                     log_dir=log_dir, error=str(file_error))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)
