"""Structured logging configuration for the Project Network service.

structlog and stdlib logging share one processor chain, so uvicorn's own
records come out in the same console or JSON format as ours.
"""
import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

# Chatty at INFO under uvicorn's default config
_NOISY_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
)


def _remove_internal_fields(
    logger: Any,
    method_name: str,
    event_dict: dict,
) -> dict:
    """ProcessorFormatter always adds these two keys"""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Configure structlog and stdlib logging.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Log level (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: list = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # tests reconfigure logging
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    noisy_level = max(log_level, logging.WARNING)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module (typically __name__)."""
    return structlog.get_logger(name)
