"""
Structured logging configuration using structlog.

- Console output in development, JSON or key-value output otherwise
- IBAN masking on every event, so account numbers never reach log sinks
- Performance timing helper
"""

import logging
import re
import sys
import time
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

# Country code + check digits, BBAN body, last four characters
_IBAN_PATTERN = re.compile(r"\b([A-Z]{2}\d{2})([A-Z0-9]{4,})([A-Z0-9]{4})\b")


def mask_iban_text(text: str) -> str:
    """Mask IBAN-looking substrings, keeping the first and last four characters.

    Example:
        >>> mask_iban_text("paid to NL91ABNA0417164300")
        'paid to NL91**********4300'
    """

    def _replace(match: re.Match[str]) -> str:
        head, body, tail = match.groups()
        return f"{head}{'*' * len(body)}{tail}"

    return _IBAN_PATTERN.sub(_replace, text)


def mask_ibans(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask IBAN values in the event and every string field.

    Runs before rendering so that no renderer ever sees a full account number.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = mask_iban_text(value)
    return event_dict


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to every log entry."""
    from openiban import __version__

    event_dict["app"] = "openiban"
    event_dict["version"] = __version__
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    dev_mode: bool = True,
) -> None:
    """
    Configure structured logging for the library and the CLI.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Whether to output JSON logs (recommended for production)
        dev_mode: Whether to use development-friendly output
    """
    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        mask_ibans,
    ]

    if dev_mode:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    elif json_logs:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Diagnostics go to stderr so CLI output on stdout stays machine readable
    level = getattr(logging, log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("iban_registry_built", country_count=77)
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class LogPerformance:
    """
    Context manager for logging performance metrics.

    Usage:
        with LogPerformance("iban_registry_build", logger):
            registry = IbanRegistry.from_definitions(definitions)
    """

    def __init__(self, operation: str, logger: structlog.stdlib.BoundLogger):
        self.operation = operation
        self.logger = logger
        self.start_time: float = 0

    def __enter__(self) -> "LogPerformance":
        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.operation}_started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter() - self.start_time

        if exc_type is None:
            self.logger.debug(
                f"{self.operation}_completed",
                duration_ms=round(duration * 1000, 2),
                operation=self.operation,
            )
        else:
            self.logger.error(
                f"{self.operation}_failed",
                duration_ms=round(duration * 1000, 2),
                operation=self.operation,
                error=str(exc_val),
                error_type=exc_type.__name__ if exc_type else None,
            )


# Initialize logging on module import
configure_logging(log_level="WARNING")
