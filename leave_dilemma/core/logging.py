"""Structured logging for leave-dilemma.

Routes structlog through the standard ``logging`` module so library
code can log events with key-value context while the host application
decides the output format.

Example usage:
    from leave_dilemma.core.logging import configure_logging, get_logger

    configure_logging("DEBUG")
    logger = get_logger(__name__)

    with bind_context(run_id="sweep-3"):
        logger.info("simulation_initialized", population_size=100)
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Context bound for the duration of a run (run id, sweep point).
_bound_context: ContextVar[dict[str, Any]] = ContextVar("bound_context", default={})


class bind_context:
    """Context manager to bind additional fields to every log event.

    Example:
        with bind_context(run_id="abc", seed=42):
            logger.info("step_completed")  # Includes run_id and seed
    """

    def __init__(self, **kwargs: Any) -> None:
        self.ctx = kwargs
        self._token: Any = None

    def __enter__(self) -> "bind_context":
        new_context = {**_bound_context.get(), **self.ctx}
        self._token = _bound_context.set(new_context)
        return self

    def __exit__(self, *args: Any) -> None:
        _bound_context.reset(self._token)


def add_bound_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add bound context variables to log events."""
    for key, value in _bound_context.get().items():
        event_dict.setdefault(key, value)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_bound_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: str | int = logging.INFO,
    json_output: bool | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Global log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Use JSON output. If None, JSON is used when
            stderr is not a TTY.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout carries simulation output, so logs go to stderr.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def configure_logging_from_settings() -> None:
    """Configure logging from the cached environment settings."""
    from leave_dilemma.core.settings import get_cached_settings

    settings = get_cached_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Example:
        logger = get_logger(__name__)
        logger.debug("population_resized", added=2, removed=0)
    """
    return structlog.get_logger(name)
