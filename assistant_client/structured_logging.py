"""Structured logging configuration built on structlog, with correlation id tracking."""

import logging
import os
import sys
import uuid
from typing import Any, Mapping, Optional, TextIO

import structlog
from pydantic import BaseModel, Field
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, WrappedLogger

CORRELATION_ID_KEY = "correlation_id"

# Keys rendered at the top level of every record; anything else is grouped under "extra".
BASE_FIELDS = ("message", "level", "logger", "timestamp", "stream", "context", "exception")
TOP_LEVEL_FIELDS = (CORRELATION_ID_KEY, "thread_id", "run_id", "assistant_id", "tool_call_id")

_LOGGING_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

# Third-party loggers that log every HTTP request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")

_HANDLER_NAME = "assistant_client"


class LoggingContext(BaseModel):
    """Logging settings, read from the environment when not given explicitly."""

    stream: str = Field(default_factory=lambda: os.getenv("STREAM", "stdout"))
    logging_level: str = Field(default_factory=lambda: os.getenv("LOGGING_LEVEL", "INFO"))
    log_format: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))
    context: str = "default"


def get_logging_level(level: str) -> int:
    try:
        return _LOGGING_LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unsupported logging level: {level}") from None


def get_stream(stream: str) -> TextIO:
    name = stream.lower()
    if name == "stdout":
        return sys.stdout
    if name == "stderr":
        return sys.stderr
    raise ValueError(f"Unsupported stream: {stream}")


def process_log_fields(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Keep well-known fields at the top level and nest the rest under ``extra``."""
    record: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in event_dict.items():
        if key in BASE_FIELDS or key in TOP_LEVEL_FIELDS:
            record[key] = value
        else:
            extra[key] = value
    if extra:
        record["extra"] = extra
    return record


def set_context_fields(context: LoggingContext) -> None:
    structlog.contextvars.bind_contextvars(stream=context.stream, context=context.context)


def clear_context_fields() -> None:
    structlog.contextvars.unbind_contextvars("stream", "context")


def configure_structlog(context: Optional[LoggingContext] = None) -> None:
    """Configure structlog to render through the standard library root logger.

    Safe to call more than once; the handler installed by a previous call is replaced.
    """
    context = context or LoggingContext()
    level = get_logging_level(context.logging_level)
    stream = get_stream(context.stream)

    if context.log_format == "keyvalue":
        renderer: Any = structlog.processors.KeyValueRenderer(key_order=["message", "level", "logger"])
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            process_log_fields,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))

    set_context_fields(context)


def get_logger(name: str = "") -> BoundLogger:
    return structlog.get_logger(name or __name__)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def get_or_create_correlation_id() -> str:
    """Return the correlation id bound to the current context, binding a new one if absent."""
    correlation_id = get_correlation_id()
    if correlation_id is None:
        correlation_id = generate_correlation_id()
        structlog.contextvars.bind_contextvars(**{CORRELATION_ID_KEY: correlation_id})
    return correlation_id


class CorrelationContext:
    """Binds a correlation id to every log record emitted inside the block.

    Usage:
        with CorrelationContext() as correlation_id:
            run = await client.runs.create(thread_id, request)
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._tokens: Optional[Mapping[str, Any]] = None

    def __enter__(self) -> str:
        self._tokens = structlog.contextvars.bind_contextvars(**{CORRELATION_ID_KEY: self.correlation_id})
        return self.correlation_id

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._tokens is not None:
            structlog.contextvars.reset_contextvars(**self._tokens)
            self._tokens = None
