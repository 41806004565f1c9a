"""Async client for the Assistants API with a run lifecycle engine."""

from .client import AssistantsClient
from .config import ClientConfig
from .errors import (
    APIError,
    AssistantClientError,
    DecodeError,
    MismatchedToolCallsError,
    RunCancelledError,
    RunTimeoutError,
    TransportError,
    UnexpectedStatusError,
)
from .processors import RunEventStream, RunProcessor, ToolExecutor, ToolOutputSubmitter

__all__ = [
    "AssistantsClient",
    "ClientConfig",
    "APIError",
    "AssistantClientError",
    "DecodeError",
    "MismatchedToolCallsError",
    "RunCancelledError",
    "RunTimeoutError",
    "TransportError",
    "UnexpectedStatusError",
    "RunEventStream",
    "RunProcessor",
    "ToolExecutor",
    "ToolOutputSubmitter",
]
