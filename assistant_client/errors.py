"""Error taxonomy for the client and centralized conversion of transport failures."""

import json
from typing import Any, Optional, Sequence

import httpx

from .structured_logging import get_logger

logger = get_logger("ERROR_HANDLERS")


class AssistantClientError(Exception):
    """Base class for every error raised by this package."""


class TransportError(AssistantClientError):
    """The request or the response stream failed below the HTTP status layer."""


class APIError(AssistantClientError):
    """The API answered with a non-success status code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: Optional[str] = None,
        param: Optional[str] = None,
        code: Optional[str] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.type = error_type
        self.param = param
        self.code = code
        self.body = body

    def __str__(self) -> str:
        return f"API error {self.status_code}: {self.message} (type: {self.type}, code: {self.code})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an error from an ``{"error": {...}}`` body, falling back to the raw text."""
        body = response.text
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None

        info = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(info, dict):
            return cls(response.status_code, body or response.reason_phrase, body=body)

        return cls(
            response.status_code,
            str(info.get("message") or ""),
            error_type=info.get("type"),
            param=info.get("param"),
            code=None if info.get("code") is None else str(info.get("code")),
            body=body,
        )


class DecodeError(AssistantClientError):
    """A response body or event payload was not the JSON shape expected."""


class RunTimeoutError(AssistantClientError):
    """A run did not reach a stopping point before the deadline."""

    def __init__(self, thread_id: str, run_id: str, timeout: float, last_status: Optional[str] = None):
        super().__init__(
            f"Run {run_id} on thread {thread_id} did not settle within {timeout}s (last status: {last_status})"
        )
        self.thread_id = thread_id
        self.run_id = run_id
        self.timeout = timeout
        self.last_status = last_status


class RunCancelledError(AssistantClientError):
    """Waiting on a run was aborted by an external cancellation signal."""

    def __init__(self, thread_id: str, run_id: str):
        super().__init__(f"Waiting on run {run_id} on thread {thread_id} was cancelled")
        self.thread_id = thread_id
        self.run_id = run_id


class UnexpectedStatusError(AssistantClientError):
    """A run reported a status outside the known enumeration, or one invalid for the operation."""

    def __init__(self, status: str, detail: str = ""):
        message = f"Unexpected run status: {status}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.status = status


class MismatchedToolCallsError(AssistantClientError):
    """Submitted tool outputs do not answer exactly the outstanding tool calls."""

    def __init__(self, run_id: str, unknown_ids: Sequence[str], missing_ids: Sequence[str]):
        parts = []
        if unknown_ids:
            parts.append(f"unknown tool call ids: {', '.join(unknown_ids)}")
        if missing_ids:
            parts.append(f"missing outputs for: {', '.join(missing_ids)}")
        super().__init__(f"Tool outputs for run {run_id} do not match outstanding tool calls; {'; '.join(parts)}")
        self.run_id = run_id
        self.unknown_ids = list(unknown_ids)
        self.missing_ids = list(missing_ids)


class ErrorHandler:
    """Converts low-level failures into the client taxonomy with consistent logging."""

    @staticmethod
    def handle_request_error(
        err: Exception, operation: str, correlation_id: str, **context: Any
    ) -> TransportError:
        logger.error(
            f"Request to {operation} failed",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            **context,
        )
        return TransportError(f"Failed to {operation}: {err}")

    @staticmethod
    def handle_error_response(
        response: httpx.Response, operation: str, correlation_id: str, **context: Any
    ) -> APIError:
        error = APIError.from_response(response)
        logger.error(
            f"API rejected {operation}",
            correlation_id=correlation_id,
            status_code=error.status_code,
            error_type=error.type,
            error_code=error.code,
            error=error.message,
            **context,
        )
        return error

    @staticmethod
    def handle_decode_error(err: Exception, operation: str, correlation_id: str, **context: Any) -> DecodeError:
        logger.error(
            f"Failed to decode response for {operation}",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            **context,
        )
        return DecodeError(f"Failed to decode response for {operation}: {err}")
