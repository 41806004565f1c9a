import httpx
import pytest

from assistant_client.errors import (
    APIError,
    AssistantClientError,
    DecodeError,
    ErrorHandler,
    MismatchedToolCallsError,
    RunTimeoutError,
    TransportError,
    UnexpectedStatusError,
)


@pytest.mark.unit
def test__api_error__parses_structured_body() -> None:
    response = httpx.Response(
        404,
        json={
            "error": {
                "message": "No run found with id 'run_x'.",
                "type": "invalid_request_error",
                "param": None,
                "code": "not_found",
            }
        },
    )

    error = APIError.from_response(response)

    assert error.status_code == 404
    assert error.message == "No run found with id 'run_x'."
    assert error.type == "invalid_request_error"
    assert error.param is None
    assert error.code == "not_found"
    assert str(error) == "API error 404: No run found with id 'run_x'. (type: invalid_request_error, code: not_found)"


@pytest.mark.unit
def test__api_error__falls_back_to_raw_body() -> None:
    response = httpx.Response(502, content=b"<html>bad gateway</html>")

    error = APIError.from_response(response)

    assert error.status_code == 502
    assert error.message == "<html>bad gateway</html>"
    assert error.body == "<html>bad gateway</html>"
    assert error.type is None


@pytest.mark.unit
def test__api_error__json_without_error_object_uses_body() -> None:
    response = httpx.Response(500, json={"detail": "boom"})

    error = APIError.from_response(response)

    assert error.message == error.body
    assert "boom" in error.message
    assert error.code is None


@pytest.mark.unit
def test__api_error__numeric_code_becomes_string() -> None:
    response = httpx.Response(429, json={"error": {"message": "slow down", "code": 429}})

    assert APIError.from_response(response).code == "429"


@pytest.mark.unit
def test__mismatched_tool_calls_error__lists_unknown_and_missing() -> None:
    error = MismatchedToolCallsError("run_1", unknown_ids=["call_x"], missing_ids=["call_b"])

    assert error.unknown_ids == ["call_x"]
    assert error.missing_ids == ["call_b"]
    assert "unknown tool call ids: call_x" in str(error)
    assert "missing outputs for: call_b" in str(error)


@pytest.mark.unit
def test__run_timeout_error__keeps_context() -> None:
    error = RunTimeoutError("thread_1", "run_1", 2.0, "in_progress")

    assert error.last_status == "in_progress"
    assert "did not settle within 2.0s" in str(error)
    assert isinstance(error, AssistantClientError)


@pytest.mark.unit
def test__unexpected_status_error__includes_detail() -> None:
    error = UnexpectedStatusError("paused", "run run_1")

    assert error.status == "paused"
    assert str(error) == "Unexpected run status: paused (run run_1)"


@pytest.mark.unit
def test__error_handler__converts_request_error() -> None:
    err = httpx.ConnectError("connection refused")

    converted = ErrorHandler.handle_request_error(err, "retrieve run", "corr-1", path="/threads/t/runs/r")

    assert isinstance(converted, TransportError)
    assert "retrieve run" in str(converted)
    assert "connection refused" in str(converted)


@pytest.mark.unit
def test__error_handler__converts_error_response() -> None:
    response = httpx.Response(401, json={"error": {"message": "Incorrect API key", "type": "invalid_request_error"}})

    converted = ErrorHandler.handle_error_response(response, "create run", "corr-1")

    assert isinstance(converted, APIError)
    assert converted.status_code == 401
    assert converted.message == "Incorrect API key"


@pytest.mark.unit
def test__error_handler__converts_decode_error() -> None:
    converted = ErrorHandler.handle_decode_error(ValueError("Expecting value"), "list runs", "corr-1")

    assert isinstance(converted, DecodeError)
    assert "list runs" in str(converted)
