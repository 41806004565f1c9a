"""Shared test fixtures for the entire test suite."""

import json
from typing import Any, Callable, Iterable, Iterator, Optional

import httpx
import pytest
import structlog

from assistant_client.config import ClientConfig
from assistant_client.entities import Run
from assistant_client.infrastructure.transport import Transport


class RecordingHandler:
    """``httpx.MockTransport`` handler that records requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[Any] = []

    def queue(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if content is None and json_body is not None:
            content = json.dumps(json_body).encode("utf-8")
            headers = {"Content-Type": "application/json", **(headers or {})}
        self.responses.append(httpx.Response(status_code, content=content or b"", headers=headers))

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


def _run_payload(
    status: str = "in_progress",
    run_id: str = "run_1",
    thread_id: str = "thread_1",
    tool_call_ids: Iterable[str] = (),
    **overrides: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": run_id,
        "object": "thread.run",
        "created_at": 1700000000,
        "thread_id": thread_id,
        "assistant_id": "asst_1",
        "status": status,
        "model": "gpt-4o",
        "tools": [],
        "parallel_tool_calls": True,
    }
    tool_call_ids = list(tool_call_ids)
    if tool_call_ids:
        payload["required_action"] = {
            "type": "submit_tool_outputs",
            "submit_tool_outputs": {
                "tool_calls": [
                    {
                        "id": tool_call_id,
                        "type": "function",
                        "function": {"name": "get_weather", "arguments": '{"city": "Paris"}'},
                    }
                    for tool_call_id in tool_call_ids
                ]
            },
        }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def clear_log_context() -> Iterator[None]:
    """Keep correlation ids and bound log fields from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        api_key="sk-test",
        base_url="https://api.test/v1",
        run_poll_interval=1.0,
        run_settle_timeout=2.0,
    )


@pytest.fixture
def http_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def http_client(http_handler: RecordingHandler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(http_handler))


@pytest.fixture
def transport(config: ClientConfig, http_client: httpx.AsyncClient) -> Transport:
    return Transport(config, http_client=http_client)


@pytest.fixture
def run_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw run JSON as the API returns it."""
    return _run_payload


@pytest.fixture
def make_run() -> Callable[..., Run]:
    """Factory for run snapshots; ``tool_call_ids`` fills ``required_action``."""

    def _make_run(status: str = "in_progress", **kwargs: Any) -> Run:
        return Run.model_validate(_run_payload(status=status, **kwargs))

    return _make_run
