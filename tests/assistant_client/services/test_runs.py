import pytest

from assistant_client.entities import (
    CreateRunRequest,
    CreateThreadAndRunRequest,
    ListRunsParams,
    SubmitToolOutputsRequest,
    ThreadMessageInput,
    ThreadRequest,
    ToolOutput,
)
from assistant_client.errors import APIError
from assistant_client.processors import RunEventStream
from assistant_client.services import RunsService

SSE_BODY = (
    b"event: thread.run.created\n"
    b'data: {"id":"run_1","status":"queued"}\n'
    b"\n"
    b"event: thread.run.completed\n"
    b'data: {"id":"run_1","status":"completed"}\n'
    b"\n"
    b"data: [DONE]\n"
    b"\n"
)


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create__posts_run_request(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(status="queued"))
    service = RunsService(transport)

    run = await service.create("thread_1", CreateRunRequest(assistant_id="asst_1", temperature=0.2))

    assert run.status == "queued"
    assert http_handler.last_request.method == "POST"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs"
    assert http_handler.last_json() == {"assistant_id": "asst_1", "temperature": 0.2}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create_stream__yields_events_in_wire_order(transport, http_handler) -> None:
    http_handler.queue(200, content=SSE_BODY, headers={"Content-Type": "text/event-stream"})
    service = RunsService(transport)
    request = CreateRunRequest(assistant_id="asst_1")

    stream = await service.create_stream("thread_1", request)
    async with stream:
        events = [event async for event in stream]

    assert isinstance(stream, RunEventStream)
    assert [event.event for event in events] == ["thread.run.created", "thread.run.completed", "done"]
    assert events[1].parse_json() == {"id": "run_1", "status": "completed"}
    assert http_handler.last_json() == {"assistant_id": "asst_1", "stream": True}
    assert http_handler.last_request.headers["Accept"] == "text/event-stream"
    # The caller's request is not mutated
    assert request.stream is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create_stream__error_status_raises_api_error(transport, http_handler) -> None:
    http_handler.queue(400, json_body={"error": {"message": "Thread thread_1 already has an active run"}})
    service = RunsService(transport)

    with pytest.raises(APIError) as exc_info:
        await service.create_stream("thread_1", CreateRunRequest(assistant_id="asst_1"))

    assert exc_info.value.status_code == 400


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create_thread_and_run__posts_to_threads_runs(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(status="queued", thread_id="thread_new"))
    service = RunsService(transport)
    request = CreateThreadAndRunRequest(
        assistant_id="asst_1",
        thread=ThreadRequest(messages=[ThreadMessageInput(content="Hello")]),
    )

    run = await service.create_thread_and_run(request)

    assert run.thread_id == "thread_new"
    assert http_handler.last_request.url.path == "/v1/threads/runs"
    assert http_handler.last_json() == {
        "assistant_id": "asst_1",
        "thread": {"messages": [{"role": "user", "content": "Hello"}]},
    }


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create_thread_and_run_stream__forces_stream_flag(transport, http_handler) -> None:
    http_handler.queue(200, content=b"data: [DONE]\n\n")
    service = RunsService(transport)

    async with await service.create_thread_and_run_stream(CreateThreadAndRunRequest(assistant_id="asst_1")) as stream:
        events = [event async for event in stream]

    assert [event.event for event in events] == ["done"]
    assert http_handler.last_json()["stream"] is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test__list__passes_pagination(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body={"object": "list", "data": [run_payload()], "has_more": True})
    service = RunsService(transport)

    runs = await service.list("thread_1", ListRunsParams(limit=1, order="asc"))

    assert runs.has_more is True
    assert runs.data[0].id == "run_1"
    assert dict(http_handler.last_request.url.params) == {"limit": "1", "order": "asc"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__get__retrieves_run(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(status="completed"))
    service = RunsService(transport)

    run = await service.get("thread_1", "run_1")

    assert run.status == "completed"
    assert http_handler.last_request.method == "GET"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs/run_1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test__modify__sends_metadata(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(metadata={"ticket": "42"}))
    service = RunsService(transport)

    run = await service.modify("thread_1", "run_1", {"ticket": "42"})

    assert run.metadata == {"ticket": "42"}
    assert http_handler.last_json() == {"metadata": {"ticket": "42"}}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__submit_tool_outputs__posts_outputs(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(status="queued"))
    service = RunsService(transport)
    request = SubmitToolOutputsRequest(tool_outputs=[ToolOutput(tool_call_id="call_a", output="18C")])

    run = await service.submit_tool_outputs("thread_1", "run_1", request)

    assert run.status == "queued"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs/run_1/submit_tool_outputs"
    assert http_handler.last_json() == {"tool_outputs": [{"tool_call_id": "call_a", "output": "18C"}]}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__submit_tool_outputs_stream__returns_event_stream(transport, http_handler) -> None:
    http_handler.queue(200, content=SSE_BODY)
    service = RunsService(transport)
    request = SubmitToolOutputsRequest(tool_outputs=[ToolOutput(tool_call_id="call_a", output="18C")])

    async with await service.submit_tool_outputs_stream("thread_1", "run_1", request) as stream:
        events = [event async for event in stream]

    assert events[-1].is_done
    assert http_handler.last_json() == {
        "tool_outputs": [{"tool_call_id": "call_a", "output": "18C"}],
        "stream": True,
    }


@pytest.mark.unit
@pytest.mark.asyncio
async def test__cancel__posts_to_cancel_endpoint(transport, http_handler, run_payload) -> None:
    http_handler.queue(json_body=run_payload(status="cancelling"))
    service = RunsService(transport)

    run = await service.cancel("thread_1", "run_1")

    assert run.status == "cancelling"
    assert http_handler.last_request.method == "POST"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs/run_1/cancel"
