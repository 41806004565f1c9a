import pytest

from assistant_client.entities import GetRunStepParams, ListRunStepsParams
from assistant_client.services import RunStepsService

TOOL_STEP = {
    "id": "step_1",
    "object": "thread.run.step",
    "created_at": 1700000000,
    "assistant_id": "asst_1",
    "thread_id": "thread_1",
    "run_id": "run_1",
    "type": "tool_calls",
    "status": "completed",
    "step_details": {
        "type": "tool_calls",
        "tool_calls": [
            {
                "id": "call_a",
                "type": "function",
                "function": {"name": "get_weather", "arguments": "{}", "output": "18C"},
            }
        ],
    },
}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__list__repeats_include_params(transport, http_handler) -> None:
    http_handler.queue(json_body={"object": "list", "data": [TOOL_STEP], "has_more": False})
    service = RunStepsService(transport)
    include = "step_details.tool_calls[*].file_search.results[*].content"

    page = await service.list("thread_1", "run_1", ListRunStepsParams(limit=5, include=[include]))

    step = page.data[0]
    assert step.step_details.tool_calls[0].function.output == "18C"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs/run_1/steps"
    assert http_handler.last_request.url.params.get_list("include[]") == [include]
    assert http_handler.last_request.url.params["limit"] == "5"


@pytest.mark.unit
@pytest.mark.asyncio
async def test__get__retrieves_single_step(transport, http_handler) -> None:
    http_handler.queue(
        json_body={
            **TOOL_STEP,
            "id": "step_2",
            "type": "message_creation",
            "step_details": {"type": "message_creation", "message_creation": {"message_id": "msg_1"}},
        }
    )
    service = RunStepsService(transport)

    step = await service.get("thread_1", "run_1", "step_2", GetRunStepParams(include=["a", "b"]))

    assert step.step_details.message_creation.message_id == "msg_1"
    assert http_handler.last_request.url.path == "/v1/threads/thread_1/runs/run_1/steps/step_2"
    assert http_handler.last_request.url.params.get_list("include[]") == ["a", "b"]
