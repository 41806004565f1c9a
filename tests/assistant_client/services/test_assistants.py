import pytest

from assistant_client.entities import CreateAssistantRequest, FunctionTool, ListParams, Tool
from assistant_client.services import AssistantsService

ASSISTANT = {
    "id": "asst_1",
    "object": "assistant",
    "created_at": 1700000000,
    "name": "Weather bot",
    "model": "gpt-4o",
    "instructions": "Answer weather questions.",
    "tools": [{"type": "function", "function": {"name": "get_weather", "parameters": {"type": "object"}}}],
    "metadata": {},
}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__create__sends_request_and_parses_assistant(transport, http_handler) -> None:
    http_handler.queue(json_body=ASSISTANT)
    service = AssistantsService(transport)
    request = CreateAssistantRequest(
        model="gpt-4o",
        name="Weather bot",
        tools=[Tool(type="function", function=FunctionTool(name="get_weather", parameters={"type": "object"}))],
    )

    assistant = await service.create(request)

    assert assistant.id == "asst_1"
    assert assistant.tools[0].function.name == "get_weather"
    assert http_handler.last_request.url.path == "/v1/assistants"
    assert http_handler.last_json() == {
        "model": "gpt-4o",
        "name": "Weather bot",
        "tools": [
            {
                "type": "function",
                "function": {"name": "get_weather", "description": "", "parameters": {"type": "object"}},
            }
        ],
    }


@pytest.mark.unit
@pytest.mark.asyncio
async def test__list__sends_cursor_params(transport, http_handler) -> None:
    http_handler.queue(json_body={"object": "list", "data": [ASSISTANT], "first_id": "asst_1", "last_id": "asst_1"})
    service = AssistantsService(transport)

    page = await service.list(ListParams(limit=10, after="asst_0"))

    assert [assistant.id for assistant in page.data] == ["asst_1"]
    assert dict(http_handler.last_request.url.params) == {"limit": "10", "after": "asst_0"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__get__retrieves_by_id(transport, http_handler) -> None:
    http_handler.queue(json_body=ASSISTANT)
    service = AssistantsService(transport)

    assistant = await service.get("asst_1")

    assert assistant.name == "Weather bot"
    assert http_handler.last_request.method == "GET"
    assert http_handler.last_request.url.path == "/v1/assistants/asst_1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test__modify__sends_full_replacement_body(transport, http_handler) -> None:
    http_handler.queue(json_body={**ASSISTANT, "instructions": "Be brief."})
    service = AssistantsService(transport)

    assistant = await service.modify("asst_1", CreateAssistantRequest(model="gpt-4o", instructions="Be brief."))

    assert assistant.instructions == "Be brief."
    assert http_handler.last_request.method == "POST"
    assert http_handler.last_request.url.path == "/v1/assistants/asst_1"
    assert http_handler.last_json() == {"model": "gpt-4o", "instructions": "Be brief."}


@pytest.mark.unit
@pytest.mark.asyncio
async def test__delete__returns_deletion_status(transport, http_handler) -> None:
    http_handler.queue(json_body={"id": "asst_1", "object": "assistant.deleted", "deleted": True})
    service = AssistantsService(transport)

    response = await service.delete("asst_1")

    assert response.deleted is True
    assert http_handler.last_request.method == "DELETE"
