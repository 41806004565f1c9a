"""Assistant resource gateway."""

from typing import Optional

from ..entities import Assistant, CreateAssistantRequest, DeleteResponse, ListParams, ListResponse
from ..infrastructure.transport import Transport
from ..structured_logging import get_logger

logger = get_logger("ASSISTANTS_SERVICE")


class AssistantsService:
    def __init__(self, transport: Transport):
        self.transport = transport

    async def create(self, request: CreateAssistantRequest) -> Assistant:
        assistant = await self.transport.request_model(
            "POST", "/assistants", Assistant, body=request, operation="create assistant"
        )
        logger.info("Assistant created", assistant_id=assistant.id, model=assistant.model)
        return assistant

    async def list(self, params: Optional[ListParams] = None) -> ListResponse[Assistant]:
        return await self.transport.request_model(
            "GET",
            "/assistants",
            ListResponse[Assistant],
            params=params.to_query() if params else None,
            operation="list assistants",
        )

    async def get(self, assistant_id: str) -> Assistant:
        return await self.transport.request_model(
            "GET", f"/assistants/{assistant_id}", Assistant, operation="retrieve assistant"
        )

    async def modify(self, assistant_id: str, request: CreateAssistantRequest) -> Assistant:
        """Replace the assistant's configuration with ``request``.

        The whole request is sent; fields left unset are not merged from the stored assistant.
        """
        assistant = await self.transport.request_model(
            "POST", f"/assistants/{assistant_id}", Assistant, body=request, operation="modify assistant"
        )
        logger.info("Assistant modified", assistant_id=assistant_id)
        return assistant

    async def delete(self, assistant_id: str) -> DeleteResponse:
        response = await self.transport.request_model(
            "DELETE", f"/assistants/{assistant_id}", DeleteResponse, operation="delete assistant"
        )
        logger.info("Assistant deleted", assistant_id=assistant_id, deleted=response.deleted)
        return response
