"""Message resource gateway."""

from typing import Optional

from ..entities import CreateMessageRequest, DeleteResponse, ListMessagesParams, ListResponse, Message, Metadata
from ..infrastructure.transport import Transport
from ..structured_logging import get_logger

logger = get_logger("MESSAGES_SERVICE")


class MessagesService:
    def __init__(self, transport: Transport):
        self.transport = transport

    async def create(self, thread_id: str, request: CreateMessageRequest) -> Message:
        message = await self.transport.request_model(
            "POST", f"/threads/{thread_id}/messages", Message, body=request, operation="create message"
        )
        logger.info("Message created", thread_id=thread_id, message_id=message.id)
        return message

    async def list(self, thread_id: str, params: Optional[ListMessagesParams] = None) -> ListResponse[Message]:
        return await self.transport.request_model(
            "GET",
            f"/threads/{thread_id}/messages",
            ListResponse[Message],
            params=params.to_query() if params else None,
            operation="list messages",
        )

    async def get(self, thread_id: str, message_id: str) -> Message:
        return await self.transport.request_model(
            "GET", f"/threads/{thread_id}/messages/{message_id}", Message, operation="retrieve message"
        )

    async def modify(self, thread_id: str, message_id: str, metadata: Optional[Metadata]) -> Message:
        return await self.transport.request_model(
            "POST",
            f"/threads/{thread_id}/messages/{message_id}",
            Message,
            body={"metadata": metadata},
            operation="modify message",
        )

    async def delete(self, thread_id: str, message_id: str) -> DeleteResponse:
        response = await self.transport.request_model(
            "DELETE", f"/threads/{thread_id}/messages/{message_id}", DeleteResponse, operation="delete message"
        )
        logger.info("Message deleted", thread_id=thread_id, message_id=message_id, deleted=response.deleted)
        return response
