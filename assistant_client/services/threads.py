"""Thread resource gateway."""

from typing import Optional

from ..entities import CreateThreadRequest, DeleteResponse, Metadata, Thread, ToolResources
from ..infrastructure.transport import Transport
from ..structured_logging import get_logger

logger = get_logger("THREADS_SERVICE")


class ThreadsService:
    def __init__(self, transport: Transport):
        self.transport = transport

    async def create(self, request: Optional[CreateThreadRequest] = None) -> Thread:
        thread = await self.transport.request_model(
            "POST", "/threads", Thread, body=request or CreateThreadRequest(), operation="create thread"
        )
        logger.info("Thread created", thread_id=thread.id)
        return thread

    async def get(self, thread_id: str) -> Thread:
        return await self.transport.request_model("GET", f"/threads/{thread_id}", Thread, operation="retrieve thread")

    async def modify(
        self, thread_id: str, tool_resources: Optional[ToolResources], metadata: Optional[Metadata]
    ) -> Thread:
        """Replace the thread's tool resources and metadata.

        Both keys are always sent, as ``null`` when not given.
        """
        body = {
            "tool_resources": (
                tool_resources.model_dump(mode="json", exclude_none=True) if tool_resources is not None else None
            ),
            "metadata": metadata,
        }
        thread = await self.transport.request_model(
            "POST", f"/threads/{thread_id}", Thread, body=body, operation="modify thread"
        )
        logger.info("Thread modified", thread_id=thread_id)
        return thread

    async def delete(self, thread_id: str) -> DeleteResponse:
        response = await self.transport.request_model(
            "DELETE", f"/threads/{thread_id}", DeleteResponse, operation="delete thread"
        )
        logger.info("Thread deleted", thread_id=thread_id, deleted=response.deleted)
        return response
