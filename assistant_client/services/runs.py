"""Run resource gateway, including the streaming variants."""

from typing import Optional

from ..entities import (
    CreateRunRequest,
    CreateThreadAndRunRequest,
    ListResponse,
    ListRunsParams,
    Metadata,
    Run,
    SubmitToolOutputsRequest,
)
from ..infrastructure.transport import Body, Transport
from ..processors.sse_decoder import RunEventStream
from ..structured_logging import get_logger

logger = get_logger("RUNS_SERVICE")


class RunsService:
    """Translates run operations into transport calls.

    Streaming methods force ``stream=True`` on a copy of the request and return a
    ``RunEventStream`` whose status was confirmed successful before decoding starts.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    async def _open_stream(self, path: str, body: Body, operation: str, **log_context: str) -> RunEventStream:
        response = await self.transport.open_stream("POST", path, body=body, operation=operation)
        logger.info("Run stream opened", operation=operation, **log_context)
        return RunEventStream(response, operation=operation, **log_context)

    async def create(self, thread_id: str, request: CreateRunRequest) -> Run:
        run = await self.transport.request_model(
            "POST", f"/threads/{thread_id}/runs", Run, body=request, operation="create run"
        )
        logger.info(
            "Run created", thread_id=thread_id, run_id=run.id, assistant_id=run.assistant_id, status=run.status
        )
        return run

    async def create_stream(self, thread_id: str, request: CreateRunRequest) -> RunEventStream:
        return await self._open_stream(
            f"/threads/{thread_id}/runs",
            request.model_copy(update={"stream": True}),
            "create run stream",
            thread_id=thread_id,
            assistant_id=request.assistant_id,
        )

    async def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        run = await self.transport.request_model(
            "POST", "/threads/runs", Run, body=request, operation="create thread and run"
        )
        logger.info("Thread and run created", thread_id=run.thread_id, run_id=run.id, status=run.status)
        return run

    async def create_thread_and_run_stream(self, request: CreateThreadAndRunRequest) -> RunEventStream:
        return await self._open_stream(
            "/threads/runs",
            request.model_copy(update={"stream": True}),
            "create thread and run stream",
            assistant_id=request.assistant_id,
        )

    async def list(self, thread_id: str, params: Optional[ListRunsParams] = None) -> ListResponse[Run]:
        return await self.transport.request_model(
            "GET",
            f"/threads/{thread_id}/runs",
            ListResponse[Run],
            params=params.to_query() if params else None,
            operation="list runs",
        )

    async def get(self, thread_id: str, run_id: str) -> Run:
        return await self.transport.request_model(
            "GET", f"/threads/{thread_id}/runs/{run_id}", Run, operation="retrieve run"
        )

    async def modify(self, thread_id: str, run_id: str, metadata: Optional[Metadata]) -> Run:
        return await self.transport.request_model(
            "POST",
            f"/threads/{thread_id}/runs/{run_id}",
            Run,
            body={"metadata": metadata},
            operation="modify run",
        )

    async def submit_tool_outputs(self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest) -> Run:
        run = await self.transport.request_model(
            "POST",
            f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
            Run,
            body=request.model_copy(update={"stream": None}),
            operation="submit tool outputs",
        )
        logger.info(
            "Tool outputs submitted",
            thread_id=thread_id,
            run_id=run_id,
            output_count=len(request.tool_outputs),
            status=run.status,
        )
        return run

    async def submit_tool_outputs_stream(
        self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest
    ) -> RunEventStream:
        return await self._open_stream(
            f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
            request.model_copy(update={"stream": True}),
            "submit tool outputs stream",
            thread_id=thread_id,
            run_id=run_id,
        )

    async def cancel(self, thread_id: str, run_id: str) -> Run:
        run = await self.transport.request_model(
            "POST", f"/threads/{thread_id}/runs/{run_id}/cancel", Run, operation="cancel run"
        )
        logger.info("Run cancellation requested", thread_id=thread_id, run_id=run_id, status=run.status)
        return run
