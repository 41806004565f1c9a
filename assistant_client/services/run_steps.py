"""Run step resource gateway."""

from typing import Optional

from ..entities import GetRunStepParams, ListResponse, ListRunStepsParams, RunStep
from ..infrastructure.transport import Transport


class RunStepsService:
    def __init__(self, transport: Transport):
        self.transport = transport

    async def list(
        self, thread_id: str, run_id: str, params: Optional[ListRunStepsParams] = None
    ) -> ListResponse[RunStep]:
        return await self.transport.request_model(
            "GET",
            f"/threads/{thread_id}/runs/{run_id}/steps",
            ListResponse[RunStep],
            params=params.to_query() if params else None,
            operation="list run steps",
        )

    async def get(
        self, thread_id: str, run_id: str, step_id: str, params: Optional[GetRunStepParams] = None
    ) -> RunStep:
        return await self.transport.request_model(
            "GET",
            f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}",
            RunStep,
            params=params.to_query() if params else None,
            operation="retrieve run step",
        )
