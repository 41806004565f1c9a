"""Client facade wiring configuration, transport, resource gateways and the run engine."""

import asyncio
from typing import Any, Mapping, Optional, Union

import httpx

from .config import ClientConfig
from .entities import Run
from .infrastructure.transport import Transport
from .processors import RunEventStream, RunProcessor, ToolOutputSubmitter
from .services import AssistantsService, MessagesService, RunStepsService, RunsService, ThreadsService
from .structured_logging import get_logger

logger = get_logger("ASSISTANTS_CLIENT")


class AssistantsClient:
    """Entry point for the Assistants API.

    Usage:
        async with AssistantsClient() as client:
            run = await client.runs.create(thread_id, CreateRunRequest(assistant_id=assistant_id))
            run = await client.wait_until_settled(thread_id, run.id)
    """

    def __init__(self, config: Optional[ClientConfig] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config or ClientConfig()
        if not self.config.has_api_key:
            logger.warning("No API key configured; requests will be rejected by the API")

        self.transport = Transport(self.config, http_client=http_client)
        self.assistants = AssistantsService(self.transport)
        self.threads = ThreadsService(self.transport)
        self.messages = MessagesService(self.transport)
        self.runs = RunsService(self.transport)
        self.run_steps = RunStepsService(self.transport)
        self.run_processor = RunProcessor(self.runs, self.config)
        self.tool_outputs = ToolOutputSubmitter(self.runs)

    async def wait_until_settled(
        self,
        thread_id: str,
        run_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Run:
        return await self.run_processor.wait_until_settled(
            thread_id, run_id, poll_interval=poll_interval, timeout=timeout, cancel_event=cancel_event
        )

    async def submit_tool_outputs(
        self, run: Run, outputs: Mapping[str, str], stream: bool = False
    ) -> Union[Run, RunEventStream]:
        return await self.tool_outputs.submit(run, outputs, stream=stream)

    async def cancel_run(self, thread_id: str, run_id: str) -> Run:
        return await self.run_processor.cancel_run(thread_id, run_id)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "AssistantsClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
