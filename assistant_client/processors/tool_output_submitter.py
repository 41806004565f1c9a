"""Tool output submission: answers a run's outstanding tool calls in one request."""

from typing import TYPE_CHECKING, Mapping, Union

from ..entities.runs import Run, RunStatus, SubmitToolOutputsRequest, ToolOutput
from ..errors import MismatchedToolCallsError, UnexpectedStatusError
from ..structured_logging import get_logger, get_or_create_correlation_id
from .sse_decoder import RunEventStream

if TYPE_CHECKING:
    from ..services.runs import RunsService

logger = get_logger("TOOL_OUTPUT_SUBMITTER")


class ToolOutputSubmitter:
    """Pairs a run's outstanding tool calls with caller-supplied outputs and submits them.

    Every outstanding tool call must be answered in the same submission; partial sets are
    rejected because the run would stall server-side. After submitting, ``requires_action``
    can recur, so the caller settles the run again or consumes the returned stream.
    """

    def __init__(self, runs: "RunsService"):
        self.runs = runs

    @staticmethod
    def build_tool_outputs(run: Run, outputs: Mapping[str, str]) -> list[ToolOutput]:
        """Build one ``ToolOutput`` per outstanding tool call, in the run's tool call order.

        Raises:
            UnexpectedStatusError: The run is not waiting on tool outputs
            MismatchedToolCallsError: ``outputs`` has unknown ids or lacks outstanding ones
        """
        if run.status == RunStatus.REQUIRES_ACTION.value and (
            run.required_action is None or run.required_action.submit_tool_outputs is None
        ):
            raise UnexpectedStatusError(
                run.status, f"run {run.id} reports {run.status} without required_action.submit_tool_outputs"
            )
        if not run.requires_action:
            raise UnexpectedStatusError(
                run.status, f"run {run.id} must be in {RunStatus.REQUIRES_ACTION.value} to submit tool outputs"
            )

        tool_calls = run.tool_calls
        outstanding_ids = [tool_call.id for tool_call in tool_calls]
        unknown_ids = sorted(set(outputs) - set(outstanding_ids))
        missing_ids = [tool_call_id for tool_call_id in outstanding_ids if tool_call_id not in outputs]
        if unknown_ids or missing_ids:
            logger.error(
                "Tool outputs do not match outstanding tool calls",
                thread_id=run.thread_id,
                run_id=run.id,
                unknown_ids=unknown_ids,
                missing_ids=missing_ids,
            )
            raise MismatchedToolCallsError(run.id, unknown_ids, missing_ids)

        return [ToolOutput(tool_call_id=tool_call_id, output=outputs[tool_call_id]) for tool_call_id in outstanding_ids]

    async def submit(
        self, run: Run, outputs: Mapping[str, str], stream: bool = False
    ) -> Union[Run, RunEventStream]:
        """Submit outputs for every outstanding tool call of ``run``.

        Returns the updated run snapshot, or a ``RunEventStream`` when ``stream`` is True.
        """
        tool_outputs = self.build_tool_outputs(run, outputs)
        request = SubmitToolOutputsRequest(tool_outputs=tool_outputs)
        logger.info(
            "Submitting tool outputs",
            thread_id=run.thread_id,
            run_id=run.id,
            correlation_id=get_or_create_correlation_id(),
            output_count=len(tool_outputs),
            stream=stream,
        )
        if stream:
            return await self.runs.submit_tool_outputs_stream(run.thread_id, run.id, request)
        return await self.runs.submit_tool_outputs(run.thread_id, run.id, request)
