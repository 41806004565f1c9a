"""Run resource models and the run status enumeration."""

from enum import Enum
from typing import Optional

from pydantic import Field

from .common import APIModel, ErrorObject, JSONValue, ListParams, Metadata, Tool, ToolResources, Usage

ACTION_TYPE_SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"
TOOL_TYPE_FUNCTION = "function"


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


TERMINAL_STATUSES = frozenset(
    {RunStatus.COMPLETED, RunStatus.FAILED, RunStatus.CANCELLED, RunStatus.EXPIRED}
)
# Statuses at which a settle-wait hands control back to the caller.
STOPPING_STATUSES = TERMINAL_STATUSES | {RunStatus.REQUIRES_ACTION}


class FunctionCall(APIModel):
    name: str
    # Serialized JSON object, decoded by whoever executes the function.
    arguments: str = ""
    output: Optional[str] = None


class ToolCall(APIModel):
    id: str
    type: str = TOOL_TYPE_FUNCTION
    function: Optional[FunctionCall] = None


class SubmitToolOutputs(APIModel):
    tool_calls: list[ToolCall] = Field(default_factory=list)


class RequiredAction(APIModel):
    type: str = ACTION_TYPE_SUBMIT_TOOL_OUTPUTS
    submit_tool_outputs: Optional[SubmitToolOutputs] = None


class TruncationStrategy(APIModel):
    type: str = "auto"
    last_messages: Optional[int] = None


class Run(APIModel):
    """Server snapshot of a run.

    ``status`` is kept as the raw wire string so that a status outside ``RunStatus``
    still parses and can be reported by the run processor.
    """

    id: str
    object: str = "thread.run"
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: str
    required_action: Optional[RequiredAction] = None
    last_error: Optional[ErrorObject] = None
    expires_at: Optional[int] = None
    started_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    failed_at: Optional[int] = None
    completed_at: Optional[int] = None
    model: str = ""
    instructions: Optional[str] = None
    tools: list[Tool] = Field(default_factory=list)
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    usage: Optional[Usage] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_prompt_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    truncation_strategy: Optional[TruncationStrategy] = None
    response_format: JSONValue = None
    tool_choice: JSONValue = None
    parallel_tool_calls: bool = True

    @property
    def requires_action(self) -> bool:
        return self.status == RunStatus.REQUIRES_ACTION.value and self.required_action is not None

    @property
    def is_terminal(self) -> bool:
        return self.status in {status.value for status in TERMINAL_STATUSES}

    @property
    def tool_calls(self) -> list[ToolCall]:
        """Outstanding tool calls, empty unless the run is waiting on tool outputs."""
        if not self.requires_action or self.required_action.submit_tool_outputs is None:
            return []
        return self.required_action.submit_tool_outputs.tool_calls


class CreateRunRequest(APIModel):
    assistant_id: str
    model: Optional[str] = None
    instructions: Optional[str] = None
    additional_instructions: Optional[str] = None
    tools: Optional[list[Tool]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    # Set by the streaming gateway methods; never sent as false.
    stream: Optional[bool] = None
    max_prompt_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    truncation_strategy: Optional[TruncationStrategy] = None
    response_format: JSONValue = None
    tool_choice: JSONValue = None
    parallel_tool_calls: Optional[bool] = None


class ThreadMessageInput(APIModel):
    role: str = "user"
    content: str
    metadata: Optional[Metadata] = None


class ThreadRequest(APIModel):
    messages: Optional[list[ThreadMessageInput]] = None
    metadata: Optional[Metadata] = None


class CreateThreadAndRunRequest(CreateRunRequest):
    thread: Optional[ThreadRequest] = None


class ToolOutput(APIModel):
    tool_call_id: str
    output: str


class SubmitToolOutputsRequest(APIModel):
    tool_outputs: list[ToolOutput]
    stream: Optional[bool] = None


class ListRunsParams(ListParams):
    pass
