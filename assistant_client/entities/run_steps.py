"""Run step models: the audit trail of what a run did."""

from typing import Optional

from pydantic import BaseModel, Field

from .common import APIModel, ErrorObject, JSONValue, ListParams, Metadata, Usage

STEP_TYPE_MESSAGE_CREATION = "message_creation"
STEP_TYPE_TOOL_CALLS = "tool_calls"


class MessageCreation(APIModel):
    message_id: str


class StepFunction(APIModel):
    name: str = ""
    arguments: str = ""
    output: Optional[str] = None


class RunStepToolCall(APIModel):
    id: str
    type: str
    function: Optional[StepFunction] = None
    code_interpreter: JSONValue = None
    file_search: JSONValue = None


class StepDetails(APIModel):
    type: str
    message_creation: Optional[MessageCreation] = None
    tool_calls: Optional[list[RunStepToolCall]] = None


class RunStep(APIModel):
    id: str
    object: str = "thread.run.step"
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: str = ""
    status: str = ""
    step_details: StepDetails
    last_error: Optional[ErrorObject] = None
    expires_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    failed_at: Optional[int] = None
    completed_at: Optional[int] = None
    metadata: Optional[Metadata] = None
    usage: Optional[Usage] = None


class ListRunStepsParams(ListParams):
    # e.g. "step_details.tool_calls[*].file_search.results[*].content"
    include: Optional[list[str]] = None


class GetRunStepParams(BaseModel):
    include: list[str] = Field(default_factory=list)

    def to_query(self) -> list[tuple[str, str]]:
        return [("include[]", item) for item in self.include]
