"""Server-Sent Event constants and the decoded stream event model."""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import DecodeError
from .runs import Run

# Wire framing
SSE_EVENT_PREFIX = "event:"
SSE_DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"

# Synthetic events produced by the decoder itself
DONE_EVENT = "done"
ERROR_EVENT = "error"

# Run lifecycle events
RUN_CREATED_EVENT = "thread.run.created"
RUN_QUEUED_EVENT = "thread.run.queued"
RUN_IN_PROGRESS_EVENT = "thread.run.in_progress"
RUN_REQUIRES_ACTION_EVENT = "thread.run.requires_action"
RUN_COMPLETED_EVENT = "thread.run.completed"
RUN_FAILED_EVENT = "thread.run.failed"
RUN_CANCELLING_EVENT = "thread.run.cancelling"
RUN_CANCELLED_EVENT = "thread.run.cancelled"
RUN_EXPIRED_EVENT = "thread.run.expired"

# Events whose payload is a full run snapshot
RUN_EVENTS = frozenset(
    {
        RUN_CREATED_EVENT,
        RUN_QUEUED_EVENT,
        RUN_IN_PROGRESS_EVENT,
        RUN_REQUIRES_ACTION_EVENT,
        RUN_COMPLETED_EVENT,
        RUN_FAILED_EVENT,
        RUN_CANCELLING_EVENT,
        RUN_CANCELLED_EVENT,
        RUN_EXPIRED_EVENT,
    }
)

# Step and message events
RUN_STEP_CREATED_EVENT = "thread.run.step.created"
RUN_STEP_DELTA_EVENT = "thread.run.step.delta"
RUN_STEP_COMPLETED_EVENT = "thread.run.step.completed"
MESSAGE_CREATED_EVENT = "thread.message.created"
MESSAGE_DELTA_EVENT = "thread.message.delta"
MESSAGE_COMPLETED_EVENT = "thread.message.completed"


class StreamEvent(BaseModel):
    """One decoded SSE event: its name and the raw data payload."""

    model_config = ConfigDict(frozen=True)

    event: str
    data: bytes = b""
    # Set only on the decoder's own error event.
    error: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.event == DONE_EVENT

    @property
    def is_error(self) -> bool:
        return self.event == ERROR_EVENT

    @property
    def is_run_event(self) -> bool:
        return self.event in RUN_EVENTS

    def parse_json(self) -> Any:
        """Decode the payload as JSON, raising ``DecodeError`` when it is malformed."""
        try:
            return json.loads(self.data)
        except ValueError as err:
            raise DecodeError(f"Malformed JSON in '{self.event}' event: {err}") from err

    def as_run(self) -> Run:
        """Decode a ``thread.run.*`` payload into a run snapshot."""
        if not self.is_run_event:
            raise DecodeError(f"Event '{self.event}' does not carry a run")
        try:
            return Run.model_validate(self.parse_json())
        except ValidationError as err:
            raise DecodeError(f"Invalid run payload in '{self.event}' event: {err}") from err
