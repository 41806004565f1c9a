"""Data entities for the assistants client."""

from .assistants import Assistant, CreateAssistantRequest
from .common import (
    ChunkingStrategy,
    CodeInterpreterResources,
    DeleteResponse,
    ErrorObject,
    FileSearchResources,
    FunctionTool,
    JSONValue,
    ListParams,
    ListResponse,
    Metadata,
    StaticChunkingConfig,
    Tool,
    ToolResources,
    Usage,
    VectorStore,
)
from .events import (
    DONE_EVENT,
    ERROR_EVENT,
    MESSAGE_DELTA_EVENT,
    RUN_COMPLETED_EVENT,
    RUN_EVENTS,
    RUN_REQUIRES_ACTION_EVENT,
    StreamEvent,
)
from .messages import Attachment, CreateMessageRequest, ListMessagesParams, Message, MessageContent, Text
from .run_steps import GetRunStepParams, ListRunStepsParams, MessageCreation, RunStep, RunStepToolCall, StepDetails
from .runs import (
    STOPPING_STATUSES,
    TERMINAL_STATUSES,
    CreateRunRequest,
    CreateThreadAndRunRequest,
    FunctionCall,
    ListRunsParams,
    RequiredAction,
    Run,
    RunStatus,
    SubmitToolOutputs,
    SubmitToolOutputsRequest,
    ThreadMessageInput,
    ThreadRequest,
    ToolCall,
    ToolOutput,
    TruncationStrategy,
)
from .threads import CreateThreadRequest, Thread, ThreadMessage

__all__ = [
    "Assistant",
    "CreateAssistantRequest",
    "ChunkingStrategy",
    "CodeInterpreterResources",
    "DeleteResponse",
    "ErrorObject",
    "FileSearchResources",
    "FunctionTool",
    "JSONValue",
    "ListParams",
    "ListResponse",
    "Metadata",
    "StaticChunkingConfig",
    "Tool",
    "ToolResources",
    "Usage",
    "VectorStore",
    "StreamEvent",
    "DONE_EVENT",
    "ERROR_EVENT",
    "MESSAGE_DELTA_EVENT",
    "RUN_COMPLETED_EVENT",
    "RUN_EVENTS",
    "RUN_REQUIRES_ACTION_EVENT",
    "Attachment",
    "CreateMessageRequest",
    "ListMessagesParams",
    "Message",
    "MessageContent",
    "Text",
    "GetRunStepParams",
    "ListRunStepsParams",
    "MessageCreation",
    "RunStep",
    "RunStepToolCall",
    "StepDetails",
    "STOPPING_STATUSES",
    "TERMINAL_STATUSES",
    "CreateRunRequest",
    "CreateThreadAndRunRequest",
    "FunctionCall",
    "ListRunsParams",
    "RequiredAction",
    "Run",
    "RunStatus",
    "SubmitToolOutputs",
    "SubmitToolOutputsRequest",
    "ThreadMessageInput",
    "ThreadRequest",
    "ToolCall",
    "ToolOutput",
    "TruncationStrategy",
    "CreateThreadRequest",
    "Thread",
    "ThreadMessage",
]
