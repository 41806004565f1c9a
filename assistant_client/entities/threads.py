"""Thread resource models."""

from typing import Optional

from .common import APIModel, JSONValue, Metadata, ToolResources
from .messages import Attachment


class Thread(APIModel):
    id: str
    object: str = "thread"
    created_at: int = 0
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None


class ThreadMessage(APIModel):
    """An initial message seeded into a thread on creation."""

    role: str = "user"
    content: JSONValue
    attachments: Optional[list[Attachment]] = None
    metadata: Optional[Metadata] = None


class CreateThreadRequest(APIModel):
    messages: Optional[list[ThreadMessage]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
