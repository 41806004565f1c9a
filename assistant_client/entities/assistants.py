"""Assistant resource models."""

from typing import Optional

from pydantic import Field

from .common import APIModel, JSONValue, Metadata, Tool, ToolResources


class Assistant(APIModel):
    id: str
    object: str = "assistant"
    created_at: int = 0
    name: Optional[str] = None
    description: Optional[str] = None
    model: str = ""
    instructions: Optional[str] = None
    tools: list[Tool] = Field(default_factory=list)
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: JSONValue = None


class CreateAssistantRequest(APIModel):
    """Body for creating an assistant; modifying one sends the same body as a full replacement."""

    model: str
    name: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    tools: Optional[list[Tool]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    top_p: Optional[float] = Field(default=None, ge=0, le=1)
    response_format: JSONValue = None
