"""Models shared by several resources: tools, tool resources, usage and list envelopes."""

from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

# Caller-defined JSON (tool parameters, response formats, tool choice) passed through unchanged.
JSONValue = Any
Metadata = dict[str, Any]

T = TypeVar("T")


class APIModel(BaseModel):
    """Base for wire models; unknown fields are ignored so newer API versions still parse."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorObject(APIModel):
    code: str = ""
    message: str = ""


class Usage(APIModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class FunctionTool(APIModel):
    name: str
    description: str = ""
    parameters: JSONValue = None


class Tool(APIModel):
    """A tool enabled on an assistant or run: ``function``, ``code_interpreter`` or ``file_search``."""

    type: str
    function: Optional[FunctionTool] = None


class CodeInterpreterResources(APIModel):
    file_ids: list[str] = Field(default_factory=list)


class StaticChunkingConfig(APIModel):
    max_chunk_size_tokens: int
    chunk_overlap_tokens: int


class ChunkingStrategy(APIModel):
    type: Optional[str] = None
    static: Optional[StaticChunkingConfig] = None


class VectorStore(APIModel):
    """Inline vector store created together with a thread."""

    file_ids: list[str] = Field(default_factory=list)
    chunking_strategy: Optional[ChunkingStrategy] = None
    metadata: Optional[Metadata] = None


class FileSearchResources(APIModel):
    vector_store_ids: Optional[list[str]] = None
    vector_stores: Optional[list[VectorStore]] = None


class ToolResources(APIModel):
    code_interpreter: Optional[CodeInterpreterResources] = None
    file_search: Optional[FileSearchResources] = None


class ListParams(BaseModel):
    """Cursor pagination shared by every list endpoint."""

    limit: Optional[int] = Field(default=None, ge=1, le=100)
    order: Optional[Literal["asc", "desc"]] = None
    after: Optional[str] = None
    before: Optional[str] = None

    def to_query(self) -> list[tuple[str, str]]:
        """Render the set fields as query pairs; list values become repeated ``name[]`` keys."""
        query: list[tuple[str, str]] = []
        for name, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, list):
                query.extend((f"{name}[]", str(item)) for item in value)
            else:
                query.append((name, str(value)))
        return query


class ListResponse(APIModel, Generic[T]):
    object: str = "list"
    data: list[T] = Field(default_factory=list)
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class DeleteResponse(APIModel):
    id: str
    object: str = ""
    deleted: bool = False
