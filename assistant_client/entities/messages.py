"""Message resource models."""

from typing import Optional

from pydantic import Field

from .common import APIModel, JSONValue, ListParams, Metadata


class Annotation(APIModel):
    type: str
    text: Optional[str] = None


class Text(APIModel):
    value: str = ""
    annotations: list[Annotation] = Field(default_factory=list)


class ImageURL(APIModel):
    url: str
    detail: Optional[str] = None


class ImageFile(APIModel):
    file_id: str
    detail: Optional[str] = None


class MessageContent(APIModel):
    """One content part; ``type`` selects which of the optional fields is set."""

    type: str
    text: Optional[Text] = None
    image_url: Optional[ImageURL] = None
    image_file: Optional[ImageFile] = None


class IncompleteDetails(APIModel):
    reason: str


class AttachmentTool(APIModel):
    type: str


class Attachment(APIModel):
    file_id: str
    tools: Optional[list[AttachmentTool]] = None


class Message(APIModel):
    id: str
    object: str = "thread.message"
    created_at: int = 0
    thread_id: str = ""
    status: Optional[str] = None
    incomplete_details: Optional[IncompleteDetails] = None
    completed_at: Optional[int] = None
    incomplete_at: Optional[int] = None
    role: str = ""
    content: list[MessageContent] = Field(default_factory=list)
    assistant_id: Optional[str] = None
    run_id: Optional[str] = None
    attachments: Optional[list[Attachment]] = None
    metadata: Optional[Metadata] = None

    @property
    def text(self) -> str:
        """Concatenated value of every text content part."""
        return "".join(part.text.value for part in self.content if part.text is not None)


class CreateMessageRequest(APIModel):
    role: str = "user"
    # A plain string or a list of content parts.
    content: JSONValue
    attachments: Optional[list[Attachment]] = None
    metadata: Optional[Metadata] = None


class ListMessagesParams(ListParams):
    run_id: Optional[str] = None
