"""Pydantic models for conversations, documents and generated forms.

Models:
    - ChatMessage: Individual message in the assistant history
    - GeneratedFormSchema / FormField: Structured form returned by the model
    - UploadedDocument: Validated document awaiting form generation
    - ChatRequest / StreamChunk: Streaming chat API payloads
"""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from clinic_assist.models.forms import (
    FieldType,
    FormField,
    GeneratedFormSchema,
    UploadedDocument,
    schema_to_json,
)
from clinic_assist.models.schemas import ChatRequest, StreamChunk, StreamStatus


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in the assistant conversation.

    The text of an assistant message is overwritten in place while its
    reply streams in.

    Attributes:
        id: Unique message identifier.
        role: Who sent the message.
        text: The message text.
        created_at: Creation time.
        is_error: Whether this message reports a failed turn.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: MessageRole
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    is_error: bool = False


__all__ = [
    "ChatMessage",
    "ChatRequest",
    "FieldType",
    "FormField",
    "GeneratedFormSchema",
    "MessageRole",
    "StreamChunk",
    "StreamStatus",
    "UploadedDocument",
    "schema_to_json",
]
