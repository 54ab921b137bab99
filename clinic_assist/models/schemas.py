from enum import Enum

from pydantic import BaseModel, Field, field_validator


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        message: User's question.
        session_id: Optional session for conversation continuity.
    """

    message: str = Field(..., min_length=1)
    session_id: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status.
        error: User-facing error message if the turn failed.
        session_id: Session to send follow-up turns to (final chunk only).
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
    session_id: str | None = None
