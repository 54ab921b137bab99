"""Streaming chat endpoint using Server-Sent Events.

Each request carries one user turn; the model-side session keyed by
``session_id`` keeps the history.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from clinic_assist.agent.generation_client import ConversationHandle, GenerationClient
from clinic_assist.api.dependencies import generation_client
from clinic_assist.errors import RemoteError
from clinic_assist.features.assistant import ERROR_MESSAGE
from clinic_assist.models.schemas import ChatRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(
    client: GenerationClient,
    handle: ConversationHandle,
    message: str,
) -> AsyncGenerator[str]:
    yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))

    try:
        async for fragment in client.send_turn(handle, message):
            yield _sse(
                StreamChunk(content=fragment, done=False, status=StreamStatus.GENERATING)
            )
    except RemoteError as e:
        logger.warning(f"Streaming turn failed for session {handle.session_id}: {e}")
        yield _sse(
            StreamChunk(
                content="",
                done=True,
                status=StreamStatus.ERROR,
                error=ERROR_MESSAGE,
                session_id=handle.session_id,
            )
        )
        return

    yield _sse(
        StreamChunk(
            content="",
            done=True,
            status=StreamStatus.COMPLETE,
            session_id=handle.session_id,
        )
    )


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    client: Annotated[GenerationClient, Depends(generation_client)],
) -> StreamingResponse:
    """Stream the assistant reply to one message.

    Args:
        request: Message and optional session id.
        client: Generation client.

    Returns:
        text/event-stream of StreamChunk JSON lines. The final chunk has
        done=true and the session id to continue the conversation.
    """
    handle = client.start_conversation(request.session_id)
    return StreamingResponse(
        _event_stream(client, handle, request.message),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
