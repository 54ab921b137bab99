"""Agno-backed generation client: chat sessions and structured form generation.

The only boundary between the application and the remote model.

Two agents share one model configuration:

1. **Chat agent** - carries the fixed protocol-assistant instruction and keeps
   turn history per session in an in-memory Agno database. A conversation
   handle is just a session id; a new handle starts a fresh history.

2. **Form agent** - stateless. Receives the document inline plus the form
   instruction and must answer with JSON matching GeneratedFormSchema. The
   answer is parsed and validated here rather than trusted.
"""

import json
import logging
import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.media import File, Image
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clinic_assist.agent.config import GenerationConfig, get_generation_config
from clinic_assist.agent.prompts import CHAT_SYSTEM_INSTRUCTION, build_form_prompt
from clinic_assist.errors import ParseError, RemoteError
from clinic_assist.models.forms import FieldType, GeneratedFormSchema

logger = logging.getLogger(__name__)

_CONTENT_EVENT = RunEvent.run_content.value
_ERROR_EVENT = RunEvent.run_error.value


@dataclass(frozen=True)
class ConversationHandle:
    """Reference to one remote chat session."""

    session_id: str
    created_at: datetime = field(default_factory=datetime.now)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_form_response(content: Any) -> GeneratedFormSchema:
    """Validate the form agent's answer into a GeneratedFormSchema.

    Accepts the already-parsed model Agno produces in JSON mode, a plain
    dict, or raw JSON text (optionally wrapped in a markdown code fence).

    Raises:
        RemoteError: If the model returned no payload.
        ParseError: If the payload does not match the declared shape.
    """
    if content is None or (isinstance(content, str) and not content.strip()):
        raise RemoteError("Model returned no content")

    if isinstance(content, BaseModel):
        payload = content.model_dump(by_alias=True)
    elif isinstance(content, dict):
        payload = content
    elif isinstance(content, str):
        try:
            payload = json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as e:
            raise ParseError(f"Response is not valid JSON: {e}") from e
    else:
        raise ParseError(f"Unexpected response type: {type(content).__name__}")

    try:
        schema = GeneratedFormSchema.model_validate(payload)
    except PydanticValidationError as e:
        raise ParseError(f"Response does not match the form shape: {e}") from e

    for form_field in schema.fields:
        if form_field.type is FieldType.SELECT and not form_field.options:
            logger.warning(f"Select field '{form_field.id}' has no options")

    return schema


class GenerationClient:
    """Client for the remote model.

    Wraps two Agno agents with:
    - In-memory session history for the assistant
    - JSON-mode structured output for the form builder
    - Conversion of provider failures into RemoteError / ParseError
    """

    def __init__(self, config: GenerationConfig | None = None) -> None:
        """Initialize the generation client.

        Args:
            config: Optional configuration.
                    Loads from environment if not provided.

        Raises:
            ConfigurationError: If no configuration is given and the
                environment has no API key.
        """
        self._config = config or get_generation_config()
        self._storage = InMemoryDb()
        self._chat_agent = self._create_chat_agent()
        self._form_agent = self._create_form_agent()

    def _create_model(self, temperature: float, max_tokens: int) -> OpenAIChat:
        return OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def _create_chat_agent(self) -> Agent:
        """Create the protocol assistant agent.

        Returns:
            Agent with the fixed system instruction and per-session history.
        """
        return Agent(
            model=self._create_model(
                self._config.chat_temperature, self._config.chat_max_tokens
            ),
            db=self._storage,
            system_message=CHAT_SYSTEM_INSTRUCTION,
            # Last 10 runs (~20 messages) of the session go back to the model
            add_history_to_context=True,
            num_history_runs=10,
        )

    def _create_form_agent(self) -> Agent:
        """Create the structured form generation agent.

        Returns:
            Stateless Agent constrained to GeneratedFormSchema output.
        """
        return Agent(
            model=self._create_model(
                self._config.form_temperature, self._config.form_max_tokens
            ),
            output_schema=GeneratedFormSchema,
            use_json_mode=True,
        )

    def start_conversation(self, session_id: str | None = None) -> ConversationHandle:
        """Open a chat session.

        Args:
            session_id: Existing session to continue. A new id (and so an
                empty history) is used when omitted.

        Returns:
            Handle to pass to every send_turn of this conversation.
        """
        handle = ConversationHandle(session_id=session_id or uuid.uuid4().hex)
        logger.debug(f"Conversation {handle.session_id} opened")
        return handle

    async def send_turn(
        self,
        handle: ConversationHandle,
        user_text: str,
    ) -> AsyncGenerator[str]:
        """Stream the assistant reply to one user turn.

        Only the new text is sent; the session keeps prior turns.

        Args:
            handle: Conversation handle from start_conversation.
            user_text: The user's message.

        Yields:
            Reply text fragments in emission order.

        Raises:
            RemoteError: If the session or the provider fails mid-turn.
        """
        try:
            response_stream = self._chat_agent.arun(
                user_text,
                session_id=handle.session_id,
                stream=True,
            )
            async for chunk in response_stream:
                event = getattr(chunk, "event", None)
                if event == _ERROR_EVENT:
                    raise RemoteError(f"Model reported an error: {chunk.content}")
                if event == _CONTENT_EVENT and isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content
        except RemoteError:
            logger.error(f"Chat turn failed in session {handle.session_id}")
            raise
        except Exception as e:
            logger.error(f"Chat turn failed in session {handle.session_id}: {e}")
            raise RemoteError(str(e)) from e

    async def generate_form(
        self,
        document_bytes: bytes,
        media_type: str,
        hint_text: str = "",
    ) -> GeneratedFormSchema:
        """Turn a clinical document into a form schema.

        Args:
            document_bytes: Raw PDF or image content.
            media_type: Media type of the document.
            hint_text: Free-text instructions from the user.

        Returns:
            Validated GeneratedFormSchema.

        Raises:
            RemoteError: If the request fails or returns nothing.
            ParseError: If the answer does not match the declared shape.
        """
        media: dict[str, list[Any]]
        if media_type.startswith("image/"):
            media = {"images": [Image(content=document_bytes)]}
        else:
            media = {"files": [File(content=document_bytes, mime_type=media_type)]}

        try:
            response = await self._form_agent.arun(build_form_prompt(hint_text), **media)
        except Exception as e:
            logger.error(f"Form generation request failed: {e}")
            raise RemoteError(str(e)) from e

        try:
            schema = parse_form_response(getattr(response, "content", None))
        except (RemoteError, ParseError) as e:
            logger.error(f"Form generation returned an unusable answer: {e}")
            raise

        logger.info(f"Generated form '{schema.form_title}' with {len(schema.fields)} fields")
        return schema


# Module-level singleton instance
_generation_client: GenerationClient | None = None


def get_generation_client() -> GenerationClient:
    """Get or create the global generation client.

    Returns:
        The GenerationClient instance.

    Raises:
        ConfigurationError: If the API key is missing.
    """
    global _generation_client
    if _generation_client is None:
        _generation_client = GenerationClient()
    return _generation_client
