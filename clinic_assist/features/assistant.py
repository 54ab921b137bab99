"""Protocol assistant conversation state.

Holds the linear message history of one browser page and streams each reply
into a placeholder message, notifying listeners after every fragment so the
UI can show partial text.
"""

import logging
from collections.abc import Callable
from enum import Enum

from clinic_assist.agent.generation_client import (
    ConversationHandle,
    GenerationClient,
    get_generation_client,
)
from clinic_assist.errors import ClinicAssistError
from clinic_assist.models import ChatMessage, MessageRole

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Olá. Sou o Assistente de Protocolos. Pergunte sobre doses, pontos de MTC "
    "ou diretrizes do e-SUS de forma direta."
)
ERROR_MESSAGE = "Erro ao processar. Tente novamente."

SUGGESTIONS = [
    "Ponto para náusea em gestantes?",
    "Critérios hipertensão APS",
    "Protocolo Dengue Grupo B",
    "Auriculoterapia para ansiedade",
]


class AssistantState(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    ERROR = "error"


MessageListener = Callable[[ChatMessage], None]


class AssistantFeature:
    """Conversation with the protocol assistant.

    The generation client and the conversation handle are created on the
    first turn. A failed turn drops the handle so the next turn opens a new
    session.
    """

    def __init__(
        self,
        client_factory: Callable[[], GenerationClient] = get_generation_client,
    ) -> None:
        self.messages: list[ChatMessage] = [
            ChatMessage(id="welcome", role=MessageRole.ASSISTANT, text=WELCOME_MESSAGE)
        ]
        self.state = AssistantState.IDLE
        self._client_factory = client_factory
        self._client: GenerationClient | None = None
        self._conversation: ConversationHandle | None = None
        self._listeners: list[MessageListener] = []

    def subscribe(self, listener: MessageListener) -> None:
        """Call ``listener`` with each message that is added or changed."""
        self._listeners.append(listener)

    def _notify(self, message: ChatMessage) -> None:
        for listener in self._listeners:
            listener(message)

    def _append(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        self._notify(message)
        return message

    @property
    def busy(self) -> bool:
        return self.state is AssistantState.AWAITING_REPLY

    def _ensure_conversation(self) -> tuple[GenerationClient, ConversationHandle]:
        if self._client is None:
            self._client = self._client_factory()
        if self._conversation is None:
            self._conversation = self._client.start_conversation()
        return self._client, self._conversation

    async def submit(self, text: str) -> bool:
        """Send a user message and stream the reply into the history.

        Args:
            text: The user's message.

        Returns:
            False if the submission was ignored (blank text or a reply
            already in progress), True otherwise.
        """
        if self.busy or not text.strip():
            return False

        self._append(ChatMessage(role=MessageRole.USER, text=text))
        self.state = AssistantState.AWAITING_REPLY

        placeholder: ChatMessage | None = None
        try:
            client, conversation = self._ensure_conversation()
            placeholder = self._append(ChatMessage(role=MessageRole.ASSISTANT))

            accumulated = ""
            async for fragment in client.send_turn(conversation, text):
                accumulated += fragment
                placeholder.text = accumulated
                self._notify(placeholder)
        except ClinicAssistError as e:
            logger.error(f"Assistant turn failed: {e}")
            self._conversation = None
            self.state = AssistantState.ERROR
            self._report_failure(placeholder)
        finally:
            self.state = AssistantState.IDLE

        return True

    def _report_failure(self, placeholder: ChatMessage | None) -> None:
        """Show the error message, keeping any partial reply."""
        if placeholder is not None and not placeholder.text:
            placeholder.text = ERROR_MESSAGE
            placeholder.is_error = True
            self._notify(placeholder)
        else:
            self._append(
                ChatMessage(role=MessageRole.ASSISTANT, text=ERROR_MESSAGE, is_error=True)
            )
