"""Agno agent logic for the remote model.

Responsibilities:
    - Chat sessions with a fixed clinical-protocol instruction
    - Streaming reply fragments in emission order
    - Structured form generation from inline PDF/image documents
    - Parse-then-validate of the model's JSON answer

Keeps the model behind one client so features never talk to Agno directly.
"""

from clinic_assist.agent.config import GenerationConfig, get_generation_config
from clinic_assist.agent.generation_client import (
    ConversationHandle,
    GenerationClient,
    get_generation_client,
    parse_form_response,
)

__all__ = [
    "ConversationHandle",
    "GenerationClient",
    "GenerationConfig",
    "get_generation_client",
    "get_generation_config",
    "parse_form_response",
]
