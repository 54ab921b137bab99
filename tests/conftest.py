"""Pytest fixtures and shared test configuration.

Fixtures:
    - pdf_bytes / png_bytes: Minimal valid documents
    - form_payload / form_schema: A generated form as the model returns it
    - fake_client: In-process stand-in for GenerationClient
    - async_client: HTTPX client for API testing, wired to fake_client
"""

import asyncio
import io
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from clinic_assist.agent.generation_client import ConversationHandle
from clinic_assist.api.app import create_app
from clinic_assist.api.dependencies import generation_client
from clinic_assist.errors import RemoteError
from clinic_assist.models.forms import GeneratedFormSchema

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class FakeGenerationClient:
    """Records calls and replays canned replies.

    Attributes:
        fragments: Reply fragments streamed for every turn.
        error_after: Raise RemoteError after this many fragments (None: never).
        schema: Schema returned by generate_form.
        form_error: Exception raised by generate_form instead.
        gate: When set, generate_form waits on it before answering.
    """

    def __init__(self) -> None:
        self.fragments: list[str] = []
        self.error_after: int | None = None
        self.schema: GeneratedFormSchema | None = None
        self.form_error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.started: list[ConversationHandle] = []
        self.turns: list[tuple[str, str]] = []
        self.form_calls: list[tuple[bytes, str, str]] = []

    def start_conversation(self, session_id: str | None = None) -> ConversationHandle:
        handle = ConversationHandle(session_id=session_id or f"session-{len(self.started) + 1}")
        self.started.append(handle)
        return handle

    async def send_turn(self, handle: ConversationHandle, user_text: str) -> AsyncGenerator[str]:
        self.turns.append((handle.session_id, user_text))
        for index, fragment in enumerate(self.fragments):
            if index == self.error_after:
                raise RemoteError("stream interrupted")
            yield fragment
        if self.error_after is not None and self.error_after >= len(self.fragments):
            raise RemoteError("stream interrupted")

    async def generate_form(
        self, document_bytes: bytes, media_type: str, hint_text: str = ""
    ) -> GeneratedFormSchema:
        self.form_calls.append((document_bytes, media_type, hint_text))
        if self.gate is not None:
            await self.gate.wait()
        if self.form_error is not None:
            raise self.form_error
        return self.schema


@pytest.fixture
def pdf_bytes() -> bytes:
    """Return a one-page blank PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_HEADER + b"\x00" * 64


@pytest.fixture
def form_payload() -> dict:
    """Return a form as the model answers it, with camelCase keys."""
    return {
        "formTitle": "Ficha de Acompanhamento de Hipertensão",
        "description": "Registro de consulta de hipertensão arterial na APS",
        "fields": [
            {
                "id": "pressao_sistolica",
                "label": "Pressão sistólica (mmHg)",
                "type": "number",
                "required": True,
                "placeholder": "Ex: 120",
                "validationRule": "Deve ser > 0",
            },
            {
                "id": "data_consulta",
                "label": "Data da consulta",
                "type": "date",
                "required": True,
            },
            {
                "id": "adesao",
                "label": "Adesão ao tratamento",
                "type": "select",
                "required": False,
                "options": ["Boa", "Regular", "Ruim"],
            },
            {
                "id": "tabagista",
                "label": "Tabagista",
                "type": "checkbox",
                "required": False,
            },
            {
                "id": "observacoes",
                "label": "Observações",
                "type": "textarea",
                "required": False,
            },
        ],
    }


@pytest.fixture
def form_schema(form_payload: dict) -> GeneratedFormSchema:
    return GeneratedFormSchema.model_validate(form_payload)


@pytest.fixture
def fake_client(form_schema: GeneratedFormSchema) -> FakeGenerationClient:
    client = FakeGenerationClient()
    client.schema = form_schema
    return client


@pytest.fixture
async def async_client(fake_client: FakeGenerationClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose app uses fake_client for every model call.
    """
    app = create_app()
    app.dependency_overrides[generation_client] = lambda: fake_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
