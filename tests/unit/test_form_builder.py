"""Unit tests for the form-builder state machine."""

import asyncio
from unittest.mock import patch

import pytest
import pytest_check as check

from clinic_assist.errors import ConfigurationError, ParseError, RemoteError
from clinic_assist.features.form_builder import (
    GENERATION_FAILED_MESSAGE,
    SAVED_NOTICE_SECONDS,
    FormBuilderFeature,
    FormBuilderState,
    ViewTab,
)
from clinic_assist.models.forms import GeneratedFormSchema
from clinic_assist.parsing.documents import MAX_FILE_SIZE, TOO_LARGE_MESSAGE
from tests.conftest import FakeGenerationClient


@pytest.fixture
def feature(fake_client: FakeGenerationClient) -> FormBuilderFeature:
    return FormBuilderFeature(client_factory=lambda: fake_client)


@pytest.fixture
def ready_feature(feature: FormBuilderFeature, pdf_bytes: bytes) -> FormBuilderFeature:
    assert feature.select_document("protocolo.pdf", "application/pdf", pdf_bytes)
    return feature


class TestDocumentSelection:
    """Tests for empty -> ready."""

    def test_starts_empty(self, feature: FormBuilderFeature) -> None:
        assert feature.state is FormBuilderState.EMPTY

    def test_valid_document_makes_feature_ready(
        self, feature: FormBuilderFeature, pdf_bytes: bytes
    ) -> None:
        accepted = feature.select_document("protocolo.pdf", "application/pdf", pdf_bytes)

        check.is_true(accepted)
        check.equal(feature.state, FormBuilderState.READY)
        check.equal(feature.document.name, "protocolo.pdf")
        check.is_none(feature.error)

    def test_oversized_document_stays_empty(self, feature: FormBuilderFeature) -> None:
        oversized = b"%PDF-1.4" + b"\x00" * MAX_FILE_SIZE

        accepted = feature.select_document("grande.pdf", "application/pdf", oversized)

        check.is_false(accepted)
        check.equal(feature.state, FormBuilderState.EMPTY)
        check.equal(feature.error, TOO_LARGE_MESSAGE)
        check.is_none(feature.document)

    def test_rejected_document_keeps_previous_selection(
        self, ready_feature: FormBuilderFeature
    ) -> None:
        ready_feature.select_document("notas.txt", "text/plain", b"texto")

        check.equal(ready_feature.state, FormBuilderState.READY)
        check.equal(ready_feature.document.name, "protocolo.pdf")

    def test_new_selection_replaces_document(
        self, ready_feature: FormBuilderFeature, png_bytes: bytes
    ) -> None:
        ready_feature.select_document("ficha.png", "image/png", png_bytes)

        assert ready_feature.document.name == "ficha.png"

    def test_clear_document_returns_to_empty(self, ready_feature: FormBuilderFeature) -> None:
        ready_feature.clear_document()

        assert ready_feature.state is FormBuilderState.EMPTY


class TestGenerate:
    """Tests for ready -> generating -> result | failed."""

    async def test_success_shows_preview_of_schema(
        self,
        ready_feature: FormBuilderFeature,
        fake_client: FakeGenerationClient,
        form_schema: GeneratedFormSchema,
        pdf_bytes: bytes,
    ) -> None:
        ready_feature.hint = "Use selects para sintomas"
        ready_feature.select_tab(ViewTab.JSON)

        result = await ready_feature.generate()

        check.equal(result, form_schema)
        check.equal(ready_feature.state, FormBuilderState.RESULT)
        check.equal(ready_feature.active_tab, ViewTab.PREVIEW)
        check.equal(
            fake_client.form_calls,
            [(pdf_bytes, "application/pdf", "Use selects para sintomas")],
        )
        check.equal(len(ready_feature.preview), len(form_schema.fields))

    async def test_generate_without_document_is_noop(
        self, feature: FormBuilderFeature, fake_client: FakeGenerationClient
    ) -> None:
        result = await feature.generate()

        check.is_none(result)
        check.equal(feature.state, FormBuilderState.EMPTY)
        check.equal(fake_client.form_calls, [])

    async def test_generate_while_generating_is_noop(
        self, ready_feature: FormBuilderFeature, fake_client: FakeGenerationClient
    ) -> None:
        fake_client.gate = asyncio.Event()
        first = asyncio.create_task(ready_feature.generate())
        await asyncio.sleep(0)

        check.equal(ready_feature.state, FormBuilderState.GENERATING)
        check.is_false(ready_feature.can_generate)

        second = await ready_feature.generate()

        check.is_none(second)
        check.equal(ready_feature.state, FormBuilderState.GENERATING)
        check.equal(len(fake_client.form_calls), 1)

        fake_client.gate.set()
        await first
        check.equal(ready_feature.state, FormBuilderState.RESULT)

    @pytest.mark.parametrize(
        "error",
        [RemoteError("timeout"), ParseError("bad json"), ConfigurationError("no key")],
    )
    async def test_failure_keeps_document_and_allows_retry(
        self,
        ready_feature: FormBuilderFeature,
        fake_client: FakeGenerationClient,
        error: Exception,
    ) -> None:
        document = ready_feature.document
        fake_client.form_error = error

        result = await ready_feature.generate()

        check.is_none(result)
        check.equal(ready_feature.state, FormBuilderState.FAILED)
        check.equal(ready_feature.error, GENERATION_FAILED_MESSAGE)
        check.is_(ready_feature.document, document)
        check.is_true(ready_feature.can_generate)

        fake_client.form_error = None
        await ready_feature.generate()

        check.equal(ready_feature.state, FormBuilderState.RESULT)
        check.is_none(ready_feature.error)

    async def test_missing_configuration_is_reported_not_raised(self, pdf_bytes: bytes) -> None:
        def failing_factory():
            raise ConfigurationError("API key required")

        feature = FormBuilderFeature(client_factory=failing_factory)
        feature.select_document("protocolo.pdf", "application/pdf", pdf_bytes)

        await feature.generate()

        assert feature.state is FormBuilderState.FAILED


class TestResultActions:
    """Tests for discard, save, tabs and the library."""

    async def test_json_view_round_trips_schema(
        self, ready_feature: FormBuilderFeature, form_schema: GeneratedFormSchema
    ) -> None:
        await ready_feature.generate()
        ready_feature.select_tab("json")

        check.equal(ready_feature.active_tab, ViewTab.JSON)
        check.equal(GeneratedFormSchema.model_validate_json(ready_feature.raw_json), form_schema)

    async def test_discard_returns_to_empty(self, ready_feature: FormBuilderFeature) -> None:
        await ready_feature.generate()

        ready_feature.discard()

        check.equal(ready_feature.state, FormBuilderState.EMPTY)
        check.is_none(ready_feature.active_schema)
        check.equal(ready_feature.raw_json, "")
        check.equal(ready_feature.preview, [])

    async def test_save_appends_without_dedup(
        self, ready_feature: FormBuilderFeature, form_schema: GeneratedFormSchema
    ) -> None:
        await ready_feature.generate()

        first = ready_feature.save()
        second = ready_feature.save()

        check.equal((first, second), (0, 1))
        check.equal(list(ready_feature.library), [form_schema, form_schema])
        check.equal(ready_feature.state, FormBuilderState.RESULT)

    def test_save_without_schema_does_nothing(self, feature: FormBuilderFeature) -> None:
        assert feature.save() is None
        assert len(feature.library) == 0
        assert not feature.show_saved_notice

    async def test_saved_notice_expires(self, ready_feature: FormBuilderFeature) -> None:
        await ready_feature.generate()

        with patch("clinic_assist.features.form_builder.time.monotonic", return_value=100.0):
            ready_feature.save()
            check.is_true(ready_feature.show_saved_notice)

        with patch(
            "clinic_assist.features.form_builder.time.monotonic",
            return_value=100.0 + SAVED_NOTICE_SECONDS,
        ):
            check.is_false(ready_feature.show_saved_notice)

    async def test_dismiss_hides_notice(self, ready_feature: FormBuilderFeature) -> None:
        await ready_feature.generate()
        ready_feature.save()

        ready_feature.dismiss_saved_notice()

        assert not ready_feature.show_saved_notice

    async def test_load_replaces_schema_and_clears_document(
        self, ready_feature: FormBuilderFeature, pdf_bytes: bytes
    ) -> None:
        other = GeneratedFormSchema(form_title="Outra", fields=())
        ready_feature.library.add(other)
        await ready_feature.generate()
        ready_feature.select_document("novo.pdf", "application/pdf", pdf_bytes)

        loaded = ready_feature.load(0)

        check.is_(loaded, other)
        check.is_(ready_feature.active_schema, other)
        check.is_none(ready_feature.document)
        check.equal(ready_feature.state, FormBuilderState.RESULT)

    def test_delete_removes_only_that_entry(self, feature: FormBuilderFeature) -> None:
        schemas = [GeneratedFormSchema(form_title=t, fields=()) for t in ("A", "B", "C")]
        for schema in schemas:
            feature.library.add(schema)

        feature.delete(0)

        check.equal(len(feature.library), 2)
        check.is_(feature.library[0], schemas[1])
        check.is_(feature.library[1], schemas[2])
