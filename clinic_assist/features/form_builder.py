"""Smart form builder state.

Tracks the selected document, the generation in flight, the active schema
with its preview/JSON tab, and the saved-schema library of one browser page.
Only one generation may be outstanding at a time.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

from clinic_assist.agent.generation_client import GenerationClient, get_generation_client
from clinic_assist.errors import ClinicAssistError, ValidationError
from clinic_assist.features.library import FormLibrary
from clinic_assist.features.preview import FieldControl, build_preview
from clinic_assist.models.forms import GeneratedFormSchema, UploadedDocument, schema_to_json
from clinic_assist.parsing.documents import load_document

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = (
    "Falha ao gerar o formulário. Verifique se o documento é válido ou tente novamente."
)
SAVED_NOTICE_SECONDS = 3.0


class FormBuilderState(str, Enum):
    EMPTY = "empty"
    READY = "ready"
    GENERATING = "generating"
    RESULT = "result"
    FAILED = "failed"


class ViewTab(str, Enum):
    PREVIEW = "preview"
    JSON = "json"


class FormBuilderFeature:
    """Document-to-form generation for one page.

    Attributes:
        document: Document awaiting generation, if any.
        hint: Free-text instructions sent with the document.
        active_schema: Schema currently shown.
        error: Validation or generation message to display.
        active_tab: Which view of the active schema is shown.
        library: Saved schemas.
    """

    def __init__(
        self,
        client_factory: Callable[[], GenerationClient] = get_generation_client,
        library: FormLibrary | None = None,
    ) -> None:
        self.document: UploadedDocument | None = None
        self.hint = ""
        self.active_schema: GeneratedFormSchema | None = None
        self.error: str | None = None
        self.active_tab = ViewTab.PREVIEW
        self.library = library if library is not None else FormLibrary()
        self._client_factory = client_factory
        self._client: GenerationClient | None = None
        self._generating = False
        self._failed = False
        self._saved_at: float | None = None

    @property
    def state(self) -> FormBuilderState:
        if self._generating:
            return FormBuilderState.GENERATING
        if self.active_schema is not None:
            return FormBuilderState.RESULT
        if self._failed:
            return FormBuilderState.FAILED
        if self.document is not None:
            return FormBuilderState.READY
        return FormBuilderState.EMPTY

    @property
    def can_generate(self) -> bool:
        return self.document is not None and not self._generating

    def select_document(self, filename: str, media_type: str | None, content: bytes) -> bool:
        """Validate and keep a newly selected file.

        A rejected file leaves the current selection and state untouched
        and sets ``error`` to the validation message.

        Returns:
            True if the document was accepted.
        """
        try:
            document = load_document(filename, media_type, content)
        except ValidationError as e:
            self.error = str(e)
            return False

        self.document = document
        self.error = None
        self._failed = False
        logger.info(f"Selected {document.name} ({document.media_type}, {document.size} bytes)")
        return True

    def clear_document(self) -> None:
        self.document = None

    async def generate(self) -> GeneratedFormSchema | None:
        """Generate a schema from the selected document.

        Does nothing while another generation is in flight or when no
        document is selected. On failure the document is kept so the user
        can retry.

        Returns:
            The new active schema, or None if nothing was produced.
        """
        if not self.can_generate:
            return None

        document = self.document
        self._generating = True
        self._failed = False
        self.error = None
        self.active_schema = None

        try:
            if self._client is None:
                self._client = self._client_factory()
            schema = await self._client.generate_form(
                document.content, document.media_type, self.hint
            )
        except ClinicAssistError as e:
            logger.error(f"Form generation failed for {document.name}: {e}")
            self.error = GENERATION_FAILED_MESSAGE
            self._failed = True
            return None
        finally:
            self._generating = False

        self.active_schema = schema
        self.active_tab = ViewTab.PREVIEW
        return schema

    def select_tab(self, tab: ViewTab | str) -> None:
        self.active_tab = ViewTab(tab)

    @property
    def preview(self) -> list[FieldControl]:
        if self.active_schema is None:
            return []
        return build_preview(self.active_schema)

    @property
    def raw_json(self) -> str:
        if self.active_schema is None:
            return ""
        return schema_to_json(self.active_schema)

    def discard(self) -> None:
        """Drop the active schema and the pending document."""
        self.active_schema = None
        self.document = None
        self.error = None
        self._failed = False

    def save(self) -> int | None:
        """Append the active schema to the library.

        Returns:
            Position of the new entry, or None without an active schema.
        """
        if self.active_schema is None:
            return None
        index = self.library.add(self.active_schema)
        self._saved_at = time.monotonic()
        logger.info(f"Saved form '{self.active_schema.form_title}' at position {index}")
        return index

    @property
    def show_saved_notice(self) -> bool:
        """Whether the save confirmation is still visible."""
        if self._saved_at is None:
            return False
        return time.monotonic() - self._saved_at < SAVED_NOTICE_SECONDS

    def dismiss_saved_notice(self) -> None:
        self._saved_at = None

    def load(self, index: int) -> GeneratedFormSchema:
        """Show a saved schema, clearing any pending document.

        Raises:
            IndexError: If there is no entry at ``index``.
        """
        schema = self.library[index]
        self.active_schema = schema
        self.document = None
        self.error = None
        self._failed = False
        self.active_tab = ViewTab.PREVIEW
        return schema

    def delete(self, index: int) -> GeneratedFormSchema:
        """Remove a saved schema by position.

        Raises:
            IndexError: If there is no entry at ``index``.
        """
        return self.library.remove(index)
