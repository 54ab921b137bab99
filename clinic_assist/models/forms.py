"""Form schema returned by structured generation, and the uploaded document.

The Field descriptions double as the declared output shape sent to the model,
so they are written as instructions.
"""

import base64
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldType(str, Enum):
    """Input kinds a generated field may use."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"
    TEXTAREA = "textarea"


class FormField(BaseModel):
    """A single input of a generated clinical form.

    Attributes:
        id: Unique snake_case identifier.
        label: Human readable label.
        type: Input kind.
        required: Whether the field is mandatory.
        options: Choices for select fields.
        placeholder: Hint text shown inside empty inputs.
        validation_rule: Descriptive validation logic, never executed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique snake_case identifier")
    label: str = Field(..., description="Human readable label")
    type: FieldType = Field(
        ...,
        description=(
            "HTML input type. Prefer 'select' or 'checkbox' over 'text' "
            "whenever strict options exist."
        ),
    )
    required: bool
    options: list[str] | None = Field(
        None,
        description="Options if type is select. Must be populated if type is select.",
    )
    placeholder: str | None = None
    validation_rule: str | None = Field(
        None,
        alias="validationRule",
        description="Logic for validation (e.g., 'Must be > 0')",
    )


class GeneratedFormSchema(BaseModel):
    """Form produced from a clinical document. Immutable once produced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    form_title: str = Field(
        ..., alias="formTitle", description="The title of the clinical form"
    )
    description: str = Field(
        "", description="Brief description of the form's purpose"
    )
    fields: tuple[FormField, ...]

    @field_validator("description", mode="before")
    @classmethod
    def null_description_to_empty(cls, v: object) -> object:
        """Treat an explicit null description as absent."""
        return "" if v is None else v


def schema_to_json(schema: GeneratedFormSchema) -> str:
    """Serialize a schema for the raw JSON view, using the wire key names."""
    return schema.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class UploadedDocument(BaseModel):
    """A document selected for form generation.

    Attributes:
        name: Original file name.
        media_type: Declared media type (application/pdf, image/png, image/jpeg).
        data: Base64-encoded file content.
        size: Raw size in bytes.
        pages: Page count for PDFs, None for images.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    media_type: str
    data: str
    size: int = Field(ge=1)
    pages: int | None = None

    @property
    def content(self) -> bytes:
        """Decoded file bytes."""
        return base64.b64decode(self.data)
