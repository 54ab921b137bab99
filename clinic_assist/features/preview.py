"""Maps a generated schema to the controls of its live preview."""

from dataclasses import dataclass

from clinic_assist.models.forms import FieldType, GeneratedFormSchema

SELECT_PLACEHOLDER = "Selecione uma opção..."

# Kinds whose inputs have no free-text placeholder
_NO_PLACEHOLDER = {FieldType.DATE, FieldType.CHECKBOX}


@dataclass(frozen=True)
class FieldControl:
    """One input control of the preview.

    Attributes:
        field_id: Identifier of the source field.
        label: Label shown above the input.
        kind: Input kind to render.
        required: Whether to show the required marker.
        choices: Options of a select control, possibly empty.
        placeholder: Hint text inside the input, if any.
        validation_hint: Descriptive validation rule shown under the input.
    """

    field_id: str
    label: str
    kind: FieldType
    required: bool
    choices: tuple[str, ...] = ()
    placeholder: str | None = None
    validation_hint: str | None = None


def build_preview(schema: GeneratedFormSchema) -> list[FieldControl]:
    """Build exactly one control per field, in field order.

    A select without options yields an empty choice list instead of failing.
    """
    controls = []
    for field in schema.fields:
        if field.type is FieldType.SELECT:
            placeholder = SELECT_PLACEHOLDER
        elif field.type in _NO_PLACEHOLDER:
            placeholder = None
        else:
            placeholder = field.placeholder

        controls.append(
            FieldControl(
                field_id=field.id,
                label=field.label,
                kind=field.type,
                required=field.required,
                choices=tuple(field.options or ()) if field.type is FieldType.SELECT else (),
                placeholder=placeholder,
                validation_hint=field.validation_rule,
            )
        )
    return controls
