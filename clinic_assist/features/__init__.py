"""Client-side features of the suite.

Each feature instance belongs to one browser page and holds only
in-memory state:
    - AssistantFeature: streamed conversation with the protocol assistant
    - FormBuilderFeature: document upload, form generation and library
"""

from clinic_assist.features.assistant import AssistantFeature, AssistantState
from clinic_assist.features.form_builder import FormBuilderFeature, FormBuilderState, ViewTab
from clinic_assist.features.library import FormLibrary
from clinic_assist.features.preview import FieldControl, build_preview

__all__ = [
    "AssistantFeature",
    "AssistantState",
    "FieldControl",
    "FormBuilderFeature",
    "FormBuilderState",
    "FormLibrary",
    "ViewTab",
    "build_preview",
]
