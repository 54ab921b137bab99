"""NiceGUI view of the protocol assistant."""

from functools import partial

from nicegui import ui

from clinic_assist.features.assistant import SUGGESTIONS, AssistantFeature
from clinic_assist.models import ChatMessage, MessageRole
from clinic_assist.ui.formatting import markdown_to_html


def _bubble_classes(message: ChatMessage) -> str:
    if message.role is MessageRole.USER:
        return "message-user px-4 py-3"
    if message.is_error:
        return "message-error px-4 py-3"
    return "message-assistant px-4 py-3"


def render_assistant(feature: AssistantFeature) -> None:
    """Render the chat card and keep it in sync with ``feature``.

    Must be rendered once per page: the view subscribes to the feature.
    """
    bubbles: dict[str, tuple[ui.element, ui.html]] = {}

    def render_message(message: ChatMessage) -> None:
        is_user = message.role is MessageRole.USER
        align = "justify-end" if is_user else "justify-start"
        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                ui.icon("smart_toy").classes("text-blue-600 text-xl")
            with ui.column().classes("max-w-[80%] gap-1"):
                with ui.element("div").classes(_bubble_classes(message)) as bubble:
                    content = ui.html(
                        markdown_to_html(message.text), sanitize=False
                    ).classes("text-sm leading-relaxed")
                ui.label(message.created_at.strftime("%H:%M")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                ui.icon("person").classes("text-indigo-600 text-xl")
        bubbles[message.id] = (bubble, content)

    def on_message(message: ChatMessage) -> None:
        suggestions_row.set_visibility(show_suggestions())
        if message.id in bubbles:
            bubble, content = bubbles[message.id]
            bubble.classes(replace=_bubble_classes(message))
            content.set_content(markdown_to_html(message.text))
        else:
            with messages_container:
                render_message(message)
        scroll_area.scroll_to(percent=1.0)

    def show_suggestions() -> bool:
        return len(feature.messages) < 2

    def use_suggestion(text: str) -> None:
        input_field.value = text

    async def send() -> None:
        text = input_field.value or ""
        if feature.busy or not text.strip():
            return
        input_field.value = ""
        send_btn.props("loading")
        try:
            await feature.submit(text)
        finally:
            send_btn.props(remove="loading")

    feature.subscribe(on_message)

    with ui.card().classes("w-full h-full app-container p-0 gap-0"):
        with ui.row().classes("w-full px-5 py-3 items-center gap-3 border-b"):
            ui.icon("smart_toy").classes("text-blue-600 text-2xl")
            with ui.column().classes("gap-0"):
                ui.label("Assistente de Protocolos").classes("font-semibold text-slate-800")
                ui.label("Online • e-SUS & MTC").classes("text-xs text-green-600")

        with ui.scroll_area().classes("flex-grow w-full bg-slate-50") as scroll_area:
            messages_container = ui.column().classes("w-full p-5 gap-4")
            with messages_container:
                for message in feature.messages:
                    render_message(message)

        with ui.row().classes("w-full px-4 pt-3 gap-2") as suggestions_row:
            for suggestion in SUGGESTIONS:
                ui.button(
                    suggestion, on_click=partial(use_suggestion, suggestion)
                ).props("outline rounded dense no-caps size=sm")
        suggestions_row.set_visibility(show_suggestions())

        with ui.row().classes("w-full p-4 gap-3 items-end"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Digite sua dúvida clínica...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send)
                )
            send_btn = (
                ui.button(icon="send", on_click=send)
                .props("round unelevated")
                .classes("send-btn")
                .mark("send-button")
            )
