"""Navigation shell: landing page plus the two tools, one page per browser tab."""

from dataclasses import dataclass
from enum import Enum
from functools import partial

from nicegui import ui

from clinic_assist.features.assistant import AssistantFeature
from clinic_assist.features.form_builder import FormBuilderFeature
from clinic_assist.ui.assistant_view import render_assistant
from clinic_assist.ui.form_builder_view import render_form_builder

CUSTOM_CSS = """
<style>
    body { background: #f8fafc; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.08);
        overflow: hidden;
    }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 4px 18px 18px;
    }

    .message-assistant {
        background: white;
        color: #1e293b;
        border: 1px solid #e2e8f0;
        border-radius: 4px 18px 18px 18px;
    }

    .message-error {
        background: #fef2f2;
        color: #b91c1c;
        border: 1px solid #fecaca;
        border-radius: 4px 18px 18px 18px;
    }

    .input-box {
        background: #f8fafc;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #2563eb; }

    .send-btn { background: #2563eb !important; color: white !important; }
</style>
"""


class AppMode(str, Enum):
    DASHBOARD = "dashboard"
    CHATBOT = "chatbot"
    FORM_BUILDER = "form_builder"


@dataclass
class Navigation:
    """Which view of the page is visible."""

    current: AppMode = AppMode.DASHBOARD

    def go(self, mode: AppMode) -> None:
        self.current = mode


def _tool_header(nav: Navigation, title: str, subtitle: str) -> None:
    with ui.row().classes("w-full items-center justify-between mb-4"):
        with ui.column().classes("gap-0"):
            ui.label(title).classes("text-2xl font-bold text-slate-800")
            ui.label(subtitle).classes("text-slate-500")
        ui.button("Voltar ao Início", on_click=lambda: nav.go(AppMode.DASHBOARD)).props(
            "flat no-caps color=grey"
        )


def _tool_card(nav: Navigation, mode: AppMode, icon: str, title: str, text: str) -> None:
    with ui.card().classes("w-80 cursor-pointer hover:shadow-lg").on(
        "click", lambda: nav.go(mode)
    ):
        ui.icon(icon).classes("text-4xl text-blue-600")
        ui.label(title).classes("text-lg font-bold text-slate-800")
        ui.label(text).classes("text-sm text-slate-500")
        with ui.row().classes("items-center gap-1 text-blue-600 text-sm font-medium"):
            ui.label("Acessar")
            ui.icon("arrow_forward")


def _visible_when(mode: AppMode):
    return lambda current: current is mode


@ui.page("/")
def index_page() -> None:
    """Landing page hosting the assistant and the form builder."""
    ui.add_head_html(CUSTOM_CSS)
    nav = Navigation()
    assistant = AssistantFeature()
    form_builder = FormBuilderFeature()

    with ui.left_drawer(value=True).classes("bg-slate-900 text-white"):
        ui.label("APS Inteligente").classes("text-lg font-bold p-2")
        for mode, icon, label in (
            (AppMode.DASHBOARD, "home", "Início"),
            (AppMode.CHATBOT, "psychology", "Assistente de Protocolos"),
            (AppMode.FORM_BUILDER, "dynamic_form", "Construtor de Fichas"),
        ):
            ui.button(label, icon=icon, on_click=partial(nav.go, mode)).props(
                "flat no-caps align=left color=white"
            ).classes("w-full")

    with ui.column().classes("w-full max-w-6xl mx-auto p-4 md:p-8"):
        with ui.column().classes("w-full gap-6").bind_visibility_from(
            nav, "current", _visible_when(AppMode.DASHBOARD)
        ):
            ui.label("Bem-vindo(a) à APS Inteligente").classes("text-3xl font-bold text-slate-800")
            ui.label(
                "Ferramentas de IA para agilizar o atendimento na Atenção Primária."
            ).classes("text-slate-500")
            with ui.row().classes("gap-6"):
                _tool_card(
                    nav,
                    AppMode.CHATBOT,
                    "psychology",
                    "Assistente de Protocolos",
                    "Consulte diretrizes do e-SUS e pontos de MTC em tempo real.",
                )
                _tool_card(
                    nav,
                    AppMode.FORM_BUILDER,
                    "dynamic_form",
                    "Construtor de Fichas",
                    "Transforme protocolos em PDF em formulários estruturados.",
                )

        with ui.column().classes("w-full h-[80vh]").bind_visibility_from(
            nav, "current", _visible_when(AppMode.CHATBOT)
        ):
            _tool_header(
                nav,
                "Assistente Virtual de Protocolos",
                "Consulte diretrizes e protocolos de MTC em tempo real.",
            )
            render_assistant(assistant)

        with ui.column().classes("w-full").bind_visibility_from(
            nav, "current", _visible_when(AppMode.FORM_BUILDER)
        ):
            _tool_header(
                nav,
                "Construtor de Fichas",
                "Digitalize protocolos clínicos PDF em formulários e-SUS.",
            )
            render_form_builder(form_builder)
