"""NiceGUI view of the smart form builder."""

from functools import partial

from nicegui import events, ui

from clinic_assist.features.form_builder import (
    SAVED_NOTICE_SECONDS,
    FormBuilderFeature,
    FormBuilderState,
    ViewTab,
)
from clinic_assist.features.preview import FieldControl
from clinic_assist.models.forms import FieldType

ACCEPTED_UPLOADS = "application/pdf,image/png,image/jpeg"


def render_control(control: FieldControl) -> None:
    """Render one preview input."""
    with ui.column().classes("w-full gap-1"):
        with ui.row().classes("items-center gap-1"):
            ui.label(control.label).classes("text-sm font-semibold text-slate-700")
            if control.required:
                ui.label("*").classes("text-red-500").tooltip("Obrigatório")

        if control.kind is FieldType.TEXT:
            ui.input(placeholder=control.placeholder or "").classes("w-full")
        elif control.kind is FieldType.NUMBER:
            ui.number(placeholder=control.placeholder or "").classes("w-full")
        elif control.kind is FieldType.DATE:
            ui.input().props("type=date").classes("w-full")
        elif control.kind is FieldType.TEXTAREA:
            ui.textarea(placeholder=control.placeholder or "").props("rows=3").classes("w-full")
        elif control.kind is FieldType.SELECT:
            ui.select(list(control.choices), label=control.placeholder).classes("w-full")
        elif control.kind is FieldType.CHECKBOX:
            ui.checkbox("Sim")

        if control.validation_hint:
            ui.label(f"Validação: {control.validation_hint}").classes(
                "text-xs text-amber-600"
            )


def render_form_builder(feature: FormBuilderFeature) -> None:
    """Render upload, library and preview panels bound to ``feature``."""
    save_count = 0

    def refresh_all() -> None:
        header.refresh()
        upload_card.refresh()
        library_card.refresh()
        output_panel.refresh()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        if not feature.select_document(e.file.name, e.file.content_type, content):
            ui.notify(feature.error, type="warning")
        uploader.reset()
        refresh_all()

    async def generate() -> None:
        if not feature.can_generate:
            return
        refresh_all()
        await feature.generate()
        refresh_all()

    def save() -> None:
        nonlocal save_count
        if feature.save() is None:
            return
        save_count += 1
        # Timers live outside the refreshables, which delete their children
        with timer_host:
            ui.timer(SAVED_NOTICE_SECONDS, partial(on_notice_expired, save_count), once=True)
        refresh_all()

    def on_notice_expired(count: int) -> None:
        if count == save_count:
            feature.dismiss_saved_notice()
        output_panel.refresh()

    def discard() -> None:
        feature.discard()
        refresh_all()

    def load(index: int) -> None:
        feature.load(index)
        refresh_all()

    def delete(index: int) -> None:
        feature.delete(index)
        refresh_all()

    def select_tab(e: events.ValueChangeEventArguments) -> None:
        feature.select_tab(e.value)
        output_panel.refresh()

    def clear_document() -> None:
        feature.clear_document()
        refresh_all()

    @ui.refreshable
    def header() -> None:
        with ui.row().classes("w-full items-start justify-between"):
            with ui.column().classes("gap-1"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("description").classes("text-purple-600 text-2xl")
                    ui.label("Construtor Inteligente de Fichas (PEC)").classes(
                        "text-xl font-bold text-slate-800"
                    )
                ui.label(
                    "Transforme PDFs de protocolos em formulários estruturados "
                    "e reutilizáveis para o e-SUS."
                ).classes("text-slate-500")
            if len(feature.library):
                ui.badge(f"{len(feature.library)} Modelos Salvos", color="purple")

    @ui.refreshable
    def upload_card() -> None:
        with ui.card().classes("w-full"):
            ui.label("1. Novo Modelo").classes("font-semibold text-slate-700")
            if feature.document is None:
                ui.label("Clique para enviar PDF ou imagem (máx. 10MB)").classes(
                    "text-sm text-slate-500"
                )
            else:
                with ui.row().classes("w-full items-center gap-2 bg-purple-50 p-2 rounded"):
                    ui.icon("description").classes("text-purple-600")
                    with ui.column().classes("flex-grow gap-0"):
                        ui.label(feature.document.name).classes("text-sm font-medium truncate")
                        ui.label("Pronto").classes("text-xs text-slate-500")
                    ui.button(icon="close", on_click=clear_document).props("flat round dense")

            ui.textarea(
                label="Instruções para IA",
                placeholder="Ex: Crie selects para os sintomas...",
            ).props("rows=2").classes("w-full").bind_value(feature, "hint")

            generating = feature.state is FormBuilderState.GENERATING
            button = ui.button(
                "Processando..." if generating else "Gerar Estrutura",
                icon="play_arrow",
                on_click=generate,
            ).classes("w-full")
            if generating:
                button.props("loading")
            if not feature.can_generate:
                button.disable()

            if feature.error:
                with ui.row().classes("items-start gap-2 text-red-600 text-sm"):
                    ui.icon("warning")
                    ui.label(feature.error)

    @ui.refreshable
    def library_card() -> None:
        with ui.card().classes("w-full"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("history")
                ui.label("Biblioteca de Modelos").classes("font-semibold text-slate-700")
            if not len(feature.library):
                ui.label("Nenhum modelo salvo.").classes("text-sm text-slate-400")
                ui.label("Gere e salve fichas para reutilizar.").classes("text-xs text-slate-400")
                return
            for index, schema in enumerate(feature.library):
                with ui.row().classes("w-full items-center justify-between p-2 border rounded"):
                    with ui.column().classes("gap-0 flex-grow cursor-pointer").on(
                        "click", partial(load, index)
                    ):
                        ui.label(schema.form_title).classes("text-sm font-medium truncate")
                        ui.label(f"{len(schema.fields)} campos estruturados").classes(
                            "text-xs text-slate-500"
                        )
                    ui.button(
                        icon="delete", on_click=partial(delete, index)
                    ).props("flat round dense size=sm")

    @ui.refreshable
    def output_panel() -> None:
        with ui.card().classes("w-full min-h-[600px]"):
            if feature.show_saved_notice:
                with ui.row().classes("items-center gap-2 text-green-700 text-sm"):
                    ui.icon("check_circle")
                    ui.label("Modelo salvo na biblioteca!")

            with ui.row().classes("w-full items-center justify-between"):
                ui.label("2. Pré-visualização e Validação").classes("font-semibold text-slate-700")
                ui.toggle(
                    {ViewTab.PREVIEW.value: "Visual", ViewTab.JSON.value: "JSON"},
                    value=feature.active_tab.value,
                    on_change=select_tab,
                )

            schema = feature.active_schema
            if schema is None:
                with ui.column().classes("w-full items-center py-16"):
                    if feature.state is FormBuilderState.GENERATING:
                        ui.spinner(size="xl", color="purple")
                        ui.label("Lendo protocolo clínico...").classes("text-slate-500 font-medium")
                        ui.label("Identificando campos e validações").classes(
                            "text-slate-400 text-sm"
                        )
                    else:
                        ui.icon("dashboard").classes("text-5xl text-slate-200")
                        ui.label("O formulário gerado aparecerá aqui.").classes("text-slate-400")
                return

            if feature.active_tab is ViewTab.JSON:
                ui.code(feature.raw_json, language="json").classes("w-full")
                return

            with ui.row().classes("w-full items-center justify-between"):
                ui.label(schema.form_title).classes("text-2xl font-bold text-slate-800")
                ui.badge("e-SUS APS", color="blue")
            if schema.description:
                ui.label(schema.description).classes("text-slate-500")

            for control in feature.preview:
                render_control(control)

            with ui.row().classes("w-full justify-end gap-2 pt-4 border-t"):
                ui.button("Descartar", on_click=discard).props("flat color=grey")
                ui.button("Salvar Modelo", icon="save", on_click=save).props("color=purple")

    timer_host = ui.element("div").classes("hidden")
    header()
    with ui.row().classes("w-full gap-6 items-start no-wrap"):
        with ui.column().classes("w-1/3 gap-4"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props(f'accept="{ACCEPTED_UPLOADS}" flat bordered')
                .classes("w-full")
            )
            upload_card()
            library_card()
        with ui.column().classes("flex-grow"):
            output_panel()
