import gradio as gr
from functools import partial

from schema_workbench.config import configure_logging, get_app_title
from schema_workbench.controls import build_control
from schema_workbench.field_kinds import FieldType
from schema_workbench.handlers_entry import handle_submit
from schema_workbench.handlers_schema import (
    handle_add_field,
    handle_apply_suggestion,
    handle_draft_change,
    handle_remove_field,
    handle_save_schema,
    handle_suggest_rules,
    load_editor_state,
)
from schema_workbench.handlers_table import (
    handle_export,
    handle_page_step,
    handle_query_change,
    handle_sort,
    render_table,
)
from schema_workbench.table import TableState

TYPE_CHOICES = [("Text", FieldType.TEXT.value), ("Number", FieldType.NUMBER.value), ("Email", FieldType.EMAIL.value),
                ("Date", FieldType.DATE.value), ("Select", FieldType.SELECT.value)]


def bump(version):
    return (version or 0) + 1


def disable():
    return gr.update(interactive=False)


def enable():
    return gr.update(interactive=True)


# --- UI Definition ---
with gr.Blocks(title=get_app_title()) as demo:
    gr.Markdown(f"# {get_app_title()}")
    gr.Markdown("Define a schema, enter records that follow it, then browse, search and export them.")

    # State
    drafts_state = gr.State(value=[])
    layout_version = gr.State(value=0)
    schema_state = gr.State(value=[])
    suggestion_target = gr.State(value=None)
    table_state = gr.State(value=TableState())

    with gr.Tab("Schema Editor"):
        gr.Markdown("### Fields")
        gr.Markdown("Comma-separated rules, e.g. `required, minLength:2, max:100, email, pattern:/^[A-Za-z]+$/`.")

        @gr.render(inputs=[drafts_state], triggers=[layout_version.change, demo.load])
        def render_drafts(drafts):
            if not drafts:
                gr.Markdown("No fields yet. Use **Add Field** to start.")
                return

            for index, draft in enumerate(drafts):
                with gr.Group():
                    with gr.Row():
                        label = gr.Textbox(label="Label", value=draft.label, placeholder="e.g., First Name", key=f"label-{draft.id}")
                        type_ = gr.Dropdown(label="Data Type", choices=TYPE_CHOICES, value=draft.type, key=f"type-{draft.id}")
                        rules = gr.Textbox(label="Validation Rules", value=draft.validations,
                                           placeholder="e.g., required, minLength:2", key=f"rules-{draft.id}")
                        options = gr.Textbox(label="Options", value=draft.options, placeholder="e.g., Option 1, Option 2",
                                             visible=draft.type == FieldType.SELECT.value, key=f"options-{draft.id}")
                    with gr.Row():
                        suggest_btn = gr.Button("Suggest rules", size="sm", key=f"suggest-{draft.id}")
                        remove_btn = gr.Button("Remove", size="sm", variant="stop", key=f"remove-{draft.id}")

                label.input(fn=partial(handle_draft_change, index, "label"), inputs=[label, drafts_state], outputs=[drafts_state])
                rules.input(fn=partial(handle_draft_change, index, "validations"), inputs=[rules, drafts_state], outputs=[drafts_state])
                options.input(fn=partial(handle_draft_change, index, "options"), inputs=[options, drafts_state], outputs=[drafts_state])
                type_.input(
                    fn=partial(handle_draft_change, index, "type"), inputs=[type_, drafts_state], outputs=[drafts_state]
                ).then(fn=bump, inputs=[layout_version], outputs=[layout_version])

                remove_btn.click(
                    fn=partial(handle_remove_field, index), inputs=[drafts_state], outputs=[drafts_state]
                ).then(fn=bump, inputs=[layout_version], outputs=[layout_version])

                suggest_btn.click(fn=disable, outputs=[suggest_btn]).then(
                    fn=partial(handle_suggest_rules, index),
                    inputs=[drafts_state],
                    outputs=[suggestion_choices, suggestion_target, suggestion_status],
                ).then(fn=enable, outputs=[suggest_btn])

        with gr.Accordion("Rule suggestions", open=False):
            suggestion_status = gr.Markdown("")
            suggestion_choices = gr.Dropdown(label="Suggested rules", choices=[], value=None, interactive=True)
            add_suggestion_btn = gr.Button("Add to rules", size="sm")

        with gr.Row():
            add_field_btn = gr.Button("Add Field")
            save_schema_btn = gr.Button("Save Schema", variant="primary")
        schema_status = gr.Textbox(label="Status", interactive=False)

        add_field_btn.click(fn=handle_add_field, inputs=[drafts_state], outputs=[drafts_state]).then(
            fn=bump, inputs=[layout_version], outputs=[layout_version]
        )

        add_suggestion_btn.click(
            fn=handle_apply_suggestion,
            inputs=[suggestion_target, suggestion_choices, drafts_state],
            outputs=[drafts_state],
        ).then(fn=bump, inputs=[layout_version], outputs=[layout_version])

        save_schema_btn.click(fn=disable, outputs=[save_schema_btn]).then(
            fn=handle_save_schema,
            inputs=[drafts_state],
            outputs=[schema_status, schema_state],
            concurrency_limit=1,
        ).then(fn=enable, outputs=[save_schema_btn])

    with gr.Tab("Data Entry"):
        entry_status = gr.Textbox(label="Status", interactive=False)

        @gr.render(inputs=[schema_state], triggers=[schema_state.change, demo.load])
        def render_entry_form(schema):
            if not schema:
                gr.Markdown("No schema defined. Create one in the Schema Editor first.")
                return

            controls = []
            error_slots = []
            for field in schema:
                controls.append(build_control(field))
                error_slots.append(gr.Markdown("", key=f"error-{field.id}"))

            submit_btn = gr.Button("Add Record", variant="primary", key="submit-record")
            submit_btn.click(fn=disable, outputs=[submit_btn]).then(
                fn=lambda current, *values: handle_submit(current, *values),
                inputs=[schema_state] + controls,
                outputs=[entry_status] + controls + error_slots,
                concurrency_limit=1,
            ).then(fn=enable, outputs=[submit_btn])

    with gr.Tab("Data Viewer") as viewer_tab:
        with gr.Row():
            search_box = gr.Textbox(label="Search all fields...", placeholder="Search all fields...", scale=3)
            export_btn = gr.Button("Export CSV", interactive=False, scale=1)

        @gr.render(inputs=[schema_state], triggers=[schema_state.change, demo.load])
        def render_sort_buttons(schema):
            if not schema:
                return
            with gr.Row():
                for field in schema:
                    sort_btn = gr.Button(f"{field.label} ⇅", size="sm", key=f"sort-{field.id}")
                    sort_btn.click(
                        fn=partial(handle_sort, field.name),
                        inputs=[table_state],
                        outputs=table_outputs,
                    )

        table_message = gr.Markdown("")
        data_table = gr.Dataframe(interactive=False, wrap=True, label="Records")
        with gr.Row():
            range_text = gr.Markdown("")
            prev_btn = gr.Button("Previous", size="sm", interactive=False)
            page_label = gr.Markdown("")
            next_btn = gr.Button("Next", size="sm", interactive=False)
        download_output = gr.File(label="Download CSV")
        export_status = gr.Textbox(label="Export Status", interactive=False)

        table_outputs = [table_state, data_table, table_message, range_text, page_label, prev_btn, next_btn, export_btn]

        search_box.change(fn=handle_query_change, inputs=[search_box, table_state], outputs=table_outputs)
        prev_btn.click(fn=partial(handle_page_step, -1), inputs=[table_state], outputs=table_outputs)
        next_btn.click(fn=partial(handle_page_step, 1), inputs=[table_state], outputs=table_outputs)
        export_btn.click(fn=handle_export, inputs=[table_state], outputs=[download_output, export_status])
        viewer_tab.select(fn=render_table, inputs=[table_state], outputs=table_outputs)
        schema_state.change(fn=render_table, inputs=[table_state], outputs=table_outputs)

    demo.load(fn=load_editor_state, outputs=[drafts_state, schema_state]).then(
        fn=bump, inputs=[layout_version], outputs=[layout_version]
    )

if __name__ == "__main__":
    configure_logging()
    demo.launch()
