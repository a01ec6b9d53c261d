from __future__ import annotations

import logging

import gradio as gr

from .csv_export import export_csv
from .store import get_store
from .table import TableState, build_table_view, change_page, request_sort, set_query

logger = logging.getLogger(__name__)


def render_table(state: TableState, store=None):
    """Gradio outputs: state, dataframe, message, range text, page label, prev, next, export button."""
    store = store or get_store()
    state = state or TableState()
    view = build_table_view(store.get_schema(), store.get_data(), state)
    if view.page != state.page:
        state = TableState(state.query, state.sort_key, state.sort_direction, view.page)

    table = gr.update(value={"headers": view.headers or [""], "data": view.rows or []}, visible=bool(view.headers))
    return (
        state,
        table,
        view.message,
        view.range_text,
        view.page_label,
        gr.update(interactive=not view.prev_disabled),
        gr.update(interactive=not view.next_disabled),
        gr.update(interactive=view.export_enabled),
    )


def handle_query_change(query: str, state: TableState, store=None):
    return render_table(set_query(state or TableState(), query), store)


def handle_sort(column_name: str, state: TableState, store=None):
    return render_table(request_sort(state or TableState(), column_name), store)


def handle_page_step(step: int, state: TableState, store=None):
    store = store or get_store()
    state = state or TableState()
    view = build_table_view(store.get_schema(), store.get_data(), state)
    return render_table(change_page(state, view.page + step, view.total_records), store)


def handle_export(state: TableState, store=None):
    """Returns (download path or None, status message)."""
    store = store or get_store()
    view = build_table_view(store.get_schema(), store.get_data(), state or TableState())
    if not view.records:
        return None, "No records to export."
    try:
        path = export_csv(store.get_schema(), view.records)
    except OSError as e:
        logger.exception("CSV export failed")
        return None, f"Error during export: {str(e)}"
    return path, f"Exported {len(view.records)} records."
