from __future__ import annotations

import logging
from typing import List, Optional

import gradio as gr

from .busy import busy_flags
from .drafts import (
    FieldDraft,
    add_field,
    append_suggestion,
    drafts_from_schema,
    remove_field,
    save_schema,
    update_draft,
)
from .store import get_store
from .suggestions import suggest_validation_rules

logger = logging.getLogger(__name__)


def load_editor_state(store=None):
    store = store or get_store()
    schema = store.get_schema()
    return drafts_from_schema(schema), schema


def handle_add_field(drafts: List[FieldDraft]):
    return add_field(drafts or [])


def handle_remove_field(index: int, drafts: List[FieldDraft]):
    return remove_field(drafts or [], index)


def handle_draft_change(index: int, attr: str, value, drafts: List[FieldDraft]):
    return update_draft(drafts or [], index, attr, value)


def handle_save_schema(drafts: List[FieldDraft], store=None):
    """Returns (status message, current schema)."""
    store = store or get_store()
    with busy_flags.hold("save_schema") as acquired:
        if not acquired:
            return "A save is already in progress.", store.get_schema()
        try:
            result = save_schema(drafts or [], store)
        except Exception:
            logger.exception("Schema save failed")
            result = {"success": False, "error": "Failed to save schema."}

    if result["success"]:
        return result["message"], store.get_schema()
    return f"Error: {result['error']}", store.get_schema()


def handle_suggest_rules(index: int, drafts: List[FieldDraft], suggester=None):
    """Returns (suggestion dropdown update, target draft index, status message)."""
    drafts = drafts or []
    if index < 0 or index >= len(drafts):
        return gr.update(choices=[], value=None), None, "That field no longer exists."

    draft = drafts[index]
    if not draft.label.strip():
        return gr.update(choices=[], value=None), None, "Cannot suggest: please provide a field label first."

    with busy_flags.hold(f"suggest_rules:{draft.id}") as acquired:
        if not acquired:
            return gr.update(), index, "Suggestions for this field are already being fetched."
        result = suggest_validation_rules(draft.label, draft.type, suggester)

    if not result["success"]:
        return gr.update(choices=[], value=None), index, f"AI suggestion failed: {result['error']}"

    suggestions = result["suggestions"]
    if not suggestions:
        return gr.update(choices=[], value=None), index, f"No suggestions available for \"{draft.label}\"."
    return (
        gr.update(choices=suggestions, value=None),
        index,
        f"Suggestions for \"{draft.label}\" ({draft.type}). Pick one to add it.",
    )


def handle_apply_suggestion(target: Optional[int], suggestion: Optional[str], drafts: List[FieldDraft]):
    drafts = drafts or []
    if target is None or not suggestion or target >= len(drafts):
        return drafts
    current = drafts[target].validations
    return update_draft(drafts, target, "validations", append_suggestion(current, suggestion))
