from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

import gradio as gr

from .busy import busy_flags
from .controls import empty_value
from .models import FieldDefinition
from .store import get_store
from .validation import validate_record

logger = logging.getLogger(__name__)


def submit_record(schema: List[FieldDefinition], values: Dict[str, Any], store=None) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Validate one form submission and hand it to the store.

    Returns (result, field errors). Nothing reaches the store unless every
    field passes.
    """
    store = store or get_store()
    record, errors = validate_record(schema, values)
    if errors:
        return {"success": False, "error": "Please fix the highlighted fields."}, errors

    try:
        result = store.add_data(record)
    except Exception:
        logger.exception("Adding record failed")
        result = {"success": False, "error": "Failed to add data."}
    return result, {}


def format_field_error(message: str) -> str:
    return f"<span style='color: var(--error-text-color)'>{message}</span>" if message else ""


def handle_submit(schema: List[FieldDefinition], *raw_values, store=None):
    """Gradio outputs: status, then one update per input control, then one per error slot."""
    schema = schema or []
    values = {field.name: raw for field, raw in zip(schema, raw_values)}
    keep_inputs = [gr.update() for _ in schema]

    with busy_flags.hold("submit_record") as acquired:
        if not acquired:
            return ["A submission is already in progress."] + keep_inputs + [gr.update() for _ in schema]
        result, errors = submit_record(schema, values, store)

    error_slots = [format_field_error(errors.get(field.name, "")) for field in schema]
    if result["success"]:
        return [result["message"]] + [empty_value(field) for field in schema] + error_slots
    if errors:
        return [f"Error: {result['error']}"] + keep_inputs + error_slots
    return ["Error: Failed to add data."] + keep_inputs + error_slots
