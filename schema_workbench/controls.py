"""Gradio input controls for schema fields, chosen by the field's kind."""
from __future__ import annotations

import gradio as gr

from .field_kinds import get_kind
from .models import FieldDefinition


def empty_value(field: FieldDefinition):
    """Value a control is reset to after a successful submit."""
    control = get_kind(field.type).control
    if control in ("number", "select", "date"):
        return None
    return ""


def build_control(field: FieldDefinition):
    control = get_kind(field.type).control
    if control == "select":
        return gr.Dropdown(
            label=field.label,
            choices=list(field.options or []),
            value=None,
            info=f"Select {field.label}",
            interactive=True,
            key=f"entry-{field.id}",
        )
    if control == "number":
        return gr.Number(
            label=field.label,
            value=None,
            placeholder=f"Enter {field.label}",
            interactive=True,
            key=f"entry-{field.id}",
        )
    if control == "date":
        return gr.DateTime(
            label=field.label,
            include_time=False,
            type="string",
            info=f"Enter {field.label}",
            interactive=True,
            key=f"entry-{field.id}",
        )
    return gr.Textbox(
        label=field.label,
        placeholder=f"Enter {field.label}",
        type="email" if control == "email" else "text",
        interactive=True,
        key=f"entry-{field.id}",
    )
