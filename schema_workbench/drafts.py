from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Tuple
from uuid import uuid4

from .field_kinds import FieldType
from .models import FieldDefinition

_NON_ALNUM_RUN = re.compile(r'[^a-zA-Z0-9]+(.)?')


@dataclass(frozen=True)
class FieldDraft:
    """An unsaved field as edited in the schema editor.

    `validations` and `options` are the comma-joined text the user types.
    """

    id: str
    label: str = ''
    type: str = FieldType.TEXT.value
    validations: str = ''
    options: str = ''


def new_draft() -> FieldDraft:
    return FieldDraft(id=uuid4().hex)


def add_field(drafts: List[FieldDraft]) -> List[FieldDraft]:
    return list(drafts) + [new_draft()]


def remove_field(drafts: List[FieldDraft], index: int) -> List[FieldDraft]:
    if index < 0 or index >= len(drafts):
        return list(drafts)
    return [d for i, d in enumerate(drafts) if i != index]


def update_draft(drafts: List[FieldDraft], index: int, attr: str, value: Any) -> List[FieldDraft]:
    if index < 0 or index >= len(drafts) or attr not in ('label', 'type', 'validations', 'options'):
        return list(drafts)
    updated = list(drafts)
    updated[index] = replace(updated[index], **{attr: '' if value is None else str(value)})
    return updated


def drafts_from_schema(schema: List[FieldDefinition]) -> List[FieldDraft]:
    return [
        FieldDraft(
            id=field.id,
            label=field.label,
            type=field.type,
            validations=', '.join(field.validations),
            options=', '.join(field.options or []),
        )
        for field in schema
    ]


def to_camel_case(label: str) -> str:
    """'First name' -> 'firstName', 'E-mail address' -> 'eMailAddress'."""
    joined = _NON_ALNUM_RUN.sub(lambda m: m.group(1).upper() if m.group(1) else '', label or '')
    return joined[:1].lower() + joined[1:]


def split_list(text: str) -> List[str]:
    if not text:
        return []
    return [part.strip() for part in text.split(',') if part.strip()]


def append_suggestion(current: str, suggestion: str) -> str:
    return f"{current}, {suggestion}" if current else suggestion


def normalize_drafts(drafts: List[FieldDraft]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Turn drafts into a schema payload; the second item lists problems that block saving."""
    payload: List[Dict[str, Any]] = []
    errors: List[str] = []
    seen: Dict[str, int] = {}

    for position, draft in enumerate(drafts, start=1):
        label = (draft.label or '').strip()
        if not label:
            errors.append(f"Field {position}: Label cannot be empty.")
            continue
        name = to_camel_case(label)
        if not name:
            errors.append(f"Field {position}: Label '{label}' has no letters or digits to build a name from.")
            continue
        if name in seen:
            errors.append(f"Field {position}: Name '{name}' is already used by field {seen[name]}.")
            continue
        seen[name] = position

        field: Dict[str, Any] = {
            'id': draft.id,
            'name': name,
            'label': label,
            'type': draft.type,
            'validations': split_list(draft.validations),
        }
        if draft.type == FieldType.SELECT.value:
            options = split_list(draft.options)
            if not options:
                errors.append(f"Field {position}: Select fields need at least one option.")
                continue
            field['options'] = options
        payload.append(field)

    return payload, errors


def save_schema(drafts: List[FieldDraft], store) -> Dict[str, Any]:
    payload, errors = normalize_drafts(drafts)
    if errors:
        return {'success': False, 'error': ' '.join(errors)}
    return store.update_schema(payload)
