from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DISPLAY_DATE_FORMAT = "%m/%d/%Y"
_INPUT_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


class CoercionError(ValueError):
    """Raised when a raw value cannot be turned into the field's type."""


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    SELECT = "select"


def is_empty(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    if isinstance(raw, str) and not raw.strip():
        return True
    return False


def _as_text(raw: Any) -> str:
    return raw if isinstance(raw, str) else str(raw)


def _as_number(raw: Any):
    if isinstance(raw, bool):
        raise CoercionError("Must be a number")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        # float() also takes digit separators like "1_000"
        if "_" in text:
            raise CoercionError("Must be a number")
        try:
            value = float(text)
        except ValueError:
            raise CoercionError("Must be a number")
    if not math.isfinite(value):
        raise CoercionError("Must be a number")
    return int(value) if value.is_integer() else value


def parse_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    for fmt in _INPUT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise CoercionError("Invalid date")


def _as_date(raw: Any) -> str:
    return parse_date(raw).isoformat()


def _as_email(raw: Any) -> str:
    text = _as_text(raw)
    if not EMAIL_PATTERN.match(text):
        raise CoercionError("Invalid email address")
    return text


def _display_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _display_date(value: Any) -> str:
    if is_empty(value):
        return ""
    try:
        return parse_date(value).strftime(DISPLAY_DATE_FORMAT)
    except CoercionError:
        return str(value)


@dataclass(frozen=True)
class FieldKind:
    """Everything the form, the table and the validator need to know about a field type."""

    type: FieldType
    control: str
    coerce: Callable[[Any], Any]
    format_display: Callable[[Any], str]
    string_rules: bool = False
    numeric_rules: bool = False
    has_options: bool = False


FIELD_KINDS: Dict[str, FieldKind] = {
    FieldType.TEXT.value: FieldKind(FieldType.TEXT, "text", _as_text, _display_text, string_rules=True),
    FieldType.NUMBER.value: FieldKind(FieldType.NUMBER, "number", _as_number, _display_text, numeric_rules=True),
    FieldType.EMAIL.value: FieldKind(FieldType.EMAIL, "email", _as_email, _display_text, string_rules=True),
    FieldType.DATE.value: FieldKind(FieldType.DATE, "date", _as_date, _display_date),
    FieldType.SELECT.value: FieldKind(FieldType.SELECT, "select", _as_text, _display_text, string_rules=True, has_options=True),
}


def get_kind(name: Any) -> Optional[FieldKind]:
    if isinstance(name, FieldType):
        name = name.value
    return FIELD_KINDS.get(name)


def coerce(kind: FieldKind, raw: Any) -> Any:
    return kind.coerce(raw)


def format_display(kind: Optional[FieldKind], value: Any) -> str:
    if kind is None:
        return _display_text(value)
    return kind.format_display(value)
