from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .field_kinds import EMAIL_PATTERN, CoercionError, FieldKind, coerce, get_kind, is_empty
from .models import DataRecord, FieldDefinition
from .rules import NUMERIC_RULES, STRING_RULES, Email, Max, MaxLength, Min, MinLength, Pattern, Required, Rule, parse_rules

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    value: Any = None
    message: str = ""


def _fmt(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def _check_rule(rule: Rule, value: Any) -> Optional[str]:
    if isinstance(rule, MinLength):
        if len(value) < rule.n:
            return f"Must be at least {rule.n} characters"
    elif isinstance(rule, MaxLength):
        if len(value) > rule.n:
            return f"Must be at most {rule.n} characters"
    elif isinstance(rule, Min):
        if value < rule.n:
            return f"Must be greater than or equal to {_fmt(rule.n)}"
    elif isinstance(rule, Max):
        if value > rule.n:
            return f"Must be less than or equal to {_fmt(rule.n)}"
    elif isinstance(rule, Email):
        if not EMAIL_PATTERN.match(value):
            return "Invalid email address"
    elif isinstance(rule, Pattern):
        if not rule.regex.search(value):
            return "Invalid format"
    return None


def _applies(kind: FieldKind, rule: Rule) -> bool:
    if isinstance(rule, STRING_RULES):
        return kind.string_rules
    if isinstance(rule, NUMERIC_RULES):
        return kind.numeric_rules
    return True


def validate(kind: FieldKind, rules: Sequence[Rule], raw: Any, options: Optional[Sequence[str]] = None) -> ValidationResult:
    """Run one raw input through the base coercion of its kind and then the rules, left to right."""
    required = any(isinstance(r, Required) for r in rules)
    if is_empty(raw):
        if required:
            return ValidationResult(False, message=REQUIRED_MESSAGE)
        return ValidationResult(True, "")

    try:
        value = coerce(kind, raw)
    except CoercionError as exc:
        return ValidationResult(False, message=str(exc))

    if kind.has_options and value not in (options or []):
        return ValidationResult(False, message=f"Must be one of: {', '.join(options or [])}")

    for rule in rules:
        if not _applies(kind, rule):
            continue
        message = _check_rule(rule, value)
        if message:
            return ValidationResult(False, message=message)
    return ValidationResult(True, value)


def build_validator(field: FieldDefinition) -> Callable[[Any], ValidationResult]:
    kind = get_kind(field.type)
    rules = parse_rules(field.validations)
    options = list(field.options or [])

    skipped = [r for r in rules if not _applies(kind, r)]
    if skipped:
        logger.debug("Rules %s do not apply to %s field '%s'", skipped, field.type, field.name)

    def check(raw: Any) -> ValidationResult:
        return validate(kind, rules, raw, options)

    return check


def build_validators(schema: Iterable[FieldDefinition]) -> Dict[str, Callable[[Any], ValidationResult]]:
    return {field.name: build_validator(field) for field in schema}


def validate_record(schema: List[FieldDefinition], values: Dict[str, Any]) -> Tuple[Optional[DataRecord], Dict[str, str]]:
    """Validate every field; return (record, {}) when all pass, else (None, errors by field name)."""
    record: DataRecord = {}
    errors: Dict[str, str] = {}
    for name, check in build_validators(schema).items():
        result = check(values.get(name))
        if result.ok:
            record[name] = result.value
        else:
            errors[name] = result.message
    if errors:
        return None, errors
    return record, {}
