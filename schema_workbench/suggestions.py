"""
Validation rule suggestions for a field, given its label and type.

Two providers are available:
- heuristic_suggester: offline keyword rules, always available
- OpenAISuggester: asks a chat model for rule strings

The service is advisory only. Whatever goes wrong here is turned into a
failure result; it never stops the user from typing rules by hand.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from . import config
from .field_kinds import FieldType
from .rules import parse_rule

logger = logging.getLogger(__name__)

Suggester = Callable[[str, str], List[str]]

SYSTEM_PROMPT = """You suggest validation rules for one field of a data entry form.
Allowed rules: required, minLength:<n>, maxLength:<n>, min:<n>, max:<n>, email, pattern:<regex>.
A rule has at most one argument and the argument never contains a colon or a comma.
Respond with JSON: {"rules": ["...", "..."]}. Suggest at most five rules."""


def heuristic_suggester(field_label: str, data_type: str) -> List[str]:
    """Suggest rules from the field type and keywords in its label."""
    label = field_label.lower()
    suggestions = ["required"]

    if data_type == FieldType.NUMBER.value:
        if any(kw in label for kw in ["age", "years"]):
            suggestions += ["min:0", "max:150"]
        elif any(kw in label for kw in ["percent", "percentage", "rate"]):
            suggestions += ["min:0", "max:100"]
        elif any(kw in label for kw in ["amount", "price", "cost", "quantity", "count", "qty"]):
            suggestions.append("min:0")
    elif data_type in (FieldType.TEXT.value, FieldType.EMAIL.value):
        if data_type == FieldType.EMAIL.value or "email" in label or "e-mail" in label:
            suggestions.append("email")
        elif any(kw in label for kw in ["zip", "postal"]):
            suggestions.append("pattern:^[0-9]{5}$")
        elif "phone" in label:
            suggestions.append("pattern:^[0-9+() -]{7}[0-9+() -]*$")
        elif any(kw in label for kw in ["name", "city", "title"]):
            suggestions += ["minLength:2", "maxLength:100"]
        elif any(kw in label for kw in ["description", "notes", "comment"]):
            suggestions.append("maxLength:1000")
        else:
            suggestions.append("maxLength:255")
    return suggestions


class OpenAISuggester:
    """Rule suggestions from the OpenAI chat completions API."""

    def __init__(self, client=None, model: Optional[str] = None):
        self._client = client
        self.model = model or config.get_openai_model()

    @property
    def client(self):
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI()
        return self._client

    def __call__(self, field_label: str, data_type: str) -> List[str]:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Field label: {field_label}\nData type: {data_type}"},
            ],
            response_format={"type": "json_object"},
            temperature=0,
        )
        content = response.choices[0].message.content or "{}"
        rules = json.loads(content).get("rules", [])
        if not isinstance(rules, list):
            raise ValueError(f"Expected a list of rules, got {type(rules).__name__}")
        return [str(r) for r in rules]


def get_default_suggester() -> Optional[Suggester]:
    provider = config.get_suggestion_provider()
    if provider == "off":
        return None
    if provider == "openai":
        return OpenAISuggester()
    return heuristic_suggester


def suggest_validation_rules(
    field_label: str, data_type: str, suggester: Optional[Suggester] = None
) -> Dict[str, Any]:
    if not field_label or not data_type:
        return {"success": False, "error": "Field name and data type are required."}

    if suggester is None:
        suggester = get_default_suggester()
    if suggester is None:
        return {"success": True, "suggestions": []}

    try:
        raw_suggestions = suggester(field_label, data_type)
    except Exception:
        logger.exception("Rule suggestion failed for '%s' (%s)", field_label, data_type)
        return {"success": False, "error": "Failed to get AI suggestions."}

    suggestions: List[str] = []
    for text in raw_suggestions or []:
        text = str(text).strip()
        if "," in text or text in suggestions or parse_rule(text) is None:
            continue
        suggestions.append(text)
    return {"success": True, "suggestions": suggestions}
