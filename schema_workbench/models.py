from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from .field_kinds import FieldType

DataRecord = Dict[str, Any]


class FieldDefinition(BaseModel):
    """One column of the user-defined schema."""

    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    id: str
    name: str = Field(min_length=1)
    label: str = Field(min_length=1)
    type: FieldType
    validations: List[str] = Field(default_factory=list)
    options: Optional[List[str]] = None

    @field_validator("name", "label")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def _select_needs_options(self) -> "FieldDefinition":
        if self.type == FieldType.SELECT.value and not self.options:
            raise ValueError(f"select field '{self.name}' needs at least one option")
        return self


def _unique_names_and_ids(fields: List[FieldDefinition]) -> List[FieldDefinition]:
    names, ids = set(), set()
    for field in fields:
        if field.name in names:
            raise ValueError(f"Duplicate field name: {field.name}")
        if field.id in ids:
            raise ValueError(f"Duplicate field id: {field.id}")
        names.add(field.name)
        ids.add(field.id)
    return fields


_schema_adapter = TypeAdapter(Annotated[List[FieldDefinition], AfterValidator(_unique_names_and_ids)])


def parse_schema(payload: Any) -> List[FieldDefinition]:
    """Validate a raw schema payload (list of dicts or models).

    Raises pydantic.ValidationError on shape errors, including duplicate
    field names or ids.
    """
    if isinstance(payload, list):
        payload = [f.model_dump() if isinstance(f, FieldDefinition) else f for f in payload]
    return _schema_adapter.validate_python(payload)


def schema_to_payload(schema: List[FieldDefinition]) -> List[Dict[str, Any]]:
    return [field.model_dump() for field in schema]
