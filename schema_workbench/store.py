from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, List

from pydantic import ValidationError

from .models import DataRecord, FieldDefinition, parse_schema

logger = logging.getLogger(__name__)


class Store:
    """Process-lifetime holder of the current schema and the submitted records.

    Mutations are whole-value replacement (schema) or append (records), so a
    reader never sees a half-applied change. Readers get copies.
    """

    def __init__(self):
        self.init()

    def init(self) -> None:
        self._schema: List[FieldDefinition] = []
        self._data: List[DataRecord] = []

    def reset(self) -> None:
        logger.info("Resetting store (%d fields, %d records dropped)", len(self._schema), len(self._data))
        self.init()

    def get_schema(self) -> List[FieldDefinition]:
        return [field.model_copy(deep=True) for field in self._schema]

    def get_data(self) -> List[DataRecord]:
        return deepcopy(self._data)

    def update_schema(self, new_schema: Any) -> Dict[str, Any]:
        try:
            validated = parse_schema(new_schema)
        except (ValidationError, ValueError, TypeError) as exc:
            logger.warning("Rejected schema update: %s", exc)
            return {"success": False, "error": "Invalid schema format."}

        self._schema = validated
        logger.info("Schema replaced with %d fields", len(validated))
        return {"success": True, "message": "Schema updated successfully!"}

    def add_data(self, record: DataRecord) -> Dict[str, Any]:
        if not isinstance(record, dict):
            logger.warning("Rejected record of type %s", type(record).__name__)
            return {"success": False, "error": "Failed to add data."}

        self._data.append(deepcopy(record))
        logger.info("Record added (%d total)", len(self._data))
        return {"success": True, "message": "Data added successfully!"}


_default_store = Store()


def get_store() -> Store:
    return _default_store
