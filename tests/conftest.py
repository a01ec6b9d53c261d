"""
Pytest fixtures shared by the Schema Workbench tests.
"""

import pytest

from schema_workbench.models import FieldDefinition, parse_schema
from schema_workbench.store import Store


def make_field(name, type="text", validations=None, options=None, label=None):
    return FieldDefinition(
        id=f"id-{name}",
        name=name,
        label=label or name,
        type=type,
        validations=validations or [],
        options=options,
    )


@pytest.fixture
def store():
    """A fresh, empty store per test."""
    return Store()


@pytest.fixture
def people_schema():
    return parse_schema([
        {"id": "1", "name": "fullName", "label": "Full Name", "type": "text", "validations": ["required", "minLength:2"]},
        {"id": "2", "name": "age", "label": "Age", "type": "number", "validations": ["min:0", "max:150"]},
        {"id": "3", "name": "email", "label": "Email", "type": "email", "validations": ["required"]},
        {"id": "4", "name": "birthday", "label": "Birthday", "type": "date", "validations": []},
        {"id": "5", "name": "team", "label": "Team", "type": "select", "validations": [], "options": ["Red", "Blue"]},
    ])


@pytest.fixture
def numbered_records():
    """25 records with distinct ids 1..25."""
    return [{"n": i, "name": f"row {i:02d}"} for i in range(1, 26)]
