import pytest

from schema_workbench.field_kinds import FIELD_KINDS, FieldType, format_display, get_kind, is_empty


def test_every_field_type_has_a_kind():
    assert set(FIELD_KINDS) == {t.value for t in FieldType}
    assert get_kind(FieldType.DATE) is FIELD_KINDS["date"]
    assert get_kind("colour") is None


@pytest.mark.parametrize("raw,expected", [
    (None, True),
    ("", True),
    ("  ", True),
    (float("nan"), True),
    (0, False),
    ("0", False),
])
def test_is_empty(raw, expected):
    assert is_empty(raw) is expected


def test_rule_families_per_kind():
    assert get_kind("text").string_rules and not get_kind("text").numeric_rules
    assert get_kind("number").numeric_rules and not get_kind("number").string_rules
    assert not get_kind("date").string_rules and not get_kind("date").numeric_rules
    assert get_kind("select").has_options


def test_display_formatting():
    assert format_display(get_kind("date"), "2023-12-31") == "12/31/2023"
    assert format_display(get_kind("date"), "not a date") == "not a date"
    assert format_display(get_kind("number"), 2.5) == "2.5"
    assert format_display(get_kind("text"), None) == ""
    assert format_display(None, 7) == "7"
