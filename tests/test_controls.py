import gradio as gr

from conftest import make_field
from schema_workbench.controls import build_control, empty_value


def test_date_field_uses_date_picker():
    control = build_control(make_field("birthday", type="date"))
    assert isinstance(control, gr.DateTime)
    assert empty_value(make_field("birthday", type="date")) is None


def test_controls_by_kind():
    assert isinstance(build_control(make_field("age", type="number")), gr.Number)
    assert isinstance(build_control(make_field("team", type="select", options=["Red"])), gr.Dropdown)
    assert isinstance(build_control(make_field("email", type="email")), gr.Textbox)
    assert empty_value(make_field("fullName")) == ""
