from schema_workbench.busy import busy_flags
from schema_workbench.drafts import FieldDraft
from schema_workbench.handlers_entry import handle_submit, submit_record
from schema_workbench.handlers_schema import (
    handle_apply_suggestion,
    handle_save_schema,
    handle_suggest_rules,
    load_editor_state,
)
from schema_workbench.handlers_table import handle_export, handle_page_step, handle_query_change, handle_sort, render_table
from schema_workbench.table import DESCENDING, TableState


class TestSchemaHandlers:
    def test_save_then_load(self, store):
        status, schema = handle_save_schema([FieldDraft(id="1", label="Full Name", validations="required")], store)
        assert status == "Schema updated successfully!"
        assert [f.name for f in schema] == ["fullName"]
        drafts, loaded = load_editor_state(store)
        assert drafts[0].validations == "required"
        assert loaded == schema

    def test_save_failure_reports_error(self, store):
        status, schema = handle_save_schema([FieldDraft(id="1", label="")], store)
        assert status.startswith("Error:")
        assert schema == []

    def test_save_refused_while_busy(self, store):
        assert busy_flags.try_acquire("save_schema")
        try:
            status, _ = handle_save_schema([FieldDraft(id="1", label="Name")], store)
        finally:
            busy_flags.release("save_schema")
        assert "already in progress" in status
        assert store.get_schema() == []

    def test_suggest_requires_label(self):
        _, target, status = handle_suggest_rules(0, [FieldDraft(id="1")], suggester=lambda l, t: ["required"])
        assert target is None
        assert "label" in status

    def test_suggest_and_apply(self):
        drafts = [FieldDraft(id="1", label="Email", validations="required")]
        update, target, _ = handle_suggest_rules(0, drafts, suggester=lambda l, t: ["email", "maxLength:80"])
        assert update["choices"] == ["email", "maxLength:80"]
        assert target == 0
        drafts = handle_apply_suggestion(target, "email", drafts)
        assert drafts[0].validations == "required, email"

    def test_suggest_failure_leaves_rules_untouched(self):
        def broken(label, data_type):
            raise ConnectionError("offline")

        drafts = [FieldDraft(id="1", label="Email", validations="required")]
        _, _, status = handle_suggest_rules(0, drafts, suggester=broken)
        assert "failed" in status.lower()
        assert drafts[0].validations == "required"


class TestEntryHandlers:
    def test_submit_valid_record(self, store, people_schema):
        result, errors = submit_record(people_schema, {"fullName": "Ada", "email": "ada@example.com", "age": 30}, store)
        assert result["success"] is True
        assert errors == {}
        assert store.get_data()[0]["age"] == 30

    def test_invalid_record_is_not_stored(self, store, people_schema):
        result, errors = submit_record(people_schema, {"fullName": "Ada", "email": "nope"}, store)
        assert result["success"] is False
        assert errors == {"email": "Invalid email address"}
        assert store.get_data() == []

    def test_handle_submit_resets_inputs_on_success(self, store, people_schema):
        outputs = handle_submit(people_schema, "Ada", 30, "ada@example.com", "2000-01-02", "Red", store=store)
        n = len(people_schema)
        assert outputs[0] == "Data added successfully!"
        assert outputs[1:1 + n] == ["", None, "", None, None]
        assert outputs[1 + n:] == [""] * n
        assert store.get_data() == [{
            "fullName": "Ada", "age": 30, "email": "ada@example.com", "birthday": "2000-01-02", "team": "Red",
        }]

    def test_handle_submit_keeps_inputs_on_failure(self, store, people_schema):
        outputs = handle_submit(people_schema, "A", None, "", "", "Green", store=store)
        n = len(people_schema)
        assert outputs[0].startswith("Error:")
        assert all(update == {"__type__": "update"} for update in outputs[1:1 + n])
        errors = outputs[1 + n:]
        assert "Must be at least 2 characters" in errors[0]
        assert errors[1] == ""
        assert "required" in errors[2]
        assert "Must be one of" in errors[4]
        assert store.get_data() == []

    def test_store_failure_becomes_error_message(self, people_schema):
        class BrokenStore:
            def add_data(self, record):
                raise IOError("disk full")

        result, errors = submit_record(people_schema, {"fullName": "Ada", "email": "a@b.co"}, BrokenStore())
        assert result == {"success": False, "error": "Failed to add data."}
        assert errors == {}


class TestTableHandlers:
    def _fill(self, store, numbered_records):
        store.update_schema([
            {"id": "1", "name": "n", "label": "N", "type": "number", "validations": []},
            {"id": "2", "name": "name", "label": "Name", "type": "text", "validations": []},
        ])
        for record in numbered_records:
            store.add_data(record)

    def test_render_table_first_page(self, store, numbered_records):
        self._fill(store, numbered_records)
        state, table, message, range_text, page_label, prev_btn, next_btn, export_btn = render_table(TableState(), store)
        assert table["value"]["headers"] == ["N", "Name"]
        assert len(table["value"]["data"]) == 10
        assert message == ""
        assert range_text == "Showing 1-10 of 25 records."
        assert page_label == "Page 1 of 3"
        assert prev_btn["interactive"] is False
        assert next_btn["interactive"] is True
        assert export_btn["interactive"] is True

    def test_paging_and_sorting(self, store, numbered_records):
        self._fill(store, numbered_records)
        state = render_table(TableState(), store)[0]
        state = handle_page_step(1, state, store)[0]
        state = handle_page_step(1, state, store)[0]
        assert state.page == 3
        assert handle_page_step(1, state, store)[0].page == 3

        state = handle_sort("n", state, store)[0]
        state = handle_sort("n", state, store)[0]
        assert (state.sort_direction, state.page) == (DESCENDING, 1)

    def test_query_with_no_match(self, store, numbered_records):
        self._fill(store, numbered_records)
        outputs = handle_query_change("no such thing", TableState(), store)
        assert outputs[2] == "No matching records found."
        assert outputs[7]["interactive"] is False

    def test_render_without_schema(self, store):
        outputs = render_table(TableState(), store)
        assert outputs[1]["visible"] is False
        assert outputs[2] == "No schema defined. The table cannot be displayed."

    def test_export_uses_filtered_set(self, store, numbered_records, tmp_path, monkeypatch):
        self._fill(store, numbered_records)
        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
        path, status = handle_export(TableState(query="row 2"), store)
        assert status == "Exported 6 records."
        with open(path, encoding="utf-8") as f:
            lines = f.read().split("\n")
        assert lines[0] == "N,Name"
        assert len(lines) == 7

    def test_export_nothing(self, store):
        assert handle_export(TableState(), store) == (None, "No records to export.")
