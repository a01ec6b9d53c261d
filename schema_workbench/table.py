"""Client-side view over the record set: search, single-column sort, pagination.

Nothing here mutates the records or the schema; every function returns new
values.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from functools import cmp_to_key
from typing import Any, List, Optional

from .field_kinds import format_display, get_kind
from .models import DataRecord, FieldDefinition

PAGE_SIZE = 10
ASCENDING = 'ascending'
DESCENDING = 'descending'

NO_SCHEMA_MESSAGE = "No schema defined. The table cannot be displayed."
NO_DATA_MESSAGE = "No data available. Add records via the Data Entry page."
NO_MATCH_MESSAGE = "No matching records found."


@dataclass(frozen=True)
class TableState:
    query: str = ''
    sort_key: Optional[str] = None
    sort_direction: str = ASCENDING
    page: int = 1


@dataclass
class TableView:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    records: List[DataRecord] = field(default_factory=list)
    message: str = ''
    page: int = 1
    total_pages: int = 0
    total_records: int = 0
    range_text: str = ''
    page_label: str = ''
    prev_disabled: bool = True
    next_disabled: bool = True
    export_enabled: bool = False


def _as_search_text(value: Any) -> str:
    return '' if value is None else str(value)


def filter_records(records: List[DataRecord], query: str) -> List[DataRecord]:
    if not query:
        return list(records)
    needle = query.lower()
    return [
        record for record in records
        if any(needle in _as_search_text(value).lower() for value in record.values())
    ]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    a_text, b_text = _as_search_text(a), _as_search_text(b)
    return (a_text > b_text) - (a_text < b_text)


def sort_records(records: List[DataRecord], key: Optional[str], direction: str = ASCENDING) -> List[DataRecord]:
    if key is None:
        return list(records)
    # sorted() is stable in both directions, so equal values keep their order.
    return sorted(
        records,
        key=cmp_to_key(lambda a, b: compare_values(a.get(key), b.get(key))),
        reverse=direction == DESCENDING,
    )


def request_sort(state: TableState, key: str) -> TableState:
    direction = ASCENDING
    if state.sort_key == key and state.sort_direction == ASCENDING:
        direction = DESCENDING
    return replace(state, sort_key=key, sort_direction=direction, page=1)


def set_query(state: TableState, query: str) -> TableState:
    return replace(state, query=query or '', page=1)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def change_page(state: TableState, page: int, count: int) -> TableState:
    """Move to `page` if it lies in [1, total pages]; otherwise stay put."""
    if 1 <= page <= total_pages(count):
        return replace(state, page=page)
    return state


def paginate(records: List[DataRecord], page: int, page_size: int = PAGE_SIZE) -> List[DataRecord]:
    start = (page - 1) * page_size
    return records[start:start + page_size]


def apply_view(records: List[DataRecord], state: TableState) -> List[DataRecord]:
    """The full filtered and sorted set (what the export sees)."""
    return sort_records(filter_records(records, state.query), state.sort_key, state.sort_direction)


def display_row(columns: List[FieldDefinition], record: DataRecord) -> List[str]:
    return [format_display(get_kind(col.type), record.get(col.name)) for col in columns]


def build_table_view(columns: List[FieldDefinition], records: List[DataRecord], state: TableState) -> TableView:
    if not columns:
        return TableView(message=NO_SCHEMA_MESSAGE)

    visible = apply_view(records, state)
    count = len(visible)
    pages = total_pages(count)
    page = min(max(state.page, 1), max(pages, 1))
    page_records = paginate(visible, page)

    message = ''
    if not page_records:
        message = NO_MATCH_MESSAGE if records else NO_DATA_MESSAGE

    first = min((page - 1) * PAGE_SIZE + 1, count)
    last = min(page * PAGE_SIZE, count)
    return TableView(
        headers=[col.label for col in columns],
        rows=[display_row(columns, r) for r in page_records],
        records=visible,
        message=message,
        page=page,
        total_pages=pages,
        total_records=count,
        range_text=f"Showing {first}-{last} of {count} records.",
        page_label=f"Page {page} of {pages if pages > 0 else 1}",
        prev_disabled=page == 1,
        next_disabled=page == pages or pages == 0,
        export_enabled=count > 0,
    )
