from __future__ import annotations

import csv
import io
import logging
import os
import tempfile
from typing import List, Optional

from .models import DataRecord, FieldDefinition

logger = logging.getLogger(__name__)

EXPORT_FILE_NAME = "data-export.csv"


def _cell(value) -> str:
    if value is None:
        return ""
    return str(value)


def records_to_csv(columns: List[FieldDefinition], records: List[DataRecord]) -> str:
    """Render records as CSV text in column order, header row of labels, '\\n' between rows.

    Values are written as stored (dates stay in their ISO form). Fields with a
    comma, quote or newline are quoted with inner quotes doubled.
    """
    if not columns or not records:
        return ""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow([col.label for col in columns])
    for record in records:
        row = [_cell(record.get(col.name)) for col in columns]
        # csv quotes a lone empty field as ""; a blank line is the empty row
        if row == [""]:
            buffer.write("\n")
        else:
            writer.writerow(row)
    return buffer.getvalue()[:-1]


def export_csv(columns: List[FieldDefinition], records: List[DataRecord], directory: Optional[str] = None) -> Optional[str]:
    """Write the export file and return its path, or None when there is nothing to export."""
    content = records_to_csv(columns, records)
    if not content:
        return None

    path = os.path.join(directory or tempfile.gettempdir(), EXPORT_FILE_NAME)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(content)
    logger.info("Exported %d records to %s", len(records), path)
    return path
