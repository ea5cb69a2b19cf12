"""Header-driven CSV tokenizer tolerant of ragged rows."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Dict, List, Mapping, Optional

from atpdata.errors import RowParseError


RawRow = Mapping[str, Optional[str]]

_BOM = "\ufeff"


def parse_rows(text: str) -> List[RawRow]:
    """Tokenize CSV text into rows keyed by the header names.

    Values are trimmed. Rows shorter than the header expose the missing
    trailing columns as ``None``; cells beyond the header are dropped; blank
    lines are skipped.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]
    reader = csv.reader(StringIO(text, newline=""), strict=True)
    try:
        columns: List[str] = []
        for header in reader:
            if any(cell.strip() for cell in header):
                columns = [column.strip() for column in header]
                break
        if not columns:
            return []
        rows: List[RawRow] = []
        for cells in reader:
            if not any(cell.strip() for cell in cells):
                continue
            row: Dict[str, Optional[str]] = {}
            for index, column in enumerate(columns):
                if not column:
                    continue
                row[column] = cells[index].strip() if index < len(cells) else None
            rows.append(row)
    except csv.Error as exc:
        raise RowParseError(f"line {reader.line_num}: {exc}") from exc
    return rows
