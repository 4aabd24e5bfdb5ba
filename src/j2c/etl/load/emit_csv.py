"""
emit_csv.py

Serialize a unified table to delimited text with `csv.writer`.

Quoting is QUOTE_MINIMAL against the delimiter actually in effect: a field is
quoted when it contains that delimiter, a double quote, or a line break, and
embedded quotes are doubled. A field holding a comma is left bare when the
delimiter is ';'. Records end with "\\n".
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence, TextIO

from j2c.constants import CSV_ENCODING, DEFAULT_DELIMITER
from j2c.schemas import Table

LINE_TERMINATOR = "\n"


def _writer(stream: TextIO, delimiter: str):
    return csv.writer(stream, delimiter=delimiter, lineterminator=LINE_TERMINATOR)


def emit(
    schema: Sequence[str],
    rows: Iterable[Mapping[str, str]],
    delimiter: str = DEFAULT_DELIMITER,
) -> List[str]:
    """Header plus one CSV record per row, without line terminators.

    Rows missing a schema key get an empty field. An empty schema emits
    nothing at all.
    """
    if not schema:
        return []
    buf = io.StringIO()
    writer = _writer(buf, delimiter)
    records = [list(schema)] + [[row.get(k, "") for k in schema] for row in rows]
    lines = []
    for record in records:
        writer.writerow(record)
        lines.append(buf.getvalue()[: -len(LINE_TERMINATOR)])
        buf.seek(0)
        buf.truncate()
    return lines


def write_csv(table: Table, stream: TextIO, delimiter: str = DEFAULT_DELIMITER) -> int:
    """Write `table` to an open text stream; returns the number of records."""
    if not table.columns:
        return 0
    writer = _writer(stream, delimiter)
    writer.writerow(table.columns)
    writer.writerows(table.row_values())
    return table.row_count + 1


def write_csv_file(
    table: Table,
    out_path: Path,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = CSV_ENCODING,
) -> int:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding=encoding, newline="") as fh:
        return write_csv(table, fh, delimiter)
