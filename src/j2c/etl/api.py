"""
j2c Python API
--------------
Use the JSON -> CSV pipeline as a library.

Example usage:
    from j2c.etl.api import convert_text, convert_file
    from j2c.schemas import ArrayMode, ConvertOptions

    table = convert_text('{"user": {"name": "Jane"}}')
    convert_file("data.json", "data.csv", ConvertOptions(array_mode=ArrayMode.CONCATENATE))
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional, TextIO

from j2c.constants import CSV_ENCODING, INPUT_ENCODING
from j2c.etl.extract.loader import iter_records, load_json, load_json_text
from j2c.etl.load.emit_csv import write_csv, write_csv_file
from j2c.etl.transform.flatten import flatten_record
from j2c.etl.transform.unify import build_table
from j2c.logging_setup import get_logger
from j2c.schemas import ConvertOptions, FlatRow, Table

log = get_logger("j2c.api")


def convert_document(document: Any, options: Optional[ConvertOptions] = None) -> Table:
    """Flatten every record of a parsed document and unify the result."""
    options = options or ConvertOptions()
    rows: List[FlatRow] = []
    records = 0
    for record in iter_records(document):
        records += 1
        rows.extend(flatten_record(record, options.max_depth, options.array_mode))
    table = build_table(rows)
    log.info(
        "Flattened document",
        records=records,
        rows=table.row_count,
        columns=table.column_count,
        array_mode=options.array_mode.value,
        max_depth=options.max_depth,
    )
    return table


def convert_text(text: str, options: Optional[ConvertOptions] = None) -> Table:
    return convert_document(load_json_text(text), options)


def convert_file(
    source: str,
    output: Optional[str] = None,
    options: Optional[ConvertOptions] = None,
    input_encoding: str = INPUT_ENCODING,
    csv_encoding: str = CSV_ENCODING,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Table:
    """Run the whole pipeline: read `source`, write CSV to `output` or stdout.

    The table is fully built before anything is written, so a failing input
    never leaves a partial output file behind.
    """
    options = options or ConvertOptions()
    table = convert_document(load_json(source, input_encoding, stdin=stdin), options)
    if output:
        write_csv_file(table, Path(output), options.delimiter, csv_encoding)
        log.info("Wrote CSV", output=output, rows=table.row_count)
    else:
        write_csv(table, stdout if stdout is not None else sys.stdout, options.delimiter)
    return table
