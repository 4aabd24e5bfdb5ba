"""Pre-flight CSV validation.

The column count comes from the first record; every later non-blank record is
compared against it. Width mismatches are warnings, never failures: only the
first few are listed, followed by a "... and N more" line. Quoted fields are
honoured, so a delimiter inside quotes does not count as a column break.
"""
from __future__ import annotations

import csv
import io
import math
from pathlib import Path
from typing import List, Optional

from j2c.constants import (
    DEFAULT_DELIMITER,
    HEADER_PREVIEW_CHARS,
    INPUT_ENCODING,
    MAX_WIDTH_WARNINGS,
)
from j2c.errors import EmptyInputError, J2CError, MalformedCsvError
from j2c.etl.extract.loader import is_stdin, read_source
from j2c.schemas import delimiter_name
from j2c.validation.result import ValidationResult


def _header_preview(header: List[str], delimiter: str) -> str:
    text = delimiter.join(header)
    if len(text) > HEADER_PREVIEW_CHARS:
        return text[:HEADER_PREVIEW_CHARS] + "..."
    return text


def validate_csv_text(
    text: str,
    delimiter: str = DEFAULT_DELIMITER,
    has_header: bool = True,
    source: Optional[str] = None,
) -> ValidationResult:
    result = ValidationResult(source or "stdin")

    if not text.strip():
        result.add_error(EmptyInputError("File is empty"))
        return result

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    header: Optional[List[str]] = None
    expected = 0
    records = 0
    inconsistent = 0
    try:
        for record in reader:
            if not record:
                continue
            records += 1
            if header is None:
                header = record
                expected = len(record)
                continue
            if len(record) != expected:
                inconsistent += 1
                if inconsistent <= MAX_WIDTH_WARNINGS:
                    result.add_warning(
                        f"Row {reader.line_num}: {len(record)} columns (expected {expected})"
                    )
    except csv.Error as exc:
        result.add_error(MalformedCsvError(f"Invalid CSV at line {reader.line_num}: {exc}"))
        return result

    if header is None:
        result.add_error(EmptyInputError("File is empty"))
        return result

    if inconsistent > MAX_WIDTH_WARNINGS:
        result.add_warning(
            f"... and {inconsistent - MAX_WIDTH_WARNINGS} more inconsistent rows"
        )

    if has_header and any(not name.strip() for name in header):
        result.add_warning("Found empty column name(s) in header")

    result.stats["rows"] = records - 1 if has_header else records
    result.stats["columns"] = expected
    result.stats["inconsistent_rows"] = inconsistent
    if has_header:
        result.stats["headers"] = _header_preview(header, delimiter)
    result.stats["delimiter"] = delimiter_name(delimiter)
    return result


def validate_csv_source(
    source: str,
    delimiter: str = DEFAULT_DELIMITER,
    has_header: bool = True,
    encoding: str = INPUT_ENCODING,
) -> ValidationResult:
    """Validate a file path, or stdin when `source` is "-"."""
    try:
        text = read_source(source, encoding=encoding, decode_error=MalformedCsvError)
    except J2CError as exc:
        result = ValidationResult(source)
        result.add_error(exc)
        return result

    name = "stdin" if is_stdin(source) else source
    result = validate_csv_text(text, delimiter=delimiter, has_header=has_header, source=name)
    if result.is_valid and not is_stdin(source):
        result.stats["size_kb"] = math.ceil(Path(source).stat().st_size / 1024)
    return result
