"""Pre-flight JSON validation.

Reports empty input and syntax errors (with the parser message), optionally
warns about empty-string property names, and on success records the
top-level type plus its item or property count.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Optional

from j2c.constants import INPUT_ENCODING
from j2c.errors import EmptyInputError, J2CError, MalformedJsonError
from j2c.etl.extract.loader import has_empty_key, is_stdin, parse_json, read_source
from j2c.validation.result import ValidationResult

EMPTY_KEY_WARNING = "Found empty string as property name ('')"
EMPTY_KEY_HINT = "This is valid JSON but not supported by PowerShell ConvertFrom-Json"


def json_type_name(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    return "number"


def validate_json_text(
    text: str, check_empty_keys: bool = False, source: Optional[str] = None
) -> ValidationResult:
    result = ValidationResult(source or "stdin")

    if not text.strip():
        result.add_error(EmptyInputError("File is empty"))
        return result

    if check_empty_keys and has_empty_key(text):
        result.add_warning(f"{EMPTY_KEY_WARNING}. {EMPTY_KEY_HINT}")

    try:
        document = parse_json(text)
    except ValueError as exc:
        result.add_error(MalformedJsonError(f"Invalid JSON: {exc}"))
        return result

    kind = json_type_name(document)
    result.stats["type"] = kind
    if kind == "array":
        result.stats["items"] = len(document)
    elif kind == "object":
        result.stats["properties"] = len(document)
    result.stats["lines"] = len(text.splitlines())
    return result


def validate_json_source(
    source: str, check_empty_keys: bool = False, encoding: str = INPUT_ENCODING
) -> ValidationResult:
    """Validate a file path, or stdin when `source` is "-"."""
    try:
        text = read_source(source, encoding=encoding)
    except J2CError as exc:
        result = ValidationResult(source)
        result.add_error(exc)
        return result

    name = "stdin" if is_stdin(source) else source
    result = validate_json_text(text, check_empty_keys=check_empty_keys, source=name)
    if result.is_valid and not is_stdin(source):
        result.stats["size_kb"] = math.ceil(Path(source).stat().st_size / 1024)
    return result
