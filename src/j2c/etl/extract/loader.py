"""
loader.py

Read a JSON document from a file or stdin and parse it.

Checks, in order:
- the named path exists (`InputNotFoundError`)
- the content is not empty and not the bare token `null` (`EmptyInputError`)
- no property name is the empty string (`UnsupportedKeyError`). This is a
  raw-text scan done before parsing: some downstream JSON readers cannot
  represent `""` keys, so they are refused up front with a clear message.
- the bytes decode in the input encoding (`MalformedJsonError`)
- the text parses as strict JSON: `NaN` and `Infinity` are refused
  (`MalformedJsonError`, carrying the parser message)
"""
from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import Any, Iterator, Optional, TextIO, Type

from j2c.constants import INPUT_ENCODING, STDIN_SENTINEL
from j2c.errors import (
    EmptyInputError,
    InputNotFoundError,
    J2CError,
    MalformedJsonError,
    UnsupportedKeyError,
)
from j2c.logging_setup import get_logger

EMPTY_KEY_RE = re.compile(r'""\s*:')

log = get_logger("j2c.extract")


def is_stdin(source: str) -> bool:
    return source == STDIN_SENTINEL


def read_source(
    source: str,
    encoding: str = INPUT_ENCODING,
    stdin: Optional[TextIO] = None,
    decode_error: Type[J2CError] = MalformedJsonError,
) -> str:
    """Return the raw text of `source`, a file path or "-" for stdin.

    Bytes that do not decode in `encoding` raise `decode_error`, so each
    caller reports them in its own format's terms.
    """
    name = "stdin" if is_stdin(source) else source
    try:
        if is_stdin(source):
            stream = stdin if stdin is not None else sys.stdin
            text = stream.read()
        else:
            path = Path(source)
            if not path.is_file():
                raise InputNotFoundError(f"Input file not found: {source}")
            with open(path, "r", encoding=encoding) as fh:
                text = fh.read()
    except UnicodeDecodeError as exc:
        raise decode_error(
            f"Cannot decode {name} as {encoding}: byte {exc.object[exc.start]:#04x} "
            f"at position {exc.start}"
        ) from exc
    log.debug("Read input", source=name, chars=len(text))
    return text


def has_empty_key(text: str) -> bool:
    return EMPTY_KEY_RE.search(text) is not None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def parse_json(text: str) -> Any:
    """`json.loads` without the NaN/Infinity extensions.

    Raises `ValueError` (a `JSONDecodeError` for syntax errors).
    """
    return json.loads(text, parse_constant=_reject_constant)


def load_json_text(text: str) -> Any:
    """Validate raw text and parse it into Python JSON values."""
    stripped = text.strip()
    if not stripped or stripped == "null":
        raise EmptyInputError("Empty or null JSON input")

    if has_empty_key(text):
        raise UnsupportedKeyError(
            "Invalid JSON - Found empty string as property name"
        )

    try:
        return parse_json(text)
    except ValueError as exc:
        raise MalformedJsonError(f"Invalid JSON: {exc}") from exc


def load_json(
    source: str, encoding: str = INPUT_ENCODING, stdin: Optional[TextIO] = None
) -> Any:
    return load_json_text(read_source(source, encoding=encoding, stdin=stdin))


def iter_records(document: Any) -> Iterator[Any]:
    """Yield the records of a parsed document.

    An array yields each element; anything else is a single record.
    """
    if isinstance(document, list):
        yield from document
    else:
        yield document
