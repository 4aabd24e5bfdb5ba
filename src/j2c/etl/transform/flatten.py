"""
flatten.py

Turn one parsed JSON record into flat rows of dotted-path keys -> cell text.

Rules:
- Nested objects are walked depth-first in source key order; child keys are
  joined with '.' (`{"user": {"name": "Jane"}}` -> `user.name`).
- Objects at or beyond `max_depth` are not decomposed further: the whole
  subtree becomes one cell holding its compact JSON text.
- Arrays become a single cell according to `ArrayMode`:
    * stringify   -> compact JSON text, e.g. `["a","b"]`
    * concatenate -> elements joined with "; "
    * separate    -> one row per element (see `flatten_record`)
- Scalars: strings verbatim, numbers/booleans in JSON spelling, null -> "".
- Empty or whitespace-only property names become `unnamed_field`.
- When two paths produce the same key, the key keeps its first position and
  the later value wins.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from j2c.constants import (
    CONCAT_SEPARATOR,
    DEFAULT_MAX_DEPTH,
    KEY_SEPARATOR,
    UNNAMED_FIELD,
    VALUE_FIELD,
)
from j2c.errors import SeparateModeError
from j2c.logging_setup import get_logger
from j2c.schemas import ArrayMode, FlatRow

log = get_logger("j2c.transform.flatten")


class _PendingArray:
    """An array kept whole in `separate` mode until its row is expanded."""

    __slots__ = ("items", "depth")

    def __init__(self, items: List[Any], depth: int):
        self.items = items
        self.depth = depth


_Cell = Union[str, _PendingArray]


def to_json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def render_element(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return to_json_text(value)
    return render_scalar(value)


def render_array(items: List[Any], array_mode: ArrayMode) -> str:
    """Render an array as one cell (stringify or concatenate)."""
    if array_mode is ArrayMode.CONCATENATE:
        return CONCAT_SEPARATOR.join(render_element(item) for item in items)
    return to_json_text(items)


def child_key(prefix: str, key: str) -> str:
    if not key.strip():
        key = UNNAMED_FIELD
    return f"{prefix}{KEY_SEPARATOR}{key}" if prefix else key


def _store(row: Dict[str, _Cell], key: str, cell: _Cell) -> None:
    if key in row:
        log.warning("Duplicate flattened key, keeping the later value", key=key)
    row[key] = cell


def _array_cell(items: List[Any], depth: int, array_mode: ArrayMode) -> _Cell:
    if array_mode is ArrayMode.SEPARATE:
        return _PendingArray(items, depth)
    return render_array(items, array_mode)


def _flatten_into(
    row: Dict[str, _Cell],
    value: Any,
    prefix: str,
    depth: int,
    max_depth: int,
    array_mode: ArrayMode,
) -> None:
    if isinstance(value, dict):
        if depth >= max_depth:
            _store(row, prefix, to_json_text(value))
            return
        for k, v in value.items():
            key = child_key(prefix, k)
            if isinstance(v, dict):
                _flatten_into(row, v, key, depth + 1, max_depth, array_mode)
            elif isinstance(v, list):
                _store(row, key, _array_cell(v, depth + 1, array_mode))
            else:
                _store(row, key, render_scalar(v))
    elif isinstance(value, list):
        _store(row, prefix, _array_cell(value, depth, array_mode))
    else:
        _store(row, prefix, render_scalar(value))


def flatten(
    value: Any,
    prefix: str = "",
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    array_mode: ArrayMode = ArrayMode.STRINGIFY,
) -> FlatRow:
    """Flatten `value` into a single row.

    `separate` mode can produce several rows per value and is handled by
    `flatten_record` instead.
    """
    if array_mode is ArrayMode.SEPARATE:
        raise ValueError("separate mode yields several rows; use flatten_record()")
    row: Dict[str, _Cell] = {}
    _flatten_into(row, value, prefix, depth, max_depth, array_mode)
    return row  # type: ignore[return-value]


def _expand(
    row: Dict[str, _Cell], max_depth: int, array_mode: ArrayMode
) -> List[FlatRow]:
    pending = [k for k, v in row.items() if isinstance(v, _PendingArray)]
    if not pending:
        return [row]  # type: ignore[list-item]
    if len(pending) > 1:
        raise SeparateModeError(
            "'separate' array mode is not implemented for records with more "
            f"than one array field: {', '.join(pending)}"
        )

    key = pending[0]
    array = row[key]
    assert isinstance(array, _PendingArray)

    if not array.items:
        empty = dict(row)
        empty[key] = ""
        return [empty]  # type: ignore[list-item]

    rows: List[FlatRow] = []
    for item in array.items:
        element: Dict[str, _Cell] = {}
        _flatten_into(element, item, key, array.depth, max_depth, array_mode)
        expanded: Dict[str, _Cell] = {}
        for k, v in row.items():
            if k == key:
                for ek, ev in element.items():
                    _store(expanded, ek, ev)
            else:
                _store(expanded, k, v)
        rows.extend(_expand(expanded, max_depth, array_mode))
    return rows


def flatten_record(
    record: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
    array_mode: ArrayMode = ArrayMode.STRINGIFY,
) -> List[FlatRow]:
    """Flatten one top-level record into its output rows.

    Objects flatten from the root. Any other value (scalar, null, array) is
    treated as `{"value": record}`. Only `separate` mode returns more than
    one row.
    """
    if not isinstance(record, dict):
        record = {VALUE_FIELD: record}
    row: Dict[str, _Cell] = {}
    _flatten_into(row, record, "", 0, max_depth, array_mode)
    return _expand(row, max_depth, array_mode)
