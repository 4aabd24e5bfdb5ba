from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from j2c.logging_setup import get_logger
from j2c.schemas import FlatRow, Table

log = get_logger("j2c.transform.unify")


def unify(rows: Iterable[FlatRow]) -> List[str]:
    """Ordered union of row keys, first-seen order across all rows.

    Blank (empty or whitespace-only) keys never become columns.
    """
    seen: Dict[str, None] = {}
    for row in rows:
        for key in row:
            if key.strip() and key not in seen:
                seen[key] = None
    return list(seen)


def build_table(rows: Sequence[FlatRow]) -> Table:
    """Unify the schema and backfill every row with "" for missing keys."""
    columns = unify(rows)
    filled = [{col: row.get(col, "") for col in columns} for row in rows]
    log.debug("Unified schema", rows=len(filled), columns=len(columns))
    return Table(columns=columns, rows=filled)
