"""
Centralized data definitions for the j2c project.

This module provides:
- `ArrayMode`, the strategies for turning a JSON array into table cells
- `ConvertOptions`, the validated knobs of a conversion run
- `Table`, a unified schema plus backfilled rows ready for the emitter
- Type aliases for flattened rows
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from j2c.constants import DEFAULT_DELIMITER, DEFAULT_MAX_DEPTH, DELIMITER_NAMES

# A flattened record: dotted key path -> cell text ("" for empty cells)
FlatRow = Dict[str, str]


class ArrayMode(str, Enum):
    STRINGIFY = "stringify"
    CONCATENATE = "concatenate"
    SEPARATE = "separate"


class ConvertOptions(BaseModel):
    """Options for a single JSON -> CSV conversion."""

    array_mode: ArrayMode = Field(ArrayMode.STRINGIFY, description="Array handling")
    max_depth: int = Field(
        DEFAULT_MAX_DEPTH, ge=1, description="Maximum object nesting to flatten"
    )
    delimiter: str = Field(DEFAULT_DELIMITER, description="CSV field delimiter")

    @field_validator("delimiter")
    @classmethod
    def _single_char_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        if v in ('"', "\r", "\n"):
            raise ValueError("delimiter cannot be a quote or line break")
        return v


class Table(BaseModel):
    """Unified schema plus rows, each row holding a cell for every column."""

    columns: List[str] = Field(default_factory=list)
    rows: List[FlatRow] = Field(default_factory=list)

    def row_values(self) -> List[List[str]]:
        return [[row.get(col, "") for col in self.columns] for row in self.rows]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)


def delimiter_name(delimiter: str) -> str:
    """Human name for a delimiter, e.g. "comma"; unknown ones are quoted."""
    return DELIMITER_NAMES.get(delimiter, f"'{delimiter}'")
