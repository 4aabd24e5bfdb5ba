"""Standalone JSON and CSV validators used for pre-flight diagnostics."""

from .csv_validator import validate_csv_source, validate_csv_text
from .json_validator import validate_json_source, validate_json_text
from .result import ValidationResult

__all__ = [
    "ValidationResult",
    "validate_csv_source",
    "validate_csv_text",
    "validate_json_source",
    "validate_json_text",
]
