from .flatten import flatten, flatten_record
from .unify import build_table, unify

__all__ = ["build_table", "flatten", "flatten_record", "unify"]
