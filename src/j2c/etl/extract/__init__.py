"""
Extract stage: read and parse JSON input.

Only the loader functions are exported to keep the package import light.
"""

from .loader import iter_records, load_json, load_json_text, read_source

__all__ = ["iter_records", "load_json", "load_json_text", "read_source"]
