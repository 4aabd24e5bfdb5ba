from .emit_csv import emit, write_csv, write_csv_file

__all__ = ["emit", "write_csv", "write_csv_file"]
