"""j2c: flatten nested JSON into CSV, with JSON and CSV validators.

The command line lives in `j2c.cli`. The pipeline stages are in `j2c.etl`:
- extract: read input and parse JSON
- transform: flatten records and unify their columns
- load: emit delimited text
"""

__version__ = "0.1.0"
