"""Central constants for the j2c project."""

# Output CSV encoding. Use "utf-8-sig" via settings when the file is meant
# for Excel on Windows; stdout stays BOM-free by default.
CSV_ENCODING = "utf-8"

# Input files are read BOM-tolerant.
INPUT_ENCODING = "utf-8-sig"

# Sentinel path meaning "read from standard input".
STDIN_SENTINEL = "-"

DEFAULT_MAX_DEPTH = 3
DEFAULT_DELIMITER = ","

# Joins nested path segments: {"user": {"name": ...}} -> "user.name"
KEY_SEPARATOR = "."

# Placeholder for empty or whitespace-only property names reaching the flattener
UNNAMED_FIELD = "unnamed_field"

# Column used when a record is not a JSON object
VALUE_FIELD = "value"

# Joins array elements in "concatenate" mode
CONCAT_SEPARATOR = "; "

# CSV validator display limits
MAX_WIDTH_WARNINGS = 5
HEADER_PREVIEW_CHARS = 80

DELIMITER_NAMES = {
    ",": "comma",
    "\t": "tab",
    ";": "semicolon",
    "|": "pipe",
}
