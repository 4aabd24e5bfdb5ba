"""
j2c command line
----------------
Convert JSON to CSV and validate JSON / CSV files.

Example:
    j2c convert -i data.json -o data.csv
    cat data.json | j2c convert -i - -a concatenate > data.csv
    j2c validate-json -p data.json -e
    j2c validate-csv -p data.tsv -d '\\t'

Stdout carries only CSV (convert) or validator summaries; progress, warnings
and errors go to stderr.
"""
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape

from j2c.errors import J2CError
from j2c.etl.api import convert_text
from j2c.etl.extract.loader import is_stdin, read_source
from j2c.etl.load.emit_csv import write_csv, write_csv_file
from j2c.logging_setup import configure_logging, get_logger
from j2c.schemas import ArrayMode, ConvertOptions
from j2c.settings import Settings
from j2c.validation import validate_csv_source, validate_json_source
from j2c.validation.result import ValidationResult

# Diagnostics on stderr; validator summaries on stdout.
console = Console(stderr=True, highlight=False, soft_wrap=True)
out = Console(highlight=False, soft_wrap=True)

app = typer.Typer(
    help="Convert nested JSON to flat CSV and validate JSON/CSV files.",
    add_completion=False,
    no_args_is_help=True,
)

DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


def _fail(message: str, code: int = 1) -> None:
    console.print(f"[red]Error:[/] {escape(message)}")
    raise typer.Exit(code=code)


def _parse_delimiter(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return DELIMITER_ALIASES.get(value, value)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML settings file (default: $J2C_CONFIG)."
    ),
):
    load_dotenv(override=False)
    ctx.ensure_object(dict)
    try:
        settings = Settings.load(config)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        _fail(f"Could not load settings: {e}")

    ctx.obj["SETTINGS"] = settings
    configure_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        structured=settings.logging.structured,
    )


@app.command()
def convert(
    ctx: typer.Context,
    input_path: str = typer.Option(
        ..., "--input", "-i", help="Input JSON file, or - for stdin."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output CSV file (default: stdout)."
    ),
    array: Optional[str] = typer.Option(
        None, "--array", "-a", help="Array handling: stringify|concatenate|separate."
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", help="Maximum nesting depth to flatten."
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", "-s", help="CSV delimiter character."
    ),
):
    """Convert a JSON document (object or array of objects) to CSV."""
    settings: Settings = ctx.obj["SETTINGS"]
    log = get_logger("j2c.convert")

    overrides = {
        "array_mode": array,
        "max_depth": depth,
        "delimiter": _parse_delimiter(separator),
    }
    try:
        options = ConvertOptions(
            **{
                **settings.convert.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValidationError as e:
        modes = "|".join(m.value for m in ArrayMode)
        _fail(f"Invalid option ({modes} for --array, depth >= 1, one-char separator):\n{e}")

    try:
        text = read_source(input_path, encoding=settings.input_encoding)
        if is_stdin(input_path):
            console.print("Reading JSON from stdin...")
        else:
            console.print(f"Reading JSON from: {escape(input_path)}")

        console.print("Converting JSON to CSV...")
        table = convert_text(text, options)

        if output:
            console.print(f"Writing CSV to: {escape(output)}")
            try:
                write_csv_file(table, Path(output), options.delimiter, settings.csv_encoding)
            except OSError as e:
                log.info("Write failed", output=output, error=str(e))
                _fail(f"Cannot write {output}: {e.strerror or e}")
        else:
            console.print("Writing CSV to stdout...")
            write_csv(table, sys.stdout, options.delimiter)
            sys.stdout.flush()
    except J2CError as e:
        log.info("Conversion failed", kind=e.kind, error=str(e), input=input_path)
        _fail(str(e), e.exit_code)

    console.print("[green]SUCCESS:[/] Conversion complete!")
    console.print(f"  Rows: {table.row_count}")
    console.print(f"  Columns: {table.column_count}")


def _report(result: ValidationResult, kind: str) -> None:
    for warning in result.warnings:
        console.print(f"[yellow]WARNING:[/] {escape(warning)}")
    for error in result.errors:
        console.print(f"[red]ERROR:[/] {escape(str(error))}")
    if not result.is_valid:
        console.print(escape(result.summary()))
        return

    out.print(f"[green]SUCCESS:[/] Valid {kind}")
    labels = {
        "type": "Type",
        "items": "Items",
        "properties": "Properties",
        "lines": "Lines",
        "rows": "Rows",
        "columns": "Columns",
        "headers": "Headers",
        "delimiter": "Delimiter",
    }
    for key, label in labels.items():
        if key in result.stats:
            value = result.stats[key]
            if key == "type":
                value = str(value).capitalize()
            out.print(f"  {label}: {escape(str(value))}")
    if "size_kb" in result.stats:
        out.print(f"  Size: {result.stats['size_kb']} KB")


@app.command("validate-json")
def validate_json(
    ctx: typer.Context,
    path: str = typer.Option(..., "--path", "-p", help="JSON file, or - for stdin."),
    check_empty: bool = typer.Option(
        False, "--check-empty", "-e", help="Warn about empty property names."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="No output, exit code only."
    ),
):
    """Validate JSON syntax and report its top-level shape."""
    settings: Settings = ctx.obj["SETTINGS"]
    if not quiet:
        if is_stdin(path):
            console.print("Validating JSON from stdin")
        else:
            out.print(f"Validating JSON file: {escape(path)}")

    result = validate_json_source(path, check_empty, encoding=settings.input_encoding)
    get_logger("j2c.validate").info(
        "JSON validated", source=result.source, valid=result.is_valid, **result.stats
    )
    if not quiet:
        _report(result, "JSON")
    raise typer.Exit(code=result.exit_code)


@app.command("validate-csv")
def validate_csv(
    ctx: typer.Context,
    path: str = typer.Option(..., "--path", "-p", help="CSV file, or - for stdin."),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help="CSV delimiter."),
    no_header: bool = typer.Option(
        False, "--no-header", "-n", help="Treat the first row as data."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="No output, exit code only."
    ),
):
    """Validate CSV structure: consistent column counts and header names."""
    settings: Settings = ctx.obj["SETTINGS"]
    delimiter = _parse_delimiter(delimiter)
    if len(delimiter) != 1 or delimiter in ('"', "\r", "\n"):
        if quiet:
            raise typer.Exit(code=1)
        _fail(f"Invalid delimiter: {delimiter!r}")

    if not quiet:
        if is_stdin(path):
            console.print("Validating CSV from stdin")
        else:
            out.print(f"Validating CSV file: {escape(path)}")

    result = validate_csv_source(
        path, delimiter, has_header=not no_header, encoding=settings.input_encoding
    )
    get_logger("j2c.validate").info(
        "CSV validated", source=result.source, valid=result.is_valid, **result.stats
    )
    if not quiet:
        _report(result, "CSV")
    raise typer.Exit(code=result.exit_code)


@app.command("show-config")
def show_config(ctx: typer.Context):
    """Print the effective settings (YAML < environment)."""
    settings: Settings = ctx.obj["SETTINGS"]
    rprint(settings.model_dump(mode="json"))


def run() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
