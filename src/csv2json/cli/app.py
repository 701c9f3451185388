"""Typer-based command line interface for csv2json."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer

from ..config import AppConfig, load_config
from ..converter import CsvToJsonConverter
from ..models import ConversionResult, ConverterConfig
from ..types import Delimiter, OutputFormat

app = typer.Typer(help="Convert delimited text (CSV, TSV, ...) to JSON.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Convert delimited text (CSV, TSV, ...) to JSON."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_config(
    config_file: Optional[Path],
    profile: Optional[str],
    overrides: Dict[str, Any],
) -> Tuple[ConverterConfig, str]:
    """Resolve config file, profile and command line overrides (in that order)."""

    app_config = load_config(config_file) if config_file else AppConfig()
    base = app_config.converter_config(profile)
    explicit = {key: value for key, value in overrides.items() if value is not None}
    return base.with_overrides(explicit), app_config.encoding


def _read_input(source: str, encoding: str) -> str:
    if source == "-":
        return typer.get_binary_stream("stdin").read().decode(encoding)
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with path.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


def _run(
    source: str,
    config_file: Optional[Path],
    profile: Optional[str],
    encoding: Optional[str],
    overrides: Dict[str, Any],
) -> ConversionResult:
    try:
        converter_config, default_encoding = _build_config(config_file, profile, overrides)
        csv_content = _read_input(source, encoding or default_encoding)
    except (OSError, LookupError, ValueError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = CsvToJsonConverter(converter_config).convert(csv_content)
    if not result.success:
        typer.secho(f"ERROR: {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return result


def _echo_warnings(warnings: List[str]) -> None:
    for warning in warnings:
        typer.secho(f"⚠ WARNING: {warning}", fg=typer.colors.YELLOW, err=True)


# Options shared by `convert` and `inspect`.
_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file.")
_PROFILE_OPTION = typer.Option(None, "--profile", "-p", help="Named profile from the configuration file.")
_DELIMITER_OPTION = typer.Option(None, "--delimiter", "-d", help="comma, semicolon, tab, pipe, space, custom or auto.")
_CUSTOM_DELIMITER_OPTION = typer.Option(None, "--custom-delimiter", help="Delimiter string when --delimiter custom.")
_HEADERS_OPTION = typer.Option(None, "--headers/--no-headers", help="Treat the first row as column names.")
_CUSTOM_HEADERS_OPTION = typer.Option(None, "--custom-headers", help="Comma separated column names for headerless input.")
_FORMAT_OPTION = typer.Option(None, "--format", "-f", help="records, array or object.")
_STRICT_OPTION = typer.Option(None, "--strict/--lenient", help="Reject rows whose column count does not match.")
_MAX_ROWS_OPTION = typer.Option(None, "--max-rows", min=0, help="Stop after this many data rows (0 = unlimited).")
_NUMBERS_OPTION = typer.Option(None, "--numbers/--no-numbers", help="Parse numeric values.")
_BOOLEANS_OPTION = typer.Option(None, "--booleans/--no-booleans", help="Parse boolean tokens.")
_DATES_OPTION = typer.Option(None, "--dates/--no-dates", help="Parse date values to ISO timestamps.")
_TRIM_OPTION = typer.Option(None, "--trim/--no-trim", help="Trim whitespace around values.")
_SKIP_EMPTY_OPTION = typer.Option(None, "--skip-empty/--keep-empty", help="Skip blank lines.")
_LINE_NUMBERS_OPTION = typer.Option(None, "--line-numbers/--no-line-numbers", help="Add a __line key to each record.")
_NULL_VALUE_OPTION = typer.Option(None, "--null-value", help="Value treated as null (repeatable; replaces defaults).")
_ENCODING_OPTION = typer.Option(None, "--encoding", "-e", help="Input file encoding (default utf-8).")


def _overrides(**values: Any) -> Dict[str, Any]:
    null_values = values.get("null_values")
    values["null_values"] = tuple(null_values) if null_values else None
    return values


@app.command()
def convert(
    source: str = typer.Argument(..., help="Input file, or '-' for stdin."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout."),
    config: Optional[Path] = _CONFIG_OPTION,
    profile: Optional[str] = _PROFILE_OPTION,
    delimiter: Optional[Delimiter] = _DELIMITER_OPTION,
    custom_delimiter: Optional[str] = _CUSTOM_DELIMITER_OPTION,
    has_headers: Optional[bool] = _HEADERS_OPTION,
    custom_headers: Optional[str] = _CUSTOM_HEADERS_OPTION,
    output_format: Optional[OutputFormat] = _FORMAT_OPTION,
    strict_mode: Optional[bool] = _STRICT_OPTION,
    max_rows: Optional[int] = _MAX_ROWS_OPTION,
    parse_numbers: Optional[bool] = _NUMBERS_OPTION,
    parse_booleans: Optional[bool] = _BOOLEANS_OPTION,
    parse_dates: Optional[bool] = _DATES_OPTION,
    trim_whitespace: Optional[bool] = _TRIM_OPTION,
    skip_empty_lines: Optional[bool] = _SKIP_EMPTY_OPTION,
    include_line_numbers: Optional[bool] = _LINE_NUMBERS_OPTION,
    null_values: Optional[List[str]] = _NULL_VALUE_OPTION,
    encoding: Optional[str] = _ENCODING_OPTION,
) -> None:
    """Convert delimited text to JSON."""

    result = _run(
        source,
        config,
        profile,
        encoding,
        _overrides(
            delimiter=delimiter,
            custom_delimiter=custom_delimiter,
            has_headers=has_headers,
            custom_headers=custom_headers,
            output_format=output_format,
            strict_mode=strict_mode,
            max_rows=max_rows,
            parse_numbers=parse_numbers,
            parse_booleans=parse_booleans,
            parse_dates=parse_dates,
            trim_whitespace=trim_whitespace,
            skip_empty_lines=skip_empty_lines,
            include_line_numbers=include_line_numbers,
            null_values=null_values,
        ),
    )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.output, encoding="utf-8")
        typer.secho(
            f"✓ {result.metadata.row_count} rows written to {output}",
            fg=typer.colors.GREEN,
            err=True,
        )
    else:
        typer.echo(result.output)
    _echo_warnings(result.warnings)


@app.command()
def inspect(
    source: str = typer.Argument(..., help="Input file, or '-' for stdin."),
    config: Optional[Path] = _CONFIG_OPTION,
    profile: Optional[str] = _PROFILE_OPTION,
    delimiter: Optional[Delimiter] = _DELIMITER_OPTION,
    custom_delimiter: Optional[str] = _CUSTOM_DELIMITER_OPTION,
    has_headers: Optional[bool] = _HEADERS_OPTION,
    custom_headers: Optional[str] = _CUSTOM_HEADERS_OPTION,
    strict_mode: Optional[bool] = _STRICT_OPTION,
    max_rows: Optional[int] = _MAX_ROWS_OPTION,
    parse_dates: Optional[bool] = _DATES_OPTION,
    null_values: Optional[List[str]] = _NULL_VALUE_OPTION,
    encoding: Optional[str] = _ENCODING_OPTION,
) -> None:
    """Show row, column and type information without printing the JSON."""

    result = _run(
        source,
        config,
        profile,
        encoding,
        _overrides(
            delimiter=delimiter,
            custom_delimiter=custom_delimiter,
            has_headers=has_headers,
            custom_headers=custom_headers,
            strict_mode=strict_mode,
            max_rows=max_rows,
            parse_dates=parse_dates,
            null_values=null_values,
        ),
    )
    _describe_result(result)
    _echo_warnings(result.warnings)


@app.command("profiles")
def list_profiles(
    config: Path = typer.Option(..., "--config", "-c", help="Path to a YAML configuration file."),
) -> None:
    """Display profiles defined in the configuration file."""

    try:
        config_obj = load_config(config)
    except (OSError, ValueError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not config_obj.profiles:
        typer.echo("No profiles defined.")
        raise typer.Exit()

    for name in config_obj.profile_names():
        settings = ", ".join(f"{key}={value}" for key, value in config_obj.profiles[name].items())
        typer.echo(f"{name}: {settings or '(defaults)'}")


def _describe_result(result: ConversionResult) -> None:
    metadata = result.metadata
    typer.echo(f"Rows: {metadata.row_count}")
    typer.echo(f"Columns: {metadata.column_count}")
    for column in metadata.detected_columns:
        typer.echo(f"  {column}: {metadata.data_types.get(column, 'null')}")
    typer.echo(f"Null values: {metadata.null_count}")
    typer.echo(f"Empty rows skipped: {metadata.empty_rows_skipped}")
    typer.echo(f"Output size: {metadata.output_size} bytes")
    typer.echo(f"Processing time: {metadata.processing_time_ms} ms")
    for error in metadata.errors:
        typer.secho(f"  Line {error.line}: {error.error}", fg=typer.colors.RED)


__all__ = ["app", "convert", "inspect", "list_profiles"]
