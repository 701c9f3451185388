"""
CSV to JSON Converter
=====================
Converts delimited text into JSON with type inference, null handling
and structural validation.

Pipeline:
    collect lines -> split fields -> headers -> coerce values -> shape -> serialize
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .headers import build_headers
from .inference import Scalar, coerce_value, detect_column_types
from .models import (
    ConverterConfig,
    ConversionMetadata,
    ConversionResult,
    MAX_REPORTED_ERRORS,
    ParseError,
)
from .tokenizer import collect_lines, resolve_delimiter, split_fields
from .types import OutputFormat

logger = logging.getLogger(__name__)

LINE_NUMBER_KEY = "__line"
LARGE_DATASET_ROWS = 10_000
_ERROR_SNIPPET_LENGTH = 50

Record = Dict[str, Any]


class CsvToJsonConverter:
    """
    Converts delimited text to JSON.

    Usage:
        converter = CsvToJsonConverter(ConverterConfig(delimiter="semicolon"))
        result = converter.convert(csv_content)

        if result.success:
            print(result.output)
        else:
            print(f"Error: {result.error}")

    A converter holds no state between calls; one instance may be reused.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def convert(self, csv_content: str) -> ConversionResult:
        """
        Convert delimited text to JSON.

        Args:
            csv_content: Raw delimited text

        Returns:
            ConversionResult with output and metadata, or an error message.
            Never raises.
        """
        start_time = time.perf_counter()
        try:
            return self._convert(csv_content, start_time)
        except Exception as e:
            logger.exception("Unexpected error during CSV conversion")
            return ConversionResult.failure(str(e) or "An unexpected error occurred")

    def _convert(self, csv_content: str, start_time: float) -> ConversionResult:
        config = self.config

        if not csv_content or not csv_content.strip():
            return ConversionResult.failure("CSV input is required")

        delimiter = resolve_delimiter(config, csv_content)
        if not delimiter:
            return ConversionResult.failure("Invalid delimiter specified")

        warnings: List[str] = []
        collected = collect_lines(csv_content, config)
        if collected.limit_reached:
            warnings.append(f"Limited to {config.max_rows} rows as requested")

        if not collected.lines:
            return ConversionResult.failure("No data rows found")

        first_row = self._split(collected.lines[0][1], delimiter)
        headers, duplicate_warning = build_headers(first_row, config)
        if duplicate_warning:
            warnings.append(duplicate_warning)
        logger.debug("Using %d columns: %s", len(headers), headers)

        tag_lines = config.include_line_numbers
        if tag_lines and LINE_NUMBER_KEY in headers:
            tag_lines = False
            warnings.append(f"Column '{LINE_NUMBER_KEY}' conflicts with line numbers; line numbers not added")

        data_lines = collected.lines[1:] if config.has_headers else collected.lines
        records: List[Record] = []
        parse_errors: List[ParseError] = []
        null_count = 0

        for line_number, line in data_lines:
            try:
                values = self._split(line, delimiter)
                if len(values) != len(headers):
                    if config.strict_mode:
                        parse_errors.append(ParseError(
                            line=line_number,
                            error=f"Expected {len(headers)} columns, got {len(values)}",
                            value=_snippet(line),
                        ))
                        continue
                    warnings.append(
                        f"Line {line_number}: Column count mismatch ({len(values)} vs {len(headers)})"
                    )
                    values = _fit(values, len(headers))

                record: Record = {}
                if tag_lines:
                    record[LINE_NUMBER_KEY] = line_number
                for column, raw in zip(headers, values):
                    value = coerce_value(raw, config)
                    if value is None:
                        null_count += 1
                    record[column] = value
                records.append(record)
            except (ValueError, TypeError) as e:
                parse_errors.append(ParseError(line=line_number, error=str(e), value=_snippet(line)))

        if not records:
            return ConversionResult.failure("No valid data rows could be parsed")

        output = json.dumps(
            shape_output(records, headers, config.output_format, config.has_headers),
            indent=2,
            ensure_ascii=False,
        )

        if len(records) > LARGE_DATASET_ROWS:
            warnings.append("Large dataset - consider processing in chunks for better performance")
        if parse_errors:
            message = f"{len(parse_errors)} rows had parsing errors"
            omitted = len(parse_errors) - MAX_REPORTED_ERRORS
            if omitted > 0:
                message += f" ({omitted} not shown)"
            warnings.append(message)
        if collected.empty_skipped:
            warnings.append(f"Skipped {collected.empty_skipped} empty rows")

        metadata = ConversionMetadata(
            row_count=len(records),
            column_count=len(headers),
            detected_columns=list(headers),
            data_types=detect_column_types(records, headers),
            null_count=null_count,
            empty_rows_skipped=collected.empty_skipped,
            processing_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            output_size=len(output.encode("utf-8")),
            errors=parse_errors[:MAX_REPORTED_ERRORS],
        )
        logger.debug(
            "Converted %d rows x %d columns (%d warnings)",
            metadata.row_count, metadata.column_count, len(warnings),
        )

        return ConversionResult(success=True, output=output, metadata=metadata, warnings=warnings)

    def _split(self, line: str, delimiter: str) -> List[str]:
        return split_fields(line, delimiter, self.config.quote_char, self.config.escape_char)


def _fit(values: List[str], width: int) -> List[str]:
    """Pad with empty strings or truncate to exactly ``width`` fields."""
    if len(values) < width:
        return values + [""] * (width - len(values))
    return values[:width]


def _snippet(line: str) -> str:
    if len(line) > _ERROR_SNIPPET_LENGTH:
        return line[:_ERROR_SNIPPET_LENGTH] + "..."
    return line


def shape_output(
    records: Sequence[Record],
    headers: Sequence[str],
    output_format: OutputFormat,
    has_headers: bool = True,
) -> Union[List[Any], Dict[str, List[Scalar]]]:
    """Arrange parsed records in the requested output structure."""
    if output_format == OutputFormat.ARRAY:
        rows: List[List[Any]] = [[record[h] for h in headers] for record in records]
        return [list(headers)] + rows if has_headers else rows
    if output_format == OutputFormat.OBJECT:
        return {h: [record[h] for record in records] for h in headers}
    return list(records)


def records_from_columns(columns: Mapping[str, Sequence[Scalar]]) -> List[Record]:
    """Rebuild row records from ``object``-format (column-major) output."""
    names = list(columns)
    lengths = {len(values) for values in columns.values()}
    if len(lengths) > 1:
        raise ValueError("All columns must have the same number of values")
    row_count = lengths.pop() if lengths else 0
    return [{name: columns[name][i] for name in names} for i in range(row_count)]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def convert_csv_to_json(csv_content: str, config: Optional[ConverterConfig] = None) -> ConversionResult:
    """
    Convenience function to convert delimited text to JSON.

    Args:
        csv_content: Raw delimited text
        config: Optional converter configuration

    Returns:
        ConversionResult with output or error details
    """
    return CsvToJsonConverter(config).convert(csv_content)


def convert_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[ConverterConfig] = None,
    encoding: str = "utf-8",
) -> ConversionResult:
    """
    Convert a delimited text file, optionally writing the JSON to a file.

    Args:
        input_path: Path to the input file
        output_path: Path to write JSON to on success (skipped when None)
        config: Optional converter configuration
        encoding: Text encoding of the input file

    Returns:
        ConversionResult with output or error details
    """
    with open(input_path, "r", encoding=encoding, newline="") as f:
        csv_content = f.read()

    result = convert_csv_to_json(csv_content, config)

    if result.success and result.output and output_path is not None:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(result.output)
        logger.info("Wrote %d bytes to %s", len(result.output.encode("utf-8")), output_path)

    return result


__all__ = [
    "CsvToJsonConverter",
    "LINE_NUMBER_KEY",
    "convert_csv_to_json",
    "convert_file",
    "records_from_columns",
    "shape_output",
]
