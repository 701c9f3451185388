"""
Data models for CSV to JSON conversion.

This module contains dataclasses for:
- Converter configuration
- Row-level parse errors
- Conversion metadata and results
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .types import Delimiter, OutputFormat


DEFAULT_NULL_VALUES: Tuple[str, ...] = ("", "null", "NULL", "N/A")

# Only the first few row-level errors are kept in metadata.
MAX_REPORTED_ERRORS = 10

_BOOLEAN_OPTIONS = (
    "has_headers",
    "skip_empty_lines",
    "trim_whitespace",
    "parse_numbers",
    "parse_booleans",
    "parse_dates",
    "strict_mode",
    "include_line_numbers",
)
_STRING_OPTIONS = ("custom_delimiter", "custom_headers", "quote_char", "escape_char")


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class ConverterConfig:
    """Configuration options for the converter.

    Instances are immutable and validated on construction. Enum-valued
    options also accept their string names, so ``ConverterConfig(delimiter="tab")``
    is equivalent to ``ConverterConfig(delimiter=Delimiter.TAB)``.
    """

    delimiter: Delimiter = Delimiter.COMMA
    custom_delimiter: str = ""
    has_headers: bool = True
    skip_empty_lines: bool = True
    trim_whitespace: bool = True
    quote_char: str = '"'
    escape_char: str = "\\"
    output_format: OutputFormat = OutputFormat.RECORDS
    parse_numbers: bool = True
    parse_booleans: bool = True
    parse_dates: bool = False
    null_values: Tuple[str, ...] = DEFAULT_NULL_VALUES
    custom_headers: str = ""
    strict_mode: bool = False
    include_line_numbers: bool = False
    max_rows: int = 0

    def __post_init__(self) -> None:
        try:
            delimiter = Delimiter(self.delimiter)
        except ValueError:
            choices = ", ".join(d.value for d in Delimiter)
            raise ValueError(f"Unknown delimiter '{self.delimiter}'. Expected one of: {choices}") from None
        try:
            output_format = OutputFormat(self.output_format)
        except ValueError:
            choices = ", ".join(f.value for f in OutputFormat)
            raise ValueError(
                f"Unknown output format '{self.output_format}'. Expected one of: {choices}"
            ) from None

        for name in _BOOLEAN_OPTIONS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")
        for name in _STRING_OPTIONS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")

        if isinstance(self.null_values, str):
            raise ValueError("null_values must be a sequence of strings, not a single string")
        null_values = tuple(self.null_values)
        if not all(isinstance(value, str) for value in null_values):
            raise ValueError("null_values entries must be strings (quote YAML values such as null or ~)")

        if isinstance(self.max_rows, bool) or not isinstance(self.max_rows, int):
            raise ValueError(f"max_rows must be an integer, got {self.max_rows!r}")
        if self.max_rows < 0:
            raise ValueError("max_rows must be zero (unlimited) or positive")

        for name in ("quote_char", "escape_char"):
            if len(getattr(self, name)) > 1:
                raise ValueError(f"{name} must be a single character or empty")

        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "delimiter", delimiter)
        object.__setattr__(self, "output_format", output_format)
        object.__setattr__(self, "null_values", null_values)

    @classmethod
    def option_names(cls) -> List[str]:
        return [f.name for f in dataclasses.fields(cls)]

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "ConverterConfig":
        """Build a config from a mapping of option names.

        Keys may be snake_case (``has_headers``) or camelCase (``hasHeaders``).
        Unknown keys raise ``ValueError``.
        """
        return cls().with_overrides(values or {})

    def with_overrides(self, values: Mapping[str, Any]) -> "ConverterConfig":
        """Return a copy of this config with the given options replaced."""
        aliases = {_camel_case(name): name for name in self.option_names()}
        changes: Dict[str, Any] = {}
        unknown = []
        for key, value in values.items():
            name = aliases.get(key, key)
            if name not in aliases.values():
                unknown.append(key)
                continue
            changes[name] = value
        if unknown:
            raise ValueError(f"Unknown converter option(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["delimiter"] = self.delimiter.value
        result["output_format"] = self.output_format.value
        result["null_values"] = list(self.null_values)
        return result


@dataclass
class ParseError:
    """A row that could not be converted."""
    line: int
    error: str
    column: Optional[str] = None
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"line": self.line, "error": self.error}
        if self.column is not None:
            result["column"] = self.column
        if self.value is not None:
            result["value"] = self.value
        return result


@dataclass
class ConversionMetadata:
    """Statistics about a successful conversion."""
    row_count: int = 0
    column_count: int = 0
    detected_columns: List[str] = field(default_factory=list)
    data_types: Dict[str, str] = field(default_factory=dict)
    null_count: int = 0
    empty_rows_skipped: int = 0
    processing_time_ms: float = 0.0
    output_size: int = 0
    errors: List[ParseError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["errors"] = [e.to_dict() for e in self.errors]
        return result


@dataclass
class ConversionResult:
    """Result of a conversion operation.

    On success ``output`` and ``metadata`` are set; on failure only ``error`` is.
    """
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
    metadata: Optional[ConversionMetadata] = None
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> "ConversionResult":
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.output is not None:
            result["output"] = self.output
        if self.error is not None:
            result["error"] = self.error
        if self.metadata is not None:
            result["metadata"] = self.metadata.to_dict()
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


__all__ = [
    "ConverterConfig",
    "ConversionMetadata",
    "ConversionResult",
    "DEFAULT_NULL_VALUES",
    "MAX_REPORTED_ERRORS",
    "ParseError",
]
