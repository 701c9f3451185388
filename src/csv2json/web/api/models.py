"""Pydantic models for API requests and responses."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...models import DEFAULT_NULL_VALUES, ConversionResult
from ...types import Delimiter, OutputFormat


class ConversionConfig(BaseModel):
    """Converter options as accepted over HTTP.

    Accepts snake_case or camelCase keys; unknown keys are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
    )

    delimiter: Delimiter = Field(default=Delimiter.COMMA, description="Field delimiter name")
    custom_delimiter: str = Field(default="", description="Delimiter string when delimiter is 'custom'")
    has_headers: bool = Field(default=True, description="First row holds column names")
    skip_empty_lines: bool = Field(default=True, description="Drop blank lines before parsing")
    trim_whitespace: bool = Field(default=True, description="Trim whitespace around values")
    quote_char: str = Field(default='"', max_length=1, description="Quote character (empty disables quoting)")
    escape_char: str = Field(default="\\", max_length=1, description="Escape character (empty disables escaping)")
    output_format: OutputFormat = Field(default=OutputFormat.RECORDS, description="records, array or object")
    parse_numbers: bool = Field(default=True, description="Convert numeric values")
    parse_booleans: bool = Field(default=True, description="Convert boolean tokens")
    parse_dates: bool = Field(default=False, description="Convert date values to ISO timestamps")
    null_values: List[str] = Field(default_factory=lambda: list(DEFAULT_NULL_VALUES), description="Values treated as null")
    custom_headers: str = Field(default="", description="Comma separated names for headerless input")
    strict_mode: bool = Field(default=False, description="Reject rows with a mismatched column count")
    include_line_numbers: bool = Field(default=False, description="Add a __line key to each record")
    max_rows: int = Field(default=0, ge=0, description="Maximum data rows (0 = unlimited)")


class ConversionRequest(BaseModel):
    """Request model for converting pasted text."""

    csv: str = Field(..., description="Delimited text to convert")
    config: ConversionConfig = Field(default_factory=ConversionConfig)


class ParseErrorResponse(BaseModel):
    """A rejected or failed row."""

    line: int
    error: str
    column: Optional[str] = None
    value: Optional[str] = None


class ConversionMetadataResponse(BaseModel):
    """Metadata about a successful conversion."""

    row_count: int
    column_count: int
    detected_columns: List[str]
    data_types: Dict[str, str]
    null_count: int
    empty_rows_skipped: int
    processing_time_ms: float
    output_size: int
    errors: List[ParseErrorResponse] = Field(default_factory=list)


class ConversionResponse(BaseModel):
    """Response model for a successful conversion."""

    success: bool = True
    output: str
    data: Any = Field(default=None, description="Parsed output, for clients that want structured JSON")
    metadata: ConversionMetadataResponse
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ConversionResult, include_data: bool = False) -> "ConversionResponse":
        return cls(
            output=result.output,
            data=json.loads(result.output) if include_data else None,
            metadata=ConversionMetadataResponse(**result.metadata.to_dict()),
            warnings=result.warnings,
        )


class OptionsResponse(BaseModel):
    """Default converter options and accepted enumerations."""

    defaults: ConversionConfig
    delimiters: List[str]
    output_formats: List[str]
