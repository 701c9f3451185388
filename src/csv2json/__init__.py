"""
csv2json

Convert delimited text (CSV, TSV, semicolon, pipe, space or custom
separated) into JSON with type inference, null handling and structural
validation.

Architecture:
    text -> tokenizer -> headers -> inference -> converter -> JSON
"""

from .version import __version__

from .converter import (
    CsvToJsonConverter,
    convert_csv_to_json,
    convert_file,
    records_from_columns,
)
from .models import (
    ConverterConfig,
    ConversionMetadata,
    ConversionResult,
    ParseError,
)
from .types import Delimiter, OutputFormat

__all__ = [
    # Version
    "__version__",
    # Converter
    "CsvToJsonConverter",
    "convert_csv_to_json",
    "convert_file",
    "records_from_columns",
    # Data classes
    "ConverterConfig",
    "ConversionMetadata",
    "ConversionResult",
    "ParseError",
    # Enumerations
    "Delimiter",
    "OutputFormat",
]
