"""Enumerations shared by the converter, configuration and API layers."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Delimiter(str, Enum):
    """Symbolic delimiter names accepted in configuration."""

    COMMA = "comma"
    SEMICOLON = "semicolon"
    TAB = "tab"
    PIPE = "pipe"
    SPACE = "space"
    CUSTOM = "custom"
    AUTO = "auto"  # sniffed from the first lines of input


class OutputFormat(str, Enum):
    """Shape of the serialized JSON output."""

    RECORDS = "records"  # list of row mappings
    ARRAY = "array"  # list of row lists
    OBJECT = "object"  # mapping of column -> values


class ValueKind(str, Enum):
    """JSON-level kinds reported in the per-column type summary."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    DATE = "date"
    STRING = "string"


DELIMITER_CHARS: Dict[Delimiter, str] = {
    Delimiter.COMMA: ",",
    Delimiter.SEMICOLON: ";",
    Delimiter.TAB: "\t",
    Delimiter.PIPE: "|",
    Delimiter.SPACE: " ",
}

# Candidates for auto-detection, in tie-break order.
SNIFF_CANDIDATES = (",", ";", "\t", "|")


__all__ = ["Delimiter", "OutputFormat", "ValueKind", "DELIMITER_CHARS", "SNIFF_CANDIDATES"]
