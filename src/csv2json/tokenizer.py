"""Line segmentation and field splitting for delimited text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from .models import ConverterConfig
from .types import DELIMITER_CHARS, SNIFF_CANDIDATES, Delimiter

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SNIFF_LINES = 5


@dataclass
class CollectedLines:
    """Input lines kept for parsing, each paired with its 1-based line number."""

    lines: List[Tuple[int, str]] = field(default_factory=list)
    empty_skipped: int = 0
    limit_reached: bool = False


def detect_delimiter(text: str) -> str:
    """Guess the delimiter from the first few lines of input.

    The candidate occurring most often wins; ties go to the earlier candidate
    in ``SNIFF_CANDIDATES`` and input without any candidate falls back to comma.
    """
    sample = "\n".join(_LINE_BREAK.split(text)[:_SNIFF_LINES])
    counts = {candidate: sample.count(candidate) for candidate in SNIFF_CANDIDATES}
    best = max(counts.values())
    for candidate in SNIFF_CANDIDATES:
        if counts[candidate] == best:
            return candidate
    return ","


def resolve_delimiter(config: ConverterConfig, text: str = "") -> str:
    """Map the configured delimiter name to its literal string.

    Returns an empty string when a custom delimiter was selected but not given.
    """
    if config.delimiter == Delimiter.CUSTOM:
        return config.custom_delimiter
    if config.delimiter == Delimiter.AUTO:
        detected = detect_delimiter(text)
        logger.debug("Auto-detected delimiter %r", detected)
        return detected
    return DELIMITER_CHARS[config.delimiter]


def collect_lines(text: str, config: ConverterConfig) -> CollectedLines:
    """Split input into lines, dropping blank ones and honouring ``max_rows``."""
    raw_lines = _LINE_BREAK.split(text)
    limit = config.max_rows + (1 if config.has_headers else 0) if config.max_rows > 0 else 0
    collected = CollectedLines()

    for index, line in enumerate(raw_lines):
        if config.skip_empty_lines and not line.strip():
            collected.empty_skipped += 1
            continue
        collected.lines.append((index + 1, line))

        if limit and len(collected.lines) >= limit:
            collected.limit_reached = True
            break

    return collected


def split_fields(line: str, delimiter: str, quote_char: str = '"', escape_char: str = "\\") -> List[str]:
    """Split one line into raw field strings.

    The escape character makes the next character literal and takes precedence
    over quoting. Inside quotes a doubled quote character yields one literal
    quote and delimiters are not treated as separators.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    width = len(delimiter)
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if escape_char and char == escape_char and i + 1 < length:
            current.append(line[i + 1])
            i += 2
        elif quote_char and char == quote_char:
            if in_quotes and i + 1 < length and line[i + 1] == quote_char:
                current.append(quote_char)
                i += 2
            else:
                in_quotes = not in_quotes
                i += 1
        elif not in_quotes and width and line.startswith(delimiter, i):
            fields.append("".join(current))
            current = []
            i += width
        else:
            current.append(char)
            i += 1

    fields.append("".join(current))
    return fields


__all__ = ["CollectedLines", "collect_lines", "detect_delimiter", "resolve_delimiter", "split_fields"]
