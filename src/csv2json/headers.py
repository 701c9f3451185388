"""Header row determination and de-duplication."""

from __future__ import annotations

from typing import List, Optional, Sequence, Set, Tuple

from .models import ConverterConfig


def strip_quotes(value: str, quote_char: str) -> str:
    """Remove one layer of surrounding quote characters, if present."""
    if quote_char and value.startswith(quote_char) and value.endswith(quote_char):
        return value[1:-1]
    return value


def generate_headers(column_count: int, custom_headers: str = "") -> List[str]:
    """Return caller-supplied names, or ``column_1..column_N``."""
    if custom_headers:
        return [name.strip() for name in custom_headers.split(",")]
    return [f"column_{index}" for index in range(1, column_count + 1)]


def find_duplicates(names: Sequence[str]) -> List[str]:
    """Names occurring more than once, in first-seen order."""
    seen: Set[str] = set()
    duplicates: List[str] = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


def make_unique(names: Sequence[str]) -> List[str]:
    """Rename repeats to ``name_2``, ``name_3``, ... until no clash remains.

    A candidate is checked against every name already emitted, so an input of
    ``["a", "a_2", "a"]`` becomes ``["a", "a_2", "a_3"]``.
    """
    seen: Set[str] = set()
    unique: List[str] = []
    for name in names:
        candidate = name
        counter = 2
        while candidate in seen:
            candidate = f"{name}_{counter}"
            counter += 1
        seen.add(candidate)
        unique.append(candidate)
    return unique


def build_headers(
    first_row: Sequence[str],
    config: ConverterConfig,
) -> Tuple[List[str], Optional[str]]:
    """Determine the column names for a conversion.

    Args:
        first_row: Fields of the first collected line
        config: Converter configuration

    Returns:
        Tuple of (unique header names, duplicate warning or None)
    """
    if config.has_headers:
        headers = [
            strip_quotes(cell.strip() if config.trim_whitespace else cell, config.quote_char)
            for cell in first_row
        ]
    else:
        headers = generate_headers(len(first_row), config.custom_headers)

    duplicates = find_duplicates(headers)
    if not duplicates:
        return headers, None
    warning = f"Duplicate headers detected: {', '.join(duplicates)}"
    return make_unique(headers), warning


__all__ = ["build_headers", "find_duplicates", "generate_headers", "make_unique", "strip_quotes"]
