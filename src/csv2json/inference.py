"""Value coercion and column type detection.

Coercion is an ordered chain of parse attempts; the first one that succeeds
decides the value:

    null vocabulary -> boolean tokens -> numbers -> dates -> string

Booleans are tried before numbers, so ``1`` and ``0`` become ``true`` and
``false`` whenever boolean parsing is on.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .headers import strip_quotes
from .models import ConverterConfig
from .types import ValueKind

Scalar = Union[str, int, float, bool, None]

TRUE_VALUES = frozenset(["true", "TRUE", "yes", "YES", "y", "Y", "1", "on", "ON"])
FALSE_VALUES = frozenset(["false", "FALSE", "no", "NO", "n", "N", "0", "off", "OFF"])

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"-?[0-9]*\.[0-9]+")
_SCIENTIFIC_PATTERN = re.compile(r"-?[0-9]*\.?[0-9]+e[+-]?[0-9]+", re.IGNORECASE)

# Integral floats up to this magnitude are emitted as ints.
_MAX_SAFE_INTEGER = 2 ** 53 - 1

DATE_PATTERNS = (
    re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"),  # YYYY-MM-DD
    re.compile(r"(?P<month>[0-9]{2})/(?P<day>[0-9]{2})/(?P<year>[0-9]{4})"),  # MM/DD/YYYY
    re.compile(r"(?P<month>[0-9]{2})-(?P<day>[0-9]{2})-(?P<year>[0-9]{4})"),  # MM-DD-YYYY
    re.compile(r"(?P<year>[0-9]{4})/(?P<month>[0-9]{2})/(?P<day>[0-9]{2})"),  # YYYY/MM/DD
    re.compile(r"(?P<month>[0-9]{1,2})/(?P<day>[0-9]{1,2})/(?P<year>[0-9]{2,4})"),  # M/D/YY[YY]
)

SAMPLE_SIZE = 100


def parse_boolean(value: str) -> Optional[bool]:
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def _normalize_float(number: float) -> Optional[Union[int, float]]:
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) <= _MAX_SAFE_INTEGER:
        return int(number)
    return number


def parse_number(value: str) -> Optional[Union[int, float]]:
    """Parse integer, decimal or scientific notation; ``None`` if not numeric."""
    if _INTEGER_PATTERN.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            # exceeds the interpreter's int string conversion limit
            return None
    if _DECIMAL_PATTERN.fullmatch(value) or _SCIENTIFIC_PATTERN.fullmatch(value):
        try:
            return _normalize_float(float(value))
        except (ValueError, OverflowError):
            return None
    return None


def _expand_year(year_text: str) -> int:
    year = int(year_text)
    if len(year_text) == 2:
        return 2000 + year if year < 50 else 1900 + year
    return year


def matches_date_pattern(value: str) -> bool:
    return any(pattern.fullmatch(value) for pattern in DATE_PATTERNS)


def parse_date(value: str) -> Optional[str]:
    """Return a normalised ISO-8601 timestamp for date-shaped values."""
    for pattern in DATE_PATTERNS:
        match = pattern.fullmatch(value)
        if not match:
            continue
        try:
            parsed = date(
                _expand_year(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
            )
        except ValueError:
            continue
        return f"{parsed.isoformat()}T00:00:00.000Z"
    return None


def coerce_value(raw: str, config: ConverterConfig) -> Scalar:
    """Convert one raw field to its typed value."""
    value = raw.strip() if config.trim_whitespace else raw
    value = strip_quotes(value, config.quote_char)

    if value in config.null_values:
        return None

    if config.parse_booleans:
        flag = parse_boolean(value)
        if flag is not None:
            return flag

    if config.parse_numbers:
        number = parse_number(value)
        if number is not None:
            return number

    if config.parse_dates:
        timestamp = parse_date(value)
        if timestamp is not None:
            return timestamp

    return value


def kind_of(value: Scalar) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.INTEGER if value.is_integer() else ValueKind.NUMBER
    if matches_date_pattern(value):
        return ValueKind.DATE
    return ValueKind.STRING


def summarize_kinds(kinds: Iterable[ValueKind]) -> str:
    """Collapse the kinds seen in one column into a single label."""
    observed = [kind for kind in kinds if kind != ValueKind.NULL]
    if not observed:
        return ValueKind.NULL.value
    if len(observed) == 1:
        return observed[0].value
    if ValueKind.STRING in observed:
        return "mixed (string)"
    return f"mixed ({', '.join(kind.value for kind in observed)})"


def detect_column_types(
    records: Sequence[Mapping[str, Scalar]],
    columns: Sequence[str],
    sample_size: int = SAMPLE_SIZE,
) -> Dict[str, str]:
    """Summarise the value kinds of each column over the first records."""
    if not records:
        return {}

    seen: Dict[str, List[ValueKind]] = {column: [] for column in columns}
    for record in records[:sample_size]:
        for column in columns:
            kind = kind_of(record.get(column))
            if kind not in seen[column]:
                seen[column].append(kind)

    return {column: summarize_kinds(kinds) for column, kinds in seen.items()}


__all__ = [
    "DATE_PATTERNS",
    "FALSE_VALUES",
    "SAMPLE_SIZE",
    "Scalar",
    "TRUE_VALUES",
    "coerce_value",
    "detect_column_types",
    "kind_of",
    "matches_date_pattern",
    "parse_boolean",
    "parse_date",
    "parse_number",
    "summarize_kinds",
]
