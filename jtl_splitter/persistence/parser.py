"""
Parser turning raw JTL lines into typed records.
"""

import re
from typing import List, Optional, Tuple, Union

from jtl_splitter.configuration import (
    COLUMN_LIMIT,
    COLUMN_DELIMITER,
    COLUMN_NAMES,
    TIMESTAMP_COLUMN,
    ELAPSED_COLUMN,
    SUCCESS_COLUMN,
    BYTES_RECEIVED_COLUMN,
    BYTES_SENT_COLUMN,
    INT32_RANGE,
    INT64_RANGE,
)
from jtl_splitter.errors import InvalidNumericField, InvalidBooleanField
from jtl_splitter.persistence.record import JTLRecord, TooManyColumns

_INTEGER = re.compile(r"[+-]?[0-9]+")
_BOOLEANS = {"true": True, "false": False}

ParseResult = Union[JTLRecord, TooManyColumns]


def split_columns(line: str, column_limit: int = COLUMN_LIMIT) -> Optional[List[str]]:
    """Split a line on the delimiter, left to right.

    Returns None as soon as a delimiter is found after ``column_limit - 1``
    columns have already been cut; the last column is whatever remains.
    """
    values = []
    pos = 0
    while True:
        end = line.find(COLUMN_DELIMITER, pos)
        if end < 0:
            break
        if len(values) >= column_limit - 1:
            return None
        values.append(line[pos:end])
        pos = end + 1
    values.append(line[pos:])
    return values


def _column(values: List[str], index: int) -> Optional[str]:
    return values[index] if index < len(values) else None


def parse_int(values: List[str], index: int, line_number: int,
              bounds: Tuple[int, int] = INT32_RANGE) -> int:
    """Parse a strict decimal integer column within ``bounds``."""
    value = _column(values, index)
    if value is None or not _INTEGER.fullmatch(value):
        raise InvalidNumericField(line_number, index, COLUMN_NAMES[index], value)
    number = int(value)
    if not bounds[0] <= number <= bounds[1]:
        raise InvalidNumericField(line_number, index, COLUMN_NAMES[index], value)
    return number


def parse_bool(values: List[str], index: int, line_number: int) -> bool:
    value = _column(values, index)
    if value is None or value.lower() not in _BOOLEANS:
        raise InvalidBooleanField(line_number, index, COLUMN_NAMES[index], value)
    return _BOOLEANS[value.lower()]


def parse_line(line: str, line_number: int, column_limit: int = COLUMN_LIMIT) -> ParseResult:
    """Parse one sample row.

    Args:
        line: Raw line without its terminator
        line_number: 1-based position of the line in the input file
        column_limit: Maximum number of columns allowed

    Returns:
        A JTLRecord, or TooManyColumns when the row must be skipped

    Raises:
        InvalidNumericField: If an integer column is missing or malformed
        InvalidBooleanField: If the success column is missing or malformed
    """
    values = split_columns(line, column_limit)
    if values is None:
        return TooManyColumns(line_number, line)

    return JTLRecord(
        timestamp=parse_int(values, TIMESTAMP_COLUMN, line_number, INT64_RANGE),
        elapsed=parse_int(values, ELAPSED_COLUMN, line_number),
        success=parse_bool(values, SUCCESS_COLUMN, line_number),
        bytes_received=parse_int(values, BYTES_RECEIVED_COLUMN, line_number),
        bytes_sent=parse_int(values, BYTES_SENT_COLUMN, line_number),
        raw_line=line,
        line_number=line_number,
    )
