"""Error taxonomy for the JTL splitter."""

from typing import Optional


class JTLSplitterError(RuntimeError):
    """Base class for failures that abort a run."""


class InvalidFieldError(JTLSplitterError):
    """An interpreted column could not be parsed as its expected type."""

    expected = "value"

    def __init__(self, line_number: int, column: int, column_name: str, value: Optional[str]):
        self.line_number = line_number
        self.column = column
        self.column_name = column_name
        self.value = value
        shown = "<missing>" if value is None else repr(value)
        super().__init__(
            f"Line {line_number}: column {column} ({column_name}) is not a valid {self.expected}: {shown}"
        )


class InvalidNumericField(InvalidFieldError):
    expected = "integer"


class InvalidBooleanField(InvalidFieldError):
    expected = "boolean"
