# ========================
# src/analyzer/errors.py
# ========================

"""
Error Types

Closed set of failures raised while turning input lines into sales records,
plus the terminal error raised when the input source itself cannot be read.

Only ``RecordError`` subclasses count as bad data. Anything else raised during
per-row handling is a defect and must propagate.
"""

from enum import Enum


class RecordError(Exception):
    """Base class for a single input row that cannot become a record."""


class FieldCountError(RecordError):
    """The row does not have the expected number of fields."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} fields but found {actual}")


class DateFormatError(RecordError):
    """The date field is not a YYYY-MM-DD calendar date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date '{value}', expected YYYY-MM-DD")


class NumberFormatError(RecordError):
    """A numeric field does not parse as its numeric type."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} '{value}'")


class ValidationKind(Enum):
    INVALID_QUANTITY = "Quantity must be positive"
    INVALID_UNIT_PRICE = "Price cannot be negative"
    EMPTY_PRODUCT = "Product cannot be empty"


class ValidationError(RecordError):
    """Well-formed values that break a sales record invariant."""

    def __init__(self, kind: ValidationKind, value=None):
        self.kind = kind
        self.value = value
        message = kind.value if value is None else f"{kind.value} (got {value!r})"
        super().__init__(message)


class SourceError(Exception):
    """The input source could not be opened or failed mid-read."""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read '{source}': {reason}")
