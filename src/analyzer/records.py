# ========================
# src/analyzer/records.py
# ========================

"""
Sales Record Module

Immutable, self-validating value object for one parsed sales row.

Parsing is split in two layers: ``parse_record`` checks the *format* of raw
text fields, then hands typed values to the ``SalesRecord`` constructor, which
checks the *domain* rules. A record that exists is always valid.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from .errors import (
    DateFormatError,
    FieldCountError,
    NumberFormatError,
    ValidationError,
    ValidationKind,
)

FIELD_COUNT = 4
DATE_FORMAT = "%Y-%m-%d"

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class SalesRecord:
    """
    One validated sale: what was sold, when, how many and at what unit price.

    Invariants are checked on construction, whichever way the record is
    built, so an invalid record can never be observed.
    """

    sale_date: date
    product: str
    quantity: int
    unit_price: float

    def __post_init__(self):
        if not self.product or not self.product.strip():
            raise ValidationError(ValidationKind.EMPTY_PRODUCT)
        if self.quantity <= 0:
            raise ValidationError(ValidationKind.INVALID_QUANTITY, self.quantity)
        # NaN fails every comparison, so test for the valid range instead
        if not (self.unit_price >= 0 and math.isfinite(self.unit_price)):
            raise ValidationError(ValidationKind.INVALID_UNIT_PRICE, self.unit_price)

    @property
    def revenue(self) -> float:
        """Revenue of this sale: quantity times unit price."""
        return self.quantity * self.unit_price

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "SalesRecord":
        """Build a record from raw ``date, product, quantity, price`` text."""
        return parse_record(fields)


def new_record(sale_date: date, product: str, quantity: int, unit_price: float) -> SalesRecord:
    """Create a record from typed values, enforcing the domain rules."""
    return SalesRecord(sale_date, product, quantity, unit_price)


def parse_record(fields: Sequence[str]) -> SalesRecord:
    """
    Parse the fixed four-field layout into a record.

    Args:
        fields (Sequence[str]): Raw text fields: date, product, quantity, unit price

    Returns:
        SalesRecord: The validated record

    Raises:
        FieldCountError: Wrong number of fields
        DateFormatError: Date is not YYYY-MM-DD
        NumberFormatError: Quantity or unit price is not a number
        ValidationError: Values parse but break a record invariant
    """
    if len(fields) != FIELD_COUNT:
        raise FieldCountError(FIELD_COUNT, len(fields))

    raw_date, product, raw_quantity, raw_price = (field.strip() for field in fields)

    return new_record(
        _parse_date(raw_date),
        product,
        _parse_quantity(raw_quantity),
        _parse_price(raw_price),
    )


def _parse_date(value: str) -> date:
    if not _DATE_RE.fullmatch(value):
        raise DateFormatError(value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise DateFormatError(value) from None


def _parse_quantity(value: str) -> int:
    if not _INTEGER_RE.fullmatch(value):
        raise NumberFormatError("quantity", value)
    try:
        return int(value)
    except ValueError:
        # Digit strings past the interpreter's int conversion limit
        raise NumberFormatError("quantity", value) from None


def _parse_price(value: str) -> float:
    if not _DECIMAL_RE.fullmatch(value):
        raise NumberFormatError("unit price", value)
    price = float(value)
    # Literals like 1e999 overflow to infinity
    if not math.isfinite(price):
        raise NumberFormatError("unit price", value)
    return price
