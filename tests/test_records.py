# ========================
# tests/test_records.py
# ========================

import unittest
import os
import sys
from dataclasses import FrozenInstanceError
from datetime import date

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.analyzer.errors import (
    DateFormatError,
    FieldCountError,
    NumberFormatError,
    RecordError,
    ValidationError,
    ValidationKind,
)
from src.analyzer.records import SalesRecord, new_record, parse_record


class TestSalesRecord(unittest.TestCase):
    """Test construction and invariants of sales records."""

    def test_constructor_with_valid_values(self):
        record = new_record(date(2024, 1, 15), "Wireless Mouse", 25, 29.99)

        self.assertEqual(record.sale_date, date(2024, 1, 15))
        self.assertEqual(record.product, "Wireless Mouse")
        self.assertEqual(record.quantity, 25)
        self.assertAlmostEqual(record.unit_price, 29.99)

    def test_constructor_rejects_zero_and_negative_quantity(self):
        for quantity in (0, -1, -5):
            with self.subTest(quantity=quantity):
                with self.assertRaises(ValidationError) as ctx:
                    new_record(date(2024, 1, 15), "Mouse", quantity, 29.99)
                self.assertIs(ctx.exception.kind, ValidationKind.INVALID_QUANTITY)
                self.assertIn("Quantity must be positive", str(ctx.exception))

    def test_constructor_rejects_negative_price(self):
        with self.assertRaises(ValidationError) as ctx:
            new_record(date(2024, 1, 15), "Mouse", 25, -10.0)
        self.assertIs(ctx.exception.kind, ValidationKind.INVALID_UNIT_PRICE)

    def test_constructor_rejects_nan_price(self):
        with self.assertRaises(ValidationError) as ctx:
            new_record(date(2024, 1, 15), "Mouse", 25, float('nan'))
        self.assertIs(ctx.exception.kind, ValidationKind.INVALID_UNIT_PRICE)

    def test_constructor_rejects_empty_product(self):
        for product in ("", "   "):
            with self.subTest(product=product):
                with self.assertRaises(ValidationError) as ctx:
                    new_record(date(2024, 1, 15), product, 1, 1.0)
                self.assertIs(ctx.exception.kind, ValidationKind.EMPTY_PRODUCT)

    def test_direct_construction_enforces_invariants(self):
        """The dataclass constructor cannot bypass validation."""
        with self.assertRaises(ValidationError):
            SalesRecord(date(2024, 1, 15), "Mouse", 0, 1.0)

    def test_validation_boundaries(self):
        """Construction fails exactly when quantity <= 0 or price < 0."""
        quantities = [-2, -1, 0, 1, 2, 10**9]
        prices = [-1.0, -0.01, -1e-9, 0.0, 1e-9, 0.01, 1.0, 1e6]

        for quantity in quantities:
            for price in prices:
                should_fail = quantity <= 0 or price < 0
                with self.subTest(quantity=quantity, price=price):
                    if should_fail:
                        with self.assertRaises(ValidationError):
                            new_record(date(2024, 1, 1), "Item", quantity, price)
                    else:
                        record = new_record(date(2024, 1, 1), "Item", quantity, price)
                        self.assertEqual(record.revenue, quantity * price)

    def test_zero_price_is_allowed(self):
        record = new_record(date(2024, 1, 15), "Freebie", 3, 0.0)
        self.assertEqual(record.revenue, 0.0)

    def test_record_is_immutable(self):
        record = new_record(date(2024, 1, 15), "Mouse", 10, 25.5)
        with self.assertRaises(FrozenInstanceError):
            record.quantity = -1

    def test_revenue(self):
        record = new_record(date(2024, 1, 15), "Mouse", 10, 25.50)
        self.assertAlmostEqual(record.revenue, 255.0)

        record = new_record(date(2024, 1, 15), "Keyboard", 3, 45.99)
        self.assertAlmostEqual(record.revenue, 137.97)


class TestParseRecord(unittest.TestCase):
    """Test parsing raw text fields into records."""

    def test_parse_valid_fields(self):
        record = parse_record(["2024-01-15", "Wireless Mouse", "25", "29.99"])

        self.assertEqual(record.sale_date, date(2024, 1, 15))
        self.assertEqual(record.product, "Wireless Mouse")
        self.assertEqual(record.quantity, 25)
        self.assertEqual(record.unit_price, 29.99)

    def test_from_fields_matches_parse_record(self):
        fields = ["2024-01-15", "Mouse", "2", "3.5"]
        self.assertEqual(SalesRecord.from_fields(fields), parse_record(fields))

    def test_parse_strips_whitespace(self):
        record = parse_record([" 2024-01-15 ", " Mouse ", " 2 ", " 3.5 "])
        self.assertEqual(record.product, "Mouse")
        self.assertEqual(record.quantity, 2)

    def test_revenue_equals_quantity_times_price(self):
        samples = [
            ("1", "0"), ("7", "0.1"), ("3", "45.99"), ("25", "29.99"),
            ("100000", "1234.56"), ("1", "1e3"), ("12", ".5")
        ]
        for quantity, price in samples:
            with self.subTest(quantity=quantity, price=price):
                record = parse_record(["2024-02-29", "Item", quantity, price])
                self.assertEqual(record.revenue, int(quantity) * float(price))

    def test_wrong_field_count(self):
        for fields in ([], ["2024-01-15", "Mouse"], ["2024-01-15", "Mouse", "1", "2.0", "extra"]):
            with self.subTest(fields=fields):
                with self.assertRaises(FieldCountError) as ctx:
                    parse_record(fields)
                self.assertEqual(ctx.exception.actual, len(fields))
                self.assertEqual(ctx.exception.expected, 4)

    def test_invalid_dates(self):
        for value in ("invalid-date", "15/01/2024", "2024-02-30", "2024-13-01", "",
                      "2024-1-5", "2024-01-5", "2024-1-05", "24-01-15", "٢٠٢٤-01-15"):
            with self.subTest(value=value):
                with self.assertRaises(DateFormatError):
                    parse_record([value, "Mouse", "25", "29.99"])

    def test_invalid_quantity(self):
        for value in ("not-a-number", "abc", "2.5", "5 units", "", "1_000",
                      "١٢", "9" * 5000):
            with self.subTest(value=value):
                with self.assertRaises(NumberFormatError) as ctx:
                    parse_record(["2024-01-15", "Mouse", value, "29.99"])
                self.assertEqual(ctx.exception.field, "quantity")

    def test_invalid_price(self):
        for value in ("invalid-price", "$9.99", "nan", "inf", "", "1e999", "9,99", "١.5"):
            with self.subTest(value=value):
                with self.assertRaises(NumberFormatError) as ctx:
                    parse_record(["2024-01-15", "Mouse", "25", value])
                self.assertEqual(ctx.exception.field, "unit price")

    def test_domain_errors_come_from_the_constructor(self):
        """Well-formed but impossible values raise ValidationError, not a format error."""
        with self.assertRaises(ValidationError) as ctx:
            parse_record(["2024-01-15", "Mouse", "-10", "25.50"])
        self.assertIs(ctx.exception.kind, ValidationKind.INVALID_QUANTITY)

        with self.assertRaises(ValidationError) as ctx:
            parse_record(["2024-01-15", "Mouse", "10", "-25.50"])
        self.assertIs(ctx.exception.kind, ValidationKind.INVALID_UNIT_PRICE)

        with self.assertRaises(ValidationError) as ctx:
            parse_record(["2024-01-15", "  ", "10", "25.50"])
        self.assertIs(ctx.exception.kind, ValidationKind.EMPTY_PRODUCT)

    def test_all_row_errors_share_a_base_class(self):
        bad_rows = [
            ["2024-01-15"],
            ["bad", "Mouse", "1", "1"],
            ["2024-01-15", "Mouse", "x", "1"],
            ["2024-01-15", "Mouse", "0", "1"],
        ]
        for fields in bad_rows:
            with self.subTest(fields=fields):
                with self.assertRaises(RecordError):
                    parse_record(fields)


if __name__ == '__main__':
    unittest.main()
