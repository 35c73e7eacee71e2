# ========================
# src/utils/data_generator.py
# ========================

"""
Data Generation Utilities

Writes reproducible sales CSV files with controlled error injection, for
tests and for exercising the analyzer on large inputs.
"""

import random
import logging
from datetime import date, timedelta
from typing import List, Dict, Any, Optional, TextIO
from pathlib import Path

logger = logging.getLogger(__name__)

HEADER = ['date', 'product', 'quantity', 'price']

ERROR_TYPES = [
    'bad_date', 'string_quantity', 'negative_quantity', 'zero_quantity',
    'malformed_price', 'negative_price', 'missing_field', 'extra_field'
]


class DataGenerator:
    """
    Data generator for creating realistic sales test datasets.

    Every injected error is one the analyzer must reject, so the generation
    stats double as the expected analysis outcome.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize data generator.

        Args:
            seed (int): Random seed for reproducible data generation
        """
        self._random = random.Random(seed)
        self._initialize_data_patterns()
        logger.info(f"DataGenerator initialized with seed: {seed}")

    def _initialize_data_patterns(self) -> None:
        """Initialize product catalog and seasonal demand."""
        self.products = [
            {"name": "Laptop Pro 15", "base_price": 1200},
            {"name": "Smartphone X", "base_price": 800},
            {"name": "Wireless Headphones", "base_price": 150},
            {"name": "4K LED TV", "base_price": 2000},
            {"name": "Blender Pro", "base_price": 80},
            {"name": "Coffee Maker Elite", "base_price": 120},
            {"name": "Men's T-shirt (Blue)", "base_price": 25},
            {"name": "Running Shoes", "base_price": 95},
            {"name": "Gaming Mouse", "base_price": 45},
            {"name": "Office Chair", "base_price": 200}
        ]

        # Seasonal patterns (month -> demand multiplier)
        self.seasonal_patterns = {
            1: 0.8, 2: 0.9, 3: 1.0, 4: 1.1, 5: 1.0, 6: 0.9,
            7: 0.8, 8: 0.9, 9: 1.1, 10: 1.2, 11: 1.4, 12: 1.3
        }

    def generate_dataset(self,
                         file_path: str,
                         num_rows: int,
                         error_rate: float = 0.15,
                         blank_line_rate: float = 0.0,
                         start_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Generate a sales dataset with controlled error injection.

        Args:
            file_path (str): Output CSV file path
            num_rows (int): Number of data rows to generate (blank lines excluded)
            error_rate (float): Fraction of rows with an intentional error
            blank_line_rate (float): Chance of a blank line before each row
            start_date (date): First possible sale date

        Returns:
            dict: Generation statistics
        """
        logger.info(f"Generating {num_rows:,} rows with {error_rate:.1%} error rate...")

        stats = self._new_stats(num_rows, error_rate, start_date)

        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            self._write_rows(f, num_rows, stats, blank_line_rate)

        self._finalize_stats(stats)

        logger.info(f"Dataset generated: {file_path}")
        logger.info(f"Actual error rate: {stats['error_rate_actual']:.1%}")
        logger.info(f"Error breakdown: {stats['error_types']}")

        return stats

    def generate_large_dataset_chunked(self,
                                       file_path: str,
                                       total_rows: int,
                                       chunk_size: int = 100000,
                                       error_rate: float = 0.15) -> Dict[str, Any]:
        """
        Generate very large datasets in chunks, logging progress per chunk.

        Args:
            file_path (str): Output file path
            total_rows (int): Total number of rows to generate
            chunk_size (int): Rows per chunk
            error_rate (float): Fraction of rows with an intentional error

        Returns:
            dict: Generation statistics
        """
        logger.info(f"Generating large dataset: {total_rows:,} rows in chunks of {chunk_size:,}")

        stats = self._new_stats(total_rows, error_rate, None)
        stats['chunk_size'] = chunk_size
        chunks_written = 0

        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(','.join(HEADER) + '\n')

            rows_written = 0
            while rows_written < total_rows:
                chunk_rows = min(chunk_size, total_rows - rows_written)
                lines = [
                    self._format_row(self._generate_single_row(stats))
                    for _ in range(chunk_rows)
                ]
                f.write('\n'.join(lines) + '\n')

                rows_written += chunk_rows
                chunks_written += 1
                logger.info(f"Chunk {chunks_written} complete: {rows_written:,}/{total_rows:,} rows")

        stats['chunks_written'] = chunks_written
        self._finalize_stats(stats)

        logger.info(f"Large dataset generation complete: {file_path}")
        return stats

    def _new_stats(self, num_rows: int, error_rate: float, start_date: Optional[date]) -> Dict[str, Any]:
        return {
            'total_rows': num_rows,
            'error_rate': error_rate,
            'start_date': start_date or date.today() - timedelta(days=365),
            'valid_rows': 0,
            'records_with_errors': 0,
            'blank_lines': 0,
            'expected_revenue': 0.0,
            'error_types': {}
        }

    def _finalize_stats(self, stats: Dict[str, Any]) -> None:
        total = stats['total_rows']
        stats['error_rate_actual'] = stats['records_with_errors'] / total if total else 0.0

    def _write_rows(self, f: TextIO, num_rows: int, stats: Dict[str, Any], blank_line_rate: float) -> None:
        f.write(','.join(HEADER) + '\n')
        for i in range(num_rows):
            if blank_line_rate and self._random.random() < blank_line_rate:
                f.write(self._random.choice(['', '   ', '\t']) + '\n')
                stats['blank_lines'] += 1

            f.write(self._format_row(self._generate_single_row(stats)) + '\n')

            if (i + 1) % 10000 == 0:
                logger.debug(f"Generated {i + 1:,} rows")

    def _format_row(self, fields: List[str]) -> str:
        return ','.join(fields)

    def _generate_single_row(self, stats: Dict[str, Any]) -> List[str]:
        """Generate the text fields of one row, possibly with an error."""
        product = self._random.choice(self.products)

        sale_date = stats['start_date'] + timedelta(days=self._random.randint(0, 365))

        seasonal_multiplier = self.seasonal_patterns.get(sale_date.month, 1.0)
        quantity = max(1, int(self._random.randint(1, 20) * seasonal_multiplier))

        price_variation = self._random.uniform(0.8, 1.2)  # ±20% variation
        unit_price = round(product["base_price"] * price_variation, 2)

        fields = [sale_date.isoformat(), product["name"], str(quantity), str(unit_price)]

        if self._random.random() < stats['error_rate']:
            stats['records_with_errors'] += 1
            return self._inject_error(fields, stats)

        stats['valid_rows'] += 1
        # Summed in file order, matching how the analyzer accumulates
        stats['expected_revenue'] += quantity * float(fields[3])
        return fields

    def _inject_error(self, fields: List[str], stats: Dict[str, Any]) -> List[str]:
        """Corrupt one row so that it can no longer become a record."""
        error_type = self._random.choice(ERROR_TYPES)
        sale_date, product, quantity, unit_price = fields

        if error_type == 'bad_date':
            fields[0] = date.fromisoformat(sale_date).strftime("%d/%m/%Y")
        elif error_type == 'string_quantity':
            fields[2] = f"{quantity} units"
        elif error_type == 'negative_quantity':
            fields[2] = str(-self._random.randint(1, 5))
        elif error_type == 'zero_quantity':
            fields[2] = '0'
        elif error_type == 'malformed_price':
            fields[3] = f"${unit_price}"
        elif error_type == 'negative_price':
            fields[3] = f"-{unit_price}"
        elif error_type == 'missing_field':
            fields = [sale_date, product, quantity]
        elif error_type == 'extra_field':
            fields = fields + ['North']

        self._track_error_type(stats, error_type)
        return fields

    def _track_error_type(self, stats: Dict[str, Any], error_type: str) -> None:
        """Track error types for statistics."""
        stats['error_types'][error_type] = stats['error_types'].get(error_type, 0) + 1
