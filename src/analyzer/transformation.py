# ========================
# src/analyzer/transformation.py
# ========================

"""
Data Transformation Module

Maintains running sales statistics over a stream of validated records.
"""

import logging
from datetime import date
from operator import itemgetter
from typing import Any, Dict, Iterable, Optional, Tuple

from .records import SalesRecord

logger = logging.getLogger(__name__)

NO_PRODUCT = "None"
NO_RECORDS = "No valid records"


class SalesAggregator:
    """
    Accumulates sales statistics one record at a time.

    Only summary data is kept, so memory grows with the number of distinct
    products, not with the number of rows. Every accessor is safe to call at
    any point, including before the first record and in the middle of a run.

    Not thread-safe: callers sharing one aggregator across threads must
    synchronize externally.
    """

    def __init__(self):
        """Initialize an empty aggregator."""
        self._total_records = 0
        self._failed_records = 0
        self._total_revenue = 0.0
        self._product_quantities: Dict[str, int] = {}
        self._earliest_date: Optional[date] = None
        self._latest_date: Optional[date] = None
        logger.debug("SalesAggregator initialized")

    def process_record(self, record: SalesRecord) -> None:
        """
        Fold one valid record into every running statistic.

        Args:
            record (SalesRecord): A record; valid by construction.
        """
        revenue = record.revenue
        sale_date = record.sale_date

        self._total_revenue += revenue
        self._product_quantities[record.product] = (
            self._product_quantities.get(record.product, 0) + record.quantity
        )
        self._total_records += 1

        if self._earliest_date is None or sale_date < self._earliest_date:
            self._earliest_date = sale_date
        if self._latest_date is None or sale_date > self._latest_date:
            self._latest_date = sale_date

    def process_chunk(self, chunk: Iterable[SalesRecord]) -> None:
        """Fold a batch of records, in order."""
        for record in chunk:
            self.process_record(record)
        logger.debug(f"Chunk processed. Total records so far: {self._total_records}")

    def record_failure(self) -> None:
        """Count one input row that could not become a record."""
        self._failed_records += 1

    @property
    def total_records(self) -> int:
        return self._total_records

    @property
    def failed_records(self) -> int:
        return self._failed_records

    @property
    def total_revenue(self) -> float:
        return self._total_revenue

    @property
    def earliest_date(self) -> Optional[date]:
        return self._earliest_date

    @property
    def latest_date(self) -> Optional[date]:
        return self._latest_date

    def best_selling_product(self) -> Tuple[str, int]:
        """
        Product with the highest cumulative quantity.

        Ties go to the product that was seen first. Any maximal product is a
        correct answer; callers should not rely on a particular tie-break.

        Returns:
            tuple: ``(product, quantity)``, or ``("None", 0)`` when empty
        """
        if not self._product_quantities:
            return NO_PRODUCT, 0
        # max() keeps the first maximal item in dict insertion order
        return max(self._product_quantities.items(), key=itemgetter(1))

    def best_selling_quantity(self) -> int:
        return self.best_selling_product()[1]

    def average_sale_value(self) -> float:
        """Mean revenue per record, defined as exactly 0.0 with no records."""
        if self._total_records == 0:
            return 0.0
        return self._total_revenue / self._total_records

    def date_range(self) -> Optional[Tuple[date, date]]:
        """Earliest and latest sale dates, or None before the first record."""
        if self._earliest_date is None:
            return None
        return self._earliest_date, self._latest_date

    def describe_date_range(self) -> str:
        date_range = self.date_range()
        if date_range is None:
            return NO_RECORDS
        earliest, latest = date_range
        return f"{earliest.isoformat()} to {latest.isoformat()}"

    def quantity_by_product(self) -> Dict[str, int]:
        """Copy of the cumulative quantity per product."""
        return dict(self._product_quantities)

    def success_rate(self) -> float:
        """Percentage of rows seen that became records, 0.0 when none were seen."""
        seen = self._total_records + self._failed_records
        if seen == 0:
            return 0.0
        return self._total_records / seen * 100

    def get_aggregation_summary(self) -> Dict[str, Any]:
        """Get a summary of all aggregations."""
        product, quantity = self.best_selling_product()
        date_range = self.date_range()
        return {
            'records_processed': self._total_records,
            'records_failed': self._failed_records,
            'total_revenue': self._total_revenue,
            'average_sale_value': self.average_sale_value(),
            'unique_products': len(self._product_quantities),
            'best_selling_product': product,
            'best_selling_quantity': quantity,
            'first_sale_date': date_range[0].isoformat() if date_range else None,
            'last_sale_date': date_range[1].isoformat() if date_range else None,
        }

    def log_summary_statistics(self) -> None:
        """Log summary statistics of the aggregations."""
        product, quantity = self.best_selling_product()
        logger.info(f"Records processed: {self._total_records:,}")
        logger.info(f"Records failed: {self._failed_records:,}")
        logger.info(f"Total revenue: {self._total_revenue:,.2f}")
        logger.info(f"Average sale value: {self.average_sale_value():,.2f}")
        logger.info(f"Best-selling product: {product} ({quantity:,} units)")
        logger.info(f"Date range: {self.describe_date_range()}")
