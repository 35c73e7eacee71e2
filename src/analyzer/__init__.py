# ========================
# src/analyzer/__init__.py
# ========================

"""
Sales Analyzer Package

Streaming analysis of sales CSV files:
- records: Immutable, self-validating sales records
- transformation: Running sales statistics
- ingestion: Line-by-line CSV reading with per-row fault isolation
- orchestrator: Run coordination across input files
- errors: Row-level and source-level error types
"""

from .errors import (
    RecordError,
    FieldCountError,
    DateFormatError,
    NumberFormatError,
    ValidationError,
    ValidationKind,
    SourceError,
)
from .records import SalesRecord, new_record, parse_record
from .transformation import SalesAggregator
from .ingestion import CSVIngestor, RecordSink
from .orchestrator import AnalysisPipeline

__all__ = [
    'RecordError',
    'FieldCountError',
    'DateFormatError',
    'NumberFormatError',
    'ValidationError',
    'ValidationKind',
    'SourceError',
    'SalesRecord',
    'new_record',
    'parse_record',
    'SalesAggregator',
    'CSVIngestor',
    'RecordSink',
    'AnalysisPipeline'
]

__version__ = "1.0.0"
