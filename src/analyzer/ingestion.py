# ========================
# src/analyzer/ingestion.py
# ========================

"""
Data Ingestion Module

Streams a sales CSV line by line into an aggregator, isolating bad rows.
"""

import logging
import os
from contextlib import nullcontext
from typing import Iterable, Iterator, Optional, Protocol

from .errors import RecordError, SourceError
from .records import SalesRecord, parse_record
from ..utils.performance_monitor import PerformanceMonitor

logger = logging.getLogger(__name__)


class RecordSink(Protocol):
    """Anything that can consume records and count rejected rows."""

    def process_record(self, record: SalesRecord) -> None: ...

    def record_failure(self) -> None: ...


class CSVIngestor:
    """
    A streaming CSV reader that feeds parsed records to a sink.

    Only one line is held in memory at a time, so files of any size can be
    processed. The first line is always treated as a header and skipped.
    Blank lines are ignored. Rows that fail parsing or validation are counted
    on the sink and reported with their line number, and reading continues.
    Any other exception stops the run.
    """

    def __init__(self,
                 delimiter: str = ',',
                 encoding: str = 'utf-8',
                 progress_interval: int = 10000,
                 monitor: Optional[PerformanceMonitor] = None):
        """
        Initialize the ingestor.

        Args:
            delimiter (str): Field separator; no quoting or escaping is supported
            encoding (str): Text encoding used when opening file paths
            progress_interval (int): Lines between progress reports to the monitor
            monitor (PerformanceMonitor): Optional progress tracker
        """
        if progress_interval <= 0:
            raise ValueError("progress_interval must be positive")
        self.delimiter = delimiter
        self.encoding = encoding
        self.progress_interval = progress_interval
        self.monitor = monitor

    def ingest(self, source, aggregator: RecordSink) -> None:
        """
        Read every data row of ``source`` into ``aggregator``.

        Args:
            source: File path, or an open text stream. Streams are not closed.
            aggregator (RecordSink): Receives valid records and failure counts

        Raises:
            SourceError: The source cannot be opened or fails mid-read. Records
                folded before the failure stay in the aggregator.
        """
        source_name = _describe(source)
        logger.info(f"Ingesting '{source_name}'")

        try:
            handle = self._open(source)
        except OSError as e:
            raise _source_error(source_name, e) from e

        with handle as lines:
            self._read_lines(_guard_reads(lines, source_name), aggregator, source_name)

    def _open(self, source):
        if isinstance(source, (str, os.PathLike)):
            return open(source, 'r', encoding=self.encoding)
        return nullcontext(source)

    def _read_lines(self, lines: Iterable[str], aggregator: RecordSink, source_name: str) -> None:
        lines = iter(lines)
        if next(lines, None) is None:
            logger.warning(f"'{source_name}' is empty; no header line found")
            return

        records = 0
        failed = 0
        blank = 0
        unreported = 0

        # Line 1 is the header
        for line_number, line in enumerate(lines, start=2):
            unreported += 1
            if unreported == self.progress_interval:
                self._report_progress(unreported)
                unreported = 0

            if not line.strip():
                blank += 1
                continue

            fields = line.rstrip('\r\n').split(self.delimiter)
            try:
                record = parse_record(fields)
            except RecordError as e:
                aggregator.record_failure()
                failed += 1
                logger.warning(f"Error processing line {line_number}: {e}")
                continue

            aggregator.process_record(record)
            records += 1

        if unreported:
            self._report_progress(unreported)

        logger.info(
            f"Finished '{source_name}': {records:,} records, "
            f"{failed:,} rejected, {blank:,} blank lines skipped"
        )

    def _report_progress(self, lines_read: int) -> None:
        if self.monitor is not None:
            self.monitor.update_progress(lines_read)
        logger.debug(f"Read {lines_read:,} more lines")


def _guard_reads(lines: Iterable[str], source_name: str) -> Iterator[str]:
    """Yield lines, turning read failures into SourceError.

    Only reading is guarded, so exceptions raised by the sink while a line
    is being handled propagate unchanged.
    """
    lines = iter(lines)
    while True:
        try:
            line = next(lines)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise _source_error(source_name, e) from e
        yield line


def _source_error(source_name: str, error: Exception) -> SourceError:
    if isinstance(error, FileNotFoundError):
        logger.error(f"File '{source_name}' was not found")
        return SourceError(source_name, "file not found")
    logger.error(f"Error reading '{source_name}': {error}")
    return SourceError(source_name, str(error))


def _describe(source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, 'name', '<stream>')
