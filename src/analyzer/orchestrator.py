# ========================
# src/analyzer/orchestrator.py
# ========================

"""
Analysis Orchestrator Module

Runs one analysis over one or more sales CSV files and collects the results.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .errors import SourceError
from .ingestion import CSVIngestor
from .transformation import SalesAggregator
from ..utils.config import Config
from ..utils.performance_monitor import monitor_performance

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """
    Streams every input file into a single aggregator.

    Inputs are read in order. A file that cannot be read stops the run, but
    everything aggregated up to that point is kept and reported.
    """

    def __init__(self,
                 input_files: Union[str, Sequence[str]],
                 config: Optional[Config] = None):
        """
        Initialize the analysis pipeline.

        Args:
            input_files (str | list[str]): CSV file path, or paths read in order
            config (Config): Configuration object
        """
        if isinstance(input_files, (str, Path)):
            input_files = [input_files]
        self.input_files: List[str] = [str(path) for path in input_files]
        self.config = config or Config()

        self.aggregator = SalesAggregator()

        logger.info("AnalysisPipeline initialized:")
        logger.info(f"  Inputs: {', '.join(self.input_files)}")
        logger.info(f"  Delimiter: {self.config.DELIMITER!r}")

    def run(self) -> Dict[str, Any]:
        """
        Analyze every input file into a fresh aggregator.

        Returns:
            dict: Run status, aggregate results, data quality and performance
        """
        logger.info(f"Starting analysis of {len(self.input_files)} file(s)...")
        # Each run starts from empty totals
        self.aggregator = SalesAggregator()
        error: Optional[SourceError] = None

        with monitor_performance("Sales analysis") as monitor:
            ingestor = CSVIngestor(
                delimiter=self.config.DELIMITER,
                encoding=self.config.ENCODING,
                progress_interval=self.config.PROGRESS_INTERVAL,
                monitor=monitor
            )
            for input_file in self.input_files:
                try:
                    ingestor.ingest(input_file, self.aggregator)
                except SourceError as e:
                    error = e
                    break
                monitor.add_checkpoint(input_file, {'records': self.aggregator.total_records})

        results = {
            'pipeline_status': 'failed' if error else 'completed',
            'input_files': self.input_files,
            'analysis': self.aggregator.get_aggregation_summary(),
            'data_quality_stats': self._get_quality_stats(),
            'performance': monitor.summary
        }
        if error:
            results['error'] = str(error)
            logger.error(f"Analysis stopped: {error}")
        else:
            logger.info("Analysis finished successfully.")

        self._check_data_quality()
        self._log_final_summary(results)
        return results

    def _get_quality_stats(self) -> Dict[str, Any]:
        return {
            'records_cleaned': self.aggregator.total_records,
            'records_dropped': self.aggregator.failed_records,
            'success_rate': self.aggregator.success_rate()
        }

    def _check_data_quality(self) -> None:
        seen = self.aggregator.total_records + self.aggregator.failed_records
        if seen == 0:
            return
        threshold = self.config.MIN_DATA_QUALITY_RATE * 100
        if self.aggregator.success_rate() < threshold:
            logger.warning(
                f"Data quality rate {self.aggregator.success_rate():.1f}% "
                f"is below the {threshold:.1f}% minimum"
            )

    def _log_final_summary(self, results: dict) -> None:
        """Log final analysis summary."""
        logger.info("="*60)
        logger.info("ANALYSIS EXECUTION SUMMARY")
        logger.info("="*60)
        logger.info(f"Status: {results['pipeline_status']}")
        self.aggregator.log_summary_statistics()
        logger.info(f"Data quality rate: {results['data_quality_stats']['success_rate']:.1f}%")
        logger.info("="*60)

    def validate_input(self) -> bool:
        """
        Validate every input file exists and is readable.

        Returns:
            bool: True if all inputs are valid
        """
        for input_file in self.input_files:
            input_path = Path(input_file)
            if not input_path.exists():
                logger.error(f"Input file does not exist: {input_file}")
                return False

            if not input_path.is_file():
                logger.error(f"Input path is not a file: {input_file}")
                return False

            try:
                with open(input_path, 'r', encoding=self.config.ENCODING) as f:
                    f.readline()  # Try to read first line
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Cannot read input file: {e}")
                return False

        logger.info(f"Input validation passed: {', '.join(self.input_files)}")
        return True
