#!/usr/bin/env python3
# ========================
# main.py
# ========================

"""
Main Entry Point for the Streaming Sales Analyzer

Usage: python main.py [csv_path ...]

Without arguments, a sample dataset is generated at the configured input path
and analyzed. Exits 0 when every input was read, 1 when an input could not be
read (rows that were merely malformed do not fail the run).
"""

import sys
import logging
from pathlib import Path

from src.analyzer import AnalysisPipeline
from src.utils import Config, setup_logging, DataGenerator


def main(argv=None) -> int:
    """Main execution function."""
    argv = sys.argv[1:] if argv is None else argv
    config = Config()

    setup_logging(
        log_level=config.LOG_LEVEL,
        log_file=config.LOG_FILE,
        log_dir=config.LOG_DIR
    )

    logger = logging.getLogger(__name__)

    failed_settings = [name for name, ok in config.validate_config().items() if not ok]
    if failed_settings:
        logger.error(f"Invalid configuration: {', '.join(failed_settings)}")
        return 1

    input_files = argv
    if not input_files:
        input_files = [config.DEFAULT_INPUT_FILE]
        if not Path(config.DEFAULT_INPUT_FILE).exists():
            logger.info("No input given; generating sample data...")
            config.ensure_directories()
            generator = DataGenerator(seed=42)
            generator.generate_dataset(
                file_path=config.DEFAULT_INPUT_FILE,
                num_rows=config.DEFAULT_SAMPLE_ROWS,
                error_rate=0.15,
                blank_line_rate=0.01
            )

    pipeline = AnalysisPipeline(input_files, config=config)
    if not pipeline.validate_input():
        logger.error("Input validation failed. Exiting.")
        return 1

    results = pipeline.run()
    _log_outcome(logger, results)
    return 0 if results['pipeline_status'] == 'completed' else 1


def _log_outcome(logger: logging.Logger, results: dict) -> None:
    """Say whether the input was unreadable or just had bad rows."""
    quality = results['data_quality_stats']
    if results['pipeline_status'] != 'completed':
        logger.error(f"Analysis failed: {results['error']}")
        logger.error(
            f"Partial results kept: {quality['records_cleaned']:,} records read, "
            f"{quality['records_dropped']:,} rows skipped before the failure"
        )
    elif quality['records_dropped']:
        logger.warning(f"{quality['records_dropped']:,} rows skipped as malformed")


if __name__ == '__main__':
    sys.exit(main())
