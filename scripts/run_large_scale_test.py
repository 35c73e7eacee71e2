#!/usr/bin/env python3
# ========================
# scripts/run_large_scale_test.py
# ========================

"""
Script to test the analyzer with a large dataset.
Memory use should stay flat however many rows the file holds.
"""

import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.analyzer import AnalysisPipeline
from src.utils import Config, DataGenerator, setup_logging


def main():
    """Run a large-scale test of the analyzer."""
    config = Config()
    setup_logging(config.LOG_LEVEL)

    if len(sys.argv) > 1:
        try:
            num_rows = int(sys.argv[1])
        except ValueError:
            print("Usage: python run_large_scale_test.py [num_rows]")
            print("Example: python run_large_scale_test.py 1000000")
            sys.exit(1)
    else:
        num_rows = config.LARGE_DATASET_ROWS

    input_file = 'data/raw/large_sales_data.csv'

    print("="*60)
    print("LARGE SCALE ANALYZER TEST")
    print("="*60)
    print(f"Target dataset size: {num_rows:,} rows")
    print(f"Input file: {input_file}")
    print("="*60)

    print(f"\nStep 1: Generating {num_rows:,} rows of sample data...")
    generator = DataGenerator(seed=42)
    stats = generator.generate_large_dataset_chunked(input_file, num_rows, chunk_size=10000)

    print("\nStep 2: Running analysis...")
    results = AnalysisPipeline(input_file, config=config).run()

    print("\nStep 3: Verifying results...")
    analysis = results['analysis']
    checks = {
        'valid rows': (analysis['records_processed'], stats['valid_rows']),
        'rejected rows': (analysis['records_failed'], stats['records_with_errors']),
    }
    mismatches = 0
    for name, (actual, expected) in checks.items():
        ok = actual == expected
        mismatches += not ok
        print(f"{'OK ' if ok else 'BAD'} {name}: {actual:,} (expected {expected:,})")

    performance = results['performance']
    print(f"\nPeak memory: {performance['peak_memory_usage_mb']:.2f} MB")
    print(f"Throughput: {performance['average_throughput_lines_per_second']:.0f} lines/second")

    sys.exit(1 if mismatches else 0)


if __name__ == '__main__':
    main()
