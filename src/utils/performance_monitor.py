# ========================
# src/utils/performance_monitor.py
# ========================

"""
Performance Monitoring Utilities

Tracks elapsed time, throughput and peak memory while a run streams its input.
"""

import os
import time
import logging
from contextlib import contextmanager
from typing import Dict, Any, Optional

import psutil

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Performance monitoring utility for an analysis run.
    Tracks memory usage, processing time, and throughput.
    """

    def __init__(self, name: str = "Analysis", log_every: int = 100):
        """
        Initialize performance monitor.

        Args:
            name (str): Name for this monitoring session
            log_every (int): Log a progress line every this many batches
        """
        self.name = name
        self.log_every = log_every
        self.start_time = None
        self.end_time = None
        self.peak_memory_mb = 0.0
        self.lines_processed = 0
        self.batches_processed = 0
        self.checkpoints = []
        self.summary = None
        self._process = psutil.Process(os.getpid())

        logger.debug(f"PerformanceMonitor initialized: {name}")

    def start_monitoring(self) -> None:
        """Start performance monitoring."""
        self.start_time = time.time()
        self.peak_memory_mb = self._get_memory_usage_mb()

        logger.info(f"{self.name} - Performance monitoring started")
        logger.info(f"Initial memory usage: {self.peak_memory_mb:.2f} MB")

    def update_progress(self, lines_in_batch: int) -> None:
        """
        Update progress tracking.

        Args:
            lines_in_batch (int): Number of input lines read since the last update
        """
        self.lines_processed += lines_in_batch
        self.batches_processed += 1
        current_memory = self._get_memory_usage_mb()
        self.peak_memory_mb = max(self.peak_memory_mb, current_memory)

        if self.batches_processed % self.log_every == 0:
            self._log_progress(current_memory)

    def add_checkpoint(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Add a performance checkpoint.

        Args:
            name (str): Checkpoint name
            metadata (dict): Optional metadata to store
        """
        checkpoint = {
            'name': name,
            'timestamp': time.time(),
            'memory_mb': self._get_memory_usage_mb(),
            'lines_processed': self.lines_processed,
            'metadata': metadata or {}
        }
        self.checkpoints.append(checkpoint)
        logger.debug(f"Checkpoint '{name}': {checkpoint}")

    def _log_progress(self, current_memory: float) -> None:
        if self.start_time:
            elapsed = time.time() - self.start_time
            throughput = self.lines_processed / elapsed if elapsed > 0 else 0

            logger.info(
                f"{self.name} - Progress: {self.lines_processed:,} lines, "
                f"{throughput:.0f} lines/sec, "
                f"Memory: {current_memory:.2f} MB"
            )

    def stop_monitoring(self) -> Dict[str, Any]:
        """
        Stop monitoring and return performance summary.

        Returns:
            dict: Performance statistics
        """
        self.end_time = time.time()
        total_time = self.end_time - self.start_time if self.start_time else 0
        throughput = self.lines_processed / total_time if total_time > 0 else 0

        summary = {
            'name': self.name,
            'total_processing_time_seconds': total_time,
            'lines_processed': self.lines_processed,
            'batches_processed': self.batches_processed,
            'average_throughput_lines_per_second': throughput,
            'peak_memory_usage_mb': self.peak_memory_mb,
            'checkpoints': self.checkpoints
        }

        self.summary = summary
        self._log_summary(summary)
        return summary

    def _log_summary(self, summary: Dict[str, Any]) -> None:
        logger.info(f"PERFORMANCE SUMMARY - {summary['name']}")
        logger.info(f"Total processing time: {summary['total_processing_time_seconds']:.2f} seconds")
        logger.info(f"Lines processed: {summary['lines_processed']:,}")
        logger.info(f"Average throughput: {summary['average_throughput_lines_per_second']:.0f} lines/second")
        logger.info(f"Peak memory usage: {summary['peak_memory_usage_mb']:.2f} MB")
        if summary['checkpoints']:
            logger.info(f"Checkpoints recorded: {len(summary['checkpoints'])}")

    def _get_memory_usage_mb(self) -> float:
        """Get current resident memory usage in MB."""
        return self._process.memory_info().rss / (1024 * 1024)

    def get_current_stats(self) -> Dict[str, Any]:
        """Get current performance statistics."""
        elapsed = time.time() - self.start_time if self.start_time else 0

        return {
            'elapsed_seconds': elapsed,
            'lines_processed': self.lines_processed,
            'current_memory_mb': self._get_memory_usage_mb(),
            'peak_memory_mb': self.peak_memory_mb,
            'current_throughput': self.lines_processed / elapsed if elapsed > 0 else 0
        }


@contextmanager
def monitor_performance(name: str = "Analysis", log_every: int = 100):
    """
    Context manager for easy performance monitoring.

    Args:
        name (str): Name for this monitoring session
        log_every (int): Batches between progress log lines

    Yields:
        PerformanceMonitor: Monitor instance
    """
    monitor = PerformanceMonitor(name, log_every)
    monitor.start_monitoring()
    try:
        yield monitor
    finally:
        monitor.stop_monitoring()
