# ========================
# src/utils/__init__.py
# ========================

"""
Utilities Package

Configuration, logging, performance monitoring and sample data generation.
"""

from .config import Config
from .performance_monitor import monitor_performance, PerformanceMonitor
from .logging_setup import setup_logging
from .data_generator import DataGenerator

__all__ = [
    'Config',
    'monitor_performance',
    'PerformanceMonitor',
    'setup_logging',
    'DataGenerator'
]
