# ========================
# src/utils/config.py
# ========================

"""
Configuration Management

Centralized configuration for the sales analyzer with environment support.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional


class Config:
    """
    Configuration class for the sales analyzer.
    Supports environment variables and default values.
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_dict (dict): Optional configuration overrides
        """
        # Input Parsing
        self.DEFAULT_INPUT_FILE = os.getenv('ANALYZER_INPUT_FILE', 'data/raw/sales_data.csv')
        self.DELIMITER = os.getenv('ANALYZER_DELIMITER', ',')
        self.ENCODING = os.getenv('ANALYZER_ENCODING', 'utf-8')

        # Progress Reporting
        self.PROGRESS_INTERVAL = int(os.getenv('ANALYZER_PROGRESS_INTERVAL', '10000'))

        # Data Generation Settings
        self.DEFAULT_SAMPLE_ROWS = int(os.getenv('SAMPLE_ROWS', '10000'))
        self.LARGE_DATASET_ROWS = int(os.getenv('LARGE_DATASET_ROWS', '1000000'))

        # Data Quality Settings
        self.MIN_DATA_QUALITY_RATE = float(os.getenv('MIN_DATA_QUALITY_RATE', '0.4'))  # 40%

        # Logging Configuration
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        self.LOG_DIR = os.getenv('LOG_DIR', 'logs')
        self.LOG_FILE = os.getenv('LOG_FILE') or None

        # Override with provided config
        if config_dict:
            self._update_from_dict(config_dict)

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for key, value in config_dict.items():
            if hasattr(self, key.upper()):
                setattr(self, key.upper(), value)

    def get_data_paths(self) -> Dict[str, Path]:
        """Get all configured data paths as Path objects."""
        return {
            'input_file': Path(self.DEFAULT_INPUT_FILE),
            'raw_data_dir': Path(self.DEFAULT_INPUT_FILE).parent,
            'logs_dir': Path(self.LOG_DIR)
        }

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        paths = self.get_data_paths()
        for path_name, path in paths.items():
            if path_name.endswith('_dir'):
                path.mkdir(parents=True, exist_ok=True)

    def validate_config(self) -> Dict[str, bool]:
        """
        Validate configuration values.

        Returns:
            dict: Validation results for each setting
        """
        validations = {}

        validations['delimiter'] = len(self.DELIMITER) == 1 and not self.DELIMITER.isspace()
        validations['progress_interval'] = self.PROGRESS_INTERVAL > 0
        validations['sample_rows'] = self.DEFAULT_SAMPLE_ROWS > 0
        validations['large_dataset_rows'] = self.LARGE_DATASET_ROWS > 0
        validations['data_quality_rate'] = 0.0 <= self.MIN_DATA_QUALITY_RATE <= 1.0

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        validations['log_level'] = self.LOG_LEVEL.upper() in valid_log_levels

        return validations

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if not attr.startswith('_') and not callable(getattr(self, attr))
        }

    def __str__(self) -> str:
        """String representation of configuration."""
        lines = ["Configuration Settings:"]
        config_dict = self.to_dict()
        for key, value in sorted(config_dict.items()):
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)
