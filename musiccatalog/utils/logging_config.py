"""
Logging Configuration for Music Catalog Sync

This module provides centralized logging configuration for the entire application,
ensuring consistent logging across the scanner, the probes and the spreadsheet sync.
"""

import os
import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for better readability"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        if record.levelname in self.COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


class CatalogLogger:
    """Centralized logger configuration for Music Catalog Sync"""

    ROOT = 'musiccatalog'

    def __init__(self, log_dir: Optional[str] = None, console_level: str = "INFO",
                 file_level: str = "DEBUG", enable_console: bool = True):
        """
        Initialize logging system

        Args:
            log_dir: Directory for the rotating log file (no file logging if None)
            console_level: Console logging level
            file_level: File logging level
            enable_console: Whether to enable console logging
        """
        self.log_dir = os.path.expanduser(log_dir) if log_dir else None
        self.console_level = self._level(console_level)
        self.file_level = self._level(file_level)
        self.enable_console = enable_console
        self.log_file: Optional[str] = None

        self._setup_package_logger()

    @staticmethod
    def _level(name: str) -> int:
        level = getattr(logging, str(name).upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
        return level

    def _setup_package_logger(self):
        """Attach handlers to the package logger"""
        package_logger = logging.getLogger(self.ROOT)
        package_logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        # Console handler
        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self.console_level)
            console_formatter = ColoredFormatter(
                '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            package_logger.addHandler(console_handler)

        # Main log file (rotating)
        if self.log_dir:
            Path(self.log_dir).mkdir(parents=True, exist_ok=True)
            self.log_file = os.path.join(self.log_dir, 'music_catalog.log')
            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file, maxBytes=10*1024*1024, backupCount=5, encoding='utf-8'
            )
            file_handler.setLevel(self.file_level)
            file_formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            package_logger.addHandler(file_handler)

        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger for a specific component"""
        return logging.getLogger(f'{self.ROOT}.{name}')

    def log_scan_complete(self, data_folder: str, bands: int, albums: int):
        """Log completion of the library scan"""
        logger = self.get_logger('scanner')
        logger.info(f"Scan complete: {data_folder}")
        logger.info(f"Found {albums} albums from {bands} bands")

    def log_sync_complete(self, spreadsheet_file: str, written: int, discovered: int):
        """Log completion of the spreadsheet synchronization"""
        logger = self.get_logger('sync')
        logger.info(f"Wrote {written}/{discovered} albums to {os.path.basename(spreadsheet_file)}")


# Global logger instance
_logger_instance = None

def setup_logging(log_dir: Optional[str] = None, console_level: str = "INFO",
                  file_level: str = "DEBUG", enable_console: bool = True) -> CatalogLogger:
    """Setup global logging configuration"""
    global _logger_instance
    _logger_instance = CatalogLogger(log_dir, console_level, file_level, enable_console)
    return _logger_instance

def get_logger(name: str = 'main') -> logging.Logger:
    """Get a component logger"""
    return get_app_logger().get_logger(name)

def get_app_logger() -> CatalogLogger:
    """Get the application logger instance"""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = setup_logging()
    return _logger_instance
