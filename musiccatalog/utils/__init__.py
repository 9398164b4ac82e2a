"""
Music Catalog Sync Utilities Package

This package contains utility functions used throughout the application.
"""

from .filesystem import (normalize_extensions, file_extension, list_subdirectories,
                         list_files, ensure_directory, backup_file)
from .logging_config import setup_logging, get_logger

__all__ = [
    'normalize_extensions',
    'file_extension',
    'list_subdirectories',
    'list_files',
    'ensure_directory',
    'backup_file',
    'setup_logging',
    'get_logger'
]
