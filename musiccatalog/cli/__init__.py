"""
Command Line Interface for Music Catalog Sync
"""

from .main import main
from .config import CLIConfig

__all__ = ['main', 'CLIConfig']
