"""
CLI Configuration Management

Provides configuration loading and validation for the Music Catalog Sync CLI.
The JSON configuration file is merged over defaults and can be overridden
through environment variables (a ``.env`` file is honoured).
"""

import os
import json
from typing import Dict, Any, Optional, List
from pathlib import Path

from dotenv import load_dotenv

from ..core.exceptions import ConfigurationError
from ..core.models import CatalogSettings, HIGHLIGHT_COLOR
from ..utils.filesystem import normalize_extensions

DEFAULT_CONFIG_FILE = "config.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CLIConfig:
    """
    CLI configuration manager

    Features:
    - JSON configuration file merged over defaults
    - Environment variable overrides, including a ``.env`` file
    - Validation into a CatalogSettings object
    """

    def __init__(self, config_path: Optional[str] = None, load_env_file: bool = True):
        """Initialize configuration manager"""
        self.config_path = config_path or DEFAULT_CONFIG_FILE
        self._config_cache: Optional[Dict[str, Any]] = None
        self._defaults = self._get_default_config()

        if load_env_file:
            env_path = self._find_env_file()
            if env_path:
                load_dotenv(env_path)

    def _find_env_file(self) -> Optional[str]:
        """Find .env file in current directory or parent directories"""
        current_dir = Path.cwd()

        # Check current directory and up to 3 parent directories
        for _ in range(4):
            env_file = current_dir / '.env'
            if env_file.exists():
                return str(env_file)
            if current_dir == current_dir.parent:  # Reached root
                break
            current_dir = current_dir.parent

        return None

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            "data_folder": None,
            "extensions": ["mp3", "flac"],
            "spreadsheet": {
                "file_name": None,
                "sheet": None,
                "first_column": 1,
                "first_row": 1,
                "highlight_color": HIGHLIGHT_COLOR,
                "backup": False
            },
            "logging": {
                "console_level": "INFO",
                "file_level": "DEBUG",
                "log_dir": None
            }
        }

    def load_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load configuration from all sources

        Args:
            force_reload: Force reload from file (ignore cache)

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigurationError: The file is missing or not valid JSON
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config = self._deep_merge(self._defaults, self._load_from_file())

        env_config = self._load_from_environment()
        if env_config:
            config = self._deep_merge(config, env_config)

        self._config_cache = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        if not os.path.exists(self.config_path):
            raise ConfigurationError("Failed to read config file", filepath=self.config_path)

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError("Failed to parse the config", details=str(e),
                                     filepath=self.config_path)
        except OSError as e:
            raise ConfigurationError("Failed to read config file", details=str(e),
                                     filepath=self.config_path)

        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a JSON object",
                                     filepath=self.config_path)
        return config

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables"""
        config = {}

        # Map environment variables to config keys
        env_mappings = {
            'MUSIC_CATALOG_DATA_FOLDER': (None, 'data_folder', str),
            'MUSIC_CATALOG_SPREADSHEET': ('spreadsheet', 'file_name', str),
            'MUSIC_CATALOG_SHEET': ('spreadsheet', 'sheet', str),
            'MUSIC_CATALOG_BACKUP': ('spreadsheet', 'backup', self._str_to_bool),
            'MUSIC_CATALOG_LOG_LEVEL': ('logging', 'console_level', str),
            'MUSIC_CATALOG_LOG_DIR': ('logging', 'log_dir', str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            target = config if section is None else config.setdefault(section, {})
            target[key] = converter(value)

        return config

    def _str_to_bool(self, value: str) -> bool:
        """Convert string to boolean"""
        return value.lower() in ('true', '1', 'yes', 'on', 'enabled')

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def load_settings(self, check_paths: bool = True) -> CatalogSettings:
        """
        Load and validate the configuration

        Args:
            check_paths: Require the data folder to exist

        Returns:
            Validated settings

        Raises:
            ConfigurationError: Listing every problem found
        """
        config = self.load_config()
        errors: List[str] = []

        data_folder = config.get('data_folder')
        if not data_folder or not isinstance(data_folder, str):
            errors.append("data_folder is required")
        elif check_paths and not os.path.isdir(os.path.expanduser(data_folder)):
            errors.append(f"data_folder does not exist: {data_folder}")

        raw_extensions = config.get('extensions')
        if isinstance(raw_extensions, str):
            raw_extensions = [raw_extensions]
        if not isinstance(raw_extensions, list):
            errors.append("extensions must be a list")
            raw_extensions = []
        extensions = normalize_extensions(raw_extensions)
        if not extensions:
            errors.append("extensions must name at least one file extension")

        spreadsheet = config.get('spreadsheet')
        if not isinstance(spreadsheet, dict):
            errors.append("spreadsheet must be an object")
            spreadsheet = {}

        for key in ('file_name', 'sheet'):
            if not spreadsheet.get(key) or not isinstance(spreadsheet.get(key), str):
                errors.append(f"spreadsheet.{key} is required")

        positions = {}
        for key in ('first_column', 'first_row'):
            value = spreadsheet.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                errors.append(f"spreadsheet.{key} must be a positive integer")
            else:
                positions[key] = value

        highlight_color = str(spreadsheet.get('highlight_color') or HIGHLIGHT_COLOR).lstrip('#').upper()
        if len(highlight_color) != 6 or any(c not in '0123456789ABCDEF' for c in highlight_color):
            errors.append(f"spreadsheet.highlight_color must be an RGB hex value: {highlight_color}")

        logging_config = config.get('logging') or {}
        if not isinstance(logging_config, dict):
            errors.append("logging must be an object")
            logging_config = {}

        levels = {}
        for key, default in (('console_level', 'INFO'), ('file_level', 'DEBUG')):
            level = str(logging_config.get(key) or default).upper()
            if level not in LOG_LEVELS:
                errors.append(f"logging.{key} must be one of {', '.join(LOG_LEVELS)}: {level}")
            levels[key] = level

        if errors:
            raise ConfigurationError(
                "Invalid configuration",
                details="; ".join(errors),
                filepath=self.config_path
            )

        return CatalogSettings(
            data_folder=os.path.expanduser(data_folder),
            extensions=tuple(sorted(extensions)),
            spreadsheet_file=os.path.expanduser(spreadsheet['file_name']),
            sheet=spreadsheet['sheet'],
            first_column=positions['first_column'],
            first_row=positions['first_row'],
            highlight_color=highlight_color,
            backup=bool(spreadsheet.get('backup', False)),
            console_level=levels['console_level'],
            file_level=levels['file_level'],
            log_dir=logging_config.get('log_dir'),
        )

    def get_option(self, path: str, default: Any = None) -> Any:
        """
        Get a configuration option using dot notation

        Args:
            path: Dot-separated path (e.g., 'spreadsheet.sheet')
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        config = self.load_config()

        value = config
        try:
            for key in path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


__all__ = ['CLIConfig', 'DEFAULT_CONFIG_FILE', 'LOG_LEVELS']
