"""
Configuration loader for SkuaTBH.
Provides unified access to YAML and JSON configuration files.

Supports:
- JSON (.json) - species formula coefficients
- YAML (.yaml, .yml) - measurement validation rules

Features:
- Per-file caching (files are parsed once and reused)
- Unified API for both configuration types
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError, InvalidDataError

COEFFICIENT_FILE = 'skua_formula_coefficients.json'
VALIDATION_RULES_FILE = 'validation_rules.yaml'


class ConfigLoader:
    """Loads and manages SkuaTBH configuration from the cfg/ directory.

    Attributes:
        cfg_dir: Path to the configuration directory
    """

    def __init__(self, cfg_dir: Optional[Path] = None):
        """Initialize the configuration loader.

        Args:
            cfg_dir: Path to the configuration directory. Defaults to the
                cfg/ directory shipped inside the package.
        """
        if cfg_dir is None:
            cfg_dir = Path(__file__).parent / 'cfg'
        self.cfg_dir = Path(cfg_dir)

        # Cache for parsed files (loaded once, reused)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def _load_config_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file.

        Args:
            file_path: Path to the configuration file

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigurationError: If file format is not supported or parsing fails
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        suffix = file_path.suffix.lower()

        try:
            if suffix in ['.yaml', '.yml']:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
                    if data is None:
                        raise InvalidDataError("YAML file", "file is empty or contains only comments")
                    return data
            elif suffix == '.json':
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    if data is None:
                        raise InvalidDataError("JSON file", "file is empty or contains null")
                    return data
            else:
                raise ConfigurationError(f"Unsupported configuration file format: {suffix}. "
                                         f"Supported formats: .yaml, .yml, .json")
        except yaml.YAMLError as e:
            raise InvalidDataError("YAML configuration", f"parsing error: {str(e)}") from e
        except json.JSONDecodeError as e:
            raise InvalidDataError("JSON configuration", f"parsing error: {str(e)}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {file_path}: {str(e)}") from e

    def load_file(self, filename: str) -> Dict[str, Any]:
        """Load a configuration file from cfg/ with caching.

        Args:
            filename: Name of the file relative to cfg_dir

        Returns:
            Dictionary containing the parsed data

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the file cannot be parsed
        """
        if filename not in self._cache:
            self._cache[filename] = self._load_config_file(self.cfg_dir / filename)
        return self._cache[filename]

    def load_coefficient_file(self, filename: str = COEFFICIENT_FILE) -> Dict[str, Any]:
        """Load the species formula coefficient file (JSON)."""
        return self.load_file(filename)

    def load_validation_rules(self, filename: str = VALIDATION_RULES_FILE) -> Dict[str, Any]:
        """Load the measurement validation rules (YAML)."""
        return self.load_file(filename)

    def clear_cache(self) -> None:
        """Clear the file cache.

        Useful for testing or when configuration files may have changed.
        """
        self._cache.clear()


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Get the shared configuration loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_coefficient_file(filename: str = COEFFICIENT_FILE) -> Dict[str, Any]:
    """Convenience function to load a JSON coefficient file with caching."""
    return get_config_loader().load_coefficient_file(filename)


def load_validation_rules(filename: str = VALIDATION_RULES_FILE) -> Dict[str, Any]:
    """Convenience function to load the validation rules with caching."""
    return get_config_loader().load_validation_rules(filename)
