"""
Configuration for Attendance Pro.

Settings live in config/settings.yaml and are read with dotted keys:

    >>> get_config("gateway.model")
    'gemini-3-flash-preview'
    >>> get_config("calculator.hours_per_day")
    8

A key that is missing, or explicitly null in the YAML, yields the
caller's default. Relative entries under `paths` are resolved against
the project root.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"


class ConfigurationManager:
    """
    Process-wide settings store, loaded once from YAML.

    The first construction decides which file is read; later calls
    return the same instance whatever path they pass. Tests call
    reset() to start over.
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else DEFAULT_SETTINGS
        if not self.config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f) or {}

        for name, value in (self._config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                self._config['paths'][name] = str(PROJECT_ROOT / value)

        self._initialized = True

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as "output.csv.filename_pattern"."""
        value: Any = self._config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return default if value is None else value

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings; the next access reloads them."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
