"""Configuration Management Package"""

import json
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

from msgcheck.core.patterns import SEVERITIES
from msgcheck.config.patterns import PatternConfigError, load_custom_patterns, pattern_from_dict


@dataclass
class Config:
    """User configuration with sensible defaults."""
    conventional_commit: bool = False
    subject_length_limit: int = 50
    provide_suggestions: bool = False
    detect_patterns: bool = True
    include_built_in: bool = True
    min_severity: Optional[str] = None  # "info", "warning" or "error"
    disabled_patterns: list[str] = field(default_factory=list)
    custom_patterns: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ('conventional_commit', 'provide_suggestions', 'detect_patterns', 'include_built_in'):
            if not isinstance(getattr(self, name), bool):
                warnings.append(f"Invalid {name} '{getattr(self, name)}', using {str(getattr(defaults, name)).lower()}")
                setattr(self, name, getattr(defaults, name))

        if (not isinstance(self.subject_length_limit, int) or isinstance(self.subject_length_limit, bool)
                or self.subject_length_limit <= 0):
            warnings.append(f"Invalid subject_length_limit '{self.subject_length_limit}', using {defaults.subject_length_limit}")
            self.subject_length_limit = defaults.subject_length_limit

        if self.min_severity is not None and self.min_severity not in SEVERITIES:
            warnings.append(f"Invalid min_severity '{self.min_severity}', reporting all severities")
            self.min_severity = defaults.min_severity

        if not isinstance(self.disabled_patterns, list) or not all(isinstance(p, str) for p in self.disabled_patterns):
            warnings.append("Invalid disabled_patterns, expected a list of pattern ids")
            self.disabled_patterns = []

        if not isinstance(self.custom_patterns, list):
            warnings.append("Invalid custom_patterns, expected a list of pattern definitions")
            self.custom_patterns = []

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".cmcrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "PatternConfigError",
    "load_custom_patterns",
    "pattern_from_dict",
]
