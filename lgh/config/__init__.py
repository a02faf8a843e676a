"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from lgh import LANGUAGES, WORK_DIR


@dataclass
class Config:
    """User configuration with sensible defaults."""
    api_key: Optional[str] = None
    lang: str = "en"
    model: Optional[str] = None
    base_branch: str = "main"

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.lang not in LANGUAGES:
            warnings.append(f"Invalid lang '{self.lang}', using '{defaults.lang}'")
            self.lang = defaults.lang

        if not isinstance(self.base_branch, str) or not self.base_branch.strip():
            warnings.append(f"Invalid base_branch '{self.base_branch}', using '{defaults.base_branch}'")
            self.base_branch = defaults.base_branch

        return warnings

    @property
    def full_lang(self) -> str:
        return LANGUAGES[self.lang]

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def work_dir() -> Path:
    """Per-user directory holding the config file and generated summaries."""
    return Path.home() / WORK_DIR


class ConfigManager:
    """Manages loading and saving configuration."""

    LOCAL_FILENAME = ".lghrc"
    GLOBAL_FILENAME = "config.json"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def global_path(self) -> Path:
        return work_dir() / self.GLOBAL_FILENAME

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.LOCAL_FILENAME, self.global_path()):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config) -> Path:
        """Write the global config. It holds an API key, so keep it private."""
        path = self.global_path()
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        os.chmod(path, 0o600)
        self._config = config
        self._config_path = path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config) -> Path:
    return _manager.save(config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "work_dir",
]
