"""
Configuration management for d2r-tools.

Holds the application-level settings the compiler needs: where the game is
installed, which locales to write, and the write retry policy.
"""

from __future__ import annotations

import functools
import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from .common import DEFAULT_MOD_ROOT, SUPPORTED_LOCALES
from .logger import ConfigurationError, FileOperationError

logger = logging.getLogger(__name__)


def _default_locales() -> list[str]:
    return ["enUS", "ruRU"]


@dataclass
class AppConfig:
    """Application configuration settings."""

    # Game install
    home_directory: Optional[str] = None
    mod_root: str = DEFAULT_MOD_ROOT

    # Locales written on apply
    selected_locales: list[str] = field(default_factory=_default_locales)

    # Write retry policy
    max_write_attempts: int = 10
    base_delay_ms: int = 100
    max_delay_ms: int = 1000

    # Read phase
    read_workers: int = 4

    # Logging
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate field values after initialization."""
        if self.max_write_attempts < 1:
            logger.warning(f"max_write_attempts must be >= 1, got {self.max_write_attempts}, using 1")
            self.max_write_attempts = 1
        if self.base_delay_ms < 0:
            logger.warning(f"base_delay_ms must be >= 0, got {self.base_delay_ms}, using 0")
            self.base_delay_ms = 0
        if self.max_delay_ms < self.base_delay_ms:
            logger.warning(f"max_delay_ms must be >= base_delay_ms, got {self.max_delay_ms}, using {self.base_delay_ms}")
            self.max_delay_ms = self.base_delay_ms
        if self.read_workers < 1:
            logger.warning(f"read_workers must be >= 1, got {self.read_workers}, using 1")
            self.read_workers = 1

        if isinstance(self.selected_locales, str):
            self.selected_locales = [self.selected_locales]
        unknown = [loc for loc in self.selected_locales if loc not in SUPPORTED_LOCALES]
        if unknown:
            logger.warning(f"Ignoring unsupported locales: {unknown}")
            self.selected_locales = [loc for loc in self.selected_locales if loc in SUPPORTED_LOCALES]


CONFIG_KEYS = frozenset(f.name for f in fields(AppConfig))
DEFAULT_CONFIG_PATH = Path.home() / ".d2r-tools" / "config.json"


class ConfigManager:
    """AppConfig backed by a JSON file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to config file. Defaults to ~/.d2r-tools/config.json
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = self.load()

    def load(self) -> AppConfig:
        """Config from the file; defaults when it is missing or unusable."""
        try:
            data = json.loads(self.config_path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            return AppConfig()
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Cannot load config {self.config_path}: {e}, using defaults")
            return AppConfig()

        if not isinstance(data, dict):
            logger.warning(f"Config {self.config_path} is not a JSON object, using defaults")
            return AppConfig()

        ignored = sorted(set(data) - CONFIG_KEYS)
        if ignored:
            logger.debug(f"Ignoring unknown config keys: {ignored}")
        try:
            return AppConfig(**{k: v for k, v in data.items() if k in CONFIG_KEYS})
        except TypeError as e:
            logger.warning(f"Invalid config values in {self.config_path}: {e}, using defaults")
            return AppConfig()

    def save(self) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(
                json.dumps(asdict(self.config), indent=2, ensure_ascii=False),
                encoding='utf-8',
            )
        except OSError as e:
            raise FileOperationError(f"Cannot save config: {e}", file_path=self.config_path) from e
        logger.debug(f"Saved config to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self.config, key, default)

    def set(self, key: str, value: Any, auto_save: bool = True) -> AppConfig:
        """
        Change one value and save.

        The new config goes through the same validation as a loaded one.

        Raises:
            ConfigurationError: Unknown key or a value of the wrong type
        """
        if key not in CONFIG_KEYS:
            raise ConfigurationError(f"Unknown config key: {key}", config_key=key)
        try:
            self.config = replace(self.config, **{key: value})
        except TypeError as e:
            raise ConfigurationError(f"Invalid value for {key}: {value!r}", config_key=key) from e

        if auto_save:
            self.save()
        return self.config


@functools.lru_cache(maxsize=None)
def get_config() -> ConfigManager:
    """Shared manager for the default config file."""
    return ConfigManager()
