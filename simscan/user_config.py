"""
User-level defaults for the Similar Image Scanner.

Each setting is looked up in this order, first hit wins:

    SIMSCAN_* environment variable  >  config.json  >  built-in constant

The file lives in ``~/.simscan`` unless SIMSCAN_CONFIG_DIR (or an explicit
directory) points elsewhere. Values passed to a scan at runtime always
override these defaults; this module only supplies them.

Example config.json:
{
    "default_threshold": 95,
    "default_algorithm": "phash",
    "default_workers": 8
}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .config import (
    CONFIG_DIR,
    DEFAULT_ALGORITHM,
    DEFAULT_THRESHOLD,
    DEFAULT_WORKERS,
    MAX_IMAGE_PIXELS,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'config.json'

# setting name -> (environment variable, built-in default)
SETTINGS = {
    'default_threshold': ('SIMSCAN_THRESHOLD', DEFAULT_THRESHOLD),
    'default_algorithm': ('SIMSCAN_ALGORITHM', DEFAULT_ALGORITHM),
    'default_workers': ('SIMSCAN_WORKERS', DEFAULT_WORKERS),
    'max_image_pixels': ('SIMSCAN_MAX_PIXELS', MAX_IMAGE_PIXELS),
}


def _parse_env(raw: str) -> Any:
    # "8" -> 8, "92.5" -> 92.5, "phash" stays a string
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class UserConfig:
    """
    Layered settings reader.

    The JSON file is read at most once per instance; call reload() after
    editing it.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self._explicit_dir = config_dir
        self._file_values: Optional[dict] = None

    @property
    def config_dir(self) -> Path:
        return Path(self._explicit_dir or os.getenv('SIMSCAN_CONFIG_DIR') or CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    def _read_file(self) -> dict:
        path = self.config_file_path
        if not path.is_file():
            return {}

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: top level must be a JSON object")
            return {}

        logger.debug(f"Read {len(data)} settings from {path}")
        return data

    @property
    def file_values(self) -> dict:
        if self._file_values is None:
            self._file_values = self._read_file()
        return self._file_values

    def reload(self):
        self._file_values = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Resolve one setting.

        Args:
            key: Name in config.json
            default: Returned when neither source sets the value
            env_var: Environment variable consulted first
        """
        if env_var and env_var in os.environ:
            return _parse_env(os.environ[env_var])
        return self.file_values.get(key, default)

    def _setting(self, key: str) -> Any:
        env_var, default = SETTINGS[key]
        return self.get(key, default=default, env_var=env_var)

    @property
    def default_threshold(self) -> float:
        return self._setting('default_threshold')

    @property
    def default_algorithm(self) -> str:
        return self._setting('default_algorithm')

    @property
    def default_workers(self) -> int:
        return self._setting('default_workers')

    @property
    def max_image_pixels(self) -> int:
        """Pillow decompression bomb limit."""
        return self._setting('max_image_pixels')

    def as_dict(self) -> dict:
        """Effective value of every setting."""
        return {key: self._setting(key) for key in SETTINGS}

    def create_example_config(self) -> bool:
        """
        Write a config.json holding the built-in defaults.

        Returns:
            True on success, False if the file could not be written
        """
        template = {'_comment': 'Similar Image Scanner defaults; delete keys you do not change'}
        template.update({key: default for key, (_, default) in SETTINGS.items()})

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(json.dumps(template, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Cannot write {self.config_file_path}: {e}")
            return False

        logger.info(f"Wrote example config to {self.config_file_path}")
        return True


_user_config: Optional[UserConfig] = None


def get_user_config() -> UserConfig:
    """Process-wide read-only settings, created on first use."""
    global _user_config
    if _user_config is None:
        _user_config = UserConfig()
    return _user_config
