"""
Configuration management for the unixtime CLI.

Handles:
- .unixtime INI file reading/writing
- Global option storage (set by CLI callback)
- Settings resolution (global option -> config file -> default)
"""

import os
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any

from unixtime.utils.constants import (
    NTP_PORT, DEFAULT_TIME_SERVER, DEFAULT_POLL_INTERVAL_MS,
    MAX_POLL_INTERVAL_MS, DEFAULT_MAX_POLLS,
)
from unixtime.utils.exceptions import ValidationError

CONFIG_FILE_NAME = ".unixtime"


# ============================================================================
# Client Settings
# ============================================================================

@dataclass
class ClientSettings:
    """Effective settings used to build an NtpTimeClient."""
    server: str = DEFAULT_TIME_SERVER
    local_port: int = NTP_PORT
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    max_polls: int = DEFAULT_MAX_POLLS
    bind: str = ""

    def validate(self) -> "ClientSettings":
        if not self.server:
            raise ValidationError("Time server must not be empty")
        if not 0 <= self.local_port <= 65535:
            raise ValidationError(f"Local port out of range: {self.local_port}")
        if not 1 <= self.poll_interval_ms <= MAX_POLL_INTERVAL_MS:
            raise ValidationError(
                f"Poll interval must be 1..{MAX_POLL_INTERVAL_MS} ms, got {self.poll_interval_ms}"
            )
        if self.max_polls < 1:
            raise ValidationError(f"Max polls must be at least 1, got {self.max_polls}")
        return self


# ============================================================================
# Global Options (set by CLI callback)
# ============================================================================

class GlobalOptions:
    """Global CLI options storage."""

    _FIELDS = ('server', 'local_port', 'poll_interval_ms', 'max_polls', 'bind')

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._values = {}
        return cls._instance

    def set(self, **kwargs):
        """Set global options. None values are ignored."""
        for key, value in kwargs.items():
            if key not in self._FIELDS:
                raise KeyError(key)
            if value is not None:
                self._values[key] = value

    def get(self) -> Dict[str, Any]:
        """Get all global options as dict."""
        return dict(self._values)

    def clear(self):
        """Clear all global options."""
        self._values = {}


# Singleton instance
GLOBAL_OPTIONS = GlobalOptions()


# ============================================================================
# Config File Management
# ============================================================================

class ConfigManager:
    """
    Manages .unixtime configuration file (INI format).

    File format:
        [DEFAULT]
        SERVER=pool.ntp.org
        LOCAL_PORT=123
        POLL_INTERVAL=150
        MAX_POLLS=15
        BIND=0.0.0.0
    """

    _KEYS = {
        'SERVER': ('server', str),
        'LOCAL_PORT': ('local_port', int),
        'POLL_INTERVAL': ('poll_interval_ms', int),
        'MAX_POLLS': ('max_polls', int),
        'BIND': ('bind', str),
    }

    @staticmethod
    def find_config_file() -> Optional[str]:
        """Find .unixtime file by searching up from current directory."""
        current = os.path.realpath(os.getcwd())

        visited = set()
        while current not in visited:
            visited.add(current)
            config_path = os.path.join(current, CONFIG_FILE_NAME)
            if os.path.exists(config_path):
                return config_path
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return None

    @staticmethod
    def read(config_path: str) -> dict:
        """
        Read INI-style .unixtime file.

        Returns:
            dict of ClientSettings field names to values, only for keys present.

        Raises:
            ValidationError: If a numeric key holds a non-numeric value.
        """
        result = {}

        if not config_path or not os.path.exists(config_path):
            return result

        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        in_default = False
        for line in content.splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#') or line.startswith(';'):
                continue

            # Section header
            if line.startswith('[') and line.endswith(']'):
                in_default = line[1:-1].strip().upper() == 'DEFAULT'
                continue

            # Key=Value pairs
            if '=' in line and in_default:
                key, value = line.split('=', 1)
                key = key.strip().upper()
                value = value.strip()
                if key not in ConfigManager._KEYS:
                    continue
                field, convert = ConfigManager._KEYS[key]
                try:
                    result[field] = convert(value)
                except ValueError as e:
                    raise ValidationError(f"{key} in {config_path}: invalid value {value!r}") from e

        return result

    @staticmethod
    def write(config_path: str, values: dict):
        """
        Write INI-style .unixtime file.

        Args:
            config_path: Path to .unixtime file
            values: Dict of ClientSettings field names to values
        """
        lines = ['[DEFAULT]']
        for key, (field, _convert) in ConfigManager._KEYS.items():
            if values.get(field) not in (None, ''):
                lines.append(f"{key}={values[field]}")
        lines.append('')

        with open(config_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

    @staticmethod
    def update(config_path: str, **values):
        """Update or add keys in a config file, keeping the others."""
        current = ConfigManager.read(config_path)
        current.update({k: v for k, v in values.items() if v is not None})
        ConfigManager.write(config_path, current)
        return current


# ============================================================================
# Settings Resolution
# ============================================================================

def resolve_settings(config_path: Optional[str] = None, **overrides) -> ClientSettings:
    """
    Resolve effective client settings.

    Priority:
    1. Explicit overrides (command options)
    2. Global options (set by CLI callback)
    3. .unixtime config file
    4. Built-in defaults
    """
    if config_path is None:
        config_path = ConfigManager.find_config_file()

    settings = ClientSettings()
    settings = replace(settings, **ConfigManager.read(config_path))
    settings = replace(settings, **GLOBAL_OPTIONS.get())
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    return settings.validate()
