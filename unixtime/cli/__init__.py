from .config import (
    ClientSettings, GLOBAL_OPTIONS, ConfigManager, resolve_settings,
)
from .app import app, main

__all__ = [
    'ClientSettings', 'GLOBAL_OPTIONS', 'ConfigManager', 'resolve_settings',
    'app', 'main'
]
