"""codelecture utilities."""

from .config import Settings, load_settings, setup_logging, DEFAULT_CONFIG_DIR
from .paths import to_workspace_path, resolve_workspace_path

__all__ = [
    "Settings",
    "load_settings",
    "setup_logging",
    "DEFAULT_CONFIG_DIR",
    "to_workspace_path",
    "resolve_workspace_path",
]
