"""
Settings loader for codelecture.

Reads configuration from the environment after loading an optional .env file:
- CODELECTURE_WORKSPACE: workspace root (default: current directory)
- CODELECTURE_CONFIG_DIR: config directory under the root (default: .vscode)
- CODELECTURE_LOG_LEVEL: log level for entry points (default: INFO)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator


DEFAULT_CONFIG_DIR = ".vscode"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    workspace_root: Path
    config_dir: str = DEFAULT_CONFIG_DIR
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def log_level_known(cls, v):
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(
    env_file: Optional[Path] = None,
    workspace: Optional[str | Path] = None,
    config_dir: Optional[str] = None,
) -> Settings:
    """
    Build settings from .env, the environment, and explicit overrides.

    Args:
        env_file: Optional .env path (default: search from the current directory)
        workspace: Overrides CODELECTURE_WORKSPACE
        config_dir: Overrides CODELECTURE_CONFIG_DIR

    Returns:
        Validated Settings
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    root = workspace or os.environ.get("CODELECTURE_WORKSPACE") or Path.cwd()
    return Settings(
        workspace_root=Path(root).expanduser().resolve(),
        config_dir=config_dir or os.environ.get("CODELECTURE_CONFIG_DIR", DEFAULT_CONFIG_DIR),
        log_level=os.environ.get("CODELECTURE_LOG_LEVEL", "INFO"),
    )


def setup_logging(settings: Settings) -> None:
    """Configure root logging for an entry point."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
