"""Editor settings with JSON persistence.

Settings live in ``settings.json`` under ``$PICO_CONFIG_DIR`` (default
``~/.pico``). Keys are camelCase on disk and snake_case in Python.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".pico"
SETTINGS_FILE_NAME = "settings.json"


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tab_stop: int = Field(default=8, ge=1, alias="tabStop")
    quit_times: int = Field(default=3, ge=1, alias="quitTimes")
    message_timeout: float = Field(default=5.0, ge=0, alias="messageTimeout")
    read_timeout: float = Field(default=1.0, gt=0, alias="readTimeout")
    escape_timeout: float = Field(default=0.1, gt=0, alias="escapeTimeout")


def get_config_dir() -> Path:
    return Path(os.environ.get("PICO_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILE_NAME


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from *path* (or the default location).

    A missing file gives the defaults. A broken one is logged and also gives
    the defaults.
    """
    settings_path = Path(path) if path is not None else get_settings_path()
    if not settings_path.exists():
        return Settings()
    try:
        data = json.loads(settings_path.read_text())
        return Settings.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Ignoring settings file %s: %s", settings_path, e)
        return Settings()
