"""
Configuration management for Petalburg.

Handles persistent configuration including:
- Canvas settings (size, grid, zoom rate, frame rate)
- The scene file opened at startup and the server port
- Log level

Config is stored in config.json next to the executable/project root.
Environment variables (PETALBURG_*, also read from .env) take priority.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

from petalburg.edit.constants import CANVAS_HEIGHT, CANVAS_WIDTH, SCALE_RATE, TILE_SIZE
from petalburg.paths import get_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "PETALBURG_"


@dataclass
class EditorSettings:
    """Settings for one editor session."""
    port: int = 8082
    frame_rate: float = 60.0
    scale_rate: float = SCALE_RATE
    tile_size: float = float(TILE_SIZE)
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    log_level: str = "INFO"
    scene_path: Optional[str] = None
    workspace: Optional[str] = None


def load_config() -> dict:
    """Load configuration from config.json."""
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def save_config(config: dict) -> None:
    """Save configuration to config.json."""
    config_path = get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def _coerce(raw, default):
    """Convert a raw config/env value to the type of the field default."""
    if default is None or isinstance(raw, type(default)):
        return raw
    if isinstance(default, bool):
        return str(raw).lower() in ('1', 'true', 'yes')
    return type(default)(raw)


def get_editor_settings() -> EditorSettings:
    """
    Build settings for the current session.

    Priority:
    1. Environment variable PETALBURG_<FIELD> (e.g. PETALBURG_PORT)
    2. Stored in config.json
    3. Defaults
    """
    config = load_config()
    settings = EditorSettings()
    for f in fields(EditorSettings):
        default = getattr(settings, f.name)
        raw = os.environ.get(ENV_PREFIX + f.name.upper(), config.get(f.name))
        if raw is None:
            continue
        try:
            setattr(settings, f.name, _coerce(raw, default))
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for setting {f.name!r}: {raw!r}, using {default!r}")
    return settings


def set_scene_path(scene_path: str) -> None:
    """Remember the scene to open on next start."""
    config = load_config()
    config["scene_path"] = scene_path
    save_config(config)
