"""
Path utilities for Petalburg.

Handles path resolution for both development mode and frozen (PyInstaller) executables.
- In development: paths are relative to the project root
- When frozen: paths are relative to the executable location

config.json lives NEXT TO the executable; scaffold templates ship inside the package.
"""

import sys
from pathlib import Path
from typing import Optional, Union

ASSET_FOLDER = "assets"
SCENE_SUFFIX = ".sc.json"


def get_app_dir() -> Path:
    """
    Get the application directory.

    - In development: the project root (parent of petalburg/)
    - When frozen: the directory containing the executable
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_config_path() -> Path:
    """Get the path to the config file (editor settings)."""
    return get_app_dir() / "config.json"


def get_resources_dir() -> Path:
    """Get the directory holding the project scaffold templates."""
    return Path(__file__).parent / "resources"


def get_assets_dir(workspace: Union[str, Path]) -> Path:
    """Get the game assets folder of a Junebug workspace."""
    return Path(workspace) / ASSET_FOLDER


def get_backup_dir() -> Path:
    """Get the directory for hot-exit backups, creating it if necessary."""
    backup_dir = get_app_dir() / "backups"
    backup_dir.mkdir(parents=True, exist_ok=True)
    return backup_dir


def get_backup_path(scene_path: Optional[Union[str, Path]]) -> Path:
    """Backup location for a scene file (untitled scenes share one slot)."""
    name = Path(scene_path).name if scene_path else "Untitled"
    if name.endswith(SCENE_SUFFIX):
        name = name[:-len(SCENE_SUFFIX)]
    return get_backup_dir() / f"{name}.backup{SCENE_SUFFIX}"


def find_backup(scene_path: Optional[Union[str, Path]]) -> Optional[Path]:
    """
    Return the backup to restore for scene_path, if any.

    A backup only counts when it is at least as new as the scene file.
    """
    backup = get_backup_path(scene_path)
    if not backup.is_file():
        return None
    if scene_path and Path(scene_path).is_file():
        if backup.stat().st_mtime < Path(scene_path).stat().st_mtime:
            return None
    return backup
