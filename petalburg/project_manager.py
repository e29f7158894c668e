"""
Project Manager for Petalburg.

Scaffolds a new Junebug game project:
- assets/ with fonts/, scenes/ and sprites/ folders
- src/main.cpp, CMakeLists.txt, .gitignore, .gitmodules rendered from the
  Mustache templates in petalburg/resources/
- a git repository, optionally with the engine cloned into lib/

Template data: id, lowercaseTitle, title, vanityName (see derive_names).
"""

import re
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import logging

import chevron

from petalburg.paths import get_resources_dir

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_ID = "junebug-game"
ENGINE_REPO_URL = "https://github.com/wakeupingear/junebug"

PROJECT_FOLDERS = [
    Path("assets"),
    Path("assets") / "fonts",
    Path("assets") / "scenes",
    Path("assets") / "sprites",
    Path("src"),
    Path("lib"),
]

# (template in resources/, destination in the project)
PROJECT_TEMPLATES: List[Tuple[str, Path]] = [
    ("main.cpp", Path("src") / "main.cpp"),
    ("CMakeLists.txt", Path("CMakeLists.txt")),
    ("gitignore.txt", Path(".gitignore")),
    ("gitmodules.txt", Path(".gitmodules")),
]


def derive_names(raw_id: str) -> Dict[str, str]:
    """
    Derive the template names from a project id.

    'my-cool-game' -> lowercaseTitle 'myCoolGame', title 'MyCoolGame',
    vanityName 'My Cool Game'.
    """
    project_id = (raw_id or "").strip() or DEFAULT_PROJECT_ID
    lowercase_title = re.sub(r'-([a-z])', lambda m: m.group(1).upper(), project_id)
    title = lowercase_title[0].upper() + lowercase_title[1:]
    vanity_name = ' '.join(part for part in re.split(r'(?=[A-Z])', title) if part)
    return {
        'id': project_id,
        'lowercaseTitle': lowercase_title,
        'title': title,
        'vanityName': vanity_name,
    }


def render_template(name: str, data: Dict[str, Any]) -> str:
    template = (get_resources_dir() / name).read_text(encoding='utf-8')
    return chevron.render(template, data)


def _git(args: List[str], cwd: Path) -> None:
    subprocess.run(
        args,
        cwd=str(cwd),
        check=True,
        capture_output=True,
        text=True,
    )


def create_project(
    raw_id: str,
    parent_dir: Union[str, Path],
    init_git: bool = True,
    clone_engine: bool = False,
) -> Dict[str, Any]:
    """
    Create a new Junebug project folder inside parent_dir.

    Args:
        raw_id: Project id as typed by the user (becomes the folder name)
        parent_dir: Folder the project is created in
        init_git: Whether to initialize a git repository
        clone_engine: Whether to clone the engine into lib/ (needs network)

    Returns:
        Dict with 'success' (bool), 'message' (str), and optionally 'project_path'
    """
    names = derive_names(raw_id)
    project_id = names['id']

    invalid_chars = '<>:"/\\|?*'
    if any(c in project_id for c in invalid_chars):
        return {'success': False, 'message': f'Project name cannot contain: {invalid_chars}'}

    folder = Path(parent_dir) / project_id
    if folder.exists():
        return {
            'success': False,
            'message': f"Folder '{project_id}' already exists. Please choose a different name.",
        }

    try:
        for relative in PROJECT_FOLDERS:
            (folder / relative).mkdir(parents=True, exist_ok=True)

        for template, destination in PROJECT_TEMPLATES:
            (folder / destination).write_text(render_template(template, names), encoding='utf-8')
    except Exception as e:
        logger.error(f"Failed to create project {project_id}: {e}")
        try:
            if folder.exists():
                shutil.rmtree(folder)
        except OSError:
            pass
        return {'success': False, 'message': f'Error creating project: {e}'}

    if init_git:
        try:
            _git(['git', 'init'], folder)
        except (OSError, subprocess.CalledProcessError) as e:
            # Don't fail project creation if git init fails
            logger.warning(f"Git init failed for project {project_id}: {e}")

    if clone_engine:
        try:
            _git(['git', 'clone', ENGINE_REPO_URL, str(folder / 'lib'), '--quiet'], folder)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning(f"Could not clone engine into {folder / 'lib'}: {e}")

    logger.info(f"Created project '{project_id}' at {folder}")
    return {
        'success': True,
        'message': f'Project "{names["vanityName"]}" created successfully',
        'project_path': str(folder),
    }
