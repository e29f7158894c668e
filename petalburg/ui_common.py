from pathlib import Path
from typing import Any, Dict, List, Optional

from nicegui import ui

from petalburg.document.edits import SceneEdit, update_edit
from petalburg.paths import SCENE_SUFFIX


def scene_title(file_name: Optional[str]) -> str:
    """Display title for a scene file: the name without its .sc.json suffix."""
    if not file_name:
        return 'Untitled'
    name = Path(file_name).name
    if name.endswith(SCENE_SUFFIX):
        name = name[:-len(SCENE_SUFFIX)]
    return name


def actor_count_label(actors: List[Any]) -> str:
    count = len(actors)
    return f"{count} Actor{'' if count == 1 else 's'}"


def size_edit(scene: Dict[str, Any], width: Any, height: Any) -> Optional[SceneEdit]:
    """
    Build the 'update size' edit for the size inputs.

    Returns None unless both components are positive numbers and differ
    from the current size.
    """
    try:
        new_size = [int(width), int(height)]
    except (TypeError, ValueError):
        return None
    if new_size[0] <= 0 or new_size[1] <= 0:
        return None
    if list(scene.get('size') or []) == new_size:
        return None
    return update_edit('size', scene.get('size'), new_size)


def render_scene_panel(view, make_edit) -> None:
    """
    Renders the scene summary: title, actor count and the size editor.
    Size changes are committed on blur or Enter.
    """
    scene = view.scene
    if not view.valid_file or scene is None:
        return

    ui.label(scene_title(view.file_name)).classes('text-xl capitalize')
    ui.label(actor_count_label(scene.get('actors') or [])).classes('text-sm text-gray-400')

    size = scene.get('size') or [0, 0]
    ui.label('Scene Size').classes('mt-4 text-sm')
    with ui.row().classes('items-center gap-2 no-wrap'):
        width_input = ui.number(value=size[0], min=1, step=1, format='%d').props('dense outlined').classes('w-20')
        ui.label('X')
        height_input = ui.number(value=size[1], min=1, step=1, format='%d').props('dense outlined').classes('w-20')

    def commit_size(_=None):
        edit = size_edit(scene, width_input.value, height_input.value)
        if edit is not None:
            make_edit(edit)

    for element in (width_input, height_input):
        element.props('' if view.can_edit else 'readonly')
        element.on('blur', commit_size)
        element.on('keydown.enter', commit_size)


def render_actor_panel(view, selected_id: Optional[str]) -> None:
    """Renders id and position of the selected actor, if any."""
    scene = view.scene
    if scene is None or selected_id is None:
        return

    actor = next(
        (a for a in scene.get('actors') or [] if isinstance(a, dict) and a.get('id') == selected_id),
        None,
    )
    if actor is None:
        return

    ui.label(f"Actor {actor.get('id')}").classes('text-xl mt-4')
    ui.label(actor.get('type', '')).classes('text-sm text-gray-400')
    pos = actor.get('pos')
    if pos:
        ui.label(f"{pos[0]}, {pos[1]}").classes('font-mono')


def render_invalid_notice() -> None:
    """Fallback shown instead of the canvas when the file is not a scene."""
    with ui.column().classes('w-full gap-4 my-auto items-center'):
        ui.label('Invalid file!').classes('text-2xl')
        ui.label('Only valid JSON data can be used as a Junebug Scene')
