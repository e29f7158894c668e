"""
Canvas Overlay - SVG rendering of the scene for ui.interactive_image.

Everything is drawn in world space inside one <g> carrying the camera
transform, so zoom and pan are a single attribute change. Strokes use
non-scaling-stroke to stay one pixel wide at any zoom.

Draw order: grid, scene bounds, actors in list order (the same order the
selection controller hit-tests in), then hover/selection outlines.
"""

import math
from html import escape
from typing import Any, Dict, List, Optional

from petalburg.edit.camera import Camera
from petalburg.edit.constants import ACTOR_HITBOX_SIZE, TILE_SIZE

SCENE_FILL = '#1e3a8a'
ACTOR_FILL = '#dc2626'
GRID_STROKE = '#334155'
HOVER_STROKE = '#facc15'
SELECTED_STROKE = '#ffffff'


def _grid_lines(camera: Camera, width: float, height: float, tile_size: float,
                scene_size: List[float]) -> List[str]:
    left, top, right, bottom = camera.visible_world_rect(width, height)
    # Only draw the grid over the scene itself
    left, top = max(left, 0), max(top, 0)
    right, bottom = min(right, scene_size[0]), min(bottom, scene_size[1])
    if right <= left or bottom <= top:
        return []

    lines = []
    x = math.floor(left / tile_size) * tile_size
    while x <= right:
        lines.append(f'<line x1="{x:g}" y1="{top:g}" x2="{x:g}" y2="{bottom:g}" vector-effect="non-scaling-stroke" />')
        x += tile_size
    y = math.floor(top / tile_size) * tile_size
    while y <= bottom:
        lines.append(f'<line x1="{left:g}" y1="{y:g}" x2="{right:g}" y2="{y:g}" vector-effect="non-scaling-stroke" />')
        y += tile_size
    return lines


def _actor_rect(actor: Dict[str, Any], stroke: Optional[str] = None) -> str:
    x, y = actor['pos']
    title = escape(f"{actor.get('type', '')} {actor.get('id', '')}".strip())
    if stroke:
        return (f'<rect x="{x:g}" y="{y:g}" width="{ACTOR_HITBOX_SIZE}" height="{ACTOR_HITBOX_SIZE}" '
                f'fill="none" stroke="{stroke}" stroke-width="2" vector-effect="non-scaling-stroke" />')
    return (f'<rect x="{x:g}" y="{y:g}" width="{ACTOR_HITBOX_SIZE}" height="{ACTOR_HITBOX_SIZE}" '
            f'fill="{ACTOR_FILL}"><title>{title}</title></rect>')


def _positioned(actor: Any) -> bool:
    if not isinstance(actor, dict):
        return False
    pos = actor.get('pos')
    return isinstance(pos, (list, tuple)) and len(pos) == 2


def render_scene_svg(
    scene: Optional[Dict[str, Any]],
    camera: Camera,
    width: float,
    height: float,
    tile_size: float = TILE_SIZE,
    hovered_id: Optional[str] = None,
    selected_id: Optional[str] = None,
) -> str:
    """Return the SVG content for one frame, or '' when there is no scene."""
    if not scene:
        return ''

    size = scene.get('size') or [0, 0]
    actors = [a for a in scene.get('actors') or [] if _positioned(a)]

    parts = [f'<g transform="{camera.svg_transform()}">']
    parts.append(f'<rect x="0" y="0" width="{size[0]:g}" height="{size[1]:g}" fill="{SCENE_FILL}" />')
    grid = _grid_lines(camera, width, height, tile_size, size)
    if grid:
        parts.append(f'<g stroke="{GRID_STROKE}" stroke-width="1">')
        parts.extend(grid)
        parts.append('</g>')

    for actor in actors:
        parts.append(_actor_rect(actor))

    for actor in actors:
        if actor.get('id') == selected_id:
            parts.append(_actor_rect(actor, SELECTED_STROKE))
        elif actor.get('id') == hovered_id:
            parts.append(_actor_rect(actor, HOVER_STROKE))

    parts.append('</g>')
    return ''.join(parts)
