"""
Interactive scene canvas.

This package provides pan/zoom navigation and actor manipulation:
- Camera: screen <-> world transform with clamped zoom
- InputState: per-frame pointer/button/wheel/key aggregation
- SelectionController: hit detection and the press/drag/release machine
- SceneCanvas: the per-frame update loop
- render_scene_svg: SVG rendering for ui.interactive_image
- setup_canvas_handlers: NiceGUI event wiring (see petalburg.edit.handlers)

Usage:
    from petalburg.edit import SceneCanvas, Camera
    from petalburg.edit.handlers import setup_canvas_handlers
"""

from petalburg.edit.constants import (
    ACTOR_HITBOX_SIZE,
    DRAG_THRESHOLD,
    MIN_SCALE,
    MAX_SCALE,
    SCALE_RATE,
    TILE_SIZE,
)
from petalburg.edit.camera import Camera
from petalburg.edit.input_state import InputState
from petalburg.edit.controller import FrameResult, SelectionController
from petalburg.edit.canvas import SceneCanvas
from petalburg.edit.overlay import render_scene_svg

__all__ = [
    'Camera',
    'InputState',
    'SelectionController',
    'FrameResult',
    'SceneCanvas',
    'render_scene_svg',
    'ACTOR_HITBOX_SIZE',
    'DRAG_THRESHOLD',
    'MIN_SCALE',
    'MAX_SCALE',
    'SCALE_RATE',
    'TILE_SIZE',
]
