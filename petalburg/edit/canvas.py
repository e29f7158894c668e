"""
Scene Canvas - the per-frame update loop for one view.

Each tick runs, without yielding:
1. InputState.begin_frame()
2. wheel zoom around the pointer (one scale_rate step per frame)
3. SelectionController.update() against the live scene
4. drag-to-pan with left/middle when the controller did not capture
5. InputState.end_frame() (wheel decay, pointer history)
"""

from typing import Optional

from petalburg.edit.camera import Camera
from petalburg.edit.constants import CANVAS_HEIGHT, CANVAS_WIDTH, SCALE_RATE, TILE_SIZE
from petalburg.edit.controller import FrameResult, SelectionController
from petalburg.edit.input_state import LEFT, MIDDLE, InputState
from petalburg.edit.overlay import render_scene_svg
from petalburg.view import SceneView


class SceneCanvas:
    """Camera + input + selection for a SceneView."""

    def __init__(
        self,
        view: SceneView,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        scale_rate: float = SCALE_RATE,
        tile_size: float = TILE_SIZE,
        camera: Optional[Camera] = None,
    ):
        self.view = view
        self.width = width
        self.height = height
        self.scale_rate = scale_rate
        self.tile_size = tile_size
        self.camera = camera or Camera()
        self.input = InputState()
        self.controller = SelectionController(commit=view.commit_edit)
        self.last_frame = FrameResult()
        self._scene_id: Optional[int] = None

    def tick(self) -> FrameResult:
        view = self.view
        state = self.input
        state.begin_frame()

        multiplier = state.zoom_multiplier(self.scale_rate)
        if multiplier is not None:
            self.camera.zoom_at(state.pointer, multiplier)

        # A replaced scene invalidates the selection
        scene = view.scene
        if id(scene) != self._scene_id:
            self._scene_id = id(scene)
            self.controller.reset()

        if scene is not None and view.can_edit:
            result = self.controller.update(scene, self.camera, state)
        else:
            result = FrameResult()

        if not result.mouse_capture and state.button in (LEFT, MIDDLE) and state.drag:
            self.camera.pan(state.pointer_delta)

        state.end_frame()
        self.last_frame = result
        return result

    def render(self) -> str:
        return render_scene_svg(
            self.view.scene,
            self.camera,
            self.width,
            self.height,
            tile_size=self.tile_size,
            hovered_id=self.last_frame.hovered_id,
            selected_id=self.last_frame.selected_id,
        )
