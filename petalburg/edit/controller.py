"""
Selection Controller - hit-testing and the press/drag/release state machine.

Runs once per frame against the live scene owned by the view:
- finds the hovered actor (last actor in list order whose hitbox contains
  the cursor, matching draw order so the topmost square wins)
- promotes a press on an actor to a drag once the cursor has moved more
  than DRAG_THRESHOLD world units
- moves the dragged actor locally every frame (not logged)
- on release emits one 'update' edit; Backspace/Delete emits a 'delete'

Edits are handed to the commit callback at the end of each update, after
the live scene already reflects them.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from petalburg.document.edits import SceneEdit, delete_edit, update_edit
from petalburg.document.patcher import remove_value
from petalburg.edit.camera import Camera
from petalburg.edit.constants import ACTOR_HITBOX_SIZE, DELETE_KEYS, DRAG_THRESHOLD
from petalburg.edit.input_state import LEFT, InputState

IDLE = 'idle'
PRESSED = 'pressed'
DRAGGING = 'dragging'

Point = Tuple[float, float]


@dataclass
class FrameResult:
    """What the controller did during one frame."""
    mouse_capture: bool = False
    hovered_id: Optional[str] = None
    selected_id: Optional[str] = None
    edits: List[SceneEdit] = field(default_factory=list)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hitbox_contains(pos: Any, point: Point, size: float = ACTOR_HITBOX_SIZE) -> bool:
    if not isinstance(pos, (list, tuple)) or len(pos) != 2:
        return False
    return pos[0] <= point[0] <= pos[0] + size and pos[1] <= point[1] <= pos[1] + size


class SelectionController:
    """Manages actor selection and dragging for one canvas."""

    def __init__(self, commit: Optional[Callable[[SceneEdit], None]] = None):
        self._commit = commit
        self.phase = IDLE
        self.active_id: Optional[str] = None
        self.selected_id: Optional[str] = None
        self._offset: Point = (0.0, 0.0)
        self._start_pos: Optional[List[float]] = None
        self._delete_armed = True

    def reset(self) -> None:
        """Forget all interaction state, e.g. after the scene was replaced."""
        self.phase = IDLE
        self.active_id = None
        self.selected_id = None
        self._start_pos = None

    # --- Lookup helpers ---

    @staticmethod
    def _actors(scene: Dict[str, Any]) -> List[Any]:
        actors = scene.get('actors')
        return actors if isinstance(actors, list) else []

    def _find(self, scene: Dict[str, Any], actor_id: Optional[str]) -> Tuple[int, Optional[Dict[str, Any]]]:
        if actor_id is None:
            return -1, None
        for index, actor in enumerate(self._actors(scene)):
            if isinstance(actor, dict) and actor.get('id') == actor_id:
                return index, actor
        return -1, None

    def hit_test(self, scene: Dict[str, Any], point: Point) -> Optional[Dict[str, Any]]:
        """Return the last actor whose hitbox contains the world point."""
        hovered = None
        for actor in self._actors(scene):
            if isinstance(actor, dict) and hitbox_contains(actor.get('pos'), point):
                hovered = actor
        return hovered

    # --- Frame update ---

    def update(self, scene: Dict[str, Any], camera: Camera, input_state: InputState) -> FrameResult:
        edits: List[SceneEdit] = []
        cursor = camera.screen_to_world(input_state.pointer)

        # Selection may point at an actor that an update/undo removed
        if self.selected_id is not None and self._find(scene, self.selected_id)[1] is None:
            self.reset()

        if self.phase == DRAGGING:
            hovered = self._find(scene, self.active_id)[1]
        else:
            hovered = self.hit_test(scene, cursor)

        finished_drag = False
        if self.phase == IDLE:
            if input_state.button == LEFT and input_state.press_frames == 1:
                if hovered is not None:
                    self._begin_press(hovered, cursor)
                else:
                    self.selected_id = None
        elif input_state.button != LEFT:
            finished_drag = self.phase == DRAGGING
            edit = self._release(scene)
            if edit is not None:
                edits.append(edit)
        else:
            self._track(scene, cursor)

        if not finished_drag:
            edit = self._maybe_delete(scene, hovered, input_state)
            if edit is not None:
                edits.append(edit)
                hovered = None
        if not input_state.key_down(*DELETE_KEYS):
            self._delete_armed = True

        for edit in edits:
            if self._commit:
                self._commit(edit)

        return FrameResult(
            mouse_capture=self.selected_id is not None,
            hovered_id=hovered.get('id') if hovered else None,
            selected_id=self.selected_id,
            edits=edits,
        )

    def _begin_press(self, actor: Dict[str, Any], cursor: Point) -> None:
        pos = actor['pos']
        self.phase = PRESSED
        self.active_id = actor.get('id')
        self.selected_id = self.active_id
        self._offset = (pos[0] - cursor[0], pos[1] - cursor[1])
        self._start_pos = list(pos)

    def _track(self, scene: Dict[str, Any], cursor: Point) -> None:
        _, actor = self._find(scene, self.active_id)
        if actor is None:
            self.phase = IDLE
            self.active_id = None
            return

        if self.phase == PRESSED:
            # The offset implied by the current cursor differs from the
            # captured one by exactly the cursor's travel since the press.
            implied = (self._start_pos[0] - cursor[0], self._start_pos[1] - cursor[1])
            moved = math.hypot(implied[0] - self._offset[0], implied[1] - self._offset[1])
            if moved > DRAG_THRESHOLD:
                self.phase = DRAGGING

        if self.phase == DRAGGING:
            actor['pos'] = [
                round_half_up(cursor[0] + self._offset[0]),
                round_half_up(cursor[1] + self._offset[1]),
            ]

    def _release(self, scene: Dict[str, Any]) -> Optional[SceneEdit]:
        edit = None
        if self.phase == DRAGGING:
            index, actor = self._find(scene, self.active_id)
            if actor is not None:
                edit = update_edit(f"actors.{index}", self._start_pos, actor['pos'])
        self.phase = IDLE
        self.active_id = None
        self._start_pos = None
        return edit

    def _maybe_delete(self, scene: Dict[str, Any], hovered: Optional[Dict[str, Any]],
                      input_state: InputState) -> Optional[SceneEdit]:
        if not self._delete_armed or not input_state.key_down(*DELETE_KEYS):
            return None

        target_id = self.selected_id or (hovered.get('id') if hovered else None)
        index, actor = self._find(scene, target_id)
        if actor is None:
            return None

        edit = delete_edit(f"actors.{index}", actor)
        remove_value(scene, f"actors.{index}")
        self._delete_armed = False
        self.reset()
        return edit
