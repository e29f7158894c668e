"""
InputState - per-frame aggregation of pointer, button, wheel and key events.

Raw events (from NiceGUI) update the state as they arrive; the frame loop
calls begin_frame() before reading it and end_frame() after.
"""

from typing import Dict, Optional, Tuple

from petalburg.edit.constants import SCALE_RATE, WHEEL_DECAY, WHEEL_SNAP

LEFT = 'left'
MIDDLE = 'middle'
RIGHT = 'right'

# DOM MouseEvent.button codes
_BUTTON_CODES = {0: LEFT, 1: MIDDLE, 2: RIGHT}

# DOM MouseEvent.buttons bits, in priority order
_BUTTON_BITS = ((1, LEFT), (4, MIDDLE), (2, RIGHT))


def button_from_code(code: int) -> Optional[str]:
    return _BUTTON_CODES.get(code)


class InputState:
    """
    Per-frame input snapshot.

    - button: 'left' | 'middle' | 'right' | None, exclusive
    - press_frames: 1 on the first frame a button is held, then 2, 3, ...
    - drag: True from the second held frame onward
    - wheel: accumulated -deltaY, decays every frame
    - keys: key name -> 1 (down) or 0 (up), last event wins
    """

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.button: Optional[str] = None
        self.press_frames = 0
        self.wheel = 0.0
        self.drag = False
        self.keys: Dict[str, int] = {}
        self._last_x = 0.0
        self._last_y = 0.0

    @property
    def pointer(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def pointer_delta(self) -> Tuple[float, float]:
        """Pointer movement since the end of the previous frame."""
        return (self.x - self._last_x, self.y - self._last_y)

    @property
    def just_pressed(self) -> bool:
        return self.button is not None and self.press_frames == 1

    # --- Raw events ---

    def move(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def press(self, button: Optional[str], x: Optional[float] = None, y: Optional[float] = None) -> None:
        if x is not None and y is not None:
            self.move(x, y)
        if button is None:
            return
        self.button = button
        self.press_frames = 0

    def release(self, button: Optional[str] = None, x: Optional[float] = None, y: Optional[float] = None) -> None:
        if x is not None and y is not None:
            self.move(x, y)
        self.button = None
        self.press_frames = 0

    def set_buttons(self, mask: int) -> None:
        """Reconcile with a DOM 'buttons' bitmask (left > middle > right)."""
        held = None
        for bit, name in _BUTTON_BITS:
            if mask & bit:
                held = name
                break

        if held is None:
            if self.button is not None:
                self.release()
        elif held != self.button:
            self.press(held)

    def scroll(self, delta_y: float) -> None:
        self.wheel += -delta_y

    def key(self, name: str, down: bool) -> None:
        self.keys[name] = 1 if down else 0

    def key_down(self, *names: str) -> bool:
        return any(self.keys.get(name) == 1 for name in names)

    # --- Frame hooks ---

    def begin_frame(self) -> None:
        if self.button is not None:
            self.press_frames += 1
        self.drag = self.button is not None and self.press_frames >= 2

    def zoom_multiplier(self, scale_rate: float = SCALE_RATE) -> Optional[float]:
        """Zoom step for this frame, or None when the wheel is idle."""
        if self.wheel == 0:
            return None
        return 1 / scale_rate if self.wheel < 0 else scale_rate

    def end_frame(self) -> None:
        if self.wheel != 0:
            self.wheel *= WHEEL_DECAY
            if abs(self.wheel) < WHEEL_SNAP:
                self.wheel = 0.0
        self._last_x = self.x
        self._last_y = self.y
