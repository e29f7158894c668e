"""
Camera - screen <-> world affine transform for the scene canvas.

screen = world * scale + offset
world  = (screen - offset) / scale
"""

from typing import Tuple

from petalburg.edit.constants import MAX_SCALE, MIN_SCALE

Point = Tuple[float, float]


class Camera:
    """Pan/zoom state with clamped, pivot-preserving zoom."""

    def __init__(self, offset: Point = (0.0, 0.0), scale: float = 1.0,
                 min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE):
        self.x, self.y = offset
        self.scale = scale
        self.min_scale = min_scale
        self.max_scale = max_scale

    @property
    def offset(self) -> Point:
        return (self.x, self.y)

    def world_to_screen(self, point: Point) -> Point:
        return (point[0] * self.scale + self.x, point[1] * self.scale + self.y)

    def screen_to_world(self, point: Point) -> Point:
        inv = 1 / self.scale
        return ((point[0] - self.x) * inv, (point[1] - self.y) * inv)

    def zoom_at(self, pivot: Point, multiplier: float) -> bool:
        """
        Zoom by multiplier around a screen-space pivot.

        The world point under the pivot stays put on screen. Returns False
        (and changes nothing) when the clamped scale would not change.
        """
        new_scale = max(self.min_scale, min(self.max_scale, self.scale * multiplier))
        if new_scale == self.scale:
            return False

        px, py = pivot
        self.scale = new_scale
        self.x = px - (px - self.x) * multiplier
        self.y = py - (py - self.y) * multiplier
        return True

    def pan(self, delta: Point) -> None:
        self.x += delta[0]
        self.y += delta[1]

    def svg_transform(self) -> str:
        return f"matrix({self.scale:g} 0 0 {self.scale:g} {self.x:g} {self.y:g})"

    def visible_world_rect(self, width: float, height: float) -> Tuple[float, float, float, float]:
        """World-space (left, top, right, bottom) covered by a width x height screen."""
        left, top = self.screen_to_world((0, 0))
        right, bottom = self.screen_to_world((width, height))
        return left, top, right, bottom
