"""
Shared constants for the scene canvas.

Hit-testing, rendering and the camera all read these, so the drawn actor
squares and their hitboxes always agree.
"""

# Actors are drawn and hit-tested as fixed squares anchored at their pos
ACTOR_HITBOX_SIZE = 20

# World units the cursor must travel before a press becomes a drag
DRAG_THRESHOLD = 2.0

# Camera zoom bounds
MIN_SCALE = 0.25
MAX_SCALE = 2.5

# Zoom multiplier applied per frame while the wheel accumulator is non-zero
SCALE_RATE = 1.02

# Wheel accumulator decay per frame; values below the snap go to zero
WHEEL_DECAY = 0.8
WHEEL_SNAP = 1.0

# Grid spacing in world units
TILE_SIZE = 36

# Canvas size in screen pixels
CANVAS_WIDTH = 960
CANVAS_HEIGHT = 600

DELETE_KEYS = ('Backspace', 'Delete')
