"""
Canvas Handlers - NiceGUI event wiring for the scene canvas.

Raw browser events only update InputState; all interpretation happens in
SceneCanvas.tick(), driven by a ui.timer.
"""

from typing import Any, Callable, Dict, Optional

from nicegui import ui

from petalburg.edit.canvas import SceneCanvas
from petalburg.edit.input_state import button_from_code

CANVAS_MOUSE_EVENTS = ['mousedown', 'mouseup', 'mousemove']
WHEEL_EVENT_KEYS = ['deltaY']


def setup_canvas_handlers(
    canvas: SceneCanvas,
    render: Callable[[str], None],
    on_shortcut: Optional[Callable[[str], Any]] = None,
) -> Dict[str, Callable]:
    """
    Set up the canvas event handlers.

    Args:
        canvas: SceneCanvas for the current view
        render: Receives the SVG for each frame that changed
        on_shortcut: Called with 'save', 'undo' or 'redo' for editor shortcuts;
            its result is returned so NiceGUI awaits coroutine handlers

    Returns:
        Dict with handler functions for binding to UI events
    """
    last_svg = {'value': None}

    def handle_mouse(e):
        """Feed interactive_image mouse events into InputState."""
        state = canvas.input
        x, y = e.image_x, e.image_y
        if e.type == 'mousedown':
            state.press(button_from_code(e.button), x, y)
        elif e.type == 'mouseup':
            state.release(button_from_code(e.button), x, y)
        else:
            state.move(x, y)
            state.set_buttons(getattr(e, 'buttons', 0) or 0)

    def handle_wheel(e):
        args = e.args if hasattr(e, 'args') else e
        if isinstance(args, dict):
            canvas.input.scroll(float(args.get('deltaY') or 0))

    def handle_keyboard(e):
        """Track key state; Ctrl shortcuts are forwarded instead."""
        name = getattr(e.key, 'name', str(e.key))
        if e.action.keydown and e.modifiers.ctrl and on_shortcut is not None:
            lowered = name.lower()
            if lowered == 's':
                return on_shortcut('save')
            if lowered == 'z':
                return on_shortcut('redo' if e.modifiers.shift else 'undo')
            if lowered == 'y':
                return on_shortcut('redo')

        if e.action.keydown:
            canvas.input.key(name, True)
        elif e.action.keyup:
            canvas.input.key(name, False)

    def handle_tick():
        """One animation frame: update, then push the SVG if it changed."""
        canvas.tick()
        svg = canvas.render()
        if svg != last_svg['value']:
            last_svg['value'] = svg
            render(svg)

    return {
        'handle_mouse': handle_mouse,
        'handle_wheel': handle_wheel,
        'handle_keyboard': handle_keyboard,
        'handle_tick': handle_tick,
    }


def create_canvas_element(canvas: SceneCanvas, handlers: Dict[str, Callable]):
    """Create the interactive image the canvas draws into."""
    image = ui.interactive_image(
        size=(canvas.width, canvas.height),
        on_mouse=handlers['handle_mouse'],
        events=CANVAS_MOUSE_EVENTS,
        cross=False,
    )
    image.classes('bg-slate-900 rounded')
    image.style(f'width: {canvas.width}px; height: {canvas.height}px; overscroll-behavior: contain;')
    image.on('wheel', handlers['handle_wheel'], WHEEL_EVENT_KEYS)
    return image
