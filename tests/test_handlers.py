from types import SimpleNamespace

from petalburg.document.channel import LocalChannel
from petalburg.edit.canvas import SceneCanvas
from petalburg.edit.handlers import setup_canvas_handlers
from petalburg.edit.input_state import LEFT
from petalburg.view import SceneView


def _canvas():
    view = SceneView(LocalChannel('view'))
    view.scene = {'size': [100, 100], 'actors': [], 'layers': []}
    view.editable = True
    return SceneCanvas(view)


def _key(name, keydown=True, ctrl=False, shift=False):
    return SimpleNamespace(
        key=SimpleNamespace(name=name),
        action=SimpleNamespace(keydown=keydown, keyup=not keydown),
        modifiers=SimpleNamespace(ctrl=ctrl, shift=shift),
    )


def test_mouse_events_update_input_state():
    canvas = _canvas()
    handlers = setup_canvas_handlers(canvas, lambda svg: None)

    handlers['handle_mouse'](SimpleNamespace(type='mousedown', image_x=4, image_y=6, button=0, buttons=1))
    assert canvas.input.button == LEFT
    assert canvas.input.pointer == (4, 6)

    handlers['handle_mouse'](SimpleNamespace(type='mousemove', image_x=9, image_y=9, button=0, buttons=1))
    assert canvas.input.pointer == (9, 9)
    assert canvas.input.button == LEFT

    handlers['handle_mouse'](SimpleNamespace(type='mouseup', image_x=9, image_y=9, button=0, buttons=0))
    assert canvas.input.button is None


def test_mousemove_without_buttons_releases_stuck_button():
    canvas = _canvas()
    handlers = setup_canvas_handlers(canvas, lambda svg: None)
    canvas.input.press(LEFT, 0, 0)
    handlers['handle_mouse'](SimpleNamespace(type='mousemove', image_x=1, image_y=1, button=0, buttons=0))
    assert canvas.input.button is None


def test_wheel_event_accumulates():
    canvas = _canvas()
    handlers = setup_canvas_handlers(canvas, lambda svg: None)
    handlers['handle_wheel'](SimpleNamespace(args={'deltaY': 40}))
    assert canvas.input.wheel == -40


def test_shortcuts_are_forwarded_instead_of_tracked():
    canvas = _canvas()
    actions = []
    handlers = setup_canvas_handlers(canvas, lambda svg: None, on_shortcut=actions.append)

    handlers['handle_keyboard'](_key('s', ctrl=True))
    handlers['handle_keyboard'](_key('z', ctrl=True))
    handlers['handle_keyboard'](_key('Z', ctrl=True, shift=True))
    handlers['handle_keyboard'](_key('y', ctrl=True))

    assert actions == ['save', 'undo', 'redo', 'redo']
    assert canvas.input.keys == {}


def test_plain_keys_update_key_state():
    canvas = _canvas()
    handlers = setup_canvas_handlers(canvas, lambda svg: None)
    handlers['handle_keyboard'](_key('Delete'))
    assert canvas.input.key_down('Delete')
    handlers['handle_keyboard'](_key('Delete', keydown=False))
    assert not canvas.input.key_down('Delete')


def test_tick_renders_only_when_svg_changes():
    canvas = _canvas()
    frames = []
    handlers = setup_canvas_handlers(canvas, frames.append)

    handlers['handle_tick']()
    handlers['handle_tick']()
    assert len(frames) == 1

    canvas.input.scroll(-50)
    handlers['handle_tick']()
    assert len(frames) == 2
