import pytest

from petalburg.edit.input_state import LEFT, MIDDLE, RIGHT, InputState, button_from_code


def test_press_frames_count_up_and_drag_starts_on_second_frame():
    state = InputState()
    state.press(LEFT, 5, 5)

    state.begin_frame()
    assert state.press_frames == 1 and state.just_pressed and not state.drag
    state.end_frame()

    state.begin_frame()
    assert state.press_frames == 2 and state.drag

    state.release(LEFT)
    state.begin_frame()
    assert state.button is None and not state.drag


def test_buttons_are_exclusive():
    state = InputState()
    state.press(LEFT)
    state.press(RIGHT)
    assert state.button == RIGHT


def test_set_buttons_prefers_left_then_middle():
    state = InputState()
    state.set_buttons(1 | 2 | 4)
    assert state.button == LEFT
    state.set_buttons(2 | 4)
    assert state.button == MIDDLE
    state.set_buttons(0)
    assert state.button is None


def test_button_codes():
    assert button_from_code(0) == LEFT
    assert button_from_code(1) == MIDDLE
    assert button_from_code(2) == RIGHT
    assert button_from_code(7) is None


def test_wheel_decays_and_snaps_to_zero():
    state = InputState()
    state.scroll(10)
    assert state.wheel == -10
    assert state.zoom_multiplier(1.02) == pytest.approx(1 / 1.02)

    state.end_frame()
    assert state.wheel == pytest.approx(-8)

    for _ in range(20):
        state.end_frame()
    assert state.wheel == 0
    assert state.zoom_multiplier(1.02) is None


def test_scrolling_up_zooms_in():
    state = InputState()
    state.scroll(-3)
    assert state.zoom_multiplier(1.02) == 1.02


def test_pointer_delta_is_relative_to_last_frame():
    state = InputState()
    state.move(10, 10)
    state.end_frame()
    state.move(13, 6)
    assert state.pointer_delta == (3, -4)


def test_key_state_last_event_wins():
    state = InputState()
    state.key('Delete', True)
    assert state.key_down('Backspace', 'Delete')
    state.key('Delete', False)
    assert not state.key_down('Backspace', 'Delete')
    assert state.keys == {'Delete': 0}
