import pytest

from elixir_engine.events import KeyPressedEvent, MouseMovedEvent
from elixir_engine.input import Input, InputManager, InputNotInitializedError
from elixir_engine.input_codes import GamepadAxis, GamepadButton, Joystick, Key, MouseButton


class FakeInput(Input):
    def __init__(self):
        super().__init__()
        self.keys = set()
        self.buttons = set()
        self.pads = {}

    def is_key_pressed(self, key_code):
        return key_code in self.keys

    def is_mouse_button_pressed(self, button):
        return button in self.buttons

    def is_gamepad_connected(self, gamepad_index):
        return gamepad_index in self.pads

    def is_gamepad_button_pressed(self, gamepad_index, button):
        pad = self.pads.get(gamepad_index)
        return bool(pad) and button in pad["buttons"]

    def gamepad_axis(self, gamepad_index, axis):
        pad = self.pads.get(gamepad_index)
        if not pad or axis >= len(pad["axes"]):
            return 0.0
        return pad["axes"][axis]

    def gamepad_name(self, gamepad_index):
        pad = self.pads.get(gamepad_index)
        return pad["name"] if pad else None


@pytest.fixture
def fake():
    backend = FakeInput()
    InputManager.set_input(backend)
    yield backend
    InputManager.set_input(None)


def test_input_is_abstract():
    with pytest.raises(TypeError):
        Input()


def test_queries_without_backend_raise():
    InputManager.set_input(None)
    with pytest.raises(InputNotInitializedError):
        InputManager.is_key_pressed(Key.ESCAPE)
    with pytest.raises(InputNotInitializedError):
        InputManager.mouse_position()
    with pytest.raises(InputNotInitializedError):
        InputManager.input()


def test_input_returns_installed_backend(fake):
    assert InputManager.input() is fake


def test_key_and_mouse_queries(fake):
    fake.keys.add(Key.ESCAPE)
    fake.buttons.add(MouseButton.LEFT)
    assert InputManager.is_key_pressed(Key.ESCAPE) is True
    assert InputManager.is_key_pressed(Key.A) is False
    assert InputManager.is_mouse_button_pressed(MouseButton.LEFT) is True
    assert InputManager.is_mouse_button_pressed(MouseButton.RIGHT) is False


def test_mouse_position_defaults_to_origin(fake):
    assert InputManager.mouse_position() == (0.0, 0.0)


def test_mouse_moved_event_updates_position(fake):
    event = MouseMovedEvent(12.5, 40.0)
    InputManager.on_event(event)
    assert InputManager.mouse_position() == (12.5, 40.0)
    assert InputManager.mouse_x() == 12.5
    assert InputManager.mouse_y() == 40.0
    assert event.handled is True


def test_other_events_are_ignored(fake):
    event = KeyPressedEvent(Key.A, 0)
    InputManager.on_event(event)
    assert event.handled is False
    assert InputManager.mouse_position() == (0.0, 0.0)


def test_non_mouse_event_without_backend_is_ignored():
    InputManager.set_input(None)
    event = KeyPressedEvent(Key.A, 0)
    InputManager.on_event(event)
    assert event.handled is False


def test_gamepad_queries(fake):
    fake.pads[Joystick.JOYSTICK_1] = {
        "buttons": {GamepadButton.A},
        "axes": [0.0, -0.5],
        "name": "Test Pad",
    }
    assert InputManager.is_gamepad_connected(Joystick.JOYSTICK_1) is True
    assert InputManager.is_gamepad_connected(Joystick.JOYSTICK_2) is False
    assert InputManager.is_gamepad_button_pressed(Joystick.JOYSTICK_1, GamepadButton.CROSS) is True
    assert InputManager.is_gamepad_button_pressed(Joystick.JOYSTICK_1, GamepadButton.B) is False
    assert InputManager.gamepad_axis(Joystick.JOYSTICK_1, GamepadAxis.LEFT_Y) == -0.5
    assert InputManager.gamepad_axis(Joystick.JOYSTICK_1, GamepadAxis.RIGHT_TRIGGER) == 0.0
    assert InputManager.gamepad_name(Joystick.JOYSTICK_1) == "Test Pad"
    assert InputManager.gamepad_name(Joystick.JOYSTICK_2) is None