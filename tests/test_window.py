import pygame
import pytest

from elixir_engine.events import (
    KeyPressedEvent,
    KeyReleasedEvent,
    KeyTypedEvent,
    MouseButtonPressedEvent,
    MouseMovedEvent,
    MouseScrolledEvent,
    WindowCloseEvent,
    WindowResizeEvent,
)
from elixir_engine.input_codes import Key, MouseButton
from elixir_engine.timing import Timestep
from elixir_engine.window import (
    PygameInput,
    PygameWindow,
    WindowData,
    WindowProps,
    format_title,
    translate_key,
)


@pytest.fixture
def window(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    win = PygameWindow(WindowProps("Test", 320, 240))
    yield win
    win.close()


def test_window_props_defaults():
    props = WindowProps()
    assert (props.title, props.width, props.height) == ("Project Elixir", 1280, 720)


def test_window_data_holds_callback():
    data = WindowData("t", 1, 2)
    assert data.event_callback is None
    assert (data.title, data.width, data.height) == ("t", 1, 2)


def test_format_title():
    assert format_title("Game", 60, Timestep(0.5)) == "Game | Frame time: 500.000ms | FPS: 60"


def test_translate_key_letters_and_specials():
    assert translate_key(pygame.K_a) == Key.A
    assert translate_key(pygame.K_z) == Key.Z
    assert translate_key(pygame.K_ESCAPE) == Key.ESCAPE
    assert translate_key(pygame.K_5) == Key.DIGIT_5
    assert translate_key(-1) is None


def test_size_from_props(window):
    assert (window.width, window.height) == (320, 240)


def test_key_press_repeat_and_release(window):
    received = []
    window.set_event_callback(received.append)
    first = window.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, mod=0))
    second = window.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, mod=0))
    third = window.handle(pygame.event.Event(pygame.KEYUP, key=pygame.K_a, mod=0))
    assert isinstance(first[0], KeyPressedEvent) and first[0].repeat_count == 0
    assert isinstance(second[0], KeyPressedEvent) and second[0].repeat_count == 1
    assert isinstance(third[0], KeyReleasedEvent) and third[0].key_code == Key.A
    assert received == first + second + third


def test_resize_updates_size(window):
    events = window.handle(pygame.event.Event(pygame.VIDEORESIZE, w=640, h=480, size=(640, 480)))
    assert isinstance(events[0], WindowResizeEvent)
    assert (events[0].width, events[0].height) == (640, 480)
    assert (window.width, window.height) == (640, 480)


def test_quit_becomes_close_event(window):
    events = window.handle(pygame.event.Event(pygame.QUIT))
    assert len(events) == 1 and isinstance(events[0], WindowCloseEvent)


def test_mouse_events(window):
    moved = window.handle(pygame.event.Event(pygame.MOUSEMOTION, pos=(10, 20), rel=(0, 0), buttons=(0, 0, 0)))
    assert isinstance(moved[0], MouseMovedEvent) and moved[0].position == (10.0, 20.0)
    pressed = window.handle(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0)))
    assert isinstance(pressed[0], MouseButtonPressedEvent)
    assert pressed[0].button == MouseButton.RIGHT
    scrolled = window.handle(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1))
    assert isinstance(scrolled[0], MouseScrolledEvent)
    assert (scrolled[0].x_offset, scrolled[0].y_offset) == (0.0, 1.0)


def test_text_input_types_each_character(window):
    events = window.handle(pygame.event.Event(pygame.TEXTINPUT, text="ab"))
    assert all(isinstance(e, KeyTypedEvent) for e in events)
    assert [e.key_code for e in events] == [ord("a"), ord("b")]


def test_set_title_and_fps_caption(window):
    window.set_title("Renamed")
    assert pygame.display.get_caption()[0] == "Renamed"
    window.show_fps_and_frame_time(30, Timestep(0.25))
    assert pygame.display.get_caption()[0] == format_title("Renamed", 30, Timestep(0.25))


def test_input_tracks_window_events(window):
    inp = PygameInput(window)
    window.handle(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w, mod=0))
    window.handle(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    window.handle(pygame.event.Event(pygame.MOUSEMOTION, pos=(3, 4), rel=(0, 0), buttons=(0, 0, 0)))
    assert inp.is_key_pressed(Key.W)
    assert inp.is_mouse_button_pressed(MouseButton.LEFT)
    assert inp.mouse_position() == (3.0, 4.0)
    window.handle(pygame.event.Event(pygame.KEYUP, key=pygame.K_w, mod=0))
    window.handle(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(0, 0)))
    assert not inp.is_key_pressed(Key.W)
    assert not inp.is_mouse_button_pressed(MouseButton.LEFT)


def test_input_unconnected_gamepad():
    inp = PygameInput()
    assert inp.is_gamepad_connected(15) is False
    assert inp.gamepad_axis(15, 1) == 0.0
    assert inp.gamepad_name(15) is None
    assert inp.is_gamepad_button_pressed(15, 0) is False