import logging

import pytest

from elixir_engine.application import Application, ApplicationExistsError, Dissolve
from elixir_engine.events import MouseMovedEvent, WindowCloseEvent, WindowResizeEvent
from elixir_engine.input import Input, InputManager
from elixir_engine.input_codes import Key
from elixir_engine.logs import client_logger
from elixir_engine.timing import Timestep
from elixir_engine.window import Window


class FakeWindow(Window):
    def __init__(self, width=800, height=600):
        self._width = width
        self._height = height
        self.callback = None
        self.titles = []
        self.updates = 0
        self.pending = []
        self.closed = False

    def update(self):
        self.updates += 1
        events, self.pending = self.pending, []
        for event in events:
            self.callback(event)

    def set_title(self, title):
        self.titles.append(title)

    def set_event_callback(self, callback):
        self.callback = callback

    def show_fps_and_frame_time(self, fps, frame_time):
        pass

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def native_window(self):
        return None

    def close(self):
        self.closed = True


class FakeInput(Input):
    def __init__(self):
        super().__init__()
        self.keys = set()
        self.connected = False
        self.axis = 0.0
        self.name = "Pad"

    def is_key_pressed(self, key_code):
        return key_code in self.keys

    def is_mouse_button_pressed(self, button):
        return False

    def is_gamepad_connected(self, gamepad_index):
        return self.connected

    def is_gamepad_button_pressed(self, gamepad_index, button):
        return False

    def gamepad_axis(self, gamepad_index, axis):
        return self.axis

    def gamepad_name(self, gamepad_index):
        return self.name


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class Recording(Application):
    def __init__(self, window):
        self.frames = []
        super().__init__(window)

    def on_gui(self, frame_time):
        self.frames.append(frame_time)


@pytest.fixture
def fake_input():
    inp = FakeInput()
    InputManager.set_input(inp)
    yield inp
    InputManager.set_input(None)


@pytest.fixture
def app(fake_input):
    application = Recording(FakeWindow())
    yield application
    application.close()


def test_singleton_and_get(app):
    assert Application.get() is app
    with pytest.raises(ApplicationExistsError):
        Application(FakeWindow())


def test_close_allows_new_application(fake_input):
    first = Application(FakeWindow())
    window = first.window
    first.close()
    assert window.closed is True
    second = Application(FakeWindow())
    try:
        assert Application.get() is second
    finally:
        second.close()


def test_event_callback_is_installed(app):
    assert app.window.callback == app.on_event
    event = WindowCloseEvent()
    app.window.callback(event)
    assert app.running is False
    assert event.handled is True


def test_close_event_stops_running(app):
    event = WindowCloseEvent()
    app.on_event(event)
    assert app.running is False
    assert event.handled is True


def test_resize_to_zero_minimizes(app):
    event = WindowResizeEvent(0, 100)
    app.on_event(event)
    assert app.minimized is True
    assert event.handled is False
    app.on_event(WindowResizeEvent(100, 100))
    assert app.minimized is False


def test_step_calls_gui_when_not_minimized(app):
    app.step()
    assert len(app.frames) == 1
    assert isinstance(app.frames[0], Timestep)
    app.on_event(WindowResizeEvent(0, 0))
    app.step()
    assert len(app.frames) == 1
    assert app.window.updates == 2


def test_escape_stops_loop(app, fake_input):
    assert app.running is True
    fake_input.keys.add(Key.ESCAPE)
    assert InputManager.is_key_pressed(Key.ESCAPE) is True
    app.step()
    assert app.running is False
    assert app.minimized is False
    assert len(app.frames) == 1
    assert app.window.updates == 1


def test_run_ends_on_close_event(app):
    app.window.pending.append(WindowCloseEvent())
    app.run()
    assert app.running is False
    assert app.window.updates == 1


def test_mouse_moved_reaches_input_manager(app):
    app.on_event(MouseMovedEvent(7, 9))
    assert InputManager.mouse_position() == (7.0, 9.0)


def test_dissolve_sets_title_and_logs_axis(fake_input):
    window = FakeWindow()
    dissolve = Dissolve(window)
    logger = client_logger()
    handler = ListHandler()
    old_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        assert window.titles == ["Dissolve"]
        dissolve.on_gui(Timestep(0.1))
        assert handler.messages == []
        fake_input.connected = True
        fake_input.axis = 0.5
        dissolve.on_gui(Timestep(0.1))
        assert handler.messages == ["Axis Y (0.5) in Pad"]
    finally:
        logger.removeHandler(handler)
        logger.setLevel(old_level)
        dissolve.close()
    assert window.closed is True