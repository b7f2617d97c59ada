"""Desktop windows and polled input backed by pygame."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .events import (  # noqa: E402
    Event,
    EventDispatcher,
    KeyPressedEvent,
    KeyReleasedEvent,
    KeyTypedEvent,
    MouseButtonPressedEvent,
    MouseButtonReleasedEvent,
    MouseMovedEvent,
    MouseScrolledEvent,
    WindowCloseEvent,
    WindowResizeEvent,
)
from .input import Input  # noqa: E402
from .input_codes import Key, MouseButton  # noqa: E402
from .logs import core_logger  # noqa: E402
from .timing import Timestep  # noqa: E402

EventCallback = Callable[[Event], Any]


@dataclass(frozen=True)
class WindowProps:
    """Title and size a window is created with."""

    title: str = "Project Elixir"
    width: int = 1280
    height: int = 720


@dataclass
class WindowData:
    """Mutable state of a window shared with its event handling."""

    title: str
    width: int
    height: int
    event_callback: EventCallback | None = None


def format_title(title: str, fps: int, frame_time: Timestep | float) -> str:
    """The window caption showing frame time and frames per second."""
    step = frame_time if isinstance(frame_time, Timestep) else Timestep(float(frame_time))
    return f"{title} | Frame time: {step.milliseconds:.3f}ms | FPS: {fps}"


def _constant(*names: str) -> int | None:
    for name in names:
        value = getattr(pygame, name, None)
        if value is not None:
            return int(value)
    return None


_KEY_NAMES: list[tuple[tuple[str, ...], Key]] = [
    (("K_SPACE",), Key.SPACE),
    (("K_QUOTE",), Key.APOSTROPHE),
    (("K_COMMA",), Key.COMMA),
    (("K_MINUS",), Key.MINUS),
    (("K_PERIOD",), Key.PERIOD),
    (("K_SLASH",), Key.SLASH),
    (("K_SEMICOLON",), Key.SEMICOLON),
    (("K_EQUALS",), Key.EQUAL),
    (("K_LEFTBRACKET",), Key.LEFT_BRACKET),
    (("K_BACKSLASH",), Key.BACKSLASH),
    (("K_RIGHTBRACKET",), Key.RIGHT_BRACKET),
    (("K_BACKQUOTE",), Key.GRAVE_ACCENT),
    (("K_ESCAPE",), Key.ESCAPE),
    (("K_RETURN",), Key.ENTER),
    (("K_TAB",), Key.TAB),
    (("K_BACKSPACE",), Key.BACKSPACE),
    (("K_INSERT",), Key.INSERT),
    (("K_DELETE",), Key.DELETE),
    (("K_RIGHT",), Key.RIGHT),
    (("K_LEFT",), Key.LEFT),
    (("K_DOWN",), Key.DOWN),
    (("K_UP",), Key.UP),
    (("K_PAGEUP",), Key.PAGE_UP),
    (("K_PAGEDOWN",), Key.PAGE_DOWN),
    (("K_HOME",), Key.HOME),
    (("K_END",), Key.END),
    (("K_CAPSLOCK",), Key.CAPS_LOCK),
    (("K_SCROLLLOCK", "K_SCROLLOCK"), Key.SCROLL_LOCK),
    (("K_NUMLOCKCLEAR", "K_NUMLOCK"), Key.NUM_LOCK),
    (("K_PRINTSCREEN", "K_PRINT"), Key.PRINT_SCREEN),
    (("K_PAUSE",), Key.PAUSE),
    (("K_KP_PERIOD",), Key.KP_DECIMAL),
    (("K_KP_DIVIDE",), Key.KP_DIVIDE),
    (("K_KP_MULTIPLY",), Key.KP_MULTIPLY),
    (("K_KP_MINUS",), Key.KP_SUBTRACT),
    (("K_KP_PLUS",), Key.KP_ADD),
    (("K_KP_ENTER",), Key.KP_ENTER),
    (("K_KP_EQUALS",), Key.KP_EQUAL),
    (("K_LSHIFT",), Key.LEFT_SHIFT),
    (("K_LCTRL",), Key.LEFT_CONTROL),
    (("K_LALT",), Key.LEFT_ALT),
    (("K_LGUI", "K_LSUPER", "K_LMETA"), Key.LEFT_SUPER),
    (("K_RSHIFT",), Key.RIGHT_SHIFT),
    (("K_RCTRL",), Key.RIGHT_CONTROL),
    (("K_RALT",), Key.RIGHT_ALT),
    (("K_RGUI", "K_RSUPER", "K_RMETA"), Key.RIGHT_SUPER),
    (("K_MENU",), Key.MENU),
]
_KEY_NAMES += [((f"K_{d}",), Key[f"DIGIT_{d}"]) for d in range(10)]
_KEY_NAMES += [((f"K_{c.lower()}",), Key[c]) for c in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"]
_KEY_NAMES += [((f"K_F{n}",), Key[f"F{n}"]) for n in range(1, 26)]
_KEY_NAMES += [((f"K_KP{d}", f"K_KP_{d}"), Key[f"KP_{d}"]) for d in range(10)]

_KEY_TABLE: dict[int, Key] = {}
for _names, _key in _KEY_NAMES:
    _code = _constant(*_names)
    if _code is not None:
        _KEY_TABLE.setdefault(_code, _key)


def translate_key(pygame_key: int) -> Key | None:
    """The engine key code for a pygame key, or None if it has none."""
    return _KEY_TABLE.get(pygame_key)


def _translate_mouse_button(pygame_button: int) -> int | None:
    if pygame_button == 1:
        return MouseButton.LEFT
    if pygame_button == 2:
        return MouseButton.MIDDLE
    if pygame_button == 3:
        return MouseButton.RIGHT
    if 6 <= pygame_button <= 10:
        return pygame_button - 3
    return None


class Window(ABC):
    """A desktop window that turns system events into engine events."""

    @abstractmethod
    def update(self) -> None: ...

    @abstractmethod
    def set_title(self, title: str) -> None: ...

    @abstractmethod
    def set_event_callback(self, callback: EventCallback) -> None: ...

    @abstractmethod
    def show_fps_and_frame_time(self, fps: int, frame_time: Timestep) -> None: ...

    @property
    @abstractmethod
    def width(self) -> int: ...

    @property
    @abstractmethod
    def height(self) -> int: ...

    @property
    @abstractmethod
    def native_window(self) -> Any: ...

    def close(self) -> None:
        """Release the window; the default does nothing."""

    @staticmethod
    def create(props: WindowProps | None = None) -> Window:
        """Create the platform window."""
        return PygameWindow(props)


class PygameWindow(Window):
    """A window backed by the pygame display."""

    def __init__(self, props: WindowProps | None = None) -> None:
        props = props or WindowProps()
        self._data = WindowData(props.title, props.width, props.height)
        self._observers: list[EventCallback] = []
        self._held_keys: set[int] = set()
        self._closed = False

        core_logger().info(
            "Creating window %s (%d, %d).", props.title, props.width, props.height
        )

        if not pygame.display.get_init():
            pygame.display.init()
        self._surface = pygame.display.set_mode(
            (self._data.width, self._data.height), pygame.RESIZABLE
        )
        pygame.display.set_caption(self._data.title)

    def _add_observer(self, observer: EventCallback) -> None:
        self._observers.append(observer)

    def update(self) -> None:
        """Process every pending system event."""
        if self._closed:
            return
        for event in pygame.event.get():
            self.handle(event)

    def set_title(self, title: str) -> None:
        self._data.title = title
        if not self._closed:
            pygame.display.set_caption(title)

    def set_event_callback(self, callback: EventCallback) -> None:
        self._data.event_callback = callback

    def show_fps_and_frame_time(self, fps: int, frame_time: Timestep) -> None:
        if not self._closed:
            pygame.display.set_caption(format_title(self._data.title, fps, frame_time))

    @property
    def width(self) -> int:
        return self._data.width

    @property
    def height(self) -> int:
        return self._data.height

    @property
    def native_window(self) -> Any:
        return self._surface

    def _translate(self, event: Any) -> list[Event]:
        kind = event.type
        if kind == pygame.VIDEORESIZE:
            self._data.width = int(event.w)
            self._data.height = int(event.h)
            return [WindowResizeEvent(self._data.width, self._data.height)]
        if kind == pygame.QUIT:
            return [WindowCloseEvent()]
        if kind == pygame.KEYDOWN:
            key = translate_key(event.key)
            if key is None:
                return []
            repeat = 1 if key in self._held_keys else 0
            self._held_keys.add(key)
            return [KeyPressedEvent(key, repeat)]
        if kind == pygame.KEYUP:
            key = translate_key(event.key)
            if key is None:
                return []
            self._held_keys.discard(key)
            return [KeyReleasedEvent(key)]
        if kind == pygame.TEXTINPUT:
            return [KeyTypedEvent(ord(ch)) for ch in event.text]
        if kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            button = _translate_mouse_button(event.button)
            if button is None:
                return []
            if kind == pygame.MOUSEBUTTONDOWN:
                return [MouseButtonPressedEvent(button)]
            return [MouseButtonReleasedEvent(button)]
        if kind == pygame.MOUSEWHEEL:
            return [MouseScrolledEvent(float(event.x), float(event.y))]
        if kind == pygame.MOUSEMOTION:
            x, y = event.pos
            return [MouseMovedEvent(float(x), float(y))]
        return []

    def handle(self, event: Any) -> list[Event]:
        """Translate one pygame event and deliver the engine events it yields."""
        translated = self._translate(event)
        for engine_event in translated:
            for observer in self._observers:
                observer(engine_event)
            if self._data.event_callback is not None:
                self._data.event_callback(engine_event)
        return translated

    def close(self) -> None:
        """Close the display; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        pygame.display.quit()


class PygameInput(Input):
    """Input state fed by a window's events, with gamepads read from pygame."""

    def __init__(self, window: PygameWindow | None = None) -> None:
        super().__init__()
        self._keys: set[int] = set()
        self._buttons: set[int] = set()
        self._joysticks: dict[int, Any] = {}
        if window is not None:
            window._add_observer(self.on_event)

    def on_event(self, event: Event) -> None:
        """Update key, button and cursor state from an engine event."""
        dispatcher = EventDispatcher(event)

        def pressed(ev: KeyPressedEvent) -> bool:
            self._keys.add(ev.key_code)
            return False

        def released(ev: KeyReleasedEvent) -> bool:
            self._keys.discard(ev.key_code)
            return False

        def button_down(ev: MouseButtonPressedEvent) -> bool:
            self._buttons.add(ev.button)
            return False

        def button_up(ev: MouseButtonReleasedEvent) -> bool:
            self._buttons.discard(ev.button)
            return False

        def moved(ev: MouseMovedEvent) -> bool:
            self.on_mouse_moved(ev)
            return False

        dispatcher.dispatch(KeyPressedEvent, pressed)
        dispatcher.dispatch(KeyReleasedEvent, released)
        dispatcher.dispatch(MouseButtonPressedEvent, button_down)
        dispatcher.dispatch(MouseButtonReleasedEvent, button_up)
        dispatcher.dispatch(MouseMovedEvent, moved)

    def is_key_pressed(self, key_code: int) -> bool:
        return key_code in self._keys

    def is_mouse_button_pressed(self, button: int) -> bool:
        return button in self._buttons

    def _joystick(self, index: int) -> Any:
        if not pygame.joystick.get_init():
            pygame.joystick.init()
        if not 0 <= index < pygame.joystick.get_count():
            return None
        joystick = self._joysticks.get(index)
        if joystick is None:
            joystick = pygame.joystick.Joystick(index)
            self._joysticks[index] = joystick
        return joystick

    def is_gamepad_connected(self, gamepad_index: int) -> bool:
        return self._joystick(gamepad_index) is not None

    def is_gamepad_button_pressed(self, gamepad_index: int, button: int) -> bool:
        joystick = self._joystick(gamepad_index)
        if joystick is None or not 0 <= button < joystick.get_numbuttons():
            return False
        return joystick.get_button(button) == 1

    def gamepad_axis(self, gamepad_index: int, axis: int) -> float:
        joystick = self._joystick(gamepad_index)
        if joystick is None or not 0 <= axis < joystick.get_numaxes():
            return 0.0
        return float(joystick.get_axis(axis))

    def gamepad_name(self, gamepad_index: int) -> str | None:
        joystick = self._joystick(gamepad_index)
        return None if joystick is None else joystick.get_name()