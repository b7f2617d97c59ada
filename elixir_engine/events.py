"""Blocking engine events and a dispatcher that routes them by type."""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Callable, ClassVar, TypeVar


class EventType(Enum):
    """The concrete kind of an event; the value is its display name."""

    NONE = "None"
    WINDOW_CLOSE = "WindowClose"
    WINDOW_RESIZE = "WindowResize"
    WINDOW_FOCUS = "WindowFocus"
    WINDOW_LOST_FOCUS = "WindowLostFocus"
    WINDOW_MOVED = "WindowMoved"
    APP_TICK = "AppTick"
    APP_UPDATE = "AppUpdate"
    APP_RENDER = "AppRender"
    KEY_PRESSED = "KeyPressed"
    KEY_RELEASED = "KeyReleased"
    KEY_TYPED = "KeyTyped"
    MOUSE_BUTTON_PRESSED = "MouseButtonPressed"
    MOUSE_BUTTON_RELEASED = "MouseButtonReleased"
    MOUSE_MOVED = "MouseMoved"
    MOUSE_SCROLLED = "MouseScrolled"


class EventCategory(IntFlag):
    """Bit flags grouping event kinds."""

    NONE = 0
    APPLICATION = 1 << 0
    WINDOW = 1 << 1
    INPUT = 1 << 2
    KEYBOARD = 1 << 3
    MOUSE = 1 << 4
    MOUSE_BUTTON = 1 << 5


def _number(value: float) -> str:
    return f"{value:g}"


class Event:
    """Base of all events; only classes with a concrete type can be created."""

    event_type: ClassVar[EventType] = EventType.NONE
    category_flags: ClassVar[EventCategory] = EventCategory.NONE

    def __init__(self) -> None:
        if type(self).event_type is EventType.NONE:
            raise TypeError(f"{type(self).__name__} is abstract and cannot be created")
        self.handled = False

    @property
    def name(self) -> str:
        return self.event_type.value

    def is_in_category(self, category: EventCategory) -> bool:
        return bool(self.category_flags & category)

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


E = TypeVar("E", bound=Event)


class EventDispatcher:
    """Hands an event to a handler when the event is of the requested type."""

    def __init__(self, event: Event) -> None:
        self._event = event

    def dispatch(self, event_class: type[E], handler: Callable[[E], bool]) -> bool:
        """Call ``handler`` if the event matches; its result marks the event handled."""
        if self._event.event_type is not event_class.event_type:
            return False
        self._event.handled = bool(handler(self._event))  # type: ignore[arg-type]
        return True


class AppTickEvent(Event):
    event_type = EventType.APP_TICK
    category_flags = EventCategory.APPLICATION


class AppUpdateEvent(Event):
    event_type = EventType.APP_UPDATE
    category_flags = EventCategory.APPLICATION


class AppRenderEvent(Event):
    event_type = EventType.APP_RENDER
    category_flags = EventCategory.APPLICATION


class KeyEvent(Event):
    """Base of keyboard events."""

    category_flags = EventCategory.KEYBOARD | EventCategory.INPUT

    def __init__(self, key_code: int) -> None:
        super().__init__()
        self.key_code = key_code

    def __str__(self) -> str:
        return f"{self.name}: {self.key_code}."


class KeyPressedEvent(KeyEvent):
    event_type = EventType.KEY_PRESSED

    def __init__(self, key_code: int, repeat_count: int = 0) -> None:
        super().__init__(key_code)
        self.repeat_count = repeat_count

    def __str__(self) -> str:
        if self.repeat_count > 1:
            return f"{self.name}: {self.key_code} ({self.repeat_count} times)."
        return f"{self.name}: {self.key_code}."


class KeyReleasedEvent(KeyEvent):
    event_type = EventType.KEY_RELEASED


class KeyTypedEvent(KeyEvent):
    event_type = EventType.KEY_TYPED


class MouseEvent(Event):
    """Base of mouse events."""

    category_flags = EventCategory.MOUSE | EventCategory.INPUT


class MouseMovedEvent(MouseEvent):
    event_type = EventType.MOUSE_MOVED

    def __init__(self, x: float, y: float) -> None:
        super().__init__()
        self.x = float(x)
        self.y = float(y)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{self.name}: {_number(self.x)}, {_number(self.y)}."


class MouseScrolledEvent(MouseEvent):
    event_type = EventType.MOUSE_SCROLLED

    def __init__(self, x_offset: float, y_offset: float) -> None:
        super().__init__()
        self.x_offset = float(x_offset)
        self.y_offset = float(y_offset)

    def __str__(self) -> str:
        return f"{self.name}: {_number(self.x_offset)}, {_number(self.y_offset)}."


class MouseButtonEvent(MouseEvent):
    """Base of mouse button events."""

    def __init__(self, button: int) -> None:
        super().__init__()
        self.button = button

    def __str__(self) -> str:
        return f"{self.name}: {self.button}."


class MouseButtonPressedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_PRESSED


class MouseButtonReleasedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_RELEASED


class WindowResizeEvent(Event):
    event_type = EventType.WINDOW_RESIZE
    category_flags = EventCategory.WINDOW

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        self.width = width
        self.height = height

    def __str__(self) -> str:
        return f"{self.name}: {self.width}, {self.height}."


class WindowCloseEvent(Event):
    event_type = EventType.WINDOW_CLOSE
    category_flags = EventCategory.WINDOW