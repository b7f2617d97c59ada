"""Input polling interface and the global manager that routes queries to it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from .events import Event, EventDispatcher, MouseMovedEvent


class InputNotInitializedError(RuntimeError):
    """Raised when input is queried before an input backend has been installed."""


class Input(ABC):
    """A source of keyboard, mouse and gamepad state."""

    def __init__(self) -> None:
        self._mouse_position: tuple[float, float] = (0.0, 0.0)

    def on_mouse_moved(self, event: MouseMovedEvent) -> None:
        """Remember the cursor position carried by ``event``."""
        self._mouse_position = event.position

    @abstractmethod
    def is_key_pressed(self, key_code: int) -> bool: ...

    @abstractmethod
    def is_mouse_button_pressed(self, button: int) -> bool: ...

    def mouse_position(self) -> tuple[float, float]:
        return self._mouse_position

    def mouse_x(self) -> float:
        return self._mouse_position[0]

    def mouse_y(self) -> float:
        return self._mouse_position[1]

    @abstractmethod
    def is_gamepad_connected(self, gamepad_index: int) -> bool: ...

    @abstractmethod
    def is_gamepad_button_pressed(self, gamepad_index: int, button: int) -> bool: ...

    @abstractmethod
    def gamepad_axis(self, gamepad_index: int, axis: int) -> float: ...

    @abstractmethod
    def gamepad_name(self, gamepad_index: int) -> str | None: ...


class InputManager:
    """Process-wide access point to the installed input backend."""

    _input: ClassVar[Input | None] = None

    @classmethod
    def set_input(cls, input_: Input | None) -> None:
        """Install ``input_`` as the backend; ``None`` removes it."""
        cls._input = input_

    @classmethod
    def input(cls) -> Input:
        """The installed backend."""
        if cls._input is None:
            raise InputNotInitializedError("Input system not initialized!")
        return cls._input

    @classmethod
    def on_event(cls, event: Event) -> None:
        """Feed mouse movement from ``event`` to the backend."""

        def handle(moved: MouseMovedEvent) -> bool:
            cls.input().on_mouse_moved(moved)
            return True

        EventDispatcher(event).dispatch(MouseMovedEvent, handle)

    @classmethod
    def is_key_pressed(cls, key_code: int) -> bool:
        return cls.input().is_key_pressed(key_code)

    @classmethod
    def is_mouse_button_pressed(cls, button: int) -> bool:
        return cls.input().is_mouse_button_pressed(button)

    @classmethod
    def mouse_position(cls) -> tuple[float, float]:
        return cls.input().mouse_position()

    @classmethod
    def mouse_x(cls) -> float:
        return cls.input().mouse_x()

    @classmethod
    def mouse_y(cls) -> float:
        return cls.input().mouse_y()

    @classmethod
    def is_gamepad_connected(cls, gamepad_index: int) -> bool:
        return cls.input().is_gamepad_connected(gamepad_index)

    @classmethod
    def is_gamepad_button_pressed(cls, gamepad_index: int, button: int) -> bool:
        return cls.input().is_gamepad_button_pressed(gamepad_index, button)

    @classmethod
    def gamepad_axis(cls, gamepad_index: int, axis: int) -> float:
        return cls.input().gamepad_axis(gamepad_index, axis)

    @classmethod
    def gamepad_name(cls, gamepad_index: int) -> str | None:
        return cls.input().gamepad_name(gamepad_index)