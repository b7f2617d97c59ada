"""The application main loop and the Dissolve sample application."""

from __future__ import annotations

import argparse
import threading
from dataclasses import dataclass
from typing import ClassVar

from . import logs
from .events import Event, EventDispatcher, WindowCloseEvent, WindowResizeEvent
from .executor import Executor, Task, TaskPriority, WaitGroup
from .graphics import GraphicsAPI, GraphicsContext
from .input import InputManager, InputNotInitializedError
from .input_codes import GamepadAxis, Joystick, Key
from .logs import client_logger, core_logger
from .timing import FrameProfiler, Timer, Timestep
from .window import PygameInput, PygameWindow, Window


class ApplicationExistsError(RuntimeError):
    """Raised when a second application is created while one is alive."""


class Application:
    """Owns the window and graphics context and drives the frame loop."""

    _instance: ClassVar[Application | None] = None

    def __init__(
        self,
        window: Window | None = None,
        graphics_context: GraphicsContext | None = None,
    ) -> None:
        if Application._instance is not None:
            raise ApplicationExistsError("Application already exists!")
        Application._instance = self
        self._closed = False
        self._owns_input = False
        try:
            self._window = window if window is not None else Window.create()
            self._window.set_event_callback(self.on_event)

            try:
                InputManager.input()
            except InputNotInitializedError:
                target = self._window if isinstance(self._window, PygameWindow) else None
                InputManager.set_input(PygameInput(target))
                self._owns_input = True

            if graphics_context is None:
                graphics_context = GraphicsContext.create(GraphicsAPI.VULKAN, self._window)
            self._graphics_context = graphics_context
            if not graphics_context.is_initialized:
                graphics_context.init()
        except BaseException:
            if self._owns_input:
                InputManager.set_input(None)
            Application._instance = None
            raise

        self._timer = Timer()
        self._profiler = FrameProfiler()
        self._running = True
        self._minimized = False

    def run(self) -> None:
        """Run frames until the application is asked to stop."""
        while self._running:
            self.step()

    def step(self) -> None:
        """Run a single frame of the main loop."""
        frame_time = self._timer.last_frame_time()

        if not self._minimized:
            self._window.show_fps_and_frame_time(self._profiler.fps, frame_time)
            self.on_gui(frame_time)
            self._profiler.update(frame_time)

        self._window.update()

        if InputManager.is_key_pressed(Key.ESCAPE):
            self._on_window_close(WindowCloseEvent())

    def on_gui(self, frame_time: Timestep) -> None:
        """Per-frame hook for subclasses."""

    def on_event(self, event: Event) -> None:
        """Handle window events and pass input on to the input manager."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowCloseEvent, self._on_window_close)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resize)
        InputManager.on_event(event)

    def _on_window_close(self, event: WindowCloseEvent) -> bool:
        self._running = False
        return True

    def _on_window_resize(self, event: WindowResizeEvent) -> bool:
        core_logger().info("%s", event)
        self._minimized = event.width == 0 or event.height == 0
        return False

    @property
    def window(self) -> Window:
        return self._window

    @property
    def running(self) -> bool:
        return self._running

    @property
    def minimized(self) -> bool:
        return self._minimized

    def close(self) -> None:
        """Release the graphics context and window; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        try:
            self._graphics_context.wait_device_idle()
            self._graphics_context.shutdown()
            self._window.close()
        finally:
            if self._owns_input:
                InputManager.set_input(None)
            if Application._instance is self:
                Application._instance = None

    @classmethod
    def get(cls) -> Application:
        """The live application."""
        if Application._instance is None:
            raise RuntimeError("No application exists")
        return Application._instance


@dataclass(frozen=True)
class _ThreadArgs:
    name: str


def _task_entrypoint(executor: Executor, args: _ThreadArgs) -> None:
    core_logger().info("Task routine in thread %s - %s", threading.get_ident(), args.name)


def _render_entrypoint(args: _ThreadArgs) -> None:
    core_logger().info("Render routine in thread %s - %s", threading.get_ident(), args.name)


class Dissolve(Application):
    """Sample application exercising threads, tasks and gamepad input."""

    def __init__(
        self,
        window: Window | None = None,
        graphics_context: GraphicsContext | None = None,
    ) -> None:
        super().__init__(window, graphics_context)
        self._window.set_title("Dissolve")

        render_args = _ThreadArgs("Render")
        logic_args = _ThreadArgs("Logic")

        thread = Executor.create_thread(1048576, _render_entrypoint, render_args, "RenderThread")

        self._executor = Executor()
        self._executor.init()

        core_logger().info("Init in thread %s", threading.get_ident())

        wait_group = WaitGroup(self._executor)
        self._executor.add_task(Task(_task_entrypoint, logic_args), TaskPriority.NORMAL, wait_group)
        wait_group.wait()

        Executor.join_thread(thread)

    def on_gui(self, frame_time: Timestep) -> None:
        super().on_gui(frame_time)

        if InputManager.is_gamepad_connected(Joystick.JOYSTICK_1):
            axis = InputManager.gamepad_axis(Joystick.JOYSTICK_1, GamepadAxis.LEFT_Y)
            if axis != 0.0:
                name = InputManager.gamepad_name(Joystick.JOYSTICK_1)
                client_logger().info("Axis Y (%s) in %s", axis, name)

    def close(self) -> None:
        self._executor.shutdown()
        super().close()


def main(argv: list[str] | None = None) -> int:
    """Start the Dissolve application and run it until it is closed."""
    parser = argparse.ArgumentParser(prog="dissolve")
    parser.add_argument("--log-file", default="Elixir.log", help="file to write the log to")
    options = parser.parse_args(argv)

    logs.init(options.log_file)

    app = Dissolve()
    try:
        app.run()
    finally:
        app.close()
    return 0