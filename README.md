# elixir-engine

A compact game engine core for Python, with a pygame window and input layer.

## Modules

- `elixir_engine.geometry`: frozen value types `Offset2D`, `Offset3D`,
  `Extent2D`, `Extent3D` (with `Extent3D.from_extent2d`, which uses a depth of
  one), `Rect2D` and `Viewport`, and the packed colour constants in `Color`.
- `elixir_engine.timing`: `Timestep` (`seconds`, `milliseconds`, `float()`),
  `Timer` (`total_time()`, `last_frame_time()`, `initial_time`; the clock can be
  passed in) and `FrameProfiler`, whose `fps` is the number of frames counted
  in the last full second.
- `elixir_engine.identifiers`: `UUID`, a random (version 4) identifier that
  compares and hashes by value.
- `elixir_engine.logs`: `init(log_file="Elixir.log")` sets up the `ENGINE` and
  `APP` loggers (see `core_logger()` and `client_logger()`) to write every
  message, down to the extra `TRACE` level, to stdout and to the log file as
  `[HH:MM:SS] NAME: message`.
- `elixir_engine.events`: window, key, mouse and application events, the
  `EventType` and `EventCategory` enumerations, and `EventDispatcher`, which
  calls a handler only when the event is of the requested class and stores the
  handler's result in `event.handled`.
- `elixir_engine.input_codes`: `Key`, `MouseButton`, `Joystick`, `GamepadAxis`
  and `GamepadButton` code enumerations.
- `elixir_engine.input`: the abstract `Input` backend and the `InputManager`
  facade. Querying `InputManager` before a backend is installed with
  `InputManager.set_input` raises `InputNotInitializedError`.
- `elixir_engine.executor`: `Executor`, a thread pool that runs `Task`s in
  `TaskPriority` order (`HIGH` before `NORMAL`), `WaitGroup` to block until a
  batch of tasks is done, and `Executor.create_thread` / `Executor.join_thread`
  for named threads. Using an executor before `init()` raises
  `ExecutorNotInitializedError`.
- `elixir_engine.graphics`: `GraphicsContext` (frame counting, per-frame
  `DeletionQueue`s, clear colour, swapchain extent, vsync flag), the abstract
  `CommandBuffer` interface, `BufferCopy` and `GraphicsError`.
- `elixir_engine.device_info`: `VkResult` names via `error_string`,
  `check_result` (raises `VulkanResultError`), `vendor_name`,
  `api_version_string`, `debug_message` for validation-layer style messages,
  and functions that turn geometry types into plain dictionaries.
- `elixir_engine.window`: `PygameWindow`, which turns pygame events into engine
  events, `PygameInput`, which tracks keys, mouse buttons and the cursor from
  those events and reads gamepads from pygame, plus `format_title` and
  `translate_key`.
- `elixir_engine.application`: `Application`, the frame loop with window close,
  resize/minimise and Escape handling, and the `Dissolve` sample application.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the sample

```
dissolve
```

This opens a pygame window titled "Dissolve" whose caption shows the frame time
and FPS. It also starts a named thread and runs one task on an executor, each
logging which thread it ran in, and logs the left stick's Y axis when a gamepad
is connected and the axis is not at rest. Press Escape or close the window to
quit. The log is written to `Elixir.log`, or to the file given with
`--log-file`.

## Using the event system

```python
from elixir_engine.events import EventDispatcher, WindowResizeEvent

def on_resize(event):
    print(event)          # WindowResize: 800, 600.
    return True

event = WindowResizeEvent(800, 600)
EventDispatcher(event).dispatch(WindowResizeEvent, on_resize)
assert event.handled
```

## Running tasks

Entering an `Executor` as a context manager starts its workers; leaving it
finishes the queued tasks and stops them.

```python
from elixir_engine.executor import Executor, Task, TaskPriority, WaitGroup

with Executor() as executor:
    group = WaitGroup(executor)
    executor.add_task(Task(lambda ex, arg: print(arg), "hello"),
                      TaskPriority.NORMAL, group)
    group.wait()
```

## Writing an application

Subclass `Application` and override `on_gui`, which is called once per frame
with the last frame's `Timestep`. Only one application may exist at a time;
creating a second raises `ApplicationExistsError` until the first is closed.

```python
from elixir_engine.application import Application

class MyApp(Application):
    def on_gui(self, frame_time):
        super().on_gui(frame_time)
        ...

app = MyApp()
try:
    app.run()
finally:
    app.close()
```

A window and graphics context can be passed to the constructor instead of the
default pygame window; `step()` runs a single frame.

## What this package does not do

There is no renderer. `GraphicsContext` only keeps frame bookkeeping (frame
number, deletion queues, clear colour, swapchain size); nothing is drawn to the
window, and `CommandBuffer.create` returns `None` because no command buffer
implementation is provided. The `device_info` helpers describe result codes and
devices but do not talk to a GPU.