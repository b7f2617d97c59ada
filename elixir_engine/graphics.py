"""Graphics context, command buffer interface and frame resource bookkeeping."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Sequence

from .geometry import Extent2D, Rect2D, Viewport
from .logs import core_logger


class GraphicsError(RuntimeError):
    """Raised when the graphics layer is misused or misconfigured."""


class GraphicsAPI(Enum):
    """The rendering back end a context is created for."""

    VULKAN = "Vulkan"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class BufferCopy:
    """One region of a buffer-to-buffer copy."""

    src_offset: int = 0
    dst_offset: int = 0
    size: int = 0


class CommandBuffer(ABC):
    """Records rendering commands for later submission."""

    @abstractmethod
    def begin(self) -> None: ...

    @abstractmethod
    def end(self) -> None: ...

    @abstractmethod
    def end_rendering(self) -> None: ...

    @abstractmethod
    def draw(
        self,
        vertex_count: int,
        instance_count: int = 1,
        first_vertex: int = 0,
        first_instance: int = 0,
    ) -> None: ...

    @abstractmethod
    def draw_indexed(
        self,
        index_count: int,
        instance_count: int = 1,
        first_index: int = 0,
        vertex_offset: int = 0,
        first_instance: int = 0,
    ) -> None: ...

    @abstractmethod
    def set_viewports(self, viewports: Sequence[Viewport], first_viewport: int = 0) -> None: ...

    @abstractmethod
    def set_scissors(self, scissors: Sequence[Rect2D], first_scissor: int = 0) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...

    @staticmethod
    def create(context: GraphicsContext | None) -> CommandBuffer | None:
        """Create a command buffer for the active API.

        The Vulkan back end provides no command buffer yet, so None is returned.
        """
        if GraphicsContext.graphics_api() is GraphicsAPI.VULKAN:
            return None
        raise GraphicsError("Unknown GraphicsAPI!")


class DeletionQueue:
    """Cleanup callbacks run in reverse order of registration."""

    def __init__(self) -> None:
        self._deletors: deque[Callable[[], Any]] = deque()

    def push(self, fn: Callable[[], Any]) -> None:
        self._deletors.append(fn)

    def flush(self) -> None:
        """Run every callback, newest first, then forget them."""
        while self._deletors:
            self._deletors.pop()()

    def __len__(self) -> int:
        return len(self._deletors)


@dataclass
class FrameData:
    """Resources owned by one frame in flight."""

    deletion_queue: DeletionQueue = field(default_factory=DeletionQueue)


def _dimension(window: Any, attribute: str) -> int:
    value = getattr(window, attribute)
    return int(value() if callable(value) else value)


class GraphicsContext:
    """Owns per-frame resources, the swapchain size and the clear colour."""

    FRAMES: ClassVar[int] = 2
    _api: ClassVar[GraphicsAPI] = GraphicsAPI.UNKNOWN

    def __init__(self, window: Any) -> None:
        if window is None:
            raise GraphicsError("Invalid window!")
        self._window = window
        self._command_buffers: list[CommandBuffer | None] = [None] * self.FRAMES
        self._frame_number = 0
        self._vsync_enabled = False
        self._initialized = False
        self._frames = [FrameData() for _ in range(self.FRAMES)]
        self._deletion_queue = DeletionQueue()
        self._in_flight: list[int] = []
        self._clear_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
        self._swapchain_extent = Extent2D(
            _dimension(window, "width"), _dimension(window, "height")
        )
        self._window_extent = self._swapchain_extent

    def init(self) -> None:
        """Prepare the context for rendering."""
        self.set_clear_color((0.0, 0.0, 0.0, 1.0))
        logger = core_logger()
        logger.info("Graphics context (%s):", GraphicsContext.graphics_api().value)
        logger.info(
            "  Swapchain: %d x %d",
            self._swapchain_extent.width,
            self._swapchain_extent.height,
        )
        self._initialized = True

    def shutdown(self) -> None:
        """Release every resource; does nothing if not initialized."""
        if not self._initialized:
            return
        self.wait_device_idle()
        self._deletion_queue.flush()
        self._command_buffers.clear()
        for frame in self._frames:
            frame.deletion_queue.flush()
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise GraphicsError("Graphics context was not initialized!")

    def prepare(self) -> None:
        """Begin a frame, releasing what the previous use of its slot left behind."""
        self._require_initialized()
        self.current_frame.deletion_queue.flush()

    def submit(self) -> None:
        """Submit the recorded work of the current frame."""
        self._require_initialized()
        self._in_flight.append(self._frame_number)

    def present(self) -> None:
        """Finish the current frame and move on to the next one."""
        self._require_initialized()
        self._frame_number += 1

    def wait_device_idle(self) -> None:
        """Block until every submitted frame has completed."""
        self._in_flight.clear()

    @property
    def pending_submissions(self) -> int:
        """Number of submitted frames not yet waited on."""
        return len(self._in_flight)

    def set_clear_color(self, color: Sequence[float]) -> None:
        components = tuple(float(c) for c in color)
        if len(components) != 4:
            raise ValueError("A clear colour needs exactly four components")
        self._clear_color = components  # type: ignore[assignment]

    @property
    def clear_color(self) -> tuple[float, float, float, float]:
        return self._clear_color

    def clear(self) -> None:
        """Clear the current frame with the clear colour."""
        self._require_initialized()

    def resize(self, extent: Extent2D) -> None:
        """Adopt a new window size and rebuild the swapchain for it."""
        self._window_extent = extent
        self._recreate_swapchain()

    def _recreate_swapchain(self) -> None:
        self._swapchain_extent = self._window_extent

    def flush_command_buffer(self, cmd: CommandBuffer) -> None:
        cmd.flush()

    @property
    def swapchain_extent(self) -> Extent2D:
        return self._swapchain_extent

    def create_command_buffer(self) -> CommandBuffer | None:
        return CommandBuffer.create(self)

    @property
    def window(self) -> Any:
        return self._window

    @property
    def command_buffer(self) -> CommandBuffer | None:
        if not self._command_buffers:
            return None
        return self._command_buffers[self._frame_number % self.FRAMES]

    @property
    def current_frame(self) -> FrameData:
        return self._frames[self._frame_number % self.FRAMES]

    @property
    def deletion_queue(self) -> DeletionQueue:
        return self._deletion_queue

    @property
    def frame_number(self) -> int:
        return self._frame_number

    @property
    def vsync_enabled(self) -> bool:
        return self._vsync_enabled

    @vsync_enabled.setter
    def vsync_enabled(self, enabled: bool) -> None:
        self._vsync_enabled = bool(enabled)

    @staticmethod
    def graphics_api() -> GraphicsAPI:
        return GraphicsContext._api

    @staticmethod
    def create(api: GraphicsAPI, window: Any) -> GraphicsContext:
        """Create a context for ``api``, which becomes the active API."""
        GraphicsContext._api = api
        if api is GraphicsAPI.VULKAN:
            return GraphicsContext(window)
        raise GraphicsError("Unknown GraphicsAPI!")