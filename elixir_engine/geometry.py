"""Plain geometric value types and packed colour constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


@dataclass(frozen=True)
class Offset2D:
    """A signed two-dimensional offset."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Offset3D:
    """A signed three-dimensional offset."""

    x: int = 0
    y: int = 0
    z: int = 0


@dataclass(frozen=True)
class Extent2D:
    """A two-dimensional size."""

    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Extent3D:
    """A three-dimensional size."""

    width: int = 0
    height: int = 0
    depth: int = 0

    @classmethod
    def from_extent2d(cls, extent: Extent2D) -> Extent3D:
        """Lift a 2D extent into 3D with a depth of one."""
        return cls(extent.width, extent.height, 1)


@dataclass(frozen=True)
class Rect2D:
    """A rectangle given by its offset and extent."""

    offset: Offset2D = field(default_factory=Offset2D)
    extent: Extent2D = field(default_factory=Extent2D)


@dataclass(frozen=True)
class Viewport:
    """A rendering viewport with its depth range."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    min_depth: float = 0.0
    max_depth: float = 0.0


class Color(IntEnum):
    """Packed colour values, with and without an alpha channel."""

    WHITE = 0xFFFFFF
    WHITE_ALPHA = 0xFFFFFFFF
    MAGENTA = 0xFFFF00
    MAGENTA_ALPHA = 0xFFFF00FF
    YELLOW = 0x00FFFF
    YELLOW_ALPHA = 0xFF00FFFF