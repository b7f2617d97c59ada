"""Vulkan result codes, device descriptions, debug messages and struct conversion."""

from __future__ import annotations

import logging
from enum import IntEnum, IntFlag

from .geometry import Extent2D, Extent3D, Offset2D, Offset3D, Rect2D, Viewport
from .logs import TRACE, core_logger


class VkResult(IntEnum):
    """Vulkan result codes."""

    SUCCESS = 0
    NOT_READY = 1
    TIMEOUT = 2
    EVENT_SET = 3
    EVENT_RESET = 4
    INCOMPLETE = 5
    ERROR_OUT_OF_HOST_MEMORY = -1
    ERROR_OUT_OF_DEVICE_MEMORY = -2
    ERROR_INITIALIZATION_FAILED = -3
    ERROR_DEVICE_LOST = -4
    ERROR_MEMORY_MAP_FAILED = -5
    ERROR_LAYER_NOT_PRESENT = -6
    ERROR_EXTENSION_NOT_PRESENT = -7
    ERROR_FEATURE_NOT_PRESENT = -8
    ERROR_INCOMPATIBLE_DRIVER = -9
    ERROR_TOO_MANY_OBJECTS = -10
    ERROR_FORMAT_NOT_SUPPORTED = -11
    ERROR_SURFACE_LOST_KHR = -1000000000
    ERROR_NATIVE_WINDOW_IN_USE_KHR = -1000000001
    SUBOPTIMAL_KHR = 1000001003
    ERROR_OUT_OF_DATE_KHR = -1000001004
    ERROR_INCOMPATIBLE_DISPLAY_KHR = -1000003001
    ERROR_VALIDATION_FAILED_EXT = -1000011001
    ERROR_INVALID_SHADER_NV = -1000012000


class MessageSeverity(IntFlag):
    """Severity bits of a debug-utils message."""

    VERBOSE = 0x1
    INFO = 0x10
    WARNING = 0x100
    ERROR = 0x1000


class VulkanResultError(RuntimeError):
    """Raised when a Vulkan call reports anything but success."""

    def __init__(self, result: int) -> None:
        self.result = result
        super().__init__(f'VkResult is "{error_string(result)}"')


_VENDORS: dict[int, str] = {
    0x8086: "Intel",
    0x8087: "Intel",
    0x1002: "AMD",
    0x1022: "AMD",
    0x10DE: "Nvidia",
    0x1EB5: "ARM",
    0x5143: "Qualcomm",
    0x1099: "Samsung",
    0x10C3: "Samsung",
    0x1249: "Samsung",
    0x04E8: "Samsung",
    0x106B: "Apple Inc.",
    0x05AC: "Apple Inc.",
}


def error_string(result: int) -> str:
    """The name of a non-success result code, or ``UNKNOWN_ERROR``."""
    try:
        code = VkResult(result)
    except ValueError:
        return "UNKNOWN_ERROR"
    if code is VkResult.SUCCESS:
        return "UNKNOWN_ERROR"
    return code.name


def check_result(result: int) -> None:
    """Raise :class:`VulkanResultError` unless ``result`` is success."""
    if result != VkResult.SUCCESS:
        raise VulkanResultError(result)


def vendor_name(vendor_id: int) -> str:
    """A readable GPU vendor with its PCI id, such as ``AMD [0x1002]``."""
    return f"{_VENDORS.get(vendor_id, 'Unknown')} [0x{vendor_id:04x}]"


def api_version_string(api_version: int) -> str:
    """Format a packed Vulkan API version as ``major.minor.patch``."""
    major = (api_version >> 22) & 0x7F
    minor = (api_version >> 12) & 0x3FF
    patch = api_version & 0xFFF
    return f"{major}.{minor}.{patch}"


_SEVERITY_LEVELS = {
    MessageSeverity.INFO: logging.INFO,
    MessageSeverity.WARNING: logging.WARNING,
    MessageSeverity.ERROR: logging.ERROR,
}


def debug_message(severity: int, message_type: int, message: str) -> bool:
    """Log a validation-layer message at the matching level; always returns False."""
    level = _SEVERITY_LEVELS.get(severity, TRACE)
    core_logger().log(level, "[%s]: %s.", int(message_type), message)
    return False


def offset2d_to_vk(src: Offset2D) -> dict[str, int]:
    return {"x": src.x, "y": src.y}


def offset3d_to_vk(src: Offset3D) -> dict[str, int]:
    return {"x": src.x, "y": src.y, "z": src.z}


def extent2d_to_vk(src: Extent2D) -> dict[str, int]:
    return {"width": src.width, "height": src.height}


def extent3d_to_vk(src: Extent3D) -> dict[str, int]:
    return {"width": src.width, "height": src.height, "depth": src.depth}


def rect2d_to_vk(src: Rect2D) -> dict[str, dict[str, int]]:
    return {"offset": offset2d_to_vk(src.offset), "extent": extent2d_to_vk(src.extent)}


def viewport_to_vk(viewport: Viewport) -> dict[str, float]:
    return {
        "x": viewport.x,
        "y": viewport.y,
        "width": viewport.width,
        "height": viewport.height,
        "minDepth": viewport.min_depth,
        "maxDepth": viewport.max_depth,
    }