"""A small game engine core: geometry, timing, logging, events, input, tasks,
graphics bookkeeping, a pygame window and an application loop."""

__version__ = "0.1.0"