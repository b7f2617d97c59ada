"""Random unique identifiers."""

from __future__ import annotations

import uuid


class UUID:
    """A randomly generated universally unique identifier."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = uuid.uuid4()

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"UUID('{self._value}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UUID):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)