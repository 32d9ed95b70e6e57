"""
Gesture vocabulary for syngestures.

A Gesture is the key a recognized touch gesture is bound under. The
configuration core treats it as an opaque, ordered, hashable value; only
this module knows which fields make one up.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class GestureError(ValueError):
    """Raised when gesture fields do not describe a known gesture."""
    pass


class GestureType(str, Enum):
    """Kind of gesture."""
    SWIPE = "swipe"


class Direction(str, Enum):
    """Direction of travel for a swipe."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


GESTURE_FIELDS = ("type", "direction", "fingers")


@dataclass(frozen=True, order=True)
class Gesture:
    """
    A recognized gesture.

    Ordering is by type, then direction, then finger count.
    """
    type: GestureType
    direction: Direction
    fingers: int

    def __post_init__(self):
        if isinstance(self.fingers, bool) or not isinstance(self.fingers, int):
            raise GestureError(f"fingers must be an integer, not {self.fingers!r}")
        if self.fingers < 1:
            raise GestureError(f"fingers must be at least 1, not {self.fingers}")

    def __str__(self) -> str:
        return f"{self.type.value}-{self.direction.value}/{self.fingers}"

    def to_fields(self) -> Dict[str, Any]:
        """Record fields for this gesture, the inverse of from_fields."""
        return {
            "type": self.type.value,
            "direction": self.direction.value,
            "fingers": self.fingers,
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> 'Gesture':
        """
        Build a gesture from the flattened fields of a configuration record.

        Args:
            fields: Record fields with any action fields already removed

        Returns:
            The parsed gesture

        Raises:
            GestureError: On unknown, missing or ill-typed fields
        """
        unknown = sorted(set(fields) - set(GESTURE_FIELDS))
        if unknown:
            raise GestureError(f"unknown field '{unknown[0]}'")

        missing = [name for name in GESTURE_FIELDS if name not in fields]
        if missing:
            raise GestureError(f"missing field '{missing[0]}'")

        return cls(
            type=_enum_value(GestureType, "type", fields["type"]),
            direction=_enum_value(Direction, "direction", fields["direction"]),
            fingers=fields["fingers"],
        )


def _enum_value(enum_cls, name: str, value: Any):
    if not isinstance(value, str):
        raise GestureError(f"{name} must be a string, not {type(value).__name__}")
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise GestureError(
            f"unknown {name} '{value}', expected one of: {choices}"
        ) from None
