"""
Gesture vocabulary shared by the recognizer and the configuration core.
"""

from .gestures import (
    Direction,
    Gesture,
    GestureError,
    GestureType,
)

__all__ = [
    "Direction",
    "Gesture",
    "GestureError",
    "GestureType",
]
