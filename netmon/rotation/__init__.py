"""Rotating log writer primitives exposed as a convenience import."""

from .policy import RotationPolicy
from .record import Level, Record
from .writer import RotatingWriter

__all__ = [
    "Level",
    "Record",
    "RotatingWriter",
    "RotationPolicy",
]
