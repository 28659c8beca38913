"""Immutable 3D vector type and pure vector arithmetic."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """Real-valued (x, y, z) triple.

    Frozen: every operation returns a new vector and never mutates an operand.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vector3":
        """Build from a ``{x, y, z}`` mapping; missing components default to 0."""
        return cls(float(data.get("x", 0.0)), float(data.get("y", 0.0)), float(data.get("z", 0.0)))

    @classmethod
    def from_array(cls, array) -> "Vector3":
        return cls.from_iterable(np.asarray(array, dtype=np.float64).reshape(3))

    @classmethod
    def coerce(cls, value: Any) -> "Vector3":
        """Accept a Vector3, a ``{x, y, z}`` mapping or a 3-sequence."""
        if isinstance(value, Vector3):
            return value
        if value is None:
            return cls()
        if isinstance(value, dict):
            return cls.from_dict(value)
        return cls.from_iterable(value)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vector3") -> "Vector3":
        return add(self, other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return subtract(self, other)

    def __mul__(self, s: float) -> "Vector3":
        return scale(self, s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return scale(self, -1.0)


def zero() -> Vector3:
    return Vector3(0.0, 0.0, 0.0)


def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(v: Vector3, s: float) -> Vector3:
    return Vector3(v.x * s, v.y * s, v.z * s)


def length_squared(v: Vector3) -> float:
    return v.x * v.x + v.y * v.y + v.z * v.z


def length(v: Vector3) -> float:
    return math.sqrt(length_squared(v))


def normalize(v: Vector3) -> Vector3:
    """Unit vector along ``v``, or the zero vector when ``v`` has no length."""
    n = length(v)
    return scale(v, 1.0 / n) if n > 0 else zero()
