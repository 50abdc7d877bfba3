"""
3D real-vector primitives.

Vectors are used for rotation axes and for points of the SO(3) ball. Every
operation returns a new instance; nothing is mutated in place.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from so3lab.config import DEFAULT_AXIS, EPSILON


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3-vector.

    Parameters
    ----------
    x, y, z : float
        Cartesian components.

    Examples
    --------
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.magnitude()
    5.0
    >>> Vector3.zero().normalize()
    Vector3(x=0.0, y=0.0, z=1.0)
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, a: Sequence[float] | NDArray) -> Vector3:
        """Build from any length-3 array-like."""
        arr = np.asarray(a, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Vector3 needs shape (3,), got {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def magnitude_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_sq())

    def normalize(self) -> Vector3:
        """
        Unit vector in the same direction.

        A vector shorter than ``EPSILON`` has no direction; the default axis
        (0, 0, 1) is returned instead of failing.
        """
        n = self.magnitude()
        if n < EPSILON:
            return Vector3(*DEFAULT_AXIS)
        return Vector3(self.x / n, self.y / n, self.z / n)

    def scale(self, s: float) -> Vector3:
        return Vector3(self.x * s, self.y * s, self.z * s)

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def negate(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def lerp(self, other: Vector3, t: float) -> Vector3:
        """Linear interpolation, t=0 gives self and t=1 gives other."""
        return Vector3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def approx_equal(self, other: Vector3, eps: float = EPSILON) -> bool:
        """Component-wise equality within ``eps``."""
        return (
            abs(self.x - other.x) < eps
            and abs(self.y - other.y) < eps
            and abs(self.z - other.z) < eps
        )

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.subtract(other)

    def __mul__(self, s: float) -> Vector3:
        return self.scale(s)

    def __rmul__(self, s: float) -> Vector3:
        return self.scale(s)

    def __neg__(self) -> Vector3:
        return self.negate()


VectorLike = Union[Vector3, Sequence[float], NDArray]


def as_vector(v: VectorLike) -> Vector3:
    """Coerce a Vector3 or any length-3 array-like to Vector3."""
    if isinstance(v, Vector3):
        return v
    return Vector3.from_array(v)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def approx_equal(a: float, b: float, eps: float = EPSILON) -> bool:
    return abs(a - b) < eps
