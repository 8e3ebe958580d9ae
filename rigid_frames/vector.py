# rigid_frames/vector.py
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Optional

import numpy as np  # pyright: ignore[reportMissingImports]

from rigid_frames.constants import EQUALITY_EPSILON


@dataclass(frozen=True)
class Vector:
    x: float
    y: float
    z: float

    def __add__(self, other: Vector) -> Vector:
        return add(self, other)

    def __sub__(self, other: Vector) -> Vector:
        return sub(self, other)

    def __neg__(self) -> Vector:
        return negate(self)

    def __mul__(self, c: float) -> Vector:
        if not isinstance(c, Real):
            return NotImplemented
        return scale(c, self)

    __rmul__ = __mul__


def vector(x: float, y: float, z: float) -> Vector:
    return Vector(x, y, z)


# canonical basis in R^3
ZERO = Vector(0.0, 0.0, 0.0)
IDENTITY = ZERO
X_AXIS = Vector(1.0, 0.0, 0.0)
Y_AXIS = Vector(0.0, 1.0, 0.0)
Z_AXIS = Vector(0.0, 0.0, 1.0)


def get_x(v: Vector) -> float:
    return v.x


def get_y(v: Vector) -> float:
    return v.y


def get_z(v: Vector) -> float:
    return v.z


# ---------------------- algebra ---------------------- #
def add(u: Vector, v: Vector) -> Vector:
    return Vector(u.x + v.x, u.y + v.y, u.z + v.z)


def sub(u: Vector, v: Vector) -> Vector:
    return Vector(u.x - v.x, u.y - v.y, u.z - v.z)


def negate(v: Vector) -> Vector:
    return sub(ZERO, v)


def scale(c: float, v: Vector) -> Vector:
    return Vector(c * v.x, c * v.y, c * v.z)


def dot(u: Vector, v: Vector) -> float:
    return u.x * v.x + u.y * v.y + u.z * v.z


def cross(u: Vector, v: Vector) -> Vector:
    """Right-handed cross product u x v."""
    return Vector(
        u.y * v.z - u.z * v.y,
        u.z * v.x - u.x * v.z,
        u.x * v.y - u.y * v.x,
    )


def length_squared(v: Vector) -> float:
    return dot(v, v)


def length(v: Vector) -> float:
    return float(np.sqrt(length_squared(v)))


def normalize(v: Vector) -> Optional[Vector]:
    """
    Unit vector along v, or None when v has exactly zero length.
    No epsilon: tiny but non-zero vectors still normalize.
    """
    n = length(v)
    if n == 0:
        return None
    return scale(1.0 / n, v)


def direction(u: Vector, v: Vector) -> Optional[Vector]:
    """Unit vector pointing from v toward u (None if u == v exactly)."""
    return normalize(sub(u, v))


def distance(u: Vector, v: Vector) -> float:
    return length(sub(u, v))


def distance_squared(u: Vector, v: Vector) -> float:
    return length_squared(sub(u, v))


def equal(u: Vector, v: Vector) -> bool:
    """
    Approximate equality.

    Every squared component difference must be strictly below
    max(1, |u|^2) * EQUALITY_EPSILON. Only u's magnitude sets the threshold,
    so equal(u, v) and equal(v, u) can disagree for large vectors.
    """
    threshold = max(1.0, length_squared(u)) * EQUALITY_EPSILON
    return (
        (u.x - v.x) ** 2 < threshold
        and (u.y - v.y) ** 2 < threshold
        and (u.z - v.z) ** 2 < threshold
    )


def lerp(u: Vector, v: Vector, t: float) -> Vector:
    """Linear interpolation, t=0 -> u, t=1 -> v."""
    return add(u, scale(t, sub(v, u)))


def angle_between(u: Vector, v: Vector) -> float:
    """Unsigned angle in [0, pi]; 0 when either input is zero."""
    return float(np.arctan2(length(cross(u, v)), dot(u, v)))
