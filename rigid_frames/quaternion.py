# rigid_frames/quaternion.py
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Optional, Union

import numpy as np  # pyright: ignore[reportMissingImports]

from rigid_frames import vector
from rigid_frames.constants import (
    ANTIPARALLEL_NUDGES,
    EQUALITY_EPSILON,
    SIMILARITY_EPSILON,
    SLERP_LINEAR_THRESHOLD,
)
from rigid_frames.vector import Vector

# Convention:
# - Scalar-first Hamilton quaternion q = w + xi + yj + zk, stored as
#   {scalar: w, vector: (x, y, z)}
# - rotate(q, v) = q (0, v) q* / |q|^2, so positive angles turn
#   counter-clockwise about the axis (right-hand rule)
# - mul(p, q) applies q first, then p; compose(p, q) applies p first, then q
# - unit norm is never enforced; the zero quaternion rotates nothing

_HALF_SQRT2 = float(np.sqrt(0.5))


@dataclass(frozen=True)
class Quaternion:
    scalar: float
    vector: Vector

    def __add__(self, other: Quaternion) -> Quaternion:
        return add(self, other)

    def __mul__(self, other: Union[Quaternion, float]) -> Quaternion:
        if isinstance(other, Quaternion):
            return mul(self, other)
        if isinstance(other, Real):
            return scale(other, self)
        return NotImplemented

    def __rmul__(self, f: float) -> Quaternion:
        if not isinstance(f, Real):
            return NotImplemented
        return scale(f, self)


def quaternion(w: float, x: float, y: float, z: float) -> Quaternion:
    return Quaternion(w, Vector(x, y, z))


IDENTITY = quaternion(1.0, 0.0, 0.0, 0.0)
ZERO = quaternion(0.0, 0.0, 0.0, 0.0)


def components(q: Quaternion) -> tuple[float, float, float, float]:
    """(w, x, y, z)"""
    return q.scalar, q.vector.x, q.vector.y, q.vector.z


# ---------------------- axis rotations ---------------------- #
def x_rotation(theta: float) -> Quaternion:
    return quaternion(float(np.cos(0.5 * theta)), float(np.sin(0.5 * theta)), 0.0, 0.0)


def y_rotation(theta: float) -> Quaternion:
    return quaternion(float(np.cos(0.5 * theta)), 0.0, float(np.sin(0.5 * theta)), 0.0)


def z_rotation(theta: float) -> Quaternion:
    return quaternion(float(np.cos(0.5 * theta)), 0.0, 0.0, float(np.sin(0.5 * theta)))


# ---------------------- algebra ---------------------- #
def conjugate(q: Quaternion) -> Quaternion:
    return Quaternion(q.scalar, vector.negate(q.vector))


def add(p: Quaternion, q: Quaternion) -> Quaternion:
    """Component-wise sum. Not a rotation composition; see mul/compose."""
    return Quaternion(p.scalar + q.scalar, vector.add(p.vector, q.vector))


def scale(f: float, q: Quaternion) -> Quaternion:
    return Quaternion(f * q.scalar, vector.scale(f, q.vector))


def mul(p: Quaternion, q: Quaternion) -> Quaternion:
    """
    Hamilton product p q. As rotations: apply q, then p.
    """
    s = p.scalar * q.scalar - vector.dot(p.vector, q.vector)
    v = vector.add(
        vector.add(vector.scale(p.scalar, q.vector), vector.scale(q.scalar, p.vector)),
        vector.cross(p.vector, q.vector),
    )
    return Quaternion(s, v)


def compose(p: Quaternion, q: Quaternion) -> Quaternion:
    """
    Pipeline order: apply p, then q. Same as mul(q, p).
    """
    return mul(q, p)


def dot(p: Quaternion, q: Quaternion) -> float:
    return p.scalar * q.scalar + vector.dot(p.vector, q.vector)


def length_squared(q: Quaternion) -> float:
    return q.scalar * q.scalar + vector.length_squared(q.vector)


def length(q: Quaternion) -> float:
    return float(np.sqrt(length_squared(q)))


def normalize(q: Quaternion) -> Optional[Quaternion]:
    n = length(q)
    if n == 0:
        return None
    return scale(1.0 / n, q)


def inverse(q: Quaternion) -> Quaternion:
    """Multiplicative inverse q* / |q|^2; the zero quaternion maps to itself."""
    n2 = length_squared(q)
    if n2 == 0:
        return q
    return scale(1.0 / n2, conjugate(q))


# ---------------------- rotation ---------------------- #
def rotate(q: Quaternion, v: Vector) -> Vector:
    """
    Rotate v by q: q (0, v) q* rescaled by 1/|q|^2, so the result keeps
    |v| even for non-unit q. A zero quaternion returns v unchanged.
    """
    n2 = length_squared(q)
    if n2 == 0:
        return v
    r = mul(mul(q, Quaternion(0.0, v)), conjugate(q))
    return vector.scale(1.0 / n2, r.vector)


def reverse_rotate(q: Quaternion, v: Vector) -> Vector:
    return rotate(conjugate(q), v)


def equal(p: Quaternion, q: Quaternion) -> bool:
    """
    Component-wise approximate equality on (w, x, y, z) with threshold
    max(1, |p|^2) * EQUALITY_EPSILON. Asymmetric in the same way as
    vector.equal.
    """
    threshold = max(1.0, length_squared(p)) * EQUALITY_EPSILON
    return all((a - b) ** 2 < threshold for a, b in zip(components(p), components(q)))


def similar(p: Quaternion, q: Quaternion) -> bool:
    """
    True if p and q encode the same rotation up to a non-zero real factor
    (this includes q = -p). Zero quaternions are only similar via equal().
    """
    if equal(p, q):
        return True
    if not (length_squared(p) > 0 and length_squared(q) > 0):
        return False
    r = mul(p, conjugate(q))
    return vector.length_squared(r.vector) < SIMILARITY_EPSILON * length_squared(r)


# ---------------------- axis / angle ---------------------- #
def from_axis_angle(axis: Vector, angle: float) -> Optional[Quaternion]:
    """None if axis is the zero vector."""
    n = vector.normalize(axis)
    if n is None:
        return None
    half = 0.5 * angle
    return Quaternion(float(np.cos(half)), vector.scale(float(np.sin(half)), n))


def from_vector(v: Vector) -> Quaternion:
    """Rotation vector (axis scaled by angle in radians) -> quaternion."""
    q = from_axis_angle(v, vector.length(v))
    if q is None:
        return IDENTITY
    return q


def angle(q: Quaternion) -> float:
    """
    Rotation angle in [0, 2*pi] of the normalized q.

    acos loses precision near |w| = 1 and asin near |w| = 0, so the branch
    is picked on |w| against sqrt(1/2).
    """
    n = length(q)
    if n == 0:
        return 0.0
    w = q.scalar / n
    if abs(w) <= _HALF_SQRT2:
        return 2.0 * float(np.arccos(np.clip(w, -1.0, 1.0)))
    half = float(np.arcsin(min(vector.length(q.vector) / n, 1.0)))
    if w > 0:
        return 2.0 * half
    return 2.0 * (np.pi - half)


def axis(q: Quaternion) -> Vector:
    n = vector.normalize(q.vector)
    if n is None:
        return vector.X_AXIS
    return n


def to_vector(q: Quaternion) -> Vector:
    """Inverse of from_vector. No rotation -> the (zero) vector part."""
    n = vector.length(q.vector)
    if n == 0:
        return q.vector
    return vector.scale(angle(q) / n, q.vector)


def _power_of_two_rescale(v: Vector) -> Vector:
    # largest |component| lands in [0.5, 1); scaling by 2^-e is exact, so
    # exactly (anti-)parallel inputs stay exactly (anti-)parallel
    m = max(abs(v.x), abs(v.y), abs(v.z))
    if m == 0 or not np.isfinite(m):
        return v
    e = int(np.frexp(m)[1])
    return Vector(*(float(np.ldexp(c, -e)) for c in (v.x, v.y, v.z)))


def rotation_for(u: Vector, v: Vector) -> Quaternion:
    """
    Quaternion turning the direction of u onto the direction of v.

    Exactly opposite inputs have no unique axis: v is nudged by a tiny
    offset (ANTIPARALLEL_NUDGES) until the cross product is non-zero and the
    result uses that arbitrary axis. For u = +x, v = -x this yields a half
    turn about +y.

    Lengths are ignored: both inputs are first brought to unit order of
    magnitude, so huge or tiny vectors neither overflow nor underflow.
    """
    u = _power_of_two_rescale(u)
    v = _power_of_two_rescale(v)
    c = vector.cross(u, v)
    lc = vector.length(c)
    theta = float(np.arctan2(lc, vector.dot(u, v)))
    if theta == 0:
        return IDENTITY
    if lc == 0:
        for nudge in ANTIPARALLEL_NUDGES:
            nudged = vector.add(v, Vector(*nudge))
            if vector.length_squared(vector.cross(u, nudged)) != 0:
                return rotation_for(u, nudged)
        return IDENTITY
    return from_vector(vector.scale(theta / lc, c))


# ---------------------- interpolation ---------------------- #
def _unit_or_identity(q: Quaternion) -> Quaternion:
    n = normalize(q)
    return IDENTITY if n is None else n


def slerp(p: Quaternion, q: Quaternion, t: float) -> Quaternion:
    """
    Spherical linear interpolation along the shorter arc between the
    normalized inputs; t=0 -> p, t=1 -> q (up to sign).
    """
    a = _unit_or_identity(p)
    b = _unit_or_identity(q)
    c = dot(a, b)
    if c < 0:
        b = scale(-1.0, b)
        c = -c
    theta = float(np.arccos(min(c, 1.0)))
    if theta < SLERP_LINEAR_THRESHOLD:
        return _unit_or_identity(add(scale(1.0 - t, a), scale(t, b)))
    s = float(np.sin(theta))
    wa = float(np.sin((1.0 - t) * theta)) / s
    wb = float(np.sin(t * theta)) / s
    return add(scale(wa, a), scale(wb, b))
