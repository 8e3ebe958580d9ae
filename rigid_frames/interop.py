# rigid_frames/interop.py
from __future__ import annotations

from typing import Sequence, Union

import numpy as np  # pyright: ignore[reportMissingImports]

from rigid_frames import quaternion
from rigid_frames.frame import Frame
from rigid_frames.quaternion import Quaternion
from rigid_frames.vector import Vector

ArrayLike = Union[np.ndarray, Sequence[float]]

# Convention:
# - quaternion arrays are scalar-first (w, x, y, z)
# - rotation_matrix(q) @ v == rotate(q, v), i.e. the active rotation, child -> parent
# - to_mat4(frame) @ [x, 1] == [transform_out_of(frame, x), 1]


def _as_flat(a: ArrayLike, size: int, what: str) -> np.ndarray:
    arr = np.asarray(a, dtype=float).reshape(-1)
    if arr.size != size:
        raise ValueError(f"{what} expects {size} elements, got shape {np.shape(a)}")
    return arr


# ---------------------- vectors / quaternions ---------------------- #
def to_vec3(v: Vector) -> np.ndarray:
    return np.array([v.x, v.y, v.z], dtype=float)


def from_vec3(a: ArrayLike) -> Vector:
    x, y, z = _as_flat(a, 3, "from_vec3")
    return Vector(float(x), float(y), float(z))


def to_quat4(q: Quaternion) -> np.ndarray:
    return np.array(quaternion.components(q), dtype=float)


def from_quat4(a: ArrayLike) -> Quaternion:
    w, x, y, z = _as_flat(a, 4, "from_quat4")
    return quaternion.quaternion(float(w), float(x), float(y), float(z))


# ---------------------- rotation matrices ---------------------- #
def rotation_matrix(q: Quaternion) -> np.ndarray:
    """
    3x3 matrix R with R @ to_vec3(v) == to_vec3(rotate(q, v)).
    Non-unit q is divided through by |q|^2; the zero quaternion gives I.
    """
    n2 = quaternion.length_squared(q)
    if n2 == 0:
        return np.eye(3)
    q0, q1, q2, q3 = quaternion.components(q)
    q00 = q0*q0
    q11 = q1*q1
    q22 = q2*q2
    q33 = q3*q3
    q01 = q0*q1
    q02 = q0*q2
    q03 = q0*q3
    q12 = q1*q2
    q13 = q1*q3
    q23 = q2*q3
    C = np.array([
        [q00 + q11 - q22 - q33,     2*(q12 - q03),         2*(q13 + q02)],
        [    2*(q12 + q03),     q00 - q11 + q22 - q33,     2*(q23 - q01)],
        [    2*(q13 - q02),         2*(q23 + q01),     q00 - q11 - q22 + q33]
    ], dtype=float)
    return C / n2


def quaternion_from_matrix(C: ArrayLike) -> Quaternion:
    """
    Rotation matrix -> unit quaternion.
    The largest of 4w^2, 4x^2, 4y^2, 4z^2 (read off the diagonal) is solved
    for first; the other three follow from the off-diagonal sums and
    differences.
    """
    C = _as_flat(C, 9, "quaternion_from_matrix").reshape(3, 3)
    d = np.diag(C)
    tr = float(np.sum(d))
    squares = np.array([1.0 + tr, *(1.0 + 2.0 * d - tr)])
    # 4*w*x, 4*w*y, 4*w*z, 4*x*y, 4*x*z, 4*y*z
    wx, wy, wz = C[2, 1] - C[1, 2], C[0, 2] - C[2, 0], C[1, 0] - C[0, 1]
    xy, xz, yz = C[0, 1] + C[1, 0], C[0, 2] + C[2, 0], C[1, 2] + C[2, 1]
    products = np.array([
        [0.0, wx, wy, wz],
        [wx, 0.0, xy, xz],
        [wy, xy, 0.0, yz],
        [wz, xz, yz, 0.0],
    ])
    k = int(np.argmax(squares))
    s = np.sqrt(max(squares[k], 0.0))
    if s == 0:
        return quaternion.IDENTITY
    row = products[k] / s
    row[k] = s
    q = quaternion.normalize(from_quat4(row))
    if q is None:
        return quaternion.IDENTITY
    return q


# ---------------------- homogeneous transforms ---------------------- #
def to_mat4(f: Frame) -> np.ndarray:
    """4x4 affine [[R, p], [0, 1]]: rotate by the orientation, then translate."""
    M = np.eye(4)
    M[:3, :3] = rotation_matrix(f.orientation)
    M[:3, 3] = to_vec3(f.position)
    return M


def from_mat4(M: ArrayLike) -> Frame:
    M = _as_flat(M, 16, "from_mat4").reshape(4, 4)
    return Frame(position=from_vec3(M[:3, 3]), orientation=quaternion_from_matrix(M[:3, :3]))


# ---------------------- Euler angles ---------------------- #
def from_euler_xyz(rad_xyz: ArrayLike) -> Quaternion:
    """XYZ intrinsic rotations in radians -> quaternion."""
    a, b, c = (float(t) for t in _as_flat(rad_xyz, 3, "from_euler_xyz"))
    xy = quaternion.mul(quaternion.x_rotation(a), quaternion.y_rotation(b))
    return quaternion.mul(xy, quaternion.z_rotation(c))


def from_euler_xyz_deg(deg_xyz: ArrayLike) -> Quaternion:
    return from_euler_xyz(np.deg2rad(_as_flat(deg_xyz, 3, "from_euler_xyz_deg")))
