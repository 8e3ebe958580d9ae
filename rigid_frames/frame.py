# rigid_frames/frame.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Iterable

from rigid_frames import quaternion, vector
from rigid_frames.quaternion import Quaternion
from rigid_frames.vector import Vector

# A Frame is the pose of a child coordinate system in its parent:
#   x_parent = transform_out_of(frame, x_child)
#   x_child  = transform_into(frame, x_parent)
# "intrinsic" deltas are expressed in the child's axes, "extrinsic" deltas in
# the parent's axes.


@dataclass(frozen=True)
class Frame:
    position: Vector = field(default=vector.IDENTITY)
    orientation: Quaternion = field(default=quaternion.IDENTITY)


def frame(position: Vector = vector.IDENTITY, orientation: Quaternion = quaternion.IDENTITY) -> Frame:
    return Frame(position, orientation)


IDENTITY = Frame(vector.IDENTITY, quaternion.IDENTITY)


def equal(f: Frame, g: Frame) -> bool:
    """Approximately equal positions and orientations encoding the same rotation."""
    return vector.equal(f.position, g.position) and quaternion.similar(f.orientation, g.orientation)


# ---------------------- point transforms ---------------------- #
def transform_into(f: Frame, point_in_parent: Vector) -> Vector:
    """Parent (extrinsic) coordinates -> frame (intrinsic) coordinates."""
    return quaternion.reverse_rotate(f.orientation, vector.sub(point_in_parent, f.position))


def transform_out_of(f: Frame, point_in_frame: Vector) -> Vector:
    """Frame (intrinsic) coordinates -> parent (extrinsic) coordinates."""
    return vector.add(quaternion.rotate(f.orientation, point_in_frame), f.position)


def transform_vector_into(f: Frame, v: Vector) -> Vector:
    """Like transform_into for directions: rotation only."""
    return quaternion.reverse_rotate(f.orientation, v)


def transform_vector_out_of(f: Frame, v: Vector) -> Vector:
    return quaternion.rotate(f.orientation, v)


# ---------------------- composition ---------------------- #
def compose(parent: Frame, child: Frame) -> Frame:
    """
    parent: child's parent -> world, child: child -> parent.
    Returns child -> world, i.e.
        transform_out_of(compose(a, b), x) == transform_out_of(a, transform_out_of(b, x))
    """
    return Frame(
        position=transform_out_of(parent, child.position),
        orientation=quaternion.mul(parent.orientation, child.orientation),
    )


def mul(a: Frame, b: Frame) -> Frame:
    """Flipped compose: mul(a, b) == compose(b, a)."""
    return compose(b, a)


def compose_all(frames: Iterable[Frame]) -> Frame:
    """Fold a root-first chain of frames into one; empty chain -> IDENTITY."""
    return reduce(compose, frames, IDENTITY)


def inverse(f: Frame) -> Frame:
    """
    compose(f, inverse(f)) ~ IDENTITY and
    transform_into(inverse(f), x) ~ transform_out_of(f, x).
    """
    return Frame(
        position=quaternion.reverse_rotate(f.orientation, vector.negate(f.position)),
        orientation=quaternion.conjugate(f.orientation),
    )


def set_position(position: Vector, f: Frame) -> Frame:
    return replace(f, position=position)


def set_orientation(orientation: Quaternion, f: Frame) -> Frame:
    return replace(f, orientation=orientation)


# ---------------------- nudges ---------------------- #
def intrinsic_nudge(delta: Vector, f: Frame) -> Frame:
    """Translate by delta given in the frame's own axes."""
    return replace(f, position=vector.add(f.position, quaternion.rotate(f.orientation, delta)))


def extrinsic_nudge(delta: Vector, f: Frame) -> Frame:
    """Translate by delta given in the parent's axes."""
    return replace(f, position=vector.add(f.position, delta))


def intrinsic_rotate(delta: Quaternion, f: Frame) -> Frame:
    """Rotate about the frame's own axes (delta acts before the orientation)."""
    return replace(f, orientation=quaternion.compose(delta, f.orientation))


def extrinsic_rotate(delta: Quaternion, f: Frame) -> Frame:
    """Rotate about the parent's axes (delta acts after the orientation)."""
    return replace(f, orientation=quaternion.compose(f.orientation, delta))


def interpolate(f: Frame, g: Frame, t: float) -> Frame:
    """Lerp positions, slerp orientations."""
    return Frame(
        position=vector.lerp(f.position, g.position, t),
        orientation=quaternion.slerp(f.orientation, g.orientation, t),
    )
