# tests/conftest.py
from __future__ import annotations

import numpy as np  # pyright: ignore[reportMissingImports]
import pytest  # pyright: ignore[reportMissingImports]

from rigid_frames import quaternion as quat
from rigid_frames.frame import Frame
from rigid_frames.quaternion import Quaternion
from rigid_frames.vector import Vector


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def random_vector(rng):
    def make(scale: float = 1.0) -> Vector:
        x, y, z = rng.uniform(-scale, scale, size=3)
        return Vector(float(x), float(y), float(z))
    return make


@pytest.fixture
def random_quaternion(rng):
    """Random rotation; unit=False keeps a random (non-zero) norm."""
    def make(unit: bool = True) -> Quaternion:
        w, x, y, z = rng.standard_normal(4)
        q = quat.quaternion(float(w), float(x), float(y), float(z))
        if unit:
            return quat.normalize(q)
        return q
    return make


@pytest.fixture
def random_frame(random_vector, random_quaternion):
    def make(unit: bool = True) -> Frame:
        return Frame(random_vector(5.0), random_quaternion(unit))
    return make
