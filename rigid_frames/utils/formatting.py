# rigid_frames/utils/formatting.py
from __future__ import annotations

import numpy as np  # pyright: ignore[reportMissingImports]

from rigid_frames.quaternion import Quaternion, components
from rigid_frames.vector import Vector


def format_value(value) -> str:
    if isinstance(value, (float, np.floating)):
        return f"{value:.4f}"
    if isinstance(value, Vector):
        return "[" + ", ".join(f"{c:.4f}" for c in (value.x, value.y, value.z)) + "]"
    if isinstance(value, Quaternion):
        return "[" + ", ".join(f"{c:.4f}" for c in components(value)) + "]"
    return str(value)


def format_line(name: str, value, unit: str = "") -> str:
    """
    Formats a line like:
        {Name:}           {value}{unit}
    """
    name = f"{name}:"
    return f"{name.ljust(36)}{format_value(value)}{unit}"


def hr(char: str = "-", n: int = 54) -> str:
    return char * n
