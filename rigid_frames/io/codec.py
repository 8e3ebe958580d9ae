# rigid_frames/io/codec.py
from __future__ import annotations

import json
from numbers import Real
from typing import Any, Dict, List, Union

from rigid_frames.frame import Frame
from rigid_frames.quaternion import Quaternion
from rigid_frames.vector import Vector

# Wire format (JSON-compatible Python values):
#   Vector     -> [x, y, z]
#   Quaternion -> [w, x, y, z]
#   Frame      -> {"position": [x, y, z], "orientation": [w, x, y, z]}

Value = Union[Vector, Quaternion, Frame]

_FRAME_KEYS = ("orientation", "position")


class DecodeError(ValueError):
    """Malformed serialized data. The message names the offending path."""


# ---------------------- encode ---------------------- #
def encode_vector(v: Vector) -> List[float]:
    return [v.x, v.y, v.z]


def encode_quaternion(q: Quaternion) -> List[float]:
    return [q.scalar, q.vector.x, q.vector.y, q.vector.z]


def encode_frame(f: Frame) -> Dict[str, List[float]]:
    return {
        "position": encode_vector(f.position),
        "orientation": encode_quaternion(f.orientation),
    }


def encode(value: Value) -> Any:
    if isinstance(value, Vector):
        return encode_vector(value)
    if isinstance(value, Quaternion):
        return encode_quaternion(value)
    if isinstance(value, Frame):
        return encode_frame(value)
    raise TypeError(f"Cannot encode {type(value).__name__}")


# ---------------------- decode ---------------------- #
def _numbers(data: Any, n: int, path: str) -> List[float]:
    if not isinstance(data, (list, tuple)):
        raise DecodeError(f"{path}: expected a list of {n} numbers, got {type(data).__name__}")
    if len(data) != n:
        raise DecodeError(f"{path}: expected {n} numbers, got {len(data)}")
    out = []
    for i, x in enumerate(data):
        # bool is an int subclass; reject it explicitly
        if isinstance(x, bool) or not isinstance(x, Real):
            raise DecodeError(f"{path}[{i}]: expected a number, got {type(x).__name__}")
        out.append(float(x))
    return out


def decode_vector(data: Any, path: str = "vector") -> Vector:
    x, y, z = _numbers(data, 3, path)
    return Vector(x, y, z)


def decode_quaternion(data: Any, path: str = "quaternion") -> Quaternion:
    w, x, y, z = _numbers(data, 4, path)
    return Quaternion(w, Vector(x, y, z))


def decode_frame(data: Any, path: str = "frame") -> Frame:
    if not isinstance(data, dict):
        raise DecodeError(f"{path}: expected an object, got {type(data).__name__}")
    if set(data) != set(_FRAME_KEYS):
        got = sorted(str(k) for k in data)
        raise DecodeError(f"{path}: expected keys {list(_FRAME_KEYS)}, got {got}")
    return Frame(
        position=decode_vector(data["position"], f"{path}.position"),
        orientation=decode_quaternion(data["orientation"], f"{path}.orientation"),
    )


_DECODERS = {
    "vector": decode_vector,
    "quaternion": decode_quaternion,
    "frame": decode_frame,
}


def decode(data: Any, kind: str) -> Value:
    try:
        decoder = _DECODERS[kind]
    except KeyError:
        raise ValueError(f"Unknown kind '{kind}'. Use one of {sorted(_DECODERS)}.") from None
    return decoder(data)


# ---------------------- JSON text ---------------------- #
def dumps(value: Value) -> str:
    return json.dumps(encode(value))


def loads(text: str, kind: str) -> Value:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"{kind}: invalid JSON ({e.msg} at line {e.lineno} column {e.colno})") from e
    return decode(data, kind)
