# tests/test_codec.py
from __future__ import annotations

import pytest  # pyright: ignore[reportMissingImports]

from rigid_frames import quaternion as quat
from rigid_frames import vector as vec
from rigid_frames.frame import Frame
from rigid_frames.io import codec
from rigid_frames.io.codec import DecodeError


def test_wire_shapes():
    f = Frame(vec.vector(1, 2, 3), quat.quaternion(4, 5, 6, 7))
    assert codec.encode_vector(f.position) == [1, 2, 3]
    assert codec.encode_quaternion(f.orientation) == [4, 5, 6, 7]
    assert codec.encode_frame(f) == {"position": [1, 2, 3], "orientation": [4, 5, 6, 7]}


def test_round_trip_is_exact(random_frame):
    for _ in range(20):
        f = random_frame(unit=False)
        assert codec.decode_vector(codec.encode_vector(f.position)) == f.position
        assert codec.decode_quaternion(codec.encode_quaternion(f.orientation)) == f.orientation
        assert codec.decode_frame(codec.encode_frame(f)) == f


def test_json_text_round_trip_is_exact(random_frame):
    f = random_frame()
    assert codec.loads(codec.dumps(f), "frame") == f
    assert codec.loads(codec.dumps(f.position), "vector") == f.position
    assert codec.loads(codec.dumps(f.orientation), "quaternion") == f.orientation


def test_decode_accepts_ints_and_tuples():
    assert codec.decode_vector((1, 2, 3)) == vec.vector(1.0, 2.0, 3.0)
    assert codec.decode([1, 0, 0, 0], "quaternion") == quat.IDENTITY


@pytest.mark.parametrize(
    "data",
    [[1, 2], [1, 2, 3, 4], "abc", None, {"x": 1}, [1, "2", 3], [1, True, 3], [1, None, 3]],
)
def test_decode_vector_rejects_bad_shapes(data):
    with pytest.raises(DecodeError):
        codec.decode_vector(data)


def test_decode_quaternion_rejects_wrong_arity():
    with pytest.raises(DecodeError, match="expected 4 numbers, got 3"):
        codec.decode_quaternion([1, 0, 0])


@pytest.mark.parametrize(
    "data, where",
    [
        ([1, 2, 3], "frame"),
        ({"position": [0, 0, 0]}, "frame"),
        ({"position": [0, 0, 0], "orientation": [1, 0, 0, 0], "scale": 1}, "frame"),
        ({"position": [0, 0], "orientation": [1, 0, 0, 0]}, "frame.position"),
        ({"position": [0, 0, 0], "orientation": [1, 0, "x", 0]}, r"frame\.orientation\[2\]"),
    ],
)
def test_decode_frame_reports_path(data, where):
    with pytest.raises(DecodeError, match=where):
        codec.decode_frame(data)


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        codec.decode_vector([])


def test_loads_rejects_invalid_json():
    with pytest.raises(DecodeError, match="invalid JSON"):
        codec.loads("[1, 2,", "vector")


def test_unknown_kind_and_type():
    with pytest.raises(ValueError, match="Unknown kind"):
        codec.decode([1, 2, 3], "matrix")
    with pytest.raises(TypeError):
        codec.encode([1, 2, 3])
