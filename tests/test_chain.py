# tests/test_chain.py
from __future__ import annotations

import math
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]
import yaml  # pyright: ignore[reportMissingModuleSource]

from rigid_frames import frame as fr
from rigid_frames import quaternion as quat
from rigid_frames import vector as vec
from rigid_frames.io.files import load_frames
from rigid_frames.run import chain

CONFIGS = Path(__file__).resolve().parents[1] / "configs"


def _write_cfg(tmp_path: Path, cfg: dict) -> Path:
    path = tmp_path / "chain.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


def test_run_composes_root_first(tmp_path, capsys):
    cfg = {
        "run": {"output": str(tmp_path / "out" / "frames.json")},
        "chain": [
            {"name": "base", "position": [0, 0, 0.5], "orientation": {"axis": [0, 0, 1], "angle_deg": 90}},
            {"name": "tool", "position": [1, 0, 0]},
        ],
        "points": [[0, 0, 0]],
    }
    tip, cumulative = chain.run(str(_write_cfg(tmp_path, cfg)))

    assert vec.equal(tip.position, vec.vector(0, 1, 0.5))
    assert quat.similar(tip.orientation, quat.z_rotation(math.pi / 2))
    assert list(cumulative) == ["base", "tool"]
    assert cumulative["tool"] == tip

    out = capsys.readouterr().out
    assert "tip position:" in out
    assert "round trip is identity:" in out and "True" in out

    saved, meta = load_frames(tmp_path / "out" / "frames.json")
    assert saved["tip"] == tip
    assert meta["links"] == ["base", "tool"]


@pytest.mark.parametrize(
    "orientation, expected",
    [
        (None, quat.IDENTITY),
        ([0, 0, 0, 1], quat.quaternion(0, 0, 0, 1)),
        ({"axis": [1, 0, 0], "angle_rad": 0.5}, quat.x_rotation(0.5)),
        ({"euler_xyz_deg": [0, 90, 0]}, quat.y_rotation(math.pi / 2)),
        ({"euler_xyz_rad": [0.25, 0, 0]}, quat.x_rotation(0.25)),
        ({"rotation_vector": [0, 0, 0.75]}, quat.z_rotation(0.75)),
    ],
)
def test_orientation_spellings(orientation, expected):
    assert quat.equal(chain._parse_orientation(orientation, "link"), expected)


@pytest.mark.parametrize(
    "orientation",
    [{"axis": [0, 0, 0], "angle_deg": 10}, {"axis": [1, 0, 0]}, {"spin": 3}, "up"],
)
def test_bad_orientation_names_the_frame(orientation):
    with pytest.raises(ValueError, match="elbow"):
        chain._parse_orientation(orientation, "elbow")


def test_empty_chain_and_missing_config(tmp_path):
    with pytest.raises(ValueError):
        chain.run(str(_write_cfg(tmp_path, {"chain": []})))
    with pytest.raises(FileNotFoundError):
        chain.run(str(tmp_path / "missing.yaml"))


def test_bundled_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    chain.main(["--config", str(CONFIGS / "arm_chain.yaml")])
    frames, _ = load_frames(tmp_path / "out" / "arm_chain.json")
    assert set(frames) == {"base", "shoulder", "elbow", "tool", "tip"}
    tip = frames["tip"]
    assert fr.equal(fr.compose(tip, fr.inverse(tip)), fr.IDENTITY)
    assert "point[1] in root:" in capsys.readouterr().out


@pytest.mark.parametrize(
    "link, match",
    [
        ({"name": "wrist", "position": [1, 2]}, "wrist"),
        ({"name": "wrist", "position": "up"}, "wrist"),
        ({"name": "wrist", "orientation": [1, 0, 0]}, "wrist"),
        ({"name": "wrist", "orientation": {"axis": [0, 1], "angle_deg": 5}}, "wrist"),
        ({"name": "wrist", "orientation": {"axis": [0, 0, 1], "angle_deg": "five"}}, "wrist"),
        ({"name": "wrist", "orientation": {"euler_xyz_deg": [0, 0]}}, "wrist"),
        ("wrist", "Chain entry 0"),
        ([0, 0, 1], "Chain entry 0"),
    ],
)
def test_bad_link_is_a_value_error_naming_it(tmp_path, link, match):
    with pytest.raises(ValueError, match=match):
        chain.run(str(_write_cfg(tmp_path, {"chain": [link]})))


@pytest.mark.parametrize("cfg", [[{"name": "base"}], "chain", {"chain": {"name": "base"}}])
def test_malformed_config_layout(tmp_path, cfg):
    path = tmp_path / "chain.yaml"
    path.write_text(yaml.safe_dump(cfg))
    with pytest.raises(ValueError):
        chain.run(str(path))
