# rigid_frames/run/chain.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import numpy as np  # pyright: ignore[reportMissingImports]
import yaml  # pyright: ignore[reportMissingModuleSource]

from rigid_frames import frame as fr
from rigid_frames import quaternion as quat
from rigid_frames import vector as vec
from rigid_frames.frame import Frame
from rigid_frames.interop import from_euler_xyz, from_euler_xyz_deg, from_quat4, from_vec3
from rigid_frames.io.files import save_frames
from rigid_frames.quaternion import Quaternion
from rigid_frames.utils.formatting import format_line, hr

T = TypeVar("T")


def _load_cfg(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Config does not exist: {path}")
    with path.open("r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(cfg).__name__}")
    return cfg


def _converted(convert: Callable[[Any], T], value: Any, name: str, what: str) -> T:
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Frame '{name}': bad {what} {value!r} ({e})") from e


def _parse_orientation(entry: Any, name: str) -> Quaternion:
    """
    Accepted spellings:
        [w, x, y, z]
        {axis: [x, y, z], angle_deg: a} | {axis: [...], angle_rad: a}
        {euler_xyz_deg: [a, b, c]} | {euler_xyz_rad: [a, b, c]}
        {rotation_vector: [x, y, z]}
    """
    if entry is None:
        return quat.IDENTITY
    if isinstance(entry, (list, tuple)):
        return _converted(from_quat4, entry, name, "orientation")
    if not isinstance(entry, dict):
        raise ValueError(f"Frame '{name}': unsupported orientation {entry!r}")

    if "axis" in entry:
        if "angle_deg" in entry:
            angle = float(np.deg2rad(_converted(float, entry["angle_deg"], name, "angle_deg")))
        elif "angle_rad" in entry:
            angle = _converted(float, entry["angle_rad"], name, "angle_rad")
        else:
            raise ValueError(f"Frame '{name}': axis orientation needs angle_deg or angle_rad")
        q = quat.from_axis_angle(_converted(from_vec3, entry["axis"], name, "axis"), angle)
        if q is None:
            raise ValueError(f"Frame '{name}': rotation axis must be non-zero")
        return q
    if "euler_xyz_deg" in entry:
        return _converted(from_euler_xyz_deg, entry["euler_xyz_deg"], name, "euler_xyz_deg")
    if "euler_xyz_rad" in entry:
        return _converted(from_euler_xyz, entry["euler_xyz_rad"], name, "euler_xyz_rad")
    if "rotation_vector" in entry:
        return quat.from_vector(_converted(from_vec3, entry["rotation_vector"], name, "rotation_vector"))
    raise ValueError(f"Frame '{name}': unknown orientation keys {sorted(entry)}")


def _parse_link(item: Any, idx: int) -> Tuple[str, Frame]:
    if not isinstance(item, dict):
        raise ValueError(f"Chain entry {idx}: expected a mapping, got {item!r}")
    name = str(item.get("name", f"link{idx}"))
    position = _converted(from_vec3, item["position"], name, "position") if "position" in item else vec.ZERO
    return name, Frame(position, _parse_orientation(item.get("orientation"), name))


def run(cfg_path: str) -> Tuple[Frame, Dict[str, Frame]]:
    """
    Compose the root-first chain in the config and report the result.
    Returns (tip frame in root coordinates, {name: cumulative frame}).
    """
    cfg = _load_cfg(Path(cfg_path))

    items = cfg.get("chain") or []
    if not isinstance(items, list):
        raise ValueError(f"{cfg_path}: 'chain' must be a list")
    links = [_parse_link(item, i) for i, item in enumerate(items)]
    if not links:
        raise ValueError(f"No 'chain' entries in {cfg_path}")

    print(hr())
    print(format_line("links", len(links)))
    cumulative: Dict[str, Frame] = {}
    tip = fr.IDENTITY
    for name, link in links:
        tip = fr.compose(tip, link)
        cumulative[name] = tip
        print(format_line(f"{name} position", tip.position))
        print(format_line(f"{name} orientation", tip.orientation))
        print(format_line(f"{name} angle", float(np.rad2deg(quat.angle(tip.orientation))), " deg"))

    print(hr())
    inv = fr.inverse(tip)
    print(format_line("tip position", tip.position))
    print(format_line("tip orientation", tip.orientation))
    print(format_line("inverse position", inv.position))
    print(format_line("inverse orientation", inv.orientation))
    print(format_line("round trip is identity", fr.equal(fr.compose(tip, inv), fr.IDENTITY)))

    points: List[Sequence[float]] = cfg.get("points") or []
    for i, p in enumerate(points):
        print(format_line(f"point[{i}] in root", fr.transform_out_of(tip, from_vec3(p))))

    output = (cfg.get("run") or {}).get("output")
    if output:
        out = save_frames(
            output,
            {**cumulative, "tip": tip},
            metadata={"config": str(cfg_path), "links": [name for name, _ in links]},
        )
        print(f"Saved frames to {out}")
    print(hr())
    return tip, cumulative


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Compose a chain of frames from a YAML config.")
    parser.add_argument("--config", "-c", required=True, help="Path to YAML config (e.g., configs/arm_chain.yaml)")
    args = parser.parse_args(argv)
    run(args.config)


if __name__ == "__main__":
    main()
