# rigid_frames/io/files.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from rigid_frames.frame import Frame
from rigid_frames.io.codec import DecodeError, decode_frame, encode_frame


def save_frames(path: str | os.PathLike,
                frames: Mapping[str, Frame],
                metadata: Optional[Dict[str, Any]] = None) -> Path:
    """
    Save named frames (plus optional metadata) as one JSON document:
        {"frames": {name: {"position": [...], "orientation": [...]}}, "metadata": {...}}
    Parent directories are created. Returns the written path.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    doc = {
        "frames": {name: encode_frame(f) for name, f in frames.items()},
        "metadata": dict(metadata or {}),
    }
    # nothing is written unless the whole document serializes
    text = json.dumps(doc, indent=2, sort_keys=True)
    out.write_text(text)
    return out


def load_frames(path: str | os.PathLike) -> Tuple[Dict[str, Frame], Dict[str, Any]]:
    """
    Load a document written by save_frames. Returns (frames, metadata).
    """
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Frames file does not exist: {src}")
    with src.open("r") as fh:
        try:
            doc = json.load(fh)
        except json.JSONDecodeError as e:
            raise DecodeError(f"{src}: invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("frames"), dict):
        raise DecodeError(f"{src}: expected an object with a 'frames' object")
    frames = {str(name): decode_frame(data, f"frames.{name}") for name, data in doc["frames"].items()}
    meta = doc.get("metadata") or {}
    if not isinstance(meta, dict):
        raise DecodeError(f"{src}: 'metadata' must be an object")
    return frames, meta
