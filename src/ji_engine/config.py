from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .lattice import Lattice, LatticeDimension, bounds_from_dict
from .playback import MIDDLE_C_HZ
from .ratio import IntWidth, Ratio


@dataclass
class DimensionConfig:
    ratio: str
    bounds: Dict[str, Any] = field(default_factory=lambda: {"kind": "infinite"})


def _default_dimensions() -> List[DimensionConfig]:
    return [DimensionConfig("3/2"), DimensionConfig("5/4")]


@dataclass
class EngineConfig:
    width: IntWidth = IntWidth.I32
    root_hz: float = MIDDLE_C_HZ
    diamond_identities: List[int] = field(default_factory=lambda: [1, 5, 3])
    lattice: List[DimensionConfig] = field(default_factory=_default_dimensions)
    bpm: float = 120.0
    ppq: int = 480
    tone_seconds: float = 2.0
    gap_seconds: float = 0.5
    out: str = "out/dyad.mid"

    def build_lattice(self) -> Lattice:
        dims = [
            LatticeDimension(Ratio.parse(d.ratio, self.width), bounds_from_dict(d.bounds))
            for d in self.lattice
        ]
        return Lattice(dims)


def _dimension_from_dict(d: Any) -> DimensionConfig:
    # A bare "3/2" string is shorthand for an infinite dimension
    if isinstance(d, str):
        return DimensionConfig(ratio=d)
    if not isinstance(d, dict) or "ratio" not in d:
        raise ValueError(f"lattice dimension needs a 'ratio', got {d!r}")
    bounds = d.get("bounds") or {"kind": "infinite"}
    if not isinstance(bounds, dict):
        raise ValueError(f"lattice bounds must be an object, got {bounds!r}")
    return DimensionConfig(ratio=str(d["ratio"]), bounds=dict(bounds))


def _engine_config_from_dict(raw: Dict[str, Any]) -> EngineConfig:
    # Unknown keys ignored
    try:
        cfg = EngineConfig(
            width=IntWidth.parse(raw.get("width", "i32")),
            root_hz=float(raw.get("root_hz", MIDDLE_C_HZ)),
            diamond_identities=[int(i) for i in raw.get("diamond_identities", [1, 5, 3])],
            bpm=float(raw.get("bpm", 120.0)),
            ppq=int(raw.get("ppq", 480)),
            tone_seconds=float(raw.get("tone_seconds", 2.0)),
            gap_seconds=float(raw.get("gap_seconds", 0.5)),
            out=str(raw.get("out", "out/dyad.mid")),
        )
    except TypeError as exc:
        raise ValueError(f"malformed config value: {exc}") from exc
    if "lattice" in raw:
        if not isinstance(raw["lattice"], list):
            raise ValueError(f"'lattice' must be a list of dimensions, got {raw['lattice']!r}")
        cfg.lattice = [_dimension_from_dict(d) for d in raw["lattice"]]
    # Parse eagerly so malformed ratios or bounds fail at load time
    cfg.build_lattice()
    if cfg.bpm <= 0 or cfg.ppq <= 0 or cfg.tone_seconds <= 0 or cfg.gap_seconds < 0:
        raise ValueError("bpm, ppq and tone_seconds must be positive and gap_seconds non-negative")
    return cfg


def engine_config_from_dict(raw: Dict[str, Any]) -> EngineConfig:
    return _engine_config_from_dict(raw)


def load_engine_config(path: str) -> EngineConfig:
    with open(path, "r") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return _engine_config_from_dict(raw)
