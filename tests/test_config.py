from __future__ import annotations

import json
from pathlib import Path

import pytest

from ji_engine.config import EngineConfig, engine_config_from_dict, load_engine_config
from ji_engine.lattice import INFINITE, LengthBounded, RangeBounded
from ji_engine.playback import MIDDLE_C_HZ
from ji_engine.ratio import IntWidth, Ratio


def test_defaults_match_cli_defaults():
    cfg = EngineConfig()
    assert cfg.width is IntWidth.I32
    assert cfg.root_hz == MIDDLE_C_HZ
    assert cfg.diamond_identities == [1, 5, 3]
    lattice = cfg.build_lattice()
    assert [d.ratio for d in lattice.dimensions] == [Ratio(3, 2), Ratio(5, 4)]
    assert all(d.bounds is INFINITE for d in lattice.dimensions)


def test_load_engine_config_with_bounds(tmp_path: Path):
    raw = {
        "width": "i64",
        "diamond_identities": [1, 3, 5, 7],
        "lattice": [
            {"ratio": "3/2", "bounds": {"kind": "length", "n": 2}},
            {"ratio": "5/4", "bounds": {"kind": "range", "low": -2, "high": 3}},
            "7/4",
        ],
        "bpm": 90,
        "out": str(tmp_path / "x.mid"),
        "unknown_key": "ignored",
    }
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps(raw))

    cfg = load_engine_config(str(path))
    assert cfg.width is IntWidth.I64
    assert cfg.diamond_identities == [1, 3, 5, 7]
    assert cfg.bpm == 90.0

    lattice = cfg.build_lattice()
    assert len(lattice) == 3
    assert lattice.dimensions[0].bounds == LengthBounded(2)
    assert lattice.dimensions[1].bounds == RangeBounded(-2, 3)
    assert lattice.dimensions[2].bounds is INFINITE
    assert lattice.dimensions[0].ratio.width is IntWidth.I64
    assert lattice.at([2, 0, 0]) == Ratio(1, 1)


@pytest.mark.parametrize(
    "raw",
    [
        {"width": "i7"},
        {"lattice": [{"ratio": "3:2"}]},
        {"lattice": [{"bounds": {"kind": "infinite"}}]},
        {"lattice": [{"ratio": "3/2", "bounds": {"kind": "length", "n": 0}}]},
        {"bpm": 0},
        {"root_hz": None},
        {"diamond_identities": None},
        {"lattice": 5},
        {"lattice": [{"ratio": "3/2", "bounds": 5}]},
        {"lattice": [{"ratio": "3/2", "bounds": {"kind": "length", "n": None}}]},
    ],
)
def test_malformed_config_raises_value_error(raw):
    with pytest.raises(ValueError):
        engine_config_from_dict(raw)


def test_non_object_config_rejected(tmp_path: Path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_engine_config(str(path))
