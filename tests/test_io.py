# MIT License (see LICENSE)
import json
import math

import numpy as np
import pytest
from physics_lab.io import (
    load_preset,
    load_preset_raw,
    preset_from_json,
    preset_to_json,
    save_preset,
    save_snapshot,
    snapshot_to_json,
)
from physics_lab.simulators import HeatFlowSimulator, ParallelCircuitSimulator, SeriesCircuitSimulator
from physics_lab.types import Snapshot


def test_series_preset_round_trip(tmp_path):
    sim = SeriesCircuitSimulator()
    sim.set_parameter("voltage", 9, immediate=True)
    r = sim.add_resistor(47.0)
    sim.toggle(r.id)
    path = tmp_path / "series.json"
    save_preset(sim, str(path))

    raw = load_preset_raw(str(path))
    assert raw["simulator"] == "series"
    assert raw["params"]["voltage"] == 9.0

    loaded = load_preset(str(path))
    assert isinstance(loaded, SeriesCircuitSimulator)
    assert [(x.resistance, x.on) for x in loaded.resistors] == [(100.0, True), (200.0, True), (47.0, False)]
    assert loaded.solution.current == 0.0


def test_preset_values_are_clamped():
    sim = preset_from_json({"simulator": "Parallel", "params": {"voltage": 5000, "speed": "2"}})
    assert isinstance(sim, ParallelCircuitSimulator)
    assert sim.params.voltage == 1000.0
    assert sim.params.speed == 2.0


def test_preset_layers():
    data = {"simulator": "heatflow", "params": {"geometry": "wall"}, "layers": [{"d": 0.1, "k": 1.0}, {"d": 0.2, "k": 0.5}]}
    sim = preset_from_json(data)
    assert isinstance(sim, HeatFlowSimulator)
    assert len(sim.layers) == 2
    assert preset_to_json(sim)["layers"] == data["layers"]


def test_preset_errors():
    with pytest.raises(ValueError):
        preset_from_json({"params": {}})
    with pytest.raises(ValueError):
        preset_from_json({"simulator": "wave"})
    with pytest.raises(ValueError):
        preset_from_json({"simulator": "pendulum", "params": {"colour": "red"}})


def test_snapshot_is_strict_json(tmp_path):
    snap = Snapshot(
        "parallel", 1.5,
        state={"v": np.array([1.0, 2.0]), "n": np.int64(3), "flag": np.bool_(True)},
        derived={"r_eq": math.inf, "currents": {1: 0.1}, "nan": float("nan")},
    )
    data = snapshot_to_json(snap)
    assert data["state"] == {"v": [1.0, 2.0], "n": 3, "flag": True}
    assert data["derived"] == {"r_eq": None, "currents": {"1": 0.1}, "nan": None}

    path = tmp_path / "snap.json"
    save_snapshot(snap, str(path))
    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f)["kind"] == "parallel"


def test_every_simulator_snapshot_serializes():
    from physics_lab.simulators import SIMULATORS

    for kind, cls in SIMULATORS.items():
        sim = cls()
        data = snapshot_to_json(sim.snapshot())
        json.dumps(data, allow_nan=False)
        assert data["kind"] == kind


def test_preset_lists_only_for_matching_simulators():
    with pytest.raises(ValueError, match="resistors"):
        preset_from_json({"simulator": "pendulum", "resistors": [{"resistance": 10.0}]})
    with pytest.raises(ValueError, match="layers"):
        preset_from_json({"simulator": "series", "layers": [{"d": 0.1, "k": 1.0}]})
    with pytest.raises(ValueError, match="Malformed"):
        preset_from_json({"simulator": "series", "resistors": [{"ohms": 10.0}]})
    with pytest.raises(ValueError, match="Malformed"):
        preset_from_json({"simulator": "heatflow", "layers": [{"d": 0.1}]})
