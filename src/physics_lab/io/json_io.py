# MIT License (see LICENSE)
"""
JSON presets for simulator parameters, and snapshot export.

A preset stores everything needed to rebuild a simulator in its initial
state. Parameters go through the same parsing and clamping as UI input, so
a hand-edited preset cannot smuggle in out-of-range values.

JSON Schema Overview:
---------------------
{
  "simulator": string,             # kind: "pendulum", "series", "heatflow", ...
  "params": {                      # Optional, any field of the *Params dataclass
    "<name>": number | string | bool
  },
  "resistors": [                   # Optional, series/parallel only
    {"resistance": float, "on": bool}
  ],
  "layers": [                      # Optional, heatflow only
    {"d": float, "k": float}
  ]
}

Snapshots are written as {"kind", "time", "state", "derived"}; numpy
values become lists and non-finite floats become null.
"""
from __future__ import annotations
import dataclasses
import json
import logging
import math
from typing import TYPE_CHECKING, Any

import numpy as np

from ..params import apply_parameter
from ..types import Snapshot

if TYPE_CHECKING:
    from ..simulators.base import Simulator

logger = logging.getLogger(__name__)


def load_preset_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a preset file without building a simulator.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_preset(path: str, **kwargs) -> "Simulator":
    """
    Build a simulator from a preset file.

    Args:
        path: Path to the JSON preset.
        **kwargs: Extra constructor arguments (renderer, request_frame, seed, ...).

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: Missing/unknown simulator kind, unknown parameter or a
            misplaced/malformed "resistors" or "layers" list.
    """
    return preset_from_json(load_preset_raw(path), **kwargs)


def preset_from_json(data: dict[str, Any], **kwargs) -> "Simulator":
    """
    Build a simulator from a decoded preset dictionary.

    Raises:
        ValueError: Missing/unknown simulator kind, unknown parameter, or a
            "resistors"/"layers" list the simulator cannot hold or that is malformed.
    """
    from ..simulators import SIMULATORS, create_simulator
    from ..simulators.circuits import CircuitSimulator
    from ..simulators.heatflow import HeatFlowSimulator

    if "simulator" not in data:
        raise ValueError("Preset missing required 'simulator' field.")
    kind = str(data["simulator"]).lower()
    if kind not in SIMULATORS:
        raise ValueError(f"Unknown simulator: '{kind}' (expected one of {sorted(SIMULATORS)})")
    cls = SIMULATORS[kind]
    if "resistors" in data and not issubclass(cls, CircuitSimulator):
        raise ValueError(f"Preset field 'resistors' is only valid for series/parallel, not '{kind}'.")
    if "layers" in data and not issubclass(cls, HeatFlowSimulator):
        raise ValueError(f"Preset field 'layers' is only valid for heatflow, not '{kind}'.")

    params = params_from_json(cls.params_type, data.get("params", {}))
    sim = create_simulator(kind, params=params, **kwargs)

    try:
        if "resistors" in data:
            for r in list(sim.resistors):
                sim.remove_resistor(r.id)
            for r_data in data["resistors"]:
                r = sim.add_resistor(float(r_data["resistance"]))
                if not r_data.get("on", True):
                    sim.toggle(r.id)
        for layer in data.get("layers", []):
            sim.add_layer(float(layer["d"]), float(layer["k"]))
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Malformed '{kind}' preset entry: {exc!r}") from exc

    logger.debug("preset loaded: %s", kind)
    return sim


def params_from_json(params_type: type, d: dict[str, Any]) -> Any:
    """
    Build a params dataclass from a mapping of raw values.

    Values are parsed and clamped like UI input.

    Raises:
        ValueError: Unknown field or invalid choice.
    """
    params = params_type()
    for name, value in d.items():
        apply_parameter(params, name, value)
    return params


def params_to_json(params: Any) -> dict[str, Any]:
    """Serialize a params dataclass to a plain dictionary."""
    return {f.name: getattr(params, f.name) for f in dataclasses.fields(params)}


def preset_to_json(sim: "Simulator") -> dict[str, Any]:
    """
    Serialize a simulator's configuration (not its running state).
    """
    result: dict[str, Any] = {"simulator": sim.kind, "params": params_to_json(sim.params)}
    resistors = getattr(sim, "resistors", None)
    if resistors is not None:
        result["resistors"] = [{"resistance": r.resistance, "on": r.on} for r in resistors]
    layers = getattr(sim, "layers", None)
    if layers:
        result["layers"] = [{"d": layer.d, "k": layer.k} for layer in layers]
    return result


def save_preset(sim: "Simulator", path: str, indent: int = 2) -> None:
    """Save a simulator's configuration to a JSON file on disk."""
    data = preset_to_json(sim)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def snapshot_to_json(snapshot: Snapshot) -> dict[str, Any]:
    """Convert a Snapshot to strict-JSON-compatible data."""
    return _to_jsonable(snapshot.as_dict())


def save_snapshot(snapshot: Snapshot, path: str, indent: int = 2) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_json(snapshot), f, indent=indent, allow_nan=False)


def _to_jsonable(value: Any) -> Any:
    """Helper: numpy arrays/scalars to lists/floats, tuples to lists, inf/nan to None."""
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, np.ndarray):
        return _to_jsonable(value.tolist())
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        v = float(value)
        return v if math.isfinite(v) else None
    return value
