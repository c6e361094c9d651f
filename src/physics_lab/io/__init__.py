# MIT License (see LICENSE)
"""
Input/Output utilities for the simulators.

This subpackage provides:
    - JSON presets: save and load a simulator's parameters (and resistor or
      layer lists) to/from JSON files.
    - Snapshot export: strict-JSON dumps of per-tick snapshots.

Typical usage:
    from physics_lab.io import load_preset, save_preset, snapshot_to_json

    sim = load_preset("pendulum.json")
    save_preset(sim, "copy.json")
    data = snapshot_to_json(sim.snapshot())
"""
from .json_io import (
    load_preset,
    load_preset_raw,
    preset_from_json,
    save_preset,
    preset_to_json,
    params_to_json,
    params_from_json,
    snapshot_to_json,
    save_snapshot,
)

__all__ = [
    # Loading
    "load_preset",
    "load_preset_raw",
    "preset_from_json",
    # Saving
    "save_preset",
    "save_snapshot",
    # Serialization
    "preset_to_json",
    "params_to_json",
    "params_from_json",
    "snapshot_to_json",
]
