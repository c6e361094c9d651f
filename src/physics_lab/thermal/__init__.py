# MIT License (see LICENSE)
"""
Heat conduction and thermal expansion.

This subpackage provides:
    - Steady conduction: slab_heat_rate, wall_heat_rate, heat_rate.
    - Two-body transient exchange: TwoBodyConduction with sticky equilibrium.
    - Expansion: expansion() for linear/areal/volumetric change.
"""
from .conduction import (
    GEOMETRIES,
    Layer,
    BodyProps,
    TwoBodyConduction,
    slab_heat_rate,
    wall_resistance,
    wall_heat_rate,
    heat_rate,
    interface_conductivity,
    equilibrium_temperature,
)
from .expansion import (
    ExpansionKind,
    INITIAL_LENGTH_MM,
    INITIAL_AREA_MM2,
    INITIAL_VOLUME_MM3,
    expansion,
    expanded_size,
)

__all__ = [
    # Conduction
    "GEOMETRIES",
    "Layer",
    "BodyProps",
    "TwoBodyConduction",
    "slab_heat_rate",
    "wall_resistance",
    "wall_heat_rate",
    "heat_rate",
    "interface_conductivity",
    "equilibrium_temperature",
    # Expansion
    "ExpansionKind",
    "INITIAL_LENGTH_MM",
    "INITIAL_AREA_MM2",
    "INITIAL_VOLUME_MM3",
    "expansion",
    "expanded_size",
]
