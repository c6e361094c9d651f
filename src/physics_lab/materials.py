# MIT License (see LICENSE)
"""
Material and environment tables used by the simulators.

Each table maps a lowercase key to a frozen record:
    - THERMAL_MATERIALS: conductivity k, specific heat c, density ρ (heat flow).
    - EXPANSION_MATERIALS: linear expansion coefficient α, density (thermal expansion).
    - OPTICAL_MEDIA: refractive index n (refraction).
    - PLANETS: surface gravity g (free fall).

Lookups go through thermal_material(), expansion_material(), optical_medium()
and planet(), which raise ValueError for an unknown key so that a typo in
a preset fails loudly instead of silently simulating the wrong material.

References:
    https://en.wikipedia.org/wiki/List_of_thermal_conductivities
    https://en.wikipedia.org/wiki/Thermal_expansion#Coefficients_for_various_materials
    https://en.wikipedia.org/wiki/List_of_refractive_indices
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ThermalMaterial:
    """
    Bulk thermal properties of a conductor.

    Attributes:
        name: Display name.
        k: Thermal conductivity in W/(m·K).
        c: Specific heat capacity in J/(kg·K).
        rho: Density in kg/m³.
    """
    name: str
    k: float
    c: float
    rho: float = 1000.0


@dataclass(frozen=True)
class ExpansionMaterial:
    """
    Attributes:
        name: Display name.
        alpha: Coefficient of linear expansion in 1/°C.
        density: Density in kg/m³ (display only).
    """
    name: str
    alpha: float
    density: float


@dataclass(frozen=True)
class OpticalMedium:
    """A transparent medium with refractive index n (n ≥ 1)."""
    name: str
    n: float


@dataclass(frozen=True)
class Planet:
    """Surface gravitational acceleration g in m/s²."""
    name: str
    g: float


THERMAL_MATERIALS: dict[str, ThermalMaterial] = {
    "copper": ThermalMaterial("Copper", k=401.0, c=385.0, rho=8960.0),
    "aluminum": ThermalMaterial("Aluminum", k=237.0, c=897.0, rho=2700.0),
    "iron": ThermalMaterial("Iron", k=80.0, c=449.0, rho=7870.0),
    "brass": ThermalMaterial("Brass", k=109.0, c=380.0, rho=8530.0),
    "glass": ThermalMaterial("Glass", k=1.0, c=840.0, rho=2500.0),
    "wood": ThermalMaterial("Wood", k=0.12, c=1700.0, rho=700.0),
    "plastic": ThermalMaterial("Plastic", k=0.2, c=1500.0, rho=950.0),
}

# Defaults of the "custom" entry when the user has not typed values.
CUSTOM_THERMAL = ThermalMaterial("Custom", k=10.0, c=500.0)

EXPANSION_MATERIALS: dict[str, ExpansionMaterial] = {
    "iron": ExpansionMaterial("Iron", 12e-6, 7870.0),
    "copper": ExpansionMaterial("Copper", 17e-6, 8960.0),
    "aluminum": ExpansionMaterial("Aluminum", 23e-6, 2700.0),
    "brass": ExpansionMaterial("Brass", 19e-6, 8500.0),
    "glass": ExpansionMaterial("Glass", 9e-6, 2500.0),
    "steel": ExpansionMaterial("Steel", 11e-6, 7850.0),
    "gold": ExpansionMaterial("Gold", 14e-6, 19300.0),
    "silver": ExpansionMaterial("Silver", 18e-6, 10500.0),
    "zinc": ExpansionMaterial("Zinc", 30e-6, 7140.0),
    "lead": ExpansionMaterial("Lead", 29e-6, 11340.0),
}

OPTICAL_MEDIA: dict[str, OpticalMedium] = {
    "air": OpticalMedium("Air", 1.000),
    "glass": OpticalMedium("Glass", 1.516),
    "water": OpticalMedium("Water", 1.330),
    "oil": OpticalMedium("Oil", 1.470),
    "diamond": OpticalMedium("Diamond", 2.410),
}

PLANETS: dict[str, Planet] = {
    "mercury": Planet("Mercury", 3.7),
    "venus": Planet("Venus", 8.87),
    "earth": Planet("Earth", 9.81),
    "moon": Planet("Moon", 1.62),
    "mars": Planet("Mars", 3.71),
    "jupiter": Planet("Jupiter", 24.79),
    "saturn": Planet("Saturn", 10.44),
    "uranus": Planet("Uranus", 8.69),
    "neptune": Planet("Neptune", 11.15),
}


def _lookup(table: dict, key: str, kind: str):
    try:
        return table[key.lower()]
    except KeyError:
        raise ValueError(f"Unknown {kind}: '{key}' (expected one of {sorted(table)})") from None


def thermal_material(key: str, k: float | None = None, c: float | None = None) -> ThermalMaterial:
    """
    Look up a heat-flow material; ``"custom"`` builds one from k and c.

    Raises:
        ValueError: If the key is not in THERMAL_MATERIALS and is not "custom".
    """
    if key.lower() == "custom":
        return ThermalMaterial(
            "Custom",
            k=CUSTOM_THERMAL.k if k is None else k,
            c=CUSTOM_THERMAL.c if c is None else c,
        )
    return _lookup(THERMAL_MATERIALS, key, "thermal material")


def expansion_material(key: str) -> ExpansionMaterial:
    return _lookup(EXPANSION_MATERIALS, key, "expansion material")


def optical_medium(key: str) -> OpticalMedium:
    return _lookup(OPTICAL_MEDIA, key, "optical medium")


def planet(key: str) -> Planet:
    return _lookup(PLANETS, key, "planet")
