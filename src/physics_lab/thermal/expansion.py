# MIT License (see LICENSE)
"""
Linear, areal and volumetric thermal expansion.

    ΔL = L₀·α·ΔT        ΔA = A₀·2α·ΔT        ΔV = V₀·3α·ΔT

The factors 2 and 3 are the first-order isotropic approximations.
The temperature driving ΔT is animated elsewhere (``ramp_toward``); this
module only holds the formula and the reference dimensions.

Reference: https://en.wikipedia.org/wiki/Thermal_expansion
"""
from __future__ import annotations
from enum import Enum


class ExpansionKind(Enum):
    LINEAR = "linear"
    AREAL = "areal"
    VOLUMETRIC = "volumetric"

    @property
    def factor(self) -> int:
        return _FACTORS[self]

    @property
    def unit(self) -> str:
        return _UNITS[self]

    @classmethod
    def parse(cls, value: "str | ExpansionKind") -> "ExpansionKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown expansion type: '{value}'") from None


_FACTORS = {ExpansionKind.LINEAR: 1, ExpansionKind.AREAL: 2, ExpansionKind.VOLUMETRIC: 3}
_UNITS = {ExpansionKind.LINEAR: "mm", ExpansionKind.AREAL: "mm²", ExpansionKind.VOLUMETRIC: "mm³"}

# Reference dimensions of the sample at the initial temperature.
INITIAL_LENGTH_MM: float = 100.0
INITIAL_AREA_MM2: float = 10_000.0
INITIAL_VOLUME_MM3: float = 1_000_000.0


def expansion(initial: float, alpha: float, delta_t: float, kind: ExpansionKind | str = ExpansionKind.LINEAR) -> float:
    """
    Change in size for a temperature change ``delta_t``.

    Args:
        initial: L₀, A₀ or V₀ (any unit; the result has the same unit).
        alpha: Linear expansion coefficient in 1/°C.
        delta_t: Current minus initial temperature in °C.
        kind: Which dimension expands.
    """
    return initial * ExpansionKind.parse(kind).factor * alpha * delta_t


def expanded_size(initial: float, alpha: float, delta_t: float, kind: ExpansionKind | str = ExpansionKind.LINEAR) -> float:
    return initial + expansion(initial, alpha, delta_t, kind)
