# MIT License (see LICENSE)
"""
Steady-state and two-body transient heat conduction.

Steady state (Fourier's law through a slab or rod):
    Q = k·A·ΔT / d

Layered wall (thermal resistances in series):
    R = Σ d_i / (k_i·A),   Q = ΔT / R

Two bodies in contact (lumped capacitance, explicit Euler):
    k_eff = (k_a + k_b) / 2
    Q = k_eff·A·(T_a − T_b) / d
    T_a ← T_a − Q·dt/(m_a·c_a),   T_b ← T_b + Q·dt/(m_b·c_b)

The arithmetic-mean k_eff is a teaching simplification, not a series
resistance model. The mixing temperature the pair converges to is

    T_f = (m_a·c_a·T_a + m_b·c_b·T_b) / (m_a·c_a + m_b·c_b)

Reference:
    https://en.wikipedia.org/wiki/Thermal_conduction#Fourier's_law
    https://en.wikipedia.org/wiki/Thermal_resistance
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable

from ..constants import THERMAL_EQUILIBRIUM_EPS
from ..core.integrators import lumped_heat_step
from ..history import HistorySeries
from ..util import safe_div

logger = logging.getLogger(__name__)

GEOMETRIES = ("slab", "rod", "wall")


@dataclass(frozen=True)
class Layer:
    """One layer of a composite wall: thickness d (m) and conductivity k (W/(m·K))."""
    d: float
    k: float


def slab_heat_rate(k: float, area: float, delta_t: float, thickness: float) -> float:
    """Q = k·A·ΔT / max(1e-9, d), in watts."""
    return safe_div(k * area * delta_t, max(0.0, thickness))


def wall_resistance(layers: list[Layer], area: float) -> float:
    """Series thermal resistance Σ d_i/(k_i·A) in K/W."""
    return sum(safe_div(layer.d, layer.k * area) for layer in layers)


def wall_heat_rate(layers: list[Layer], area: float, delta_t: float) -> float:
    """Q = ΔT / R through a layered wall."""
    return safe_div(delta_t, wall_resistance(layers, area))


def heat_rate(
    geometry: str,
    k: float,
    area: float,
    delta_t: float,
    thickness: float,
    layers: list[Layer] | None = None,
) -> float:
    """
    Steady heat flow for the selected geometry.

    A "wall" with layers uses the series-resistance form; "slab", "rod" and
    a wall without layers use Fourier's law with (k, d).

    Raises:
        ValueError: If ``geometry`` is not slab, rod or wall.
    """
    if geometry not in GEOMETRIES:
        raise ValueError(f"Unknown geometry '{geometry}' (expected one of {GEOMETRIES})")
    if geometry == "wall" and layers:
        return wall_heat_rate(layers, area, delta_t)
    return slab_heat_rate(k, area, delta_t, thickness)


def interface_conductivity(k_a: float, k_b: float) -> float:
    return 0.5 * (k_a + k_b)


def equilibrium_temperature(m_a: float, c_a: float, t_a: float, m_b: float, c_b: float, t_b: float) -> float:
    """Capacity-weighted mean temperature T_f of two bodies."""
    ca, cb = m_a * c_a, m_b * c_b
    return safe_div(ca * t_a + cb * t_b, ca + cb)


@dataclass
class BodyProps:
    """
    Lumped body: mass m (kg), specific heat c (J/(kg·K)), conductivity k (W/(m·K)).
    """
    m: float
    c: float
    k: float

    @property
    def capacity(self) -> float:
        return self.m * self.c


class TwoBodyConduction:
    """
    Transient heat exchange between two bodies sharing a contact of area A and depth d.

    Equilibrium (|T_a − T_b| < 0.01) is sticky: once flagged, step() leaves
    the temperatures alone until reset(). ``on_equilibrium`` fires exactly
    once per transition into equilibrium.

    A step that would carry the pair past each other (only possible for
    very large dt·k/(m·c)) lands both bodies on T_f instead, so the
    exchange can never oscillate or gain energy.

    Attributes:
        t_a, t_b: Current temperatures in °C.
        time: Simulated seconds since reset.
        history: (t, Ta, Tb) samples, frozen at equilibrium.
    """

    def __init__(
        self,
        body_a: BodyProps,
        body_b: BodyProps,
        area: float = 0.01,
        thickness: float = 0.02,
        t_a: float = 100.0,
        t_b: float = 20.0,
        eps: float = THERMAL_EQUILIBRIUM_EPS,
        history_len: int = 120,
        on_equilibrium: Callable[["TwoBodyConduction"], None] | None = None,
    ):
        self.body_a = body_a
        self.body_b = body_b
        self.area = area
        self.thickness = thickness
        self.initial = (t_a, t_b)
        self.eps = eps
        self.on_equilibrium = on_equilibrium
        self.history = HistorySeries(history_len, ("t", "Ta", "Tb"))
        self.reset()

    def reset(self, t_a: float | None = None, t_b: float | None = None) -> None:
        if t_a is not None or t_b is not None:
            self.initial = (self.initial[0] if t_a is None else t_a, self.initial[1] if t_b is None else t_b)
        self.t_a, self.t_b = self.initial
        self.time = 0.0
        self.equilibrium = False
        self.history.clear()

    def heat_rate(self) -> float:
        """Interface heat flow Q (W), positive from A to B."""
        k_eff = interface_conductivity(self.body_a.k, self.body_b.k)
        return slab_heat_rate(k_eff, self.area, self.t_a - self.t_b, self.thickness)

    def final_temperature(self) -> float:
        return equilibrium_temperature(
            self.body_a.m, self.body_a.c, self.t_a, self.body_b.m, self.body_b.c, self.t_b
        )

    def step(self, dt: float) -> None:
        if self.equilibrium or dt <= 0.0:
            return
        self.time += dt
        before = self.t_a - self.t_b
        t_a, t_b = lumped_heat_step(
            self.t_a, self.t_b, self.heat_rate(), self.body_a.capacity, self.body_b.capacity, dt
        )
        if (t_a - t_b) * before < 0.0:
            t_a = t_b = self.final_temperature()
        self.t_a, self.t_b = t_a, t_b
        self.history.append(t=self.time, Ta=self.t_a, Tb=self.t_b)

        if abs(self.t_a - self.t_b) < self.eps:
            self.equilibrium = True
            self.history.freeze()
            logger.info("thermal equilibrium at t=%.2fs, T=%.2f°C", self.time, 0.5 * (self.t_a + self.t_b))
            if self.on_equilibrium is not None:
                self.on_equilibrium(self)
