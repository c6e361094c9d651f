# MIT License (see LICENSE)
"""
Ohm's-law solvers for single-loop series and single-source parallel networks.

Both solvers are pure functions of the resistor list and the source
voltage, recomputed from scratch on every change and every tick.

Series (one loop, every element carries the same current):
    R_total = Σ R_i over "on" resistors
    I = V / R_total if every resistor is on and R_total > 0, else 0
    V_i = I·R_i,   P = Σ V_i·I

A single open switch breaks the whole loop.

Parallel (each branch sees the full source voltage):
    I_i = V / R_i for "on" branches, 0 for "off" branches
    1/R_eq = Σ 1/R_i over "on" branches (R_eq = ∞ if none is on)
    I_total = Σ I_i,   P = Σ I_i·V

Reference: https://en.wikipedia.org/wiki/Series_and_parallel_circuits
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field

from ..constants import MIN_DISTANCE, MIN_RESISTANCE


@dataclass
class Resistor:
    """
    One resistor (series) or one branch (parallel).

    Attributes:
        id: Stable identifier assigned by the owning controller.
        resistance: Resistance in ohms; setters clamp it to ≥ 0.1 Ω.
        on: Switch state. An "off" element conducts no current.
    """
    id: int
    resistance: float = 100.0
    on: bool = True

    def __post_init__(self) -> None:
        self.resistance = clamp_resistance(self.resistance)


@dataclass(frozen=True)
class SeriesSolution:
    """
    Attributes:
        total_resistance: Sum over "on" resistors in ohms.
        current: Loop current in amperes (0 when open).
        drops: Voltage drop per resistor id in volts (0 for "off").
        power: Total dissipated power in watts.
        closed: True when every resistor is on and current can flow.
    """
    total_resistance: float
    current: float
    drops: dict[int, float] = field(default_factory=dict)
    power: float = 0.0
    closed: bool = False


@dataclass(frozen=True)
class ParallelSolution:
    """
    Attributes:
        equivalent_resistance: R_eq in ohms, ``math.inf`` when no branch is on.
        branch_currents: Current per branch id in amperes.
        total_current: Σ I_i in amperes.
        power: Total power V·I_total in watts.
    """
    equivalent_resistance: float
    branch_currents: dict[int, float] = field(default_factory=dict)
    total_current: float = 0.0
    power: float = 0.0

    @property
    def open(self) -> bool:
        """True when no branch conducts."""
        return not math.isfinite(self.equivalent_resistance)


def clamp_resistance(value: float) -> float:
    """Apply the minimum-resistance floor; non-finite input becomes the floor."""
    if not math.isfinite(value):
        return MIN_RESISTANCE
    return max(MIN_RESISTANCE, float(value))


def solve_series(resistors: list[Resistor], voltage: float) -> SeriesSolution:
    """Solve a single series loop driven by ``voltage``."""
    total = sum(r.resistance for r in resistors if r.on)
    closed = all(r.on for r in resistors) and total > 0
    current = voltage / total if closed else 0.0
    drops = {r.id: (current * r.resistance if r.on else 0.0) for r in resistors}
    power = sum(v * current for v in drops.values())
    return SeriesSolution(total_resistance=total, current=current, drops=drops, power=power, closed=closed)


def solve_parallel(branches: list[Resistor], voltage: float) -> ParallelSolution:
    """Solve independent branches across a common ``voltage``."""
    currents: dict[int, float] = {}
    conductance = 0.0
    for b in branches:
        if b.on:
            r = max(MIN_DISTANCE, b.resistance)
            currents[b.id] = voltage / r
            conductance += 1.0 / r
        else:
            currents[b.id] = 0.0
    req = 1.0 / conductance if conductance > 0 else math.inf
    total = sum(currents.values())
    return ParallelSolution(
        equivalent_resistance=req,
        branch_currents=currents,
        total_current=total,
        power=total * voltage,
    )
