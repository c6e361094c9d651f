# MIT License (see LICENSE)
"""
Series and parallel DC circuit controllers.

Both keep an ordered list of Resistors (ids start at 1 and are never reused
until reset), solve the network from scratch after every mutation and on
every tick, and drive the electron-flow animation from the solved current.

Defaults:
    voltage 12 V, speed 1×
    series:   constructed with 100 Ω + 200 Ω, reset to 80 Ω + 120 Ω
    parallel: constructed with 60 Ω + 120 Ω, reset to 80 Ω + 160 Ω
"""
from __future__ import annotations
import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from ..circuits import (
    ParallelFlow,
    ParallelSolution,
    Resistor,
    SeriesFlow,
    SeriesSolution,
    clamp_resistance,
    parallel_branch_y,
    series_layout,
    solve_parallel,
    solve_series,
)
from ..history import HistorySeries
from ..params import Bound
from ..types import Snapshot
from .base import Simulator

logger = logging.getLogger(__name__)


@dataclass
class CircuitParams:
    """
    Attributes:
        voltage: Source voltage (V).
        speed: Animation speed multiplier.
    """
    voltage: float = 12.0
    speed: float = 1.0

    BOUNDS: ClassVar[dict[str, Bound]] = {
        "voltage": Bound(0.0, 1000.0),
        "speed": Bound(0.1, 5.0),
    }


class CircuitSimulator(Simulator):
    """
    Resistor-list management shared by the two circuit controllers.

    Attributes:
        resistors: Resistors (series) or branches (parallel), in display order.
        solution: Network solution for the current resistors and voltage.
        history: (t, current) samples of the total current, at most 300.
    """

    params_type = CircuitParams
    initial_resistances: tuple[float, ...] = ()
    reset_resistances: tuple[float, ...] = ()

    def __init__(self, params: CircuitParams | None = None, history_len: int = 300, **kwargs):
        super().__init__(params, **kwargs)
        self.history = HistorySeries(history_len, ("t", "current"))
        self.resistors: list[Resistor] = []
        self._next_id = 1
        self.flow = self._make_flow()
        for r in self.initial_resistances:
            self.add_resistor(r)
        self._on_topology_changed()

    # ------------------------------------------------------------------
    # Resistor list
    # ------------------------------------------------------------------

    def add_resistor(self, resistance: float = 100.0) -> Resistor:
        r = Resistor(self._next_id, resistance)
        self._next_id += 1
        self.resistors.append(r)
        self._on_topology_changed()
        logger.debug("%s: added R%d = %.1f Ω", self.kind, r.id, r.resistance)
        return r

    def get(self, rid: int) -> Resistor:
        """
        Raises:
            KeyError: If no resistor has id ``rid``.
        """
        for r in self.resistors:
            if r.id == rid:
                return r
        raise KeyError(f"No resistor with id {rid} (have {[r.id for r in self.resistors]})")

    def remove_resistor(self, rid: int) -> None:
        self.resistors.remove(self.get(rid))
        self._on_topology_changed()
        logger.debug("%s: removed R%d", self.kind, rid)

    def toggle(self, rid: int) -> bool:
        """Flip the switch of resistor ``rid``; returns the new state."""
        r = self.get(rid)
        r.on = not r.on
        self.solve()
        return r.on

    def set_resistance(self, rid: int, value: float) -> float:
        """Set a resistance (floored at 0.1 Ω); returns the stored value."""
        r = self.get(rid)
        r.resistance = clamp_resistance(value)
        self.solve()
        return r.resistance

    def _on_topology_changed(self) -> None:
        self.solve()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_state(self) -> None:
        """Restore the default resistor pair and clear the animation."""
        self.resistors = []
        self._next_id = 1
        self.flow.clear()
        self.history.clear()
        for r in self.reset_resistances:
            self.add_resistor(r)

    def on_params_changed(self, names: list[str]) -> None:
        self.solve()

    def advance(self, dt: float) -> None:
        if dt <= 0.0:
            return
        self.time += dt
        self.solve()
        self._step_flow(dt)
        self.history.append(t=self.time, current=self.total_current)

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _make_flow(self):
        """Build the electron-flow model."""

    @abstractmethod
    def solve(self):
        """Recompute and store ``self.solution``."""

    @abstractmethod
    def _step_flow(self, dt: float) -> None:
        ...

    @property
    @abstractmethod
    def total_current(self) -> float:
        ...


class SeriesCircuitSimulator(CircuitSimulator):
    """Single loop: one open switch stops the whole circuit."""

    kind = "series"
    initial_resistances = (100.0, 200.0)
    reset_resistances = (80.0, 120.0)

    def _make_flow(self) -> SeriesFlow:
        return SeriesFlow()

    def solve(self) -> SeriesSolution:
        self.solution = solve_series(self.resistors, self.params.voltage)
        return self.solution

    def _on_topology_changed(self) -> None:
        self.layout = series_layout(len(self.resistors))
        self.flow.canvas_width = self.layout.canvas_width
        self.solve()

    def _step_flow(self, dt: float) -> None:
        self.flow.step(self.resistors, self.solution, self.params.speed, dt)

    @property
    def total_current(self) -> float:
        return self.solution.current

    def snapshot(self) -> Snapshot:
        sol = self.solution
        state = {
            "resistors": [{"id": r.id, "resistance": r.resistance, "on": r.on} for r in self.resistors],
            "particles": len(self.flow.particles),
        }
        derived = {
            "total_resistance": sol.total_resistance,
            "current": sol.current,
            "drops": dict(sol.drops),
            "power": sol.power,
            "closed": sol.closed,
        }
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        width = self.layout.canvas_width
        top, bottom = 120.0, 280.0
        renderer.draw_polyline(
            [(80.0, top), (width - 80.0, top), (width - 80.0, bottom), (80.0, bottom), (80.0, top)],
            tag="wire",
        )
        renderer.draw_line((70.0, top - 20.0), (70.0, top + 20.0), tag="battery")
        for r, x in zip(self.resistors, self.layout.xs):
            renderer.draw_line((x, top), (x + self.layout.resistor_width, top), tag="resistor" if r.on else "resistor_off")
            renderer.draw_text((x, top - 25.0), f"R{r.id} {r.resistance:g}Ω", tag="label")
        for p in self.flow.particles:
            renderer.draw_circle((p.x, p.y), 3.0, tag="electron")
        renderer.draw_text((20.0, 20.0), f"I = {self.solution.current:.3f} A", tag="current")


class ParallelCircuitSimulator(CircuitSimulator):
    """Independent branches across the source; an open branch affects only itself."""

    kind = "parallel"
    initial_resistances = (60.0, 120.0)
    reset_resistances = (80.0, 160.0)

    def _make_flow(self) -> ParallelFlow:
        return ParallelFlow()

    def solve(self) -> ParallelSolution:
        self.solution = solve_parallel(self.resistors, self.params.voltage)
        return self.solution

    def _step_flow(self, dt: float) -> None:
        self.flow.step(self.resistors, self.solution, self.params.speed, dt)

    @property
    def total_current(self) -> float:
        return self.solution.total_current

    def snapshot(self) -> Snapshot:
        sol = self.solution
        state = {
            "branches": [{"id": b.id, "resistance": b.resistance, "on": b.on} for b in self.resistors],
            "particles": self.flow.count(),
        }
        derived = {
            "equivalent_resistance": sol.equivalent_resistance,
            "branch_currents": dict(sol.branch_currents),
            "total_current": sol.total_current,
            "power": sol.power,
            "open": sol.open,
        }
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        f = self.flow
        ys = [parallel_branch_y(i) for i in range(len(self.resistors))]
        right = f.canvas_width - 80.0
        if ys:
            renderer.draw_line((f.rail_x, ys[0]), (f.rail_x, ys[-1]), tag="rail")
            renderer.draw_line((right, ys[0]), (right, ys[-1]), tag="rail")
        for b, y in zip(self.resistors, ys):
            renderer.draw_line((f.rail_x, y), (f.resistor_x, y), tag="wire")
            renderer.draw_line((f.resistor_x, y), (f.resistor_end_x, y), tag="resistor" if b.on else "resistor_off")
            renderer.draw_line((f.resistor_end_x, y), (right, y), tag="wire")
            current = self.solution.branch_currents.get(b.id, 0.0)
            renderer.draw_text((f.resistor_x, y - 15.0), f"R{b.id} {b.resistance:g}Ω  {current:.3f} A", tag="label")
            for p in f.particles.get(b.id, ()):
                renderer.draw_circle((p.x, p.y), 3.0, tag="electron")
        renderer.draw_text((20.0, 20.0), f"I = {self.solution.total_current:.3f} A", tag="current")
