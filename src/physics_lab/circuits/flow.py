# MIT License (see LICENSE)
"""
Electron-flow animation models for the circuit simulators.

The flow is purely visual: it reads the solved current and never feeds
back into the network solution. Coordinates are canvas pixels with x
increasing along the conventional direction of travel.

Series: particles enter at the battery terminal (x=80), travel at wire
speed (40 + 30·I)·speed and slow to (20 + 15·I)·speed inside any "on"
resistor's [x, x+width] span. They are removed at the right edge.

Parallel: each branch has its own particle list. Particles go through
three legs, to-resistor → through-resistor (from x=320) → to-return (from
x=420), at (30 + 20·I_i)·speed outside the resistor and (20 + 15·I_i)·speed
inside it.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from ..types import EmissionCredit, Particle
from .network import ParallelSolution, Resistor, SeriesSolution


RIGHT_MARGIN_PX: float = 80.0


@dataclass(frozen=True)
class SeriesLayout:
    """
    Horizontal placement of series resistors.

    Attributes:
        xs: Left edge of each resistor, in list order.
        canvas_width: Width needed to fit them (may exceed the requested width).
    """
    xs: tuple[float, ...]
    canvas_width: float
    resistor_width: float = 80.0


def series_layout(
    count: int,
    canvas_width: float = 900.0,
    left_margin: float = 150.0,
    right_margin: float = RIGHT_MARGIN_PX,
    resistor_width: float = 80.0,
    min_spacing: float = 20.0,
) -> SeriesLayout:
    """
    Spread ``count`` resistors between the margins, at least ``min_spacing`` apart.

    When they do not fit, the canvas grows to max(1200, required + 100).
    """
    if count <= 0:
        return SeriesLayout((), canvas_width, resistor_width)
    required = left_margin + right_margin + count * resistor_width + (count - 1) * min_spacing
    if required > canvas_width:
        canvas_width = max(1200.0, required + 100.0)
    available = canvas_width - left_margin - right_margin - count * resistor_width
    spacing = max(min_spacing, available / (count - 1)) if count > 1 else 0.0
    xs = tuple(left_margin + i * (resistor_width + spacing) for i in range(count))
    return SeriesLayout(xs, canvas_width, resistor_width)


def parallel_branch_y(index: int, top: float = 120.0, pitch: float = 60.0) -> float:
    """Vertical position of branch ``index`` on the canvas."""
    return top + index * pitch


@dataclass
class SeriesFlow:
    """
    Particle set for the series loop.

    Attributes:
        canvas_width: Right-edge reference for removal (x ≥ width − 80).
        cap: Maximum live particles; the oldest are dropped beyond it.
        start: Emission point (battery positive terminal).
    """
    canvas_width: float = 900.0
    cap: int = 100
    start: tuple[float, float] = (80.0, 120.0)
    particles: list[Particle] = field(default_factory=list)
    emitter: EmissionCredit = field(default_factory=EmissionCredit)

    @staticmethod
    def emission_rate(current: float, speed: float) -> float:
        """Particles per second: min(8, max(1, 6·I))·speed, zero without current."""
        if current <= 0.0:
            return 0.0
        return min(8.0, max(1.0, current * 6.0)) * speed

    @staticmethod
    def wire_speed(current: float, speed: float) -> float:
        return (40.0 + current * 30.0) * speed

    @staticmethod
    def resistor_speed(current: float, speed: float) -> float:
        return (20.0 + current * 15.0) * speed

    def step(self, resistors: list[Resistor], solution: SeriesSolution, speed: float, dt: float) -> None:
        """Emit, move and retire particles for one tick."""
        current = solution.current
        layout = series_layout(len(resistors), self.canvas_width)
        self.canvas_width = layout.canvas_width

        for _ in range(self.emitter.accumulate(self.emission_rate(current, speed), dt)):
            self.particles.append(
                Particle(self.start, (self.wire_speed(current, speed), 0.0), target="return", phase="wire")
            )
        if len(self.particles) > self.cap:
            del self.particles[: len(self.particles) - self.cap]

        limit = self.canvas_width - RIGHT_MARGIN_PX
        alive = []
        for p in self.particles:
            p.advance(dt)
            inside = any(
                r.on and x <= p.x <= x + layout.resistor_width
                for r, x in zip(resistors, layout.xs)
            )
            p.phase = "resistor" if inside else "wire"
            p.velocity[0] = self.resistor_speed(current, speed) if inside else self.wire_speed(current, speed)
            if p.x < limit:
                alive.append(p)
        self.particles = alive

    def clear(self) -> None:
        self.particles.clear()
        self.emitter.reset()


@dataclass
class ParallelFlow:
    """
    Per-branch particle sets for the parallel network.

    Attributes:
        canvas_width: Right-edge reference for removal.
        cap: Maximum live particles per branch.
        rail_x: Emission x on the left rail.
        resistor_x: Start of the resistor leg.
        resistor_end_x: End of the resistor leg.
    """
    canvas_width: float = 900.0
    cap: int = 50
    rail_x: float = 120.0
    resistor_x: float = 320.0
    resistor_end_x: float = 420.0
    particles: dict[int, list[Particle]] = field(default_factory=dict)
    emitters: dict[int, EmissionCredit] = field(default_factory=dict)

    @staticmethod
    def emission_rate(current: float, speed: float) -> float:
        if current <= 0.0:
            return 0.0
        return min(8.0, max(1.0, current * 4.0)) * speed

    @staticmethod
    def wire_speed(current: float, speed: float) -> float:
        return (30.0 + current * 20.0) * speed

    @staticmethod
    def resistor_speed(current: float, speed: float) -> float:
        return (20.0 + current * 15.0) * speed

    def step(self, branches: list[Resistor], solution: ParallelSolution, speed: float, dt: float) -> None:
        live_ids = {b.id for b in branches}
        for stale in set(self.particles) - live_ids:
            del self.particles[stale]
            self.emitters.pop(stale, None)

        limit = self.canvas_width - RIGHT_MARGIN_PX
        for idx, b in enumerate(branches):
            current = solution.branch_currents.get(b.id, 0.0)
            plist = self.particles.setdefault(b.id, [])
            emitter = self.emitters.setdefault(b.id, EmissionCredit())
            y = parallel_branch_y(idx)

            if b.on:
                for _ in range(emitter.accumulate(self.emission_rate(current, speed), dt)):
                    plist.append(
                        Particle(
                            (self.rail_x, y),
                            (self.wire_speed(current, speed), 0.0),
                            target="return",
                            phase="to_resistor",
                            branch=b.id,
                        )
                    )
            if len(plist) > self.cap:
                del plist[: len(plist) - self.cap]

            alive = []
            for p in plist:
                p.advance(dt)
                p.position[1] = y
                if p.phase == "to_resistor" and p.x >= self.resistor_x:
                    p.phase = "through_resistor"
                    p.velocity[0] = self.resistor_speed(current, speed)
                elif p.phase == "through_resistor" and p.x >= self.resistor_end_x:
                    p.phase = "to_return"
                    p.velocity[0] = self.wire_speed(current, speed)
                if p.x < limit:
                    alive.append(p)
            self.particles[b.id] = alive

    def count(self) -> int:
        return sum(len(v) for v in self.particles.values())

    def clear(self) -> None:
        self.particles.clear()
        self.emitters.clear()
