# MIT License (see LICENSE)
"""
Core type definitions shared across simulators.

Defines the small value types every simulator exchanges:
- Particle: a moving carrier (electron, charge) with a destination tag.
- Segment / Point2: geometric primitives handed to renderers.

Positions and velocities are float64 numpy arrays of shape (2,), in the
units of whichever space the owning simulator works in (canvas pixels for
the animation models, metres for the mechanics).
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64

Point2 = tuple[float, float]


@dataclass
class Particle:
    """
    A point carrier moving in a straight line toward a target.

    Integrates with explicit Euler: x(t+dt) = x(t) + v·dt.

    Attributes:
        position: Current position [x, y].
        velocity: Velocity [vx, vy] per second.
        target: Tag naming the body (or segment) the particle is heading to.
        phase: Free-form stage label for multi-leg paths (circuit branches).
        branch: Owning branch/resistor index, -1 when not applicable.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    target: str = ""
    phase: str = ""
    branch: int = -1

    def __post_init__(self) -> None:
        """Convert position/velocity to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    def advance(self, dt: float) -> None:
        """Move the particle by v·dt."""
        self.position += self.velocity * dt


@dataclass
class EmissionCredit:
    """
    Deterministic emitter: turns a continuous rate into whole particles.

    Each call adds rate·dt to a running credit and releases its integer part,
    so over any interval the emitted count differs from ∫rate·dt by < 1.
    """
    credit: float = 0.0

    def accumulate(self, rate: float, dt: float) -> int:
        if rate <= 0.0 or dt <= 0.0:
            return 0
        self.credit += rate * dt
        n = int(self.credit)
        self.credit -= n
        return n

    def reset(self) -> None:
        self.credit = 0.0


@dataclass(frozen=True)
class Segment:
    """Line segment from ``a`` to ``b``."""
    a: Point2
    b: Point2

    @property
    def length(self) -> float:
        return float(np.hypot(self.b[0] - self.a[0], self.b[1] - self.a[1]))


@dataclass
class Snapshot:
    """
    Per-tick outbound record of a simulator.

    Attributes:
        kind: Simulator kind ("pendulum", "projectile", ...).
        time: Accumulated simulation time in seconds.
        state: Plain-number view of the DynamicState.
        derived: Computed display quantities (current, power, Q, ...).
    """
    kind: str
    time: float
    state: dict = field(default_factory=dict)
    derived: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "time": self.time, "state": self.state, "derived": self.derived}
