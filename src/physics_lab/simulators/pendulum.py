# MIT License (see LICENSE)
"""
Single and double pendulum controller.

The DynamicState is a tagged union, ``SingleState | DoubleState``; the
Stepper dispatches on the variant. Both integrate with semi-implicit Euler
at a fixed step (``time_step``, default 1/60 s) regardless of the wall
clock dt, trading smoothness under frame drops for stability.

Single:
    α = −(g/L)·sin θ  (−(g/L)·θ with the small-angle flag, while |θ| < 0.2)
    α −= c·ω          (damping)
    ω += α·dt,  θ += ω·dt

Double: α₁, α₂ from the standard Lagrangian closed form (see
``core.forces.double_pendulum_accelerations``), same update per angle.
When |ω|·dt would exceed MAX_ANGLE_STEP the tick is split into substeps
(at most MAX_SUBSTEPS), and |ω| is capped at OMEGA_LIMIT.

Derived values (period 2π√(L/g), frequency, maximum speed √(2gL(1−cos θ₀)),
energies) are for display only.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import ClassVar

from ..constants import FRAME_DT, STANDARD_GRAVITY
from ..core.forces import double_pendulum_accelerations, pendulum_angular_acceleration
from ..core.integrators import semi_implicit_euler
from ..core.invariants import double_pendulum_energies, pendulum_energies
from ..history import HistorySeries, Trail
from ..params import Bound
from ..types import Snapshot
from ..util import clamp, finite_or, safe_div
from .base import Simulator

logger = logging.getLogger(__name__)

MAX_ANGLE_STEP = 0.05  # rad per substep
MAX_SUBSTEPS = 64
OMEGA_LIMIT = 1000.0  # rad/s


@dataclass
class PendulumParams:
    """
    Attributes:
        length, mass: Single pendulum rod length (m) and bob mass (kg).
        g: Gravitational acceleration (m/s²).
        theta0: Initial angle of the single pendulum (degrees).
        damping: Enable linear damping with ``damping_coeff`` (1/s).
        small_angle: Use the linearised law while |θ| < 0.2 rad.
        mode: "single" or "double".
        l1, l2, m1, m2: Double pendulum lengths (m) and masses (kg).
        theta1, theta2: Double pendulum initial angles (degrees).
        show_trail: Record the second bob's trail.
        time_step: Fixed integration step (s).
    """
    length: float = 1.0
    mass: float = 1.0
    g: float = STANDARD_GRAVITY
    theta0: float = 30.0
    damping: bool = False
    damping_coeff: float = 0.02
    small_angle: bool = False
    mode: str = "single"
    l1: float = 1.0
    l2: float = 1.0
    m1: float = 1.0
    m2: float = 1.0
    theta1: float = 45.0
    theta2: float = 30.0
    show_trail: bool = True
    time_step: float = FRAME_DT

    BOUNDS: ClassVar[dict[str, Bound]] = {
        "length": Bound(0.1, 10.0),
        "mass": Bound(0.1, 100.0),
        "g": Bound(0.1, 50.0),
        "theta0": Bound(-179.0, 179.0),
        "damping_coeff": Bound(0.0, 1.0),
        "l1": Bound(0.1, 10.0),
        "l2": Bound(0.1, 10.0),
        "m1": Bound(0.1, 100.0),
        "m2": Bound(0.1, 100.0),
        "theta1": Bound(-180.0, 180.0),
        "theta2": Bound(-180.0, 180.0),
        "time_step": Bound(1e-4, 0.05),
    }
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {"mode": ("single", "double")}


@dataclass
class SingleState:
    theta: float = 0.0
    omega: float = 0.0
    alpha: float = 0.0


@dataclass
class DoubleState:
    theta1: float = 0.0
    theta2: float = 0.0
    omega1: float = 0.0
    omega2: float = 0.0
    alpha1: float = 0.0
    alpha2: float = 0.0


PendulumState = SingleState | DoubleState


def period(length: float, g: float) -> float:
    """Small-amplitude period 2π√(L/g)."""
    return 2.0 * math.pi * math.sqrt(safe_div(length, g))


def max_speed(length: float, g: float, theta0_deg: float) -> float:
    """Bob speed at the bottom for release from rest at θ₀: √(2gL(1 − cos θ₀))."""
    return math.sqrt(max(0.0, 2.0 * g * length * (1.0 - math.cos(math.radians(theta0_deg)))))


@dataclass
class PendulumView:
    """Canvas mapping: pivot in pixels and pixels per metre."""
    width: float = 800.0
    height: float = 500.0
    pivot_y: float = 100.0
    scale: float = 150.0

    @property
    def pivot(self) -> tuple[float, float]:
        return self.width / 2.0, self.pivot_y

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        """World (m, y down from the pivot) → canvas pixels."""
        px, py = self.pivot
        return px + x * self.scale, py + y * self.scale


class PendulumSimulator(Simulator):
    """
    Pendulum controller.

    Attributes:
        state: SingleState or DoubleState, matching ``params.mode``.
        history: (t, displacement°, ω, KE, PE, E) samples, at most 1000.
        trail: Second-bob positions (m) in double mode, at most 500.
    """

    kind = "pendulum"
    params_type = PendulumParams

    def __init__(self, params: PendulumParams | None = None, view: PendulumView | None = None, **kwargs):
        super().__init__(params, **kwargs)
        self.view = view or PendulumView()
        self.history = HistorySeries(1000, ("t", "displacement", "omega", "ke", "pe", "total"))
        self.trail = Trail(maxlen=500)
        self.state: PendulumState = SingleState()
        self.reset_state()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_double(self) -> bool:
        return isinstance(self.state, DoubleState)

    def reset_state(self) -> None:
        p = self.params
        if p.mode == "double":
            self.state = DoubleState(theta1=math.radians(p.theta1), theta2=math.radians(p.theta2))
        else:
            self.state = SingleState(theta=math.radians(p.theta0))
        self.time = 0.0
        self.history.clear()
        self.trail.clear()
        self._omega_limited = False

    def set_mode(self, mode: str) -> None:
        """Queue a mode switch; applied (with a reset) at the next tick."""
        self.set_parameter("mode", mode)

    def on_params_changed(self, names: list[str]) -> None:
        p = self.params
        if "mode" in names:
            if p.mode == "double":
                p.l1 = p.l2 = p.length
                p.m1 = p.m2 = p.mass
                p.theta1 = p.theta0
                p.theta2 = 30.0
            logger.info("pendulum mode -> %s", p.mode)
            self.scheduler.reset()
            self.reset_state()
            return
        if "show_trail" in names and not p.show_trail:
            self.trail.clear()
        if not self.running and {"theta0", "theta1", "theta2"} & set(names):
            self.reset_state()

    # ------------------------------------------------------------------
    # Stepper
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """One tick. A tick that applies a mode switch only resets."""
        if "mode" in self.apply_pending():
            return
        self.advance(dt)

    def advance(self, dt: float) -> None:
        h = self.params.time_step
        s = self.state
        if isinstance(s, DoubleState):
            self._step_double(s, h)
        else:
            self._step_single(s, h)
        self.time += h
        self._record()

    def _damping(self) -> float:
        return self.params.damping_coeff if self.params.damping else 0.0

    def _step_single(self, s: SingleState, h: float) -> None:
        p = self.params
        s.alpha = pendulum_angular_acceleration(
            s.theta, s.omega, p.length, p.g, damping=self._damping(), small_angle=p.small_angle
        )
        theta, omega = semi_implicit_euler(s.theta, s.omega, s.alpha, h)
        s.theta, s.omega = finite_or(theta, s.theta), finite_or(omega, 0.0)

    def _step_double(self, s: DoubleState, h: float) -> None:
        p = self.params
        n = math.ceil(max(abs(s.omega1), abs(s.omega2)) * h / MAX_ANGLE_STEP)
        n = min(MAX_SUBSTEPS, max(1, n))
        sub = h / n
        for _ in range(n):
            a1, a2 = double_pendulum_accelerations(
                s.theta1, s.theta2, s.omega1, s.omega2, p.m1, p.m2, p.l1, p.l2, p.g, damping=self._damping()
            )
            s.alpha1, s.alpha2 = finite_or(a1, 0.0), finite_or(a2, 0.0)
            theta1, omega1 = semi_implicit_euler(s.theta1, s.omega1, s.alpha1, sub)
            theta2, omega2 = semi_implicit_euler(s.theta2, s.omega2, s.alpha2, sub)
            s.omega1 = self._limit_omega(omega1)
            s.omega2 = self._limit_omega(omega2)
            s.theta1, s.theta2 = finite_or(theta1, s.theta1), finite_or(theta2, s.theta2)
        if p.show_trail:
            self.trail.append(*self.bob_positions()[1])

    def _limit_omega(self, omega: float) -> float:
        limited = clamp(finite_or(omega, 0.0), -OMEGA_LIMIT, OMEGA_LIMIT)
        if limited != omega and not self._omega_limited:
            self._omega_limited = True
            logger.warning("double pendulum diverging at t=%.3f s; angular velocity capped at %g rad/s", self.time, OMEGA_LIMIT)
        return limited

    def _record(self) -> None:
        ke, pe = self.energies()
        if isinstance(self.state, DoubleState):
            theta, omega = self.state.theta1, self.state.omega1
        else:
            theta, omega = self.state.theta, self.state.omega
        self.history.append(
            t=self.time, displacement=math.degrees(theta), omega=omega, ke=ke, pe=pe, total=ke + pe
        )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def energies(self) -> tuple[float, float]:
        p, s = self.params, self.state
        if isinstance(s, DoubleState):
            return double_pendulum_energies(s.theta1, s.theta2, s.omega1, s.omega2, p.m1, p.m2, p.l1, p.l2, p.g)
        return pendulum_energies(s.theta, s.omega, p.length, p.mass, p.g)

    def bob_positions(self) -> list[tuple[float, float]]:
        """Bob positions in metres relative to the pivot, y pointing down."""
        p, s = self.params, self.state
        if isinstance(s, DoubleState):
            x1, y1 = p.l1 * math.sin(s.theta1), p.l1 * math.cos(s.theta1)
            return [(x1, y1), (x1 + p.l2 * math.sin(s.theta2), y1 + p.l2 * math.cos(s.theta2))]
        return [(p.length * math.sin(s.theta), p.length * math.cos(s.theta))]

    def snapshot(self) -> Snapshot:
        p, s = self.params, self.state
        ke, pe = self.energies()
        derived = {"ke": ke, "pe": pe, "total_energy": ke + pe}
        if isinstance(s, DoubleState):
            state = {
                "mode": "double",
                "theta1_deg": math.degrees(s.theta1),
                "theta2_deg": math.degrees(s.theta2),
                "omega1": s.omega1,
                "omega2": s.omega2,
            }
            derived["bobs"] = self.bob_positions()
        else:
            t = period(p.length, p.g)
            state = {"mode": "single", "theta_deg": math.degrees(s.theta), "omega": s.omega, "alpha": s.alpha}
            derived.update(
                period=t,
                frequency=1.0 / t,
                max_speed=max_speed(p.length, p.g, p.theta0),
                speed=abs(s.omega * p.length),
                height=p.length * (1.0 - math.cos(s.theta)),
                bob=self.bob_positions()[0],
            )
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        v = self.view
        pivot = v.pivot
        points = [v.to_screen(x, y) for x, y in self.bob_positions()]
        if self.is_double and self.params.show_trail and len(self.trail) > 1:
            renderer.draw_polyline([v.to_screen(x, y) for x, y in self.trail], tag="trail")
        renderer.draw_circle(pivot, 5.0, tag="pivot")
        prev = pivot
        for i, pt in enumerate(points, start=1):
            renderer.draw_line(prev, pt, tag=f"rod{i}" if self.is_double else "rod")
            renderer.draw_circle(pt, 12.0, tag=f"bob{i}" if self.is_double else "bob")
            prev = pt
        if not self.is_double:
            renderer.draw_text((pivot[0] + 10.0, pivot[1] - 10.0), f"{math.degrees(self.state.theta):.1f}°", tag="angle")
