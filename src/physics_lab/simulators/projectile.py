# MIT License (see LICENSE)
"""
Projectile motion with optional quadratic drag, single or two-projectile comparison.

Each flight integrates at a fixed step (default 0.02 s per frame):

    a = (0, −g) − ½·C_d·ρ·A·|v|²/m · v̂      (drag only with air resistance)
    v += a·dt
    x += v·dt

A projectile lands on the first step that takes it below y = 0. The
trajectory starts at the origin and records every post-step position that
is still at or above ground, so

    time of flight = steps × dt,   range = x of the last recorded point.

Drag-free analytic predictions (used for the launch-time camera fit and
the info panel):

    R = v₀² sin 2θ / g,   H = v₀² sin²θ / (2g),   T = 2 v₀ sin θ / g

The flight state is a tagged union: ``SingleFlight | ComparisonFlight``.
Launch parameters are captured when a projectile is fired; edits made
during a flight apply to the next launch.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from ..camera import CameraView, fit_bounds
from ..constants import STANDARD_GRAVITY
from ..core.forces import drag_acceleration, gravity_acceleration
from ..core.integrators import explicit_euler_2d
from ..core.invariants import projectile_energies
from ..history import HistorySeries
from ..params import Bound
from ..types import Point2, Snapshot
from ..util import f64, safe_div
from .base import Simulator

logger = logging.getLogger(__name__)

NAMES = ("projectile1", "projectile2")


@dataclass(frozen=True)
class Prediction:
    range: float
    max_height: float
    time_of_flight: float


@dataclass(frozen=True)
class Launch:
    """Parameters of one projectile, frozen at launch time."""
    v0: float = 50.0
    angle: float = 45.0
    g: float = STANDARD_GRAVITY
    mass: float = 1.0
    drag_coeff: float = 0.47
    air_resistance: bool = False

    def predict(self) -> Prediction:
        a = math.radians(self.angle)
        return Prediction(
            range=safe_div(self.v0 ** 2 * math.sin(2.0 * a), self.g),
            max_height=safe_div(self.v0 ** 2 * math.sin(a) ** 2, 2.0 * self.g),
            time_of_flight=safe_div(2.0 * self.v0 * math.sin(a), self.g),
        )


@dataclass
class Projectile:
    """
    One projectile in flight.

    Attributes:
        launch: Parameters it was fired with.
        position, velocity: State in m and m/s.
        trajectory: Recorded positions (m), starting at the origin.
        steps: Integration steps taken.
        landed: Set on the step that crossed below ground.
    """
    launch: Launch
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    trajectory: list[Point2] = field(default_factory=lambda: [(0.0, 0.0)])
    steps: int = 0
    landed: bool = False

    @classmethod
    def fire(cls, launch: Launch) -> "Projectile":
        a = math.radians(launch.angle)
        return cls(launch, velocity=f64((launch.v0 * math.cos(a), launch.v0 * math.sin(a))))

    @property
    def in_flight(self) -> bool:
        return not self.landed

    def acceleration(self) -> np.ndarray:
        acc = gravity_acceleration(self.launch.g)
        if self.launch.air_resistance:
            acc = acc + drag_acceleration(self.velocity, self.launch.drag_coeff, self.launch.mass)
        return acc

    def step(self, dt: float) -> None:
        if self.landed:
            return
        self.position, self.velocity = explicit_euler_2d(self.position, self.velocity, self.acceleration(), dt)
        self.steps += 1
        if self.position[1] < 0.0:
            self.landed = True
        else:
            self.trajectory.append((float(self.position[0]), float(self.position[1])))

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    def trajectory_array(self) -> np.ndarray:
        return np.asarray(self.trajectory, dtype=np.float64)


@dataclass
class SingleFlight:
    projectile: Projectile
    time_step: float = 0.02

    @property
    def projectiles(self) -> dict[str, Projectile]:
        return {"projectile1": self.projectile}


@dataclass
class ComparisonFlight:
    """Two projectiles integrated together; ``time_step`` is fixed at launch."""
    a: Projectile
    b: Projectile
    time_step: float = 0.02

    @property
    def projectiles(self) -> dict[str, Projectile]:
        return {"projectile1": self.a, "projectile2": self.b}


Flight = SingleFlight | ComparisonFlight


@dataclass(frozen=True)
class FlightResult:
    time_of_flight: float
    max_height: float
    range: float
    final_speed: float

    @classmethod
    def of(cls, p: Projectile, dt: float) -> "FlightResult":
        traj = p.trajectory_array()
        return cls(
            time_of_flight=p.steps * dt,
            max_height=float(traj[:, 1].max()),
            range=float(traj[-1, 0]),
            final_speed=p.speed,
        )


def _winner(v1: float, v2: float) -> str:
    if v1 > v2:
        return "projectile1"
    if v2 > v1:
        return "projectile2"
    return "tie"


@dataclass(frozen=True)
class ComparisonResults:
    projectile1: FlightResult
    projectile2: FlightResult

    @property
    def winners(self) -> dict[str, str]:
        r1, r2 = self.projectile1, self.projectile2
        return {
            "range": _winner(r1.range, r2.range),
            "height": _winner(r1.max_height, r2.max_height),
            "time": _winner(r1.time_of_flight, r2.time_of_flight),
        }

    @property
    def differences(self) -> dict[str, float]:
        r1, r2 = self.projectile1, self.projectile2
        return {
            "range": abs(r1.range - r2.range),
            "height": abs(r1.max_height - r2.max_height),
            "time": abs(r1.time_of_flight - r2.time_of_flight),
        }


@dataclass
class ProjectileParams:
    """
    Projectile 1 (also the single-mode projectile) uses the unsuffixed
    fields; projectile 2 uses the ``*_2`` fields.
    ``time_step`` is read once per launch.
    """
    mode: str = "single"
    v0: float = 50.0
    angle: float = 45.0
    g: float = STANDARD_GRAVITY
    mass: float = 1.0
    drag_coeff: float = 0.47
    air_resistance: bool = False
    v0_2: float = 60.0
    angle_2: float = 30.0
    g_2: float = STANDARD_GRAVITY
    mass_2: float = 1.0
    drag_coeff_2: float = 0.47
    air_resistance_2: bool = False
    time_step: float = 0.02

    BOUNDS: ClassVar[dict[str, Bound]] = {
        "v0": Bound(1.0, 200.0),
        "angle": Bound(0.0, 90.0),
        "g": Bound(0.1, 50.0),
        "mass": Bound(0.1, 100.0),
        "drag_coeff": Bound(0.0, 2.0),
        "v0_2": Bound(1.0, 200.0),
        "angle_2": Bound(0.0, 90.0),
        "g_2": Bound(0.1, 50.0),
        "mass_2": Bound(0.1, 100.0),
        "drag_coeff_2": Bound(0.0, 2.0),
        "time_step": Bound(1e-3, 0.1),
    }
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {"mode": ("single", "comparison")}

    def launch(self, which: int = 1) -> Launch:
        if which == 1:
            return Launch(self.v0, self.angle, self.g, self.mass, self.drag_coeff, self.air_resistance)
        return Launch(self.v0_2, self.angle_2, self.g_2, self.mass_2, self.drag_coeff_2, self.air_resistance_2)


class ProjectileSimulator(Simulator):
    """
    Projectile controller with camera.

    Attributes:
        flight: Current SingleFlight/ComparisonFlight, None before the first launch.
        results: ComparisonResults once both comparison projectiles landed.
        time_data: Comparison time series (t and both states), bounded FIFO.
        camera: CameraView used for drawing.
    """

    kind = "projectile"
    params_type = ProjectileParams

    def __init__(self, params: ProjectileParams | None = None, camera: CameraView | None = None,
                 seed: int | None = None, history_len: int = 2000, **kwargs):
        super().__init__(params, **kwargs)
        self.camera = camera or CameraView()
        self.rng = np.random.default_rng(seed)
        self.time_data = HistorySeries(
            history_len, ("t", "x1", "y1", "vx1", "vy1", "x2", "y2", "vx2", "vy2")
        )
        self.flight: Flight | None = None
        self.results: ComparisonResults | None = None
        self._last_launches: tuple[Launch, ...] = ()

    @property
    def comparison(self) -> bool:
        return self.params.mode == "comparison"

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def predictions(self) -> list[Prediction]:
        p = self.params
        launches = [p.launch(1), p.launch(2)] if self.comparison else [p.launch(1)]
        return [l.predict() for l in launches]

    def launch(self) -> None:
        """Fire (both) projectile(s) from the origin and start the loop."""
        self.apply_pending()
        p = self.params
        launches = (p.launch(1), p.launch(2)) if self.comparison else (p.launch(1),)
        self._fire(launches)

    def replay(self) -> bool:
        """Relaunch with the parameters of the previous launch."""
        if not self._last_launches:
            return False
        self._fire(self._last_launches)
        return True

    def _fire(self, launches: tuple[Launch, ...]) -> None:
        self.reset()
        preds = [l.predict() for l in launches]
        max_range = max(pr.range for pr in preds)
        max_height = max(pr.max_height for pr in preds)
        if len(launches) == 1 or self.camera.auto_scale:
            self.camera.fit_launch(max_range, max_height)

        h = self.params.time_step
        if len(launches) == 2:
            self.flight = ComparisonFlight(Projectile.fire(launches[0]), Projectile.fire(launches[1]), h)
        else:
            self.flight = SingleFlight(Projectile.fire(launches[0]), h)
        self._last_launches = launches
        logger.info(
            "launched %d projectile(s): %s",
            len(launches), ", ".join(f"v0={l.v0:g} m/s @ {l.angle:g}°" for l in launches),
        )
        self.start()

    def sync_parameters(self) -> None:
        """Copy projectile 1 onto projectile 2."""
        for name in ("v0", "angle", "g", "mass", "drag_coeff", "air_resistance"):
            self.set_parameter(f"{name}_2", getattr(self.params, name))
        self.apply_pending()

    def randomize(self) -> None:
        """Integer v0 in [20, 100] m/s and angle in [15, 75]° for both projectiles."""
        for suffix in ("", "_2"):
            self.set_parameter(f"v0{suffix}", round(20 + self.rng.random() * 80))
            self.set_parameter(f"angle{suffix}", round(15 + self.rng.random() * 60))
        self.apply_pending()

    def on_params_changed(self, names: list[str]) -> None:
        if "mode" in names:
            logger.info("projectile mode -> %s", self.params.mode)
            self.reset()
            self._last_launches = ()

    # Camera commands; ``now_ms`` is the host clock.

    def set_auto_scale(self, enabled: bool) -> None:
        self.camera.set_auto_scale(enabled)
        if enabled:
            self._update_camera(0.0)

    def set_follow(self, enabled: bool, target: str | None = None) -> None:
        self.camera.set_follow(enabled, target)

    def pan(self, dx_px: float, dy_px: float, now_ms: float) -> None:
        self.camera.pan(dx_px, dy_px, now_ms)

    def zoom(self, sx: float, sy: float, zoom_in: bool, now_ms: float) -> None:
        self.camera.zoom(sx, sy, zoom_in, now_ms)

    def reset_view(self) -> None:
        self.camera.reset_view()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_state(self) -> None:
        self.flight = None
        self.results = None
        self.time_data.clear()
        self.camera.on_reset()

    def is_done(self) -> bool:
        return self.flight is not None and not any(
            p.in_flight for p in self.flight.projectiles.values()
        )

    # ------------------------------------------------------------------
    # Stepper
    # ------------------------------------------------------------------

    def advance(self, dt: float) -> None:
        if self.flight is None or self.is_done():
            return
        h = self.flight.time_step
        self.time += h
        for name, proj in self.flight.projectiles.items():
            was = proj.in_flight
            proj.step(h)
            if was and proj.landed:
                res = FlightResult.of(proj, h)
                logger.info("%s landed: range=%.2f m, t=%.2f s", name, res.range, res.time_of_flight)

        if isinstance(self.flight, ComparisonFlight):
            a, b = self.flight.a, self.flight.b
            self.time_data.append(
                t=self.time,
                x1=a.position[0], y1=a.position[1], vx1=a.velocity[0], vy1=a.velocity[1],
                x2=b.position[0], y2=b.position[1], vx2=b.velocity[0], vy2=b.velocity[1],
            )
            if self.is_done():
                self.results = ComparisonResults(FlightResult.of(a, h), FlightResult.of(b, h))

        now = self.scheduler.clock.last_timestamp
        self._update_camera(self.time * 1000.0 if now is None else now)

    def _update_camera(self, now_ms: float) -> None:
        cam = self.camera
        if cam.follow and self.flight is not None:
            cam.update_follow({
                name: (None if p.landed else (float(p.position[0]), float(p.position[1])))
                for name, p in self.flight.projectiles.items()
            })
        if cam.auto_scale:
            preds = self.predictions()
            trajs = [] if self.flight is None else [p.trajectory for p in self.flight.projectiles.values()]
            box = fit_bounds(trajs, max(pr.range for pr in preds), max(pr.max_height for pr in preds))
            cam.update_auto_scale(box, now_ms, center_origin_visible=self.comparison)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        state: dict = {"mode": self.params.mode, "projectiles": {}}
        derived: dict = {
            "predictions": [vars(pr) for pr in self.predictions()],
            "camera": {"scale": self.camera.scale, "x": self.camera.camera_x, "y": self.camera.camera_y},
        }
        if self.flight is not None:
            for name, p in self.flight.projectiles.items():
                ke, pe = projectile_energies(p.position, p.velocity, p.launch.mass, p.launch.g)
                state["projectiles"][name] = {
                    "position": p.position.tolist(),
                    "velocity": p.velocity.tolist(),
                    "landed": p.landed,
                    "points": len(p.trajectory),
                }
                derived.setdefault("energies", {})[name] = {"ke": ke, "pe": pe}
        if self.results is not None:
            derived["results"] = {
                "projectile1": vars(self.results.projectile1),
                "projectile2": vars(self.results.projectile2),
                "winners": self.results.winners,
                "differences": self.results.differences,
            }
        if isinstance(self.flight, SingleFlight) and self.flight.projectile.landed:
            derived["result"] = vars(FlightResult.of(self.flight.projectile, self.flight.time_step))
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        cam = self.camera
        renderer.draw_line((0.0, cam.offset_y), (cam.width, cam.offset_y), tag="ground")
        if self.flight is None:
            return
        for name, p in self.flight.projectiles.items():
            renderer.draw_polyline(cam.world_to_screen_array(p.trajectory_array()), tag=f"{name}.trajectory")
            if p.in_flight:
                renderer.draw_circle(cam.world_to_screen(*p.position), 8.0, tag=name)
