# MIT License (see LICENSE)
"""
Gravity and free-fall drops on different planets.

Fall time from rest, heights entered in feet:

    h = h_ft × 0.3048,   t = √(2h / g)

Air resistance is modelled as a flat ×1.5 on the fall time. The animation
plays the drop in t / speed seconds of wall clock time, moving the object
by the fraction (τ/T)² of the height at elapsed time τ of playback T, and
counts a timer down in 0.1 s ticks.

Three lanes exist: lane 1 for single drops (and replay) and lanes 2 and 3
for side-by-side comparison drops.

Reference: https://en.wikipedia.org/wiki/Free_fall
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar

from ..constants import FOOT, STANDARD_GRAVITY
from ..materials import PLANETS, planet
from ..params import Bound, coerce_float
from ..types import Snapshot
from ..util import safe_div
from .base import Simulator

logger = logging.getLogger(__name__)

OBJECTS = ("ball", "stone", "paper", "feather", "pen", "book", "leaf")
PLANET_KEYS = tuple(PLANETS) + ("custom",)
AIR_RESISTANCE_FACTOR = 1.5
COUNTDOWN_TICK = 0.1
LANES = (1, 2, 3)


def fall_time(height_ft: float, g: float, air_resistance: bool = False) -> float:
    """Seconds to fall ``height_ft`` feet from rest under ``g`` (×1.5 with air resistance)."""
    t = math.sqrt(max(0.0, safe_div(2.0 * height_ft * FOOT, g)))
    return t * AIR_RESISTANCE_FACTOR if air_resistance else t


def impact_speed(height_ft: float, g: float) -> float:
    """√(2gh) in m/s, ignoring air resistance."""
    return math.sqrt(max(0.0, 2.0 * g * height_ft * FOOT))


@dataclass
class FreeFallParams:
    """
    Attributes:
        objectN, planetN, custom_gN, heightN: Falling object, planet (or
            "custom" with ``custom_gN`` in m/s²) and drop height (ft) of lane N.
        air_resistance: Stretch fall times by 1.5.
        speed: Playback speed multiplier.
        mass: Object mass (kg), display only.
    """
    object1: str = "ball"
    planet1: str = "earth"
    custom_g1: float = STANDARD_GRAVITY
    height1: float = 10.0
    object2: str = "ball"
    planet2: str = "earth"
    custom_g2: float = STANDARD_GRAVITY
    height2: float = 10.0
    object3: str = "feather"
    planet3: str = "moon"
    custom_g3: float = STANDARD_GRAVITY
    height3: float = 10.0
    air_resistance: bool = False
    speed: float = 2.0
    mass: float = 1.0

    BOUNDS: ClassVar[dict[str, Bound]] = {
        **{f"custom_g{i}": Bound(0.01, 100.0) for i in LANES},
        **{f"height{i}": Bound(1.0, 1000.0) for i in LANES},
        "speed": Bound(0.1, 10.0),
        "mass": Bound(0.01, 1000.0),
    }
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {
        **{f"object{i}": OBJECTS for i in LANES},
        **{f"planet{i}": PLANET_KEYS for i in LANES},
    }


@dataclass
class Drop:
    """
    One animated drop.

    Attributes:
        lane: Lane number (1-3).
        object: Falling object key.
        height_ft: Drop height in feet.
        g: Gravitational acceleration used (m/s²).
        fall_time: Physical fall time (s), including the air-resistance factor.
        duration: Playback duration fall_time / speed (s).
        elapsed: Playback time so far (s).
    """
    lane: int
    object: str
    height_ft: float
    g: float
    fall_time: float
    duration: float
    elapsed: float = 0.0

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration

    @property
    def fraction(self) -> float:
        """Fraction of the height already fallen, (τ/T)²."""
        if self.duration <= 0.0:
            return 1.0
        return min(1.0, (self.elapsed / self.duration) ** 2)

    @property
    def remaining(self) -> float:
        """Countdown shown on the lane timer; the full duration once landed."""
        if self.finished:
            return self.duration
        ticks = math.floor(self.elapsed / COUNTDOWN_TICK + 1e-9)
        left = self.duration - ticks * COUNTDOWN_TICK
        return max(0.0, left)


@dataclass
class DropLog:
    entries: list[str] = field(default_factory=list)

    def add(self, text: str) -> None:
        self.entries.append(text)
        logger.info(text)


class FreeFallSimulator(Simulator):
    """
    Attributes:
        drops: Active or finished drops by lane.
        log: Human-readable history of drops.
        last_drop: (height_ft, g) of the last lane-1 drop, for replay.
    """

    kind = "freefall"
    params_type = FreeFallParams

    def __init__(self, params: FreeFallParams | None = None, **kwargs):
        super().__init__(params, **kwargs)
        self.drops: dict[int, Drop] = {}
        self.log = DropLog()
        self.last_drop: tuple[float, float] | None = None

    # ------------------------------------------------------------------
    # Lanes
    # ------------------------------------------------------------------

    def gravity(self, lane: int) -> float:
        """
        Raises:
            ValueError: If ``lane`` is not 1, 2 or 3.
        """
        self._check_lane(lane)
        key = getattr(self.params, f"planet{lane}")
        if key == "custom":
            return getattr(self.params, f"custom_g{lane}")
        return planet(key).g

    def set_custom_gravity(self, lane: int, raw) -> float:
        """Set a lane's custom g; unparsable input falls back to 9.81 m/s²."""
        self._check_lane(lane)
        value, ok = coerce_float(raw, STANDARD_GRAVITY)
        if not ok:
            logger.warning("custom gravity %r is not a number, using %.2f m/s²", raw, STANDARD_GRAVITY)
        self.set_parameter(f"custom_g{lane}", value, immediate=True)
        return getattr(self.params, f"custom_g{lane}")

    @staticmethod
    def _check_lane(lane: int) -> None:
        if lane not in LANES:
            raise ValueError(f"Unknown lane {lane} (expected one of {LANES})")

    def _launch(self, lane: int, height_ft: float, g: float) -> Drop:
        p = self.params
        t = fall_time(height_ft, g, p.air_resistance)
        drop = Drop(lane, getattr(p, f"object{lane}"), height_ft, g, t, t / p.speed)
        self.drops[lane] = drop
        return drop

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def drop(self) -> Drop:
        """Drop the lane-1 object from its height."""
        self.apply_pending()
        p = self.params
        d = self._launch(1, p.height1, self.gravity(1))
        self.last_drop = (d.height_ft, d.g)
        self.log.add(f"Dropped {p.object1} from {p.height1:g} ft")
        self.start()
        return d

    def drop_compare(self) -> tuple[Drop, Drop]:
        """Drop lanes 2 and 3 together."""
        self.apply_pending()
        p = self.params
        pair = (self._launch(2, p.height2, self.gravity(2)), self._launch(3, p.height3, self.gravity(3)))
        self.log.add(f"Compared drop: {p.object2} vs {p.object3}")
        self.start()
        return pair

    def replay(self) -> Drop | None:
        """Repeat the last lane-1 drop with its original height and gravity."""
        if self.last_drop is None:
            return None
        d = self._launch(1, *self.last_drop)
        self.start()
        return d

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_state(self) -> None:
        self.drops.clear()

    def is_done(self) -> bool:
        return all(d.finished for d in self.drops.values())

    def advance(self, dt: float) -> None:
        self.time += dt
        for d in self.drops.values():
            if not d.finished:
                d.elapsed = min(d.duration, d.elapsed + dt)

    def snapshot(self) -> Snapshot:
        state = {
            lane: {
                "object": d.object,
                "fraction": d.fraction,
                "fallen_ft": d.fraction * d.height_ft,
                "remaining": d.remaining,
                "finished": d.finished,
            }
            for lane, d in self.drops.items()
        }
        derived = {
            "gravity": {lane: self.gravity(lane) for lane in LANES},
            "fall_times": {lane: d.fall_time for lane, d in self.drops.items()},
            "impact_speeds": {lane: impact_speed(d.height_ft, d.g) for lane, d in self.drops.items()},
            "log": list(self.log.entries),
        }
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer, lane_height: float = 400.0) -> None:
        for lane in LANES:
            x = 150.0 * lane
            renderer.draw_line((x - 40.0, lane_height), (x + 40.0, lane_height), tag="ground")
            d = self.drops.get(lane)
            fraction = d.fraction if d is not None else 0.0
            renderer.draw_circle((x, 20.0 + fraction * (lane_height - 40.0)), 20.0, tag=f"object{lane}")
            if d is not None:
                renderer.draw_text((x - 40.0, lane_height + 20.0), f"Time: {d.remaining:.2f}s", tag=f"timer{lane}")
