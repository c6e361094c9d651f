# MIT License (see LICENSE)
"""
Charge-transfer state machine for charging by friction, induction and conduction.

Charges are integer counts of the elementary charge e. Electrons are
animated as Particles travelling from a *donor* body to an *acceptor* body.
On arrival exactly one unit moves, atomically:

    acceptor −= 1   (gains an electron)
    donor    += 1   (loses an electron)

so the total charge of the pair never changes.

Phases: IDLE → RUNNING → (EQUILIBRIUM | PAUSED ⇄ RUNNING). EQUILIBRIUM is
terminal until reset(). It is reached when no transfer capacity remains
and no electron is still in flight.

Emission is budgeted: electrons in flight never exceed the number of
transfers still allowed, so the cap is met exactly and never overshot.
Electron velocity is (target − start)·base, making the travel time close to
1/base regardless of distance.

Variants (canvas pixels, W×H):
    friction    wool → rod,      arrival at x > W − 220, cap on |q_rod|
    induction   sphere → ground, arrival at x > W/2 + 180, only while grounded
    conduction  right → left,    arrival at x < W/2 − 140, left starts at +10 e
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..constants import CHARGE_CAP
from ..history import HistorySeries
from ..types import EmissionCredit, Particle

logger = logging.getLogger(__name__)


class TransferPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EQUILIBRIUM = "equilibrium"


@dataclass(frozen=True)
class TransferConfig:
    """
    Tunable visual constants of the transfer animation.

    Attributes:
        cap: Charge magnitude (e) at which the acceptor is saturated.
        burst: Electrons emitted immediately on start.
        burst_base: Velocity factor of burst electrons (per unit speed).
        stream_base: Velocity factor of continuously emitted electrons.
        base_rate: Emission rate at zero speed, before the speed factor.
        rate_per_speed: Extra electrons/s per unit of speed multiplier.
        width, height: Canvas size in pixels.
        history_len: Capacity of the charge history.
    """
    cap: int = CHARGE_CAP
    burst: int = 12
    burst_base: float = 0.7
    stream_base: float = 0.65
    base_rate: float = 10.0
    rate_per_speed: float = 4.0
    width: float = 900.0
    height: float = 400.0
    history_len: int = 300

    def emission_rate(self, speed: float) -> float:
        """Electrons per second: (10 + 4·speed)·speed with the default constants."""
        return max(0.0, (self.base_rate + self.rate_per_speed * speed) * speed)


def format_charge(q: int) -> str:
    """Signed charge label, e.g. ``+3e``, ``-2e``, ``+0e``."""
    return f"{'+' if q >= 0 else ''}{q}e"


def charge_label(q: int) -> str:
    if q < 0:
        return "Negatively Charged"
    if q > 0:
        return "Positively Charged"
    return "Neutral"


class ChargeTransfer(ABC):
    """
    Base state machine shared by the three charging variants.

    Attributes:
        donor: Name of the body losing electrons (its charge rises).
        acceptor: Name of the body gaining electrons (its charge falls).
        charges: Current charge per body name.
        particles: Electrons in flight.
        history: (t, acceptor, donor) samples for the charge graph.
        speed: Speed multiplier applied to emission rate and velocity.
    """

    kind = "charge"
    donor = "donor"
    acceptor = "acceptor"
    initial: dict[str, int] = {}

    def __init__(self, config: TransferConfig | None = None, seed: int | None = None, speed: float = 1.0):
        self.config = config or TransferConfig()
        self.seed = seed
        self.speed = speed
        self.rng = np.random.default_rng(seed)
        self.history = HistorySeries(self.config.history_len, ("t", self.acceptor, self.donor))
        self._emitter = EmissionCredit()
        self.reset()

    # ------------------------------------------------------------------
    # Variant hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _source(self) -> tuple[float, float]:
        """Random emission point."""

    @abstractmethod
    def _target(self) -> tuple[float, float]:
        """Aim point of a new electron."""

    @abstractmethod
    def _arrived(self, p: Particle) -> bool:
        """True once ``p`` has crossed its arrival threshold."""

    @abstractmethod
    def remaining(self) -> int:
        """Transfers still allowed before the acceptor is saturated."""

    def can_emit(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Return to IDLE with the initial charges and an empty graph."""
        self.phase = TransferPhase.IDLE
        self.charges = {self.acceptor: 0, self.donor: 0}
        self.charges.update(self.initial)
        self.particles: list[Particle] = []
        self.transferred = 0
        self.time = 0.0
        self.history.clear()
        self._emitter.reset()
        self.rng = np.random.default_rng(self.seed)

    def start(self) -> bool:
        """
        IDLE → RUNNING (with a seed burst) or PAUSED → RUNNING.

        Returns:
            False when already running or at equilibrium.
        """
        if self.phase is TransferPhase.PAUSED:
            self.phase = TransferPhase.RUNNING
            return True
        if self.phase is not TransferPhase.IDLE:
            return False
        self.phase = TransferPhase.RUNNING
        logger.info("%s transfer started", self.kind)
        self.seed_burst()
        return True

    def pause(self) -> None:
        if self.phase is TransferPhase.RUNNING:
            self.phase = TransferPhase.PAUSED

    def resume(self) -> None:
        if self.phase is TransferPhase.PAUSED:
            self.phase = TransferPhase.RUNNING

    @property
    def running(self) -> bool:
        return self.phase is TransferPhase.RUNNING

    @property
    def at_equilibrium(self) -> bool:
        return self.phase is TransferPhase.EQUILIBRIUM

    @property
    def total_charge(self) -> int:
        return sum(self.charges.values())

    @property
    def budget(self) -> int:
        """Electrons that may still be emitted (remaining minus in flight)."""
        return max(0, self.remaining() - len(self.particles))

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit(self, count: int, base: float) -> int:
        count = min(count, self.budget)
        factor = base * self.speed
        for _ in range(count):
            sx, sy = self._source()
            tx, ty = self._target()
            self.particles.append(
                Particle((sx, sy), ((tx - sx) * factor, (ty - sy) * factor), target=self.acceptor)
            )
        return count

    def seed_burst(self) -> int:
        """Emit the start-up burst immediately, without advancing time."""
        if self.phase is not TransferPhase.RUNNING or not self.can_emit():
            return 0
        return self._emit(self.config.burst, self.config.burst_base)

    # ------------------------------------------------------------------
    # Stepper
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Emit, move and land electrons for one tick. No-op unless RUNNING."""
        if self.phase is not TransferPhase.RUNNING or dt <= 0.0:
            return
        self.time += dt

        if self.can_emit():
            n = self._emitter.accumulate(self.config.emission_rate(self.speed), dt)
            self._emit(n, self.config.stream_base)

        remaining = []
        for p in self.particles:
            p.advance(dt)
            if self._arrived(p):
                self._land()
            else:
                remaining.append(p)
        self.particles = remaining

        self.history.append(**{"t": self.time, self.acceptor: self.charges[self.acceptor], self.donor: self.charges[self.donor]})

        if self.remaining() <= 0 and not self.particles:
            self.phase = TransferPhase.EQUILIBRIUM
            self.history.freeze()
            logger.info(
                "%s transfer reached equilibrium at t=%.2fs (%s=%s, %s=%s)",
                self.kind, self.time,
                self.acceptor, format_charge(self.charges[self.acceptor]),
                self.donor, format_charge(self.charges[self.donor]),
            )

    def _land(self) -> None:
        self.charges[self.acceptor] -= 1
        self.charges[self.donor] += 1
        self.transferred += 1

    def snapshot(self) -> dict:
        return {
            "phase": self.phase.value,
            "charges": dict(self.charges),
            "in_flight": len(self.particles),
            "transferred": self.transferred,
            "labels": {name: charge_label(q) for name, q in self.charges.items()},
        }


class FrictionTransfer(ChargeTransfer):
    """Rubbing wool on a rod: electrons move wool → rod until |q_rod| = cap."""

    kind = "friction"
    donor = "wool"
    acceptor = "rod"

    def _source(self):
        h = self.config.height
        return 130.0 + self.rng.random() * 60.0, h / 2 + self.rng.random() * 40.0 - 20.0

    def _target(self):
        w, h = self.config.width, self.config.height
        return w - 190.0 + self.rng.random() * 60.0, h / 2 + self.rng.random() * 40.0 - 20.0

    def _arrived(self, p):
        return p.x > self.config.width - 220.0

    def remaining(self):
        return self.config.cap - abs(self.charges["rod"])


class InductionTransfer(ChargeTransfer):
    """
    A charged rod near a grounded sphere repels electrons to earth.

    Emission only happens while ``grounded``; electrons already in flight
    still land after the ground is disconnected.
    """

    kind = "induction"
    donor = "sphere"
    acceptor = "ground"

    def __init__(self, config: TransferConfig | None = None, seed: int | None = None,
                 speed: float = 1.0, grounded: bool = True):
        self.grounded = grounded
        super().__init__(config, seed, speed)

    def set_grounded(self, grounded: bool) -> int:
        """
        Connect or disconnect the ground.

        Connecting while running emits a burst. Returns the number emitted.
        """
        was = self.grounded
        self.grounded = bool(grounded)
        if self.grounded and not was and self.phase is TransferPhase.RUNNING:
            return self.seed_burst()
        return 0

    def can_emit(self):
        return self.grounded

    def _source(self):
        w, h = self.config.width, self.config.height
        return w / 2 + 80.0 + self.rng.random() * 40.0, h / 2 + self.rng.random() * 40.0 - 20.0

    def _target(self):
        w, h = self.config.width, self.config.height
        return w / 2 + 200.0, h / 2 + 80.0

    def _arrived(self, p):
        return p.x > self.config.width / 2 + 180.0

    def remaining(self):
        return self.config.cap - self.charges["sphere"]


class ConductionTransfer(ChargeTransfer):
    """
    Touching a neutral conductor to a positive one: electrons flow right → left.

    Stops when the left body is neutral or the right body reaches the cap.
    """

    kind = "conduction"
    donor = "right"
    acceptor = "left"
    initial = {"left": 10, "right": 0}

    def _source(self):
        w, h = self.config.width, self.config.height
        return w / 2 + 100.0 + self.rng.random() * 40.0, h / 2 + self.rng.random() * 40.0 - 20.0

    def _target(self):
        w, h = self.config.width, self.config.height
        return w / 2 - 120.0, h / 2 + self.rng.random() * 20.0 - 10.0

    def _arrived(self, p):
        return p.x < self.config.width / 2 - 140.0

    def remaining(self):
        return max(0, min(self.charges["left"], self.config.cap - self.charges["right"]))


TRANSFER_MODES: dict[str, type[ChargeTransfer]] = {
    "friction": FrictionTransfer,
    "induction": InductionTransfer,
    "conduction": ConductionTransfer,
}


def make_transfer(mode: str, **kwargs) -> ChargeTransfer:
    """
    Build a transfer model by mode name.

    Raises:
        ValueError: If ``mode`` is not friction, induction or conduction.
    """
    try:
        cls = TRANSFER_MODES[mode.lower()]
    except KeyError:
        raise ValueError(f"Unknown charging mode: '{mode}'") from None
    return cls(**kwargs)
