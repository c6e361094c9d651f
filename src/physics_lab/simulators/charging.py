# MIT License (see LICENSE)
"""
Charging by friction, induction or conduction.

The controller owns one ChargeTransfer model for the selected mode and
keeps its phase in step with the animation loop: starting the loop starts
the transfer (with its seed burst), pausing the loop pauses it, and the
loop stops on its own once the model is in equilibrium.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import ClassVar

from ..charge import (
    TRANSFER_MODES,
    ChargeTransfer,
    InductionTransfer,
    TransferConfig,
    charge_label,
    format_charge,
    make_transfer,
)
from ..params import Bound
from ..types import Snapshot
from .base import Simulator

logger = logging.getLogger(__name__)


@dataclass
class ChargingParams:
    """
    Attributes:
        mode: "friction", "induction" or "conduction".
        speed: Speed multiplier for emission rate and electron velocity.
        grounded: Ground connection of the induction sphere.
    """
    mode: str = "friction"
    speed: float = 1.0
    grounded: bool = True

    BOUNDS: ClassVar[dict[str, Bound]] = {"speed": Bound(0.1, 5.0)}
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {"mode": tuple(TRANSFER_MODES)}


class ChargingSimulator(Simulator):
    """
    Charge-transfer controller.

    Attributes:
        model: The transfer model of the current mode.
    """

    kind = "charging"
    params_type = ChargingParams

    def __init__(self, params: ChargingParams | None = None, config: TransferConfig | None = None,
                 seed: int | None = None, **kwargs):
        super().__init__(params, **kwargs)
        self.config = config or TransferConfig()
        self.seed = seed
        self.model: ChargeTransfer = self._build()

    def _build(self) -> ChargeTransfer:
        p = self.params
        kwargs = {"config": self.config, "seed": self.seed, "speed": p.speed}
        if p.mode == "induction":
            kwargs["grounded"] = p.grounded
        return make_transfer(p.mode, **kwargs)

    @property
    def history(self):
        return self.model.history

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.apply_pending()
        if self.model.at_equilibrium:
            return
        self.model.start()
        super().start()

    def pause(self) -> None:
        self.model.pause()
        super().pause()

    def resume(self) -> None:
        self.model.resume()
        super().resume()

    def toggle_pause(self) -> bool:
        paused = super().toggle_pause()
        if paused:
            self.model.pause()
        else:
            self.model.resume()
        return paused

    def set_grounded(self, grounded: bool) -> None:
        self.set_parameter("grounded", grounded, immediate=True)

    def on_params_changed(self, names: list[str]) -> None:
        p = self.params
        if "mode" in names:
            logger.info("charging mode -> %s", p.mode)
            self.reset()
            return
        if "speed" in names:
            self.model.speed = p.speed
        if "grounded" in names and isinstance(self.model, InductionTransfer):
            self.model.set_grounded(p.grounded)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_state(self) -> None:
        self.model = self._build()

    def is_done(self) -> bool:
        return self.model.at_equilibrium

    def advance(self, dt: float) -> None:
        self.model.step(dt)
        self.time = self.model.time

    def snapshot(self) -> Snapshot:
        m = self.model
        state = m.snapshot()
        derived = {
            "total_charge": m.total_charge,
            "formatted": {name: format_charge(q) for name, q in m.charges.items()},
            "remaining": m.remaining(),
        }
        if isinstance(m, InductionTransfer):
            derived["grounded"] = m.grounded
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        m = self.model
        w, h = self.config.width, self.config.height
        bodies = {
            "friction": {"wool": (160.0, h / 2), "rod": (w - 160.0, h / 2)},
            "induction": {"sphere": (w / 2 + 100.0, h / 2), "ground": (w / 2 + 200.0, h / 2 + 100.0)},
            "conduction": {"left": (w / 2 - 160.0, h / 2), "right": (w / 2 + 120.0, h / 2)},
        }[m.kind]
        for name, pos in bodies.items():
            renderer.draw_circle(pos, 50.0, tag=name)
            q = m.charges[name]
            renderer.draw_text((pos[0] - 40.0, pos[1] + 70.0), f"{format_charge(q)} {charge_label(q)}", tag="charge")
        if isinstance(m, InductionTransfer) and m.grounded:
            renderer.draw_line(bodies["sphere"], bodies["ground"], tag="ground_wire")
        for p in m.particles:
            renderer.draw_circle((p.x, p.y), 4.0, tag="electron")
