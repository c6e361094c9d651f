# MIT License (see LICENSE)
"""
Thermal expansion controller.

The sample temperature is not physical: it ramps toward a target at a fixed
rate (80 °C/s by default) and snaps onto it within 0.01 °C. The expansion
itself is the pure function in ``thermal.expansion`` of ΔT = T − T₀.

Heat/cool commands move the target by ±50 °C and, while held, keep pushing
it by 0.1 × ramp rate per second. The target always stays in [−50, 500] °C.
The loop finishes on its own once the temperature is on target and neither
heating nor cooling is active.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import ClassVar

from ..core.integrators import ramp_toward
from ..history import HistorySeries
from ..materials import EXPANSION_MATERIALS, expansion_material
from ..params import Bound
from ..thermal import INITIAL_AREA_MM2, INITIAL_LENGTH_MM, INITIAL_VOLUME_MM3, ExpansionKind, expansion
from ..types import Snapshot
from ..util import clamp
from .base import Simulator

logger = logging.getLogger(__name__)

TARGET_MIN = -50.0
TARGET_MAX = 500.0
HEAT_STEP = 50.0
GRAPH_INTERVAL_MS = 80.0


@dataclass
class ThermalParams:
    """
    Attributes:
        material: Sample material (single view).
        expansion_type: "linear", "areal" or "volumetric".
        initial_temp: Reference temperature T₀ (°C).
        initial_length, initial_area, initial_volume: Sample size at T₀ (mm, mm², mm³).
        ramp_rate: Speed of the temperature animation (°C/s).
        compare: Show two materials side by side.
        material_1, material_2: Materials of the comparison.
    """
    material: str = "iron"
    expansion_type: str = "linear"
    initial_temp: float = 20.0
    initial_length: float = INITIAL_LENGTH_MM
    initial_area: float = INITIAL_AREA_MM2
    initial_volume: float = INITIAL_VOLUME_MM3
    ramp_rate: float = 80.0
    compare: bool = False
    material_1: str = "iron"
    material_2: str = "copper"

    BOUNDS: ClassVar[dict[str, Bound]] = {
        "initial_temp": Bound(TARGET_MIN, TARGET_MAX),
        "initial_length": Bound(0.0, 1e6),
        "initial_area": Bound(0.0, 1e9),
        "initial_volume": Bound(0.0, 1e12),
        "ramp_rate": Bound(1.0, 1000.0),
    }
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {
        "material": tuple(EXPANSION_MATERIALS),
        "expansion_type": tuple(k.value for k in ExpansionKind),
        "material_1": tuple(EXPANSION_MATERIALS),
        "material_2": tuple(EXPANSION_MATERIALS),
    }

    @property
    def kind(self) -> ExpansionKind:
        return ExpansionKind.parse(self.expansion_type)

    @property
    def initial_size(self) -> float:
        return {
            ExpansionKind.LINEAR: self.initial_length,
            ExpansionKind.AREAL: self.initial_area,
            ExpansionKind.VOLUMETRIC: self.initial_volume,
        }[self.kind]


class ThermalExpansionSimulator(Simulator):
    """
    Attributes:
        temperature: Current sample temperature (°C).
        target: Temperature being ramped toward (°C).
        heating, cooling: Held heat/cool commands.
        graph: (temp, expansion1, expansion2) samples of the comparison, at most 50.
    """

    kind = "thermal"
    params_type = ThermalParams

    def __init__(self, params: ThermalParams | None = None, graph_len: int = 50, **kwargs):
        super().__init__(params, **kwargs)
        self.graph = HistorySeries(graph_len, ("temp", "expansion1", "expansion2"))
        self.reset_state()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def heat(self) -> None:
        self.heating, self.cooling = True, False
        self.target = min(TARGET_MAX, self.target + HEAT_STEP)
        self._ensure_running()

    def cool(self) -> None:
        self.cooling, self.heating = True, False
        self.target = max(TARGET_MIN, self.target - HEAT_STEP)
        self._ensure_running()

    def release(self) -> None:
        """Stop pushing the target; the ramp still finishes."""
        self.heating = self.cooling = False

    def set_target(self, value) -> bool:
        """
        Set an absolute target, clamped to [−50, 500] °C.

        Returns:
            False (target unchanged) when ``value`` is not a finite number.
        """
        try:
            v = float(value)
        except (TypeError, ValueError):
            v = math.nan
        if not math.isfinite(v):
            logger.warning("ignored non-numeric target temperature %r", value)
            return False
        self.target = clamp(v, TARGET_MIN, TARGET_MAX)
        self._ensure_running()
        return True

    def _ensure_running(self) -> None:
        if self.paused:
            self.resume()
        elif not self.running:
            self.start()

    def on_params_changed(self, names: list[str]) -> None:
        if "initial_temp" in names:
            # T₀ moved: the sample restarts at rest on the new reference.
            logger.debug("initial temperature -> %g °C", self.params.initial_temp)
            self.reset_state()
        elif "compare" in names:
            self.graph.clear()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def delta_t(self) -> float:
        return self.temperature - self.params.initial_temp

    def expansion_of(self, material: str) -> float:
        p = self.params
        return expansion(p.initial_size, expansion_material(material).alpha, self.delta_t, p.kind)

    @property
    def still(self) -> bool:
        return abs(self.target - self.temperature) < 0.01

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_state(self) -> None:
        self.temperature = self.params.initial_temp
        self.target = self.params.initial_temp
        self.heating = self.cooling = False
        self.graph.clear()
        self._last_sample_ms: float | None = None

    def is_done(self) -> bool:
        return self.still and not self.heating and not self.cooling

    def advance(self, dt: float) -> None:
        p = self.params
        self.time += dt
        nudge = p.ramp_rate * dt * 0.1
        if self.heating:
            self.target = min(TARGET_MAX, self.target + nudge)
        if self.cooling:
            self.target = max(TARGET_MIN, self.target - nudge)
        self.temperature = ramp_toward(self.temperature, self.target, p.ramp_rate, dt)

        now_ms = self.time * 1000.0
        if self._last_sample_ms is None or now_ms - self._last_sample_ms > GRAPH_INTERVAL_MS:
            self._last_sample_ms = now_ms
            if p.compare:
                self.graph.append(
                    temp=self.temperature,
                    expansion1=self.expansion_of(p.material_1),
                    expansion2=self.expansion_of(p.material_2),
                )

    def snapshot(self) -> Snapshot:
        p = self.params
        unit = p.kind.unit
        state = {
            "temperature": self.temperature,
            "target": self.target,
            "heating": self.heating,
            "cooling": self.cooling,
        }
        derived = {"delta_t": self.delta_t, "unit": unit}
        if p.compare:
            for i, key in enumerate((p.material_1, p.material_2), start=1):
                amount = self.expansion_of(key)
                derived[f"expansion{i}"] = amount
                derived[f"final_size{i}"] = p.initial_size + amount
        else:
            amount = self.expansion_of(p.material)
            derived.update(expansion=amount, final_size=p.initial_size + amount)
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        p = self.params
        keys = (p.material_1, p.material_2) if p.compare else (p.material,)
        renderer.draw_text((400.0, 30.0), f"{self.temperature:.1f}°C", tag="temperature")
        for i, key in enumerate(keys):
            y = 150.0 + i * 150.0
            # Exaggerated so that a few micrometres are visible.
            grow = self.expansion_of(key) / max(p.initial_size, 1e-9) * 100.0 * 50.0
            half = 200.0 + grow
            renderer.draw_polyline(
                [(400.0 - half, y - 30.0), (400.0 + half, y - 30.0), (400.0 + half, y + 30.0),
                 (400.0 - half, y + 30.0), (400.0 - half, y - 30.0)],
                tag=f"sample{i + 1}" if p.compare else "sample",
            )
            renderer.draw_text((400.0 - half, y + 50.0), expansion_material(key).name, tag="label")
