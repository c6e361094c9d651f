# MIT License (see LICENSE)
"""
Heat conduction controller.

Two views share one parameter set:

    steady     Q through a slab, rod or layered wall for the temperatures
               T1/T2 (a pure function of the parameters);
    compare    two bodies of materials A and B exchanging heat across the
               contact until |T_a − T_b| < 0.01 °C (TwoBodyConduction).

In compare mode the loop stops on its own at equilibrium; the
``on_equilibrium`` callback fires once per transition.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, ClassVar

from ..materials import THERMAL_MATERIALS, thermal_material
from ..params import Bound
from ..thermal import (
    GEOMETRIES,
    BodyProps,
    Layer,
    TwoBodyConduction,
    equilibrium_temperature,
    heat_rate,
    slab_heat_rate,
)
from ..types import Snapshot
from ..util import clamp
from .base import Simulator

logger = logging.getLogger(__name__)

MATERIAL_KEYS = tuple(THERMAL_MATERIALS) + ("custom",)

# Smallest layer thickness/conductivity accepted from the layer editor.
MIN_LAYER_VALUE = 1e-4


@dataclass
class HeatFlowParams:
    """
    Attributes:
        material: Material of the steady-state conductor.
        custom_k, custom_c: Conductivity and specific heat of the "custom" material.
        geometry: "slab", "rod" or "wall".
        area: Contact/cross-section area A (m²).
        thickness: Conductor depth d (m).
        t1, t2: Hot and cold side temperatures of the steady view (°C).
        compare: Run the two-body exchange.
        material_a, material_b: Materials of the two bodies.
        mass_a, mass_b: Body masses (kg).
        t_a, t_b: Initial body temperatures (°C).
    """
    material: str = "copper"
    custom_k: float = 10.0
    custom_c: float = 500.0
    geometry: str = "slab"
    area: float = 0.01
    thickness: float = 0.02
    t1: float = 100.0
    t2: float = 20.0
    compare: bool = False
    material_a: str = "copper"
    material_b: str = "glass"
    mass_a: float = 1.0
    mass_b: float = 1.0
    t_a: float = 100.0
    t_b: float = 20.0

    BOUNDS: ClassVar[dict[str, Bound]] = {
        "custom_k": Bound(0.0, 1000.0),
        "custom_c": Bound(1.0, 10000.0),
        "area": Bound(1e-6, 10.0),
        "thickness": Bound(0.0, 10.0),
        "t1": Bound(-273.15, 3000.0),
        "t2": Bound(-273.15, 3000.0),
        "mass_a": Bound(0.01, 1000.0),
        "mass_b": Bound(0.01, 1000.0),
        "t_a": Bound(-273.15, 3000.0),
        "t_b": Bound(-273.15, 3000.0),
    }
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {
        "material": MATERIAL_KEYS,
        "geometry": GEOMETRIES,
        "material_a": MATERIAL_KEYS,
        "material_b": MATERIAL_KEYS,
    }


class HeatFlowSimulator(Simulator):
    """
    Attributes:
        model: Two-body exchange of the compare view.
        layers: Wall layers, used when geometry is "wall".
        arrow_offset: Phase of the flow arrows (px, wraps at 60).
    """

    kind = "heatflow"
    params_type = HeatFlowParams

    def __init__(self, params: HeatFlowParams | None = None,
                 on_equilibrium: Callable[[TwoBodyConduction], None] | None = None, **kwargs):
        super().__init__(params, **kwargs)
        self.layers: list[Layer] = []
        self.arrow_offset = 0.0
        self.equilibrium_events = 0
        self._user_callback = on_equilibrium
        p = self.params
        self.model = TwoBodyConduction(
            self._body("a"), self._body("b"),
            area=p.area, thickness=p.thickness, t_a=p.t_a, t_b=p.t_b,
            on_equilibrium=self._on_equilibrium,
        )

    @property
    def history(self):
        return self.model.history

    # ------------------------------------------------------------------
    # Materials and layers
    # ------------------------------------------------------------------

    def _material(self, key: str):
        return thermal_material(key, k=self.params.custom_k, c=self.params.custom_c)

    def _body(self, which: str) -> BodyProps:
        p = self.params
        mat = self._material(getattr(p, f"material_{which}"))
        return BodyProps(m=getattr(p, f"mass_{which}"), c=mat.c, k=mat.k)

    def add_layer(self, d: float = 0.01, k: float = 1.0) -> Layer:
        layer = Layer(max(MIN_LAYER_VALUE, d), max(MIN_LAYER_VALUE, k))
        self.layers.append(layer)
        return layer

    def remove_layer(self, index: int) -> None:
        """
        Raises:
            IndexError: If there is no layer at ``index``.
        """
        del self.layers[index]

    def clear_layers(self) -> None:
        self.layers.clear()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def conductivity(self) -> float:
        return max(0.0, self._material(self.params.material).k)

    def steady_heat_rate(self) -> float:
        """Q for the selected geometry at ΔT = T1 − T2."""
        p = self.params
        return heat_rate(p.geometry, self.conductivity, p.area, p.t1 - p.t2, p.thickness, self.layers)

    def compare_heat_rates(self) -> tuple[float, float]:
        """Steady Q through material A and through material B for the same slab."""
        p = self.params
        if p.geometry == "wall" and self.layers:
            q = self.steady_heat_rate()
            return q, q
        dt = p.t1 - p.t2
        return (
            slab_heat_rate(self._material(p.material_a).k, p.area, dt, p.thickness),
            slab_heat_rate(self._material(p.material_b).k, p.area, dt, p.thickness),
        )

    def current_heat_rate(self) -> float:
        return self.model.heat_rate() if self.params.compare else self.steady_heat_rate()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _on_equilibrium(self, model: TwoBodyConduction) -> None:
        self.equilibrium_events += 1
        if self._user_callback is not None:
            self._user_callback(model)

    def on_params_changed(self, names: list[str]) -> None:
        p = self.params
        m = self.model
        m.body_a, m.body_b = self._body("a"), self._body("b")
        m.area, m.thickness = p.area, p.thickness
        if {"t_a", "t_b", "compare"} & set(names):
            m.reset(p.t_a, p.t_b)
            logger.debug("heat flow bodies reset to %.1f°C / %.1f°C", p.t_a, p.t_b)

    def reset_state(self) -> None:
        self.arrow_offset = 0.0
        self.model.reset(self.params.t_a, self.params.t_b)

    def is_done(self) -> bool:
        return self.params.compare and self.model.equilibrium

    def advance(self, dt: float) -> None:
        if dt <= 0.0:
            return
        self.time += dt
        if self.params.compare:
            self.model.step(dt)
        elif not self.model.history.frozen:
            self.model.history.append(t=self.time, Ta=self.params.t1, Tb=self.params.t2)
        if not self.model.equilibrium:
            speed = clamp(abs(self.current_heat_rate()), 10.0, 300.0)
            self.arrow_offset = (self.arrow_offset + speed * dt * 0.02) % 60.0

    def snapshot(self) -> Snapshot:
        p, m = self.params, self.model
        state = {"t_a": m.t_a, "t_b": m.t_b, "equilibrium": m.equilibrium}
        derived = {
            "delta_t": p.t1 - p.t2,
            "q": self.steady_heat_rate(),
            "geometry": p.geometry,
        }
        if p.compare:
            q1, q2 = self.compare_heat_rates()
            derived.update(
                q1=q1,
                q2=q2,
                interface_delta_t=m.t_a - m.t_b,
                interface_q=m.heat_rate(),
                final_temperature=equilibrium_temperature(
                    m.body_a.m, m.body_a.c, m.t_a, m.body_b.m, m.body_b.c, m.t_b
                ),
            )
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        p, m = self.params, self.model
        hot, cold = (m.t_a, m.t_b) if p.compare else (p.t1, p.t2)
        renderer.draw_polyline([(100.0, 100.0), (400.0, 100.0), (400.0, 300.0), (100.0, 300.0), (100.0, 100.0)], tag="body_a")
        renderer.draw_polyline([(400.0, 100.0), (700.0, 100.0), (700.0, 300.0), (400.0, 300.0), (400.0, 100.0)], tag="body_b")
        renderer.draw_text((200.0, 200.0), f"{hot:.2f} °C", tag="temperature_a")
        renderer.draw_text((500.0, 200.0), f"{cold:.2f} °C", tag="temperature_b")
        if m.equilibrium:
            renderer.draw_text((330.0, 60.0), "Thermal equilibrium reached", tag="equilibrium")
            return
        direction = 1.0 if hot >= cold else -1.0
        for i in range(3):
            x = 370.0 + ((self.arrow_offset + i * 20.0) % 60.0)
            y = 160.0 + i * 40.0
            renderer.draw_line((x, y), (x + 15.0 * direction, y), tag="heat_arrow")
