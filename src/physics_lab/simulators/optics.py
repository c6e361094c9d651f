# MIT License (see LICENSE)
"""
Reflection and refraction controllers.

Neither has time-dependent physics: the geometry is a pure function of the
parameters (and, for reflection, of the ray fan being dragged). Starting the
loop draws one frame and finishes; pointer commands redraw immediately.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import ClassVar

from ..materials import OPTICAL_MEDIA, optical_medium
from ..optics import (
    SURFACES,
    ReflectionModel,
    angle_from_pointer,
    boundaries,
    critical_angle,
    lamp_hit,
    slab_path,
)
from ..params import Bound
from ..types import Snapshot
from .base import Simulator

logger = logging.getLogger(__name__)


class _StaticSimulator(Simulator):
    """Controller whose picture changes only on commands."""

    def advance(self, dt: float) -> None:
        self.time += dt

    def is_done(self) -> bool:
        return True

    def redraw(self) -> None:
        self._render_frame()


# ----------------------------------------------------------------------
# Reflection
# ----------------------------------------------------------------------

@dataclass
class ReflectionParams:
    """
    Attributes:
        angle: Angle of incidence (= angle of reflection) of the first ray, degrees from the normal.
        surface: "smooth", "rough", "semi-matte", "concave" or "convex".
    """
    angle: float = 30.0
    surface: str = "smooth"

    BOUNDS: ClassVar[dict[str, Bound]] = {"angle": Bound(0.0, 90.0)}
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {"surface": tuple(SURFACES)}


class ReflectionSimulator(_StaticSimulator):
    """
    Attributes:
        model: The ray fan and surface.
    """

    kind = "reflection"
    params_type = ReflectionParams

    def __init__(self, params: ReflectionParams | None = None, width: float = 900.0, height: float = 550.0, **kwargs):
        super().__init__(params, **kwargs)
        self.model = ReflectionModel(width, height, angle=self.params.angle, surface=self.params.surface)

    # The incidence and reflection sliders write the same angle.

    def set_incidence(self, angle: float) -> None:
        self.set_parameter("angle", angle, immediate=True)

    def set_reflection(self, angle: float) -> None:
        self.set_parameter("angle", angle, immediate=True)

    def add_ray(self) -> bool:
        added = self.model.add_ray()
        self.redraw()
        return added

    def remove_ray(self) -> bool:
        removed = self.model.remove_ray()
        self.redraw()
        return removed

    def reset_rays(self) -> None:
        self.model.reset_rays()
        self.redraw()

    def pointer_down(self, x: float, y: float) -> bool:
        return self.model.begin_drag(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        if self.model.drag is None:
            return
        self.model.drag_to(x, y)
        self.set_parameter("angle", self.model.angle_of_incidence)
        if not self.apply_pending():
            self.redraw()

    def pointer_up(self) -> None:
        self.model.end_drag()

    def on_params_changed(self, names: list[str]) -> None:
        p = self.params
        if "surface" in names:
            self.model.set_surface(p.surface)
            logger.debug("surface -> %s", p.surface)
        if "angle" in names and p.angle != self.model.angle_of_incidence:
            self.model.set_angle(p.angle)
        self.redraw()

    def reset_state(self) -> None:
        self.model.initial_angle = self.params.angle
        self.model.reset()

    def snapshot(self) -> Snapshot:
        m = self.model
        state = {
            "angle_of_incidence": m.angle_of_incidence,
            "angle_of_reflection": m.angle_of_reflection,
            "surface": m.surface,
            "rays": [
                {"id": r.id, "incident": r.incident, "reflected": r.reflected, "active": r.active}
                for r in m.rays
            ],
        }
        derived = {
            "active_rays": m.active_rays,
            "surface_description": m.surface_description,
            "image_description": m.image_description,
        }
        image = m.mirror_image()
        if image is not None:
            derived.update(
                focal_length=image.focal_length,
                image_distance=image.distance,
                magnification=image.magnification,
                real=image.real,
                upright=image.upright,
            )
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        m = self.model
        cx, cy = m.center
        renderer.draw_line((cx - 300.0, cy), (cx + 300.0, cy), tag="surface")
        renderer.draw_line((cx, cy), (cx, cy - m.ray_length - 20.0), tag="normal")
        if m.is_mirror:
            image = m.mirror_image()
            renderer.draw_text((20.0, 20.0), m.surface_description, tag="description")
            if image is not None and not image.at_infinity:
                renderer.draw_text((20.0, 40.0), f"dᵢ = {image.distance:.1f}, m = {image.magnification:.2f}", tag="image")
            return
        for ray in m.rays:
            if not ray.active:
                continue
            renderer.draw_line(ray.incident, m.center, tag="incident")
            renderer.draw_line(m.center, ray.reflected, tag="reflected")
            renderer.draw_circle(ray.incident, 6.0, tag="handle")
            renderer.draw_circle(ray.reflected, 6.0, tag="handle")
        a = math.radians(m.angle_of_incidence)
        up = -math.pi / 2.0
        renderer.draw_arc(m.center, 40.0, up - a, up, tag="incidence_arc")
        renderer.draw_arc(m.center, 40.0, up, up + a, tag="reflection_arc")
        renderer.draw_text((cx - 60.0, cy - 50.0), f"{m.angle_of_incidence:.1f}°", tag="angle")
        renderer.draw_text((cx + 30.0, cy - 50.0), f"{m.angle_of_reflection:.1f}°", tag="angle")


# ----------------------------------------------------------------------
# Refraction
# ----------------------------------------------------------------------

@dataclass
class RefractionParams:
    """
    Attributes:
        angle: Angle of incidence in degrees.
        medium1: Medium outside the slab.
        medium2: Medium of the slab.
    """
    angle: float = 30.0
    medium1: str = "air"
    medium2: str = "glass"

    BOUNDS: ClassVar[dict[str, Bound]] = {"angle": Bound(0.0, 90.0, integer=True)}
    CHOICES: ClassVar[dict[str, tuple[str, ...]]] = {
        "medium1": tuple(OPTICAL_MEDIA),
        "medium2": tuple(OPTICAL_MEDIA),
    }


class RefractionSimulator(_StaticSimulator):
    """Ray through a slab bounded at H/3 and 2H/3 of a ``width``×``height`` canvas."""

    kind = "refraction"
    params_type = RefractionParams

    def __init__(self, params: RefractionParams | None = None, width: float = 900.0, height: float = 540.0, **kwargs):
        super().__init__(params, **kwargs)
        self.width = width
        self.height = height
        self.dragging = False

    @property
    def n1(self) -> float:
        return optical_medium(self.params.medium1).n

    @property
    def n2(self) -> float:
        return optical_medium(self.params.medium2).n

    def path(self):
        return slab_path(self.params.angle, self.n1, self.n2, self.height)

    def pointer_down(self, x: float, y: float) -> bool:
        self.dragging = lamp_hit(x, y, self.params.angle, self.height)
        return self.dragging

    def pointer_move(self, x: float, y: float) -> None:
        if not self.dragging:
            return
        angle = angle_from_pointer(x, y, self.params.angle, self.height)
        self.set_parameter("angle", angle, immediate=True)

    def pointer_up(self) -> None:
        self.dragging = False

    def on_params_changed(self, names: list[str]) -> None:
        self.redraw()

    def reset_state(self) -> None:
        self.dragging = False

    def snapshot(self) -> Snapshot:
        path = self.path()
        state = {"angle": self.params.angle, "n1": self.n1, "n2": self.n2}
        derived = {
            "theta1": path.theta1,
            "theta2": path.theta2,
            "tir": path.tir,
            "critical_angle": critical_angle(self.n1, self.n2),
            "path": path.points(),
        }
        return Snapshot(self.kind, self.time, state, derived)

    def draw(self, renderer) -> None:
        y1, y2 = boundaries(self.height)
        renderer.draw_line((0.0, y1), (self.width, y1), tag="boundary")
        renderer.draw_line((0.0, y2), (self.width, y2), tag="boundary")
        path = self.path()
        renderer.draw_circle(path.lamp, 10.0, tag="lamp")
        renderer.draw_polyline(path.points(), tag="ray")
        renderer.draw_line((path.entry[0], y1 - 60.0), (path.entry[0], y1 + 60.0), tag="normal")
        renderer.draw_text((20.0, 20.0), f"θ₁ = {path.theta1:.1f}°", tag="theta1")
        label = "Total internal reflection" if path.tir else f"θ₂ = {path.theta2:.1f}°"
        renderer.draw_text((20.0, 40.0), label, tag="theta2")
