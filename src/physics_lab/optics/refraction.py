# MIT License (see LICENSE)
"""
Refraction through a parallel-sided slab (air → medium → air).

Snell's law at each boundary:
    n₁·sin θ₁ = n₂·sin θ₂,   θ₂ = asin(clamp(n₁ sin θ₁ / n₂, −1, 1))

If n₁ sin θ₁ / n₂ > 1 there is no transmitted ray; the angle is reported as
90° and the path reflects back into the first medium (total internal
reflection). The ray leaving the slab is parallel to the incident ray.

Critical angle (only for n₁ > n₂):
    θc = asin(n₂ / n₁)

Canvas layout: the slab occupies H/3 ≤ y ≤ 2H/3; the lamp sits on a
radius-120 arc around the entry point, which slides along the upper
boundary as the angle changes.

Reference: https://en.wikipedia.org/wiki/Snell%27s_law
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from ..types import Point2
from ..util import clamp, safe_div

LAMP_RADIUS = 120.0
LAMP_HIT_RADIUS = 20.0
ENTRY_X0 = 100.0


def snell_ratio(theta1_deg: float, n1: float, n2: float) -> float:
    """n₁ sin θ₁ / n₂ (unclamped)."""
    return safe_div(n1 * math.sin(math.radians(theta1_deg)), n2)


def is_total_internal_reflection(theta1_deg: float, n1: float, n2: float) -> bool:
    return abs(snell_ratio(theta1_deg, n1, n2)) > 1.0


def refraction_angle(theta1_deg: float, n1: float, n2: float) -> float:
    """
    Refracted angle θ₂ in degrees; 90° when no real solution exists.

    >>> round(refraction_angle(30.0, 1.0, 1.5), 2)
    19.47
    """
    s = snell_ratio(theta1_deg, n1, n2)
    if abs(s) > 1.0:
        return 90.0
    return math.degrees(math.asin(clamp(s, -1.0, 1.0)))


def critical_angle(n1: float, n2: float) -> float | None:
    """θc in degrees, or None when light goes into a denser (or equal) medium."""
    if n1 <= n2:
        return None
    return math.degrees(math.asin(n2 / n1))


def boundaries(height: float) -> tuple[float, float]:
    return height / 3.0, 2.0 * height / 3.0


def entry_point(angle_deg: float, height: float) -> Point2:
    y1 = height / 3.0
    return ENTRY_X0 + (y1 - 60.0) * math.sin(math.radians(angle_deg)), y1


def lamp_position(angle_deg: float, height: float, radius: float = LAMP_RADIUS) -> Point2:
    ix, iy = entry_point(angle_deg, height)
    t = math.radians(angle_deg)
    return ix - radius * math.sin(t), iy - radius * math.cos(t)


def lamp_hit(x: float, y: float, angle_deg: float, height: float) -> bool:
    lx, ly = lamp_position(angle_deg, height)
    return (x - lx) ** 2 + (y - ly) ** 2 < LAMP_HIT_RADIUS ** 2


def angle_from_pointer(x: float, y: float, angle_deg: float, height: float) -> int:
    """
    Incidence angle selected by dragging the lamp to (x, y).

    Measured around the current entry point, wrapped to [0, 360) and then
    limited to the integer range [0, 90].
    """
    cx, cy = entry_point(angle_deg, height)
    a = math.degrees(math.atan2(cx - x, cy - y))
    if a < 0.0:
        a += 360.0
    return int(round(clamp(a, 0.0, 90.0)))


@dataclass(frozen=True)
class SlabPath:
    """
    Polyline of a ray crossing the slab.

    Attributes:
        lamp: Ray origin.
        entry: Point on the upper boundary.
        exit: Point on the lower boundary, None under total internal reflection.
        end: End of the emergent (or internally reflected) ray.
        theta1, theta2: Incidence and refraction angles in degrees.
        tir: Total internal reflection at the entry boundary.
    """
    lamp: Point2
    entry: Point2
    exit: Point2 | None
    end: Point2
    theta1: float
    theta2: float
    tir: bool

    def points(self) -> list[Point2]:
        pts = [self.lamp, self.entry]
        if self.exit is not None:
            pts.append(self.exit)
        pts.append(self.end)
        return pts


def slab_path(angle_deg: float, n1: float, n2: float, height: float) -> SlabPath:
    """Trace lamp → entry → exit → emergent end for incidence ``angle_deg``."""
    lamp = lamp_position(angle_deg, height)
    ix, iy = entry_point(angle_deg, height)
    t1 = math.radians(angle_deg)
    tir = is_total_internal_reflection(angle_deg, n1, n2)
    theta2 = refraction_angle(angle_deg, n1, n2)

    if tir:
        end = (ix + LAMP_RADIUS * math.sin(t1), iy - LAMP_RADIUS * math.cos(t1))
        return SlabPath(lamp, (ix, iy), None, end, angle_deg, theta2, True)

    t2 = math.radians(theta2)
    _, y2 = boundaries(height)
    rx = ix + (y2 - iy) * safe_div(math.sin(t2), math.cos(t2))
    exit_len = height - y2
    end = (rx + exit_len * math.sin(t1), y2 + exit_len * math.cos(t1))
    return SlabPath(lamp, (ix, iy), (rx, y2), end, angle_deg, theta2, False)
