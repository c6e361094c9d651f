# MIT License (see LICENSE)
"""
Plane-mirror reflection with a bidirectional drag constraint, plus the
spherical-mirror equation.

Law of reflection: the angle of incidence equals the angle of reflection,
both measured from the surface normal. Each ray is stored as one angle θ
(from the normal) and its two endpoints are always derived from it:

    incident  = C + L·(−sin θ, −cos θ)
    reflected = C + L·(+sin θ, −cos θ)

in canvas coordinates (y grows downward), C being the surface centre.
Dragging either endpoint recovers θ = atan2(|dx|, |dy|) from the pointer
and moves the other endpoint, so the two angles can never disagree.

Mirror equation (concave f > 0, convex f < 0):

    1/f = 1/dₒ + 1/dᵢ,   m = −dᵢ/dₒ

Reference:
    https://en.wikipedia.org/wiki/Specular_reflection#Law_of_reflection
    https://en.wikipedia.org/wiki/Curved_mirror#Mirror_equation,_magnification,_and_focal_length
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from ..types import Point2
from ..util import clamp

logger = logging.getLogger(__name__)

# kind -> (surface description, image description)
SURFACES: dict[str, tuple[str, str]] = {
    "smooth": ("Smooth Reflective Surface - Perfect reflection", "Virtual and upright image"),
    "rough": ("Rough Surface - Diffuse reflection", "No clear image formed (diffuse reflection)"),
    "semi-matte": ("Semi-Matte Surface - Partial reflection", "Faint virtual image"),
    "concave": ("Concave Mirror - Converging reflection", "Virtual and upright image (when object is close)"),
    "convex": ("Convex Mirror - Diverging reflection", "Virtual and upright image (always)"),
}
MIRROR_SURFACES = ("concave", "convex")

# Radius of curvature and object distance (canvas px) of the mirror diagrams.
MIRROR_GEOMETRY: dict[str, tuple[float, float]] = {
    "concave": (160.0, 200.0),
    "convex": (120.0, 170.0),
}

RAY_SPREAD_DEG = 10.0
DRAG_MIN_DEG = 1.0
DRAG_MAX_DEG = 89.0


def ray_endpoints(center: Point2, angle_deg: float, length: float) -> tuple[Point2, Point2]:
    """(incident, reflected) endpoints for a ray hitting ``center`` at ``angle_deg`` from the normal."""
    a = math.radians(angle_deg)
    dx, dy = length * math.sin(a), length * math.cos(a)
    return (center[0] - dx, center[1] - dy), (center[0] + dx, center[1] - dy)


def angle_from_point(center: Point2, point: Point2) -> float:
    """Angle (deg) between the normal at ``center`` and the line to ``point``."""
    return math.degrees(math.atan2(abs(point[0] - center[0]), abs(point[1] - center[1])))


@dataclass
class Ray:
    """
    One ray of the fan. ``offset`` is added to the shared base angle.

    Attributes:
        id: 1-based ray number.
        offset: Angular offset from the first ray in degrees.
        incident, reflected: Endpoint positions in canvas pixels.
        active: Inactive rays are kept but not drawn.
    """
    id: int
    offset: float
    incident: Point2 = (0.0, 0.0)
    reflected: Point2 = (0.0, 0.0)
    active: bool = True

    def measured_angles(self, center: Point2) -> tuple[float, float]:
        """(incidence, reflection) recomputed from the endpoints."""
        return angle_from_point(center, self.incident), angle_from_point(center, self.reflected)


@dataclass(frozen=True)
class MirrorImage:
    """
    Image formed by a spherical mirror.

    ``distance`` is positive for a real image in front of the mirror and
    negative for a virtual one. An object at the focal point sends its
    image to infinity (``distance`` and ``magnification`` are ``math.inf``).
    """
    focal_length: float
    object_distance: float
    distance: float
    magnification: float

    @property
    def at_infinity(self) -> bool:
        return math.isinf(self.distance)

    @property
    def real(self) -> bool:
        return not self.at_infinity and self.distance > 0.0

    @property
    def upright(self) -> bool:
        return self.magnification > 0.0


def mirror_image(focal_length: float, object_distance: float) -> MirrorImage:
    """
    Solve 1/f = 1/dₒ + 1/dᵢ for dᵢ and m = −dᵢ/dₒ.

    Raises:
        ValueError: If ``object_distance`` or ``focal_length`` is zero.
    """
    if object_distance == 0.0 or focal_length == 0.0:
        raise ValueError("object distance and focal length must be non-zero")
    inv = 1.0 / focal_length - 1.0 / object_distance
    if inv == 0.0:
        return MirrorImage(focal_length, object_distance, math.inf, math.inf)
    di = 1.0 / inv
    return MirrorImage(focal_length, object_distance, di, -di / object_distance)


def mirror_focal_length(surface: str, radius: float | None = None) -> float:
    """f = R/2 for a concave mirror and −R/2 for a convex one."""
    if surface not in MIRROR_SURFACES:
        raise ValueError(f"'{surface}' is not a curved mirror (expected one of {MIRROR_SURFACES})")
    r = MIRROR_GEOMETRY[surface][0] if radius is None else radius
    return 0.5 * r if surface == "concave" else -0.5 * r


class ReflectionModel:
    """
    A fan of up to ``max_rays`` rays reflecting off a flat surface at the canvas centre.

    Ray i (0-based) sits at ``angle + 10·i`` degrees. Dragging an endpoint
    of any ray sets the shared base angle so that the dragged ray follows
    the pointer; during a drag the angle is kept in [1°, 89°] and the
    pointer is clamped ``inset`` pixels inside the canvas.
    """

    def __init__(
        self,
        width: float = 900.0,
        height: float = 550.0,
        angle: float = 30.0,
        surface: str = "smooth",
        ray_length: float = 120.0,
        hit_radius: float = 20.0,
        inset: float = 50.0,
        max_rays: int = 5,
    ):
        self.width = width
        self.height = height
        self.center: Point2 = (width / 2.0, height / 2.0)
        self.ray_length = ray_length
        self.hit_radius = hit_radius
        self.inset = inset
        self.max_rays = max_rays
        self.initial_angle = angle
        self.surface = "smooth"
        self.set_surface(surface)
        self.rays: list[Ray] = []
        self.drag: tuple[int, str] | None = None
        self.reset()

    # ------------------------------------------------------------------
    # Angle
    # ------------------------------------------------------------------

    @property
    def angle_of_incidence(self) -> float:
        return self._angle

    @property
    def angle_of_reflection(self) -> float:
        return self._angle

    def set_angle(self, angle: float) -> None:
        """Set the base angle (slider path), clamped to [0°, 90°]."""
        self._angle = clamp(float(angle), 0.0, 90.0)
        self._layout()

    def _layout(self) -> None:
        for ray in self.rays:
            a = clamp(self._angle + ray.offset, 0.0, 90.0)
            ray.incident, ray.reflected = ray_endpoints(self.center, a, self.ray_length)

    # ------------------------------------------------------------------
    # Rays
    # ------------------------------------------------------------------

    def add_ray(self) -> bool:
        if len(self.rays) >= self.max_rays:
            return False
        n = len(self.rays)
        self.rays.append(Ray(id=n + 1, offset=n * RAY_SPREAD_DEG))
        self._layout()
        return True

    def remove_ray(self) -> bool:
        if len(self.rays) <= 1:
            return False
        self.rays.pop()
        return True

    def reset_rays(self) -> None:
        self.rays = [Ray(id=1, offset=0.0)]
        self.drag = None
        self._layout()

    def reset(self) -> None:
        self._angle = self.initial_angle
        self.reset_rays()

    @property
    def active_rays(self) -> int:
        return sum(1 for r in self.rays if r.active)

    # ------------------------------------------------------------------
    # Surface
    # ------------------------------------------------------------------

    def set_surface(self, surface: str) -> None:
        if surface not in SURFACES:
            raise ValueError(f"Unknown surface type: '{surface}' (expected one of {sorted(SURFACES)})")
        self.surface = surface

    @property
    def is_mirror(self) -> bool:
        """Curved mirrors show the ray diagram instead of the draggable fan."""
        return self.surface in MIRROR_SURFACES

    @property
    def surface_description(self) -> str:
        return SURFACES[self.surface][0]

    @property
    def image_description(self) -> str:
        return SURFACES[self.surface][1]

    def mirror_image(self) -> MirrorImage | None:
        if not self.is_mirror:
            return None
        radius, distance = MIRROR_GEOMETRY[self.surface]
        return mirror_image(mirror_focal_length(self.surface, radius), distance)

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> tuple[int, str] | None:
        """First endpoint within ``hit_radius`` of (x, y), checking incident before reflected."""
        for i, ray in enumerate(self.rays):
            for end, point in (("incident", ray.incident), ("reflected", ray.reflected)):
                if math.hypot(x - point[0], y - point[1]) < self.hit_radius:
                    return i, end
        return None

    def begin_drag(self, x: float, y: float) -> bool:
        self.drag = self.hit_test(x, y)
        return self.drag is not None

    def drag_to(self, x: float, y: float) -> None:
        """Move the grabbed endpoint toward (x, y); the partner endpoint follows."""
        if self.drag is None:
            return
        index, end = self.drag
        ray = self.rays[index]
        px = clamp(x, self.inset, self.width - self.inset)
        py = clamp(y, self.inset, self.height - self.inset)
        measured = clamp(angle_from_point(self.center, (px, py)), DRAG_MIN_DEG, DRAG_MAX_DEG)
        self._angle = clamp(measured - ray.offset, 0.0, 90.0)
        self._layout()

        # The grabbed handle stays under the pointer radially.
        r = max(1.0, math.hypot(px - self.center[0], py - self.center[1]))
        a = clamp(self._angle + ray.offset, 0.0, 90.0)
        incident, reflected = ray_endpoints(self.center, a, r)
        if end == "incident":
            ray.incident = incident
        else:
            ray.reflected = reflected
        logger.debug("ray %d %s dragged: angle=%.1f°", ray.id, end, a)

    def end_drag(self) -> None:
        self.drag = None
