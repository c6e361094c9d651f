# MIT License (see LICENSE)
"""
Geometric optics: plane reflection, spherical mirrors and slab refraction.

This subpackage provides:
    - ReflectionModel: draggable ray fan obeying the law of reflection.
    - mirror_image: 1/f = 1/dₒ + 1/dᵢ with magnification.
    - refraction_angle / slab_path: Snell's law with total internal reflection.
"""
from .reflection import (
    SURFACES,
    MIRROR_SURFACES,
    Ray,
    MirrorImage,
    ReflectionModel,
    ray_endpoints,
    angle_from_point,
    mirror_image,
    mirror_focal_length,
)
from .refraction import (
    SlabPath,
    snell_ratio,
    refraction_angle,
    is_total_internal_reflection,
    critical_angle,
    boundaries,
    entry_point,
    lamp_position,
    lamp_hit,
    angle_from_pointer,
    slab_path,
)

__all__ = [
    # Reflection
    "SURFACES",
    "MIRROR_SURFACES",
    "Ray",
    "MirrorImage",
    "ReflectionModel",
    "ray_endpoints",
    "angle_from_point",
    "mirror_image",
    "mirror_focal_length",
    # Refraction
    "SlabPath",
    "snell_ratio",
    "refraction_angle",
    "is_total_internal_reflection",
    "critical_angle",
    "boundaries",
    "entry_point",
    "lamp_position",
    "lamp_hit",
    "angle_from_pointer",
    "slab_path",
]
