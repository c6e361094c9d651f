# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Acceleration laws: pendulum, double pendulum, quadratic drag, gravity.
    - Integrators: semi-implicit Euler, explicit Euler, lumped heat exchange, ramps.
    - Energy bookkeeping for display.

Typical usage:
    from physics_lab.core import pendulum_angular_acceleration, semi_implicit_euler

    alpha = pendulum_angular_acceleration(theta, omega, length=1.0, g=9.81)
    theta, omega = semi_implicit_euler(theta, omega, alpha, dt=1/60)
"""
from .forces import (
    pendulum_angular_acceleration,
    double_pendulum_accelerations,
    drag_acceleration,
    gravity_acceleration,
)
from .integrators import semi_implicit_euler, explicit_euler_2d, lumped_heat_step, ramp_toward
from .invariants import pendulum_energies, double_pendulum_energies, projectile_energies

__all__ = [
    # Forces
    "pendulum_angular_acceleration",
    "double_pendulum_accelerations",
    "drag_acceleration",
    "gravity_acceleration",
    # Integrators
    "semi_implicit_euler",
    "explicit_euler_2d",
    "lumped_heat_step",
    "ramp_toward",
    # Invariants
    "pendulum_energies",
    "double_pendulum_energies",
    "projectile_energies",
]
