# MIT License (see LICENSE)
"""
Fixed-step time integrators used by the Steppers.

Available integrators:
- semi_implicit_euler: ω += α·dt, then θ += ω·dt (pendulums)
- explicit_euler_2d:   v += a·dt, then x += v·dt (projectiles, particles)
- lumped_heat_step:    two-body lumped-capacitance exchange (heat flow)
- ramp_toward:         constant-rate approach to a target (temperature animation)

The first two share the "velocity first" ordering, which is the symplectic
(Euler-Cromer) variant and keeps oscillators bounded at animation step sizes.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    https://en.wikipedia.org/wiki/Lumped-element_model#Thermal_systems
"""
from __future__ import annotations
import math

import numpy as np

from ..util import safe_div


def semi_implicit_euler(theta: float, omega: float, alpha: float, dt: float) -> tuple[float, float]:
    """
    Advance an angular coordinate by one Euler-Cromer step.

    Returns:
        (theta_new, omega_new)
    """
    omega = omega + alpha * dt
    theta = theta + omega * dt
    return theta, omega


def explicit_euler_2d(
    position: np.ndarray,
    velocity: np.ndarray,
    acceleration: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance a point mass by one step: v(t+dt) = v + a·dt, x(t+dt) = x + v(t+dt)·dt.

    Returns new arrays; the inputs are not modified.
    """
    velocity = velocity + acceleration * dt
    position = position + velocity * dt
    return position, velocity


def lumped_heat_step(
    temp_a: float,
    temp_b: float,
    heat_rate: float,
    capacity_a: float,
    capacity_b: float,
    dt: float,
) -> tuple[float, float]:
    """
    Exchange heat Q·dt from body A to body B.

        T_a ← T_a − Q·dt/(m_a·c_a)
        T_b ← T_b + Q·dt/(m_b·c_b)

    Args:
        heat_rate: Q in watts, positive when heat flows from A to B.
        capacity_a: Heat capacity m_a·c_a in J/K (floored at MIN_DISTANCE).
        capacity_b: Heat capacity m_b·c_b in J/K (floored at MIN_DISTANCE).

    Returns:
        (temp_a_new, temp_b_new)
    """
    energy = heat_rate * dt
    return temp_a - safe_div(energy, capacity_a), temp_b + safe_div(energy, capacity_b)


def ramp_toward(current: float, target: float, rate: float, dt: float, snap: float = 0.01) -> float:
    """
    Move ``current`` toward ``target`` by at most ``rate·dt``, never overshooting.

    Values within ``snap`` of the target are set exactly to the target.
    """
    diff = target - current
    step = min(abs(diff), abs(rate) * max(0.0, dt))
    current += math.copysign(step, diff) if diff else 0.0
    if abs(target - current) < snap:
        current = target
    return current
