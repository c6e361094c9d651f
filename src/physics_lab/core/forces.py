# MIT License (see LICENSE)
"""
Acceleration laws for the mechanical simulators.

Every function here is pure: it takes the current state and parameters and
returns accelerations, never mutating anything. Divisors are floored with
``safe_div`` so no call can produce ``NaN``/``Infinity`` for finite input.

Key equations:
- Simple pendulum:   α = −(g/L)·sin θ − c·ω
- Small angle:       α = −(g/L)·θ − c·ω        (used only when |θ| < 0.2 rad)
- Double pendulum:   closed-form Lagrangian solution for (α₁, α₂)
- Quadratic drag:    a = −½·C_d·ρ·A·|v|²/m · v̂

Reference:
    https://en.wikipedia.org/wiki/Pendulum_(mechanics)
    https://en.wikipedia.org/wiki/Double_pendulum
    https://en.wikipedia.org/wiki/Drag_equation
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import AIR_DENSITY, PROJECTILE_AREA, MIN_DISTANCE
from ..util import safe_div

# Largest |θ| (rad) for which the small-angle form is used when requested.
SMALL_ANGLE_LIMIT: float = 0.2


def pendulum_angular_acceleration(
    theta: float,
    omega: float,
    length: float,
    g: float,
    damping: float = 0.0,
    small_angle: bool = False,
) -> float:
    """
    Angular acceleration of a simple (point-mass, massless-rod) pendulum.

    Args:
        theta: Angle from the downward vertical in radians.
        omega: Angular velocity in rad/s.
        length: Rod length in metres (floored at MIN_DISTANCE).
        g: Gravitational acceleration in m/s².
        damping: Linear damping coefficient c in 1/s (0 disables damping).
        small_angle: Use the linearised restoring term −(g/L)·θ while |θ| < 0.2.
    """
    k = safe_div(g, length)
    if small_angle and abs(theta) < SMALL_ANGLE_LIMIT:
        alpha = -k * theta
    else:
        alpha = -k * math.sin(theta)
    if damping:
        alpha -= damping * omega
    return alpha


def double_pendulum_accelerations(
    theta1: float,
    theta2: float,
    omega1: float,
    omega2: float,
    m1: float,
    m2: float,
    l1: float,
    l2: float,
    g: float,
    damping: float = 0.0,
) -> tuple[float, float]:
    """
    Angular accelerations (α₁, α₂) of a planar double pendulum.

    With Δ = θ₂ − θ₁ and M = m₁ + m₂:

        D₁ = M·L₁ − m₂·L₁·cos²Δ            D₂ = (L₂/L₁)·D₁
        α₁ = [ m₂L₁ω₁² sinΔ cosΔ + m₂g sinθ₂ cosΔ + m₂L₂ω₂² sinΔ − Mg sinθ₁ ] / D₁
        α₂ = [ −m₂L₂ω₂² sinΔ cosΔ + Mg sinθ₁ cosΔ − ML₁ω₁² sinΔ − Mg sinθ₂ ] / D₂

    D₁ = L₁(m₁ + m₂ sin²Δ) vanishes only when m₁ and sinΔ are both zero, or
    when L₁ is zero; it is floored at MIN_DISTANCE (sign kept) so degenerate
    parameter sets give large but finite accelerations.

    Args:
        damping: Linear damping c applied to both arms (α −= c·ω).

    Reference:
        https://www.myphysicslab.com/pendulum/double-pendulum-en.html
    """
    delta = theta2 - theta1
    sin_d = math.sin(delta)
    cos_d = math.cos(delta)
    m = m1 + m2
    l1 = l1 if abs(l1) >= MIN_DISTANCE else MIN_DISTANCE

    denom1 = m * l1 - m2 * l1 * cos_d * cos_d
    denom2 = (l2 / l1) * denom1

    num1 = (
        m2 * l1 * omega1 * omega1 * sin_d * cos_d
        + m2 * g * math.sin(theta2) * cos_d
        + m2 * l2 * omega2 * omega2 * sin_d
        - m * g * math.sin(theta1)
    )
    num2 = (
        -m2 * l2 * omega2 * omega2 * sin_d * cos_d
        + m * g * math.sin(theta1) * cos_d
        - m * l1 * omega1 * omega1 * sin_d
        - m * g * math.sin(theta2)
    )

    alpha1 = safe_div(num1, denom1)
    alpha2 = safe_div(num2, denom2)
    if damping:
        alpha1 -= damping * omega1
        alpha2 -= damping * omega2
    return alpha1, alpha2


def drag_acceleration(
    velocity: np.ndarray,
    drag_coefficient: float,
    mass: float,
    rho: float = AIR_DENSITY,
    area: float = PROJECTILE_AREA,
) -> np.ndarray:
    """
    Quadratic air-drag acceleration, opposite to the velocity.

    Implements a = −(½·C_d·ρ·A·|v|²/m)·v̂. Returns the zero vector at rest.

    Args:
        velocity: Velocity [vx, vy] in m/s.
        drag_coefficient: Dimensionless C_d (0.47 for a sphere).
        mass: Projectile mass in kg (floored at MIN_DISTANCE).
    """
    speed = math.hypot(velocity[0], velocity[1])
    if speed <= 0.0:
        return np.zeros(2, dtype=np.float64)
    magnitude = safe_div(0.5 * drag_coefficient * rho * area * speed * speed, mass)
    return -magnitude * (np.asarray(velocity, dtype=np.float64) / speed)


def gravity_acceleration(g: float) -> np.ndarray:
    """Uniform downward gravity [0, −g]."""
    return np.array([0.0, -g], dtype=np.float64)
