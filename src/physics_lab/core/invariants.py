# MIT License (see LICENSE)
"""
Energy bookkeeping for the mechanical simulators.

These values are derived for display and graphs only. They never feed
back into a Stepper, so integration drift shows up here instead of being
corrected away. Results are always finite: an overflowing term reads as 0.
"""
from __future__ import annotations
import math

import numpy as np

from ..util import finite_or


def pendulum_energies(theta: float, omega: float, length: float, mass: float, g: float) -> tuple[float, float]:
    """
    Kinetic and potential energy of a simple pendulum.

    KE = ½·m·(L·ω)²,  PE = m·g·L·(1 − cos θ)  (zero at the bottom).

    Returns:
        (kinetic, potential) in joules.
    """
    v = length * omega
    ke = 0.5 * mass * v * v
    pe = mass * g * length * (1.0 - math.cos(theta))
    return finite_or(ke, 0.0), finite_or(pe, 0.0)


def double_pendulum_energies(
    theta1: float,
    theta2: float,
    omega1: float,
    omega2: float,
    m1: float,
    m2: float,
    l1: float,
    l2: float,
    g: float,
) -> tuple[float, float]:
    """
    Kinetic and potential energy of a double pendulum.

    KE = ½m₁(L₁ω₁)² + ½m₂[(L₁ω₁)² + (L₂ω₂)² + 2L₁L₂ω₁ω₂cos(θ₂−θ₁)]
    PE = −m₁gL₁cosθ₁ − m₂g(L₁cosθ₁ + L₂cosθ₂)   (zero at the pivot height)

    Returns:
        (kinetic, potential) in joules.
    """
    cos_d = math.cos(theta2 - theta1)
    v1, v2 = l1 * omega1, l2 * omega2
    ke = 0.5 * m1 * v1 * v1 + 0.5 * m2 * (v1 * v1 + v2 * v2 + 2.0 * v1 * v2 * cos_d)
    pe = -m1 * g * l1 * math.cos(theta1) - m2 * g * (l1 * math.cos(theta1) + l2 * math.cos(theta2))
    return finite_or(ke, 0.0), finite_or(pe, 0.0)


def projectile_energies(position: np.ndarray, velocity: np.ndarray, mass: float, g: float) -> tuple[float, float]:
    """KE = ½mv², PE = mgy (zero at launch height)."""
    ke = 0.5 * mass * float(np.dot(velocity, velocity))
    pe = mass * g * float(position[1])
    return ke, pe
