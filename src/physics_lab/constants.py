# MIT License (see LICENSE)
"""
Physical and numerical constants shared by the simulators.

Values use SI units unless the name says otherwise (``_PX`` for canvas
pixels, ``_MS`` for milliseconds). Tunable visual constants (particle
rates, camera smoothing) live next to the module that uses them.
"""
from __future__ import annotations

# Standard gravity at the Earth's surface, g₀ = 9.80665 m/s² rounded the way
# school textbooks (and the visualizers) quote it.
STANDARD_GRAVITY: float = 9.81

# Density of dry air at sea level and 15 °C.
# Reference: https://en.wikipedia.org/wiki/Density_of_air
AIR_DENSITY: float = 1.225

# Cross-sectional reference area of the simulated projectile (m²).
PROJECTILE_AREA: float = 0.05

# Floor substituted for any near-zero divisor (distance, mass, resistance).
MIN_DISTANCE: float = 1e-9

# Smallest resistance a collaborator may set on a resistor or branch (Ω).
MIN_RESISTANCE: float = 0.1

# Charge (in elementary charges e) at which a transfer run is in equilibrium.
CHARGE_CAP: int = 20

# Temperature difference below which two bodies are considered equilibrated.
THERMAL_EQUILIBRIUM_EPS: float = 0.01

# Nominal animation frame period.
FRAME_DT: float = 1.0 / 60.0

# Feet to metres, used by the free-fall drop heights.
FOOT: float = 0.3048
