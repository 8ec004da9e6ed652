"""Orbital period and body size helpers."""
from __future__ import annotations

import math

# Game seconds for one revolution at 1 AU around a one solar mass star.
ORBIT_PERIOD_AT_1AU = 36000.0
SIZE_STEP = 10


def calculate_orbit_period(orbit_radius: float) -> float:
    return ORBIT_PERIOD_AT_1AU * max(0.0, orbit_radius) ** 1.5


def calculate_orbit_period_from_star_mass(orbit_radius: float, star_mass: float) -> float:
    mass = max(star_mass, 1e-6)
    return calculate_orbit_period(orbit_radius) / math.sqrt(mass)


def snap_size(value: float, step: int = SIZE_STEP) -> int:
    """Round a radius to the nearest size step, never below one step."""
    return max(step, int(math.floor(value / step + 0.5)) * step)


__all__ = [
    "ORBIT_PERIOD_AT_1AU",
    "SIZE_STEP",
    "calculate_orbit_period",
    "calculate_orbit_period_from_star_mass",
    "snap_size",
]
