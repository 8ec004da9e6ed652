"""Climate zone edges of a star."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from starforge.world.star import Star, Structure
from starforge.world.themes import ThemeHeat

# Luminosity divisors for the warm, temperate, cold and frozen edges.
ZONE_DIVISORS: Tuple[float, float, float, float] = (2.5, 1.1, 0.53, 0.3)
# Minimum edges (AU) so remnants still have usable zones.
REMNANT_FLOORS: Tuple[float, float, float, float] = (0.15, 0.25, 0.45, 0.7)


@dataclass(frozen=True)
class Zones:
    warm: float
    temperate: float
    cold: float
    frozen: float

    @property
    def habitable_width(self) -> float:
        return self.cold - self.temperate

    def heat_at(self, orbit_radius: float) -> ThemeHeat:
        if orbit_radius < self.warm:
            return ThemeHeat.HOT
        if orbit_radius < self.temperate:
            return ThemeHeat.WARM
        if orbit_radius < self.cold:
            return ThemeHeat.TEMPERATE
        if orbit_radius < self.frozen:
            return ThemeHeat.COLD
        return ThemeHeat.FROZEN


def _edges(luminosity: float, multiplier: float) -> Tuple[float, ...]:
    luminosity = max(0.0, luminosity)
    return tuple(multiplier * math.sqrt(luminosity / divisor) for divisor in ZONE_DIVISORS)


def _main_sequence(luminosity: float) -> Zones:
    return Zones(*_edges(luminosity, 1.0))


def _giant(luminosity: float) -> Zones:
    # Expansion shrinks for very bright giants; never below main sequence spacing.
    multiplier = max(1.0, 6.25 - max(0.0, luminosity) ** 0.25)
    return Zones(*_edges(luminosity, multiplier))


def _remnant(luminosity: float) -> Zones:
    edges = _edges(luminosity, 1.0)
    return Zones(*(max(edge, floor) for edge, floor in zip(edges, REMNANT_FLOORS)))


_ZONE_RULES: Dict[Structure, Callable[[float], Zones]] = {
    Structure.MAIN_SEQUENCE: _main_sequence,
    Structure.GIANT: _giant,
    Structure.REMNANT: _remnant,
}


def compute_zones(luminosity: float, structure: Structure, is_remnant: bool) -> Zones:
    if is_remnant:
        return _remnant(luminosity)
    return _ZONE_RULES[structure](luminosity)


def zones_for(star: Star) -> Zones:
    return compute_zones(star.luminosity, star.structure, star.is_remnant)


def heat_for(star: Star, orbit_radius: float) -> ThemeHeat:
    return zones_for(star).heat_at(orbit_radius)


__all__ = ["REMNANT_FLOORS", "ZONE_DIVISORS", "Zones", "compute_zones", "heat_for", "zones_for"]
