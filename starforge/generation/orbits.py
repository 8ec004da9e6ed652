"""Orbit radius and period placement for a star's bodies."""
from __future__ import annotations

from typing import Callable, Dict

from starforge.generation.context import GenerationContext
from starforge.generation.zones import Zones, zones_for
from starforge.math.orbits import calculate_orbit_period
from starforge.world.body import CelestialBody
from starforge.world.names import moon_name, planet_name
from starforge.world.star import Star, Structure

PlacementRule = Callable[[Star, Zones, int, bool, CelestialBody], float]


class OrbitPlacer:
    """Single forward pass over planets in index order; radii accumulate outward."""

    PLANET_MARGIN = 0.25
    REMNANT_MARGIN = 0.2
    MOON_GAP = 0.05
    MOON_GAP_JITTER = 0.02
    BINARY_FLOOR_FACTOR = 2.0

    def __init__(self, ctx: GenerationContext) -> None:
        self.ctx = ctx
        self._rules: Dict[Structure, PlacementRule] = {
            Structure.MAIN_SEQUENCE: self._main_sequence_orbit,
            Structure.GIANT: self._giant_orbit,
            Structure.REMNANT: self._remnant_orbit,
        }

    def moon_gap(self) -> float:
        return self.MOON_GAP + self.ctx.rng.next_float(0.0, self.MOON_GAP_JITTER)

    def place_moons(self, star: Star, planet: CelestialBody, planet_index: int) -> None:
        for moon_index, moon in enumerate(planet.moons):
            moon.name = moon_name(star.name, planet_index, moon_index)
            if moon_index == 0:
                moon.orbit_radius = planet.radius_au + self.moon_gap()
            else:
                moon.orbit_radius = planet.moons[moon_index - 1].orbit_radius + self.moon_gap()
            moon.orbital_period = calculate_orbit_period(moon.orbit_radius)

    def place(self, star: Star) -> None:
        zones = zones_for(star)
        inner_is_close = self.ctx.rng.next_pick(0.5)
        rule = self._rules[Structure.REMNANT if star.is_remnant else star.structure]
        binary_floor = self.BINARY_FLOOR_FACTOR * star.companion_separation
        for index, planet in enumerate(star.planets):
            planet.name = planet_name(star.name, index)
            # Moons first: a planet's system radius feeds its own orbit.
            self.place_moons(star, planet, index)
            radius = rule(star, zones, index, inner_is_close, planet)
            if index == 0 and binary_floor > 0.0:
                radius = max(radius, binary_floor + planet.system_radius)
            planet.orbit_radius = radius
            planet.orbital_period = calculate_orbit_period(planet.orbit_radius)
        log = self.ctx.channel("orbits")
        if log.enabled:
            log.debug(
                "%s: placed %d planets (close=%s, warm=%.3f, frozen=%.3f)",
                star.name,
                len(star.planets),
                inner_is_close,
                zones.warm,
                zones.frozen,
            )

    def _spacing(self, star: Star, index: int, planet: CelestialBody, margin: float) -> float:
        previous = star.planets[index - 1]
        return planet.system_radius + previous.system_radius + margin

    def _main_sequence_orbit(
        self, star: Star, zones: Zones, index: int, close: bool, planet: CelestialBody
    ) -> float:
        rng = self.ctx.rng
        if index == 0:
            if close:
                return max(star.radius_au * 2.0, rng.next_float(zones.warm * 0.5, zones.warm)) + planet.system_radius
            return max(star.radius_au * 3.0, rng.next_float(0.7, 0.9) * zones.temperate) + planet.system_radius
        previous = star.planets[index - 1].orbit_radius
        if index == 1 and close:
            span = rng.next_float(0.5, 0.75)
        else:
            span = rng.next_float(0.3, 0.5)
        return previous + max(self._spacing(star, index, planet, self.PLANET_MARGIN), span * zones.temperate)

    def _giant_orbit(self, star: Star, zones: Zones, index: int, close: bool, planet: CelestialBody) -> float:
        rng = self.ctx.rng
        width = zones.habitable_width
        if index == 0:
            if close:
                return max(star.radius_au * 1.25, rng.next_float(zones.warm * 0.5, zones.warm)) + planet.system_radius
            return (
                max(star.radius_au * 3.0, rng.next_float(0.7, 0.85) * width + star.radius_au * 0.25)
                + planet.system_radius
            )
        previous = star.planets[index - 1].orbit_radius
        if index == 1 and close:
            span = rng.next_float(0.75, 0.9)
        else:
            span = rng.next_float(0.15, 0.35)
        return previous + max(self._spacing(star, index, planet, self.PLANET_MARGIN), span * width)

    def _remnant_orbit(self, star: Star, zones: Zones, index: int, close: bool, planet: CelestialBody) -> float:
        rng = self.ctx.rng
        if index == 0:
            return rng.next_float(0.25, 0.45) if close else rng.next_float(0.7, 0.85)
        previous = star.planets[index - 1].orbit_radius
        return previous + max(rng.next_float(0.35, 0.5), self._spacing(star, index, planet, self.REMNANT_MARGIN))


__all__ = ["OrbitPlacer"]
