"""Planet and moon hierarchy for one star."""
from __future__ import annotations

from typing import Callable, Optional

from starforge.generation.bodies import BodyFactory
from starforge.generation.context import GenerationContext
from starforge.generation.orbits import OrbitPlacer
from starforge.generation.sampling import sample_biased
from starforge.generation.zones import heat_for, zones_for
from starforge.math.orbits import calculate_orbit_period
from starforge.world.body import CelestialBody
from starforge.world.star import Star
from starforge.world.themes import ThemeType


class SystemBuilder:
    """Builds, places, themes and spins the bodies of a star."""

    GAS_GIANT_MOON_CHANCE = 0.8
    RETROGRADE_CHANCE = 0.02
    EXTREME_OBLIQUITY_CHANCE = 0.05

    def __init__(self, ctx: GenerationContext) -> None:
        self.ctx = ctx
        self.factory = BodyFactory(ctx)
        self.orbits = OrbitPlacer(ctx)

    def planet_count(self) -> int:
        prefs = self.ctx.preferences
        low, high = prefs.planet_count
        return sample_biased(self.ctx.rng, low, high, prefs.count_bias)

    def is_gas_giant(self) -> bool:
        return self.ctx.rng.next_pick(self.ctx.preferences.chance_gas / 100.0)

    def moon_chance(self, previous: CelestialBody) -> float:
        prefs = self.ctx.preferences
        chance = prefs.chance_moon / 100.0
        if previous.is_gas_giant and prefs.more_likely_gas_giant_moons and not previous.moons:
            chance = self.GAS_GIANT_MOON_CHANCE if chance < 0.5 else 1.0
        return chance

    def build(self, star: Star, body_count: Optional[int] = None) -> None:
        """Generate the full body hierarchy of ``star`` and finish every body."""

        log = self.ctx.channel("system")
        count = self.planet_count() if body_count is None else body_count
        star.planets = []
        if count <= 0:
            log.debug("%s: no bodies rolled, forcing one", star.name)
            star.planets.append(self.factory.create(star, None, self.is_gas_giant(), False, forced=True))
        else:
            star.planets.append(self.factory.create(star, None, self.is_gas_giant(), False))
        for _ in range(1, count):
            previous = star.planets[-1]
            if self.ctx.rng.next_pick(self.moon_chance(previous)):
                previous.moons.append(self.factory.create(star, previous, False, True))
            else:
                star.planets.append(self.factory.create(star, None, self.is_gas_giant(), False))
        self.ensure_telluric_body(star)
        self.finish(star)
        log.debug(
            "%s (%s): %d planets, %d bodies",
            star.name,
            star.kind,
            len(star.planets),
            sum(1 for _ in star.bodies()),
        )

    def finish(self, star: Star) -> None:
        self.orbits.place(star)
        self.select_themes(star)
        self.set_properties(star)
        self.ensure_proper_orbital_periods(star)

    def reposition(self, star: Star, place: Optional[Callable[[Star], None]] = None) -> None:
        """Re-run orbit placement after a size change, keeping spin direction and resonances."""

        spins = {id(body): (body.orbital_period, body.rotation_period) for body in star.bodies()}
        (place or self.orbits.place)(star)
        for body in star.bodies():
            _keep_spin(body, *spins[id(body)])
        self.ensure_proper_orbital_periods(star)

    def make_room(self, star: Star, grown: Optional[CelestialBody] = None) -> None:
        """Push moons and planets outward just far enough to clear a grown body.

        Orbits never move inward. A planet that ends up in another heat zone gets
        heat-matched themes again, except for ``grown`` which keeps its own.
        """

        orbits = self.orbits
        for index, planet in enumerate(star.planets):
            floor = planet.radius_au
            for moon in planet.moons:
                floor += orbits.MOON_GAP
                if moon.orbit_radius < floor:
                    _move(moon, floor)
                floor = moon.orbit_radius
            if index == 0:
                continue
            previous = star.planets[index - 1]
            floor = previous.orbit_radius + previous.system_radius + planet.system_radius + orbits.PLANET_MARGIN
            if planet.orbit_radius < floor:
                heat = heat_for(star, planet.orbit_radius)
                _move(planet, floor)
                self.ctx.channel("orbits").debug("%s pushed out to %.3f AU", planet.name, floor)
                if heat_for(star, floor) is not heat:
                    self._rematch_themes(star, planet, grown)
        self.ensure_proper_orbital_periods(star)

    def _rematch_themes(self, star: Star, planet: CelestialBody, keep: Optional[CelestialBody]) -> None:
        themes = self.ctx.themes
        rng = self.ctx.rng
        heat = heat_for(star, planet.orbit_radius)
        for body in (planet, *planet.moons):
            if body is keep or body.forced or body.theme is None or heat in themes.get(body.theme).heats:
                continue
            if body.is_moon:
                theme_type = ThemeType.MOON
            else:
                theme_type = ThemeType.GAS if body.is_gas_giant else ThemeType.PLANET
            themes.assign(rng, body, themes.query(rng, theme_type, heat, body.radius), self.ctx.rare_chance)

    def ensure_telluric_body(self, star: Star) -> None:
        if star.telluric_bodies():
            return
        host = star.planets[0]
        self.ctx.channel("system").debug("%s: only gas giants, adding a telluric moon", star.name)
        host.moons.append(self.factory.create(star, host, False, True, forced=True))

    def select_themes(self, star: Star) -> None:
        themes = self.ctx.themes
        rng = self.ctx.rng
        zones = zones_for(star)
        for planet in star.planets:
            heat = zones.heat_at(planet.orbit_radius)
            theme_type = ThemeType.GAS if planet.is_gas_giant else ThemeType.PLANET
            themes.assign(rng, planet, themes.query(rng, theme_type, heat, planet.radius), self.ctx.rare_chance)
            for moon in planet.moons:
                themes.assign(rng, moon, themes.query(rng, ThemeType.MOON, heat, moon.radius), self.ctx.rare_chance)

    def set_properties(self, star: Star) -> None:
        rng = self.ctx.rng
        lock_inner = self.ctx.preferences.tidal_lock_inner_planets
        inner = star.planets[0] if star.planets else None
        for body in star.bodies():
            body.rotation_phase = rng.next_int(360)
            body.orbit_inclination = rng.next_float(-20.0, 20.0)
            body.orbit_phase = rng.next_int(360)
            body.obliquity = rng.next_float() * 20.0
            body.rotation_period = rng.next_int(80, 3600)

            if rng.next_double() < self.RETROGRADE_CHANCE:
                body.orbital_period = -body.orbital_period

            if body.orbit_radius < 1.0 and rng.next_float() < 0.5:
                body.rotation_period = body.orbital_period  # tidal lock
            elif body.orbit_radius < 1.5 and rng.next_float() < 0.2:
                body.rotation_period = body.orbital_period / 2  # 1:2 resonance
            elif body.orbit_radius < 2.0 and rng.next_float() < 0.1:
                body.rotation_period = body.orbital_period / 4  # 1:4 resonance
            if rng.next_double() < self.EXTREME_OBLIQUITY_CHANCE:
                body.obliquity = rng.next_float(20.0, 85.0)

            if lock_inner and body is inner:
                body.rotation_period = body.orbital_period

    def ensure_proper_orbital_periods(self, star: Star) -> None:
        """A moon must circle its planet faster than the planet circles the star."""

        for planet in star.planets:
            limit = abs(planet.orbital_period)
            for index, moon in enumerate(planet.moons):
                period = abs(moon.orbital_period)
                if period < limit:
                    continue
                locked = moon.rotation_period == moon.orbital_period
                shortened = limit / (index + 2)
                moon.orbital_period = shortened if moon.orbital_period >= 0 else -shortened
                if locked:
                    moon.rotation_period = moon.orbital_period


def _keep_spin(body: CelestialBody, old_period: float, old_rotation: float) -> None:
    if old_period < 0 < body.orbital_period:
        body.orbital_period = -body.orbital_period
    for ratio in (1.0, 0.5, 0.25):
        if old_rotation == old_period * ratio:
            body.rotation_period = body.orbital_period * ratio
            break


def _move(body: CelestialBody, radius: float) -> None:
    old_period, old_rotation = body.orbital_period, body.rotation_period
    body.orbit_radius = radius
    body.orbital_period = calculate_orbit_period(radius)
    _keep_spin(body, old_period, old_rotation)


__all__ = ["SystemBuilder"]
