"""Home system construction and the fix-ups that make it playable."""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from starforge.config.preferences import RANDOM_STARTING_SYSTEM
from starforge.engine.logger import ChannelLogger
from starforge.errors import StructuralInvariantViolation
from starforge.generation.context import GenerationContext
from starforge.generation.frequency import FrequencyTable
from starforge.generation.multistar import MultistarComposer
from starforge.generation.systems import SystemBuilder
from starforge.generation.zones import Zones, zones_for
from starforge.math.orbits import calculate_orbit_period, calculate_orbit_period_from_star_mass
from starforge.world.body import CRITICAL_MINERAL, GAS_GIANT_SCALE, SILICIUM, TITANIUM, CelestialBody, VeinTier
from starforge.world.cluster import BirthSelection, locate_birth
from starforge.world.names import planet_name
from starforge.world.star import SUN, Star, StarKind
from starforge.world.themes import (
    CRITICAL_MINERAL_THEME,
    DEFAULT_HOME_THEME,
    ICE_GIANT_THEME,
    SMALL_THEME_MAX_RADIUS,
)

Anchor = Callable[[Zones], float]

# (planet theme, anchor, moon theme) per slot.
DreamSlot = Tuple[str, Anchor, Optional[str]]

DREAM_LAYOUTS: Tuple[Tuple[DreamSlot, ...], ...] = (
    (
        ("Lava", lambda z: z.warm * 0.5, None),
        ("AcidSea", lambda z: z.warm * 0.85, None),
        (DEFAULT_HOME_THEME, lambda z: z.temperate + 0.4 * z.habitable_width, None),
        ("Gobi", lambda z: z.cold, None),
        ("GasGiant2", lambda z: z.frozen * 1.2, "IceGelisol"),
    ),
    (
        ("Lava", lambda z: z.warm * 0.5, None),
        (DEFAULT_HOME_THEME, lambda z: z.temperate + 0.35 * z.habitable_width, None),
        ("OceanWorld", lambda z: z.temperate + 0.8 * z.habitable_width, None),
        ("FrozenTundra", lambda z: (z.cold + z.frozen) / 2.0, None),
        ("GasGiant2", lambda z: z.frozen * 1.2, None),
    ),
)


class HomeSystemCurator:
    """Builds the starting system, then applies the home fix-ups in a fixed order."""

    APPENDED_GAS_GIANT_RADIUS = 80
    APPENDED_ROTATION_PERIOD = 180.0
    CRITICAL_MINERAL_BODY_NAME = "Black Swan"
    SLOT_MARGIN = 0.25
    APPEND_MARGIN = 0.4
    APPEND_SPAN = (0.65, 0.95)
    GAS_HOST_CLEARANCE = 10
    TELLURIC_HOST_CLEARANCE = 50

    def __init__(self, ctx: GenerationContext, systems: SystemBuilder, multistar: MultistarComposer) -> None:
        self.ctx = ctx
        self.systems = systems
        self.multistar = multistar
        self._anchors: List[Anchor] = []

    @property
    def log(self) -> ChannelLogger:
        return self.ctx.channel("home")

    def curate(self, frequencies: FrequencyTable) -> BirthSelection:
        """Create the home star and its system; returns the birth selection."""

        star = self.create_home_star(frequencies)
        birth = self.select_birth_body()
        self.lock_birth_theme(birth)
        self.apply_birth_size(birth)
        self.ensure_birth_resources(birth)
        self.ensure_proper_starting_star(star)
        self.ensure_gas_giant(star)
        self.ensure_critical_mineral(star, birth)
        self.ctx.birth = birth
        self.ctx.cluster.birth = birth
        self.log.info("Home system %s (%s), birth body %s", star.name, star.kind, birth.body.name)
        return birth

    # ----------------------------------------------------------------- build

    def home_kind(self, frequencies: FrequencyTable) -> StarKind:
        wanted = self.ctx.preferences.starting_system_type
        if wanted == RANDOM_STARTING_SYSTEM:
            return frequencies.draw(self.ctx.rng)
        return StarKind.from_code(wanted)

    def create_home_star(self, frequencies: FrequencyTable) -> Star:
        ctx = self.ctx
        dream = ctx.preferences.dream_system
        kind = self.home_kind(frequencies)
        star = Star.create(ctx.rng.next_int(), ctx.namer.next_name(), kind)
        ctx.cluster.stars.append(star)
        self.multistar.maybe_add_companion(star, dream_home=dream)
        if dream:
            self.build_dream_system(star)
        else:
            self.systems.build(star)
        return star

    def build_dream_system(self, star: Star) -> None:
        rng = self.ctx.rng
        factory = self.systems.factory
        layout = rng.item(DREAM_LAYOUTS)
        star.planets = []
        self._anchors = []
        for theme, anchor, moon_theme in layout:
            gas = self.ctx.themes.get(theme).is_gas
            body = factory.create(star, None, gas, False)
            if theme == DEFAULT_HOME_THEME:
                body.radius = self.ctx.preferences.birth_planet_size
            if moon_theme is not None:
                moon = factory.create(star, body, False, True)
                self.ctx.themes.assign(rng, moon, self._sized_key(moon_theme, moon.radius), self.ctx.rare_chance)
                body.moons.append(moon)
            self.ctx.themes.assign(rng, body, self._sized_key(theme, body.radius), self.ctx.rare_chance)
            star.planets.append(body)
            self._anchors.append(anchor)
        self.place_dream_orbits(star)
        self.systems.set_properties(star)
        self.systems.ensure_proper_orbital_periods(star)
        self.log.info("%s uses a hand-authored layout of %d planets", star.name, len(star.planets))

    def place_dream_orbits(self, star: Star) -> None:
        zones = zones_for(star)
        orbits = self.systems.orbits
        binary_floor = orbits.BINARY_FLOOR_FACTOR * star.companion_separation
        for index, planet in enumerate(star.planets):
            planet.name = planet_name(star.name, index)
            orbits.place_moons(star, planet, index)
            radius = self._anchors[index](zones) if index < len(self._anchors) else 0.0
            if index == 0:
                radius = max(radius, star.radius_au * 2.0 + planet.system_radius, binary_floor + planet.system_radius)
            else:
                previous = star.planets[index - 1]
                radius = max(
                    radius,
                    previous.orbit_radius + previous.system_radius + planet.system_radius + self.SLOT_MARGIN,
                )
            planet.orbit_radius = radius
            planet.orbital_period = calculate_orbit_period(radius)

    def _reposition(self, star: Star) -> None:
        self.systems.reposition(star, self.place_dream_orbits if self._anchors else None)

    def _sized_key(self, key: str, radius: int) -> str:
        small = f"{key}smol"
        if radius <= SMALL_THEME_MAX_RADIUS and small in self.ctx.themes:
            return small
        return key

    # ----------------------------------------------------------------- birth

    def select_birth_body(self) -> BirthSelection:
        stars = self.ctx.cluster.stars
        if not stars:
            raise StructuralInvariantViolation("Cannot pick a birth planet: no stars have been generated")
        themes = self.ctx.themes
        for star in stars:
            for body in star.bodies():
                if body.theme is not None and themes.get(body.theme).habitable:
                    birth = locate_birth(star, body)
                    self.log.debug("Found habitable %s around %s", body.name, star.name)
                    return birth

        star = stars[0]
        body = self._fallback_birth_body(star)
        key = self.ctx.rng.item(themes.habitable)
        themes.assign(self.ctx.rng, body, key, self.ctx.rare_chance)
        self.log.info("No habitable body around %s, converting %s to %s", star.name, body.name, key)
        return locate_birth(star, body)

    def _fallback_birth_body(self, star: Star) -> CelestialBody:
        middle = star.planets[(len(star.planets) - 1) // 2]
        if middle.is_telluric:
            return middle
        if middle.moons:
            return middle.moons[0]
        return star.telluric_bodies()[0]

    def lock_birth_theme(self, birth: BirthSelection) -> None:
        if self.ctx.preferences.birth_planet_unlock or birth.body.theme == DEFAULT_HOME_THEME:
            return
        self.ctx.themes.assign(self.ctx.rng, birth.body, DEFAULT_HOME_THEME, self.ctx.rare_chance)

    def apply_birth_size(self, birth: BirthSelection) -> None:
        body = birth.body
        size = self.ctx.preferences.birth_planet_size
        if body.radius == size and body.is_telluric:
            return
        self.log.debug("Forcing %s to radius %d", body.name, size)
        body.radius = size
        body.make_telluric()
        if body.theme is not None and body.theme.endswith("smol") and size > SMALL_THEME_MAX_RADIUS:
            self.ctx.themes.assign(self.ctx.rng, body, body.theme[: -len("smol")], self.ctx.rare_chance)
        host = birth.host
        if birth.is_moon and host is not None and host.true_radius <= body.radius:
            if host.is_gas_giant:
                host.radius = int(body.radius / host.scale) + self.GAS_HOST_CLEARANCE
            else:
                host.radius = body.radius + self.TELLURIC_HOST_CLEARANCE
            self.log.debug("Growing host %s to radius %d", host.name, host.radius)
        self.systems.make_room(birth.star, body)

    def ensure_birth_resources(self, birth: BirthSelection) -> None:
        prefs = self.ctx.preferences
        body = birth.body
        if prefs.no_homeworld_rares:
            body.strip_tier(VeinTier.RARE)
            return
        if prefs.birth_planet_si_ti:
            body.add_vein(SILICIUM, VeinTier.COMMON)
            body.add_vein(TITANIUM, VeinTier.COMMON)
            self.log.debug("Added silicium and titanium veins to %s", body.name)

    # ----------------------------------------------------------------- system

    def ensure_proper_starting_star(self, star: Star) -> None:
        if not star.is_remnant:
            return
        self.log.info("Home star %s is a %s, converting to %s", star.name, star.kind, SUN)
        star.kind = SUN
        star.apply_defaults()
        star.luminosity += star.companion_luminosity
        self._reposition(star)

    def _append_orbit(self, star: Star) -> float:
        zones = zones_for(star)
        last = star.planets[-1]
        span = min(zones.cold - zones.temperate, self.ctx.rng.next_float(*self.APPEND_SPAN))
        return last.orbit_radius + max(last.system_radius + self.APPEND_MARGIN, span)

    def ensure_gas_giant(self, star: Star) -> None:
        if star.gas_giants():
            return
        rng = self.ctx.rng
        body = CelestialBody(
            name=planet_name(star.name, len(star.planets)),
            radius=self.APPENDED_GAS_GIANT_RADIUS,
            scale=GAS_GIANT_SCALE,
            forced=True,
        )
        body.orbit_radius = self._append_orbit(star)
        body.orbital_period = calculate_orbit_period(body.orbit_radius)
        body.orbit_inclination = rng.next_float(-20.0, 20.0)
        body.orbit_phase = rng.next_float(0.0, 359.0)
        body.rotation_period = self.APPENDED_ROTATION_PERIOD
        self.ctx.themes.assign(rng, body, ICE_GIANT_THEME, self.ctx.rare_chance)
        star.planets.append(body)
        self.log.info("Appended gas giant %s at %.3f AU", body.name, body.orbit_radius)

    def has_critical_mineral(self, star: Star, exclude: Optional[CelestialBody] = None) -> bool:
        return any(body.has_mineral(CRITICAL_MINERAL) for body in star.telluric_bodies() if body is not exclude)

    def ensure_critical_mineral(self, star: Star, birth: BirthSelection) -> None:
        if self.ctx.preferences.rare_chance == 0 or self.has_critical_mineral(star, birth.body):
            return
        rng = self.ctx.rng
        telluric: Sequence[CelestialBody] = star.telluric_bodies()
        if len(telluric) < 2:
            body = CelestialBody(
                name=self.CRITICAL_MINERAL_BODY_NAME,
                radius=self.systems.factory.planet_size(),
                forced=True,
            )
            body.orbit_radius = self._append_orbit(star)
            body.orbital_period = calculate_orbit_period_from_star_mass(body.orbit_radius, star.mass)
            body.rotation_period = self.APPENDED_ROTATION_PERIOD
            self.ctx.themes.assign(rng, body, CRITICAL_MINERAL_THEME, self.ctx.rare_chance)
            star.planets.append(body)
            self.log.info("Appended %s at %.3f AU", body.name, body.orbit_radius)
            return
        candidates = [body for body in telluric if body is not birth.body]
        body = rng.item(candidates)
        self.ctx.themes.assign(rng, body, self._sized_key(CRITICAL_MINERAL_THEME, body.radius), self.ctx.rare_chance)
        self.log.info("Rethemed %s to carry %s", body.name, CRITICAL_MINERAL)


__all__ = ["DREAM_LAYOUTS", "HomeSystemCurator"]
