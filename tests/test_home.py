"""Tests for home system construction and its guarantees."""
from __future__ import annotations

from pathlib import Path
import sys
from typing import Any

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from starforge.config.preferences import Preferences
from starforge.engine.logger import quiet_logger
from starforge.engine.rng import SeededRandom
from starforge.errors import StructuralInvariantViolation
from starforge.generation.context import GenerationContext
from starforge.generation.frequency import FrequencyTable
from starforge.generation.home import HomeSystemCurator
from starforge.generation.multistar import MultistarComposer
from starforge.generation.systems import SystemBuilder
from starforge.generation.zones import heat_for
from starforge.world.body import GAS_GIANT_SCALE, SILICIUM, TITANIUM, CelestialBody, VeinTier
from starforge.world.cluster import Cluster, MoonBirth, PlanetBirth
from starforge.world.star import SUN, Star
from starforge.world.themes import CRITICAL_MINERAL_THEME, DEFAULT_HOME_THEME, ICE_GIANT_THEME


def make_curator(seed: int = 1, **overrides: Any) -> HomeSystemCurator:
    prefs = Preferences().with_overrides(**overrides)
    ctx = GenerationContext(
        rng=SeededRandom(seed),
        preferences=prefs,
        cluster=Cluster(seed=seed),
        logger=quiet_logger(),
    )
    systems = SystemBuilder(ctx)
    return HomeSystemCurator(ctx, systems, MultistarComposer(ctx))


def curate(seed: int = 1, **overrides: Any) -> HomeSystemCurator:
    curator = make_curator(seed, **overrides)
    curator.curate(FrequencyTable(curator.ctx.preferences.star_frequencies))
    return curator


def placed_star(curator: HomeSystemCurator, themes: list, gas: tuple = ()) -> Star:
    star = Star.create(1, "Home", SUN)
    for index, theme in enumerate(themes):
        body = CelestialBody(name=f"p{index}", radius=200)
        if index in gas:
            body.make_gas_giant()
            body.radius = 80
        curator.ctx.themes.assign(curator.ctx.rng, body, theme, 0.0)
        star.planets.append(body)
    curator.systems.orbits.place(star)
    curator.ctx.cluster.stars.append(star)
    return star


def test_guarantees_hold_across_seeds() -> None:
    for seed in range(25):
        curator = curate(seed)
        birth = curator.ctx.birth
        star = curator.ctx.cluster.stars[0]
        assert birth is not None and birth.star is star
        assert curator.ctx.cluster.birth is birth
        assert not star.is_remnant
        assert star.gas_giants()
        assert curator.has_critical_mineral(star, birth.body)
        assert birth.body.radius == 200
        assert birth.body.is_telluric
        assert birth.body.theme == DEFAULT_HOME_THEME
        radii = [planet.orbit_radius for planet in star.planets]
        assert all(inner < outer for inner, outer in zip(radii, radii[1:]))


def test_remnant_home_star_is_converted() -> None:
    for seed in range(6):
        curator = curate(seed, starting_system_type="BH")
        star = curator.ctx.cluster.stars[0]
        assert star.kind == SUN
        assert star.luminosity == pytest.approx(1.0 + star.companion_luminosity)


def test_named_starting_type_is_used() -> None:
    curator = curate(3, starting_system_type="K", binary_star_chance=0.0)
    assert curator.ctx.cluster.stars[0].kind.code == "K"


def test_dream_system_layout() -> None:
    for seed in range(10):
        curator = curate(seed, dream_system=True)
        star = curator.ctx.cluster.stars[0]
        birth = curator.ctx.birth
        assert len(star.planets) == 5
        assert isinstance(birth, PlanetBirth)
        assert birth.body.theme == DEFAULT_HOME_THEME
        assert star.planets[0].theme in ("Lava", CRITICAL_MINERAL_THEME)
        assert star.planets[-1].is_gas_giant
        radii = [planet.orbit_radius for planet in star.planets]
        assert all(inner < outer for inner, outer in zip(radii, radii[1:]))


def test_unlocked_theme_stays_habitable() -> None:
    for seed in range(10):
        curator = curate(seed, birth_planet_unlock=True)
        theme = curator.ctx.themes.get(curator.ctx.birth.body.theme)
        assert theme.habitable


def test_birth_planet_si_ti() -> None:
    curator = curate(4, birth_planet_si_ti=True)
    body = curator.ctx.birth.body
    assert body.has_mineral(SILICIUM)
    assert body.has_mineral(TITANIUM)
    tiers = {vein.mineral: vein.tier for vein in body.veins}
    assert tiers[SILICIUM] is VeinTier.COMMON
    assert tiers[TITANIUM] is VeinTier.COMMON


def test_si_ti_birth_planet_does_not_count_as_critical_mineral() -> None:
    for seed in range(40):
        curator = curate(seed, birth_planet_si_ti=True)
        birth = curator.ctx.birth
        assert birth.body.has_mineral(TITANIUM)
        others = [body for body in birth.star.telluric_bodies() if body is not birth.body]
        assert any(body.has_mineral(TITANIUM) for body in others), seed


def test_birth_size_keeps_home_themes_in_their_heat() -> None:
    for seed in range(40):
        curator = curate(seed, starting_system_type="G", binary_star_chance=0.0)
        star = curator.ctx.cluster.stars[0]
        themes = curator.ctx.themes
        for planet in star.planets:
            heat = heat_for(star, planet.orbit_radius)
            for body in (planet, *planet.moons):
                if body is curator.ctx.birth.body or body.forced or body.theme == CRITICAL_MINERAL_THEME:
                    continue
                assert heat in themes.get(body.theme).heats, (seed, body.name, body.theme)


def test_no_homeworld_rares_wins_over_si_ti() -> None:
    for seed in range(8):
        curator = curate(seed, birth_planet_si_ti=True, no_homeworld_rares=True, rare_chance=100.0)
        body = curator.ctx.birth.body
        assert all(vein.tier is VeinTier.COMMON for vein in body.veins)
        assert not body.has_mineral(SILICIUM)


def test_no_stars_is_a_structural_error() -> None:
    curator = make_curator()
    with pytest.raises(StructuralInvariantViolation):
        curator.select_birth_body()


def test_fallback_converts_middle_planet() -> None:
    curator = make_curator(2)
    placed_star(curator, ["Barren", "Lava", "Barren"])
    birth = curator.select_birth_body()
    assert isinstance(birth, PlanetBirth)
    assert birth.index == 1
    assert curator.ctx.themes.get(birth.body.theme).habitable


def test_fallback_uses_moon_of_gas_giant() -> None:
    curator = make_curator(2)
    star = placed_star(curator, ["Barren", "GasGiant", "Barren"], gas=(1,))
    moon = CelestialBody(name="m", radius=100, is_moon=True)
    curator.ctx.themes.assign(curator.ctx.rng, moon, "Barren", 0.0)
    star.planets[1].moons.append(moon)
    birth = curator.select_birth_body()
    assert isinstance(birth, MoonBirth)
    assert birth.host is star.planets[1]
    assert birth.body is moon


@pytest.mark.parametrize("host_is_gas", [True, False])
def test_birth_size_grows_moon_host(host_is_gas: bool) -> None:
    curator = make_curator(5, birth_planet_size=400)
    star = Star.create(1, "Home", SUN)
    host = CelestialBody(name="host", radius=30 if host_is_gas else 200)
    if host_is_gas:
        host.make_gas_giant()
    moon = CelestialBody(name="moon", radius=100, is_moon=True, theme=DEFAULT_HOME_THEME)
    host.moons.append(moon)
    star.planets.append(host)
    curator.systems.orbits.place(star)
    curator.ctx.cluster.stars.append(star)
    orbit = host.orbit_radius

    birth = curator.select_birth_body()
    curator.apply_birth_size(birth)
    assert host.orbit_radius == orbit
    assert moon.radius == 400
    if host_is_gas:
        assert host.scale == GAS_GIANT_SCALE
        assert host.radius == 50
    else:
        assert host.radius == 450
    assert host.true_radius > moon.true_radius
    assert moon.orbit_radius > host.radius_au


def test_missing_gas_giant_is_appended() -> None:
    curator = make_curator(6)
    star = placed_star(curator, ["Barren", "Mediterranean"])
    outer = star.planets[-1].orbit_radius
    curator.ensure_gas_giant(star)
    giant = star.planets[-1]
    assert len(star.planets) == 3
    assert giant.theme == ICE_GIANT_THEME
    assert giant.is_gas_giant and giant.radius == 80 and giant.forced
    assert giant.orbit_radius > outer
    assert giant.name == "Home - III"


def test_critical_mineral_body_is_appended_for_small_systems() -> None:
    curator = make_curator(7)
    star = placed_star(curator, ["Mediterranean", "GasGiant"], gas=(1,))
    birth = PlanetBirth(star, 0)
    curator.ensure_critical_mineral(star, birth)
    swan = star.planets[-1]
    assert swan.name == "Black Swan"
    assert swan.theme == CRITICAL_MINERAL_THEME
    assert swan.has_mineral(TITANIUM)
    assert swan.orbit_radius > star.planets[-2].orbit_radius
    assert curator.has_critical_mineral(star)


def test_critical_mineral_retheme_spares_birth_body() -> None:
    curator = make_curator(8)
    star = placed_star(curator, ["Mediterranean", "Barren", "Lava"])
    birth = PlanetBirth(star, 0)
    curator.ensure_critical_mineral(star, birth)
    assert len(star.planets) == 3
    assert birth.body.theme == DEFAULT_HOME_THEME
    assert curator.has_critical_mineral(star)


def test_critical_mineral_skipped_without_rares() -> None:
    curator = make_curator(9, rare_chance=0.0)
    star = placed_star(curator, ["Mediterranean"])
    curator.ensure_critical_mineral(star, PlanetBirth(star, 0))
    assert len(star.planets) == 1


def test_critical_mineral_on_birth_body_alone_is_not_enough() -> None:
    curator = make_curator(10)
    star = placed_star(curator, ["Mediterranean", "Barren", "Lava"])
    birth = PlanetBirth(star, 0)
    birth.body.add_vein(TITANIUM, VeinTier.COMMON)
    assert curator.has_critical_mineral(star)
    assert not curator.has_critical_mineral(star, birth.body)
    curator.ensure_critical_mineral(star, birth)
    assert curator.has_critical_mineral(star, birth.body)
