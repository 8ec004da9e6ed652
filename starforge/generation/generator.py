"""Top level cluster generation."""
from __future__ import annotations

import time
from typing import Dict, Optional, Tuple

from starforge.config.preferences import Preferences
from starforge.engine.logger import GeneratorLogger, init_logger
from starforge.engine.rng import SeededRandom
from starforge.generation.context import GenerationContext
from starforge.generation.frequency import FrequencyTable
from starforge.generation.home import HomeSystemCurator
from starforge.generation.multistar import MultistarComposer
from starforge.generation.systems import SystemBuilder
from starforge.world.cluster import Cluster, GalaxyParams
from starforge.world.star import Star, SpectralClass, StarType

# density level -> (min step, max step, min distance)
GALAXY_DENSITY: Dict[int, Tuple[float, float, float]] = {
    1: (1.2, 1.5, 1.2),
    2: (1.4, 2.0, 1.5),
    3: (1.6, 2.5, 1.7),
    4: (1.8, 3.0, 2.0),
    5: (2.0, 3.5, 2.3),
    6: (2.2, 4.2, 2.4),
    7: (2.5, 5.0, 2.6),
    8: (2.7, 6.0, 2.8),
    9: (3.0, 7.0, 3.0),
}
DEFAULT_DENSITY = 5

LUMINOSITY_BOOSTS: Dict[SpectralClass, float] = {
    SpectralClass.F: 1.953,
    SpectralClass.A: 1.953,
    SpectralClass.B: 3.375,
    SpectralClass.O: 3.375,
}
BLACK_HOLE_RADIUS_FACTOR = 0.33


def galaxy_params(density: int) -> GalaxyParams:
    """Star spacing for a density level; unknown levels use the default spacing."""
    min_step, max_step, min_distance = GALAXY_DENSITY.get(density, GALAXY_DENSITY[DEFAULT_DENSITY])
    return GalaxyParams(min_distance=min_distance, min_step_length=min_step, max_step_length=max_step)


class ClusterGenerator:
    """Builds a whole cluster from a seed; every call owns a fresh context."""

    def __init__(self, preferences: Optional[Preferences] = None, logger: Optional[GeneratorLogger] = None) -> None:
        self.preferences = preferences or Preferences()
        self.logger = logger or init_logger()

    def generate(self, seed: int, star_count: Optional[int] = None) -> Cluster:
        prefs = self.preferences
        prefs.validate()
        count = prefs.clamp_star_count(star_count)
        log = self.logger.channel("galaxy")
        started = time.perf_counter()
        log.info("Generating cluster: seed=%d stars=%d", seed, count)

        cluster = Cluster(seed=seed, galaxy_params=galaxy_params(prefs.galaxy_density))
        ctx = GenerationContext(rng=SeededRandom(seed), preferences=prefs, cluster=cluster, logger=self.logger)
        frequencies = FrequencyTable(prefs.star_frequencies)
        systems = SystemBuilder(ctx)
        multistar = MultistarComposer(ctx)

        HomeSystemCurator(ctx, systems, multistar).curate(frequencies)
        for _ in range(1, count):
            kind = frequencies.draw(ctx.rng)
            star = Star.create(ctx.rng.next_int(), ctx.namer.next_name(), kind)
            cluster.stars.append(star)
            multistar.maybe_add_companion(star)
            systems.build(star)

        self.apply_post_passes(cluster)
        log.info(
            "Generated %d stars and %d bodies in %.3fs; birth planet %s",
            len(cluster.stars),
            sum(len(list(star.bodies())) for star in cluster.stars),
            time.perf_counter() - started,
            cluster.birth_planet_name,
        )
        return cluster

    def apply_post_passes(self, cluster: Cluster) -> None:
        prefs = self.preferences
        for star in cluster.stars:
            if prefs.luminosity_boost:
                star.luminosity *= LUMINOSITY_BOOSTS.get(star.kind.spectral, 1.0)
            if prefs.luminosity_exponential_boost and star.luminosity > 1.0:
                star.luminosity **= 1.5
            if star.kind.star_type is StarType.BLACK_HOLE:
                star.radius *= BLACK_HOLE_RADIUS_FACTOR
            if prefs.realistic_solar_power_levels:
                star.solar_power = star.luminosity
            else:
                star.solar_power = star.luminosity ** (1.0 / 3.0)


__all__ = ["ClusterGenerator", "GALAXY_DENSITY", "galaxy_params"]
