"""Creation of single, not yet placed, celestial bodies."""
from __future__ import annotations

from typing import Optional

from starforge.generation.context import GenerationContext
from starforge.generation.sampling import sample_biased_size
from starforge.math.orbits import snap_size
from starforge.world.body import GAS_GIANT_SCALE, TELLURIC_SCALE, CelestialBody
from starforge.world.star import Star


class BodyFactory:
    GAS_GIANT_RADIUS = 80
    HUGE_GAS_GIANT_RANGE = (80, 160)
    MOON_HOST_MARGIN = 20

    def __init__(self, ctx: GenerationContext) -> None:
        self.ctx = ctx

    def planet_size(self) -> int:
        prefs = self.ctx.preferences
        low, high = prefs.planet_size
        size = snap_size(sample_biased_size(self.ctx.rng, low, high, prefs.size_bias))
        return max(low, min(high, size))

    def moon_size(self, host: CelestialBody) -> int:
        prefs = self.ctx.preferences
        size = self.planet_size()
        host_radius = int(host.true_radius)
        if size > host_radius:
            size = host_radius - self.MOON_HOST_MARGIN
        if prefs.moons_are_small and (host.is_telluric or prefs.small_gas_giant_moons):
            size //= 2
        size = snap_size(size)
        # Snapping may not push a moon up to its host's size.
        while size >= host_radius and size > 10:
            size -= 10
        return size

    def gas_giant_size(self) -> int:
        if not self.ctx.preferences.huge_gas_giants:
            return self.GAS_GIANT_RADIUS
        low, high = self.HUGE_GAS_GIANT_RANGE
        return snap_size(self.ctx.rng.next_int(low, high + 1))

    def create(
        self,
        star: Star,
        host: Optional[CelestialBody],
        is_gas_giant: bool,
        is_moon: bool,
        *,
        forced: bool = False,
    ) -> CelestialBody:
        if is_gas_giant:
            radius = self.gas_giant_size()
        elif is_moon and host is not None:
            radius = self.moon_size(host)
        else:
            radius = self.planet_size()
        suffix = "Moon" if is_moon else "Planet"
        return CelestialBody(
            name=f"{star.name}-{suffix}",
            radius=radius,
            scale=GAS_GIANT_SCALE if is_gas_giant else TELLURIC_SCALE,
            is_moon=is_moon,
            forced=forced,
        )


__all__ = ["BodyFactory"]
