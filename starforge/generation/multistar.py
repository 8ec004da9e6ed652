"""Binary and trinary companion composition."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from pygame.math import Vector3

from starforge.generation.context import GenerationContext
from starforge.world.star import (
    KINDS_BY_CODE,
    NEUTRON_STAR,
    WHITE_DWARF,
    SpectralClass,
    Star,
    StarKind,
    StarType,
    Structure,
)

# Repeated entries weight the uniform pick.
COMPANION_TABLES: Dict[StarType, Tuple[StarKind, ...]] = {
    StarType.BLACK_HOLE: (
        NEUTRON_STAR,
        WHITE_DWARF,
        KINDS_BY_CODE["O"],
        KINDS_BY_CODE["B"],
        KINDS_BY_CODE["BG"],
    ),
    StarType.NEUTRON_STAR: (
        WHITE_DWARF,
        WHITE_DWARF,
        KINDS_BY_CODE["M"],
        KINDS_BY_CODE["K"],
        NEUTRON_STAR,
    ),
    StarType.MAIN_SEQUENCE: (
        KINDS_BY_CODE["M"],
        KINDS_BY_CODE["M"],
        KINDS_BY_CODE["K"],
        KINDS_BY_CODE["K"],
        KINDS_BY_CODE["G"],
        KINDS_BY_CODE["F"],
        WHITE_DWARF,
    ),
    StarType.GIANT: (
        KINDS_BY_CODE["M"],
        KINDS_BY_CODE["K"],
        KINDS_BY_CODE["G"],
        WHITE_DWARF,
        NEUTRON_STAR,
    ),
}

_CLASS_FACTORS: Dict[SpectralClass, float] = {
    SpectralClass.O: 1.5,
    SpectralClass.B: 1.5,
    SpectralClass.A: 1.2,
    SpectralClass.F: 1.2,
}

_TYPE_FACTORS: Dict[StarType, float] = {
    StarType.GIANT: 1.25,
    StarType.BLACK_HOLE: 0.5,
    StarType.NEUTRON_STAR: 0.5,
    StarType.WHITE_DWARF: 0.0,
}

_RADIUS_SCALES: Dict[Structure, float] = {
    Structure.MAIN_SEQUENCE: 0.8,
    Structure.GIANT: 0.5,
    Structure.REMNANT: 1.2,
}


class MultistarComposer:
    """Adds decorative companions and folds their light into the primary."""

    DREAM_HOME_FACTOR = 2.0
    SEPARATION_RANGE = (2.5, 4.0)
    MIN_SEPARATION = 0.05  # AU
    TRINARY_CHANCE = 0.5
    TRINARY_SEPARATION_RANGE = (1.5, 2.5)

    def __init__(self, ctx: GenerationContext) -> None:
        self.ctx = ctx

    def companion_chance(self, star: Star, dream_home: bool = False) -> float:
        chance = self.ctx.preferences.binary_star_chance / 100.0
        if star.kind.star_type is StarType.MAIN_SEQUENCE:
            chance *= _CLASS_FACTORS.get(star.kind.spectral, 1.0)
        else:
            chance *= _TYPE_FACTORS[star.kind.star_type]
        if dream_home:
            chance *= self.DREAM_HOME_FACTOR
        return min(1.0, chance)

    def maybe_add_companion(self, star: Star, dream_home: bool = False) -> Optional[Star]:
        """Roll for a binary (and possibly trinary) companion; returns the first companion."""

        if star.decorative or star.companions:
            return None
        if not self.ctx.rng.next_pick(self.companion_chance(star, dream_home)):
            return None
        log = self.ctx.channel("multistar")
        rng = self.ctx.rng
        first = self._make_companion(star, rng.item(COMPANION_TABLES[star.kind.star_type]), "B")
        separation = (star.radius_au + first.radius_au) * rng.next_float(*self.SEPARATION_RANGE) + self.MIN_SEPARATION
        self._attach(star, first, Vector3(separation, 0.0, 0.0))
        log.info("%s (%s) gains companion %s (%s) at %.3f AU", star.name, star.kind, first.name, first.kind, separation)

        if not first.is_remnant and rng.next_pick(self.TRINARY_CHANCE):
            second = self._make_companion(star, rng.item(COMPANION_TABLES[star.kind.star_type]), "C")
            distance = separation * rng.next_float(*self.TRINARY_SEPARATION_RANGE)
            offset = Vector3(distance, 0.0, 0.0).rotate_y(rng.next_float(0.0, 360.0))
            self._attach(star, second, offset)
            log.info("%s becomes trinary with %s (%s) at %.3f AU", star.name, second.name, second.kind, distance)
        return first

    def _make_companion(self, primary: Star, kind: StarKind, suffix: str) -> Star:
        companion = Star.create(self.ctx.rng.next_int(), f"{primary.name} {suffix}", kind)
        companion.radius *= _RADIUS_SCALES[primary.structure]
        if primary.structure is Structure.MAIN_SEQUENCE:
            companion.radius = min(companion.radius, primary.radius * 0.9)
        companion.decorative = True
        return companion

    def _attach(self, primary: Star, companion: Star, offset: Vector3) -> None:
        companion.position = primary.position + offset
        primary.luminosity += companion.luminosity
        primary.companion_luminosity += companion.luminosity
        companion.luminosity = 0.0
        primary.companions.append(companion)


__all__ = ["COMPANION_TABLES", "MultistarComposer"]
