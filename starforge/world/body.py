"""Planets and moons."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List

GAS_GIANT_SCALE = 10.0
TELLURIC_SCALE = 1.0
UNITS_PER_AU = 40000.0
UNPLACED = -1.0

SILICIUM = "silicium"
TITANIUM = "titanium"
CRITICAL_MINERAL = TITANIUM


class VeinTier(enum.Enum):
    COMMON = "common"
    RARE = "rare"


@dataclass(frozen=True)
class Vein:
    mineral: str
    tier: VeinTier = VeinTier.COMMON


@dataclass(eq=False)
class CelestialBody:
    """A planet or a moon; owned by exactly one star or planet."""

    name: str
    radius: int
    scale: float = TELLURIC_SCALE
    is_moon: bool = False
    orbit_radius: float = UNPLACED
    orbital_period: float = UNPLACED
    rotation_period: float = UNPLACED
    rotation_phase: float = 0.0
    orbit_phase: float = 0.0
    orbit_inclination: float = 0.0
    obliquity: float = 0.0
    theme: str | None = None
    veins: List[Vein] = field(default_factory=list)
    moons: List["CelestialBody"] = field(default_factory=list)
    forced: bool = False

    @property
    def is_gas_giant(self) -> bool:
        return self.scale == GAS_GIANT_SCALE

    @property
    def is_telluric(self) -> bool:
        return not self.is_gas_giant

    @property
    def true_radius(self) -> float:
        return self.radius * self.scale

    @property
    def radius_au(self) -> float:
        return self.true_radius / UNITS_PER_AU

    @property
    def is_placed(self) -> bool:
        return self.orbit_radius != UNPLACED

    @property
    def system_radius(self) -> float:
        """Distance from the body centre to the edge of its moon system."""
        if not self.moons:
            return self.radius_au
        outermost = self.moons[-1]
        return max(self.radius_au, outermost.orbit_radius + outermost.radius_au)

    def make_gas_giant(self) -> None:
        self.scale = GAS_GIANT_SCALE

    def make_telluric(self) -> None:
        self.scale = TELLURIC_SCALE

    def has_mineral(self, mineral: str) -> bool:
        return any(vein.mineral == mineral for vein in self.veins)

    def add_vein(self, mineral: str, tier: VeinTier = VeinTier.COMMON) -> None:
        """Add a vein, upgrading an existing rare vein of the same mineral to ``tier``."""
        self.veins = [vein for vein in self.veins if vein.mineral != mineral] + [Vein(mineral, tier)]

    def strip_tier(self, tier: VeinTier) -> None:
        self.veins = [vein for vein in self.veins if vein.tier is not tier]


__all__ = [
    "CRITICAL_MINERAL",
    "CelestialBody",
    "GAS_GIANT_SCALE",
    "SILICIUM",
    "TELLURIC_SCALE",
    "TITANIUM",
    "UNITS_PER_AU",
    "UNPLACED",
    "Vein",
    "VeinTier",
]
