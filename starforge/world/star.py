"""Star categories, physical defaults and the star entity."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from pygame.math import Vector3

from starforge.errors import InvalidConfiguration
from starforge.world.body import CelestialBody

SOLAR_RADIUS_AU = 0.00465047


class StarType(enum.Enum):
    MAIN_SEQUENCE = "main_sequence"
    GIANT = "giant"
    WHITE_DWARF = "white_dwarf"
    NEUTRON_STAR = "neutron_star"
    BLACK_HOLE = "black_hole"


class Structure(enum.Enum):
    """Coarse grouping used by zone, orbit and companion rules."""

    MAIN_SEQUENCE = "main_sequence"
    GIANT = "giant"
    REMNANT = "remnant"


class SpectralClass(enum.Enum):
    M = "M"
    K = "K"
    G = "G"
    F = "F"
    A = "A"
    B = "B"
    O = "O"
    X = "X"  # remnants carry no spectral class


_STRUCTURES = {
    StarType.MAIN_SEQUENCE: Structure.MAIN_SEQUENCE,
    StarType.GIANT: Structure.GIANT,
    StarType.WHITE_DWARF: Structure.REMNANT,
    StarType.NEUTRON_STAR: Structure.REMNANT,
    StarType.BLACK_HOLE: Structure.REMNANT,
}


@dataclass(frozen=True)
class StarKind:
    """Tagged star category: structural type plus spectral class."""

    star_type: StarType
    spectral: SpectralClass

    @property
    def structure(self) -> Structure:
        return _STRUCTURES[self.star_type]

    @property
    def is_remnant(self) -> bool:
        return self.spectral is SpectralClass.X

    @property
    def code(self) -> str:
        return KIND_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "StarKind":
        try:
            return KINDS_BY_CODE[code]
        except KeyError:
            raise InvalidConfiguration(f"Unknown star category '{code}'") from None

    def __str__(self) -> str:
        return self.code


def _main(spectral: SpectralClass) -> StarKind:
    return StarKind(StarType.MAIN_SEQUENCE, spectral)


def _giant(spectral: SpectralClass) -> StarKind:
    return StarKind(StarType.GIANT, spectral)


BLACK_HOLE = StarKind(StarType.BLACK_HOLE, SpectralClass.X)
NEUTRON_STAR = StarKind(StarType.NEUTRON_STAR, SpectralClass.X)
WHITE_DWARF = StarKind(StarType.WHITE_DWARF, SpectralClass.X)

# Canonical category order; frequency tables cumulate in this order.
KINDS_BY_CODE: Dict[str, StarKind] = {
    "K": _main(SpectralClass.K),
    "M": _main(SpectralClass.M),
    "G": _main(SpectralClass.G),
    "F": _main(SpectralClass.F),
    "A": _main(SpectralClass.A),
    "B": _main(SpectralClass.B),
    "O": _main(SpectralClass.O),
    "BH": BLACK_HOLE,
    "N": NEUTRON_STAR,
    "W": WHITE_DWARF,
    "RG": _giant(SpectralClass.M),
    "YG": _giant(SpectralClass.G),
    "WG": _giant(SpectralClass.A),
    "BG": _giant(SpectralClass.B),
}
KIND_CODES: Dict[StarKind, str] = {kind: code for code, kind in KINDS_BY_CODE.items()}
CATEGORY_CODES = tuple(KINDS_BY_CODE.keys())

SUN = KINDS_BY_CODE["G"]


@dataclass(frozen=True)
class StarDefaults:
    radius: float  # solar radii
    luminosity: float
    mass: float  # solar masses
    age: float  # Gyr
    lifetime: float  # Gyr
    temperature: float  # K
    color: str
    dyson_radius: float  # AU


STAR_DEFAULTS: Dict[StarKind, StarDefaults] = {
    KINDS_BY_CODE["M"]: StarDefaults(0.6, 0.25, 0.45, 6.0, 60.0, 3300.0, "#ffcc6f", 0.3),
    KINDS_BY_CODE["K"]: StarDefaults(0.85, 0.55, 0.75, 5.0, 20.0, 4500.0, "#ffd2a1", 0.5),
    KINDS_BY_CODE["G"]: StarDefaults(1.0, 1.0, 1.0, 4.6, 10.0, 5800.0, "#fff4ea", 0.75),
    KINDS_BY_CODE["F"]: StarDefaults(1.2, 1.5, 1.35, 2.5, 4.0, 6700.0, "#f8f7ff", 0.9),
    KINDS_BY_CODE["A"]: StarDefaults(1.5, 2.2, 2.0, 0.8, 1.2, 8800.0, "#cad7ff", 1.1),
    KINDS_BY_CODE["B"]: StarDefaults(2.2, 3.5, 6.0, 0.1, 0.15, 18000.0, "#aabfff", 1.5),
    KINDS_BY_CODE["O"]: StarDefaults(3.0, 5.0, 20.0, 0.005, 0.01, 35000.0, "#9bb0ff", 2.0),
    KINDS_BY_CODE["RG"]: StarDefaults(14.0, 2.0, 1.2, 9.0, 9.5, 3600.0, "#ff9a5c", 2.5),
    KINDS_BY_CODE["YG"]: StarDefaults(10.0, 2.5, 2.5, 1.0, 1.1, 5200.0, "#ffe08a", 2.5),
    KINDS_BY_CODE["WG"]: StarDefaults(8.0, 3.5, 3.5, 0.35, 0.4, 8500.0, "#e8eeff", 3.0),
    KINDS_BY_CODE["BG"]: StarDefaults(9.0, 5.0, 8.0, 0.04, 0.05, 20000.0, "#9db4ff", 3.5),
    WHITE_DWARF: StarDefaults(0.012, 0.05, 0.6, 8.0, 100.0, 12000.0, "#f0f4ff", 0.1),
    NEUTRON_STAR: StarDefaults(0.00002, 0.02, 1.4, 1.0, 100.0, 600000.0, "#b0d8ff", 0.1),
    BLACK_HOLE: StarDefaults(0.0001, 0.0, 10.0, 1.0, 100.0, 0.0, "#000000", 0.1),
}


@dataclass(eq=False)
class Star:
    """A star with its planets; companions are owned by their primary."""

    id: int
    name: str
    kind: StarKind
    radius: float = 1.0
    luminosity: float = 1.0
    mass: float = 1.0
    age: float = 0.0
    lifetime: float = 0.0
    temperature: float = 0.0
    color: str = "#ffffff"
    dyson_radius: float = 0.0
    solar_power: float = 0.0
    position: Vector3 = field(default_factory=Vector3)
    companions: List["Star"] = field(default_factory=list)
    companion_luminosity: float = 0.0
    decorative: bool = False
    planets: List[CelestialBody] = field(default_factory=list)

    @classmethod
    def create(cls, star_id: int, name: str, kind: StarKind) -> "Star":
        star = cls(id=star_id, name=name, kind=kind)
        star.apply_defaults()
        return star

    def apply_defaults(self) -> None:
        defaults = STAR_DEFAULTS[self.kind]
        self.radius = defaults.radius
        self.luminosity = defaults.luminosity
        self.mass = defaults.mass
        self.age = defaults.age
        self.lifetime = defaults.lifetime
        self.temperature = defaults.temperature
        self.color = defaults.color
        self.dyson_radius = defaults.dyson_radius

    @property
    def structure(self) -> Structure:
        return self.kind.structure

    @property
    def is_remnant(self) -> bool:
        return self.kind.is_remnant

    @property
    def radius_au(self) -> float:
        return self.radius * SOLAR_RADIUS_AU

    @property
    def companion_separation(self) -> float:
        if not self.companions:
            return 0.0
        return max((companion.position - self.position).length() for companion in self.companions)

    def bodies(self) -> Iterator[CelestialBody]:
        for planet in self.planets:
            yield planet
            yield from planet.moons

    def telluric_bodies(self) -> List[CelestialBody]:
        return [body for body in self.bodies() if body.is_telluric]

    def gas_giants(self) -> List[CelestialBody]:
        return [body for body in self.bodies() if body.is_gas_giant]


__all__ = [
    "BLACK_HOLE",
    "CATEGORY_CODES",
    "KINDS_BY_CODE",
    "NEUTRON_STAR",
    "SOLAR_RADIUS_AU",
    "STAR_DEFAULTS",
    "SUN",
    "SpectralClass",
    "Star",
    "StarDefaults",
    "StarKind",
    "StarType",
    "Structure",
    "WHITE_DWARF",
]
