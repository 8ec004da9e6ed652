"""Planet theme catalogue and lookup.

Theme keys are opaque identifiers for the host; the generator only needs to know
which body types, heat classes and sizes a theme accepts, whether it is
habitable, and which mineral veins it carries.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from starforge.engine.rng import SeededRandom
from starforge.errors import InvalidConfiguration
from starforge.world.body import SILICIUM, TITANIUM, CelestialBody, Vein, VeinTier


class ThemeType(enum.Enum):
    PLANET = "planet"
    MOON = "moon"
    GAS = "gas"


class ThemeHeat(enum.Enum):
    HOT = "hot"
    WARM = "warm"
    TEMPERATE = "temperate"
    COLD = "cold"
    FROZEN = "frozen"


ALL_HEATS = tuple(ThemeHeat)
ROCKY = (ThemeType.PLANET, ThemeType.MOON)

SMALL_THEME_MAX_RADIUS = 40
LARGE_THEME_MIN_RADIUS = 50
MAX_BODY_RADIUS = 510

DEFAULT_HOME_THEME = "Mediterranean"
ICE_GIANT_THEME = "IceGiant"
CRITICAL_MINERAL_THEME = "AshenGelisol"


@dataclass(frozen=True)
class ThemeProfile:
    key: str
    name: str
    palette: Tuple[str, str, str]
    types: Tuple[ThemeType, ...]
    heats: Tuple[ThemeHeat, ...]
    veins: Tuple[str, ...] = ()
    rare_veins: Tuple[str, ...] = ()
    habitable: bool = False
    ocean: bool = False
    min_radius: int = 5
    max_radius: int = MAX_BODY_RADIUS

    def accepts(self, theme_type: ThemeType, heat: Optional[ThemeHeat], radius: Optional[int]) -> bool:
        if theme_type not in self.types:
            return False
        if heat is not None and heat not in self.heats:
            return False
        if radius is not None and not (self.min_radius <= radius <= self.max_radius):
            return False
        return True

    @property
    def is_gas(self) -> bool:
        return ThemeType.GAS in self.types


BASE_THEMES: Tuple[ThemeProfile, ...] = (
    ThemeProfile(
        key="Mediterranean",
        name="Mediterranean",
        palette=("#4F9D69", "#2F6FAF", "#D9C58B"),
        types=ROCKY,
        heats=(ThemeHeat.TEMPERATE,),
        veins=("iron", "copper", "stone", "coal"),
        habitable=True,
    ),
    ThemeProfile(
        key="OceanWorld",
        name="Ocean World",
        palette=("#1F5FA8", "#3FA7D6", "#E3F2FD"),
        types=ROCKY,
        heats=(ThemeHeat.TEMPERATE,),
        veins=("iron", "copper", "stone"),
        rare_veins=("organic_crystal",),
        habitable=True,
        ocean=True,
    ),
    ThemeProfile(
        key="Prairie",
        name="Prairie",
        palette=("#9CCB5A", "#C7B26B", "#6E8B3D"),
        types=ROCKY,
        heats=(ThemeHeat.WARM, ThemeHeat.TEMPERATE),
        veins=("iron", "copper", "stone", "coal"),
        rare_veins=("fractal_silicon",),
        habitable=True,
    ),
    ThemeProfile(
        key="RedStone",
        name="Red Stone",
        palette=("#B5533C", "#E08E5B", "#5A7D4C"),
        types=ROCKY,
        heats=(ThemeHeat.WARM, ThemeHeat.TEMPERATE),
        veins=("iron", "copper", "stone", "coal"),
        rare_veins=("optical_grating_crystal",),
        habitable=True,
    ),
    ThemeProfile(
        key="AridDesert",
        name="Arid Desert",
        palette=("#D8B477", "#B98B4E", "#F2DDA4"),
        types=ROCKY,
        heats=(ThemeHeat.HOT, ThemeHeat.WARM),
        veins=("iron", "copper", "stone", SILICIUM),
        rare_veins=("fire_ice",),
    ),
    ThemeProfile(
        key="Gobi",
        name="Gobi",
        palette=("#C9A16A", "#8F6E4A", "#E6D2A8"),
        types=ROCKY,
        heats=(ThemeHeat.WARM, ThemeHeat.TEMPERATE, ThemeHeat.COLD),
        veins=("iron", "copper", "stone", SILICIUM),
        rare_veins=("spiniform_stalagmite",),
    ),
    ThemeProfile(
        key="AcidSea",
        name="Acid Sea",
        palette=("#C7D94A", "#7A8C2E", "#F4F1A3"),
        types=ROCKY,
        heats=(ThemeHeat.HOT, ThemeHeat.WARM),
        veins=("iron", "stone", "sulfuric_acid"),
        rare_veins=("unipolar_magnet",),
    ),
    ThemeProfile(
        key="Lava",
        name="Lava",
        palette=("#FF5A1F", "#3B1F1A", "#FFB347"),
        types=ROCKY,
        heats=(ThemeHeat.HOT,),
        veins=("iron", "copper", "stone"),
        rare_veins=("kimberlite",),
    ),
    ThemeProfile(
        key="VolcanicAsh",
        name="Volcanic Ash",
        palette=("#5C5552", "#FF7B3A", "#2E2A28"),
        types=ROCKY,
        heats=(ThemeHeat.HOT, ThemeHeat.WARM),
        veins=("iron", "coal", "stone"),
        rare_veins=(TITANIUM, "kimberlite"),
    ),
    ThemeProfile(
        key="Barren",
        name="Barren",
        palette=("#8A8A8A", "#5E5E5E", "#B8B8B8"),
        types=ROCKY,
        heats=ALL_HEATS,
        veins=("iron", "stone"),
        rare_veins=(SILICIUM, TITANIUM),
    ),
    ThemeProfile(
        key="IceGelisol",
        name="Ice Field Gelisol",
        palette=("#DCEFFF", "#9CC3E6", "#F7FBFF"),
        types=ROCKY,
        heats=(ThemeHeat.COLD, ThemeHeat.FROZEN),
        veins=("iron", "copper", "stone", SILICIUM),
        rare_veins=("fire_ice",),
    ),
    ThemeProfile(
        key="FrozenTundra",
        name="Frozen Tundra",
        palette=("#B9D4E3", "#6F8FA6", "#EAF4FA"),
        types=ROCKY,
        heats=(ThemeHeat.COLD, ThemeHeat.FROZEN),
        veins=("iron", "copper", "stone"),
        rare_veins=("grating_crystal", TITANIUM),
    ),
    ThemeProfile(
        key=CRITICAL_MINERAL_THEME,
        name="Ashen Gelisol",
        palette=("#6B6F78", "#A9B3C1", "#2C3038"),
        types=ROCKY,
        heats=(ThemeHeat.COLD, ThemeHeat.FROZEN),
        veins=("iron", "stone", TITANIUM),
        rare_veins=("unipolar_magnet",),
    ),
    ThemeProfile(
        key="GasGiant",
        name="Gas Giant",
        palette=("#D9A066", "#A8683A", "#F5D7A1"),
        types=(ThemeType.GAS,),
        heats=(ThemeHeat.HOT, ThemeHeat.WARM, ThemeHeat.TEMPERATE),
        veins=("hydrogen",),
        rare_veins=("deuterium",),
    ),
    ThemeProfile(
        key="GasGiant2",
        name="Banded Gas Giant",
        palette=("#C98F5B", "#E9C89B", "#7F4F2E"),
        types=(ThemeType.GAS,),
        heats=(ThemeHeat.TEMPERATE, ThemeHeat.COLD),
        veins=("hydrogen",),
        rare_veins=("deuterium",),
    ),
    ThemeProfile(
        key=ICE_GIANT_THEME,
        name="Ice Giant",
        palette=("#7FC8F8", "#3C91C9", "#D5F0FF"),
        types=(ThemeType.GAS,),
        heats=(ThemeHeat.COLD, ThemeHeat.FROZEN),
        veins=("hydrogen",),
        rare_veins=("fire_ice",),
    ),
    ThemeProfile(
        key="IceGiant2",
        name="Deep Ice Giant",
        palette=("#5C7CFA", "#2B3F8F", "#A5B8FF"),
        types=(ThemeType.GAS,),
        heats=(ThemeHeat.FROZEN,),
        veins=("hydrogen",),
        rare_veins=("deuterium", "fire_ice"),
    ),
)


class ThemeLibrary:
    """Per-run theme registry; treat as read-only once generation starts."""

    def __init__(self, themes: Iterable[ThemeProfile] = ()) -> None:
        self._themes: Dict[str, ThemeProfile] = {}
        for theme in themes:
            self.add(theme)

    @classmethod
    def default(cls) -> "ThemeLibrary":
        """Base catalogue with small-body variants of the rocky themes."""

        themes: List[ThemeProfile] = []
        small: List[ThemeProfile] = []
        for theme in BASE_THEMES:
            if theme.is_gas:
                themes.append(theme)
                continue
            themes.append(replace(theme, min_radius=LARGE_THEME_MIN_RADIUS))
            if not theme.ocean:
                small.append(replace(theme, key=f"{theme.key}smol", max_radius=SMALL_THEME_MAX_RADIUS))
        return cls(themes + small)

    def add(self, theme: ThemeProfile) -> None:
        self._themes[theme.key] = theme

    def __contains__(self, key: str) -> bool:
        return key in self._themes

    def __len__(self) -> int:
        return len(self._themes)

    def keys(self) -> List[str]:
        return list(self._themes.keys())

    def get(self, key: str) -> ThemeProfile:
        try:
            return self._themes[key]
        except KeyError:
            raise InvalidConfiguration(f"Unknown theme '{key}'") from None

    @property
    def habitable(self) -> List[str]:
        return [theme.key for theme in self._themes.values() if theme.habitable and theme.max_radius > SMALL_THEME_MAX_RADIUS]

    def query(self, rng: SeededRandom, theme_type: ThemeType, heat: ThemeHeat, radius: int) -> str:
        """Pick a theme key for a body, relaxing size and then heat when nothing fits."""

        for wanted_heat, wanted_radius in ((heat, radius), (heat, None), (None, radius), (None, None)):
            candidates = [
                theme.key for theme in self._themes.values() if theme.accepts(theme_type, wanted_heat, wanted_radius)
            ]
            if candidates:
                return rng.item(candidates)
        raise InvalidConfiguration(f"No theme available for {theme_type.value} bodies")

    def assign(self, rng: SeededRandom, body: CelestialBody, key: str, rare_chance: float) -> None:
        """Give ``body`` the theme ``key`` and roll its mineral veins."""

        theme = self.get(key)
        body.theme = theme.key
        veins = [Vein(mineral) for mineral in theme.veins]
        for mineral in theme.rare_veins:
            if rng.next_pick(rare_chance):
                veins.append(Vein(mineral, VeinTier.RARE))
        body.veins = veins


__all__ = [
    "BASE_THEMES",
    "CRITICAL_MINERAL_THEME",
    "DEFAULT_HOME_THEME",
    "ICE_GIANT_THEME",
    "ThemeHeat",
    "ThemeLibrary",
    "ThemeProfile",
    "ThemeType",
]
