"""Generator preferences and their JSON loading."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from starforge.errors import InvalidConfiguration
from starforge.world.star import CATEGORY_CODES

MIN_STAR_COUNT = 16
MAX_STAR_COUNT = 96
RANDOM_STARTING_SYSTEM = "Random"

DEFAULT_FREQUENCIES: Dict[str, float] = {
    "K": 40,
    "M": 50,
    "G": 30,
    "F": 25,
    "A": 10,
    "B": 4,
    "O": 2,
    "BH": 1,
    "N": 1,
    "W": 2,
    "RG": 1,
    "YG": 1,
    "WG": 1,
    "BG": 1,
}

# Preference keys that map one-to-one onto dataclass fields.
_SCALAR_KEYS = {
    "galaxyDensity": ("galaxy_density", int),
    "defaultStarCount": ("default_star_count", int),
    "binaryStarChance": ("binary_star_chance", float),
    "startingSystemType": ("starting_system_type", str),
    "birthPlanetSize": ("birth_planet_size", int),
    "birthPlanetUnlock": ("birth_planet_unlock", bool),
    "birthPlanetSiTi": ("birth_planet_si_ti", bool),
    "noHomeworldRares": ("no_homeworld_rares", bool),
    "hugeGasGiants": ("huge_gas_giants", bool),
    "moreLikelyGasGiantMoons": ("more_likely_gas_giant_moons", bool),
    "moonsAreSmall": ("moons_are_small", bool),
    "smallGasGiantMoons": ("small_gas_giant_moons", bool),
    "tidalLockInnerPlanets": ("tidal_lock_inner_planets", bool),
    "luminosityBoost": ("luminosity_boost", bool),
    "luminosityExponentialBoost": ("luminosity_exponential_boost", bool),
    "realisticSolarPowerLevels": ("realistic_solar_power_levels", bool),
    "countBias": ("count_bias", int),
    "sizeBias": ("size_bias", int),
    "chanceGas": ("chance_gas", float),
    "chanceMoon": ("chance_moon", float),
    "rareChance": ("rare_chance", float),
    "dreamSystem": ("dream_system", bool),
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_range(key: str, value: Any) -> Tuple[int, int]:
    if isinstance(value, dict):
        value = (value.get("low"), value.get("high"))
    try:
        low, high = value
        return int(low), int(high)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"Preference '{key}' must be a [low, high] pair, got {value!r}") from None


@dataclass
class Preferences:
    """Resolved generator preferences; defaults mirror a fresh generator install."""

    galaxy_density: int = 5
    default_star_count: int = 64
    binary_star_chance: float = 25.0
    starting_system_type: str = RANDOM_STARTING_SYSTEM
    birth_planet_size: int = 200
    birth_planet_unlock: bool = False
    birth_planet_si_ti: bool = False
    no_homeworld_rares: bool = False
    huge_gas_giants: bool = False
    more_likely_gas_giant_moons: bool = False
    moons_are_small: bool = True
    small_gas_giant_moons: bool = False
    tidal_lock_inner_planets: bool = False
    luminosity_boost: bool = False
    luminosity_exponential_boost: bool = False
    realistic_solar_power_levels: bool = False
    star_frequencies: Dict[str, float] = field(default_factory=lambda: DEFAULT_FREQUENCIES.copy())
    planet_count: Tuple[int, int] = (1, 6)
    planet_size: Tuple[int, int] = (200, 400)
    count_bias: int = 50
    size_bias: int = 50
    chance_gas: float = 20.0
    chance_moon: float = 20.0
    rare_chance: float = 50.0
    dream_system: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Preferences":
        prefs = cls()
        for key, (attr, kind) in _SCALAR_KEYS.items():
            if key not in data:
                continue
            value = data[key]
            try:
                setattr(prefs, attr, _as_bool(value) if kind is bool else kind(value))
            except (TypeError, ValueError):
                raise InvalidConfiguration(f"Preference '{key}' has invalid value {value!r}") from None
        for code in CATEGORY_CODES:
            key = f"freq{code}"
            if key in data:
                try:
                    prefs.star_frequencies[code] = float(data[key])
                except (TypeError, ValueError):
                    raise InvalidConfiguration(f"Preference '{key}' has invalid value {data[key]!r}") from None
        if "planetCount" in data:
            prefs.planet_count = _as_range("planetCount", data["planetCount"])
        if "planetSize" in data:
            prefs.planet_size = _as_range("planetSize", data["planetSize"])
        return prefs

    @classmethod
    def load(cls, path: Path) -> "Preferences":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data.get("preferences", data))

    def with_overrides(self, **overrides: Any) -> "Preferences":
        data = self.__dict__.copy()
        data["star_frequencies"] = self.star_frequencies.copy()
        data.update(overrides)
        return Preferences(**data)

    def validate(self) -> None:
        """Fail fast on settings that cannot produce a cluster."""

        weights = self.star_frequencies
        unknown = set(weights) - set(CATEGORY_CODES)
        if unknown:
            raise InvalidConfiguration(f"Unknown star frequency categories: {sorted(unknown)}")
        if any(weight < 0 for weight in weights.values()):
            raise InvalidConfiguration("Star frequency weights must be non-negative")
        if sum(weights.values()) <= 0:
            raise InvalidConfiguration("Star frequency weights sum to zero")
        low, high = self.planet_count
        if low < 0 or low > high:
            raise InvalidConfiguration(f"Invalid planet count range {self.planet_count}")
        low, high = self.planet_size
        if low <= 0 or low > high:
            raise InvalidConfiguration(f"Invalid planet size range {self.planet_size}")
        for name in ("count_bias", "size_bias", "binary_star_chance", "chance_gas", "chance_moon", "rare_chance"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidConfiguration(f"{name} must be within 0..100, got {value}")
        if self.birth_planet_size <= 0:
            raise InvalidConfiguration(f"birth_planet_size must be positive, got {self.birth_planet_size}")
        if self.starting_system_type != RANDOM_STARTING_SYSTEM and self.starting_system_type not in CATEGORY_CODES:
            raise InvalidConfiguration(f"Unknown starting system type '{self.starting_system_type}'")

    def clamp_star_count(self, star_count: int | None) -> int:
        count = self.default_star_count if star_count is None else star_count
        return max(MIN_STAR_COUNT, min(MAX_STAR_COUNT, count))


__all__ = [
    "DEFAULT_FREQUENCIES",
    "MAX_STAR_COUNT",
    "MIN_STAR_COUNT",
    "Preferences",
    "RANDOM_STARTING_SYSTEM",
]
