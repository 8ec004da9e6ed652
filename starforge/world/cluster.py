"""Generated cluster container and birth selection."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from starforge.world.body import CelestialBody
from starforge.world.star import Star


@dataclass(frozen=True)
class GalaxyParams:
    min_distance: float = 2.3
    min_step_length: float = 2.0
    max_step_length: float = 3.5
    graph_distance: int = 32
    graph_max_stars: int = 512


@dataclass(frozen=True)
class PlanetBirth:
    """Birth body is the planet at ``index`` of ``star``."""

    star: Star
    index: int

    @property
    def body(self) -> CelestialBody:
        return self.star.planets[self.index]

    @property
    def host(self) -> Optional[CelestialBody]:
        return None

    @property
    def is_moon(self) -> bool:
        return False


@dataclass(frozen=True)
class MoonBirth:
    """Birth body is moon ``index`` of ``host``, a planet of ``star``."""

    star: Star
    host: CelestialBody
    index: int

    @property
    def body(self) -> CelestialBody:
        return self.host.moons[self.index]

    @property
    def is_moon(self) -> bool:
        return True


BirthSelection = Union[PlanetBirth, MoonBirth]


def locate_birth(star: Star, body: CelestialBody) -> Optional[BirthSelection]:
    for planet_index, planet in enumerate(star.planets):
        if planet is body:
            return PlanetBirth(star, planet_index)
        for moon_index, moon in enumerate(planet.moons):
            if moon is body:
                return MoonBirth(star, planet, moon_index)
    return None


@dataclass(eq=False)
class Cluster:
    seed: int
    stars: List[Star] = field(default_factory=list)
    galaxy_params: GalaxyParams = field(default_factory=GalaxyParams)
    birth: Optional[BirthSelection] = None

    @property
    def home_star(self) -> Optional[Star]:
        return self.birth.star if self.birth else None

    @property
    def birth_planet_name(self) -> Optional[str]:
        return self.birth.body.name if self.birth else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "galaxy_params": {
                "min_distance": self.galaxy_params.min_distance,
                "min_step_length": self.galaxy_params.min_step_length,
                "max_step_length": self.galaxy_params.max_step_length,
                "graph_distance": self.galaxy_params.graph_distance,
                "graph_max_stars": self.galaxy_params.graph_max_stars,
            },
            "birth_planet_name": self.birth_planet_name,
            "birth_star_name": self.home_star.name if self.home_star else None,
            "stars": [_star_to_dict(star) for star in self.stars],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def _star_to_dict(star: Star) -> Dict[str, Any]:
    return {
        "id": star.id,
        "name": star.name,
        "category": star.kind.code,
        "type": star.kind.star_type.value,
        "spectral": star.kind.spectral.value,
        "radius": star.radius,
        "luminosity": star.luminosity,
        "mass": star.mass,
        "age": star.age,
        "lifetime": star.lifetime,
        "temperature": star.temperature,
        "color": star.color,
        "dyson_radius": star.dyson_radius,
        "solar_power": star.solar_power,
        "position": [star.position.x, star.position.y, star.position.z],
        "decorative": star.decorative,
        "companions": [_star_to_dict(companion) for companion in star.companions],
        "planets": [_body_to_dict(planet) for planet in star.planets],
    }


def _body_to_dict(body: CelestialBody) -> Dict[str, Any]:
    return {
        "name": body.name,
        "radius": body.radius,
        "scale": body.scale,
        "theme": body.theme,
        "orbit_radius": body.orbit_radius,
        "orbital_period": body.orbital_period,
        "rotation_period": body.rotation_period,
        "rotation_phase": body.rotation_phase,
        "orbit_phase": body.orbit_phase,
        "orbit_inclination": body.orbit_inclination,
        "obliquity": body.obliquity,
        "veins": [{"mineral": vein.mineral, "tier": vein.tier.value} for vein in body.veins],
        "moons": [_body_to_dict(moon) for moon in body.moons],
    }


__all__ = [
    "BirthSelection",
    "Cluster",
    "GalaxyParams",
    "MoonBirth",
    "PlanetBirth",
    "locate_birth",
]
