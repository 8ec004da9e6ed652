"""Deterministic star cluster generator."""
from __future__ import annotations

from starforge.config.preferences import Preferences
from starforge.engine.logger import GeneratorLogger, LoggerConfig, init_logger, quiet_logger
from starforge.errors import GenerationError, InvalidConfiguration, StructuralInvariantViolation
from starforge.generation.generator import ClusterGenerator
from starforge.world.body import CelestialBody
from starforge.world.cluster import BirthSelection, Cluster, GalaxyParams, MoonBirth, PlanetBirth
from starforge.world.star import Star, StarKind

__all__ = [
    "BirthSelection",
    "CelestialBody",
    "Cluster",
    "ClusterGenerator",
    "GalaxyParams",
    "GenerationError",
    "GeneratorLogger",
    "InvalidConfiguration",
    "LoggerConfig",
    "MoonBirth",
    "PlanetBirth",
    "Preferences",
    "Star",
    "StarKind",
    "StructuralInvariantViolation",
    "init_logger",
    "quiet_logger",
]
