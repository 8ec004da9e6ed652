"""State shared by the steps of one generation run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from starforge.config.preferences import Preferences
from starforge.engine.logger import ChannelLogger, GeneratorLogger
from starforge.engine.rng import SeededRandom
from starforge.world.cluster import BirthSelection, Cluster
from starforge.world.names import StarNamer
from starforge.world.themes import ThemeLibrary


@dataclass
class GenerationContext:
    """Everything one run owns: never shared between runs."""

    rng: SeededRandom
    preferences: Preferences
    cluster: Cluster
    logger: GeneratorLogger
    themes: ThemeLibrary = field(default_factory=ThemeLibrary.default)
    namer: Optional[StarNamer] = None
    birth: Optional[BirthSelection] = None

    def __post_init__(self) -> None:
        if self.namer is None:
            self.namer = StarNamer(self.rng)

    def channel(self, name: str) -> ChannelLogger:
        return self.logger.channel(name)

    @property
    def rare_chance(self) -> float:
        return self.preferences.rare_chance / 100.0


__all__ = ["GenerationContext"]
