"""Generator logging utilities with channel toggles."""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

DEFAULT_CHANNELS = {
    "galaxy": True,
    "system": False,
    "orbits": False,
    "multistar": True,
    "home": True,
}


@dataclass
class LoggerConfig:
    """Configuration for generator logging."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        if not settings_path.exists():
            return cls(level=logging.INFO, channels=DEFAULT_CHANNELS.copy())
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls(level=logging.INFO, channels=DEFAULT_CHANNELS.copy())
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        channels = DEFAULT_CHANNELS.copy()
        channels.update(data.get("logChannels", {}))
        return cls(level=level, channels=channels)


class ChannelLogger:
    """Forwards records to a ``starforge.<channel>`` logger while the channel is on."""

    def __init__(self, logger: logging.Logger, enabled: bool) -> None:
        self._logger = logger
        self.enabled = enabled

    def _emit(self, level: int, msg: str, args: tuple, kwargs: dict) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.ERROR, msg, args, kwargs)


class GeneratorLogger:
    """Central logging registry for a generator instance."""

    def __init__(self, config: Optional[LoggerConfig] = None, *, configure_root: bool = True) -> None:
        config = config or LoggerConfig()
        if configure_root:
            logging.basicConfig(
                level=config.level,
                format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                stream=sys.stderr,
            )
        self._root = logging.getLogger("starforge")
        self._root.setLevel(config.level)
        self._switches = {name: bool(enabled) for name, enabled in config.channels.items()}
        self._channels: Dict[str, ChannelLogger] = {}

    def channel(self, name: str) -> ChannelLogger:
        """Channel logger for ``name``; channels missing from the settings stay off."""

        if name not in self._channels:
            logger = self._root.getChild(name)
            self._channels[name] = ChannelLogger(logger, self._switches.get(name, False))
        return self._channels[name]


def quiet_logger() -> GeneratorLogger:
    """Logger with every channel disabled and the root handler left alone."""

    channels = {name: False for name in DEFAULT_CHANNELS}
    return GeneratorLogger(LoggerConfig(level=logging.CRITICAL, channels=channels), configure_root=False)


def init_logger(settings_path: Optional[Path] = None) -> GeneratorLogger:
    """Initialise a logger from settings.json."""

    settings_path = settings_path or Path("settings.json")
    config = LoggerConfig.from_settings(settings_path)
    return GeneratorLogger(config)


__all__ = [
    "DEFAULT_CHANNELS",
    "GeneratorLogger",
    "LoggerConfig",
    "ChannelLogger",
    "init_logger",
    "quiet_logger",
]
