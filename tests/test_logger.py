"""Tests for channel logging."""
from __future__ import annotations

import json
import logging
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from starforge.engine.logger import DEFAULT_CHANNELS, GeneratorLogger, LoggerConfig, quiet_logger


def test_config_defaults_without_settings(tmp_path: Path) -> None:
    config = LoggerConfig.from_settings(tmp_path / "settings.json")
    assert config.level == logging.INFO
    assert config.channels == DEFAULT_CHANNELS


def test_config_reads_level_and_channels(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "debug", "logChannels": {"system": True, "galaxy": False}}))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.DEBUG
    assert config.channels["system"] is True
    assert config.channels["galaxy"] is False
    assert config.channels["home"] is True


def test_invalid_settings_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[oops")
    assert LoggerConfig.from_settings(path).channels == DEFAULT_CHANNELS


def test_only_enabled_channels_emit(caplog) -> None:
    config = LoggerConfig(level=logging.DEBUG, channels={"galaxy": True, "system": False})
    logger = GeneratorLogger(config, configure_root=False)
    with caplog.at_level(logging.DEBUG, logger="starforge"):
        logger.channel("galaxy").info("cluster %d", 1)
        logger.channel("system").info("hidden")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["cluster 1"]
    assert caplog.records[0].name == "starforge.galaxy"


def test_unknown_channels_start_disabled(caplog) -> None:
    logger = GeneratorLogger(LoggerConfig(level=logging.DEBUG), configure_root=False)
    channel = logger.channel("brand_new")
    assert not channel.enabled
    assert logger.channel("brand_new") is channel
    channel.enabled = True
    with caplog.at_level(logging.DEBUG, logger="starforge"):
        channel.warning("now visible")
    assert [record.getMessage() for record in caplog.records] == ["now visible"]
    assert caplog.records[0].name == "starforge.brand_new"


def test_quiet_logger_disables_everything() -> None:
    logger = quiet_logger()
    assert all(not logger.channel(name).enabled for name in DEFAULT_CHANNELS)
