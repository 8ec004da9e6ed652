"""Tests for preference loading and validation."""
from __future__ import annotations

import json
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from starforge.config.preferences import DEFAULT_FREQUENCIES, MAX_STAR_COUNT, MIN_STAR_COUNT, Preferences
from starforge.errors import InvalidConfiguration


def test_defaults() -> None:
    prefs = Preferences()
    assert prefs.galaxy_density == 5
    assert prefs.default_star_count == 64
    assert prefs.binary_star_chance == 25.0
    assert prefs.starting_system_type == "Random"
    assert prefs.planet_count == (1, 6)
    assert prefs.planet_size == (200, 400)
    assert prefs.star_frequencies == DEFAULT_FREQUENCIES
    prefs.validate()


def test_from_dict_reads_camel_case_keys() -> None:
    prefs = Preferences.from_dict(
        {
            "galaxyDensity": 7,
            "binaryStarChance": 40,
            "startingSystemType": "G",
            "birthPlanetSiTi": "true",
            "hugeGasGiants": 1,
            "freqBH": 12,
            "planetCount": [2, 4],
            "planetSize": {"low": 100, "high": 300},
            "chanceMoon": "35",
            "someOtherKey": "ignored",
        }
    )
    assert prefs.galaxy_density == 7
    assert prefs.binary_star_chance == 40.0
    assert prefs.starting_system_type == "G"
    assert prefs.birth_planet_si_ti is True
    assert prefs.huge_gas_giants is True
    assert prefs.star_frequencies["BH"] == 12.0
    assert prefs.star_frequencies["M"] == DEFAULT_FREQUENCIES["M"]
    assert prefs.planet_count == (2, 4)
    assert prefs.planet_size == (100, 300)
    assert prefs.chance_moon == 35.0


def test_from_dict_rejects_garbage_values() -> None:
    with pytest.raises(InvalidConfiguration):
        Preferences.from_dict({"galaxyDensity": "dense"})
    with pytest.raises(InvalidConfiguration):
        Preferences.from_dict({"planetCount": 3})
    with pytest.raises(InvalidConfiguration):
        Preferences.from_dict({"freqK": "lots"})


def test_load_falls_back_to_defaults(tmp_path: Path) -> None:
    assert Preferences.load(tmp_path / "missing.json") == Preferences()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert Preferences.load(broken) == Preferences()


def test_load_reads_preferences_section(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"seed": 3, "preferences": {"rareChance": 0, "dreamSystem": True}}))
    prefs = Preferences.load(path)
    assert prefs.rare_chance == 0.0
    assert prefs.dream_system is True


def test_with_overrides_copies_frequencies() -> None:
    base = Preferences()
    changed = base.with_overrides(chance_gas=50.0)
    changed.star_frequencies["K"] = 0.0
    assert base.star_frequencies["K"] == DEFAULT_FREQUENCIES["K"]
    assert changed.chance_gas == 50.0
    assert base.chance_gas == 20.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"planet_count": (6, 1)},
        {"planet_size": (400, 200)},
        {"planet_size": (0, 200)},
        {"count_bias": 150},
        {"chance_moon": -5.0},
        {"binary_star_chance": 101.0},
        {"starting_system_type": "Q"},
        {"birth_planet_size": 0},
        {"star_frequencies": {code: 0.0 for code in DEFAULT_FREQUENCIES}},
        {"star_frequencies": {"K": -1.0}},
        {"star_frequencies": {"Z": 1.0}},
    ],
)
def test_validate_rejects(overrides) -> None:
    with pytest.raises(InvalidConfiguration):
        Preferences().with_overrides(**overrides).validate()


def test_clamp_star_count() -> None:
    prefs = Preferences()
    assert prefs.clamp_star_count(None) == 64
    assert prefs.clamp_star_count(1) == MIN_STAR_COUNT
    assert prefs.clamp_star_count(1000) == MAX_STAR_COUNT
    assert prefs.clamp_star_count(40) == 40
