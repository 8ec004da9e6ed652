"""Tests for weighted star category selection."""
from __future__ import annotations

from math import isclose
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from starforge.config.preferences import DEFAULT_FREQUENCIES
from starforge.engine.rng import SeededRandom
from starforge.errors import InvalidConfiguration
from starforge.generation.frequency import FrequencyTable
from starforge.world.star import BLACK_HOLE, CATEGORY_CODES, KINDS_BY_CODE


def test_probabilities_are_normalised() -> None:
    table = FrequencyTable(DEFAULT_FREQUENCIES)
    probabilities = table.probabilities()
    assert isclose(sum(probabilities.values()), 1.0)
    assert isclose(probabilities["M"], 50 / sum(DEFAULT_FREQUENCIES.values()))


def test_cumulative_follows_canonical_order() -> None:
    shuffled = dict(reversed(list(DEFAULT_FREQUENCIES.items())))
    table = FrequencyTable(shuffled)
    cumulative = table.cumulative()
    assert [code for code, _ in cumulative] == list(CATEGORY_CODES)
    thresholds = [threshold for _, threshold in cumulative]
    assert thresholds == sorted(thresholds)
    assert isclose(thresholds[-1], 1.0)


def test_zero_weight_category_is_never_selected() -> None:
    table = FrequencyTable({"K": 0, "M": 1})
    assert table.category_for(0.0) == "M"
    assert table.category_for(0.5) == "M"


def test_rounding_falls_back_to_last_nonzero_category() -> None:
    table = FrequencyTable({"K": 1, "M": 1})
    assert table.category_for(1.0) == "M"


def test_single_category_always_drawn() -> None:
    table = FrequencyTable({"BH": 3})
    rng = SeededRandom(5)
    assert all(table.draw(rng) == BLACK_HOLE for _ in range(50))


def test_draw_distribution_tracks_weights() -> None:
    table = FrequencyTable({"G": 9, "O": 1})
    rng = SeededRandom(21)
    draws = [table.draw(rng) for _ in range(2000)]
    share = draws.count(KINDS_BY_CODE["G"]) / len(draws)
    assert 0.85 < share < 0.95


@pytest.mark.parametrize(
    "weights",
    [
        {code: 0 for code in CATEGORY_CODES},
        {"K": -1, "M": 5},
        {"Q": 1},
    ],
)
def test_invalid_weights_raise(weights) -> None:
    with pytest.raises(InvalidConfiguration):
        FrequencyTable(weights)
