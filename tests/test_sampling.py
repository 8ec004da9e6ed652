"""Tests for the biased clamped samplers."""
from __future__ import annotations

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from starforge.engine.rng import SeededRandom
from starforge.errors import InvalidConfiguration
from starforge.generation.sampling import sample_biased, sample_biased_size


@pytest.mark.parametrize("bias", [0, 25, 50, 75, 100])
def test_samples_stay_in_range(bias: int) -> None:
    rng = SeededRandom(bias + 1)
    for _ in range(300):
        assert 1 <= sample_biased(rng, 1, 6, bias) <= 6


def test_bias_moves_the_centre() -> None:
    rng = SeededRandom(17)
    low = [sample_biased(rng, 0, 100, 0) for _ in range(500)]
    high = [sample_biased(rng, 0, 100, 100) for _ in range(500)]
    assert sum(low) / len(low) < sum(high) / len(high)


def test_equal_bounds_consume_no_draw() -> None:
    rng = SeededRandom(4)
    state = rng.getstate()
    assert sample_biased(rng, 3, 3, 50) == 3
    assert sample_biased_size(rng, 200, 200, 50) == 200
    assert rng.getstate() == state


def test_size_samples_snap_to_step() -> None:
    rng = SeededRandom(8)
    for _ in range(300):
        size = sample_biased_size(rng, 200, 400, 50)
        assert 200 <= size <= 400
        assert size % 10 == 0


def test_inverted_range_fails_fast() -> None:
    with pytest.raises(InvalidConfiguration):
        sample_biased(SeededRandom(1), 6, 1, 50)
    with pytest.raises(InvalidConfiguration):
        sample_biased_size(SeededRandom(1), 400, 200, 50)


def test_bias_outside_percent_range_fails() -> None:
    with pytest.raises(InvalidConfiguration):
        sample_biased(SeededRandom(1), 1, 6, 101)
