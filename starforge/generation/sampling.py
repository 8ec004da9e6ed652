"""Clamped, biased normal sampling for counts and sizes."""
from __future__ import annotations

from starforge.engine.rng import SeededRandom
from starforge.errors import InvalidConfiguration
from starforge.math.orbits import SIZE_STEP, snap_size


def _check(minimum: int, maximum: int, bias: float) -> None:
    if minimum > maximum:
        raise InvalidConfiguration(f"Range minimum {minimum} exceeds maximum {maximum}")
    if not 0 <= bias <= 100:
        raise InvalidConfiguration(f"Bias must be within 0..100, got {bias}")


def _biased_deviate(rng: SeededRandom, minimum: int, maximum: int, bias: float) -> float:
    mean = minimum + bias / 100.0 * (maximum - minimum)
    sd_low = (mean - minimum) / 3.0
    sd_high = (maximum - mean) / 3.0
    z = rng.normal(0.0, 1.0)
    return mean + z * (sd_low if z < 0 else sd_high)


def sample_biased(rng: SeededRandom, minimum: int, maximum: int, bias: float) -> int:
    """Normal draw centred at ``bias`` percent of [minimum, maximum], clamped to it."""

    _check(minimum, maximum, bias)
    if minimum == maximum:
        return minimum
    value = int(round(_biased_deviate(rng, minimum, maximum, bias)))
    return max(minimum, min(maximum, value))


def sample_biased_size(rng: SeededRandom, minimum: int, maximum: int, bias: float, step: int = SIZE_STEP) -> int:
    """Like :func:`sample_biased` but snapped to the size step before clamping."""

    _check(minimum, maximum, bias)
    if minimum == maximum:
        return minimum
    value = snap_size(_biased_deviate(rng, minimum, maximum, bias), step)
    return max(minimum, min(maximum, value))


__all__ = ["sample_biased", "sample_biased_size"]
