"""Weighted star category selection."""
from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

from starforge.engine.rng import SeededRandom
from starforge.errors import InvalidConfiguration
from starforge.world.star import CATEGORY_CODES, StarKind


class FrequencyTable:
    """Cumulative distribution over the star categories.

    Categories are always cumulated in ``CATEGORY_CODES`` order, whatever the
    order of the incoming mapping, so a given draw maps to the same category
    on every run.
    """

    def __init__(self, weights: Mapping[str, float]) -> None:
        unknown = set(weights) - set(CATEGORY_CODES)
        if unknown:
            raise InvalidConfiguration(f"Unknown star frequency categories: {sorted(unknown)}")
        values = [float(weights.get(code, 0.0)) for code in CATEGORY_CODES]
        if any(value < 0 for value in values):
            raise InvalidConfiguration("Star frequency weights must be non-negative")
        total = sum(values)
        if total <= 0:
            raise InvalidConfiguration("Star frequency weights sum to zero")
        self._probabilities: Dict[str, float] = {
            code: value / total for code, value in zip(CATEGORY_CODES, values)
        }
        self._cumulative: List[Tuple[str, float]] = []
        running = 0.0
        for code in CATEGORY_CODES:
            running += self._probabilities[code]
            self._cumulative.append((code, running))
        self._last_nonzero = [code for code in CATEGORY_CODES if self._probabilities[code] > 0][-1]

    def probabilities(self) -> Dict[str, float]:
        return dict(self._probabilities)

    def cumulative(self) -> List[Tuple[str, float]]:
        return list(self._cumulative)

    def category_for(self, choice: float) -> str:
        for code, threshold in self._cumulative:
            if choice < threshold:
                return code
        # Rounding can leave the final threshold a hair below 1.0.
        return self._last_nonzero

    def draw(self, rng: SeededRandom) -> StarKind:
        return StarKind.from_code(self.category_for(rng.next_double()))


__all__ = ["FrequencyTable"]
