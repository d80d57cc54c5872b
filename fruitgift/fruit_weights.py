"""Luck-dependent drop weights for sampling fruits."""

from __future__ import annotations

import bisect
import itertools
import math
import random
import sys
from typing import Iterable, Sequence

from fruitgift.fruit import Category, Fruit


def raw_weights(fruits: Sequence[Fruit], luck: float) -> list[float]:
    """Per-fruit drop weights for effective luck ``luck`` in ``[0.0, 2.0]``.

    With ``tier(r) = 1 + 2r``: Standard ``tier * 10 / (1 + 2l)``, Rare
    ``tier * (1 + l/2)``, Exotic ``tier * 0.125 * (1 + l)**2``. Every weight
    is floored at machine epsilon so no fruit is ever excluded.
    """
    weights = []
    for fruit in fruits:
        tier = 1.0 + 2.0 * fruit.rarity()
        if fruit.category is Category.STANDARD:
            weight = tier * 10.0 / (1.0 + 2.0 * luck)
        elif fruit.category is Category.RARE:
            weight = tier * (1.0 + luck / 2.0)
        else:
            weight = tier * 0.125 * (1.0 + luck) ** 2
        weights.append(max(weight, sys.float_info.epsilon))
    return weights


class WeightedIndex:
    """A distribution over indices ``0..n-1`` proportional to the given weights."""

    def __init__(self, weights: Iterable[float]) -> None:
        values = [float(w) for w in weights]
        if not values:
            raise ValueError("no weights given")
        if any(not math.isfinite(w) or w < 0.0 for w in values):
            raise ValueError("weights must be finite and non-negative")
        cumulative = list(itertools.accumulate(values))
        if cumulative[-1] <= 0.0:
            raise ValueError("all weights are zero")
        self._weights = tuple(values)
        self._cumulative = cumulative
        self._last_positive = max(i for i, w in enumerate(values) if w > 0.0)

    @property
    def weights(self) -> tuple[float, ...]:
        """The weights this distribution was built from."""
        return self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def sample(self, rng: random.Random) -> int:
        """Draw an index using ``rng``."""
        target = rng.random() * self._cumulative[-1]
        index = bisect.bisect_right(self._cumulative, target)
        return min(index, self._last_positive)


class FruitWeights:
    """Strategy for weighting fruits by luck; override to customise drop rates."""

    def fruit_weights(self, fruits: Sequence[Fruit], luck: float) -> WeightedIndex:
        """Distribution over ``fruits`` for total effective luck ``luck``.

        Raises ``ValueError`` if ``fruits`` is empty.
        """
        return WeightedIndex(raw_weights(fruits, luck))


class DefaultFruitWeights(FruitWeights):
    """The standard drop-rate formula."""