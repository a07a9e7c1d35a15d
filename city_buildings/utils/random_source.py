"""
Random source for City Buildings Generator.

RandomSource is the capability object handed to every stochastic
operation (window selection, random building parameters). Each instance
owns its own random.Random stream, so buildings generated on different
threads never share state.
"""

from typing import Optional, Sequence, Tuple, TypeVar
import math
import random

from ..errors import InvalidArgument

T = TypeVar('T')


class RandomSource:
    """
    Seeded random stream.

    Args:
        seed: Any int or str seed; None seeds from system entropy
    """

    def __init__(self, seed: Optional[object] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        """Uniform value in [0, 1)."""
        return self._rng.random()

    def uniform(self, min_value: float, max_value: float) -> float:
        """Uniform value in [min_value, max_value)."""
        return self._rng.random() * (max_value - min_value) + min_value

    def gaussian(self, mu: float, sigma: float) -> float:
        """
        Normally distributed value using the Box-Muller transform.

        Args:
            mu: Mean
            sigma: Standard deviation

        Returns:
            Sample from N(mu, sigma^2)
        """
        u1 = 1.0 - self._rng.random()  # (0, 1], keeps log() finite
        u2 = self._rng.random()
        x = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return x * sigma + mu

    def bernoulli(self, p: float) -> bool:
        """
        Return True with probability p.

        Raises:
            InvalidArgument: If p is outside [0, 1]
        """
        if p < 0.0 or p > 1.0:
            raise InvalidArgument(f"Invalid probability value: {p}")
        return self._rng.random() < p

    def randint(self, a: int, b: int) -> int:
        """Random integer in [a, b], both ends included."""
        return self._rng.randint(a, b)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise InvalidArgument("Must pick from at least one element")
        return items[self._rng.randrange(len(items))]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """
        Pick items[i] with probability weights[i] / sum(weights).

        Raises:
            InvalidArgument: On length mismatch, empty input, negative
                weights or a non-positive total
        """
        if len(items) != len(weights):
            raise InvalidArgument("items and weights must have equal size")
        if not items:
            raise InvalidArgument("Must pick from at least one element")
        if any(w < 0 for w in weights):
            raise InvalidArgument(f"Weights must be non-negative, got {list(weights)}")

        total = sum(weights)
        if total <= 0:
            raise InvalidArgument(f"Weights must have a positive total, got {total}")

        r = self._rng.random() * total
        for item, weight in zip(items, weights):
            if r < weight:
                return item
            r -= weight

        # Rounding left r just above the last bucket
        for item, weight in zip(reversed(items), reversed(weights)):
            if weight > 0:
                return item
        return items[-1]

    def random_color(self) -> Tuple[float, float, float]:
        """Random RGB color with components in [0, 1)."""
        return (self._rng.random(), self._rng.random(), self._rng.random())

    def spawn(self, index: int) -> 'RandomSource':
        """
        Independent child stream derived from this source's seed and index.

        The child depends only on (seed, index), never on how much of the
        parent stream has been consumed.
        """
        return RandomSource(f"{self.seed}:{index}")

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
