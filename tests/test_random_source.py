"""
Tests for RandomSource
"""
import statistics

import pytest

from city_buildings.errors import InvalidArgument
from city_buildings.utils.random_source import RandomSource


class TestRandomSource:
    """Tests for the seeded random stream"""

    def test_same_seed_same_stream(self):
        """Two sources with one seed draw identical values"""
        a = RandomSource(3)
        b = RandomSource(3)
        assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]

    def test_uniform_range(self, rng):
        """uniform() stays inside [min, max)"""
        values = [rng.uniform(2.0, 5.0) for _ in range(1000)]
        assert all(2.0 <= v < 5.0 for v in values)

    def test_gaussian_moments(self, rng):
        """gaussian() matches its mean and deviation on a large sample"""
        values = [rng.gaussian(10.0, 2.0) for _ in range(20000)]
        assert statistics.fmean(values) == pytest.approx(10.0, abs=0.1)
        assert statistics.pstdev(values) == pytest.approx(2.0, abs=0.1)

    def test_bernoulli_edges(self, rng):
        """p = 0 never fires, p = 1 always does"""
        assert not any(rng.bernoulli(0.0) for _ in range(100))
        assert all(rng.bernoulli(1.0) for _ in range(100))

    @pytest.mark.parametrize("p", [-0.1, 1.1])
    def test_bernoulli_invalid(self, rng, p):
        """Probabilities outside [0, 1] are rejected"""
        with pytest.raises(InvalidArgument):
            rng.bernoulli(p)

    def test_randint_inclusive(self, rng):
        """Both ends of the integer range are reachable"""
        values = {rng.randint(3, 4) for _ in range(200)}
        assert values == {3, 4}

    def test_choice_empty(self, rng):
        """Choosing from nothing is an error"""
        with pytest.raises(InvalidArgument):
            rng.choice([])

    def test_weighted_choice_skips_zero_weight(self, rng):
        """Zero-weight items are never picked"""
        picks = {rng.weighted_choice(["a", "b", "c"], [1, 0, 3]) for _ in range(500)}
        assert picks == {"a", "c"}

    def test_weighted_choice_frequencies(self, rng):
        """Picks follow the weights"""
        picks = [rng.weighted_choice(["a", "b"], [80, 20]) for _ in range(10000)]
        assert picks.count("a") / len(picks) == pytest.approx(0.8, abs=0.03)

    @pytest.mark.parametrize("items,weights", [
        (["a", "b"], [1]),
        ([], []),
        (["a", "b"], [1, -1]),
        (["a", "b"], [0, 0]),
    ])
    def test_weighted_choice_invalid(self, rng, items, weights):
        """Mismatched, empty, negative and all-zero weights are rejected"""
        with pytest.raises(InvalidArgument):
            rng.weighted_choice(items, weights)

    def test_random_color(self, rng):
        """Colors have three components in [0, 1)"""
        color = rng.random_color()
        assert len(color) == 3
        assert all(0.0 <= c < 1.0 for c in color)

    def test_spawn_ignores_parent_state(self):
        """Children depend on seed and index only"""
        parent = RandomSource(5)
        first = parent.spawn(2).random()
        for _ in range(50):
            parent.random()
        assert parent.spawn(2).random() == first
        assert parent.spawn(3).random() != first
