#!/usr/bin/env python3
"""
Tests for weighted pools and dice handles.

Statistical checks use seeded generators so results are reproducible.
"""

import sys
import pathlib
from collections import Counter

import numpy as np
import pytest

# Add src to path
project_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from music_dice.dice import Die, WeightedPool, weighted_choice
from music_dice.errors import InvalidPoolError
from music_dice.theory import FLAT_NAMES


def test_uniform_pool_coverage():
    """Drawing many times from a uniform pool yields every value."""
    pool = WeightedPool(FLAT_NAMES, rng=np.random.default_rng(0))
    counts = Counter(pool.draw_one() for _ in range(2000))

    assert set(counts) == set(FLAT_NAMES)
    # Expected ~167 each
    assert min(counts.values()) > 100, counts

    print(f"  [OK] coverage: {dict(counts)}")


def test_weighted_bias():
    """Weights [2, 2, 1, 1, 1] make the first two values twice as likely."""
    triads = ["major", "minor", "diminished", "augmented", "custom"]
    pool = WeightedPool(triads, [2, 2, 1, 1, 1], rng=np.random.default_rng(1))
    counts = Counter(pool.draw_one() for _ in range(10000))

    for common in ["major", "minor"]:
        for rare in ["diminished", "augmented", "custom"]:
            ratio = counts[common] / counts[rare]
            assert 1.6 < ratio < 2.5, f"{common}/{rare} = {ratio:.2f}"

    print(f"  [OK] bias: {dict(counts)}")


def test_single_value_pool():
    pool = WeightedPool(["qn"])
    assert all(pool.draw_one() == "qn" for _ in range(20))
    assert len(pool) == 1


def test_invalid_pools():
    with pytest.raises(InvalidPoolError):
        WeightedPool([])
    with pytest.raises(InvalidPoolError):
        WeightedPool(["a", "b"], [1])
    with pytest.raises(InvalidPoolError):
        WeightedPool(["a", "b"], [1, 0])
    with pytest.raises(InvalidPoolError):
        WeightedPool(["a", "b"], [1, -2])
    with pytest.raises(InvalidPoolError):
        WeightedPool(["a"], [float("nan")])
    with pytest.raises(ValueError):
        WeightedPool(["a"], ["heavy"])

    print("  [OK] invalid pools rejected")


def test_seeded_draws_repeat():
    values = list(range(10))
    first = WeightedPool(values, rng=np.random.default_rng(42))
    second = WeightedPool(values, rng=np.random.default_rng(42))

    assert [first.draw_one() for _ in range(50)] == [second.draw_one() for _ in range(50)]


def test_draws_keep_value_types():
    """Values come back as the objects they were given, not numpy scalars."""
    pool = WeightedPool([3, 4], rng=np.random.default_rng(3))
    value = pool.draw_one()
    assert value in (3, 4)
    assert type(value) is int
    assert pool.values == (3, 4)
    assert pool.weights == (1.0, 1.0)


def test_die_and_weighted_choice():
    pool = WeightedPool(["P", "R", "L"], rng=np.random.default_rng(5))
    die = Die(pool.draw_one, name="tonnetz3")

    rolls = die.rolls(30)
    assert len(rolls) == 30
    assert set(rolls) <= {"P", "R", "L"}
    assert die.roll() in {"P", "R", "L"}
    assert "tonnetz3" in repr(die)

    assert weighted_choice(["x", "y"], [1, 3], rng=np.random.default_rng(0)) in {"x", "y"}
    with pytest.raises(InvalidPoolError):
        weighted_choice([])

    print("  [OK] die and weighted_choice")


def main():
    """Run all tests."""
    print("=" * 60)
    print("Music Dice - Weighted Pool Tests")
    print("=" * 60)

    test_uniform_pool_coverage()
    test_weighted_bias()
    test_single_value_pool()
    test_invalid_pools()
    test_seeded_draws_repeat()
    test_draws_keep_value_types()
    test_die_and_weighted_choice()

    print("\nAll tests passed!")


if __name__ == "__main__":
    main()
