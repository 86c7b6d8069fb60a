"""
Weighted pools and dice handles.

A WeightedPool is an immutable distribution over a fixed sequence of values;
a Die wraps a roll function so callers can draw from a pool (or a composite
of pools) without knowing how it is built.
"""

from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from ..errors import InvalidPoolError


class WeightedPool:
    """
    Sampling-with-replacement distribution over a sequence of values.

    Each draw is an independent trial that returns value i with probability
    weights[i] / sum(weights). Weights default to uniform.

    Args:
        values: Non-empty sequence of values to draw from
        weights: Strictly positive weights, one per value (optional)
        rng: Numpy random generator (a fresh unseeded one if omitted)

    Raises:
        InvalidPoolError: If the pool is empty, the lengths differ, or any
            weight is not a positive finite number
    """

    def __init__(
        self,
        values: Sequence[Any],
        weights: Optional[Sequence[float]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self._values = tuple(values)
        if not self._values:
            raise InvalidPoolError("pool cannot be empty")

        if weights is None:
            weights = [1] * len(self._values)
        if len(weights) != len(self._values):
            raise InvalidPoolError(
                f"Got {len(weights)} weights for {len(self._values)} values"
            )

        try:
            weight_array = np.asarray(weights, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidPoolError(f"Weights must be numbers, got {list(weights)}") from e
        if not np.all(np.isfinite(weight_array)) or np.any(weight_array <= 0):
            raise InvalidPoolError(f"All weights must be positive, got {list(weights)}")

        self._weights = tuple(float(w) for w in weight_array)
        self._probabilities = weight_array / weight_array.sum()
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def weights(self) -> tuple:
        return self._weights

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"WeightedPool(values={list(self._values)}, weights={list(self._weights)})"

    def draw_one(self) -> Any:
        """Draw a single value."""
        index = self._rng.choice(len(self._values), p=self._probabilities)
        return self._values[int(index)]


class Die:
    """Drawable handle over a roll function."""

    def __init__(self, roll_fn: Callable[[], Any], name: str = ""):
        self._roll_fn = roll_fn
        self.name = name

    def roll(self) -> Any:
        """Roll the die once."""
        return self._roll_fn()

    def rolls(self, count: int) -> List[Any]:
        """Roll the die ``count`` times."""
        return [self._roll_fn() for _ in range(count)]

    def __repr__(self) -> str:
        return f"Die({self.name!r})"


def weighted_choice(
    values: Sequence[Any],
    weights: Optional[Sequence[float]] = None,
    rng: Optional[np.random.Generator] = None,
) -> Any:
    """
    Select one value, weighted by its relative weight.

    Weights do not need to sum to 1.0; they are normalized internally.

    Args:
        values: Values to choose from
        weights: Relative weights, one per value (uniform if omitted)
        rng: Optional numpy random generator for reproducibility

    Returns:
        Selected value

    Raises:
        InvalidPoolError: If values is empty or a weight is not positive
    """
    return WeightedPool(values, weights, rng).draw_one()
