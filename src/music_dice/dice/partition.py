"""Partition a beat budget into a random rhythmic phrase.

A phrase ("motif") is built by drawing duration symbols uniformly from a pool
and keeping each draw that still fits in the remaining budget, until the
budget is used up exactly.
"""

import logging
from fractions import Fraction
from typing import Collection, List, Optional, Sequence, Union

import numpy as np

from ..errors import InvalidPoolError, RetryExhaustedError
from ..theory.durations import DEFAULT_DURATION_POOL, duration_value
from .pool import WeightedPool

logger = logging.getLogger(__name__)


class DurationPartitioner:
    """Random partitions of a fixed number of beats into note durations.

    Args:
        beats: Total length of a phrase in quarter-note beats
        pool: Duration symbols to build phrases from
        rng: Numpy random generator shared with the caller
        max_attempts: Cap on restarted or discarded phrases per call, and on
            rejected draws while filling one phrase
    """

    def __init__(
        self,
        beats: Union[int, Fraction] = 4,
        pool: Sequence[str] = DEFAULT_DURATION_POOL,
        rng: Optional[np.random.Generator] = None,
        max_attempts: int = 10000,
    ):
        self.beats = Fraction(beats)
        if self.beats <= 0:
            raise ValueError(f"beats must be positive, got {beats}")
        self.pool = tuple(pool)
        self.values = {symbol: duration_value(symbol) for symbol in self.pool}
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def motif(self) -> List[str]:
        """
        Draw one phrase whose durations sum exactly to the beat budget.

        A draw longer than the remaining budget is redrawn. When the
        remaining budget is smaller than every duration in the pool (for
        example a 1/128 beat left over with the "all" pool), the partial
        phrase is thrown away and the phrase starts again from the full
        budget.

        Returns:
            Ordered duration symbols

        Raises:
            InvalidPoolError: If the pool is empty
            RetryExhaustedError: If no duration fits the budget at all, or
                no phrase is completed within max_attempts restarts
        """
        draws = self._draws()
        for attempt in range(1, self.max_attempts + 1):
            motif = self._fill(draws)
            if motif is not None:
                logger.debug(f"Motif {motif} after {attempt} attempts")
                return motif

        logger.warning(f"Gave up after {self.max_attempts} restarted motifs")
        raise RetryExhaustedError(
            f"No motif of {self.beats} beats from {list(self.pool)} "
            f"after {self.max_attempts} attempts"
        )

    def constrained_motif(self, lengths: Collection[int]) -> List[str]:
        """
        Draw phrases until one has an allowed number of durations.

        Dead-ended phrases and phrases of the wrong length both count as one
        discarded attempt.

        Args:
            lengths: Allowed element counts (e.g. {3, 4, 5})

        Returns:
            Ordered duration symbols with len(result) in lengths

        Raises:
            InvalidPoolError: If lengths is empty
            RetryExhaustedError: If no qualifying motif is drawn within
                max_attempts tries
        """
        allowed = set(lengths)
        if not allowed:
            raise InvalidPoolError("No allowed phrase lengths given")

        draws = self._draws()
        for attempt in range(1, self.max_attempts + 1):
            motif = self._fill(draws)
            if motif is not None and len(motif) in allowed:
                logger.debug(f"Constrained motif accepted after {attempt} attempts")
                return motif

        logger.warning(f"No motif with a length in {sorted(allowed)} after {self.max_attempts} attempts")
        raise RetryExhaustedError(
            f"No motif of {self.beats} beats with a length in {sorted(allowed)} "
            f"after {self.max_attempts} attempts"
        )

    def _draws(self) -> WeightedPool:
        draws = WeightedPool(self.pool, rng=self.rng)
        if not self._fits(self.beats):
            raise RetryExhaustedError(
                f"No duration in {list(self.pool)} fits in {self.beats} beats"
            )
        return draws

    def _fits(self, remaining: Fraction) -> bool:
        return any(value <= remaining for value in self.values.values())

    def _fill(self, draws: WeightedPool) -> Optional[List[str]]:
        """Fill the budget once. Returns None on a dead end."""
        remaining = self.beats
        motif: List[str] = []
        rejected = 0

        while remaining > 0:
            if not self._fits(remaining):
                logger.debug(f"Dead end at {remaining} beats left after {motif}")
                return None

            symbol = draws.draw_one()
            value = self.values[symbol]
            if value > remaining:
                rejected += 1
                if rejected >= self.max_attempts:
                    return None
                continue

            motif.append(symbol)
            remaining -= value

        return motif
