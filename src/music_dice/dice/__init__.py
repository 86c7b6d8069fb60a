"""Weighted dice over musical pools."""

from .pool import Die, WeightedPool, weighted_choice
from .partition import DurationPartitioner
from .config import REMOVE_CHORD_POLICIES, DiceConfig
from .factory import ROLL_CATEGORIES, DiceFactory, register_roll

__all__ = [
    # Pools
    "Die",
    "WeightedPool",
    "weighted_choice",
    # Rhythm
    "DurationPartitioner",
    # Configuration
    "REMOVE_CHORD_POLICIES",
    "DiceConfig",
    # Factory
    "ROLL_CATEGORIES",
    "DiceFactory",
    "register_roll",
]
