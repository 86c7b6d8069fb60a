"""
Musical dice: weighted random rolls over notes, intervals, chords, modes
and rhythms drawn from one consistent tonal context.
"""

from .dice import (
    Die,
    DiceConfig,
    DiceFactory,
    DurationPartitioner,
    WeightedPool,
    weighted_choice,
)
from .errors import (
    ConfigurationFormatError,
    DiceError,
    InvalidPoolError,
    InvalidTonicError,
    RetryExhaustedError,
    UnknownRollError,
    UnknownScaleError,
)

__version__ = "0.1.0"

__all__ = [
    "Die",
    "DiceConfig",
    "DiceFactory",
    "DurationPartitioner",
    "WeightedPool",
    "weighted_choice",
    "ConfigurationFormatError",
    "DiceError",
    "InvalidPoolError",
    "InvalidTonicError",
    "RetryExhaustedError",
    "UnknownRollError",
    "UnknownScaleError",
]
