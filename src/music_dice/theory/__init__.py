"""Music theory tables consumed by the dice engine."""

from .scales import (
    SCALES,
    FLAT_NAMES,
    SHARP_NAMES,
    available_scales,
    derive_intervals,
    derive_notes,
    parse_tonic,
    scale_offsets,
)
from .durations import (
    ALL_DURATIONS,
    DEFAULT_DURATION_POOL,
    DURATIONS,
    duration_value,
    resolve_duration_pool,
    total_beats,
)
from .roman import resolve_scale_degree
from .vocabulary import (
    CHORD_QUALITIES,
    CHORD_TRIADS,
    CHORD_TRIAD_WEIGHTS,
    MODES,
    MODE_DEGREE_MASKS,
    TONNETZ_SEVENTH,
    TONNETZ_TRIAD,
)

__all__ = [
    # Scales
    "SCALES",
    "FLAT_NAMES",
    "SHARP_NAMES",
    "available_scales",
    "derive_intervals",
    "derive_notes",
    "parse_tonic",
    "scale_offsets",
    # Durations
    "ALL_DURATIONS",
    "DEFAULT_DURATION_POOL",
    "DURATIONS",
    "duration_value",
    "resolve_duration_pool",
    "total_beats",
    # Roman numerals
    "resolve_scale_degree",
    # Vocabulary
    "CHORD_QUALITIES",
    "CHORD_TRIADS",
    "CHORD_TRIAD_WEIGHTS",
    "MODES",
    "MODE_DEGREE_MASKS",
    "TONNETZ_SEVENTH",
    "TONNETZ_TRIAD",
]
