"""
Dice configuration: seed parameters and the pools derived from them.

A DiceConfig is built once per session and never changes afterwards. The
note and interval pools are derived from (tonic, scale_name, use_flats) the
first time they are needed, so an unknown scale name only fails when a die
actually reads those pools.
"""

import dataclasses
import json
import logging
import re
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationFormatError
from ..theory.durations import DEFAULT_DURATION_POOL, resolve_duration_pool, unknown_durations
from ..theory.scales import TONIC_PATTERN, derive_intervals, derive_notes
from ..theory.vocabulary import (
    CHORD_QUALITIES,
    CHORD_TRIADS,
    CHORD_TRIAD_WEIGHTS,
    DEFAULT_CHORD_VOICE_COUNTS,
    DEFAULT_OCTAVES,
    DEFAULT_PHRASE_LENGTHS,
    MODES,
    MODE_DEGREE_MASKS,
    TONNETZ_SEVENTH,
    TONNETZ_TRIAD,
)
from ..utils.config import default_config_path, load_config
from .partition import DurationPartitioner

logger = logging.getLogger(__name__)

SCALE_NAME_PATTERN = re.compile(r"^[a-z]+$")

# How many voices the remove_chord_num die may remove:
#   below_smallest: 0 .. chord_voice_counts[0] - 1
#   up_to_largest:  1 .. chord_voice_counts[-1]
REMOVE_CHORD_POLICIES = ("below_smallest", "up_to_largest")

_SEQUENCE_FIELDS = (
    "octave_range",
    "chord_triad_names",
    "chord_triad_weights",
    "mode_names",
    "tonnetz_symbols_3",
    "tonnetz_symbols_4",
    "chord_voice_counts",
    "phrase_length_constraints",
)
_MAPPING_FIELDS = ("chord_qualities_by_triad", "mode_degree_masks")


def _frozen_mapping(mapping: Mapping[str, Sequence[Any]]) -> Mapping[str, Tuple[Any, ...]]:
    return MappingProxyType({str(key): tuple(values) for key, values in mapping.items()})


@dataclass(frozen=True)
class DiceConfig:
    """Seed parameters and pools for a set of musical dice."""

    # Scale seed
    tonic: str = "C"
    scale_name: str = "chromatic"
    use_flats: bool = True

    # Rhythm
    beats_per_phrase: int = 4
    duration_pool: Union[str, Sequence[str]] = DEFAULT_DURATION_POOL  # or "all"
    phrase_length_constraints: Sequence[int] = tuple(DEFAULT_PHRASE_LENGTHS)

    octave_range: Sequence[int] = tuple(DEFAULT_OCTAVES)

    # Explicit pools; None derives them from the scale seed
    notes: Optional[Sequence[Any]] = None
    intervals: Optional[Sequence[int]] = None

    # Chords
    chord_triad_names: Sequence[str] = tuple(CHORD_TRIADS)
    chord_triad_weights: Sequence[float] = tuple(CHORD_TRIAD_WEIGHTS)
    chord_qualities_by_triad: Mapping[str, Sequence[str]] = field(
        default_factory=lambda: _frozen_mapping(CHORD_QUALITIES)
    )
    chord_voice_counts: Sequence[int] = tuple(DEFAULT_CHORD_VOICE_COUNTS)
    remove_chord_policy: str = "below_smallest"

    # Modes and transformations
    mode_names: Sequence[str] = tuple(MODES)
    mode_degree_masks: Mapping[str, Sequence[str]] = field(
        default_factory=lambda: _frozen_mapping(MODE_DEGREE_MASKS)
    )
    tonnetz_symbols_3: Sequence[str] = tuple(TONNETZ_TRIAD)
    tonnetz_symbols_4: Sequence[str] = tuple(TONNETZ_SEVENTH)

    # Cap on every reject-and-retry loop
    max_attempts: int = 10000

    # Random seed for reproducibility
    seed: Optional[int] = None

    _cache: Dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)
    _lock: Any = field(default_factory=threading.Lock, init=False, repr=False, compare=False)
    _rng: Optional[np.random.Generator] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate field formats and freeze sequences into tuples."""
        if not isinstance(self.tonic, str) or not TONIC_PATTERN.match(self.tonic):
            raise ConfigurationFormatError(
                f"tonic must be a note A-G with an optional #, b or f, got {self.tonic!r}"
            )
        if not isinstance(self.scale_name, str) or not SCALE_NAME_PATTERN.match(self.scale_name):
            raise ConfigurationFormatError(
                f"scale_name must be lowercase letters, got {self.scale_name!r}"
            )
        if not isinstance(self.use_flats, bool):
            raise ConfigurationFormatError(f"use_flats must be a boolean, got {self.use_flats!r}")
        if not _is_positive_int(self.beats_per_phrase):
            raise ConfigurationFormatError(
                f"beats_per_phrase must be a positive integer, got {self.beats_per_phrase!r}"
            )
        if not _is_positive_int(self.max_attempts):
            raise ConfigurationFormatError(
                f"max_attempts must be a positive integer, got {self.max_attempts!r}"
            )
        if self.remove_chord_policy not in REMOVE_CHORD_POLICIES:
            raise ConfigurationFormatError(
                f"Unknown remove_chord_policy: {self.remove_chord_policy!r}. "
                f"Choose from {list(REMOVE_CHORD_POLICIES)}"
            )
        if self.seed is not None and not isinstance(self.seed, int):
            raise ConfigurationFormatError(f"seed must be an integer, got {self.seed!r}")

        if isinstance(self.duration_pool, str):
            if self.duration_pool != "all":
                raise ConfigurationFormatError(
                    f"duration_pool must be 'all' or a list of symbols, got {self.duration_pool!r}"
                )
        else:
            unknown = unknown_durations(self.duration_pool)
            if unknown:
                raise ConfigurationFormatError(f"Unknown duration symbols: {unknown}")
            object.__setattr__(self, "duration_pool", tuple(self.duration_pool))

        for name in _SEQUENCE_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))
        for name in _MAPPING_FIELDS:
            object.__setattr__(self, name, _frozen_mapping(getattr(self, name)))
        for name in ("notes", "intervals"):
            if getattr(self, name) is not None:
                object.__setattr__(self, name, tuple(getattr(self, name)))

        object.__setattr__(self, "_rng", np.random.default_rng(self.seed))

    @property
    def rng(self) -> np.random.Generator:
        """Random generator shared by every die built from this config."""
        return self._rng

    @property
    def note_pool(self) -> Tuple[Any, ...]:
        """Explicit notes, or the spelled notes of the configured scale."""
        if self.notes is not None:
            return self.notes
        return self._once(
            "notes",
            lambda: tuple(derive_notes(self.tonic, self.scale_name, self.use_flats)),
        )

    @property
    def interval_pool(self) -> Tuple[int, ...]:
        """Explicit intervals, or the step intervals of the configured scale."""
        if self.intervals is not None:
            return self.intervals
        return self._once("intervals", lambda: tuple(derive_intervals(self.scale_name)))

    @property
    def durations(self) -> Tuple[str, ...]:
        """Duration symbols available to rhythmic dice."""
        return resolve_duration_pool(self.duration_pool)

    @property
    def partitioner(self) -> DurationPartitioner:
        """Phrase partitioner for beats_per_phrase over the duration pool."""
        return self._once(
            "partitioner",
            lambda: DurationPartitioner(
                beats=self.beats_per_phrase,
                pool=self.durations,
                rng=self.rng,
                max_attempts=self.max_attempts,
            ),
        )

    def __hash__(self) -> int:
        # Mapping proxies are unhashable; hash their frozen items instead
        return hash(tuple(
            tuple(sorted(value.items())) if isinstance(value, Mapping) else value
            for value in (getattr(self, f.name) for f in dataclasses.fields(self) if f.compare)
        ))

    def _once(self, key: str, build: Callable[[], Any]) -> Any:
        """Build and cache a derived value the first time it is requested."""
        if key not in self._cache:
            with self._lock:
                if key not in self._cache:
                    self._cache[key] = build()
                    logger.debug(f"Derived {key} for {self.tonic} {self.scale_name}")
        return self._cache[key]

    def replace(self, **changes: Any) -> "DiceConfig":
        """Return a new config with some fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization."""
        data: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            if not f.init:
                continue
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, Mapping):
                value = {key: list(items) for key, items in value.items()}
            data[f.name] = value
        return data

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiceConfig":
        """
        Create config from a dictionary.

        Args:
            data: Field values; missing fields keep their defaults

        Returns:
            Validated DiceConfig

        Raises:
            ConfigurationFormatError: If a key is not a config field or a
                value fails validation
        """
        known = {f.name for f in dataclasses.fields(cls) if f.init}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationFormatError(f"Unknown configuration keys: {unknown}")
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "DiceConfig":
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_yaml(
        cls,
        config_path: Union[str, Path, None] = None,
        section: Optional[str] = "dice",
    ) -> "DiceConfig":
        """
        Load config from a YAML file.

        Args:
            config_path: Path to the YAML file (defaults to the packaged configs/dice.yaml)
            section: Top-level key holding the dice settings, or None if
                the settings are at the top level

        Returns:
            Validated DiceConfig
        """
        config = load_config(config_path)
        data = (config.get(section) or {}) if section else config
        logger.info(f"Loaded dice config from {config_path or default_config_path()}: {sorted(data)}")
        return cls.from_dict(data)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
