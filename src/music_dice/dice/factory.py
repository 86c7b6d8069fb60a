"""
Roll categories and the dice factory.

Each roll category is a function that reads the current DiceConfig, builds a
fresh WeightedPool (or runs a composite of them) and returns one roll. The
factory resolves a category name to such a function and wraps it in a Die.

Two families are resolved from the configuration rather than registered by
name: ``chord_quality_<triad>`` for every key of chord_qualities_by_triad and
``<mode>_degree`` for every key of mode_degree_masks.
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import InvalidPoolError, RetryExhaustedError, UnknownRollError, UnknownScaleError
from ..theory.roman import resolve_scale_degree
from ..theory.scales import derive_intervals, derive_notes
from .config import DiceConfig
from .pool import Die, WeightedPool

logger = logging.getLogger(__name__)

RollFn = Callable[["DiceFactory"], Any]

ROLL_CATEGORIES: Dict[str, RollFn] = {}

CHORD_QUALITY_PREFIX = "chord_quality_"
MODE_DEGREE_SUFFIX = "_degree"


def register_roll(name: str) -> Callable[[RollFn], RollFn]:
    """Register a roll function under a category name."""
    def decorator(fn: RollFn) -> RollFn:
        ROLL_CATEGORIES[name] = fn
        return fn
    return decorator


@register_roll("note")
def roll_note(factory: "DiceFactory") -> Any:
    return factory.pool(factory.config.note_pool).draw_one()


@register_roll("interval")
def roll_interval(factory: "DiceFactory") -> int:
    return factory.pool(factory.config.interval_pool).draw_one()


@register_roll("octave")
def roll_octave(factory: "DiceFactory") -> int:
    return factory.pool(factory.config.octave_range).draw_one()


def roll_scale_note(factory: "DiceFactory", scale_name: str) -> str:
    """Roll a note of another scale on the configured tonic."""
    config = factory.config
    return factory.pool(derive_notes(config.tonic, scale_name, config.use_flats)).draw_one()


def roll_scale_interval(factory: "DiceFactory", scale_name: str) -> int:
    """Roll a step interval of another scale."""
    return factory.pool(derive_intervals(scale_name)).draw_one()


for _scale_name in ("chromatic", "major", "minor"):
    ROLL_CATEGORIES[f"note_{_scale_name}"] = partial(roll_scale_note, scale_name=_scale_name)
    ROLL_CATEGORIES[f"interval_{_scale_name}"] = partial(roll_scale_interval, scale_name=_scale_name)


@register_roll("chord_triad")
def roll_chord_triad(factory: "DiceFactory") -> str:
    config = factory.config
    return factory.pool(config.chord_triad_names, config.chord_triad_weights).draw_one()


def roll_chord_quality(factory: "DiceFactory", triad: str) -> str:
    """Roll a quality suffix for one triad type."""
    qualities = factory.config.chord_qualities_by_triad
    if triad not in qualities:
        raise UnknownRollError(
            f"No chord qualities for triad '{triad}'. "
            f"Available triads: {list(qualities)}"
        )
    return factory.pool(qualities[triad]).draw_one()


@register_roll("mode")
def roll_mode(factory: "DiceFactory") -> str:
    return factory.pool(factory.config.mode_names).draw_one()


def roll_mode_degree(factory: "DiceFactory", mode_name: str) -> str:
    """Roll a roman-numeral degree token of a mode."""
    masks = factory.config.mode_degree_masks
    if mode_name not in masks:
        raise UnknownScaleError(
            f"No degree mask for mode '{mode_name}'. "
            f"Available modes: {list(masks)}"
        )
    return factory.pool(masks[mode_name]).draw_one()


@register_roll("tonnetz3")
def roll_tonnetz_triad(factory: "DiceFactory") -> str:
    return factory.pool(factory.config.tonnetz_symbols_3).draw_one()


@register_roll("tonnetz4")
def roll_tonnetz_seventh(factory: "DiceFactory") -> str:
    return factory.pool(factory.config.tonnetz_symbols_4).draw_one()


@register_roll("rhythmic_value")
def roll_rhythmic_value(factory: "DiceFactory") -> str:
    return factory.pool(factory.config.durations).draw_one()


@register_roll("rhythmic_phrase")
def roll_rhythmic_phrase(factory: "DiceFactory") -> List[str]:
    return factory.config.partitioner.motif()


@register_roll("rhythmic_phrase_constrained")
def roll_rhythmic_phrase_constrained(factory: "DiceFactory") -> List[str]:
    config = factory.config
    return config.partitioner.constrained_motif(config.phrase_length_constraints)


@register_roll("chord_voices_num")
def roll_chord_voices_num(factory: "DiceFactory") -> int:
    return factory.pool(factory.config.chord_voice_counts).draw_one()


@register_roll("remove_chord_num")
def roll_remove_chord_num(factory: "DiceFactory") -> int:
    """Roll how many voices to drop from a chord, per remove_chord_policy."""
    config = factory.config
    counts = config.chord_voice_counts
    if not counts:
        raise InvalidPoolError("chord_voice_counts is empty")

    if config.remove_chord_policy == "up_to_largest":
        choices = range(1, counts[-1] + 1)
    else:
        choices = range(0, counts[0])
    return factory.pool(list(choices)).draw_one()


class DiceFactory:
    """
    Builds dice bound to a DiceConfig.

    Dice read the configuration on every roll, so each roll draws from a
    freshly built pool. Pool errors therefore surface when a die is rolled,
    not when it is created.

    Args:
        config: Dice configuration (a default DiceConfig if omitted)
        **overrides: Field overrides applied on top of config

    Example:
        >>> factory = DiceFactory(tonic="A", scale_name="minor", seed=7)
        >>> phrase = factory.die("rhythmic_phrase").roll()
        >>> notes = [factory.roll("note") for _ in phrase]
    """

    def __init__(self, config: Optional[DiceConfig] = None, **overrides: Any):
        if config is None:
            config = DiceConfig(**overrides)
        elif overrides:
            config = config.replace(**overrides)
        self.config = config

    @property
    def rng(self):
        return self.config.rng

    def pool(
        self,
        values: Sequence[Any],
        weights: Optional[Sequence[float]] = None,
    ) -> WeightedPool:
        """Build a pool drawing from the config's random generator."""
        return WeightedPool(values, weights, rng=self.rng)

    def categories(self) -> List[str]:
        """Names of every roll category available for this config."""
        names = set(ROLL_CATEGORIES)
        names.update(CHORD_QUALITY_PREFIX + triad for triad in self.config.chord_qualities_by_triad)
        names.update(mode + MODE_DEGREE_SUFFIX for mode in self.config.mode_degree_masks)
        return sorted(names)

    def _roll_fn(self, category: str) -> RollFn:
        if category in ROLL_CATEGORIES:
            return ROLL_CATEGORIES[category]

        if category.startswith(CHORD_QUALITY_PREFIX):
            triad = category[len(CHORD_QUALITY_PREFIX):]
            if triad in self.config.chord_qualities_by_triad:
                return partial(roll_chord_quality, triad=triad)

        if category.endswith(MODE_DEGREE_SUFFIX):
            mode_name = category[:-len(MODE_DEGREE_SUFFIX)]
            if mode_name in self.config.mode_degree_masks:
                return partial(roll_mode_degree, mode_name=mode_name)

        raise UnknownRollError(
            f"Unknown roll category '{category}'. "
            f"Available categories: {self.categories()}"
        )

    def die(self, category: str) -> Die:
        """
        Get a die for a roll category.

        Args:
            category: Category name (see categories())

        Returns:
            Die whose roll() draws one value of the category

        Raises:
            UnknownRollError: If the category is not available
        """
        roll_fn = self._roll_fn(category)
        return Die(partial(roll_fn, self), name=category)

    def roll(self, category: str) -> Any:
        """Roll a category once."""
        return self.die(category).roll()

    def unique_item(
        self,
        excludes: Iterable[Any],
        pool: Optional[Sequence[Any]] = None,
    ) -> Any:
        """
        Draw an item that is not in the exclude list.

        Args:
            excludes: Items that must not be returned
            pool: Items to draw from (defaults to the note pool)

        Returns:
            An item of pool that is not in excludes

        Raises:
            InvalidPoolError: If every item of pool is excluded
            RetryExhaustedError: If max_attempts draws all hit excluded items
        """
        items = self.config.note_pool if pool is None else tuple(pool)
        excluded = list(excludes)
        if all(item in excluded for item in items):
            raise InvalidPoolError(f"Every item of {list(items)} is excluded")

        draws = self.pool(items)
        for _ in range(self.config.max_attempts):
            item = draws.draw_one()
            if item not in excluded:
                return item

        logger.warning(f"No unique item after {self.config.max_attempts} draws")
        raise RetryExhaustedError(
            f"Drew only excluded items in {self.config.max_attempts} attempts"
        )

    def chord_quality_for_triad(self, note: Any, triad: str) -> Union[str, Tuple[Any, Any]]:
        """
        Roll a chord quality for a triad type.

        For a ``custom`` triad there is no quality vocabulary; instead two
        further notes are drawn, each distinct from the root and from each
        other, and returned as a pair to stand in for the chord's upper voices.

        Args:
            note: Root note of the chord
            triad: Triad type, e.g. "major" or "custom"

        Returns:
            Quality suffix string, or a (note, note) pair for custom triads
        """
        if triad == "custom":
            first = self.unique_item([note])
            second = self.unique_item([note, first])
            return first, second
        return roll_chord_quality(self, triad)

    def mode_degree_triad(self, mode_name: str) -> Tuple[int, str]:
        """
        Roll a scale degree of a mode with its triad quality.

        Args:
            mode_name: Mode with a degree mask, e.g. "dorian"

        Returns:
            Tuple of (degree 1-7, triad quality)

        Raises:
            UnknownScaleError: If the config has no degree mask for the mode

        Example:
            >>> DiceFactory().mode_degree_triad("ionian")  # doctest: +SKIP
            (5, 'major')
        """
        token = roll_mode_degree(self, mode_name)
        return resolve_scale_degree(token, mode_name)
