"""Duration symbols and their beat lengths.

Symbols follow the MIDI::Simple naming used by notation renderers: a base
value (``wn`` whole, ``hn`` half, ``qn`` quarter, ``en`` eighth, ``sn``
sixteenth, ``xn`` thirty-second, ``yn`` sixty-fourth, ``zn`` 128th) with an
optional prefix for dotted (``d``), double dotted (``dd``) or triplet (``t``)
variants. Lengths are exact fractions of a quarter-note beat.
"""

from fractions import Fraction
from typing import Dict, Iterable, List, Sequence, Tuple, Union


BASE_DURATIONS: Dict[str, Fraction] = {
    "wn": Fraction(4),
    "hn": Fraction(2),
    "qn": Fraction(1),
    "en": Fraction(1, 2),
    "sn": Fraction(1, 4),
    "xn": Fraction(1, 8),
    "yn": Fraction(1, 16),
    "zn": Fraction(1, 32),
}

DURATION_MODIFIERS: Dict[str, Fraction] = {
    "": Fraction(1),
    "d": Fraction(3, 2),      # Dotted
    "dd": Fraction(7, 4),     # Double dotted
    "t": Fraction(2, 3),      # Triplet
}

DURATIONS: Dict[str, Fraction] = {
    prefix + symbol: value * factor
    for symbol, value in BASE_DURATIONS.items()
    for prefix, factor in DURATION_MODIFIERS.items()
}

# Every known symbol, longest first
ALL_DURATIONS: Tuple[str, ...] = tuple(
    sorted(DURATIONS, key=lambda symbol: (-DURATIONS[symbol], symbol))
)

DEFAULT_DURATION_POOL: Tuple[str, ...] = ("wn", "dhn", "hn", "dqn", "qn", "en")


def duration_value(symbol: str) -> Fraction:
    """Return the length of a duration symbol in quarter-note beats.

    Args:
        symbol: Key from DURATIONS (e.g. "qn", "dhn", "ten")

    Returns:
        Exact beat length

    Raises:
        KeyError: If symbol is not found in DURATIONS

    Examples:
        >>> duration_value("dqn")
        Fraction(3, 2)
    """
    if symbol not in DURATIONS:
        raise KeyError(
            f"Duration symbol '{symbol}' not found. "
            f"Known symbols: {list(ALL_DURATIONS)}"
        )
    return DURATIONS[symbol]


def resolve_duration_pool(pool: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """Expand a duration pool specification into a tuple of symbols.

    The string ``"all"`` selects every known symbol; any other value is
    treated as a sequence of symbols and returned unchanged as a tuple.
    """
    if isinstance(pool, str):
        if pool == "all":
            return ALL_DURATIONS
        raise KeyError(f"Unknown duration pool '{pool}'. Use 'all' or a list of symbols")
    return tuple(pool)


def unknown_durations(symbols: Iterable[str]) -> List[str]:
    """Return the symbols that are not in DURATIONS."""
    return [symbol for symbol in symbols if symbol not in DURATIONS]


def total_beats(symbols: Iterable[str]) -> Fraction:
    """Sum the beat lengths of a sequence of duration symbols."""
    return sum((duration_value(symbol) for symbol in symbols), Fraction(0))
