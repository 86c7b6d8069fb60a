"""
Scale table and scale derivation.

This module maps scale and mode names to semitone offsets from the tonic and
derives the two pools every dice configuration is seeded from: the spelled
pitch names of a scale and the step intervals between consecutive degrees.
"""

import re
from typing import Dict, List, Tuple

from ..errors import InvalidTonicError, UnknownScaleError


# Scale names mapped to semitone offsets from the tonic (0-11, ascending)
SCALES: Dict[str, List[int]] = {
    "chromatic": list(range(12)),

    # Diatonic
    "major": [0, 2, 4, 5, 7, 9, 11],
    "minor": [0, 2, 3, 5, 7, 8, 10],

    # Modes (7)
    "ionian": [0, 2, 4, 5, 7, 9, 11],
    "dorian": [0, 2, 3, 5, 7, 9, 10],
    "phrygian": [0, 1, 3, 5, 7, 8, 10],
    "lydian": [0, 2, 4, 6, 7, 9, 11],
    "mixolydian": [0, 2, 4, 5, 7, 9, 10],
    "aeolian": [0, 2, 3, 5, 7, 8, 10],
    "locrian": [0, 1, 3, 5, 6, 8, 10],

    # Minor variants
    "harmonic": [0, 2, 3, 5, 7, 8, 11],
    "melodic": [0, 2, 3, 5, 7, 9, 11],

    # Other
    "pentatonic": [0, 2, 4, 7, 9],
    "pminor": [0, 3, 5, 7, 10],
    "blues": [0, 3, 5, 6, 7, 10],
    "wholetone": [0, 2, 4, 6, 8, 10],
}

NOTE_LETTERS: List[str] = ["C", "D", "E", "F", "G", "A", "B"]

LETTER_PITCH_CLASSES: Dict[str, int] = {
    "C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11,
}

# Chromatic spellings by accidental preference
SHARP_NAMES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_NAMES: List[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Semitone offset from the letter's natural pitch class to its accidental
_ACCIDENTALS: Dict[int, str] = {0: "", 1: "#", 2: "##", -1: "b", -2: "bb"}

TONIC_PATTERN = re.compile(r"^([A-G])([#bf]?)$")


def available_scales() -> List[str]:
    """Return the names of every scale in the table."""
    return list(SCALES.keys())


def scale_offsets(scale_name: str) -> List[int]:
    """
    Look up the semitone offsets of a scale.

    Args:
        scale_name: Name of the scale. Must be a key in SCALES.

    Returns:
        Ascending offsets from the tonic, starting at 0.

    Raises:
        UnknownScaleError: If scale_name is not in SCALES.
    """
    if scale_name not in SCALES:
        raise UnknownScaleError(
            f"Unknown scale '{scale_name}'. "
            f"Available scales: {available_scales()}"
        )
    return list(SCALES[scale_name])


def parse_tonic(tonic: str) -> Tuple[str, int]:
    """
    Split a tonic into its normalized spelling and pitch class.

    A trailing ``f`` is accepted as a flat and normalized to ``b``.

    Args:
        tonic: Pitch name such as "C", "F#", "Bb" or "Ef".

    Returns:
        Tuple of (normalized name, pitch class 0-11).

    Raises:
        InvalidTonicError: If tonic is not a letter A-G with at most one
            accidental.

    Example:
        >>> parse_tonic("Ef")
        ('Eb', 3)
    """
    match = TONIC_PATTERN.match(str(tonic))
    if match is None:
        raise InvalidTonicError(f"Invalid tonic '{tonic}'")

    letter, accidental = match.groups()
    accidental = "b" if accidental == "f" else accidental
    shift = {"": 0, "#": 1, "b": -1}[accidental]

    return letter + accidental, (LETTER_PITCH_CLASSES[letter] + shift) % 12


def _spell_by_letter(letter: str, pitch_class: int) -> str:
    """Spell a pitch class on a given letter, e.g. (E, 5) -> 'E#'."""
    shift = (pitch_class - LETTER_PITCH_CLASSES[letter]) % 12
    if shift > 6:
        shift -= 12
    if shift not in _ACCIDENTALS:
        # Beyond double accidentals; fall back to the plain chromatic name
        return SHARP_NAMES[pitch_class] if shift > 0 else FLAT_NAMES[pitch_class]
    return letter + _ACCIDENTALS[shift]


def derive_notes(tonic: str, scale_name: str, use_flats: bool = True) -> List[str]:
    """
    Spell the notes of a scale starting on the tonic.

    Seven-note scales use one letter per degree, so C# major is spelled with
    E# and B# rather than F and C. Scales of any other size keep the tonic's
    own spelling and name the remaining degrees with flats or sharps.

    Args:
        tonic: Tonic pitch name (see parse_tonic).
        scale_name: Name of the scale. Must be a key in SCALES.
        use_flats: Prefer flat spellings for accidentals.

    Returns:
        Ordered pitch names, one per scale degree.

    Raises:
        InvalidTonicError: If the tonic is malformed.
        UnknownScaleError: If scale_name is not in SCALES.

    Example:
        >>> derive_notes("A", "minor")
        ['A', 'B', 'C', 'D', 'E', 'F', 'G']
        >>> derive_notes("C#", "major")
        ['C#', 'D#', 'E#', 'F#', 'G#', 'A#', 'B#']
    """
    offsets = scale_offsets(scale_name)
    name, root = parse_tonic(tonic)

    if len(offsets) == len(NOTE_LETTERS):
        start = NOTE_LETTERS.index(name[0])
        return [
            _spell_by_letter(NOTE_LETTERS[(start + i) % 7], (root + offset) % 12)
            for i, offset in enumerate(offsets)
        ]

    names = FLAT_NAMES if use_flats else SHARP_NAMES
    return [name] + [names[(root + offset) % 12] for offset in offsets[1:]]


def derive_intervals(scale_name: str) -> List[int]:
    """
    Compute the semitone steps between consecutive scale degrees.

    The final step wraps from the last degree back to the octave, so the
    result always sums to 12 and has one entry per scale degree.

    Args:
        scale_name: Name of the scale. Must be a key in SCALES.

    Returns:
        Step intervals in semitones.

    Raises:
        UnknownScaleError: If scale_name is not in SCALES.

    Example:
        >>> derive_intervals("major")
        [2, 2, 1, 2, 2, 2, 1]
    """
    offsets = scale_offsets(scale_name)
    steps = [b - a for a, b in zip(offsets, offsets[1:])]
    steps.append(12 - offsets[-1])
    return steps
