"""
Default pools for chord, mode and transformation dice.

Defines the triad categories and their draw weights, the chord quality
suffixes available for each triad type, the roman-numeral masks of the seven
diatonic modes, and the neo-Riemannian transformation names.
"""

from typing import Dict, List


# Triad categories and relative draw weights (major/minor twice as likely)
CHORD_TRIADS: List[str] = ["major", "minor", "diminished", "augmented", "custom"]
CHORD_TRIAD_WEIGHTS: List[float] = [2, 2, 1, 1, 1]

# Quality suffixes appended to a root note to name a chord, per triad type
CHORD_QUALITIES: Dict[str, List[str]] = {
    # Triad-level colorings
    "major": ["", "add2", "sus2", "add4", "sus4", "6", "69", "add9"],
    "minor": ["m", "madd4", "m6", "m69", "madd9"],
    "diminished": ["dim"],
    "augmented": ["aug"],

    # Seventh chords and extensions
    "major_7": ["M7", "7", "7sus4", "7b5", "M9", "9", "7b9", "7#9", "M7#11", "13"],
    "minor_7": ["m7", "m7b5", "m7#5", "mM7", "m9", "m11", "m13"],
    "diminished_7": ["dim7", "m7b5"],
    "augmented_7": ["augM7", "aug7", "aug9"],
}

# Diatonic modes in rotation order
MODES: List[str] = [
    "ionian", "dorian", "phrygian", "lydian", "mixolydian", "aeolian", "locrian",
]

# Triad quality of each scale degree, as roman numerals
# (upper case = major, lower case = minor, trailing "o" = diminished)
MODE_DEGREE_MASKS: Dict[str, List[str]] = {
    "ionian": ["I", "ii", "iii", "IV", "V", "vi", "viio"],
    "dorian": ["i", "ii", "III", "IV", "v", "vio", "VII"],
    "phrygian": ["i", "II", "III", "iv", "vo", "VI", "vii"],
    "lydian": ["I", "II", "iii", "ivo", "V", "vi", "vii"],
    "mixolydian": ["I", "ii", "iiio", "IV", "v", "vi", "VII"],
    "aeolian": ["i", "iio", "III", "iv", "v", "VI", "VII"],
    "locrian": ["io", "II", "iii", "iv", "V", "VI", "vii"],
}

# Neo-Riemannian transformations on triads
TONNETZ_TRIAD: List[str] = [
    "P",   # Parallel
    "R",   # Relative
    "L",   # Leading-tone exchange
    "N",   # Nebenverwandt
    "S",   # Slide
    "H",   # Hexatonic pole
]

# Transformations on seventh chords
TONNETZ_SEVENTH: List[str] = [
    "S23", "S32", "S34", "S43", "S56", "S65", "C32", "C34", "C65",
]

DEFAULT_OCTAVES: List[int] = [2, 3, 4, 5, 6]
DEFAULT_CHORD_VOICE_COUNTS: List[int] = [3, 4]
DEFAULT_PHRASE_LENGTHS: List[int] = [3, 4, 5]
