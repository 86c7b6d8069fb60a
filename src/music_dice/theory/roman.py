"""Roman numeral to scale degree resolution."""

import re
from typing import Dict, Tuple


ROMAN_DEGREES: Dict[str, int] = {
    "i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5, "vi": 6, "vii": 7,
}

# Numeral, then an optional "o" (diminished) or "+" (augmented) suffix
ROMAN_PATTERN = re.compile(r"^(?P<numeral>[ivIV]+)(?P<suffix>[o+]?)$")


def resolve_scale_degree(token: str, mode_name: str) -> Tuple[int, str]:
    """
    Resolve a roman numeral to a scale degree and triad quality.

    Upper-case numerals are major triads and lower-case numerals minor; a
    trailing "o" marks a diminished triad and "+" an augmented one.

    Args:
        token: Roman numeral token such as "IV", "ii" or "viio".
        mode_name: Mode the token belongs to. Only used in error messages,
            so user-defined modes resolve like the built-in ones.

    Returns:
        Tuple of (degree 1-7, quality) where quality is one of "major",
        "minor", "diminished" or "augmented".

    Raises:
        ValueError: If the token is not a roman numeral I-VII in a single case.

    Example:
        >>> resolve_scale_degree("viio", "ionian")
        (7, 'diminished')
    """
    match = ROMAN_PATTERN.match(token)
    numeral = match.group("numeral") if match else ""
    if not (numeral.isupper() or numeral.islower()) or numeral.lower() not in ROMAN_DEGREES:
        raise ValueError(f"Invalid roman numeral '{token}' in mode '{mode_name}'")

    suffix = match.group("suffix")
    if suffix == "o":
        quality = "diminished"
    elif suffix == "+":
        quality = "augmented"
    elif numeral.isupper():
        quality = "major"
    else:
        quality = "minor"

    return ROMAN_DEGREES[numeral.lower()], quality
