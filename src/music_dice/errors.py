"""Exception types raised by the dice engine and its theory tables."""


class DiceError(Exception):
    """Base class for all music_dice errors."""


class ConfigurationFormatError(DiceError, ValueError):
    """A configuration field failed its static format check."""


class InvalidTonicError(DiceError, ValueError):
    """A tonic could not be resolved to a pitch class."""


class UnknownScaleError(DiceError, LookupError):
    """A scale or mode name is not present in the scale table."""


class InvalidPoolError(DiceError, ValueError):
    """A weighted pool is empty, mismatched, or has non-positive weights."""


class RetryExhaustedError(DiceError, RuntimeError):
    """A reject-and-retry loop could not produce an acceptable value."""


class UnknownRollError(DiceError, LookupError):
    """A roll category name is not registered."""
