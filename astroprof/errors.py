from __future__ import annotations


class AstroProfError(Exception):
    """Base class for errors raised by astroprof."""


class InvalidInputError(AstroProfError, ValueError):
    """Input is empty, non-rectangular or otherwise malformed."""


class DegenerateNormalizationError(AstroProfError, ArithmeticError):
    """The full-aperture sum is zero, so the profile cannot be normalised."""
