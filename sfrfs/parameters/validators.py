"""
Scalar validation helpers shared by the parameter records.

Every helper returns the normalised value or raises ValidationError naming
the offending field.
"""

import numbers

import numpy as np

from sfrfs.errors import ValidationError


def _require_real(name, value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not np.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    return value


def require_integer(name, value, minimum=None):
    """
    Validate an integer-valued field.

    Integral floats (e.g. ``3.0``) are accepted and converted to ``int``.

    Args:
        name (str): Field name used in the error message.
        value: Candidate value.
        minimum (int, optional): Smallest allowed value.

    Returns:
        int: The validated value.
    """
    number = _require_real(name, value)
    if not float(number).is_integer():
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    number = int(number)
    if minimum is not None and number < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {number}")
    return number


def require_positive(name, value):
    number = _require_real(name, value)
    if number <= 0:
        raise ValidationError(f"{name} must be positive, got {number}")
    return number


def require_in_range(name, value, low, high):
    """Validate a real value inside the closed interval [low, high]."""
    number = _require_real(name, value)
    if number < low or number > high:
        raise ValidationError(f"{name} must be in [{low}, {high}], got {number}")
    return number
