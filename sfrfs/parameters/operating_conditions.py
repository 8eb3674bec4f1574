"""
Operating conditions (shaft speed, load) over which receptive fields are built.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from sfrfs import config
from sfrfs.errors import DimensionMismatch, ValidationError


@dataclass(frozen=True)
class OperatingCondition:
    """One operating point: shaft speed in Hz and load in kN."""

    speed_hz: float
    load_kn: float

    def matches(self, speed_hz, load_kn):
        """Exact match on both speed and load."""
        return self.speed_hz == speed_hz and self.load_kn == load_kn

    def __str__(self):
        return f"Speed={self.speed_hz:.3f} Hz, Load={self.load_kn:.3f}"


@dataclass(frozen=True)
class OperatingConditionGrid:
    """Immutable ordered sequence of operating conditions."""

    conditions: Tuple[OperatingCondition, ...] = ()

    def __len__(self):
        return len(self.conditions)

    def __iter__(self):
        return iter(self.conditions)

    def __getitem__(self, index):
        return self.conditions[index]

    @property
    def speeds(self):
        return np.array([c.speed_hz for c in self.conditions], dtype=float)

    @property
    def loads(self):
        return np.array([c.load_kn for c in self.conditions], dtype=float)

    def to_frame(self):
        """Return the grid as a DataFrame with Speed and Load columns."""
        return pd.DataFrame({
            config.SPEED_COLUMN: self.speeds,
            config.LOAD_COLUMN: self.loads
        })

    def __str__(self):
        items = ", ".join(f"({c.speed_hz:g}, {c.load_kn:g})" for c in self.conditions)
        return f"[OperatingConditionGrid: {items}]"


def _as_vector(name, values):
    array = np.asarray(values, dtype=float)
    if array.ndim > 1:
        if min(array.shape) > 1:
            raise DimensionMismatch(f"{name} must be a vector, got shape {array.shape}")
        array = array.ravel()
    return np.atleast_1d(array)


def make_operating_grid(speeds, loads):
    """
    Build an operating condition grid from equal-length speed and load sequences.

    Args:
        speeds (array-like): Shaft speeds in Hz.
        loads (array-like): Loads in kN.

    Returns:
        OperatingConditionGrid: Grid with one condition per (speed, load) pair.
            Empty sequences give an empty grid.

    Raises:
        DimensionMismatch: If the sequences have different lengths.
        ValidationError: If a value is not a finite number.
    """
    try:
        speed_arr = _as_vector("speeds", speeds)
        load_arr = _as_vector("loads", loads)
    except (TypeError, ValueError) as e:
        if isinstance(e, DimensionMismatch):
            raise
        raise ValidationError(f"Operating conditions must be numeric: {e}") from e

    if speed_arr.size != load_arr.size:
        raise DimensionMismatch(
            f"Speed and load dimensions must agree: {speed_arr.size} != {load_arr.size}")

    if not (np.all(np.isfinite(speed_arr)) and np.all(np.isfinite(load_arr))):
        raise ValidationError("Operating conditions must be finite numbers")

    return OperatingConditionGrid(tuple(
        OperatingCondition(float(s), float(l)) for s, l in zip(speed_arr, load_arr)
    ))
