"""
Spectral fault receptive field (SFRF) responses.

For each fault family matching the selected operating condition:

    center   = trapz(f, |X * G_center|   / N)
    surround = trapz(f, |X * G_surround| / N)
    SFRF     = center - k * surround

where X is the complex spectrum (one column per signal), G the gain masks,
N the number of bins and k the inhibition factor of the family.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.integrate import trapezoid

from sfrfs import config
from sfrfs.errors import (
    AmbiguousInput,
    NoInput,
    ConditionNotFound,
    DimensionMismatch,
    MaskLengthMismatch,
    ValidationError
)
from sfrfs.families import FaultFamily
from sfrfs.parameters.operating_conditions import OperatingCondition
from sfrfs.response.spectrum import as_column_matrix, compute_spectrum
from sfrfs.utils import resolve_logger


@dataclass(frozen=True, eq=False)
class ResponseRow:
    """Responses of one fault family, one value per signal column."""

    family: FaultFamily
    values: np.ndarray


@dataclass(frozen=True, eq=False)
class ResponseTable:
    """Per-family responses for one operating condition."""

    condition: OperatingCondition
    rows: Tuple[ResponseRow, ...]
    columns: Optional[Sequence[str]] = None

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def families(self):
        return [r.family for r in self.rows]

    def value(self, family):
        family = FaultFamily.coerce(family)
        for r in self.rows:
            if r.family is family:
                return r.values
        raise KeyError(f"No response for {family.value}")

    def as_matrix(self):
        """Responses as [families x signal columns]."""
        if not self.rows:
            return np.empty((0, 0))
        return np.vstack([r.values for r in self.rows])

    def to_frame(self):
        matrix = self.as_matrix()
        columns = list(self.columns) if self.columns is not None else list(range(matrix.shape[1]))
        frame = pd.DataFrame(matrix, columns=columns)
        frame.insert(0, 'FaultGroup', [r.family.group for r in self.rows])
        frame.insert(1, 'Description', [r.family.description for r in self.rows])
        frame.insert(2, config.SPEED_COLUMN, self.condition.speed_hz)
        frame.insert(3, config.LOAD_COLUMN, self.condition.load_kn)
        return frame


def resolve_condition(selected):
    """
    Normalise the selected operating condition.

    Accepts an OperatingCondition, a (speed, load) pair, a mapping or a
    one-row DataFrame with Speed and Load columns.

    Raises:
        DimensionMismatch: If more or less than one condition is given.
        ValidationError: If Speed/Load cannot be found.
    """
    if isinstance(selected, OperatingCondition):
        return selected

    if isinstance(selected, pd.DataFrame):
        if len(selected) != 1:
            raise DimensionMismatch(
                f"Exactly one operating condition must be selected, got {len(selected)} rows")
        missing = [c for c in (config.SPEED_COLUMN, config.LOAD_COLUMN) if c not in selected.columns]
        if missing:
            raise ValidationError(f"Nonconforming operating condition, missing columns: {', '.join(missing)}")
        row = selected.iloc[0]
        return OperatingCondition(float(row[config.SPEED_COLUMN]), float(row[config.LOAD_COLUMN]))

    if isinstance(selected, Mapping):
        for speed_key, load_key in ((config.SPEED_COLUMN, config.LOAD_COLUMN), ("speed_hz", "load_kn")):
            if speed_key in selected and load_key in selected:
                return OperatingCondition(float(selected[speed_key]), float(selected[load_key]))
        raise ValidationError("Nonconforming operating condition, expected Speed and Load keys")

    pair = np.asarray(selected, dtype=float).ravel()
    if pair.size != 2:
        raise DimensionMismatch(f"Operating condition must be a (speed, load) pair, got {pair.size} values")
    return OperatingCondition(float(pair[0]), float(pair[1]))


def _is_missing(value):
    return value is None or np.size(value) == 0


def single_mode_response(spectrum, center_mask, surround_mask, frequency_axis, inhibition_factor):
    """
    Difference-of-Gaussians response of one family.

    Args:
        spectrum (np.ndarray): Complex spectrum [bins x columns].
        center_mask (np.ndarray): Center gain mask [bins].
        surround_mask (np.ndarray): Surround gain mask [bins].
        frequency_axis (np.ndarray): Integration axis in Hz [bins].
        inhibition_factor (float): Surround weight.

    Returns:
        np.ndarray: One response per column.
    """
    n = len(center_mask)
    mag_center = np.abs(spectrum * center_mask[:, np.newaxis]) / n
    mag_surround = np.abs(spectrum * surround_mask[:, np.newaxis]) / n

    integral_center = trapezoid(mag_center, x=frequency_axis, axis=0)
    integral_surround = trapezoid(mag_surround, x=frequency_axis, axis=0)

    return integral_center - inhibition_factor * integral_surround


def compute_response(gain_mask_table, shape_parameters, selected_condition,
                     signal=None, spectrum=None, columns=None, logger=None):
    """
    Compute SFRF responses for one operating condition.

    Exactly one of ``signal`` (time domain) or ``spectrum`` (complex FFT) must be
    given; both are [bins x columns] arrays or 1-D vectors. A time-domain signal
    is transformed with ``compute_spectrum``.

    Args:
        gain_mask_table (GainMaskTable): Output of ``synthesize_gain_functions``.
        shape_parameters (ShapeParameterSet): Source of the inhibition factor of each family.
        selected_condition: OperatingCondition, (speed, load) pair, mapping or one-row DataFrame.
        signal (array-like, optional): Time-domain samples.
        spectrum (array-like, optional): Complex spectrum.
        columns (sequence, optional): Names of the signal columns.
        logger (Logger, optional): Logger instance.

    Returns:
        ResponseTable: One row per matched fault family.

    Raises:
        AmbiguousInput: If both signal and spectrum are given.
        NoInput: If neither is given.
        ConditionNotFound: If no gain masks exist for the selected condition.
        MaskLengthMismatch: If the mask length differs from the number of bins.
    """
    logger = resolve_logger(logger)

    if _is_missing(signal) and _is_missing(spectrum):
        logger.error("SFRF-Response: Neither temporal nor spectral data provided")
        raise NoInput("Either temporal or spectral data must be provided.")
    if not _is_missing(signal) and not _is_missing(spectrum):
        logger.error("SFRF-Response: Both temporal and spectral data provided")
        raise AmbiguousInput("Only one of temporal or spectral data should be provided.")

    condition = resolve_condition(selected_condition)
    matched = gain_mask_table.rows_for(condition)
    if not matched:
        logger.error(f"SFRF-Response: Operating condition missing in gain functions: {condition}")
        raise ConditionNotFound(f"Operating condition missing in gain functions: {condition}")

    if _is_missing(spectrum):
        x = compute_spectrum(signal)
    else:
        x = as_column_matrix(spectrum, "spectrum")
    n_bins = x.shape[0]

    if columns is not None and len(columns) != x.shape[1]:
        raise DimensionMismatch(f"Got {len(columns)} column names for {x.shape[1]} signal columns")

    logger.debug(f"SFRF-Response: {len(matched)} fault rows for {condition}, "
                 f"spectrum {n_bins} bins x {x.shape[1]} columns", 3)

    rows = []
    for mask_row in matched:
        if len(mask_row.center_mask) != n_bins or len(mask_row.surround_mask) != n_bins:
            logger.error(f"SFRF-Response: Mask length {len(mask_row.center_mask)} "
                         f"does not match FFT length {n_bins}")
            raise MaskLengthMismatch(
                f"Mask length {len(mask_row.center_mask)} does not match FFT length {n_bins}.")

        k = shape_parameters.inhibition_factor(mask_row.family)
        values = single_mode_response(
            x, mask_row.center_mask, mask_row.surround_mask, gain_mask_table.frequency_axis, k)
        rows.append(ResponseRow(family=mask_row.family, values=np.asarray(values, dtype=float)))

    return ResponseTable(condition=condition, rows=tuple(rows),
                         columns=tuple(columns) if columns is not None else None)
