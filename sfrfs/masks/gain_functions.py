"""
Receptive-field gain functions.

Turns a band table into one center mask and one surround mask per
(operating condition, fault family) row, evaluated on a caller-supplied
frequency axis. All bands of a row are merged with an elementwise maximum
(fuzzy OR), so overlapping bands are not counted twice and the masks stay
within [0, 1].
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from sfrfs import config
from sfrfs.errors import EmptyInput, ValidationError, MalformedBandContainer
from sfrfs.families import FaultFamily
from sfrfs.masks.frequency_mask import gaussian, super_gaussian
from sfrfs.parameters.operating_conditions import OperatingCondition
from sfrfs.utils import resolve_logger


def _read_only(array):
    array = np.array(array, dtype=float, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class GainMaskRow:
    """Combined center and surround masks of one fault family at one operating condition."""

    condition: OperatingCondition
    family: FaultFamily
    center_mask: np.ndarray
    surround_mask: np.ndarray
    num_bands: int = 0

    def __post_init__(self):
        object.__setattr__(self, "center_mask", _read_only(self.center_mask))
        object.__setattr__(self, "surround_mask", _read_only(self.surround_mask))

    def __len__(self):
        return len(self.center_mask)


@dataclass(frozen=True, eq=False)
class GainMaskTable:
    """
    Gain masks for every band row, aligned to ``frequency_axis``.

    The axis is kept because the response integrates over it.
    """

    rows: Tuple[GainMaskRow, ...]
    frequency_axis: np.ndarray
    mask_kind: str = config.MASK_GAUSSIAN

    def __post_init__(self):
        object.__setattr__(self, "frequency_axis", _read_only(self.frequency_axis))

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    @property
    def conditions(self):
        seen = []
        for r in self.rows:
            if r.condition not in seen:
                seen.append(r.condition)
        return seen

    def rows_for(self, condition):
        """Rows whose condition matches exactly on speed and load."""
        return [r for r in self.rows if r.condition.matches(condition.speed_hz, condition.load_kn)]

    def to_frame(self):
        """Summary view: one line per row with the mask peaks and band counts."""
        return pd.DataFrame.from_records([{
            'FaultGroup': r.family.group,
            'Description': r.family.description,
            config.SPEED_COLUMN: r.condition.speed_hz,
            config.LOAD_COLUMN: r.condition.load_kn,
            'NumberOfBands': r.num_bands,
            'CenterMaskMax': float(np.max(r.center_mask)),
            'SurroundMaskMax': float(np.max(r.surround_mask)),
        } for r in self.rows])


def _prepare_axis(frequency_axis):
    axis = np.asarray(frequency_axis, dtype=float)
    if axis.ndim > 1:
        if sum(dim > 1 for dim in axis.shape) > 1:
            raise ValidationError(f"Frequency axis must be a vector, got shape {axis.shape}")
        axis = axis.ravel()
    axis = np.atleast_1d(axis)
    if axis.size == 0:
        raise EmptyInput("Frequency axis is empty.")
    return axis


def _mask_function(mask, beta):
    if mask == config.MASK_GAUSSIAN:
        return lambda f, band, sigma_rule: gaussian(f, band, sigma_rule)
    if mask == config.MASK_SUPER_GAUSSIAN:
        return lambda f, band, sigma_rule: super_gaussian(f, band, beta)
    raise ValidationError(f"Unknown mask kind: {mask!r}. Expected one of {config.MASK_KINDS}")


def combine_band_masks(frequency_axis, bands, params, mask=config.MASK_GAUSSIAN,
                       beta=config.DEFAULT_SUPER_GAUSS_BETA):
    """
    Evaluate and merge the masks of one band row.

    Args:
        frequency_axis (np.ndarray): Frequency axis in Hz (non-empty).
        bands (sequence): FrequencyBand records of the row.
        params (FaultShapeParameters): Shape parameters supplying the sigma rules.
        mask (str): "gaussian" or "super_gaussian".
        beta (float): Super-Gaussian exponent.

    Returns:
        tuple: (center_mask, surround_mask), elementwise maxima over all bands,
        all zeros when ``bands`` is empty.
    """
    mask_fn = _mask_function(mask, beta)
    center_mask = np.zeros(frequency_axis.shape, dtype=float)
    surround_mask = np.zeros(frequency_axis.shape, dtype=float)

    for band in bands:
        center_mask = np.maximum(
            center_mask, mask_fn(frequency_axis, band.center_edges, params.center_sigma_rule))
        surround_mask = np.maximum(
            surround_mask, mask_fn(frequency_axis, band.surround_edges, params.surround_sigma_rule))

    return center_mask, surround_mask


def synthesize_gain_functions(band_table, frequency_axis, shape_parameters=None,
                              mask=config.MASK_GAUSSIAN, beta=config.DEFAULT_SUPER_GAUSS_BETA,
                              logger=None):
    """
    Compute center and surround gain masks for every row of a band table.

    Args:
        band_table (BandTable): Output of ``generate_bands``.
        frequency_axis (array-like): Frequency axis in Hz (e.g. FFT bin frequencies).
        shape_parameters (ShapeParameterSet, optional): Sigma rules per family.
            Defaults to the parameters stored on the band table.
        mask (str): "gaussian" (default) or "super_gaussian".
        beta (float): Super-Gaussian exponent, ignored for Gaussian masks.
        logger (Logger, optional): Logger instance.

    Returns:
        GainMaskTable: One GainMaskRow per band row, masks of the axis length.

    Raises:
        EmptyInput: If the frequency axis is empty.
        ValidationError: If no shape parameters are available or the mask kind is unknown.
        MalformedBandContainer: If a row does not hold FrequencyBand records.
    """
    logger = resolve_logger(logger)

    try:
        axis = _prepare_axis(frequency_axis)
    except EmptyInput:
        logger.error("SFRF-Masks: Frequency axis is empty")
        raise

    params_set = shape_parameters if shape_parameters is not None else band_table.shape_parameters
    if params_set is None:
        raise ValidationError("Shape parameters are required to synthesize gain functions")

    logger.info(f"SFRF-Masks: Computing {mask} gain functions for {len(band_table)} rows "
                f"on {axis.size} frequency points")

    rows = []
    for i, band_row in enumerate(band_table):
        if not hasattr(band_row, "bands"):
            raise MalformedBandContainer(f"Row {i} is not a band row: {type(band_row).__name__}")
        params = params_set[band_row.family]
        logger.debug(
            f"SFRF-Masks: Row {i}: {band_row.family.description}, {band_row.condition}, "
            f"{len(band_row.bands)} bands, sigma rules center={params.center_sigma_rule} "
            f"surround={params.surround_sigma_rule}", 4)

        center_mask, surround_mask = combine_band_masks(axis, band_row.bands, params, mask, beta)
        rows.append(GainMaskRow(
            condition=band_row.condition,
            family=band_row.family,
            center_mask=center_mask,
            surround_mask=surround_mask,
            num_bands=len(band_row.bands),
        ))

    return GainMaskTable(rows=tuple(rows), frequency_axis=axis, mask_kind=mask)
