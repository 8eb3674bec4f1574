"""
Frequency band synthesis for bearing fault receptive fields.

For every operating condition and fault family this module generates the
harmonics of the family's carrier frequency (plus shaft-speed sidebands for
inner race and ball faults) and turns each of them into a labelled
FrequencyBand holding a narrow center interval and a wide surround interval.

Label convention:
    "3Fo"       third harmonic of BPFO
    "2Fi-1Fr"   second harmonic of BPFI, first lower sideband (shaft rotation)
    "1Fb+2Fc"   first harmonic of BSF, second upper sideband

Bands whose center or surround interval would start below 0 Hz are dropped.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

from sfrfs import config
from sfrfs.bands.fault_frequencies import carrier_frequency
from sfrfs.errors import MalformedBandContainer, ValidationError
from sfrfs.families import FaultFamily, FAULT_FAMILIES
from sfrfs.parameters.operating_conditions import OperatingCondition
from sfrfs.parameters.shape import ShapeParameterSet
from sfrfs.utils import Logger, resolve_logger


@dataclass(frozen=True)
class FrequencyBand:
    """
    One labelled band around a harmonic or sideband frequency.

    Attributes:
        harmonic_index: Harmonic number (>= 1).
        sideband_index: Sideband number, 0 for the bare harmonic.
        label: Band label, e.g. "1Fi+2Fr".
        frequency: Generating frequency in Hz (center of both intervals).
        center_edges: (low, high) edges of the center band in Hz.
        surround_edges: (low, high) edges of the surround band in Hz.
    """

    harmonic_index: int
    sideband_index: int
    label: str
    frequency: float
    center_edges: Tuple[float, float]
    surround_edges: Tuple[float, float]

    @property
    def is_valid(self):
        """True when neither interval starts below 0 Hz."""
        return self.center_edges[0] >= 0 and self.surround_edges[0] >= 0

    @property
    def is_characteristic(self):
        """True for the first harmonic without sideband, i.e. the carrier itself."""
        return self.harmonic_index == 1 and self.sideband_index == 0


@dataclass(frozen=True)
class BandTableRow:
    """Bands of one fault family at one operating condition."""

    condition: OperatingCondition
    family: FaultFamily
    bands: Tuple[FrequencyBand, ...] = ()

    def __post_init__(self):
        bands = self.bands
        if isinstance(bands, FrequencyBand) or not isinstance(bands, (tuple, list)):
            raise MalformedBandContainer(
                f"Bands must be a sequence of FrequencyBand, got {type(bands).__name__}")
        if not all(isinstance(b, FrequencyBand) for b in bands):
            raise MalformedBandContainer("Bands must contain only FrequencyBand records")
        object.__setattr__(self, "bands", tuple(bands))

    @property
    def labels(self):
        return [b.label for b in self.bands]

    def __len__(self):
        return len(self.bands)


@dataclass(frozen=True)
class BandTable:
    """
    Frequency bands for every (operating condition, fault family) pair.

    Rows are ordered by condition, then by family in the order of FAULT_FAMILIES.
    The shape parameters the bands were built with travel with the table so
    that mask synthesis can pick up the matching sigma rules.
    """

    rows: Tuple[BandTableRow, ...] = ()
    shape_parameters: Optional[ShapeParameterSet] = None

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    def rows_for(self, condition):
        """All rows whose condition equals the given one (exact speed/load match)."""
        return [r for r in self.rows if r.condition == condition]

    def row(self, condition, family):
        family = FaultFamily.coerce(family)
        for r in self.rows:
            if r.condition == condition and r.family is family:
                return r
        raise KeyError(f"No bands for {condition} / {family.value}")

    def to_frame(self):
        """
        Long-format view with one line per band.

        Returns:
            pd.DataFrame: Columns FaultGroup, Description, Speed, Load, Label,
            Harmonic, Sideband, Frequency, CenterLow, CenterHigh, SurroundLow, SurroundHigh.
        """
        records = []
        for r in self.rows:
            for b in r.bands:
                records.append({
                    'FaultGroup': r.family.group,
                    'Description': r.family.description,
                    config.SPEED_COLUMN: r.condition.speed_hz,
                    config.LOAD_COLUMN: r.condition.load_kn,
                    'Label': b.label,
                    'Harmonic': b.harmonic_index,
                    'Sideband': b.sideband_index,
                    'Frequency': b.frequency,
                    'CenterLow': b.center_edges[0],
                    'CenterHigh': b.center_edges[1],
                    'SurroundLow': b.surround_edges[0],
                    'SurroundHigh': b.surround_edges[1],
                })
        columns = ['FaultGroup', 'Description', config.SPEED_COLUMN, config.LOAD_COLUMN, 'Label',
                   'Harmonic', 'Sideband', 'Frequency', 'CenterLow', 'CenterHigh',
                   'SurroundLow', 'SurroundHigh']
        return pd.DataFrame.from_records(records, columns=columns)


def build_label(harmonic_index, sideband_index, central_code, modulation_code=None):
    """
    Build a band label.

    Args:
        harmonic_index (int): Harmonic number.
        sideband_index (int): Sideband number, 0 for the bare harmonic.
        central_code (str): Code of the carrier frequency (e.g. "Fi").
        modulation_code (str, optional): Code of the modulation frequency, required
            when ``sideband_index`` is not 0.

    Returns:
        str: "{h}{code}" or "{h}{code}{+|-}{|sb|}{modulation}".
    """
    if sideband_index == 0:
        return f"{harmonic_index}{central_code}"
    if not modulation_code:
        raise ValidationError("Modulation code required for nonzero sidebands")
    return f"{harmonic_index}{central_code}{sideband_index:+d}{modulation_code}"


def make_band(frequency, params, harmonic_index, sideband_index, central_code, modulation_code=None):
    """Create a FrequencyBand with symmetric center and surround intervals around ``frequency``."""
    label = build_label(harmonic_index, sideband_index, central_code, modulation_code)
    half_center = params.center_bandwidth / 2
    half_surround = params.surround_bandwidth / 2
    return FrequencyBand(
        harmonic_index=harmonic_index,
        sideband_index=sideband_index,
        label=label,
        frequency=float(frequency),
        center_edges=(frequency - half_center, frequency + half_center),
        surround_edges=(frequency - half_surround, frequency + half_surround),
    )


def filter_invalid_bands(bands, logger=None):
    """
    Drop bands whose center or surround interval starts below 0 Hz.

    Each band is judged on its own edges only.

    Returns:
        list: The valid bands, in their original order.
    """
    logger = resolve_logger(logger)
    valid = [b for b in bands if b.is_valid]
    dropped = [b for b in bands if not b.is_valid]

    if dropped:
        for b in dropped:
            logger.debug(
                f"SFRF-Bands: Negative frequency band {b.label}. "
                f"Center band limits: [{b.center_edges[0]:g}, {b.center_edges[1]:g}]. "
                f"Surround band limits: [{b.surround_edges[0]:g}, {b.surround_edges[1]:g}]", 3)
        logger.info(
            f"SFRF-Bands: Negative frequency bands dropped ({len(dropped)}): "
            f"{', '.join(b.label for b in dropped)}")

    return valid


def compute_family_bands(geometry, family, speed, params, logger=None):
    """
    Generate the bands of one fault family at one shaft speed.

    Harmonics run 1..num_harmonics. For families with a modulation source
    (inner race, ball) each harmonic also yields sidebands
    ``h * f0 + sb * speed`` for sb in [-num_sidebands, num_sidebands].

    Args:
        geometry (BearingGeometry): Bearing geometry.
        family (FaultFamily): Fault family.
        speed (float): Shaft speed in Hz, also the sideband spacing.
        params (FaultShapeParameters): Shape parameters of the family.
        logger (Logger, optional): Logger instance.

    Returns:
        list: Valid FrequencyBand records, harmonic-major, sidebands from -S to +S.
    """
    logger = resolve_logger(logger)
    family = FaultFamily.coerce(family)
    f0 = carrier_frequency(geometry, family, speed)
    num_sidebands = params.num_sidebands if family.allows_sidebands else 0
    f_mod = speed

    logger.debug(
        f"SFRF-Bands: {family.description}: f0={f0:.6f} Hz, "
        f"harmonics={params.num_harmonics}, sidebands={num_sidebands}", 2)

    bands = []
    for h in range(1, params.num_harmonics + 1):
        f_central = h * f0
        for sb in range(-num_sidebands, num_sidebands + 1):
            if sb == 0:
                bands.append(make_band(f_central, params, h, 0, family.code))
            else:
                bands.append(make_band(f_central + sb * f_mod, params, h, sb,
                                       family.code, family.modulation_code))

    return filter_invalid_bands(bands, logger)


def generate_bands(geometry, grid, shape_parameters, logger=None):
    """
    Synthesize the band table for every operating condition and fault family.

    Args:
        geometry (BearingGeometry): Bearing geometry.
        grid (OperatingConditionGrid): Operating conditions.
        shape_parameters (ShapeParameterSet): Shape parameters per fault family.
        logger (Logger, optional): Logger instance.

    Returns:
        BandTable: One row per condition x family. Pure function of its inputs.

    Example:
        >>> table = generate_bands(make_geometry(8, 7.92, 34.55, 0),
        ...                        make_operating_grid([30.0], [10.0]),
        ...                        make_shape_parameter_set(same_for_all=make_shape_parameters()))
        >>> len(table)
        4
    """
    logger = resolve_logger(logger)
    logger.debug(f"SFRF-Bands: {geometry}", 1)

    rows = []
    for condition in grid:
        logger.info(f"SFRF-Bands: Computing fault bands for {condition}")
        for family in FAULT_FAMILIES:
            bands = compute_family_bands(
                geometry, family, condition.speed_hz, shape_parameters[family], logger)
            rows.append(BandTableRow(condition=condition, family=family, bands=tuple(bands)))

    table = BandTable(tuple(rows), shape_parameters=shape_parameters)
    logger.log_message(
        f"SFRF-Bands: Generated {len(table)} band rows "
        f"({sum(len(r) for r in table)} bands) for {len(grid)} conditions",
        Logger.INFO)
    return table
