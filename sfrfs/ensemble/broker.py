"""
Ensemble broker: access to ensemble member tables and column naming.

An ensemble member is a pandas DataFrame with one row per snapshot. Each
temporal signal column ``<signal>`` holds one sample vector per row; the
pipeline reads the spectra from ``<signal>_FFT`` and writes the responses to
``<signal>_SFRFs``. Loading and saving members is delegated to the callables
supplied by the caller, so any storage can sit behind the broker.
"""

import numpy as np

from sfrfs import config
from sfrfs.errors import ValidationError
from sfrfs.response.spectrum import compute_spectrum


def append_suffix(base_name, suffix):
    return f"{base_name}{suffix}"


def remove_suffix(name_with_suffix, suffix):
    """
    Strip ``suffix`` from a column name.

    Raises:
        ValidationError: If the name does not end with the suffix.
    """
    name = str(name_with_suffix)
    if not suffix or not name.endswith(suffix):
        raise ValidationError(f'"{name}" does not end with the expected suffix "{suffix}".')
    return name[:-len(suffix)]


class EnsembleBroker:
    """
    Args:
        members (list or callable): Member identifiers, or a callable returning them.
        load_member (callable): ``load_member(member_id) -> pd.DataFrame``.
        save_member (callable): ``save_member(member_id, frame)``.
        temporal_columns (list): Names of the temporal signal columns.
        sort_field (str): Column the member rows are sorted by after loading.
        spectral_suffix (str): Suffix of the spectrum columns.
        sfrfs_suffix (str): Suffix of the response columns.
    """

    def __init__(self, members, load_member, save_member, temporal_columns,
                 sort_field=config.SORT_FIELD, spectral_suffix=config.SPECTRAL_SUFFIX,
                 sfrfs_suffix=config.SFRFS_SUFFIX):
        if members is None:
            raise ValidationError("Ensemble members cannot be empty.")
        if not callable(load_member) or not callable(save_member):
            raise ValidationError("load_member and save_member must be callables")
        if isinstance(temporal_columns, str) or not all(isinstance(c, str) for c in temporal_columns):
            raise ValidationError("A list with column names is expected")

        self._members = members
        self._load_member = load_member
        self._save_member = save_member
        self.temporal_columns = list(temporal_columns)
        self.sort_field = sort_field
        self.spectral_suffix = spectral_suffix
        self.sfrfs_suffix = sfrfs_suffix

    def get_members(self):
        members = self._members() if callable(self._members) else self._members
        return list(members)

    def map_to_spectral_column(self, column_name):
        return append_suffix(column_name, self.spectral_suffix)

    def map_to_temporal_column(self, spectral_name):
        return remove_suffix(spectral_name, self.spectral_suffix)

    def map_to_sfrf_column(self, column_name):
        return append_suffix(column_name, self.sfrfs_suffix)

    def map_to_temporal_from_sfrf_column(self, sfrfs_name):
        return remove_suffix(sfrfs_name, self.sfrfs_suffix)

    def load(self, member_id, sort=True):
        """
        Load one member table, sorted by ``sort_field``.

        Raises:
            ValidationError: If the sort field is missing from the table.
        """
        frame = self._load_member(member_id)
        if sort:
            if self.sort_field not in frame.columns:
                raise ValidationError(
                    f"Sort field '{self.sort_field}' not found in table loaded from {member_id}.")
            frame = frame.sort_values(self.sort_field, kind="mergesort").reset_index(drop=True)
        return frame

    def save(self, member_id, frame):
        self._save_member(member_id, frame)

    def add_spectrum_columns(self, frame):
        """
        Return a copy of ``frame`` with ``<signal>_FFT`` columns computed from each temporal column.
        """
        frame = frame.copy()
        for column in self.temporal_columns:
            if column not in frame.columns:
                raise ValidationError(f'Temporal column "{column}" not found in member table')
            frame[self.map_to_spectral_column(column)] = [
                compute_spectrum(np.asarray(samples, dtype=float))[:, 0] for samples in frame[column]
            ]
        return frame
