"""
Ensemble registry: named ensemble descriptions owned by the caller.

A registry maps ensemble names to EnsembleEntry records (member identifiers,
temporal signal columns, sort field and column suffixes). Entries hold no
callables, so a registry can be written to disk with ``save`` and read back
with ``EnsembleRegistry.load``; the load/save callables are bound again when a
broker is created with ``EnsembleEntry.make_broker``.
"""

from dataclasses import dataclass, replace
from typing import Tuple

import pandas as pd

from sfrfs import config
from sfrfs.ensemble.broker import EnsembleBroker
from sfrfs.errors import EnsembleNotFound, ValidationError
from sfrfs.utils import resolve_logger

_COLUMNS = ['Name', 'Members', 'TemporalColumns', 'SortField', 'SpectralSuffix', 'SFRFsSuffix']


@dataclass(frozen=True)
class EnsembleEntry:
    """
    Storage-independent description of one ensemble.

    Attributes:
        members: Member identifiers.
        temporal_columns: Names of the temporal signal columns.
        sort_field: Column the member rows are sorted by.
        spectral_suffix: Suffix of the spectrum columns.
        sfrfs_suffix: Suffix of the response columns.
    """

    members: Tuple[str, ...]
    temporal_columns: Tuple[str, ...]
    sort_field: str = config.SORT_FIELD
    spectral_suffix: str = config.SPECTRAL_SUFFIX
    sfrfs_suffix: str = config.SFRFS_SUFFIX

    def __post_init__(self):
        if isinstance(self.temporal_columns, str) or isinstance(self.members, str):
            raise ValidationError("members and temporal_columns must be sequences, not strings")
        object.__setattr__(self, "members", tuple(self.members))
        object.__setattr__(self, "temporal_columns", tuple(self.temporal_columns))
        if not all(isinstance(c, str) for c in self.temporal_columns):
            raise ValidationError("A list with column names is expected")

    @classmethod
    def from_broker(cls, broker):
        return cls(
            members=tuple(broker.get_members()),
            temporal_columns=tuple(broker.temporal_columns),
            sort_field=broker.sort_field,
            spectral_suffix=broker.spectral_suffix,
            sfrfs_suffix=broker.sfrfs_suffix,
        )

    def make_broker(self, load_member, save_member):
        """Bind storage callables and return an EnsembleBroker over this entry."""
        return EnsembleBroker(
            list(self.members), load_member, save_member, list(self.temporal_columns),
            sort_field=self.sort_field,
            spectral_suffix=self.spectral_suffix,
            sfrfs_suffix=self.sfrfs_suffix,
        )


class EnsembleRegistry:
    """
    Named ensembles, held by the caller and persisted explicitly.

    Args:
        logger (Logger, optional): Logger instance.
    """

    def __init__(self, logger=None):
        self.logger = resolve_logger(logger)
        self._entries = {}

    def __len__(self):
        return len(self._entries)

    def __contains__(self, name):
        return self.has(name)

    def add(self, name, ensemble):
        """
        Register an ensemble, replacing any previous entry with the same name.

        Args:
            name (str): Ensemble name.
            ensemble (EnsembleEntry or EnsembleBroker): Ensemble to register.

        Returns:
            EnsembleEntry: The stored entry.
        """
        name = self._check_name(name)
        if isinstance(ensemble, EnsembleBroker):
            ensemble = EnsembleEntry.from_broker(ensemble)
        if not isinstance(ensemble, EnsembleEntry):
            raise ValidationError(
                f"Expected EnsembleEntry or EnsembleBroker, got {type(ensemble).__name__}")

        if name in self._entries:
            self.logger.info(f'SFRF-Registry: Overwriting ensemble "{name}".')
        self._entries[name] = ensemble
        self.logger.info(f'SFRF-Registry: Ensemble "{name}" added.')
        return ensemble

    def get(self, name):
        """
        Raises:
            EnsembleNotFound: If no ensemble is registered under ``name``.
        """
        name = self._check_name(name)
        if name not in self._entries:
            self.logger.error(f'SFRF-Registry: No ensemble registered with name "{name}".')
            raise EnsembleNotFound(f'No ensemble registered with name "{name}".')
        return self._entries[name]

    def has(self, name):
        return str(name) in self._entries

    def names(self):
        return list(self._entries.keys())

    def reconfigure(self, name, temporal_columns=None, members=None, sort_field=None):
        """
        Update selected fields of a registered ensemble; unspecified fields are kept.

        Returns:
            EnsembleEntry: The updated entry.
        """
        entry = self.get(name)
        changes = {}
        if temporal_columns is not None:
            changes["temporal_columns"] = tuple(temporal_columns)
        if members is not None:
            changes["members"] = tuple(members)
        if sort_field is not None:
            changes["sort_field"] = sort_field

        for field, value in changes.items():
            self.logger.info(f'SFRF-Registry: "{name}" {field}: {getattr(entry, field)} -> {value}')
        entry = replace(entry, **changes)
        self._entries[str(name)] = entry
        return entry

    def remove(self, name):
        """Remove an ensemble; unknown names are ignored."""
        name = str(name)
        if self._entries.pop(name, None) is not None:
            self.logger.info(f'SFRF-Registry: Removed ensemble "{name}".')

    def clear(self):
        self._entries.clear()
        self.logger.info("SFRF-Registry: All ensembles removed.")

    def to_frame(self):
        return pd.DataFrame.from_records([{
            'Name': name,
            'Members': list(e.members),
            'TemporalColumns': list(e.temporal_columns),
            'SortField': e.sort_field,
            'SpectralSuffix': e.spectral_suffix,
            'SFRFsSuffix': e.sfrfs_suffix,
        } for name, e in self._entries.items()], columns=_COLUMNS)

    def save(self, path):
        """Write all entries to a pickle file at ``path``."""
        self.to_frame().to_pickle(path)
        self.logger.info(f"SFRF-Registry: Saved {len(self)} ensembles to {path}")

    @classmethod
    def load(cls, path, logger=None):
        """
        Read a registry written by ``save``.

        Raises:
            ValidationError: If the file does not hold a registry table.
        """
        frame = pd.read_pickle(path)
        if not isinstance(frame, pd.DataFrame) or not set(_COLUMNS).issubset(frame.columns):
            raise ValidationError(f"{path} does not contain an ensemble registry")

        registry = cls(logger)
        for row in frame.itertuples(index=False):
            registry._entries[row.Name] = EnsembleEntry(
                members=tuple(row.Members),
                temporal_columns=tuple(row.TemporalColumns),
                sort_field=row.SortField,
                spectral_suffix=row.SpectralSuffix,
                sfrfs_suffix=row.SFRFsSuffix,
            )
        registry.logger.info(f"SFRF-Registry: Loaded {len(registry)} ensembles from {path}")
        return registry

    @staticmethod
    def _check_name(name):
        if not isinstance(name, str) or not name:
            raise ValidationError(f"Ensemble name must be a non-empty string, got {name!r}")
        return name
