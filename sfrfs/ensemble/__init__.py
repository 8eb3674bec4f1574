"""
Ensemble collaborators: member table access, named ensemble registry and
parallel processing.
"""

from .broker import EnsembleBroker, append_suffix, remove_suffix
from .registry import EnsembleEntry, EnsembleRegistry
from .processor import EnsembleProcessor

__all__ = [
    'EnsembleBroker',
    'append_suffix',
    'remove_suffix',
    'EnsembleEntry',
    'EnsembleRegistry',
    'EnsembleProcessor'
]
