"""
Characteristic fault frequencies and receptive-field band synthesis.
"""

from .fault_frequencies import carrier_frequency, calculate_fault_frequencies
from .frequency_bands import (
    FrequencyBand,
    BandTableRow,
    BandTable,
    build_label,
    filter_invalid_bands,
    compute_family_bands,
    generate_bands
)

__all__ = [
    'carrier_frequency',
    'calculate_fault_frequencies',
    'FrequencyBand',
    'BandTableRow',
    'BandTable',
    'build_label',
    'filter_invalid_bands',
    'compute_family_bands',
    'generate_bands'
]
