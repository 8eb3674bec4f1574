"""
Frequency masks and receptive-field gain functions.
"""

from .frequency_mask import gaussian, super_gaussian
from .gain_functions import (
    GainMaskRow,
    GainMaskTable,
    combine_band_masks,
    synthesize_gain_functions
)

__all__ = [
    'gaussian',
    'super_gaussian',
    'GainMaskRow',
    'GainMaskTable',
    'combine_band_masks',
    'synthesize_gain_functions'
]
