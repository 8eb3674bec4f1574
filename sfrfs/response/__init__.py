"""
Spectrum provider, SFRF response computation and lagged stacking.
"""

from .spectrum import compute_spectrum
from .compute import (
    ResponseRow,
    ResponseTable,
    resolve_condition,
    single_mode_response,
    compute_response
)
from .buffering import stack_lagged_responses

__all__ = [
    'compute_spectrum',
    'ResponseRow',
    'ResponseTable',
    'resolve_condition',
    'single_mode_response',
    'compute_response',
    'stack_lagged_responses'
]
