"""
Spectrum provider: raw snapshot samples to complex FFT.
"""

import numpy as np
from scipy.fft import fft

from sfrfs.errors import EmptyInput, ValidationError


def as_column_matrix(values, name="signal"):
    """
    Return ``values`` as a 2-D array [samples x columns].

    1-D input becomes a single column.
    """
    array = np.asarray(values)
    if array.ndim == 0:
        raise ValidationError(f"{name} must be an array, got a scalar")
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    elif array.ndim > 2:
        raise ValidationError(f"{name} must be 1-D or 2-D, got {array.ndim} dimensions")
    if array.shape[0] == 0:
        raise EmptyInput(f"{name} has no samples")
    return array


def compute_spectrum(samples):
    """
    Two-sided complex FFT of each column.

    Args:
        samples (array-like): Time-domain samples [samples x columns] or a 1-D vector.

    Returns:
        np.ndarray: Complex spectrum [bins x columns], bins = number of samples.
    """
    x = as_column_matrix(samples, "samples").astype(float, copy=False)
    return fft(x, axis=0)
