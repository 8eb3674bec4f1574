"""
Frequency-domain mask primitives.

Both masks peak at 1 in the middle of the band:
- gaussian:        exp(-0.5 * ((f - fc) / sigma)^2), sigma = bandwidth / (2 * sigma_rule)
- super_gaussian:  exp(-|(f - fc) / bandwidth|^beta)

With beta = 2 the super-Gaussian equals the Gaussian for sigma_rule = sqrt(2)/2.
"""

import numpy as np

from sfrfs.errors import ValidationError


def _validate_band(band):
    band = np.asarray(band, dtype=float).ravel()
    if band.size != 2:
        raise ValidationError(f"Band must have exactly two edges, got {band.size}")
    if np.any(band < 0):
        raise ValidationError(f"Band edges must be non-negative, got [{band[0]:g}, {band[1]:g}]")
    return band[0], band[1]


def gaussian(f, band, sigma_rule=3.0, normalize=False):
    """
    Gaussian mask over a frequency axis.

    Args:
        f (array-like): Frequency axis in Hz.
        band (tuple): (f_min, f_max) band edges, non-negative.
        sigma_rule (float): Number of sigmas between the band center and each edge.
        normalize (bool): Scale the mask to unit area (rectangle rule with mean bin spacing).

    Returns:
        np.ndarray: Mask values, same length as ``f``.
    """
    if sigma_rule <= 0:
        raise ValidationError(f"sigma_rule must be positive, got {sigma_rule}")
    f_min, f_max = _validate_band(band)
    f = np.atleast_1d(np.asarray(f, dtype=float)).ravel()

    center_freq = (f_min + f_max) / 2
    bandwidth = f_max - f_min
    sigma_f = bandwidth / (2 * sigma_rule)

    mask = np.exp(-0.5 * ((f - center_freq) / sigma_f) ** 2)

    if normalize:
        df = np.mean(np.diff(f)) if f.size > 1 else 0.0
        if df == 0:
            df = 1.0
        mask = mask / (np.sum(mask) * df)

    return mask


def super_gaussian(f, band, beta=2.0):
    """
    Super-Gaussian mask over a frequency axis.

    Larger ``beta`` gives a flatter top and steeper skirts.

    Args:
        f (array-like): Frequency axis in Hz.
        band (tuple): (f_min, f_max) band edges, non-negative.
        beta (float): Shape exponent (> 0).

    Returns:
        np.ndarray: Mask values, same length as ``f``.
    """
    if beta <= 0:
        raise ValidationError(f"beta must be positive, got {beta}")
    f_min, f_max = _validate_band(band)
    f = np.atleast_1d(np.asarray(f, dtype=float)).ravel()

    center_freq = (f_min + f_max) / 2
    alpha = f_max - f_min

    return np.exp(-np.abs((f - center_freq) / alpha) ** beta)
