"""
Lagged stacking of SFRF responses.

A classifier looking at a snapshot often needs the responses of the
previous snapshots too. ``stack_lagged_responses`` concatenates, for every
snapshot, the responses of the ``order`` preceding snapshots and the
current one (oldest first), padding with NaN before the first snapshot.
"""

import numpy as np

from sfrfs.errors import ValidationError
from sfrfs.parameters.validators import require_integer


def stack_lagged_responses(responses, order):
    """
    Stack lagged responses.

    Args:
        responses (array-like): Responses [fault families x snapshots].
        order (int): Number of previous snapshots to include (>= 0).

    Returns:
        np.ndarray: [snapshots x families * (order + 1)]. For order 0 this is
        the transpose of ``responses``.

    Example:
        >>> stack_lagged_responses([[1, 2, 3]], 1)
        array([[nan,  1.],
               [ 1.,  2.],
               [ 2.,  3.]])
    """
    order = require_integer("order", order, minimum=0)
    values = np.asarray(responses, dtype=float)
    if values.ndim != 2:
        raise ValidationError(f"Responses must be 2-D [families x snapshots], got {values.ndim} dimensions")

    n_families, n_snapshots = values.shape
    if order == 0:
        return values.T.copy()

    width = n_families * (order + 1)
    stacked = np.full((n_snapshots, width), np.nan)
    for lag in range(order + 1):
        # Block `lag` holds the snapshot `order - lag` steps back
        shift = order - lag
        block = slice(lag * n_families, (lag + 1) * n_families)
        if shift < n_snapshots:
            stacked[shift:, block] = values[:, :n_snapshots - shift].T
    return stacked
