"""
Snapshot acquisition parameters.

A snapshot is a fixed-length window of vibration samples. Its sampling
frequency and duration define the FFT frequency axis the gain masks are
evaluated on.
"""

from dataclasses import dataclass

import numpy as np

from sfrfs import config
from sfrfs.errors import ValidationError
from sfrfs.parameters.validators import require_positive


@dataclass(frozen=True)
class SnapshotParameters:
    """
    Attributes:
        sampling_frequency: Sampling frequency in Hz.
        duration: Snapshot window duration in seconds.
        stride: Time between consecutive snapshots in seconds.
    """

    sampling_frequency: float
    duration: float
    stride: float = config.DEFAULT_STRIDE

    def __post_init__(self):
        object.__setattr__(self, "sampling_frequency",
                           require_positive("sampling_frequency", self.sampling_frequency))
        object.__setattr__(self, "duration", require_positive("duration", self.duration))
        object.__setattr__(self, "stride", require_positive("stride", self.stride))
        if self.total_samples < 1:
            raise ValidationError(
                f"Snapshot window holds no samples: sampling_frequency * duration = "
                f"{self.sampling_frequency * self.duration:g}")

    @property
    def total_samples(self):
        return int(round(self.sampling_frequency * self.duration))

    def frequency_axis(self):
        """
        Two-sided FFT bin frequencies ``k * fs / N`` for ``k = 0 .. N-1``.

        Returns:
            np.ndarray: Frequency axis in Hz, length ``total_samples``.
        """
        n = self.total_samples
        return np.arange(n, dtype=float) * (self.sampling_frequency / n)

    def time_axis(self):
        n = self.total_samples
        return np.arange(n, dtype=float) / self.sampling_frequency

    def __str__(self):
        return (f"[SnapshotParameters: fs={self.sampling_frequency:.2f} Hz, "
                f"duration={self.duration:.3f} s, stride={self.stride:.3f} s]")
