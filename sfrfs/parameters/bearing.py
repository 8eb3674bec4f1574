"""
Rolling bearing geometry.
"""

from dataclasses import dataclass

import numpy as np

from sfrfs.errors import ValidationError
from sfrfs.parameters.validators import require_integer, require_positive, require_in_range


@dataclass(frozen=True)
class BearingGeometry:
    """
    Physical geometry of a rolling-element bearing.

    Attributes:
        rolling_element_count: Number of balls/rollers.
        ball_diameter: Ball (roller) diameter in mm.
        pitch_diameter: Pitch circle diameter in mm.
        contact_angle_deg: Contact angle in degrees (0 for radial bearings).
    """

    rolling_element_count: int
    ball_diameter: float
    pitch_diameter: float
    contact_angle_deg: float = 0.0

    @property
    def contact_angle_rad(self):
        return np.deg2rad(self.contact_angle_deg)

    @property
    def diameter_ratio(self):
        """(d / D) * cos(phi), the term shared by all fault frequency formulas."""
        return (self.ball_diameter / self.pitch_diameter) * np.cos(self.contact_angle_rad)

    def __str__(self):
        return (f"[BearingGeometry: rolling elements: {self.rolling_element_count}, "
                f"ball diameter: {self.ball_diameter:.3f} mm, "
                f"pitch diameter: {self.pitch_diameter:.3f} mm, "
                f"contact angle: {self.contact_angle_deg:.2f} degrees]")


def make_geometry(rolling_element_count, ball_diameter, pitch_diameter, contact_angle_deg=0.0):
    """
    Build a validated BearingGeometry.

    Args:
        rolling_element_count (int): Number of rolling elements (>= 1).
        ball_diameter (float): Ball diameter (> 0).
        pitch_diameter (float): Pitch diameter (> 0).
        contact_angle_deg (float): Contact angle in degrees, within [0, 90].

    Returns:
        BearingGeometry: Immutable geometry record.

    Raises:
        ValidationError: If any value is out of its domain, or the ball diameter
            is not smaller than the pitch diameter.

    Example:
        >>> geometry = make_geometry(8, 7.92, 34.55, 0)
        >>> geometry.rolling_element_count
        8
    """
    ball = require_positive("ball_diameter", ball_diameter)
    pitch = require_positive("pitch_diameter", pitch_diameter)
    # Keeps every fault frequency strictly positive
    if ball >= pitch:
        raise ValidationError(f"ball_diameter ({ball}) must be smaller than pitch_diameter ({pitch})")

    return BearingGeometry(
        rolling_element_count=require_integer("rolling_element_count", rolling_element_count, minimum=1),
        ball_diameter=ball,
        pitch_diameter=pitch,
        contact_angle_deg=require_in_range("contact_angle_deg", contact_angle_deg, 0.0, 90.0),
    )
