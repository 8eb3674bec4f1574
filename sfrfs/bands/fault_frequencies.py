"""
Characteristic fault frequencies of rolling bearings.

Formulas (n rolling elements, ball diameter d, pitch diameter D, contact angle phi):
    BPFO = (n/2) * f_shaft * [1 - (d/D) * cos(phi)]
    BPFI = (n/2) * f_shaft * [1 + (d/D) * cos(phi)]
    BSF  = (D/(2d)) * f_shaft * [1 - ((d/D) * cos(phi))^2]
    FTF  = (f_shaft/2) * [1 - (d/D) * cos(phi)]
"""

from sfrfs.families import FaultFamily


def carrier_frequency(geometry, family, speed):
    """
    Characteristic (carrier) frequency of a fault family.

    Args:
        geometry (BearingGeometry): Bearing geometry.
        family (FaultFamily): Fault family.
        speed (float): Shaft speed in Hz.

    Returns:
        float: Carrier frequency in Hz.

    Example:
        >>> g = make_geometry(8, 7.92, 34.55, 0)
        >>> round(carrier_frequency(g, FaultFamily.OUTER_RACE, 30.0), 3)
        92.494
    """
    family = FaultFamily.coerce(family)
    n = geometry.rolling_element_count
    d = geometry.ball_diameter
    D = geometry.pitch_diameter
    ratio = geometry.diameter_ratio

    if family is FaultFamily.OUTER_RACE:
        return float((n / 2) * speed * (1 - ratio))
    if family is FaultFamily.INNER_RACE:
        return float((n / 2) * speed * (1 + ratio))
    if family is FaultFamily.BALL:
        return float((D / (2 * d)) * speed * (1 - ratio ** 2))
    if family is FaultFamily.CAGE:
        return float(0.5 * speed * (1 - ratio))
    raise ValueError(f"Unknown fault family: {family}")


def calculate_fault_frequencies(geometry, speed):
    """
    Calculate all characteristic fault frequencies for one shaft speed.

    Args:
        geometry (BearingGeometry): Bearing geometry.
        speed (float): Shaft speed in Hz.

    Returns:
        dict: Dictionary with BPFO, BPFI, BSF, FTF and shaft frequencies in Hz.
    """
    return {
        'BPFO': carrier_frequency(geometry, FaultFamily.OUTER_RACE, speed),
        'BPFI': carrier_frequency(geometry, FaultFamily.INNER_RACE, speed),
        'BSF': carrier_frequency(geometry, FaultFamily.BALL, speed),
        'FTF': carrier_frequency(geometry, FaultFamily.CAGE, speed),
        'shaft': float(speed)
    }
