"""
Input records of the SFRFs pipeline: bearing geometry, operating conditions,
receptive-field shape parameters and snapshot acquisition parameters.
"""

from .bearing import BearingGeometry, make_geometry
from .operating_conditions import OperatingCondition, OperatingConditionGrid, make_operating_grid
from .shape import (
    FaultShapeParameters,
    ShapeParameterSet,
    make_shape_parameters,
    make_shape_parameter_set
)
from .snapshot import SnapshotParameters

__all__ = [
    'BearingGeometry',
    'make_geometry',
    'OperatingCondition',
    'OperatingConditionGrid',
    'make_operating_grid',
    'FaultShapeParameters',
    'ShapeParameterSet',
    'make_shape_parameters',
    'make_shape_parameter_set',
    'SnapshotParameters'
]
