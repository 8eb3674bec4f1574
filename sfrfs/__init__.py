"""
SFRFs: Spectral Fault Receptive Fields for rolling bearing condition monitoring.

This package computes center-surround (difference-of-Gaussians) contrast
indicators from vibration spectra, one per bearing fault family:

- Bearing geometry, operating conditions and receptive-field shape parameters
- Characteristic fault frequency bands with harmonics and sidebands
- Gaussian / super-Gaussian gain masks per operating condition and fault family
- SFRF responses integrated over the spectrum
- Ensemble processing of run-to-failure datasets on a worker pool

Structure:
- parameters/: input records and their validation
- bands/: fault frequencies and band synthesis
- masks/: frequency masks and gain functions
- response/: spectrum provider, response computation, lagged stacking
- ensemble/: member table broker, ensemble registry and parallel processor
- utils/: logger
"""

from .errors import (
    SFRFError,
    ValidationError,
    RangeError,
    DimensionMismatch,
    MaskLengthMismatch,
    EmptyInput,
    EmptyAxis,
    AmbiguousInput,
    NoInput,
    ConditionNotFound,
    EnsembleNotFound,
    MalformedBandContainer,
    EnsembleProcessingError
)

from .families import FaultFamily, FAULT_FAMILIES

from .parameters import (
    BearingGeometry,
    make_geometry,
    OperatingCondition,
    OperatingConditionGrid,
    make_operating_grid,
    FaultShapeParameters,
    ShapeParameterSet,
    make_shape_parameters,
    make_shape_parameter_set,
    SnapshotParameters
)

from .bands import (
    carrier_frequency,
    calculate_fault_frequencies,
    FrequencyBand,
    BandTable,
    generate_bands
)

from .masks import (
    gaussian,
    super_gaussian,
    GainMaskTable,
    synthesize_gain_functions
)

from .response import (
    compute_spectrum,
    ResponseTable,
    compute_response,
    stack_lagged_responses
)

from .ensemble import EnsembleBroker, EnsembleEntry, EnsembleRegistry, EnsembleProcessor

from .utils import Logger

# Version information
__version__ = "1.0.0"

__all__ = [
    # Errors
    'SFRFError',
    'ValidationError',
    'RangeError',
    'DimensionMismatch',
    'MaskLengthMismatch',
    'EmptyInput',
    'EmptyAxis',
    'AmbiguousInput',
    'NoInput',
    'ConditionNotFound',
    'EnsembleNotFound',
    'MalformedBandContainer',
    'EnsembleProcessingError',

    # Fault families
    'FaultFamily',
    'FAULT_FAMILIES',

    # Parameters
    'BearingGeometry',
    'make_geometry',
    'OperatingCondition',
    'OperatingConditionGrid',
    'make_operating_grid',
    'FaultShapeParameters',
    'ShapeParameterSet',
    'make_shape_parameters',
    'make_shape_parameter_set',
    'SnapshotParameters',

    # Bands
    'carrier_frequency',
    'calculate_fault_frequencies',
    'FrequencyBand',
    'BandTable',
    'generate_bands',

    # Masks
    'gaussian',
    'super_gaussian',
    'GainMaskTable',
    'synthesize_gain_functions',

    # Responses
    'compute_spectrum',
    'ResponseTable',
    'compute_response',
    'stack_lagged_responses',

    # Ensemble
    'EnsembleBroker',
    'EnsembleEntry',
    'EnsembleRegistry',
    'EnsembleProcessor',

    # Logging
    'Logger',

    '__version__'
]
