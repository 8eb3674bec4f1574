"""
Exception types raised by the SFRFs pipeline.

Concrete errors also derive from the matching builtin exception, so callers
that already catch ``ValueError`` or ``LookupError`` keep working.
"""


class SFRFError(Exception):
    """Base class for all errors raised by the toolbox."""


class ValidationError(SFRFError, ValueError):
    """Geometry, shape parameters or other inputs are out of their domain."""


RangeError = ValidationError


class DimensionMismatch(SFRFError, ValueError):
    """Array or sequence lengths do not agree."""


class MaskLengthMismatch(DimensionMismatch):
    """A gain mask does not have one value per spectrum bin."""


class EmptyInput(SFRFError, ValueError):
    """A required array (e.g. the frequency axis) is empty."""


EmptyAxis = EmptyInput


class AmbiguousInput(SFRFError, ValueError):
    """Both a time-domain signal and a spectrum were supplied."""


class NoInput(SFRFError, ValueError):
    """Neither a time-domain signal nor a spectrum was supplied."""


class ConditionNotFound(SFRFError, LookupError):
    """The selected operating condition has no gain masks."""


class EnsembleNotFound(SFRFError, LookupError):
    """No ensemble is registered under the requested name."""


class MalformedBandContainer(SFRFError, TypeError):
    """A band row does not hold a sequence of FrequencyBand records."""


class EnsembleProcessingError(SFRFError):
    """
    One or more ensemble members failed.

    Attributes:
        causes (dict): Member identifier -> exception raised while processing it.
    """

    def __init__(self, message, causes=None):
        super().__init__(message)
        self.causes = dict(causes or {})
