"""
Receptive-field shape parameters per bearing fault family.

A FaultShapeParameters record fixes how many harmonics and sidebands are
generated for a family, the widths of the center and surround bands, the
Gaussian sigma rules used for their masks and the surround inhibition
weight. A ShapeParameterSet holds one record per fault family.
"""

from dataclasses import dataclass, replace, fields
from typing import Mapping, Optional

from sfrfs import config
from sfrfs.errors import ValidationError
from sfrfs.families import FaultFamily, FAULT_FAMILIES
from sfrfs.parameters.validators import require_integer, require_positive, require_in_range


@dataclass(frozen=True)
class FaultShapeParameters:
    """
    Shape of the receptive field of one fault family.

    ``order`` is not used by band or mask synthesis; it sets the number of
    previous snapshots stacked by ``stack_lagged_responses``.
    """

    order: int = config.SHAPE_DEFAULTS["order"]
    num_harmonics: int = config.SHAPE_DEFAULTS["num_harmonics"]
    num_sidebands: int = config.SHAPE_DEFAULTS["num_sidebands"]
    center_bandwidth: float = config.SHAPE_DEFAULTS["center_bandwidth"]
    center_sigma_rule: float = config.SHAPE_DEFAULTS["center_sigma_rule"]
    surround_bandwidth: float = config.SHAPE_DEFAULTS["surround_bandwidth"]
    surround_sigma_rule: float = config.SHAPE_DEFAULTS["surround_sigma_rule"]
    inhibition_factor: float = config.SHAPE_DEFAULTS["inhibition_factor"]

    def __post_init__(self):
        # Frozen: write the normalised values through object.__setattr__
        validated = _validate_fields(
            order=self.order,
            num_harmonics=self.num_harmonics,
            num_sidebands=self.num_sidebands,
            center_bandwidth=self.center_bandwidth,
            center_sigma_rule=self.center_sigma_rule,
            surround_bandwidth=self.surround_bandwidth,
            surround_sigma_rule=self.surround_sigma_rule,
            inhibition_factor=self.inhibition_factor,
        )
        for name, value in validated.items():
            object.__setattr__(self, name, value)

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, values, name="shape parameters"):
        """
        Build a record from a mapping holding every shape field.

        Args:
            values (Mapping): Field name -> value. All fields in ``config.SHAPE_FIELDS`` are required.
            name (str): Label used in error messages (e.g. the fault family).

        Raises:
            ValidationError: If fields are missing or unknown, or values are out of domain.
        """
        if isinstance(values, cls):
            return values
        if not isinstance(values, Mapping):
            raise ValidationError(f"{name} must be a mapping or FaultShapeParameters, got {type(values).__name__}")

        missing = [f for f in config.SHAPE_FIELDS if f not in values]
        if missing:
            raise ValidationError(f"{name} (missing fields: {', '.join(missing)})")
        unknown = sorted(set(values) - set(config.SHAPE_FIELDS))
        if unknown:
            raise ValidationError(f"{name} (unknown fields: {', '.join(unknown)})")
        return cls(**{f: values[f] for f in config.SHAPE_FIELDS})


def _validate_fields(order, num_harmonics, num_sidebands, center_bandwidth, center_sigma_rule,
                     surround_bandwidth, surround_sigma_rule, inhibition_factor):
    return {
        "order": require_integer("order", order, minimum=0),
        "num_harmonics": require_integer("num_harmonics", num_harmonics, minimum=1),
        "num_sidebands": require_integer("num_sidebands", num_sidebands, minimum=0),
        "center_bandwidth": require_positive("center_bandwidth", center_bandwidth),
        "center_sigma_rule": require_positive("center_sigma_rule", center_sigma_rule),
        "surround_bandwidth": require_positive("surround_bandwidth", surround_bandwidth),
        "surround_sigma_rule": require_positive("surround_sigma_rule", surround_sigma_rule),
        "inhibition_factor": require_in_range("inhibition_factor", inhibition_factor, 0.0, 1.0),
    }


def make_shape_parameters(order=0, num_harmonics=10, num_sidebands=2, center_bandwidth=4,
                          center_sigma_rule=6, surround_bandwidth=12, surround_sigma_rule=1,
                          inhibition_factor=0.8):
    """
    Build validated shape parameters for one fault family.

    Args:
        order (int): Number of lagged snapshots to stack (>= 0).
        num_harmonics (int): Harmonics of the carrier frequency (>= 1).
        num_sidebands (int): Sidebands on each side of a harmonic (>= 0).
        center_bandwidth (float): Full width of the center band in Hz (> 0).
        center_sigma_rule (float): Center mask sigma = bandwidth / (2 * rule) (> 0).
        surround_bandwidth (float): Full width of the surround band in Hz (> 0).
        surround_sigma_rule (float): Surround mask sigma rule (> 0).
        inhibition_factor (float): Surround weight in [0, 1].

    Returns:
        FaultShapeParameters: Immutable record.

    Raises:
        ValidationError: If any value is out of its domain.
    """
    return FaultShapeParameters(
        order=order,
        num_harmonics=num_harmonics,
        num_sidebands=num_sidebands,
        center_bandwidth=center_bandwidth,
        center_sigma_rule=center_sigma_rule,
        surround_bandwidth=surround_bandwidth,
        surround_sigma_rule=surround_sigma_rule,
        inhibition_factor=inhibition_factor,
    )


@dataclass(frozen=True)
class ShapeParameterSet:
    """Shape parameters for the four rolling bearing fault families."""

    outer_race: FaultShapeParameters
    inner_race: FaultShapeParameters
    ball: FaultShapeParameters
    cage: FaultShapeParameters

    def __post_init__(self):
        for family in FAULT_FAMILIES:
            params = getattr(self, family.value)
            if not isinstance(params, FaultShapeParameters):
                raise ValidationError(
                    f"{family.value} must be FaultShapeParameters, got {type(params).__name__}")
            if not family.allows_sidebands and params.num_sidebands > 0:
                raise ValidationError(
                    f"{family.value} fault type must have num_sidebands = 0, got {params.num_sidebands}")

    def __getitem__(self, family):
        return getattr(self, FaultFamily.coerce(family).value)

    def items(self):
        return [(family, self[family]) for family in FAULT_FAMILIES]

    def inhibition_factor(self, family):
        return self[family].inhibition_factor

    def __str__(self):
        parts = ", ".join(f"{family.value}: {params.as_dict()}" for family, params in self.items())
        return f"[ShapeParameterSet: {parts}]"


def make_shape_parameter_set(outer_race=None, inner_race=None, ball=None, cage=None,
                             same_for_all: Optional[FaultShapeParameters] = None):
    """
    Build the per-family shape parameter set.

    Either pass one record per family, or a single ``same_for_all`` record that is
    replicated to every family. In replicate mode the outer race and cage copies
    get ``num_sidebands = 0``; in per-family mode sidebands on those families are
    rejected.

    Records may be FaultShapeParameters or mappings with every shape field.

    Raises:
        ValidationError: On conflicting or missing arguments, incomplete mappings,
            or sidebands requested for the outer race or cage.
    """
    per_family = {
        FaultFamily.OUTER_RACE: outer_race,
        FaultFamily.INNER_RACE: inner_race,
        FaultFamily.BALL: ball,
        FaultFamily.CAGE: cage,
    }

    if same_for_all is not None:
        given = [family.value for family, params in per_family.items() if params is not None]
        if given:
            raise ValidationError(
                f"Conflicting arguments: no per-family parameters allowed with same_for_all (got {', '.join(given)})")
        shared = FaultShapeParameters.from_mapping(same_for_all, name="same_for_all")
        no_sidebands = replace(shared, num_sidebands=0)
        return ShapeParameterSet(
            outer_race=no_sidebands,
            inner_race=shared,
            ball=shared,
            cage=no_sidebands,
        )

    missing = [family.value for family, params in per_family.items() if params is None]
    if missing:
        raise ValidationError(f"Missing fault type parameters: {', '.join(missing)}")

    records = {}
    problems = []
    for family, params in per_family.items():
        try:
            records[family.value] = FaultShapeParameters.from_mapping(params, name=family.value)
        except ValidationError as e:
            problems.append(str(e))
    if problems:
        raise ValidationError(f"Missing or incomplete shape parameters: {'; '.join(problems)}")

    return ShapeParameterSet(**records)
