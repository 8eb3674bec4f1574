"""
Bearing fault families.

Each family has a characteristic frequency code used in band labels, a
human readable description and a numeric group id used in tabular views.
"""

from enum import Enum

from sfrfs import config


class FaultFamily(Enum):
    OUTER_RACE = "outer_race"
    INNER_RACE = "inner_race"
    BALL = "ball"
    CAGE = "cage"

    @property
    def code(self):
        return _CODES[self]

    @property
    def description(self):
        return _DESCRIPTIONS[self]

    @property
    def group(self):
        return _GROUPS[self]

    @property
    def modulation_code(self):
        """Label code of the sideband modulation source, None for families without sidebands."""
        return _MODULATION_CODES[self]

    @property
    def allows_sidebands(self):
        return self.modulation_code is not None

    @classmethod
    def from_group(cls, group):
        for family in cls:
            if family.group == group:
                return family
        raise ValueError(f"Unknown fault group: {group}")

    @classmethod
    def coerce(cls, value):
        """Accept a FaultFamily, its value ('outer_race') or its name ('OUTER_RACE')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown fault family: {value!r}") from None


# Fixed processing order of the families
FAULT_FAMILIES = (
    FaultFamily.OUTER_RACE,
    FaultFamily.INNER_RACE,
    FaultFamily.BALL,
    FaultFamily.CAGE,
)

_CODES = {
    FaultFamily.OUTER_RACE: config.BPFO_CODE,
    FaultFamily.INNER_RACE: config.BPFI_CODE,
    FaultFamily.BALL: config.BSF_CODE,
    FaultFamily.CAGE: config.FTF_CODE,
}

_DESCRIPTIONS = {
    FaultFamily.OUTER_RACE: "Outer Race Fault",
    FaultFamily.INNER_RACE: "Inner Race Fault",
    FaultFamily.BALL: "Ball Fault",
    FaultFamily.CAGE: "Cage Fault",
}

_GROUPS = {
    FaultFamily.OUTER_RACE: 1,
    FaultFamily.INNER_RACE: 2,
    FaultFamily.BALL: 3,
    FaultFamily.CAGE: 4,
}

# Ball sidebands are spaced by shaft speed but labelled with the cage code
_MODULATION_CODES = {
    FaultFamily.OUTER_RACE: None,
    FaultFamily.INNER_RACE: config.FR_CODE,
    FaultFamily.BALL: config.FTF_CODE,
    FaultFamily.CAGE: None,
}
