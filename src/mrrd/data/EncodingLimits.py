"""Encoding limits dataclass."""

import dataclasses
from dataclasses import dataclass

from ismrmrd.xsd.ismrmrdschema.ismrmrd import encodingLimitsType, limitType
from typing_extensions import Self

# ISMRMRD names of the k-space encoding limits
_K_NAMES = {'k0': 'kspace_encoding_step_0', 'k1': 'kspace_encoding_step_1', 'k2': 'kspace_encoding_step_2'}


@dataclass(slots=True)
class Limits:
    """Limits dataclass with min, max, and center attributes."""

    min: int = 0
    """Lower boundary."""

    max: int = 0
    """Upper boundary."""

    center: int = 0
    """Center."""

    @classmethod
    def from_ismrmrd(cls, limit_type: limitType | None) -> Self:
        """Create Limits from ismrmrd.limitType."""
        if limit_type is None:
            return cls()
        return cls(limit_type.minimum, limit_type.maximum, limit_type.center)

    def to_ismrmrd(self) -> limitType:
        """Create ismrmrd.limitType from Limits."""
        return limitType(minimum=self.min, maximum=self.max, center=self.center)


@dataclass(slots=True)
class EncodingLimits:
    """Encoding limits dataclass with limits for each attribute [INA2016]_.

    References
    ----------
    .. [INA2016] Inati S, Hansen M (2016) ISMRM Raw data format: A proposed standard for MRI raw datasets. MRM 77(1)
        https://doi.org/10.1002/mrm.26089

    """

    k0: Limits = dataclasses.field(default_factory=Limits)
    """First k-space encoding."""

    k1: Limits = dataclasses.field(default_factory=Limits)
    """Second k-space encoding."""

    k2: Limits = dataclasses.field(default_factory=Limits)
    """Third k-space encoding."""

    average: Limits = dataclasses.field(default_factory=Limits)
    """Signal average."""

    slice: Limits = dataclasses.field(default_factory=Limits)
    """Slice number (multi-slice 2D)."""

    contrast: Limits = dataclasses.field(default_factory=Limits)
    """Echo number in multi-echo."""

    phase: Limits = dataclasses.field(default_factory=Limits)
    """Cardiac phase."""

    repetition: Limits = dataclasses.field(default_factory=Limits)
    """Repeated/dynamic acquisitions."""

    set: Limits = dataclasses.field(default_factory=Limits)
    """Sets of different preparation."""

    segment: Limits = dataclasses.field(default_factory=Limits)
    """Segments of segmented acquisition."""

    @classmethod
    def from_ismrmrd_encoding_limits_type(cls, encoding_limits: encodingLimitsType | None) -> Self:
        """Generate EncodingLimits from ismrmrd.encodingLimitsType."""
        if encoding_limits is None:
            return cls()
        values = {}
        for field in dataclasses.fields(cls):
            # adjust from ISMRMRD to our naming convention
            ismrmrd_name = _K_NAMES.get(field.name, field.name)
            values[field.name] = Limits.from_ismrmrd(getattr(encoding_limits, ismrmrd_name))
        return cls(**values)

    def to_ismrmrd_encoding_limits_type(self) -> encodingLimitsType:
        """Create ismrmrd.encodingLimitsType.

        Only limits which differ from the default are written.
        """
        encoding_limits = encodingLimitsType()
        for field in dataclasses.fields(self):
            limits = getattr(self, field.name)
            if limits != Limits():
                setattr(encoding_limits, _K_NAMES.get(field.name, field.name), limits.to_ismrmrd())
        return encoding_limits
