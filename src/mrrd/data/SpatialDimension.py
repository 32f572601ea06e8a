"""SpatialDimension dataclass."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic

from typing_extensions import Protocol, TypeVar

T = TypeVar('T', int, float)

# Covariant types, as SpatialDimension is a Container
# and we want, for example, SpatialDimension[int] to also be a SpatialDimension[float]
T_co = TypeVar('T_co', int, float, covariant=True)


class XYZ(Protocol[T]):
    """Protocol for structures with attributes x, y and z of type T."""

    x: T
    y: T
    z: T


@dataclass(slots=True)
class SpatialDimension(Generic[T_co]):
    """Spatial dataclass of int/float (z, y, x)."""

    z: T_co
    y: T_co
    x: T_co

    @classmethod
    def from_xyz(cls, data: XYZ[T_co]) -> SpatialDimension[T_co]:
        """Create a SpatialDimension from something with (.x .y .z) parameters.

        Parameters
        ----------
        data
            should implement .x .y .z. For example ismrmrd's matrixSizeType.
        """
        return cls(data.z, data.y, data.x)

    def apply(self, function: Callable[[T_co], T]) -> SpatialDimension[T]:
        """Apply a function to each z, y, x (returning a new object).

        Parameters
        ----------
        function
            function to apply
        """
        return SpatialDimension(function(self.z), function(self.y), function(self.x))

    @property
    def zyx(self) -> tuple[T_co, T_co, T_co]:
        """Return a z,y,x tuple."""
        return (self.z, self.y, self.x)

    @property
    def xyz(self) -> tuple[T_co, T_co, T_co]:
        """Return a x,y,z tuple, the ordering used by ISMRMRD."""
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        """Return a string representation of the SpatialDimension."""
        return f'z={self.z}, y={self.y}, x={self.x}'
