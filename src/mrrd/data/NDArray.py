"""Typed N-dimensional array."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import torch
from numpy.typing import ArrayLike
from typing_extensions import Self

from mrrd.data.enums import ElementType
from mrrd.data.exceptions import ShapeMismatchError


@dataclass(slots=True, eq=False)
class NDArray:
    """N-dimensional array of one of the supported element types.

    The dimensions follow the column-major convention of ISMRMRD: ``dims = (d0, d1, ...)`` where ``d0`` varies
    fastest. The tensor holding the values is C-contiguous with the reversed shape ``(..., d1, d0)``, so both describe
    the same memory layout: element ``(i0, i1, ...)`` is found at linear offset ``i0 + i1*d0 + ...`` of `buffer`.
    """

    data: torch.Tensor
    """Values, shape `(..., d1, d0)`."""

    def __post_init__(self) -> None:
        """Check element type and make the data contiguous."""
        if self.data.ndim == 0:
            raise ShapeMismatchError('An NDArray needs at least one dimension.')
        ElementType.from_dtype(self.data.dtype)
        self.data = self.data.contiguous()

    @classmethod
    def from_dims(
        cls,
        dims: Sequence[int],
        buffer: torch.Tensor | ArrayLike,
        element_type: ElementType | None = None,
    ) -> Self:
        """Create an NDArray from column-major dimensions and a flat buffer.

        Parameters
        ----------
        dims
            extent of each dimension, fastest varying first
        buffer
            flat buffer with ``prod(dims)`` elements
        element_type
            element type to convert the buffer to. If None, the dtype of the buffer is used.
        """
        data = torch.as_tensor(buffer)
        if element_type is not None:
            data = data.to(dtype=element_type.torch_dtype)
        if data.numel() != math.prod(dims):
            raise ShapeMismatchError(f'Buffer with {data.numel()} elements does not match dimensions {tuple(dims)}.')
        return cls(data.reshape(tuple(reversed(dims))))

    @classmethod
    def zeros(cls, dims: Sequence[int], element_type: ElementType = ElementType.CXFLOAT) -> Self:
        """Create an NDArray filled with zeros."""
        return cls(torch.zeros(tuple(reversed(dims)), dtype=element_type.torch_dtype))

    @property
    def element_type(self) -> ElementType:
        """Element type."""
        return ElementType.from_dtype(self.data.dtype)

    @property
    def dims(self) -> tuple[int, ...]:
        """Extent of each dimension, fastest varying first."""
        return tuple(reversed(self.data.shape))

    @property
    def buffer(self) -> torch.Tensor:
        """Flat view of the values in storage order."""
        return self.data.reshape(-1)

    def numpy(self) -> np.ndarray:
        """Values as a C-contiguous numpy array of shape `(..., d1, d0)`."""
        return np.ascontiguousarray(self.data.numpy(force=True))

    def __eq__(self, other: object) -> bool:
        """Equal if element type, dimensions and values agree."""
        if not isinstance(other, NDArray):
            return NotImplemented
        return (
            self.element_type == other.element_type
            and self.dims == other.dims
            and torch.equal(self.data.cpu(), other.data.cpu())
        )

    def __repr__(self) -> str:
        """Representation method for NDArray class."""
        return f'{type(self).__name__}(dims={self.dims}, element_type={self.element_type.value})'
