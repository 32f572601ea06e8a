"""All dataset enums."""

import enum

import numpy as np
import torch
from typing_extensions import Self

from mrrd.data.exceptions import TypeMismatchError


class AcqFlags(enum.Flag):
    """Acquisition flags.

    NOTE: values in enum ISMRMRD_AcquisitionFlags start at 1 and not 0, but
    1 << (val-1) is used in 'ismrmrd_is_flag_set' function to calc bitmask value [ISMb]_.

    References
    ----------
    .. [ISMb] ISMRMRD https://github.com/ismrmrd/ismrmrd/blob/master/include/ismrmrd/ismrmrd.h
    """

    ACQ_NO_FLAG = 0
    ACQ_FIRST_IN_ENCODE_STEP1 = enum.auto()
    ACQ_LAST_IN_ENCODE_STEP1 = enum.auto()
    ACQ_FIRST_IN_ENCODE_STEP2 = enum.auto()
    ACQ_LAST_IN_ENCODE_STEP2 = enum.auto()
    ACQ_FIRST_IN_AVERAGE = enum.auto()
    ACQ_LAST_IN_AVERAGE = enum.auto()
    ACQ_FIRST_IN_SLICE = enum.auto()
    ACQ_LAST_IN_SLICE = enum.auto()
    ACQ_FIRST_IN_CONTRAST = enum.auto()
    ACQ_LAST_IN_CONTRAST = enum.auto()
    ACQ_FIRST_IN_PHASE = enum.auto()
    ACQ_LAST_IN_PHASE = enum.auto()
    ACQ_FIRST_IN_REPETITION = enum.auto()
    ACQ_LAST_IN_REPETITION = enum.auto()
    ACQ_FIRST_IN_SET = enum.auto()
    ACQ_LAST_IN_SET = enum.auto()
    ACQ_FIRST_IN_SEGMENT = enum.auto()
    ACQ_LAST_IN_SEGMENT = enum.auto()
    ACQ_IS_NOISE_MEASUREMENT = enum.auto()
    ACQ_IS_PARALLEL_CALIBRATION = enum.auto()
    ACQ_IS_PARALLEL_CALIBRATION_AND_IMAGING = enum.auto()
    ACQ_IS_REVERSE = enum.auto()
    ACQ_IS_NAVIGATION_DATA = enum.auto()
    ACQ_IS_PHASECORR_DATA = enum.auto()
    ACQ_LAST_IN_MEASUREMENT = enum.auto()
    ACQ_IS_HPFEEDBACK_DATA = enum.auto()
    ACQ_IS_DUMMYSCAN_DATA = enum.auto()
    ACQ_IS_RTFEEDBACK_DATA = enum.auto()
    ACQ_IS_SURFACECOILCORRECTIONSCAN_DATA = enum.auto()
    ACQ_USER1 = 1 << 56
    ACQ_USER2 = enum.auto()
    ACQ_USER3 = enum.auto()
    ACQ_USER4 = enum.auto()
    ACQ_USER5 = enum.auto()
    ACQ_USER6 = enum.auto()
    ACQ_USER7 = enum.auto()
    ACQ_USER8 = enum.auto()


class TrajectoryType(enum.Enum):
    """Trajectory type."""

    CARTESIAN = 'cartesian'
    EPI = 'epi'
    RADIAL = 'radial'
    GOLDENANGLE = 'goldenangle'
    SPIRAL = 'spiral'
    OTHER = 'other'


class ElementType(enum.Enum):
    """Element type of the arrays in a dataset.

    The value is stored as the ``element_type`` attribute of each array stack.
    """

    FLOAT = 'float'
    DOUBLE = 'double'
    CXFLOAT = 'cxfloat'
    CXDOUBLE = 'cxdouble'

    @property
    def torch_dtype(self) -> torch.dtype:
        """Corresponding torch dtype."""
        return _TORCH_DTYPES[self]

    @property
    def numpy_dtype(self) -> np.dtype:
        """Corresponding numpy dtype."""
        return np.dtype(_NUMPY_DTYPES[self])

    @property
    def is_complex(self) -> bool:
        """Whether elements are complex pairs of reals."""
        return self in (ElementType.CXFLOAT, ElementType.CXDOUBLE)

    @classmethod
    def from_dtype(cls, dtype: torch.dtype | np.dtype | type) -> Self:
        """Get the element type of a torch or numpy dtype.

        Raises
        ------
        TypeMismatchError
            if the dtype is not one of float32, float64, complex64, complex128
        """
        if isinstance(dtype, torch.dtype):
            candidates = {element_type: torch_dtype for element_type, torch_dtype in _TORCH_DTYPES.items()}
        else:
            try:
                dtype = np.dtype(dtype)
            except TypeError:
                raise TypeMismatchError(f'Unsupported element type {dtype}') from None
            candidates = {element_type: np.dtype(numpy_dtype) for element_type, numpy_dtype in _NUMPY_DTYPES.items()}
        for element_type, candidate in candidates.items():
            if dtype == candidate:
                return cls(element_type)
        raise TypeMismatchError(f'Unsupported element type {dtype}')


_TORCH_DTYPES: dict[ElementType, torch.dtype] = {
    ElementType.FLOAT: torch.float32,
    ElementType.DOUBLE: torch.float64,
    ElementType.CXFLOAT: torch.complex64,
    ElementType.CXDOUBLE: torch.complex128,
}

_NUMPY_DTYPES: dict[ElementType, type] = {
    ElementType.FLOAT: np.float32,
    ElementType.DOUBLE: np.float64,
    ElementType.CXFLOAT: np.complex64,
    ElementType.CXDOUBLE: np.complex128,
}
