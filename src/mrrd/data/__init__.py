"""Data containers, loading and saving data."""

from mrrd.data import enums, exceptions
from mrrd.data.Acquisition import Acquisition
from mrrd.data.Dataset import Dataset
from mrrd.data.EncodingLimits import EncodingLimits, Limits
from mrrd.data.MrrdHeader import Encoding, MrrdHeader
from mrrd.data.NDArray import NDArray
from mrrd.data.SpatialDimension import SpatialDimension

__all__ = [
    "Acquisition",
    "Dataset",
    "Encoding",
    "EncodingLimits",
    "Limits",
    "MrrdHeader",
    "NDArray",
    "SpatialDimension",
    "enums",
    "exceptions"
]
