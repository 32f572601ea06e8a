"""Conversion between millimetres, as used in the XML header, and metres."""

from collections.abc import Callable
from typing import TypeVar

import torch

__all__ = ['m_to_mm', 'mm_to_m']

T = TypeVar('T', float, torch.Tensor, list[float], tuple[float, ...])

MM_PER_M = 1000


def _elementwise(value: T, function: Callable) -> T:
    if isinstance(value, list | tuple):
        return type(value)(function(v) for v in value)
    return function(value)


def mm_to_m(mm: T) -> T:
    """Convert mm to m."""
    return _elementwise(mm, lambda v: v / MM_PER_M)


def m_to_mm(m: T) -> T:
    """Convert m to mm."""
    return _elementwise(m, lambda v: v * MM_PER_M)
