"""Random generator."""

from collections.abc import Sequence

import torch


class RandomGenerator:
    """Generate random numbers for testing purposes. Uses a fixed seed to
    ensure reproducibility.

    provides:
        scalar uniform random numbers:
            uint16, uint32, float32
        tensor of uniform random numbers:
            float32_tensor, float64_tensor
            complex64_tensor, complex128_tensor
    """

    def __init__(self, seed: int):
        """Initialize with a fixed seed."""
        self.generator = torch.Generator().manual_seed(seed)

    def _rand(self, size: Sequence[int] | int, low: float, high: float, dtype: torch.dtype) -> torch.Tensor:
        """Generate uniform random floats in [low, high) with given dtype."""
        if low > high:
            raise ValueError('low should be lower than high')
        return torch.rand(size, generator=self.generator, dtype=dtype) * (high - low) + low

    def _complex(self, size: Sequence[int] | int, low: float, high: float, dtype: torch.dtype) -> torch.Tensor:
        """Complex numbers with amplitude in [low, high) and a uniform phase."""
        if low < 0:
            raise ValueError('low/high refer to the amplitude and must be positive')
        amplitude = self._rand(size, low, high, dtype)
        phase = self._rand(size, -torch.pi, torch.pi, dtype)
        return torch.polar(amplitude, phase)

    def float32_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate float32 tensor of given size in [low, high)."""
        return self._rand(size, low, high, torch.float32)

    def float64_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate float64 tensor of given size in [low, high)."""
        return self._rand(size, low, high, torch.float64)

    def complex64_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate complex64 tensor of given size with amplitude in [low, high)."""
        return self._complex(size, low, high, torch.float32)

    def complex128_tensor(self, size: Sequence[int] | int = (1,), low: float = 0.0, high: float = 1.0) -> torch.Tensor:
        """Generate complex128 tensor of given size with amplitude in [low, high)."""
        return self._complex(size, low, high, torch.float64)

    def float32(self, low: float = 0.0, high: float = 1.0) -> float:
        """Generate a float32 in [low, high)."""
        return float(self.float32_tensor((1,), low, high).item())

    def uint16(self, low: int = 0, high: int = 1 << 16) -> int:
        """Generate a uint16 in [low, high)."""
        if low < 0 or high > 1 << 16:
            raise ValueError('Low must be positive and high must be <= 2^16')
        return int(torch.randint(low, high, (1,), generator=self.generator).item())

    def uint32(self, low: int = 0, high: int = 1 << 32) -> int:
        """Generate a uint32 in [low, high)."""
        if low < 0 or high > 1 << 32:
            raise ValueError('Low must be positive and high must be <= 2^32')
        # int64 is the smallest dtype that can hold 2^32 (no uint32 in pytorch)
        return int(torch.randint(low, high, (1,), generator=self.generator, dtype=torch.int64).item())
