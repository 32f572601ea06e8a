"""Centered FFT between image space and k-space."""

from collections.abc import Callable, Sequence

import numpy as np
import torch

from mrrd.data.exceptions import TransformAllocFailedError, TypeMismatchError

FourierBackend = Callable[[torch.Tensor, tuple[int, ...]], torch.Tensor]
"""Unnormalized complex-to-complex DFT along the given dimensions."""


def torch_fftn(x: torch.Tensor, dim: tuple[int, ...]) -> torch.Tensor:
    """Forward DFT using torch.fft."""
    return torch.fft.fftn(x, dim=dim, norm='backward')


def torch_ifftn(x: torch.Tensor, dim: tuple[int, ...]) -> torch.Tensor:
    """Inverse DFT using torch.fft, scaled by 1/N."""
    return torch.fft.ifftn(x, dim=dim, norm='backward')


def numpy_fftn(x: torch.Tensor, dim: tuple[int, ...]) -> torch.Tensor:
    """Forward DFT using numpy.fft."""
    y = np.fft.fftn(x.numpy(force=True), axes=dim, norm='backward')
    return torch.as_tensor(y).to(dtype=x.dtype, device=x.device)


def numpy_ifftn(x: torch.Tensor, dim: tuple[int, ...]) -> torch.Tensor:
    """Inverse DFT using numpy.fft, scaled by 1/N."""
    y = np.fft.ifftn(x.numpy(force=True), axes=dim, norm='backward')
    return torch.as_tensor(y).to(dtype=x.dtype, device=x.device)


def fftshift(x: torch.Tensor, dim: Sequence[int] = (-2, -1)) -> torch.Tensor:
    """Move the zero-frequency from index 0 to index N//2.

    Circular shift by ``floor(N/2)`` along each dimension in `dim`. For even N this is an involution.
    """
    return torch.fft.fftshift(x, dim=tuple(dim))


def ifftshift(x: torch.Tensor, dim: Sequence[int] = (-2, -1)) -> torch.Tensor:
    """Inverse of `fftshift`, a circular shift by ``ceil(N/2)`` along each dimension in `dim`."""
    return torch.fft.ifftshift(x, dim=tuple(dim))


def _centered(
    x: torch.Tensor,
    dim: Sequence[int],
    backend: FourierBackend,
    shift: Callable[[torch.Tensor, Sequence[int]], torch.Tensor],
) -> torch.Tensor:
    if not x.is_complex():
        raise TypeMismatchError(f'Expected complex data, got {x.dtype}.')
    dim = tuple(dim)
    try:
        return shift(backend(shift(x, dim), dim), dim)
    except (MemoryError, torch.cuda.OutOfMemoryError) as e:
        raise TransformAllocFailedError(f'Could not allocate memory for FFT of shape {tuple(x.shape)}.') from e


def image_to_kspace(
    idat: torch.Tensor, dim: Sequence[int] = (-2, -1), backend: FourierBackend = torch_fftn
) -> torch.Tensor:
    """Centered forward FFT from image space to k-space.

    Computes ``fftshift(DFT(fftshift(idat)))`` without normalization, which moves the zero-frequency
    to index ``N//2`` along each transformed dimension.

    Parameters
    ----------
    idat
        complex image data on Cartesian grid
    dim
        dim along which FFT is applied, by default last two dimensions (-2, -1)
    backend
        unnormalized forward DFT

    Returns
    -------
        k-space with the same shape as idat
    """
    return _centered(idat, dim, backend, fftshift)


def kspace_to_image(
    kdat: torch.Tensor, dim: Sequence[int] = (-2, -1), backend: FourierBackend = torch_ifftn
) -> torch.Tensor:
    """Centered inverse FFT from k-space to image space.

    Computes ``ifftshift(IDFT(ifftshift(kdat)))``, the exact inverse of `image_to_kspace`, also for odd sizes.

    Parameters
    ----------
    kdat
        complex k-space data on Cartesian grid
    dim
        dim along which iFFT is applied, by default last two dimensions (-2, -1)
    backend
        inverse DFT scaled by 1/N

    Returns
    -------
        image with the same shape as kdat
    """
    return _centered(kdat, dim, backend, ifftshift)
