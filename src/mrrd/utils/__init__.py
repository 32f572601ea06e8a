"""FFT and unit conversion utilities."""

from mrrd.utils import fft, unit_conversion
from mrrd.utils.fft import fftshift, ifftshift, image_to_kspace, kspace_to_image

__all__ = [
    "fft",
    "fftshift",
    "ifftshift",
    "image_to_kspace",
    "kspace_to_image",
    "unit_conversion",
]
