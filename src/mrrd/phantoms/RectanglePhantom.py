"""Numerical phantom with a single rectangle."""

import torch

from mrrd.data.SpatialDimension import SpatialDimension


class RectanglePhantom:
    """Numerical phantom of a rectangle of constant intensity on a zero background.

    A voxel `(x, y)` of an image with `nx` x `ny` voxels lies inside the rectangle if
    ``margin_x < x < nx - margin_x`` and ``margin_y < y < ny - margin_y``,
    with ``margin_x = int(nx * margin_fraction_x)`` and ``margin_y = int(ny * margin_fraction_y)``.
    """

    def __init__(self, margin_fraction_x: float = 0.25, margin_fraction_y: float = 0.125, intensity: float = 1.0):
        """Initialize rectangle phantom.

        Parameters
        ----------
        margin_fraction_x
            width of the background on each side along x as a fraction of the image width
        margin_fraction_y
            width of the background on each side along y as a fraction of the image height
        intensity
            value inside the rectangle
        """
        if not (0 <= margin_fraction_x < 0.5 and 0 <= margin_fraction_y < 0.5):
            raise ValueError('Margin fractions must be in [0, 0.5).')
        self.margin_fraction_x = margin_fraction_x
        self.margin_fraction_y = margin_fraction_y
        self.intensity = intensity

    def image_space(
        self, image_dimensions: SpatialDimension[int], dtype: torch.dtype = torch.complex64
    ) -> torch.Tensor:
        """Create image representation of phantom.

        Parameters
        ----------
        image_dimensions
            number of voxels in the image. This is a 2D phantom, z is ignored.
        dtype
            dtype of the image

        Returns
        -------
            image with shape `(image_dimensions.y, image_dimensions.x)`
        """
        ny, nx = image_dimensions.y, image_dimensions.x
        margin_x = int(nx * self.margin_fraction_x)
        margin_y = int(ny * self.margin_fraction_y)
        iy, ix = torch.meshgrid(torch.arange(ny), torch.arange(nx), indexing='ij')
        inside = (ix > margin_x) & (ix < nx - margin_x) & (iy > margin_y) & (iy < ny - margin_y)
        return (inside * self.intensity).to(dtype=dtype)
