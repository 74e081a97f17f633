"""Resampling of image volumes to isotropic voxel spacing."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
from scipy.ndimage import zoom

from .image import ImageData, write_tiff_image


class ImageResampler:
    """Resample an image whose z spacing differs from its x and y spacing."""

    def __init__(self) -> None:
        self._image: Optional[ImageData] = None

    @property
    def image(self) -> Optional[ImageData]:
        """The most recently resampled image, or None."""
        return self._image

    def resize(self, image: ImageData, ratio: float) -> None:
        """Resample ``image`` to unit spacing on every axis.

        ``ratio`` is the voxel spacing along z relative to x and y. Voxels
        are treated as cells, so the physical length ``nz * ratio`` of the
        z axis is kept and the new slice count is that length rounded.
        """
        if ratio <= 0:
            raise ValueError(f"spacing ratio must be positive, got {ratio}")
        nx, ny, nz = image.dimensions()
        new_nz = max(1, int(round(nz * ratio)))
        values = image.array.astype(np.float64)
        if new_nz == nz:
            resampled = values
        else:
            resampled = zoom(
                values,
                (1.0, 1.0, new_nz / nz, 1.0),
                order=3,
                mode="nearest",
                grid_mode=True,
            )
        if np.issubdtype(image.dtype, np.integer):
            info = np.iinfo(image.dtype)
            resampled = np.clip(np.rint(resampled), info.min, info.max)
        resampled = resampled.astype(image.dtype)
        components = image.number_of_components()
        if components == 1:
            resampled = resampled[..., 0]
        self._image = ImageData(resampled, spacing=(1.0, 1.0, 1.0), components=components)

    def write_image(self, filename: Union[str, Path]) -> None:
        """Write the resampled image as a TIFF file."""
        if self._image is None:
            raise RuntimeError("no resampled image to write")
        write_tiff_image(self._image, filename)