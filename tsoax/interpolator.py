"""Linear interpolation of image values at arbitrary points."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .image import ImageData

# Points this close outside the image (in voxel units) still count as inside.
_TOLERANCE = 7.62939453125e-06


class Interpolator:
    """Trilinear interpolation over all components of an image."""

    def __init__(self, image: Optional[ImageData] = None) -> None:
        self._image: Optional[ImageData] = None
        if image is not None:
            self.initialize(image)

    def initialize(self, image: ImageData) -> None:
        """Use ``image`` for subsequent interpolation."""
        self._image = image

    def _require(self) -> ImageData:
        if self._image is None:
            raise RuntimeError("interpolator has no image")
        return self._image

    def interpolate(self, point: Sequence[float]) -> Optional[np.ndarray]:
        """Return the interpolated voxel at ``point``, or None if outside.

        ``point`` is in physical units and may have two or three
        coordinates; a missing z coordinate is taken as zero.
        """
        image = self._require()
        coords = [float(c) for c in point]
        if not 1 <= len(coords) <= 3:
            raise ValueError("point must have one to three coordinates")
        coords += [0.0] * (3 - len(coords))

        axes: List[Tuple[Tuple[int, float], Tuple[int, float]]] = []
        for coord, step, count in zip(coords, image.spacing, image.dimensions()):
            f = coord / step
            if f < -_TOLERANCE or f > count - 1 + _TOLERANCE:
                return None
            f = min(max(f, 0.0), count - 1.0)
            low = min(math.floor(f), max(count - 2, 0))
            t = f - low
            high = min(low + 1, count - 1)
            axes.append(((low, 1.0 - t), (high, t)))

        data = image.array
        result = np.zeros(image.number_of_components())
        for ix, wx in axes[0]:
            for iy, wy in axes[1]:
                for iz, wz in axes[2]:
                    weight = wx * wy * wz
                    if weight:
                        result += weight * data[ix, iy, iz]
        return result

    def number_of_components(self) -> int:
        """Return the number of components per voxel."""
        return self._require().number_of_components()

    def image_size(self) -> Tuple[int, int, int]:
        """Return the number of voxels along x, y and z."""
        extent = self._require().extent()
        return extent[1] + 1, extent[3] + 1, extent[5] + 1

    def image_extent(self, index: int) -> int:
        """Return the largest voxel index along axis ``index``."""
        if not 0 <= index < 3:
            raise IndexError(f"axis {index} out of range")
        return self._require().extent()[2 * index + 1]