"""Image gradient computation with optional Gaussian pre-smoothing."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import numpy as np
from scipy.ndimage import gaussian_filter1d

from .image import ImageData

_log = logging.getLogger(__name__)

_EPSILON = sys.float_info.epsilon
_RADIUS_FACTOR = 3.0


class GradientCalculator:
    """Compute the intensity gradient of an image.

    The image is first converted to a single channel (the HSV value of a
    colour image), scaled into roughly [0, 1] and optionally smoothed by a
    Gaussian filter. The gradient has one component per data axis.
    """

    def __init__(self, image: Optional[ImageData] = None) -> None:
        self.image: Optional[ImageData] = image
        self._gradient: Optional[ImageData] = None

    @property
    def gradient(self) -> Optional[ImageData]:
        """The most recently computed gradient image, or None."""
        return self._gradient

    def compute(self, scale: float = 0.0, sigma: float = 0.0) -> None:
        """Compute the gradient of the current image.

        ``scale`` multiplies the intensities; zero means one over the
        maximum intensity. ``sigma`` is the standard deviation, in voxels,
        of the smoothing applied before differentiation. Nothing happens
        when no image is set.
        """
        if self.image is None:
            return
        dim = self.image.dimension()
        values = self._scaled_values(scale)
        if sigma > _EPSILON:
            values = self._smooth(values, sigma, dim)
        self._gradient = self._differentiate(values, dim)

    def intensity_scaling(self, scale: float) -> float:
        """Return the intensity factor actually used for ``scale``."""
        if self.image is not None and abs(scale) < _EPSILON:
            maximum = self.image.scalar_range()[1]
            if maximum == 0:
                raise ValueError("cannot derive intensity scaling: maximum intensity is zero")
            return 1.0 / maximum
        return scale

    def delete_gradient(self) -> None:
        """Discard the computed gradient."""
        self._gradient = None

    def reset(self) -> None:
        """Forget both the image and the computed gradient."""
        self.image = None
        self.delete_gradient()

    # --- steps ---------------------------------------------------------

    def _single_channel(self) -> np.ndarray:
        image = self.image
        array = image.array.astype(np.float64)
        components = image.number_of_components()
        if components == 1:
            return array[..., 0]
        if components < 3:
            raise ValueError(
                f"a multi-channel image needs at least three components, got {components}"
            )
        # HSV value channel: the largest of the red, green and blue values.
        return array[..., :3].max(axis=-1)

    def _scaled_values(self, scale: float) -> np.ndarray:
        values = self._single_channel()
        factor = self.intensity_scaling(scale)
        _log.debug("actual intensity scaling: %g", factor)
        return values * factor

    @staticmethod
    def _smooth(values: np.ndarray, sigma: float, dim: int) -> np.ndarray:
        for axis in range(dim):
            values = gaussian_filter1d(
                values, sigma, axis=axis, mode="nearest", truncate=_RADIUS_FACTOR
            )
        return values

    def _differentiate(self, values: np.ndarray, dim: int) -> ImageData:
        spacing = self.image.spacing
        components = []
        for axis in range(dim):
            pad = [(0, 0)] * values.ndim
            pad[axis] = (1, 1)
            padded = np.pad(values, pad, mode="edge")
            n = values.shape[axis]
            ahead = np.take(padded, np.arange(2, n + 2), axis=axis)
            behind = np.take(padded, np.arange(0, n), axis=axis)
            components.append((ahead - behind) / (2.0 * spacing[axis]))
        stacked = np.stack(components, axis=-1)
        if dim == 1:
            return ImageData(stacked[..., 0], spacing=spacing)
        return ImageData(stacked, spacing=spacing, components=dim)