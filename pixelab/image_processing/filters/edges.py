# -*- coding: utf-8 -*-
"""
Border Detection - Gradient, max-direction, zero-crossing and Canny detectors.

All detectors reduce the input to gray first and return a single-band
image. Directional responses come from the canonical 3x3 masks in
:mod:`~pixelab.image_processing.filters.masks`; zero crossings are
searched along x and along y of a second-derivative response; the Canny
detector chains Gaussian smoothing, non-maximum suppression along the
quantized gradient direction and hysteresis thresholding.

Dependencies
------------
numpy
scipy

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
import math
from typing import Annotated, Any, Optional

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer, to_gray
from pixelab.image_processing._validation import validate_positive
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.filters.masks import (
    LAPLACE_MASK,
    MaskDirection,
    directional_masks,
    gaussian_mask,
    laplacian_of_gaussian_mask,
)
from pixelab.image_processing.filters.window import correlate_plane
from pixelab.image_processing.params import Desc, Options, Range
from pixelab.image_processing.threshold import HysteresisThreshold
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


def _gray_plane(image: ImageBuffer) -> np.ndarray:
    return to_gray(image).get_band(0)


def _single_band(plane: np.ndarray) -> ImageBuffer:
    return ImageBuffer.from_bands([plane])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Gradient modulus of TOP and RIGHT masks')
class GradientBorderDetector(ImageTransform):
    """Gradient modulus ``sqrt(top^2 + right^2)`` of two directional masks.

    Parameters
    ----------
    operator : str
        ``'prewitt'`` or ``'sobel'``. Default ``'sobel'``.
    """

    operator: Annotated[str, Options('prewitt', 'sobel'), Desc('Gradient operator')] = 'sobel'

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        masks = directional_masks(params['operator'])
        gray = _gray_plane(source)
        top = correlate_plane(gray, masks[MaskDirection.TOP])
        right = correlate_plane(gray, masks[MaskDirection.RIGHT])
        return _single_band(np.hypot(top, right))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Strongest response over eight mask directions')
class MaxDirectionBorderDetector(ImageTransform):
    """Per-pixel maximum absolute response over all eight mask directions.

    Parameters
    ----------
    operator : str
        ``'anonymous'``, ``'kirsh'``, ``'prewitt'`` or ``'sobel'``.
        Default ``'sobel'``.
    """

    operator: Annotated[
        str, Options('anonymous', 'kirsh', 'prewitt', 'sobel'), Desc('Directional operator'),
    ] = 'sobel'

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        gray = _gray_plane(source)
        responses = [
            np.abs(correlate_plane(gray, mask))
            for mask in directional_masks(params['operator']).values()
        ]
        return _single_band(np.max(responses, axis=0))


def _crossings_along_x(plane: np.ndarray, slope_threshold: float) -> np.ndarray:
    """Zero crossings scanning along axis 0 of *plane*."""
    n = plane.shape[0]
    found = np.zeros(plane.shape, dtype=bool)
    if n < 2:
        return found
    prev, cur, nxt = plane[:n - 2], plane[1:n - 1], plane[2:]
    change = np.where(cur == 0, prev * nxt < 0, prev * cur < 0)
    found[1:n - 1] = change & (np.abs(prev - cur) >= slope_threshold)
    last_prev, last = plane[n - 2], plane[n - 1]
    found[n - 1] = (last_prev * last < 0) & (np.abs(last_prev - last) >= slope_threshold)
    return found


def zero_crossings(plane: np.ndarray, slope_threshold: float = 0.0) -> np.ndarray:
    """Mark sign changes of a second-derivative response.

    A position is a crossing when, scanning along x or along y, its
    predecessor and itself have opposite signs (or, when it is exactly
    zero, its predecessor and successor do), and the step from the
    predecessor is at least *slope_threshold*. The first position of a
    scan is never a crossing.

    Returns
    -------
    np.ndarray
        ``255.0`` at crossings, ``0.0`` elsewhere.
    """
    by_x = _crossings_along_x(plane, slope_threshold)
    by_y = _crossings_along_x(plane.T, slope_threshold).T
    return np.where(by_x | by_y, 255.0, 0.0)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Laplace mask zero crossings')
class LaplaceBorderDetector(ImageTransform):
    """Zero crossings of the 3x3 Laplace response.

    Parameters
    ----------
    slope_threshold : float
        Minimum ``|prev - v|`` for a crossing to count. Default 0.0 (any
        sign change).
    """

    slope_threshold: Annotated[float, Range(min=0.0), Desc('Minimum crossing slope')] = 0.0

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        response = correlate_plane(_gray_plane(source), LAPLACE_MASK)
        return _single_band(zero_crossings(response, params['slope_threshold']))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Laplacian-of-Gaussian zero crossings')
class LaplacianOfGaussianDetector(ImageTransform):
    """Zero crossings of the Laplacian-of-Gaussian response (Marr-Hildreth).

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation (> 0); kernel side ``2 * int(3 sigma) + 1``.
    slope_threshold : float
        Minimum ``|prev - v|`` for a crossing to count. Default 0.0.
    """

    sigma: Annotated[float, Range(min=0.0), Desc('Gaussian standard deviation (> 0)')] = 1.0
    slope_threshold: Annotated[float, Range(min=0.0), Desc('Minimum crossing slope')] = 0.0

    def __post_init__(self) -> None:
        validate_positive(self.sigma, 'sigma')

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        mask = laplacian_of_gaussian_mask(params['sigma'])
        response = correlate_plane(_gray_plane(source), mask)
        return _single_band(zero_crossings(response, params['slope_threshold']))


# Neighbor step along each quantized gradient direction (0, 45, 90, 135 deg).
_DIRECTION_STEPS = ((1, 0), (1, 1), (0, 1), (1, -1))


def quantize_direction(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Quantize gradient angles into direction indices 0..3.

    Index ``k`` means the gradient points along ``k * 45`` degrees
    (modulo 180), measured from the x axis toward the y axis.
    """
    semicircle = np.mod(np.arctan2(gy, gx) + math.pi, math.pi)
    return ((semicircle + math.pi / 8) // (math.pi / 4)).astype(np.int64) % 4


def suppress_non_maxima(magnitude: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """Keep pixels that are a local maximum along their gradient direction.

    A pixel survives when its magnitude is positive and neither neighbor
    along ``direction`` is strictly greater. Pixels whose neighbor falls
    outside the image are suppressed.
    """
    width, height = magnitude.shape
    padded = np.pad(magnitude, 1, mode='constant', constant_values=np.inf)
    keep = magnitude > 0
    for k, (dx, dy) in enumerate(_DIRECTION_STEPS):
        selected = direction == k
        forward = padded[1 + dx:1 + dx + width, 1 + dy:1 + dy + height]
        backward = padded[1 - dx:1 - dx + width, 1 - dy:1 - dy + height]
        keep &= ~selected | ((forward <= magnitude) & (backward <= magnitude))
    return np.where(keep, magnitude, 0.0)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Gradient magnitude thinned to ridge pixels')
class NonMaximumSuppression(ImageTransform):
    """Gaussian-smoothed Sobel magnitude thinned to one-pixel ridges.

    Parameters
    ----------
    sigma : float
        Standard deviation of the pre-smoothing Gaussian (> 0).
    """

    sigma: Annotated[float, Range(min=0.0), Desc('Pre-smoothing sigma (> 0)')] = 1.0

    def __post_init__(self) -> None:
        validate_positive(self.sigma, 'sigma')

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        validate_positive(params['sigma'], 'sigma')
        smoothed = correlate_plane(_gray_plane(source), gaussian_mask(params['sigma']))
        masks = directional_masks('sobel')
        gx = correlate_plane(smoothed, masks[MaskDirection.BOTTOM])
        gy = correlate_plane(smoothed, masks[MaskDirection.RIGHT])
        magnitude = np.hypot(gx, gy)
        return _single_band(suppress_non_maxima(magnitude, quantize_direction(gx, gy)))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES, description='Canny edge detector')
class CannyEdgeDetector(ImageTransform):
    """Canny edges: non-maximum suppression followed by hysteresis.

    Parameters
    ----------
    sigma : float
        Pre-smoothing standard deviation (> 0). Default 1.0.
    low, high : float, optional
        Hysteresis levels on the normalized ``[0, 255]`` ridge image.
        When omitted, ``high`` is the Otsu level and ``low = high / 2``.

    Returns
    -------
    ImageBuffer
        Single band, 255 on edge pixels and 0 elsewhere.

    Examples
    --------
    >>> edges = CannyEdgeDetector(sigma=1.5).apply(image)
    """

    sigma: Annotated[float, Range(min=0.0), Desc('Pre-smoothing sigma (> 0)')] = 1.0

    def __init__(
        self,
        sigma: float = 1.0,
        low: Optional[float] = None,
        high: Optional[float] = None,
    ) -> None:
        validate_positive(sigma, 'sigma')
        if low is not None and high is not None and low > high:
            raise ValidationError(f"low ({low}) must not exceed high ({high})")
        self.sigma = sigma
        self.low = low
        self.high = high

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        ridges = NonMaximumSuppression(sigma=params['sigma']).apply(source)
        edges = HysteresisThreshold(low=self.low, high=self.high).apply(ridges)
        logger.debug("Canny sigma=%s marked %d edge pixels", params['sigma'],
                     int(np.count_nonzero(edges.samples)))
        return edges
