# -*- coding: utf-8 -*-
"""
Smoothing Filters - Mean, median, weighted median, Gaussian and high-pass windows.

All filters share the zero-border policy of
:mod:`pixelab.image_processing.filters.window`: pixels closer than the
window margin to an edge are 0 in the output.

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
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import median_filter, uniform_filter

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer, to_gray
from pixelab.image_processing._validation import (
    validate_positive,
    validate_window_length,
)
from pixelab.image_processing.base import BandwiseTransformMixin, ImageTransform
from pixelab.image_processing.filters.masks import gaussian_mask, high_pass_mask
from pixelab.image_processing.filters.window import (
    correlate_plane,
    filter_interior,
    reduce_windows,
)
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS, description='Sliding-window mean')
class MeanFilter(ImageTransform):
    """Arithmetic mean of each ``window_length x window_length`` neighborhood.

    Backed by ``scipy.ndimage.uniform_filter``; only windows lying fully
    inside the image are kept.

    Parameters
    ----------
    window_length : int
        Odd, positive window side. Default 3.

    Examples
    --------
    >>> smoothed = MeanFilter(window_length=5).apply(image)
    """

    window_length: Annotated[int, Range(min=1), Desc('Odd window side')] = 3

    def __post_init__(self) -> None:
        validate_window_length(self.window_length)

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        return filter_interior(source, params['window_length'], uniform_filter)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS, description='Sliding-window median')
class MedianFilter(ImageTransform):
    """Median of each ``window_length x window_length`` neighborhood.

    Backed by ``scipy.ndimage.median_filter``. Window sides are odd, so
    the median is always the middle order statistic.
    """

    window_length: Annotated[int, Range(min=1), Desc('Odd window side')] = 3

    def __post_init__(self) -> None:
        validate_window_length(self.window_length)

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        return filter_interior(source, params['window_length'], median_filter)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS, description='Weighted sliding-window median')
class WeightedMedianFilter(ImageTransform):
    """Median where each window cell counts as many times as its weight.

    Parameters
    ----------
    weights : array_like of int
        Square matrix of non-negative integers with an odd side, which is
        also the window length. The weights must not all be zero.

    Raises
    ------
    ValidationError
        If *weights* is not square, has an even side, holds negative or
        non-integer values, or sums to zero.

    Examples
    --------
    >>> f = WeightedMedianFilter([[1, 2, 1], [2, 4, 2], [1, 2, 1]])
    >>> denoised = f.apply(noisy)
    """

    def __init__(self, weights) -> None:
        arr = np.asarray(weights)
        if arr.ndim != 2 or arr.size == 0 or arr.shape[0] != arr.shape[1]:
            raise ValidationError(
                f"weights must be a non-empty square matrix, got shape {arr.shape}"
            )
        if not np.issubdtype(arr.dtype, np.integer):
            if not np.issubdtype(arr.dtype, np.floating) or not np.all(arr == np.round(arr)):
                raise ValidationError("weights must be integers")
        arr = arr.astype(np.int64)
        if np.any(arr < 0):
            raise ValidationError("weights must be non-negative")
        if arr.sum() == 0:
            raise ValidationError("weights must not all be zero")
        validate_window_length(arr.shape[0], 'weights side')
        self._weights = arr

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        flat_weights = self._weights.ravel()
        side = self._weights.shape[0]

        def weighted_median(windows: np.ndarray) -> np.ndarray:
            flat = windows.reshape(windows.shape[:-2] + (side * side,))
            return np.median(np.repeat(flat, flat_weights, axis=-1), axis=-1)

        return reduce_windows(source, side, weighted_median)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS, description='Gaussian-weighted window sum')
class GaussianFilter(BandwiseTransformMixin, ImageTransform):
    """Convolution with a normalized Gaussian kernel.

    The kernel side is ``2 * int(2 * sigma) + 1``; see
    :func:`~pixelab.image_processing.filters.masks.gaussian_mask`.

    Parameters
    ----------
    sigma : float
        Standard deviation, strictly positive. Default 1.0.
    """

    sigma: Annotated[float, Range(min=0.0), Desc('Gaussian standard deviation (> 0)')] = 1.0

    def __init__(self, sigma: float = 1.0) -> None:
        validate_positive(sigma, 'sigma')
        self.sigma = sigma

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        mask = gaussian_mask(params['sigma'])
        return super().apply(source, mask=mask)

    def _apply_band(self, plane: np.ndarray, **kwargs: Any) -> np.ndarray:
        return correlate_plane(plane, kwargs['mask'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS, description='High-pass sharpening of the gray image')
class HighPassFilter(ImageTransform):
    """High-pass filter applied to the gray reduction of the input.

    Every kernel entry is ``-1/N`` except the center, ``(N - 1)/N``, with
    ``N = window_length ** 2``. The output has a single band.
    """

    window_length: Annotated[int, Range(min=1), Desc('Odd window side')] = 3

    def __post_init__(self) -> None:
        validate_window_length(self.window_length)

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        mask = high_pass_mask(params['window_length'])
        gray = to_gray(source)
        return ImageBuffer.from_bands([correlate_plane(gray.get_band(0), mask)])
