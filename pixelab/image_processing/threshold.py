# -*- coding: utf-8 -*-
"""
Threshold Segmentation - Manual, iterative global, Otsu and hysteresis thresholds.

Every threshold works on the gray reduction of the input, normalized onto
``[0, 255]``, and produces a single band holding 0 (background) or 255
(foreground). A sample equal to the threshold is background.

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
from typing import Annotated, Any, Optional

# Third-party
import numpy as np
from scipy.ndimage import label

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer, to_gray
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.pointwise import normalize
from pixelab.image_processing.statistics import get_histograms
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def prepare(image: ImageBuffer) -> ImageBuffer:
    """Gray reduction of *image* normalized onto ``[0, 255]``."""
    return normalize(to_gray(image))


def binarize(prepared: ImageBuffer, threshold: float) -> ImageBuffer:
    """0 where ``v <= threshold``, 255 elsewhere."""
    return ImageBuffer.from_bands([
        np.where(prepared.get_band(0) <= threshold, 0.0, 255.0)
    ])


def otsu_level(prepared: ImageBuffer) -> int:
    """Otsu threshold level of band 0 of *prepared*.

    Maximizes the between-class variance
    ``(mG * P1 - m) ** 2 / (P1 * (1 - P1))`` over every level in the
    histogram range, where ``P1`` and ``m`` are the cumulative frequency
    and cumulative mean up to the level. Levels where ``P1`` is 0 or 1
    score 0. Ties resolve to the median maximizing level.
    """
    histogram = get_histograms(prepared)[0]
    lo, hi = histogram.min_category, histogram.max_category
    levels = np.arange(lo, hi + 1)
    freqs = np.array([histogram.get_frequency(int(l)) for l in levels])
    p1 = np.cumsum(freqs)
    m = np.cumsum(levels * freqs)
    global_mean = m[-1]

    variances = np.zeros(levels.shape, dtype=np.float64)
    split = (p1 != 0) & (p1 != 1)
    variances[split] = (
        (global_mean * p1[split] - m[split]) ** 2
        / (p1[split] * (1 - p1[split]))
    )
    best = levels[variances == variances.max()]
    return int(best[len(best) // 2])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD, description='Fixed threshold')
class ManualThreshold(ImageTransform):
    """Binarize at a fixed level of the normalized gray image.

    Parameters
    ----------
    value : int
        Threshold in ``[0, 255]``. Samples ``<= value`` become 0.
    """

    value: Annotated[int, Range(min=0, max=255), Desc('Threshold level')] = 127

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        return binarize(prepare(source), params['value'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD, description='Iterative global threshold')
class GlobalThreshold(ImageTransform):
    """Iterative global threshold.

    Starting at 127, the threshold moves to the integer midpoint of the
    mean of the samples at or below it and the mean of the samples above
    it, until it changes by less than ``delta_t``.

    Parameters
    ----------
    delta_t : int
        Convergence tolerance (>= 1). Default 1.
    max_iterations : int
        Upper bound on the number of updates. Default 256.
    """

    delta_t: Annotated[int, Range(min=1), Desc('Convergence tolerance')] = 1
    max_iterations: Annotated[int, Range(min=1), Desc('Iteration cap')] = 256

    def level(self, prepared: ImageBuffer, **kwargs: Any) -> int:
        """Converged threshold level of an already prepared image."""
        params = self._resolve_params(kwargs)
        plane = prepared.get_band(0)
        threshold = 127
        for iteration in range(params['max_iterations']):
            low = plane[plane <= threshold]
            high = plane[plane > threshold]
            m1 = low.mean() if low.size else 0.0
            m2 = high.mean() if high.size else 0.0
            new_threshold = int((m1 + m2) / 2)
            converged = abs(threshold - new_threshold) < params['delta_t']
            threshold = new_threshold
            if converged:
                logger.debug("GlobalThreshold converged to %d after %d iteration(s)",
                             threshold, iteration + 1)
                return threshold
        logger.warning("GlobalThreshold did not converge in %d iterations; using %d",
                       params['max_iterations'], threshold)
        return threshold

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        prepared = prepare(source)
        return binarize(prepared, self.level(prepared, **kwargs))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD, description='Otsu threshold')
class OtsuThreshold(ImageTransform):
    """Binarize at the Otsu level of the normalized gray image."""

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        prepared = prepare(source)
        level = otsu_level(prepared)
        logger.debug("OtsuThreshold level %d", level)
        return binarize(prepared, level)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD, description='Two-level hysteresis threshold')
class HysteresisThreshold(ImageTransform):
    """Two-level threshold keeping weak responses connected to strong ones.

    Samples above ``high`` are strong; samples above ``low`` are weak. A
    weak sample is foreground when its 8-connected weak region contains
    at least one strong sample.

    Parameters
    ----------
    low, high : float, optional
        Levels on the normalized ``[0, 255]`` gray image. ``high``
        defaults to the Otsu level and ``low`` to ``high / 2``.

    Raises
    ------
    ValidationError
        If ``low > high``.
    """

    def __init__(self, low: Optional[float] = None, high: Optional[float] = None) -> None:
        if low is not None and high is not None and low > high:
            raise ValidationError(f"low ({low}) must not exceed high ({high})")
        self.low = low
        self.high = high

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        prepared = prepare(source)
        high = self.high if self.high is not None else otsu_level(prepared)
        low = self.low if self.low is not None else high / 2
        if low > high:
            raise ValidationError(f"low ({low}) must not exceed high ({high})")

        plane = prepared.get_band(0)
        weak = plane > low
        strong = plane > high
        regions, count = label(weak, structure=_EIGHT_CONNECTED)
        keep = np.zeros(count + 1, dtype=bool)
        keep[np.unique(regions[strong])] = True
        keep[0] = False
        logger.debug("Hysteresis low=%.2f high=%.2f: %d region(s), %d kept",
                     low, high, count, int(keep.sum()))
        return ImageBuffer.from_bands([np.where(keep[regions], 255.0, 0.0)])
