# -*- coding: utf-8 -*-
"""
Histogram Statistics - Per-band histograms, moments and histogram-driven enhancement.

Histograms bucket every sample of a band by its truncated integer level.
``Stats`` derives mean and variance from a histogram's frequencies; the
cumulative distribution feeds ``HistogramEqualization``, and the mean and
standard deviation drive the three-segment ``ContrastStretch``.

Dependencies
------------
numpy

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
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterator

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import DegenerateStatisticsError
from pixelab.image import ImageBuffer
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.pointwise import create_applying
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


class Histogram(Mapping):
    """Immutable mapping from integer level to occurrence count.

    Parameters
    ----------
    counts : Mapping[int, int]
        Level to count. Levels with a zero count are dropped.

    Examples
    --------
    >>> h = Histogram({5: 10})
    >>> h.get_count(5), h.get_count(6), h.total
    (10, 0, 10)
    """

    __slots__ = ('_counts', '_total')

    def __init__(self, counts: Mapping) -> None:
        self._counts = {int(k): int(v) for k, v in counts.items() if v}
        self._total = sum(self._counts.values())

    def __getitem__(self, category: int) -> int:
        return self._counts[category]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    @property
    def total(self) -> int:
        """Sum of all counts."""
        return self._total

    def get_count(self, category: int) -> int:
        return self._counts.get(category, 0)

    def get_frequency(self, category: int) -> float:
        """``count / total`` for *category*, 0.0 when absent."""
        if not self._total:
            return 0.0
        return self._counts.get(category, 0) / self._total

    @property
    def min_category(self) -> int:
        if not self._counts:
            raise DegenerateStatisticsError("Empty histogram has no minimum category")
        return min(self._counts)

    @property
    def max_category(self) -> int:
        if not self._counts:
            raise DegenerateStatisticsError("Empty histogram has no maximum category")
        return max(self._counts)

    def __repr__(self) -> str:
        return f"Histogram(categories={len(self._counts)}, total={self._total})"


@dataclass(frozen=True)
class Stats:
    """Moments of one band's histogram.

    Attributes
    ----------
    min, max : int
        Smallest and largest histogram categories.
    mean : float
        ``sum(level * frequency(level))``.
    variance : float
        ``sum((level - mean) ** 2 * frequency(level))``.
    """

    min: int
    max: int
    mean: float
    variance: float

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)


def _truncated_levels(plane: np.ndarray) -> np.ndarray:
    return np.trunc(plane).astype(np.int64)


def get_histograms(image: ImageBuffer) -> Dict[int, Histogram]:
    """Histogram of every band, keyed by band index.

    Samples are bucketed by their value truncated toward zero. The counts
    of each band sum to ``width * height``.
    """
    histograms = {}
    for b in range(image.bands):
        levels, counts = np.unique(
            _truncated_levels(image.get_band(b)), return_counts=True
        )
        histograms[b] = Histogram(dict(zip(levels.tolist(), counts.tolist())))
    return histograms


def get_stats(histogram: Histogram) -> Stats:
    """Mean and variance of *histogram*.

    Absent levels between the bounds have zero frequency and contribute
    nothing, so only the present categories are summed.

    Raises
    ------
    DegenerateStatisticsError
        If *histogram* is empty.
    """
    lo, hi = histogram.min_category, histogram.max_category
    levels = np.fromiter(histogram, dtype=np.float64)
    freqs = np.array([histogram.get_frequency(int(l)) for l in levels])
    mean = float(np.sum(levels * freqs))
    variance = float(np.sum((levels - mean) ** 2 * freqs))
    return Stats(min=lo, max=hi, mean=mean, variance=variance)


def image_stats(image: ImageBuffer) -> Dict[int, Stats]:
    """``get_stats`` of every band histogram, keyed by band index."""
    return {b: get_stats(h) for b, h in get_histograms(image).items()}


def cumulative_distribution(histogram: Histogram) -> Dict[int, int]:
    """Equalization mapping derived from the cumulative distribution.

    For every level ``l`` in ``[min, max]`` the running frequency sum
    ``cdf(l)`` is rescaled with ``s_min = min(cdf)`` to
    ``trunc(((cdf(l) - s_min) / (1 - s_min)) * max + 0.5)``. A histogram
    with a single category maps that category to itself.

    Returns
    -------
    Dict[int, int]
        Level to equalized level, for every level in ``[min, max]``.
    """
    lo, hi = histogram.min_category, histogram.max_category
    levels = np.arange(lo, hi + 1)
    cdf = np.cumsum([histogram.get_frequency(int(l)) for l in levels])
    s_min = cdf.min()
    if s_min >= 1.0:
        return {int(l): int(l) for l in levels}
    mapped = np.trunc(((cdf - s_min) / (1.0 - s_min)) * hi + 0.5).astype(np.int64)
    return dict(zip(levels.tolist(), mapped.tolist()))


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.ENHANCE,
    description='Histogram equalization through the cumulative distribution',
)
class HistogramEqualization(ImageTransform):
    """Replace every sample by the equalized level of its truncated value."""

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        tables = []
        offsets = []
        for b, histogram in get_histograms(source).items():
            mapping = cumulative_distribution(histogram)
            offsets.append(histogram.min_category)
            tables.append(np.array([mapping[k] for k in sorted(mapping)], dtype=np.float64))

        def equalize(x, y, band, value):
            out = np.empty(value.shape, dtype=np.float64)
            for b, (table, lo) in enumerate(zip(tables, offsets)):
                out[:, :, b] = table[_truncated_levels(value[:, :, b]) - lo]
            return out

        return create_applying(source, equalize)


def _linear(x1: float, y1: float, x2: float, y2: float):
    """Line through two points; a zero-width segment is constant ``y1``."""
    if x2 == x1:
        return lambda v: np.full_like(v, y1, dtype=np.float64)
    slope = (y2 - y1) / (x2 - x1)
    return lambda v: slope * (v - x1) + y1


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.ENHANCE,
    description='Three-segment contrast stretch around mean +/- std',
)
class ContrastStretch(ImageTransform):
    """Piecewise-linear contrast increase driven by band statistics.

    With ``r1 = mean - std`` and ``r2 = mean + std`` (pulled back inside
    ``[min, max]`` as ``min + std/2`` and ``max - std/2`` when they fall
    outside), the band is mapped through the segments
    ``(min, min) -> (r1, s1) -> (r2, s2) -> (max, max)`` where
    ``s1 = (r1 - min)/2 + min`` darkens the low end and
    ``s2 = (max - r2)/2 + r2`` brightens the high end.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        segments = []
        for b, stats in image_stats(source).items():
            std = stats.std
            r1 = stats.mean - std
            if r1 < stats.min:
                r1 = stats.min + std / 2
            r2 = stats.mean + std
            if r2 > stats.max:
                r2 = stats.max - std / 2
            s1 = (r1 - stats.min) / 2 + stats.min
            s2 = (stats.max - r2) / 2 + r2
            logger.debug("ContrastStretch band %d: r1=%.3f r2=%.3f s1=%.3f s2=%.3f",
                         b, r1, r2, s1, s2)
            segments.append((
                r1, r2,
                _linear(stats.min, stats.min, r1, s1),
                _linear(r1, s1, r2, s2),
                _linear(r2, s2, stats.max, stats.max),
            ))

        def stretch(x, y, band, value):
            out = np.empty(value.shape, dtype=np.float64)
            for b, (r1, r2, low, mid, high) in enumerate(segments):
                v = value[:, :, b]
                out[:, :, b] = np.where(
                    v <= r1, low(v), np.where(v >= r2, high(v), mid(v))
                )
            return out

        return create_applying(source, stretch)
