# -*- coding: utf-8 -*-
"""
Pointwise Transforms - Per-sample functions and the point operations built on them.

``create_applying`` is the substrate of every per-sample operation: it
evaluates a function ``f(x, y, band, value)`` over the whole
``(width, height, bands)`` grid and returns a new image. The point
operations (normalization, log compression, gamma, negative) and the
two-image arithmetic helpers are expressed with it.

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
from typing import Annotated, Any, Callable

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import DegenerateStatisticsError, ValidationError
from pixelab.image import ImageBuffer, band_extrema
from pixelab.image_processing._validation import (
    validate_positive,
    validate_same_dimensions,
)
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

#: ``f(x, y, band, value) -> new_value``, array-aware unless ``vectorized=False``.
SampleFunction = Callable[[np.ndarray, np.ndarray, np.ndarray, np.ndarray], Any]


def create_applying(
    source: ImageBuffer, func: SampleFunction, vectorized: bool = True,
) -> ImageBuffer:
    """Build a new image by applying *func* to every sample of *source*.

    With ``vectorized=True`` (default) *func* is called once with sparse
    index grids ``x`` (shape ``(w, 1, 1)``), ``y`` (``(1, h, 1)``),
    ``band`` (``(1, 1, b)``) and the read-only sample array ``value``
    (``(w, h, b)``). It must return something broadcastable to
    ``(w, h, b)``. With ``vectorized=False`` *func* is a plain scalar
    function, called once per sample through ``numpy.vectorize``. Each
    output sample depends only on its own coordinates, so the evaluation
    order is irrelevant.

    Parameters
    ----------
    source : ImageBuffer
        Input image; never modified.
    func : callable
        Per-sample function ``f(x, y, band, value) -> new_value``.
    vectorized : bool
        Whether *func* accepts numpy arrays. Default True.

    Returns
    -------
    ImageBuffer
        New image with the dimensions of *source*.

    Raises
    ------
    ValidationError
        If the result of *func* cannot be broadcast to the image shape,
        or if a scalar-only *func* is passed with ``vectorized=True``.

    Examples
    --------
    >>> brighter = create_applying(img, lambda x, y, b, v: v + 10.0)
    >>> checker = create_applying(img, lambda x, y, b, v: ((x + y) % 2) * 255.0)
    >>> binary = create_applying(img, lambda x, y, b, v: 0.0 if v < 128 else 255.0,
    ...                          vectorized=False)
    """
    x, y, band = np.indices(source.shape, sparse=True)
    if not vectorized:
        func = np.vectorize(func, otypes=[np.float64])
    try:
        result = func(x, y, band, source.samples)
    except ValidationError:
        raise
    except ValueError as e:
        raise ValidationError(
            "Sample function failed on array arguments; pass vectorized=False "
            "for a function written for scalar samples"
        ) from e
    result = np.asarray(result, dtype=np.float64)
    try:
        result = np.broadcast_to(result, source.shape)
    except ValueError as e:
        raise ValidationError(
            f"Sample function returned shape {result.shape}, which does not "
            f"broadcast to image shape {source.shape}"
        ) from e
    return ImageBuffer._adopt(np.array(result))


# ---------------------------------------------------------------------
# Two-image arithmetic
# ---------------------------------------------------------------------

def add(first: ImageBuffer, second: ImageBuffer) -> ImageBuffer:
    """Sample-wise sum of two images of identical dimensions."""
    validate_same_dimensions(first, second)
    other = second.samples
    return create_applying(first, lambda x, y, b, v: v + other)


def subtract(first: ImageBuffer, second: ImageBuffer) -> ImageBuffer:
    """Sample-wise difference ``first - second``."""
    validate_same_dimensions(first, second)
    other = second.samples
    return create_applying(first, lambda x, y, b, v: v - other)


def multiply(first: ImageBuffer, second: ImageBuffer) -> ImageBuffer:
    """Sample-wise product of two images of identical dimensions."""
    validate_same_dimensions(first, second)
    other = second.samples
    return create_applying(first, lambda x, y, b, v: v * other)


def scalar_multiply(image: ImageBuffer, scalar: float) -> ImageBuffer:
    """Multiply every sample by *scalar*."""
    return create_applying(image, lambda x, y, b, v: v * float(scalar))


# ---------------------------------------------------------------------
# Point operations
# ---------------------------------------------------------------------

def normalize(image: ImageBuffer) -> ImageBuffer:
    """Linearly remap every band onto ``[0, 255]``.

    Each band is mapped with ``(v - min) * 255 / (max - min)``, so its
    minimum becomes exactly 0 and its maximum exactly 255. A band whose
    maximum equals its minimum has no dynamic range and becomes all 0.
    """
    mins, maxs = band_extrema(image)
    span = maxs - mins
    flat = span == 0
    if flat.any():
        logger.debug("normalize: band(s) %s are constant, mapped to 0",
                     np.flatnonzero(flat).tolist())
    divisor = np.where(flat, 1.0, span)
    return create_applying(
        image,
        lambda x, y, b, v: np.where(
            flat[b], 0.0, (v - mins[b]) * 255.0 / divisor[b]
        ),
    )


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.POINT,
    description='Per-band linear remap onto [0, 255]',
)
class Normalize(ImageTransform):
    """Per-band linear remap onto ``[0, 255]``.

    Constant bands map to 0. See :func:`normalize`.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        return normalize(source)


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.POINT,
    description='Logarithmic dynamic range compression onto [0, 255]',
)
class DynamicRangeCompression(ImageTransform):
    """Logarithmic dynamic range compression.

    Each band is mapped with ``c * log10(1 + v)`` where
    ``c = 255 / log10(1 + max)``, so the band maximum lands on 255.

    Raises
    ------
    DegenerateStatisticsError
        From ``apply`` when a band maximum is not positive.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        _, maxs = band_extrema(source)
        if np.any(maxs <= 0):
            raise DegenerateStatisticsError(
                f"Dynamic range compression needs a positive maximum in "
                f"every band, got {maxs.tolist()}"
            )
        c = 255.0 / np.log10(1.0 + maxs)
        return create_applying(source, lambda x, y, b, v: c[b] * np.log10(1.0 + v))


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.POINT,
    description='Gamma power law c * v ** gamma',
)
class GammaPower(ImageTransform):
    """Gamma power-law transform ``c * v ** gamma`` with ``c = 255 ** (1 - gamma)``.

    The constant keeps 255 fixed: ``c * 255 ** gamma == 255``.

    Parameters
    ----------
    gamma : float
        Exponent, strictly positive. Default 1.0 (identity).
    """

    gamma: Annotated[float, Range(min=0.0), Desc('Power-law exponent (> 0)')] = 1.0

    def __init__(self, gamma: float = 1.0) -> None:
        validate_positive(gamma, 'gamma')
        self.gamma = gamma

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        gamma = self._resolve_params(kwargs)['gamma']
        validate_positive(gamma, 'gamma')
        c = 255.0 ** (1.0 - gamma)
        return create_applying(source, lambda x, y, b, v: c * np.power(v, gamma))


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.POINT,
    description='Photographic negative of the normalized image',
)
class Negative(ImageTransform):
    """Photographic negative ``255 - v`` of the normalized image.

    The input is normalized first because raw samples may fall outside
    the byte range.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        return create_applying(normalize(source), lambda x, y, b, v: 255.0 - v)
