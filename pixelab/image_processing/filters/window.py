# -*- coding: utf-8 -*-
"""
Sliding Window Core - Neighborhood extraction and reduction with a zero border.

Every window filter in pixelab runs through one of three entry points:

- ``filter_interior`` runs a ``scipy.ndimage`` size-based filter
  (``uniform_filter``, ``median_filter``) band by band.
- ``reduce_windows`` exposes each ``L x L`` neighborhood to a reducer
  (weighted median, ...).
- ``filter_with_mask`` computes the weighted sum of each neighborhood
  with a kernel, delegating the correlation to ``scipy.ndimage``.

All of them evaluate only pixels whose window lies fully inside the
image. The ``margin = L // 2`` pixels along every edge are left at 0; no
padding or extrapolation takes place.

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
from typing import Callable

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy.ndimage import correlate

# pixelab internal
from pixelab.image import ImageBuffer
from pixelab.image_processing._validation import validate_window_length
from pixelab.image_processing.filters.masks import validate_mask

#: Maps an array of windows ``(..., L, L)`` to one value per window ``(...)``.
WindowReducer = Callable[[np.ndarray], np.ndarray]


def interior(shape, margin: int):
    """Slices selecting the pixels at least *margin* away from every edge.

    Returns ``None`` when the image is too small to have an interior.
    """
    width, height = shape[0], shape[1]
    if width <= 2 * margin or height <= 2 * margin:
        return None
    return slice(margin, width - margin), slice(margin, height - margin)


def reduce_windows(
    image: ImageBuffer, window_length: int, reducer: WindowReducer,
) -> ImageBuffer:
    """Reduce every full ``window_length`` neighborhood of every band.

    Parameters
    ----------
    image : ImageBuffer
        Source image.
    window_length : int
        Odd, positive side of the square window.
    reducer : callable
        Receives a ``(w', h', bands, L, L)`` view of all interior windows
        and returns the ``(w', h', bands)`` reduced values.

    Returns
    -------
    ImageBuffer
        Image of the same shape with a zero border of width
        ``window_length // 2``.

    Raises
    ------
    ValidationError
        If *window_length* is even or non-positive.
    """
    validate_window_length(window_length)
    margin = window_length // 2
    out = np.zeros(image.shape, dtype=np.float64)
    region = interior(image.shape, margin)
    if region is not None:
        windows = sliding_window_view(
            image.samples, (window_length, window_length), axis=(0, 1)
        )
        out[region] = reducer(windows)
    return ImageBuffer._adopt(out)


def filter_interior(
    image: ImageBuffer,
    window_length: int,
    plane_filter: Callable[..., np.ndarray],
) -> ImageBuffer:
    """Run a ``scipy.ndimage`` size-based filter over every band.

    *plane_filter* is called as ``plane_filter(plane, size=window_length,
    mode='constant')``. Only interior results are kept, so the padding
    mode never reaches the output.

    Raises
    ------
    ValidationError
        If *window_length* is even or non-positive.
    """
    validate_window_length(window_length)
    margin = window_length // 2
    out = np.zeros(image.shape, dtype=np.float64)
    region = interior(image.shape, margin)
    if region is not None:
        for b in range(image.bands):
            full = plane_filter(image.get_band(b), size=window_length, mode='constant')
            out[region + (b,)] = full[region]
    return ImageBuffer._adopt(out)


def correlate_plane(plane: np.ndarray, mask) -> np.ndarray:
    """Weighted neighborhood sum of a 2D plane, zero outside the interior."""
    kernel = validate_mask(mask)
    validate_window_length(kernel.shape[0], 'mask side')
    margin = kernel.shape[0] // 2
    out = np.zeros(plane.shape, dtype=np.float64)
    region = interior(plane.shape, margin)
    if region is not None:
        full = correlate(np.asarray(plane, dtype=np.float64), kernel, mode='constant', cval=0.0)
        out[region] = full[region]
    return out


def filter_with_mask(image: ImageBuffer, mask) -> ImageBuffer:
    """Weighted sum ``sum(window * mask)`` of every interior neighborhood.

    The mask is applied without flipping (correlation), band by band.
    The border of width ``mask_side // 2`` is 0.

    Raises
    ------
    ValidationError
        If *mask* is empty or not square.
    """
    return ImageBuffer.from_bands([
        correlate_plane(image.get_band(b), mask) for b in range(image.bands)
    ])
