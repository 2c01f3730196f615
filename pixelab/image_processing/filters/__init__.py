# -*- coding: utf-8 -*-
"""
Filters Sub-module - Mask, window and edge filters.

masks.py
    Mask validation, 45 degree rotation and mirroring, the canonical
    border operators and generated Gaussian, high-pass and LoG masks.
window.py
    Sliding-window reduction and mask correlation over interior pixels.
smoothing.py
    ``MeanFilter``, ``MedianFilter``, ``WeightedMedianFilter``,
    ``GaussianFilter``, ``HighPassFilter``.
edges.py
    Gradient, maximum-direction, Laplace, LoG and Canny border detectors.

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

from pixelab.image_processing.filters.masks import (
    CANONICAL_MASKS,
    LAPLACE_MASK,
    MaskDirection,
    directional_masks,
    gaussian_mask,
    high_pass_mask,
    laplacian_of_gaussian_mask,
    mirror_mask,
    rotate_mask,
    validate_mask,
)
from pixelab.image_processing.filters.window import (
    correlate_plane,
    filter_interior,
    filter_with_mask,
    reduce_windows,
)
from pixelab.image_processing.filters.smoothing import (
    GaussianFilter,
    HighPassFilter,
    MeanFilter,
    MedianFilter,
    WeightedMedianFilter,
)
from pixelab.image_processing.filters.edges import (
    CannyEdgeDetector,
    GradientBorderDetector,
    LaplaceBorderDetector,
    LaplacianOfGaussianDetector,
    MaxDirectionBorderDetector,
    NonMaximumSuppression,
)

__all__ = [
    'CANONICAL_MASKS',
    'LAPLACE_MASK',
    'MaskDirection',
    'directional_masks',
    'gaussian_mask',
    'high_pass_mask',
    'laplacian_of_gaussian_mask',
    'mirror_mask',
    'rotate_mask',
    'validate_mask',
    'correlate_plane',
    'filter_interior',
    'filter_with_mask',
    'reduce_windows',
    'MeanFilter',
    'MedianFilter',
    'WeightedMedianFilter',
    'GaussianFilter',
    'HighPassFilter',
    'GradientBorderDetector',
    'MaxDirectionBorderDetector',
    'LaplaceBorderDetector',
    'LaplacianOfGaussianDetector',
    'NonMaximumSuppression',
    'CannyEdgeDetector',
]
