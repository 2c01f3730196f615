# -*- coding: utf-8 -*-
"""
Color Space Conversion - sRGB to CIE-Lab and back, D65 reference white.

``RgbToCieLab`` expects bands R, G, B in ``[0, 255]`` and returns bands
L, a, b. ``CieLabToRgb`` is its algebraic inverse and returns R, G, B
scaled to ``[0, 255]`` (values are not clipped).

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
from typing import Any

# Third-party
import numpy as np

# pixelab internal
from pixelab.image import ImageBuffer
from pixelab.image_processing._validation import validate_band_count
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

#: D65 reference white (Xn, Yn, Zn).
D65 = np.array([0.950470, 1.0, 1.088830])

RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787037
_LAB_OFFSET = 4.0 / 29
_LAB_INVERSE_EPSILON = 0.206893034
_GAMMA_COMPRESS_LIMIT = 0.00304


def _expand_gamma(v: np.ndarray) -> np.ndarray:
    return np.where(v <= 0.04045, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)


def _compress_gamma(v: np.ndarray) -> np.ndarray:
    safe = np.maximum(v, 0.0)
    return np.where(v <= _GAMMA_COMPRESS_LIMIT, 12.92 * v, 1.055 * safe ** (1 / 2.4) - 0.055)


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > _LAB_EPSILON, np.cbrt(t), _LAB_KAPPA * t + _LAB_OFFSET)


def _lab_f_inverse(t: np.ndarray) -> np.ndarray:
    return np.where(t > _LAB_INVERSE_EPSILON, t ** 3, (t - _LAB_OFFSET) / _LAB_KAPPA)


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert a ``(..., 3)`` array of 0-255 RGB values to CIE-Lab."""
    linear = _expand_gamma(np.asarray(rgb, dtype=np.float64) / 255.0)
    xyz = (linear @ RGB_TO_XYZ.T) / D65
    fx, fy, fz = np.moveaxis(_lab_f(xyz), -1, 0)
    return np.stack([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)], axis=-1)


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert a ``(..., 3)`` array of CIE-Lab values to 0-255 RGB."""
    l, a, b = np.moveaxis(np.asarray(lab, dtype=np.float64), -1, 0)
    fy = (l + 16) / 116
    f = np.stack([fy + a / 500, fy, fy - b / 200], axis=-1)
    xyz = D65 * _lab_f_inverse(f)
    return 255.0 * _compress_gamma(xyz @ XYZ_TO_RGB.T)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.COLOR, description='sRGB to CIE-Lab (D65)')
class RgbToCieLab(ImageTransform):
    """Convert a 3-band RGB image into L, a, b bands.

    Raises
    ------
    ValidationError
        If the source does not have exactly 3 bands.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        validate_band_count(source, 3)
        return ImageBuffer._adopt(rgb_to_lab(source.samples))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.COLOR, description='CIE-Lab (D65) to sRGB')
class CieLabToRgb(ImageTransform):
    """Convert a 3-band L, a, b image back into RGB on ``[0, 255]``.

    Raises
    ------
    ValidationError
        If the source does not have exactly 3 bands.
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        validate_band_count(source, 3)
        return ImageBuffer._adopt(lab_to_rgb(source.samples))
