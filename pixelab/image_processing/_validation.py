# -*- coding: utf-8 -*-
"""
Shared validation helpers for image processors.

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
import numbers

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer


def validate_window_length(window_length: int, name: str = 'window_length') -> None:
    """Validate that a window length is a positive odd integer.

    Raises
    ------
    ValidationError
        If ``window_length`` is not an integer, is < 1, or is even.
    """
    if isinstance(window_length, bool) or not isinstance(window_length, numbers.Integral):
        raise ValidationError(
            f"{name} must be an integer, got {type(window_length).__name__}"
        )
    if window_length < 1:
        raise ValidationError(f"{name} must be >= 1, got {window_length}")
    if window_length % 2 == 0:
        raise ValidationError(f"{name} must be odd, got {window_length}")


def validate_positive(value: float, name: str) -> None:
    """Validate that *value* is a real number strictly greater than zero."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    if not value > 0:
        raise ValidationError(f"{name} must be > 0, got {value}")


def validate_probability(value: float, name: str) -> None:
    """Validate that *value* lies in ``[0, 1]``."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name} must be in [0, 1], got {value}")


def validate_same_dimensions(first: ImageBuffer, second: ImageBuffer) -> None:
    """Validate that two images share width, height and band count."""
    if first.shape != second.shape:
        raise ValidationError(
            f"Images must share width, height and bands: "
            f"{first.shape} vs {second.shape}"
        )


def validate_band_count(image: ImageBuffer, bands: int) -> None:
    if image.bands != bands:
        raise ValidationError(
            f"Expected an image with exactly {bands} band(s), got {image.bands}"
        )
