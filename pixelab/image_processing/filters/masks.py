# -*- coding: utf-8 -*-
"""
Convolution Masks - Kernel construction, validation and directional variants.

Masks are square float64 matrices indexed ``[dx][dy]`` like the images
they are applied to. A canonical 3x3 border mask points TOP; the other
seven directions are derived by 45-degree ring rotations and mirroring
(negation), never by editing the canonical matrix in place.

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
import math
from enum import Enum
from typing import Dict

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image_processing._validation import (
    validate_positive,
    validate_window_length,
)
from pixelab.vocabulary import BorderOperator

# Outer ring of a 3x3 matrix, walked so that one rotation step moves
# every entry one position toward the start of the list.
_RING = ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0))


def validate_mask(mask) -> np.ndarray:
    """Return *mask* as a float64 array after checking it is square and non-empty.

    Raises
    ------
    ValidationError
        If *mask* is empty, not 2D, not square, or not finite.
    """
    try:
        arr = np.array(mask, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Mask must be a numeric matrix: {e}") from e
    if arr.ndim != 2 or arr.size == 0:
        raise ValidationError(f"Mask must be a non-empty 2D matrix, got shape {arr.shape}")
    if arr.shape[0] != arr.shape[1]:
        raise ValidationError(f"Mask must be square, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValidationError("Mask entries must be finite numbers")
    return arr


def mirror_mask(mask) -> np.ndarray:
    """Negate every entry of *mask*."""
    return -validate_mask(mask)


def rotate_mask(mask, turns: int) -> np.ndarray:
    """Rotate a 3x3 mask by ``turns`` steps of 45 degrees.

    Turns wrap every 8 steps. Past 4 turns the ring rotation restarts and
    the result is mirrored, so ``rotate_mask(m, 4)`` equals
    ``mirror_mask(m)``.

    Raises
    ------
    ValidationError
        If *mask* is not 3x3.
    """
    arr = validate_mask(mask)
    if arr.shape != (3, 3):
        raise ValidationError(f"Only 3x3 masks can be rotated, got shape {arr.shape}")
    real_turns = turns % 8
    steps = real_turns % 4
    ring = np.array([arr[i] for i in _RING])
    ring = np.roll(ring, -steps)
    for (i, j), value in zip(_RING, ring):
        arr[i, j] = value
    if real_turns >= 4:
        arr = -arr
    return arr


class MaskDirection(Enum):
    """Direction a border mask responds to."""

    TOP = 'top'
    TOP_LEFT = 'top_left'
    LEFT = 'left'
    BOTTOM_LEFT = 'bottom_left'
    BOTTOM = 'bottom'
    BOTTOM_RIGHT = 'bottom_right'
    RIGHT = 'right'
    TOP_RIGHT = 'top_right'


CANONICAL_MASKS: Dict[BorderOperator, np.ndarray] = {
    BorderOperator.ANONYMOUS: np.array([[1, 1, 1], [1, -2, 1], [-1, -1, -1]], dtype=np.float64),
    BorderOperator.KIRSH: np.array([[5, 5, 5], [-3, 0, -3], [-3, -3, -3]], dtype=np.float64),
    BorderOperator.PREWITT: np.array([[1, 1, 1], [0, 0, 0], [-1, -1, -1]], dtype=np.float64),
    BorderOperator.SOBEL: np.array([[1, 2, 1], [0, 0, 0], [-1, -2, -1]], dtype=np.float64),
}
for _mask in CANONICAL_MASKS.values():
    _mask.flags.writeable = False

LAPLACE_MASK = np.array([[0, -1, 0], [-1, 4, -1], [0, -1, 0]], dtype=np.float64)
LAPLACE_MASK.flags.writeable = False


def directional_masks(operator) -> Dict[MaskDirection, np.ndarray]:
    """All eight directional variants of a canonical border mask.

    Parameters
    ----------
    operator : BorderOperator or str
        Which canonical mask to derive from.
    """
    top = CANONICAL_MASKS[BorderOperator(operator)]
    top_left = rotate_mask(top, 1)
    left = rotate_mask(top, 2)
    bottom_left = rotate_mask(top, 3)
    return {
        MaskDirection.TOP: top.copy(),
        MaskDirection.TOP_LEFT: top_left,
        MaskDirection.LEFT: left,
        MaskDirection.BOTTOM_LEFT: bottom_left,
        MaskDirection.BOTTOM: mirror_mask(top),
        MaskDirection.BOTTOM_RIGHT: mirror_mask(top_left),
        MaskDirection.RIGHT: mirror_mask(left),
        MaskDirection.TOP_RIGHT: mirror_mask(bottom_left),
    }


def _offsets(margin: int):
    d = np.arange(-margin, margin + 1, dtype=np.float64)
    return d[:, np.newaxis], d[np.newaxis, :]


def gaussian_mask(sigma: float) -> np.ndarray:
    """Normalized Gaussian kernel of side ``2 * int(2 * sigma) + 1``.

    Entries are ``exp(-(dx^2 + dy^2) / sigma^2) / (2 pi sigma^2)`` rescaled
    to sum to 1.
    """
    validate_positive(sigma, 'sigma')
    dx, dy = _offsets(int(2 * sigma))
    mask = np.exp(-(dx ** 2 + dy ** 2) / sigma ** 2) / (2 * math.pi * sigma ** 2)
    return mask / mask.sum()


def high_pass_mask(window_length: int) -> np.ndarray:
    """Sharpening kernel: every entry ``-1/N`` and the center ``(N - 1)/N``.

    ``N = window_length ** 2``; the entries sum to zero.
    """
    validate_window_length(window_length)
    n = window_length * window_length
    mask = np.full((window_length, window_length), -1.0 / n)
    mask[window_length // 2, window_length // 2] *= 1 - n
    return mask


def laplacian_of_gaussian_mask(sigma: float) -> np.ndarray:
    """Laplacian-of-Gaussian kernel of side ``2 * int(3 * sigma) + 1``.

    Entries are ``-1/(sqrt(2 pi) sigma^3) * (2 - r) * exp(-r / 2)`` with
    ``r = (dx^2 + dy^2) / sigma^2``.
    """
    validate_positive(sigma, 'sigma')
    dx, dy = _offsets(int(3 * sigma))
    r = (dx ** 2 + dy ** 2) / sigma ** 2
    factor = -1.0 / (math.sqrt(2 * math.pi) * sigma ** 3)
    return factor * (2.0 - r) * np.exp(-r / 2.0)
