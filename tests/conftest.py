# -*- coding: utf-8 -*-
"""
Shared Fixtures - Synthetic images used across the test suite.

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

import numpy as np
import pytest

from pixelab.image import ImageBuffer


@pytest.fixture
def constant_image():
    """5x4 single-band image, every sample 10.0."""
    return ImageBuffer.homogeneous(5, 4, 1, 10.0)


@pytest.fixture
def ramp_image():
    """6x5 single-band image with sample ``10 * x + y``."""
    x, y = np.indices((6, 5))
    return ImageBuffer((10.0 * x + y)[:, :, np.newaxis])


@pytest.fixture
def rgb_image():
    """8x6 three-band image of seeded random integers in [0, 255]."""
    rng = np.random.default_rng(1234)
    return ImageBuffer(rng.integers(0, 256, size=(8, 6, 3)).astype(np.float64))


@pytest.fixture
def step_image():
    """16x16 single-band image: 0 for x < 8, 255 for x >= 8."""
    samples = np.zeros((16, 16, 1))
    samples[8:, :, 0] = 255.0
    return ImageBuffer(samples)


@pytest.fixture
def seeded_rng():
    return np.random.default_rng(42)
