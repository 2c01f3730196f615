# -*- coding: utf-8 -*-
"""
Point Operation Tests - create_applying, image arithmetic and intensity transforms.

Dependencies
------------
pytest

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

from pixelab.exceptions import DegenerateStatisticsError, ValidationError
from pixelab.image import ImageBuffer
from pixelab.image_processing.pointwise import (
    DynamicRangeCompression,
    GammaPower,
    Negative,
    Normalize,
    add,
    create_applying,
    multiply,
    normalize,
    scalar_multiply,
    subtract,
)


# ---------------------------------------------------------------------------
# create_applying
# ---------------------------------------------------------------------------

class TestCreateApplying:

    def test_receives_coordinates(self):
        img = ImageBuffer.empty(3, 2, 2)
        out = create_applying(img, lambda x, y, b, v: 100 * x + 10 * y + b)
        assert out.get_sample(2, 1, 1) == 211.0
        assert out.get_sample(0, 0, 0) == 0.0

    def test_preserves_shape(self, rgb_image):
        out = create_applying(rgb_image, lambda x, y, b, v: v)
        assert out == rgb_image
        assert out is not rgb_image

    def test_bad_shape_raises(self, ramp_image):
        with pytest.raises(ValidationError):
            create_applying(ramp_image, lambda x, y, b, v: np.zeros((2, 2, 2)))

    def test_scalar_function(self):
        img = ImageBuffer([[1.0], [3.0]])
        out = create_applying(img, lambda x, y, b, v: 0.0 if v < 2 else 1.0,
                              vectorized=False)
        np.testing.assert_array_equal(out.samples.ravel(), [0.0, 1.0])

    def test_scalar_function_receives_coordinates(self):
        img = ImageBuffer.empty(3, 2, 2)
        out = create_applying(img, lambda x, y, b, v: float(100 * x + 10 * y + b),
                              vectorized=False)
        assert out.get_sample(2, 1, 1) == 211.0

    def test_scalar_function_on_arrays_raises(self, ramp_image):
        with pytest.raises(ValidationError, match="vectorized=False"):
            create_applying(ramp_image, lambda x, y, b, v: 0.0 if v < 2 else 1.0)


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class TestArithmetic:

    def test_add_subtract_multiply(self, ramp_image, constant_image):
        other = ImageBuffer.homogeneous(6, 5, 1, 2.0)
        np.testing.assert_array_equal(
            add(ramp_image, other).samples, ramp_image.samples + 2.0)
        np.testing.assert_array_equal(
            subtract(ramp_image, other).samples, ramp_image.samples - 2.0)
        np.testing.assert_array_equal(
            multiply(ramp_image, other).samples, ramp_image.samples * 2.0)

    def test_scalar_multiply(self, ramp_image):
        np.testing.assert_array_equal(
            scalar_multiply(ramp_image, -0.5).samples, ramp_image.samples * -0.5)

    def test_mismatched_dimensions_raise(self, ramp_image, constant_image):
        with pytest.raises(ValidationError):
            add(ramp_image, constant_image)

    def test_mismatched_bands_raise(self):
        with pytest.raises(ValidationError):
            multiply(ImageBuffer.empty(2, 2, 1), ImageBuffer.empty(2, 2, 3))


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalize:

    def test_range_is_0_255(self, ramp_image):
        out = normalize(ramp_image)
        assert out.samples.min() == 0.0
        assert out.samples.max() == 255.0

    def test_per_band(self, rgb_image):
        out = Normalize().apply(rgb_image)
        np.testing.assert_array_equal(out.samples.min(axis=(0, 1)), [0, 0, 0])
        np.testing.assert_array_equal(out.samples.max(axis=(0, 1)), [255, 255, 255])

    def test_linear(self):
        img = ImageBuffer([[-10.0], [0.0], [10.0]])
        np.testing.assert_allclose(normalize(img).samples.ravel(), [0.0, 127.5, 255.0])

    def test_constant_band_maps_to_zero(self, constant_image):
        assert np.all(normalize(constant_image).samples == 0.0)

    def test_idempotent(self, rgb_image):
        once = normalize(rgb_image)
        np.testing.assert_allclose(normalize(once).samples, once.samples)


class TestDynamicRangeCompression:

    def test_maximum_maps_to_255(self, ramp_image):
        out = DynamicRangeCompression().apply(ramp_image)
        assert out.samples.max() == pytest.approx(255.0)
        assert out.get_sample(0, 0, 0) == 0.0

    def test_formula(self):
        img = ImageBuffer([[0.0], [9.0], [99.0]])
        out = DynamicRangeCompression().apply(img)
        np.testing.assert_allclose(out.samples.ravel(), [0.0, 127.5, 255.0])

    def test_non_positive_maximum_raises(self):
        with pytest.raises(DegenerateStatisticsError):
            DynamicRangeCompression().apply(ImageBuffer.empty(3, 3, 1))


class TestGammaPower:

    def test_identity_at_gamma_one(self, ramp_image):
        out = GammaPower(gamma=1.0).apply(ramp_image)
        np.testing.assert_allclose(out.samples, ramp_image.samples)

    def test_255_is_fixed(self):
        img = ImageBuffer([[0.0], [64.0], [255.0]])
        for gamma in (0.4, 2.2):
            out = GammaPower(gamma=gamma).apply(img)
            assert out.get_sample(2, 0, 0) == pytest.approx(255.0)
            assert out.get_sample(0, 0, 0) == 0.0

    def test_darkens_above_one(self):
        img = ImageBuffer([[64.0]])
        assert GammaPower(gamma=2.0).apply(img).get_sample(0, 0, 0) < 64.0

    def test_runtime_override(self):
        img = ImageBuffer([[64.0]])
        out = GammaPower(gamma=1.0).apply(img, gamma=2.0)
        assert out.get_sample(0, 0, 0) == pytest.approx(64.0 ** 2 / 255.0)

    @pytest.mark.parametrize('gamma', [0.0, -1.0])
    def test_non_positive_gamma_raises(self, gamma):
        with pytest.raises(ValidationError):
            GammaPower(gamma=gamma)


class TestNegative:

    def test_inverts_normalized(self):
        img = ImageBuffer([[0.0], [5.0], [10.0]])
        out = Negative().apply(img)
        np.testing.assert_allclose(out.samples.ravel(), [255.0, 127.5, 0.0])

    def test_input_unchanged(self, ramp_image):
        before = ramp_image.copy()
        Negative().apply(ramp_image)
        assert ramp_image == before

    def test_involution_on_full_range_integers(self):
        rng = np.random.default_rng(7)
        samples = rng.integers(0, 256, size=(8, 6, 3)).astype(np.float64)
        samples[0, 0, :] = 0.0
        samples[1, 0, :] = 255.0
        img = ImageBuffer(samples)
        assert Negative().apply(Negative().apply(img)) == img
