# -*- coding: utf-8 -*-
"""
Spatial Filter Tests - Masks, window reduction, smoothing and high-pass filters.

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
from scipy.ndimage import uniform_filter

from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer
from pixelab.image_processing._validation import validate_window_length
from pixelab.image_processing.filters import (
    CANONICAL_MASKS,
    GaussianFilter,
    HighPassFilter,
    MaskDirection,
    MeanFilter,
    MedianFilter,
    WeightedMedianFilter,
    directional_masks,
    filter_interior,
    filter_with_mask,
    gaussian_mask,
    high_pass_mask,
    laplacian_of_gaussian_mask,
    mirror_mask,
    rotate_mask,
    validate_mask,
)
from pixelab.vocabulary import BorderOperator


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

class TestValidation:

    def test_valid_window_lengths(self):
        for wl in (1, 3, 5, 21):
            validate_window_length(wl)

    def test_even_window_raises(self):
        with pytest.raises(ValidationError, match="odd"):
            validate_window_length(4)

    def test_non_positive_window_raises(self):
        with pytest.raises(ValidationError, match=">= 1"):
            validate_window_length(-3)

    def test_non_integer_window_raises(self):
        with pytest.raises(ValidationError, match="integer"):
            validate_window_length(3.0)

    def test_non_square_mask_raises(self):
        with pytest.raises(ValidationError, match="square"):
            validate_mask([[1, 2, 3], [4, 5, 6]])

    def test_empty_mask_raises(self):
        with pytest.raises(ValidationError):
            validate_mask([])


# ---------------------------------------------------------------------------
# Masks
# ---------------------------------------------------------------------------

class TestMasks:

    @pytest.fixture
    def sobel(self):
        return CANONICAL_MASKS[BorderOperator.SOBEL]

    def test_eight_turns_is_identity(self, sobel):
        np.testing.assert_array_equal(rotate_mask(sobel, 8), sobel)

    def test_four_turns_is_mirror(self, sobel):
        np.testing.assert_array_equal(rotate_mask(sobel, 4), mirror_mask(sobel))

    def test_two_turns_is_left(self, sobel):
        np.testing.assert_array_equal(
            rotate_mask(sobel, 2), [[1, 0, -1], [2, 0, -2], [1, 0, -1]])

    def test_negative_turns_wrap(self, sobel):
        np.testing.assert_array_equal(rotate_mask(sobel, -1), rotate_mask(sobel, 7))

    def test_rotation_is_pure(self, sobel):
        before = sobel.copy()
        rotate_mask(sobel, 3)
        np.testing.assert_array_equal(sobel, before)

    def test_only_3x3_rotates(self):
        with pytest.raises(ValidationError):
            rotate_mask(np.ones((5, 5)), 1)

    def test_canonical_masks_read_only(self, sobel):
        with pytest.raises(ValueError):
            sobel[0, 0] = 0.0

    def test_directional_variants(self, sobel):
        masks = directional_masks('sobel')
        assert len(masks) == 8
        np.testing.assert_array_equal(masks[MaskDirection.TOP], sobel)
        np.testing.assert_array_equal(masks[MaskDirection.BOTTOM], -sobel)
        np.testing.assert_array_equal(
            masks[MaskDirection.RIGHT], [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])
        np.testing.assert_array_equal(
            masks[MaskDirection.TOP_RIGHT], mirror_mask(rotate_mask(sobel, 3)))

    def test_gaussian_mask(self):
        mask = gaussian_mask(1.0)
        assert mask.shape == (5, 5)
        assert mask.sum() == pytest.approx(1.0)
        assert mask[2, 2] == mask.max()
        np.testing.assert_allclose(mask, mask.T)

    def test_gaussian_mask_bad_sigma(self):
        with pytest.raises(ValidationError):
            gaussian_mask(0.0)

    def test_high_pass_mask(self):
        mask = high_pass_mask(3)
        assert mask.sum() == pytest.approx(0.0)
        assert mask[1, 1] == pytest.approx(8.0 / 9.0)
        assert mask[0, 0] == pytest.approx(-1.0 / 9.0)

    def test_log_mask(self):
        mask = laplacian_of_gaussian_mask(1.0)
        assert mask.shape == (7, 7)
        assert mask[3, 3] < 0


# ---------------------------------------------------------------------------
# Mask correlation
# ---------------------------------------------------------------------------

class TestFilterWithMask:

    def test_correlation_not_convolution(self, ramp_image):
        mask = [[0, 0, 0], [0, 0, 1], [0, 0, 0]]
        out = filter_with_mask(ramp_image, mask)
        # mask[1, 2] picks the neighbor at (x, y + 1)
        assert out.get_sample(2, 2, 0) == ramp_image.get_sample(2, 3, 0)

    def test_border_is_zero(self, ramp_image):
        out = filter_with_mask(ramp_image, np.ones((3, 3)))
        plane = out.get_band(0)
        assert np.all(plane[0, :] == 0) and np.all(plane[-1, :] == 0)
        assert np.all(plane[:, 0] == 0) and np.all(plane[:, -1] == 0)
        assert plane[1, 1] == pytest.approx(ramp_image.samples[0:3, 0:3, 0].sum())

    def test_even_mask_raises(self, ramp_image):
        with pytest.raises(ValidationError):
            filter_with_mask(ramp_image, np.ones((2, 2)))

    def test_image_smaller_than_mask(self):
        out = filter_with_mask(ImageBuffer.homogeneous(2, 2, 1, 5.0), np.ones((3, 3)))
        assert np.all(out.samples == 0.0)


class TestFilterInterior:

    def test_mean_matches_explicit_windows(self, rgb_image):
        out = MeanFilter(window_length=3).apply(rgb_image)
        for x in range(1, rgb_image.width - 1):
            for y in range(1, rgb_image.height - 1):
                expected = rgb_image.samples[x - 1:x + 2, y - 1:y + 2, :].mean(axis=(0, 1))
                np.testing.assert_allclose(out.get_pixel(x, y), expected)

    def test_median_border_is_zero(self, rgb_image):
        out = MedianFilter(window_length=5).apply(rgb_image)
        samples = out.samples
        assert np.all(samples[:2] == 0.0)
        assert np.all(samples[-2:] == 0.0)
        assert np.all(samples[:, :2] == 0.0)
        assert np.all(samples[:, -2:] == 0.0)
        expected = np.median(rgb_image.samples[1:6, 0:5, 2])
        assert out.get_sample(3, 2, 2) == expected

    def test_window_larger_than_image(self):
        out = MeanFilter(window_length=5).apply(ImageBuffer.homogeneous(3, 3, 1, 7.0))
        assert np.all(out.samples == 0.0)

    def test_even_window_raises(self, rgb_image):
        with pytest.raises(ValidationError):
            filter_interior(rgb_image, 2, uniform_filter)


# ---------------------------------------------------------------------------
# Smoothing filters
# ---------------------------------------------------------------------------

class TestMeanFilter:

    def test_constant_interior(self, constant_image):
        out = MeanFilter(window_length=3).apply(constant_image)
        np.testing.assert_allclose(out.samples[1:-1, 1:-1], 10.0)
        assert np.all(out.samples[0] == 0.0)

    def test_window_one_is_identity(self, rgb_image):
        assert MeanFilter(window_length=1).apply(rgb_image) == rgb_image

    def test_values(self, ramp_image):
        out = MeanFilter().apply(ramp_image)
        assert out.get_sample(2, 2, 0) == pytest.approx(22.0)

    def test_even_window_raises(self):
        with pytest.raises(ValidationError):
            MeanFilter(window_length=4)

    def test_bands_independent(self, rgb_image):
        out = MeanFilter().apply(rgb_image)
        for b in range(3):
            single = ImageBuffer.from_bands([rgb_image.get_band(b)])
            np.testing.assert_allclose(
                out.get_band(b), MeanFilter().apply(single).get_band(0))


class TestMedianFilter:

    def test_removes_impulse(self):
        samples = np.zeros((5, 5))
        samples[2, 2] = 255.0
        out = MedianFilter().apply(ImageBuffer(samples))
        assert np.all(out.samples == 0.0)

    def test_matches_numpy(self, rgb_image):
        out = MedianFilter(window_length=3).apply(rgb_image)
        expected = np.median(rgb_image.samples[2:5, 1:4, 1])
        assert out.get_sample(3, 2, 1) == expected


class TestWeightedMedianFilter:

    def test_all_ones_equals_median(self, rgb_image):
        weighted = WeightedMedianFilter(np.ones((3, 3), dtype=int)).apply(rgb_image)
        assert weighted == MedianFilter().apply(rgb_image)

    def test_center_weight_dominates(self):
        samples = np.zeros((3, 3))
        samples[1, 1] = 9.0
        weights = [[1, 1, 1], [1, 9, 1], [1, 1, 1]]
        out = WeightedMedianFilter(weights).apply(ImageBuffer(samples))
        assert out.get_sample(1, 1, 0) == 9.0

    @pytest.mark.parametrize('weights', [
        [[1, 1], [1, 1]],
        [[1, 1, 1], [1, 1, 1]],
        [[1, -1, 1], [1, 1, 1], [1, 1, 1]],
        [[0, 0, 0], [0, 0, 0], [0, 0, 0]],
        [[1.5, 1, 1], [1, 1, 1], [1, 1, 1]],
    ])
    def test_invalid_weights_raise(self, weights):
        with pytest.raises(ValidationError):
            WeightedMedianFilter(weights)


class TestGaussianFilter:

    def test_constant_interior_preserved(self):
        img = ImageBuffer.homogeneous(9, 9, 2, 50.0)
        out = GaussianFilter(sigma=1.0).apply(img)
        np.testing.assert_allclose(out.samples[2:-2, 2:-2], 50.0)
        assert np.all(out.samples[:2] == 0.0)

    def test_bad_sigma_raises(self):
        with pytest.raises(ValidationError):
            GaussianFilter(sigma=-1.0)


class TestHighPassFilter:

    def test_constant_is_zero(self, constant_image):
        out = HighPassFilter().apply(constant_image)
        np.testing.assert_allclose(out.samples, 0.0, atol=1e-12)

    def test_single_band_output(self, rgb_image):
        assert HighPassFilter().apply(rgb_image).bands == 1

    def test_impulse_response(self):
        samples = np.zeros((5, 5))
        samples[2, 2] = 9.0
        out = HighPassFilter().apply(ImageBuffer(samples))
        assert out.get_sample(2, 2, 0) == pytest.approx(8.0)
        assert out.get_sample(1, 1, 0) == pytest.approx(-1.0)
