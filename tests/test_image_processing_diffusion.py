# -*- coding: utf-8 -*-
"""
Diffusion Filter Tests - Isotropic, Leclerc and Lorentz diffusion.

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

from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer
from pixelab.image_processing.diffusion import (
    IsotropicDiffusion,
    LeclercDiffusion,
    LorentzDiffusion,
    diffuse,
    isotropic_conduction,
)


@pytest.fixture
def edge_image():
    """7x5 single-band image: 0 for x < 3, 255 for x >= 3."""
    samples = np.zeros((7, 5, 1))
    samples[3:] = 255.0
    return ImageBuffer(samples)


class TestIsotropicDiffusion:

    def test_zero_iterations_is_copy(self, ramp_image):
        out = IsotropicDiffusion(iterations=0).apply(ramp_image)
        assert out == ramp_image
        assert out is not ramp_image

    def test_constant_interior_stable_border_zero(self):
        img = ImageBuffer.homogeneous(6, 6, 2, 40.0)
        out = IsotropicDiffusion(iterations=1).apply(img)
        np.testing.assert_allclose(out.samples[1:-1, 1:-1], 40.0)
        assert np.all(out.samples[0] == 0.0)
        assert np.all(out.samples[:, -1] == 0.0)

    def test_one_step(self, edge_image):
        out = IsotropicDiffusion(iterations=1, lam=0.25).apply(edge_image)
        assert out.get_sample(2, 2, 0) == pytest.approx(0.25 * 255.0)
        assert out.get_sample(3, 2, 0) == pytest.approx(255.0 - 0.25 * 255.0)

    def test_input_unchanged(self, edge_image):
        before = edge_image.copy()
        IsotropicDiffusion(iterations=3).apply(edge_image)
        assert edge_image == before

    def test_progress(self, ramp_image):
        seen = []
        IsotropicDiffusion(iterations=4).apply(ramp_image, progress_callback=seen.append)
        assert seen == [0.25, 0.5, 0.75, 1.0]

    def test_negative_iterations_raise(self):
        with pytest.raises(ValidationError):
            IsotropicDiffusion(iterations=-1)

    def test_negative_lam_raises(self):
        with pytest.raises(ValidationError):
            IsotropicDiffusion(lam=-0.1)


class TestAnisotropicDiffusion:

    def test_leclerc_preserves_strong_edge(self, edge_image):
        out = LeclercDiffusion(iterations=1, sigma=1.0).apply(edge_image)
        assert out.get_sample(2, 2, 0) == pytest.approx(0.0, abs=1e-6)
        assert out.get_sample(3, 2, 0) == pytest.approx(255.0, abs=1e-6)

    def test_lorentz_barely_diffuses_strong_edge(self, edge_image):
        out = LorentzDiffusion(iterations=1, sigma=1.0).apply(edge_image)
        assert out.get_sample(2, 2, 0) == pytest.approx(0.0, abs=0.01)

    def test_large_sigma_approaches_isotropic(self, edge_image):
        iso = IsotropicDiffusion(iterations=2).apply(edge_image)
        lor = LorentzDiffusion(iterations=2, sigma=1e6).apply(edge_image)
        np.testing.assert_allclose(lor.samples, iso.samples, atol=1e-3)

    @pytest.mark.parametrize('cls', [LeclercDiffusion, LorentzDiffusion])
    def test_bad_sigma_raises(self, cls):
        with pytest.raises(ValidationError):
            cls(sigma=0.0)


def test_diffuse_reads_previous_buffer_only():
    samples = np.zeros((5, 3, 1))
    samples[2, 1, 0] = 4.0
    out = diffuse(samples, 1, 0.25, isotropic_conduction)
    assert out[2, 1, 0] == pytest.approx(4.0 - 0.25 * 16.0)
    assert out[1, 1, 0] == pytest.approx(1.0)
    assert out[3, 1, 0] == pytest.approx(1.0)
    assert samples[2, 1, 0] == 4.0
