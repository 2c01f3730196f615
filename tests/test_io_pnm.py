# -*- coding: utf-8 -*-
"""
PNM Codec Tests - Registry, decode and encode of PGM/PPM files.

Dependencies
------------
pytest
Pillow

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

import importlib
import sys

import numpy as np
import pytest

PIL = pytest.importorskip('PIL')
from PIL import Image

import pixelab
from pixelab.exceptions import ImageIOError, UnsupportedFormatError, ValidationError
from pixelab.image import ImageBuffer
from pixelab.IO import decode, encode, supported_formats
from pixelab.IO.pnm import PnmReader, PnmWriter


class TestRegistry:

    def test_supported_formats(self):
        formats = supported_formats()
        assert formats['ppm'] == 'Portable pixmap'
        assert formats['pgm'] == 'Portable graymap'

    def test_unknown_extension_on_decode(self, tmp_path):
        path = tmp_path / 'image.bmp'
        path.write_bytes(b'BM')
        with pytest.raises(UnsupportedFormatError):
            decode(path)

    def test_unknown_extension_on_encode(self, tmp_path):
        with pytest.raises(UnsupportedFormatError):
            encode(ImageBuffer.empty(2, 2, 1), tmp_path / 'image.png')

    def test_extension_case_insensitive(self, tmp_path):
        path = tmp_path / 'IMAGE.PGM'
        encode(ImageBuffer.homogeneous(3, 2, 1, 9.0), path)
        assert decode(path).shape == (3, 2, 1)

    def test_codec_module_loaded_on_first_use(self, monkeypatch, tmp_path):
        monkeypatch.delitem(sys.modules, 'pixelab.IO')
        monkeypatch.delitem(sys.modules, 'pixelab.IO.pnm')
        monkeypatch.delattr(pixelab, 'IO')
        fresh = importlib.import_module('pixelab.IO')
        assert 'pixelab.IO.pnm' not in sys.modules
        fresh.encode(ImageBuffer.homogeneous(2, 2, 1, 1.0), tmp_path / 'lazy.pgm')
        assert 'pixelab.IO.pnm' in sys.modules


class TestRoundTrip:

    def test_gray(self, tmp_path):
        x, y = np.indices((5, 3))
        img = ImageBuffer((20.0 * x + y).astype(np.float64))
        path = tmp_path / 'ramp.pgm'
        encode(img, path)
        assert decode(path) == img

    def test_rgb(self, tmp_path, rgb_image):
        path = tmp_path / 'noise.ppm'
        encode(rgb_image, path)
        assert decode(path) == rgb_image

    def test_rounds_to_8_bit(self, tmp_path):
        img = ImageBuffer([[0.4, 254.6]])
        path = tmp_path / 'round.pgm'
        encode(img, path)
        np.testing.assert_array_equal(decode(path).samples.ravel(), [0.0, 255.0])


class TestLayout:

    def test_x_is_column(self, tmp_path):
        pixels = np.zeros((2, 4), dtype=np.uint8)
        pixels[1, 3] = 200
        path = tmp_path / 'layout.pgm'
        Image.fromarray(pixels).save(str(path), format='PPM')
        img = decode(path)
        assert img.shape == (4, 2, 1)
        assert img.get_sample(3, 1, 0) == 200.0

    def test_reader_metadata(self, tmp_path):
        path = tmp_path / 'meta.ppm'
        encode(ImageBuffer.homogeneous(4, 3, 3, 10.0), path)
        with PnmReader(path) as reader:
            reader.read()
            assert reader.metadata['mode'] == 'RGB'
            assert reader.metadata['size'] == (4, 3)


class TestErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageIOError):
            decode(tmp_path / 'missing.ppm')

    def test_garbage_file(self, tmp_path):
        path = tmp_path / 'garbage.ppm'
        path.write_bytes(b'not an image at all')
        with pytest.raises(ImageIOError):
            decode(path)

    def test_out_of_range_samples(self, tmp_path):
        img = ImageBuffer([[-1.0, 300.0]])
        with pytest.raises(ValidationError, match="Normalize"):
            encode(img, tmp_path / 'bad.pgm')

    @pytest.mark.parametrize('bands', [2, 4])
    def test_unsupported_band_count(self, tmp_path, bands):
        with pytest.raises(ValidationError):
            with PnmWriter(tmp_path / 'bad.ppm') as writer:
                writer.write(ImageBuffer.empty(2, 2, bands))
