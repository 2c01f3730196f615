# -*- coding: utf-8 -*-
"""
PNM Codec - Read and write portable anymap (PGM/PPM) images through Pillow.

Decoded files become ``ImageBuffer`` instances indexed ``[x][y][band]``
(the transpose of Pillow's row-major layout): graymaps give one band,
pixmaps three. Writers accept one or three bands whose samples lie in
``[0, 255]``; samples are rounded to 8 bits.

Dependencies
------------
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

# Standard library
import logging
from pathlib import Path
from typing import Union

# Third-party
import numpy as np

try:
    from PIL import Image, UnidentifiedImageError
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

# pixelab internal
from pixelab.exceptions import DependencyError, ImageIOError, ValidationError
from pixelab.image import ImageBuffer
from pixelab.IO.base import ImageReader, ImageWriter

logger = logging.getLogger(__name__)

_PIL_FORMAT = 'PPM'
_MODES = {1: 'L', 3: 'RGB'}


def _require_pil() -> None:
    if not _HAS_PIL:
        raise DependencyError(
            "Pillow is required for PNM reading and writing. "
            "Install with: pip install Pillow"
        )


def _to_buffer(pixels: np.ndarray) -> ImageBuffer:
    """Convert a ``(rows, cols[, channels])`` array to ``(x, y, band)``."""
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    return ImageBuffer._adopt(
        np.ascontiguousarray(pixels.transpose(1, 0, 2), dtype=np.float64)
    )


def _to_pixels(image: ImageBuffer) -> np.ndarray:
    """Convert an image to an 8-bit ``(rows, cols[, channels])`` array."""
    if image.bands not in _MODES:
        raise ValidationError(
            f"PNM images hold 1 or 3 bands, got {image.bands}"
        )
    samples = image.samples
    if samples.min() < 0.0 or samples.max() > 255.0:
        raise ValidationError(
            f"PNM samples must lie in [0, 255], got "
            f"[{samples.min()}, {samples.max()}]; apply Normalize first"
        )
    pixels = np.rint(samples).astype(np.uint8).transpose(1, 0, 2)
    if image.bands == 1:
        pixels = pixels[:, :, 0]
    return np.ascontiguousarray(pixels)


class PnmReader(ImageReader):
    """Decode PBM, PGM and PPM files.

    Bilevel and 8-bit gray files yield one band, 16-bit graymaps one band
    of their raw integer values, and anything else is converted to RGB.

    Parameters
    ----------
    filepath : str or Path
        Path to the image file.

    Raises
    ------
    DependencyError
        If Pillow is not installed.
    ImageIOError
        If the file does not exist.

    Examples
    --------
    >>> with PnmReader('lena.ppm') as reader:
    ...     image = reader.read()
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_pil()
        super().__init__(filepath)

    def read(self) -> ImageBuffer:
        try:
            with Image.open(self.filepath) as img:
                self.metadata = {'format': img.format, 'mode': img.mode,
                                 'size': img.size}
                if img.mode == '1':
                    img = img.convert('L')
                elif img.mode not in ('L', 'RGB', 'I', 'I;16'):
                    img = img.convert('RGB')
                pixels = np.asarray(img)
        except (OSError, UnidentifiedImageError) as e:
            raise ImageIOError(f"Cannot decode {self.filepath}: {e}") from e
        logger.debug("Decoded %s (%s, %s)", self.filepath,
                     self.metadata['mode'], self.metadata['size'])
        return _to_buffer(pixels)


class PnmWriter(ImageWriter):
    """Encode 1-band images as PGM and 3-band images as PPM.

    Parameters
    ----------
    filepath : str or Path
        Output file path.

    Raises
    ------
    DependencyError
        If Pillow is not installed.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_pil()
        super().__init__(filepath)

    def write(self, image: ImageBuffer) -> None:
        pixels = _to_pixels(image)
        try:
            Image.fromarray(pixels).save(
                str(self.filepath), format=_PIL_FORMAT
            )
        except OSError as e:
            raise ImageIOError(f"Cannot write {self.filepath}: {e}") from e
        logger.debug("Encoded %r to %s", image, self.filepath)
