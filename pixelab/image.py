# -*- coding: utf-8 -*-
"""
Image Model - Multi-band floating-point image value type.

``ImageBuffer`` owns a dense ``(width, height, bands)`` grid of float64
samples indexed ``[x][y][band]``. Once built the backing array is frozen:
``samples`` and ``get_band`` hand out read-only views, while
``get_pixel`` and ``to_array`` return independent copies. Buffers that
are still being populated live in an ``ImageBuilder``, which is the only
place where samples can be written.

Samples are unconstrained real numbers. Remapping into a displayable
range is the job of ``Normalize`` and friends, never of this module.

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
from typing import Sequence, Tuple

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import ProcessorError, ValidationError


def _as_samples(data) -> np.ndarray:
    """Copy *data* into a fresh C-contiguous float64 ``(w, h, b)`` array."""
    try:
        arr = np.array(data, dtype=np.float64, order='C')
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Image samples must form a rectangular numeric grid: {e}"
        ) from e
    if arr.ndim == 2:
        arr = arr[:, :, np.newaxis]
    if arr.ndim != 3:
        raise ValidationError(
            f"Image samples must be 2D (width, height) or 3D "
            f"(width, height, bands), got {arr.ndim}D"
        )
    if min(arr.shape) < 1:
        raise ValidationError(
            f"Image width, height and bands must all be >= 1, got {arr.shape}"
        )
    return arr


def _check_dimensions(width: int, height: int, bands: int) -> None:
    for name, value in (('width', width), ('height', height), ('bands', bands)):
        if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
            raise ValidationError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if value < 1:
            raise ValidationError(f"{name} must be >= 1, got {value}")


class ImageBuffer:
    """Immutable width x height x bands grid of float64 samples.

    Parameters
    ----------
    samples : array_like
        Sample grid of shape ``(width, height, bands)``, or
        ``(width, height)`` for a single band. The data is copied.

    Raises
    ------
    ValidationError
        If the grid is jagged, non-numeric, or has an empty dimension.

    Examples
    --------
    >>> img = ImageBuffer.homogeneous(4, 3, 1, 10.0)
    >>> img.width, img.height, img.bands
    (4, 3, 1)
    >>> img.get_sample(2, 1, 0)
    10.0
    """

    __slots__ = ('_samples',)

    def __init__(self, samples) -> None:
        arr = _as_samples(samples)
        arr.flags.writeable = False
        self._samples = arr

    @classmethod
    def _adopt(cls, arr: np.ndarray) -> 'ImageBuffer':
        """Wrap a freshly computed array without copying it.

        The caller must not keep a writable reference to *arr*.
        """
        arr = np.ascontiguousarray(arr, dtype=np.float64)
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3 or min(arr.shape) < 1:
            raise ValidationError(
                f"Cannot build an image from an array of shape {arr.shape}"
            )
        arr.flags.writeable = False
        obj = cls.__new__(cls)
        obj._samples = arr
        return obj

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------
    @classmethod
    def homogeneous(
        cls, width: int, height: int, bands: int, value: float,
    ) -> 'ImageBuffer':
        """Create an image with every sample set to *value*."""
        _check_dimensions(width, height, bands)
        return cls._adopt(
            np.full((width, height, bands), float(value), dtype=np.float64)
        )

    @classmethod
    def empty(cls, width: int, height: int, bands: int) -> 'ImageBuffer':
        """Create an all-zero image."""
        return cls.homogeneous(width, height, bands, 0.0)

    @classmethod
    def from_bands(cls, planes: Sequence[np.ndarray]) -> 'ImageBuffer':
        """Stack equally sized ``(width, height)`` planes into an image.

        Raises
        ------
        ValidationError
            If *planes* is empty or the planes differ in shape.
        """
        if len(planes) == 0:
            raise ValidationError("At least one band plane is required")
        shapes = {np.shape(p) for p in planes}
        if len(shapes) != 1 or len(next(iter(shapes))) != 2:
            raise ValidationError(
                f"Band planes must be 2D and share one shape, got {sorted(shapes)}"
            )
        return cls._adopt(
            np.stack([np.asarray(p, dtype=np.float64) for p in planes], axis=-1)
        )

    # -----------------------------------------------------------------
    # Dimensions
    # -----------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._samples.shape[0]

    @property
    def height(self) -> int:
        return self._samples.shape[1]

    @property
    def bands(self) -> int:
        return self._samples.shape[2]

    @property
    def shape(self) -> Tuple[int, int, int]:
        """``(width, height, bands)``."""
        return self._samples.shape

    # -----------------------------------------------------------------
    # Access
    # -----------------------------------------------------------------
    @property
    def samples(self) -> np.ndarray:
        """Read-only view of the ``(width, height, bands)`` grid."""
        return self._samples

    def _check_xy(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise ValidationError(
                f"x={x} out of range for width {self.width}"
            )
        if not 0 <= y < self.height:
            raise ValidationError(
                f"y={y} out of range for height {self.height}"
            )

    def _check_band(self, band: int) -> None:
        if not 0 <= band < self.bands:
            raise ValidationError(
                f"band={band} out of range for {self.bands} band(s)"
            )

    def get_sample(self, x: int, y: int, band: int) -> float:
        """Return the sample at ``(x, y, band)``.

        Raises
        ------
        ValidationError
            If any coordinate is out of range.
        """
        self._check_xy(x, y)
        self._check_band(band)
        return float(self._samples[x, y, band])

    def get_pixel(self, x: int, y: int) -> np.ndarray:
        """Return a writable copy of every band at ``(x, y)``."""
        self._check_xy(x, y)
        return self._samples[x, y, :].copy()

    def get_band(self, band: int) -> np.ndarray:
        """Read-only ``(width, height)`` view of one band."""
        self._check_band(band)
        return self._samples[:, :, band]

    def get_sub_raster(
        self, x0: int, y0: int, width: int, height: int,
    ) -> 'ImageBuffer':
        """Copy the ``width x height`` region whose corner is ``(x0, y0)``.

        Raises
        ------
        ValidationError
            If the region is empty or does not fit inside the image.
        """
        _check_dimensions(width, height, self.bands)
        if x0 < 0 or y0 < 0 or x0 + width > self.width or y0 + height > self.height:
            raise ValidationError(
                f"Sub-raster ({x0}, {y0}, {width}, {height}) exceeds image "
                f"bounds {self.width}x{self.height}"
            )
        return ImageBuffer(self._samples[x0:x0 + width, y0:y0 + height, :])

    def to_array(self) -> np.ndarray:
        """Writable copy of the sample grid."""
        return self._samples.copy()

    def copy(self) -> 'ImageBuffer':
        return ImageBuffer(self._samples)

    # -----------------------------------------------------------------
    # Value semantics
    # -----------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return (
            self._samples.shape == other._samples.shape
            and bool(np.array_equal(self._samples, other._samples))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ImageBuffer(width={self.width}, height={self.height}, "
            f"bands={self.bands})"
        )


class ImageBuilder:
    """Writable image under construction.

    Parameters
    ----------
    width, height, bands : int
        Dimensions of the image being built (all >= 1).
    fill : float
        Initial value of every sample. Default 0.0.

    Examples
    --------
    >>> builder = ImageBuilder(2, 2, 1)
    >>> builder.set_sample(1, 0, 0, 255.0)
    >>> img = builder.build()
    >>> img.get_sample(1, 0, 0)
    255.0
    """

    def __init__(
        self, width: int, height: int, bands: int, fill: float = 0.0,
    ) -> None:
        _check_dimensions(width, height, bands)
        self._samples = np.full(
            (width, height, bands), float(fill), dtype=np.float64
        )
        self._built = False

    @classmethod
    def from_image(cls, image: ImageBuffer) -> 'ImageBuilder':
        """Start a builder populated with a copy of *image*."""
        builder = cls(image.width, image.height, image.bands)
        builder._samples[...] = image.samples
        return builder

    def _writable(self) -> np.ndarray:
        if self._built:
            raise ProcessorError("ImageBuilder has already been built")
        return self._samples

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self._writable().shape

    def get_sample(self, x: int, y: int, band: int) -> float:
        return float(self._writable()[self._index(x, y, band)])

    def set_sample(self, x: int, y: int, band: int, value: float) -> None:
        self._writable()[self._index(x, y, band)] = value

    def set_pixel(self, x: int, y: int, values: Sequence[float]) -> None:
        """Set every band at ``(x, y)``.

        Raises
        ------
        ValidationError
            If *values* does not hold exactly one sample per band.
        """
        samples = self._writable()
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (samples.shape[2],):
            raise ValidationError(
                f"Pixel must have {samples.shape[2]} value(s), got shape "
                f"{values.shape}"
            )
        samples[self._index(x, y, 0)[:2]] = values

    def _index(self, x: int, y: int, band: int) -> Tuple[int, int, int]:
        w, h, b = self._samples.shape
        if not (0 <= x < w and 0 <= y < h and 0 <= band < b):
            raise ValidationError(
                f"Coordinate ({x}, {y}, {band}) out of range for {w}x{h}x{b}"
            )
        return x, y, band

    def build(self) -> ImageBuffer:
        """Freeze the samples into an ``ImageBuffer`` and close the builder."""
        samples = self._writable()
        self._built = True
        self._samples = None
        return ImageBuffer._adopt(samples)


def to_gray(image: ImageBuffer) -> ImageBuffer:
    """Average the bands of *image* into a single-band image."""
    if image.bands == 1:
        return image.copy()
    return ImageBuffer._adopt(image.samples.mean(axis=2, keepdims=True))


def band_extrema(image: ImageBuffer) -> Tuple[np.ndarray, np.ndarray]:
    """Per-band minimum and maximum, each of shape ``(bands,)``."""
    samples = image.samples
    return samples.min(axis=(0, 1)), samples.max(axis=(0, 1))
