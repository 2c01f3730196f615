# -*- coding: utf-8 -*-
"""
pixelab Exception Hierarchy - Domain-specific exceptions for image operations.

Every pixelab exception subclasses both ``PixelabError`` and the closest
built-in exception, so callers can catch library failures distinctly or
keep catching ``ValueError``/``OSError`` as before.

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


class PixelabError(Exception):
    """Base exception for all pixelab errors."""


class ValidationError(PixelabError, ValueError):
    """Invalid input image, parameter, or mask.

    Raised for dimension mismatches, out-of-range coordinates, even or
    non-positive window lengths, non-square masks, non-positive sigmas
    and wrong band counts.
    """


class ProcessorError(PixelabError, RuntimeError):
    """Runtime misuse or non-recoverable failure inside a processor."""


class DegenerateStatisticsError(PixelabError, ArithmeticError):
    """A statistic is undefined for the given data.

    Raised for empty histograms and for bands whose dynamic range
    cannot be compressed.
    """


class UnsupportedFormatError(PixelabError, ValueError):
    """The file extension is not in the codec registry."""


class ImageIOError(PixelabError, OSError):
    """An image file could not be read, parsed or written."""


class DependencyError(PixelabError, ImportError):
    """Missing dependency required for a specific module.

    Raised by the codec layer when Pillow is not installed.
    """
