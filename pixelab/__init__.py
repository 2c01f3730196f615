# -*- coding: utf-8 -*-
"""
pixelab - Image processing primitives on multi-band float rasters.

An ``ImageBuffer`` holds ``width x height x bands`` float64 samples
indexed ``[x][y][band]``. Processors in ``pixelab.image_processing``
transform buffers into new buffers; ``pixelab.IO`` decodes and encodes
portable anymap files.

Dependencies
------------
numpy
scipy

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

__version__ = "0.1.0"

from pixelab.exceptions import (
    PixelabError,
    ValidationError,
    ProcessorError,
    DegenerateStatisticsError,
    UnsupportedFormatError,
    ImageIOError,
    DependencyError,
)
from pixelab.vocabulary import (
    BorderOperator,
    ConductionModel,
    ProcessorCategory,
)
from pixelab.image import (
    ImageBuffer,
    ImageBuilder,
    band_extrema,
    to_gray,
)

__all__ = [
    'PixelabError',
    'ValidationError',
    'ProcessorError',
    'DegenerateStatisticsError',
    'UnsupportedFormatError',
    'ImageIOError',
    'DependencyError',
    'BorderOperator',
    'ConductionModel',
    'ProcessorCategory',
    'ImageBuffer',
    'ImageBuilder',
    'band_extrema',
    'to_gray',
]
