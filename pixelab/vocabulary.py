# -*- coding: utf-8 -*-
"""
pixelab Vocabulary - Enumerations shared across the library.

``ProcessorCategory`` tags processors for discovery through
``@processor_tags``. ``ConductionModel`` names the diffusion
conduction-coefficient functions and ``BorderOperator`` the canonical
3x3 border-detection masks.

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
from enum import Enum


class ProcessorCategory(Enum):
    """Processing category for processor discovery."""

    POINT = 'point'
    ENHANCE = 'enhance'
    FILTERS = 'filters'
    EDGES = 'edges'
    THRESHOLD = 'threshold'
    DIFFUSION = 'diffusion'
    DETECTION = 'detection'
    COLOR = 'color'
    NOISE = 'noise'


class ConductionModel(Enum):
    """Conduction-coefficient function of a diffusion filter."""

    ISOTROPIC = 'isotropic'
    LECLERC = 'leclerc'
    LORENTZ = 'lorentz'


class BorderOperator(Enum):
    """Canonical 3x3 border-detection operators."""

    ANONYMOUS = 'anonymous'
    KIRSH = 'kirsh'
    PREWITT = 'prewitt'
    SOBEL = 'sobel'
