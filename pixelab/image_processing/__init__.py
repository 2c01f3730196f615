# -*- coding: utf-8 -*-
"""
Image Processing Module - Point operations, filters, segmentation and detection.

Every processor inherits from ``ImageProcessor``, which provides version
checking and tunable parameter validation. ``ImageTransform`` subclasses
map an ``ImageBuffer`` to a new ``ImageBuffer`` and never mutate their
input.

Sub-modules
-----------
pointwise.py
    ``create_applying``, two-image arithmetic, ``Normalize``,
    ``DynamicRangeCompression``, ``GammaPower``, ``Negative``.
statistics.py
    Histograms, statistics, ``HistogramEqualization``, ``ContrastStretch``.
filters/
    Mask filters, smoothing filters and border detectors.
threshold.py
    ``ManualThreshold``, ``GlobalThreshold``, ``OtsuThreshold``,
    ``HysteresisThreshold``.
diffusion.py
    Isotropic, Leclerc and Lorentz diffusion.
hough.py
    Line and circle detection by Hough voting.
color.py
    sRGB and CIE-Lab conversion.
noise.py
    Gaussian, Rayleigh, exponential and salt-and-pepper noise.
pipeline.py
    Sequential composition of ``ImageTransform`` steps.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

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

from pixelab.image_processing.base import (
    BandwiseTransformMixin,
    ImageProcessor,
    ImageTransform,
)
from pixelab.image_processing.params import Desc, Options, ParamSpec, Range
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.image_processing.pipeline import Pipeline
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
from pixelab.image_processing.statistics import (
    ContrastStretch,
    Histogram,
    HistogramEqualization,
    Stats,
    cumulative_distribution,
    get_histograms,
    get_stats,
    image_stats,
)
from pixelab.image_processing.threshold import (
    GlobalThreshold,
    HysteresisThreshold,
    ManualThreshold,
    OtsuThreshold,
)
from pixelab.image_processing.filters import (
    CannyEdgeDetector,
    GaussianFilter,
    GradientBorderDetector,
    HighPassFilter,
    LaplaceBorderDetector,
    LaplacianOfGaussianDetector,
    MaxDirectionBorderDetector,
    MeanFilter,
    MedianFilter,
    NonMaximumSuppression,
    WeightedMedianFilter,
)
from pixelab.image_processing.diffusion import (
    DiffusionFilter,
    IsotropicDiffusion,
    LeclercDiffusion,
    LorentzDiffusion,
)
from pixelab.image_processing.hough import (
    Circle,
    HoughCircleDetector,
    HoughLineDetector,
    HoughResult,
    StraightLine,
    belongs,
)
from pixelab.image_processing.color import CieLabToRgb, RgbToCieLab
from pixelab.image_processing.noise import (
    ExponentialNoise,
    GaussianNoise,
    RayleighNoise,
    SaltAndPepperNoise,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'BandwiseTransformMixin',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'Pipeline',
    'create_applying',
    'add',
    'subtract',
    'multiply',
    'scalar_multiply',
    'normalize',
    'Normalize',
    'DynamicRangeCompression',
    'GammaPower',
    'Negative',
    'Histogram',
    'Stats',
    'get_histograms',
    'get_stats',
    'image_stats',
    'cumulative_distribution',
    'HistogramEqualization',
    'ContrastStretch',
    'ManualThreshold',
    'GlobalThreshold',
    'OtsuThreshold',
    'HysteresisThreshold',
    'MeanFilter',
    'MedianFilter',
    'WeightedMedianFilter',
    'GaussianFilter',
    'HighPassFilter',
    'GradientBorderDetector',
    'MaxDirectionBorderDetector',
    'LaplaceBorderDetector',
    'LaplacianOfGaussianDetector',
    'NonMaximumSuppression',
    'CannyEdgeDetector',
    'DiffusionFilter',
    'IsotropicDiffusion',
    'LeclercDiffusion',
    'LorentzDiffusion',
    'StraightLine',
    'Circle',
    'belongs',
    'HoughResult',
    'HoughLineDetector',
    'HoughCircleDetector',
    'RgbToCieLab',
    'CieLabToRgb',
    'GaussianNoise',
    'RayleighNoise',
    'ExponentialNoise',
    'SaltAndPepperNoise',
]
