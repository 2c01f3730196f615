# -*- coding: utf-8 -*-
"""
Synthetic Noise - Gaussian, Rayleigh, exponential and salt-and-pepper noise models.

The continuous models draw a uniform variate ``u`` in ``(0, 1]``
(``1 - U[0, 1)``) and transform it: Gaussian noise is added to the
samples, Rayleigh and exponential noise multiply them. Each sample is
affected with probability ``density``; unaffected samples get additive
0 or multiplicative 1.

Randomness comes from the ``rng`` keyword argument of ``apply`` (a
``numpy.random.Generator``); a fresh ``numpy.random.default_rng()`` is
created per call when none is given.

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
import math
from typing import Annotated, Any, Optional

# Third-party
import numpy as np

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer, band_extrema
from pixelab.image_processing._validation import validate_positive, validate_probability
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.pointwise import create_applying
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory


def resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    """Return *rng*, or a freshly seeded generator when it is ``None``."""
    if rng is None:
        return np.random.default_rng()
    if not isinstance(rng, np.random.Generator):
        raise ValidationError(
            f"rng must be a numpy.random.Generator, got {type(rng).__name__}"
        )
    return rng


def open_uniform(rng: np.random.Generator, shape) -> np.ndarray:
    """Uniform variates in ``(0, 1]``."""
    return 1.0 - rng.random(shape)


def standard_normal(rng: np.random.Generator, shape) -> np.ndarray:
    """Standard normal variates by the Box-Muller transform."""
    u1 = open_uniform(rng, shape)
    u2 = rng.random(shape)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * math.pi * u2)


class _NoiseModel(ImageTransform):

    density: Annotated[
        float, Range(min=0.0, max=1.0), Desc('Probability that a sample is affected'),
    ] = 1.0

    def _affected(self, rng, shape, density: float) -> np.ndarray:
        return rng.random(shape) <= density


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE, description='Additive Gaussian noise')
class GaussianNoise(_NoiseModel):
    """Additive Gaussian noise ``mean + standard_deviation * z``.

    Parameters
    ----------
    mean : float
        Noise mean. Default 0.0.
    standard_deviation : float
        Noise standard deviation (> 0). Default 1.0.
    density : float
        Fraction of affected samples in ``[0, 1]``. Default 1.0.

    Examples
    --------
    >>> noisy = GaussianNoise(mean=0.0, standard_deviation=10.0).apply(
    ...     image, rng=np.random.default_rng(7))
    """

    mean: Annotated[float, Desc('Noise mean')] = 0.0
    standard_deviation: Annotated[float, Range(min=0.0), Desc('Noise standard deviation (> 0)')] = 1.0

    def __post_init__(self) -> None:
        validate_positive(self.standard_deviation, 'standard_deviation')

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        validate_positive(params['standard_deviation'], 'standard_deviation')
        rng = resolve_rng(kwargs.get('rng'))
        shape = source.shape
        noise = params['mean'] + params['standard_deviation'] * standard_normal(rng, shape)
        noise = np.where(self._affected(rng, shape, params['density']), noise, 0.0)
        return create_applying(source, lambda x, y, b, v: v + noise)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE, description='Multiplicative Rayleigh noise')
class RayleighNoise(_NoiseModel):
    """Multiplicative Rayleigh noise ``scale * sqrt(-2 ln u)``.

    Parameters
    ----------
    scale : float
        Rayleigh scale (> 0). Default 1.0.
    density : float
        Fraction of affected samples in ``[0, 1]``. Default 1.0.
    """

    scale: Annotated[float, Range(min=0.0), Desc('Rayleigh scale (> 0)')] = 1.0

    def __post_init__(self) -> None:
        validate_positive(self.scale, 'scale')

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        validate_positive(params['scale'], 'scale')
        rng = resolve_rng(kwargs.get('rng'))
        shape = source.shape
        noise = params['scale'] * np.sqrt(-2.0 * np.log(open_uniform(rng, shape)))
        noise = np.where(self._affected(rng, shape, params['density']), noise, 1.0)
        return create_applying(source, lambda x, y, b, v: v * noise)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE, description='Multiplicative exponential noise')
class ExponentialNoise(_NoiseModel):
    """Multiplicative exponential noise ``(-1 / rate) ln u``.

    Parameters
    ----------
    rate : float
        Exponential rate (> 0). Default 1.0.
    density : float
        Fraction of affected samples in ``[0, 1]``. Default 1.0.
    """

    rate: Annotated[float, Range(min=0.0), Desc('Exponential rate (> 0)')] = 1.0

    def __post_init__(self) -> None:
        validate_positive(self.rate, 'rate')

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        validate_positive(params['rate'], 'rate')
        rng = resolve_rng(kwargs.get('rng'))
        shape = source.shape
        noise = (-1.0 / params['rate']) * np.log(open_uniform(rng, shape))
        noise = np.where(self._affected(rng, shape, params['density']), noise, 1.0)
        return create_applying(source, lambda x, y, b, v: v * noise)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE, description='Salt and pepper noise')
class SaltAndPepperNoise(ImageTransform):
    """Impulse noise driving samples to their band extremes.

    One variate ``r`` is drawn per sample: ``r <= p0`` sets the sample to
    its band's minimum (pepper), ``r >= p1`` to its band's maximum (salt).
    Bands of the same pixel are affected independently.

    Parameters
    ----------
    p0 : float
        Pepper probability bound, ``0 <= p0 < p1``. Default 0.05.
    p1 : float
        Salt probability bound, ``p0 < p1 <= 1``. Default 0.95.

    Raises
    ------
    ValidationError
        If the bounds are outside ``[0, 1]`` or ``p0 >= p1``.
    """

    def __init__(self, p0: float = 0.05, p1: float = 0.95) -> None:
        validate_probability(p0, 'p0')
        validate_probability(p1, 'p1')
        if p0 >= p1:
            raise ValidationError(f"p0 ({p0}) must be less than p1 ({p1})")
        self.p0 = p0
        self.p1 = p1

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        rng = resolve_rng(kwargs.get('rng'))
        mins, maxs = band_extrema(source)
        r = rng.random(source.shape)
        pepper = r <= self.p0
        salt = r >= self.p1
        return create_applying(
            source,
            lambda x, y, b, v: np.where(pepper, mins[b], np.where(salt, maxs[b], v)),
        )
