# -*- coding: utf-8 -*-
"""
Diffusion Filters - Iterative isotropic and anisotropic (Perona-Malik) smoothing.

Each iteration replaces every interior sample with

    p' = p + lam * sum((n - p) * g(n - p))   over the 4-neighbors n

where ``g`` is the conduction coefficient: constant 1 for isotropic
diffusion, ``exp(-d^2 / sigma^2)`` (Leclerc) or ``1 / (1 + d^2 / sigma^2)``
(Lorentz) for edge-preserving diffusion. An iteration reads only the
previous buffer and writes a fresh one. Samples on the outermost rows
and columns are 0 after every iteration.

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
import logging
from typing import Annotated, Any, Callable

# Third-party
import numpy as np

# pixelab internal
from pixelab.image import ImageBuffer
from pixelab.image_processing._validation import validate_positive
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ConductionModel, ProcessorCategory

logger = logging.getLogger(__name__)


def isotropic_conduction(d: np.ndarray, sigma: float = 1.0) -> np.ndarray:
    return np.ones_like(d)


def leclerc_conduction(d: np.ndarray, sigma: float) -> np.ndarray:
    return np.exp(-(d * d) / (sigma * sigma))


def lorentz_conduction(d: np.ndarray, sigma: float) -> np.ndarray:
    return 1.0 / ((d * d) / (sigma * sigma) + 1.0)


CONDUCTION_FUNCTIONS = {
    ConductionModel.ISOTROPIC: isotropic_conduction,
    ConductionModel.LECLERC: leclerc_conduction,
    ConductionModel.LORENTZ: lorentz_conduction,
}


def diffuse(
    samples: np.ndarray,
    iterations: int,
    lam: float,
    conduction: Callable[[np.ndarray], np.ndarray],
    progress: Callable[[float], None] = None,
) -> np.ndarray:
    """Run *iterations* diffusion steps over a ``(w, h, b)`` array.

    Returns a new array; *samples* is not modified. *progress*, when
    given, is called with the completed fraction after every iteration.
    """
    current = np.array(samples, dtype=np.float64)
    width, height = current.shape[:2]
    for i in range(iterations):
        following = np.zeros_like(current)
        if width > 2 and height > 2:
            center = current[1:-1, 1:-1]
            total = np.zeros_like(center)
            for neighbor in (
                current[2:, 1:-1], current[:-2, 1:-1],
                current[1:-1, 2:], current[1:-1, :-2],
            ):
                d = neighbor - center
                total += d * conduction(d)
            following[1:-1, 1:-1] = center + lam * total
        current = following
        if progress is not None:
            progress((i + 1) / iterations)
    return current


class DiffusionFilter(ImageTransform):
    """Base class of the diffusion filters.

    Subclasses set ``model`` to a ``ConductionModel`` member.
    """

    model: ConductionModel = ConductionModel.ISOTROPIC

    iterations: Annotated[int, Range(min=0), Desc('Number of iterations')] = 1
    lam: Annotated[float, Range(min=0.0), Desc('Integration step')] = 0.25

    def _conduction(self, params):
        return CONDUCTION_FUNCTIONS[self.model]

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        params = self._resolve_params(kwargs)
        iterations = params['iterations']
        if iterations == 0:
            return source.copy()
        logger.debug("%s: %d iteration(s), lam=%s", type(self).__name__,
                     iterations, params['lam'])
        result = diffuse(
            source.samples,
            iterations,
            params['lam'],
            self._conduction(params),
            progress=lambda f: self._report_progress(kwargs, f),
        )
        return ImageBuffer._adopt(result)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.DIFFUSION, description='Isotropic (heat equation) diffusion')
class IsotropicDiffusion(DiffusionFilter):
    """Heat-equation smoothing with a constant conduction coefficient.

    Parameters
    ----------
    iterations : int
        Number of steps (>= 0). Zero returns a copy of the input.
    lam : float
        Integration step (>= 0); values above 0.25 are unstable. Default 0.25.

    Examples
    --------
    >>> smoothed = IsotropicDiffusion(iterations=10, lam=0.2).apply(image)
    """


class _AnisotropicDiffusion(DiffusionFilter):

    sigma: Annotated[float, Range(min=0.0), Desc('Edge-stopping scale (> 0)')] = 1.0

    def __post_init__(self) -> None:
        validate_positive(self.sigma, 'sigma')

    def _conduction(self, params):
        sigma = params['sigma']
        validate_positive(sigma, 'sigma')
        g = CONDUCTION_FUNCTIONS[self.model]
        return lambda d: g(d, sigma)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.DIFFUSION, description='Anisotropic diffusion, Leclerc coefficient')
class LeclercDiffusion(_AnisotropicDiffusion):
    """Anisotropic diffusion with ``g(d) = exp(-d^2 / sigma^2)``."""

    model = ConductionModel.LECLERC


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.DIFFUSION, description='Anisotropic diffusion, Lorentz coefficient')
class LorentzDiffusion(_AnisotropicDiffusion):
    """Anisotropic diffusion with ``g(d) = 1 / (1 + d^2 / sigma^2)``."""

    model = ConductionModel.LORENTZ
