# -*- coding: utf-8 -*-
"""
Hough Transform - Brute-force line and circle detection by parameter-space voting.

Detection runs in three stages:

1. Canny edges of the input (edge pixels hold 255 in band 0).
2. Voting: every edge pixel votes for every candidate shape whose
   membership test it passes. Candidates form a regular grid, so the
   accumulator is a dense integer array indexed by grid position. Edge
   pixels are processed in chunks; each chunk builds a private partial
   count that is summed into the accumulator.
3. Candidates with ``votes >= max_percentage * max_votes`` are kept and
   painted onto a 3-band copy of the input.

Lines are parameterized by ``(theta, rho)`` with membership
``|rho - x sin(theta) - y cos(theta)| < epsilon``; circles by
``(cx, cy, r)`` with membership ``|r^2 - (x - cx)^2 - (y - cy)^2| < epsilon``.

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
import math
from abc import abstractmethod
from dataclasses import dataclass, field
from functools import singledispatch
from typing import Annotated, Any, Callable, List, Tuple, Union

# Third-party
import numpy as np

# pixelab internal
from pixelab.image import ImageBuffer
from pixelab.image_processing._validation import validate_positive
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.filters.edges import CannyEdgeDetector
from pixelab.image_processing.params import Desc, Range
from pixelab.image_processing.versioning import processor_tags, processor_version
from pixelab.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

EDGE_VALUE = 255.0
HIGHLIGHT = (0.0, 255.0, 0.0)

# Upper bound on the number of membership tests evaluated at once.
_VOTE_BLOCK = 1 << 22


@dataclass(frozen=True)
class StraightLine:
    """Line ``x sin(theta) + y cos(theta) = rho``; ``theta`` in radians.

    Equality and hashing ignore ``epsilon``.
    """

    theta: float
    rho: float
    epsilon: float = field(default=1.0, compare=False)


@dataclass(frozen=True)
class Circle:
    """Circle of integer center and radius.

    Equality and hashing ignore ``epsilon``.
    """

    center_x: int
    center_y: int
    radius: int
    epsilon: float = field(default=1.0, compare=False)


Shape = Union[StraightLine, Circle]


@singledispatch
def belongs(shape, x, y):
    """Membership test of pixel ``(x, y)``; accepts scalars or arrays."""
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


@belongs.register
def _(shape: StraightLine, x, y):
    return np.abs(
        shape.rho - x * math.sin(shape.theta) - y * math.cos(shape.theta)
    ) < shape.epsilon


@belongs.register
def _(shape: Circle, x, y):
    return np.abs(
        shape.radius ** 2 - (x - shape.center_x) ** 2 - (y - shape.center_y) ** 2
    ) < shape.epsilon


@dataclass(frozen=True)
class HoughResult:
    """Outcome of a Hough detection.

    Attributes
    ----------
    shapes : tuple of (shape, votes)
        Retained candidates, most voted first.
    max_votes : int
        Highest vote count over all candidates.
    edges : ImageBuffer
        Edge map the votes were cast from.
    """

    shapes: Tuple[Tuple[Shape, int], ...]
    max_votes: int
    edges: ImageBuffer


def stepped_range(start: float, stop: float, step: float) -> np.ndarray:
    """Values ``start, start + step, ...`` up to and including *stop*.

    Accumulates by repeated addition, so the last value is included only
    when the accumulated sum does not overshoot *stop*.
    """
    values = []
    value = start
    while value <= stop:
        values.append(value)
        value += step
    return np.array(values, dtype=np.float64)


def edge_coordinates(edges: ImageBuffer) -> Tuple[np.ndarray, np.ndarray]:
    """``x`` and ``y`` of every pixel whose band 0 equals 255."""
    xs, ys = np.nonzero(edges.get_band(0) == EDGE_VALUE)
    return xs.astype(np.float64), ys.astype(np.float64)


def _chunks(count: int, per_item: int):
    size = max(1, _VOTE_BLOCK // max(1, per_item))
    for start in range(0, count, size):
        yield slice(start, min(start + size, count))


def vote_lines(
    xs: np.ndarray,
    ys: np.ndarray,
    thetas: np.ndarray,
    rhos: np.ndarray,
    epsilon: float,
    progress: Callable[[float], None] = None,
) -> np.ndarray:
    """Line accumulator of shape ``(len(thetas), len(rhos))``."""
    sin, cos = np.sin(thetas), np.cos(thetas)
    accumulator = np.zeros((len(thetas), len(rhos)), dtype=np.int64)
    for part in _chunks(len(xs), len(thetas) * len(rhos)):
        x_sin = (xs[part, np.newaxis] * sin)[:, :, np.newaxis]
        y_cos = (ys[part, np.newaxis] * cos)[:, :, np.newaxis]
        hits = np.abs(rhos - x_sin - y_cos) < epsilon
        accumulator += hits.sum(axis=0)
        if progress is not None:
            progress(part.stop / len(xs))
    return accumulator


def vote_circles(
    xs: np.ndarray,
    ys: np.ndarray,
    width: int,
    height: int,
    epsilon: float,
    progress: Callable[[float], None] = None,
) -> List[Tuple[int, np.ndarray, np.ndarray, np.ndarray]]:
    """Circle accumulators, one ``(radius, cxs, cys, votes)`` entry per radius.

    Radii run from 1 to ``max(width, height) // 2``; centers span
    ``[r, width - r] x [r, height - r]``. Radii without a fitting center
    are skipped.
    """
    radii = range(1, max(width, height) // 2 + 1)
    layers = []
    for index, radius in enumerate(radii):
        cxs = np.arange(radius, width - radius + 1, dtype=np.float64)
        cys = np.arange(radius, height - radius + 1, dtype=np.float64)
        if cxs.size == 0 or cys.size == 0:
            continue
        votes = np.zeros((cxs.size, cys.size), dtype=np.int64)
        r2 = float(radius * radius)
        for part in _chunks(len(xs), cxs.size * cys.size):
            dx2 = ((xs[part, np.newaxis] - cxs) ** 2)[:, :, np.newaxis]
            dy2 = ((ys[part, np.newaxis] - cys) ** 2)[:, np.newaxis, :]
            votes += (np.abs(r2 - dx2 - dy2) < epsilon).sum(axis=0)
        layers.append((radius, cxs, cys, votes))
        if progress is not None:
            progress((index + 1) / len(radii))
    return layers


def render(source: ImageBuffer, shapes) -> ImageBuffer:
    """Paint every pixel on any of *shapes* in the highlight color.

    A 3-band source is copied as is; any other band count becomes the
    gray magnitude ``sqrt(sum(v ** 2))`` replicated into 3 bands.
    """
    if source.bands == 3:
        canvas = source.to_array()
    else:
        gray = np.sqrt(np.sum(source.samples ** 2, axis=2))
        canvas = np.repeat(gray[:, :, np.newaxis], 3, axis=2)

    x, y = np.indices((source.width, source.height), sparse=True)
    painted = np.zeros((source.width, source.height), dtype=bool)
    for shape in shapes:
        painted |= belongs(shape, x, y)
    canvas[painted] = HIGHLIGHT
    return ImageBuffer._adopt(canvas)


class _HoughDetector(ImageTransform):
    """Shared edge extraction, thresholding and rendering."""

    sigma: Annotated[float, Range(min=0.0), Desc('Canny pre-smoothing sigma (> 0)')] = 1.0
    epsilon: Annotated[float, Range(min=0.0), Desc('Membership tolerance (> 0)')] = 1.0
    max_percentage: Annotated[
        float, Range(min=0.0, max=1.0), Desc('Retained fraction of the maximum vote'),
    ] = 0.8

    def __post_init__(self) -> None:
        validate_positive(self.sigma, 'sigma')
        validate_positive(self.epsilon, 'epsilon')

    @abstractmethod
    def _accumulate(self, xs, ys, source: ImageBuffer, params, progress):
        """Vote and return ``[(votes, make_shape), ...]``.

        ``votes`` is an integer accumulator array and ``make_shape`` maps
        one of its index tuples to the candidate shape.
        """

    def detect(self, source: ImageBuffer, **kwargs: Any) -> HoughResult:
        """Run edge extraction and voting, returning the retained shapes."""
        params = self._resolve_params(kwargs)
        validate_positive(params['sigma'], 'sigma')
        validate_positive(params['epsilon'], 'epsilon')
        edges = CannyEdgeDetector(sigma=params['sigma']).apply(source)
        xs, ys = edge_coordinates(edges)

        def progress(fraction: float) -> None:
            self._report_progress(kwargs, fraction)

        layers = self._accumulate(xs, ys, source, params, progress)
        max_votes = max((int(votes.max()) for votes, _ in layers if votes.size), default=0)
        floor = params['max_percentage'] * max_votes
        kept = []
        for votes, make_shape in layers:
            for index in np.argwhere(votes >= floor):
                index = tuple(int(i) for i in index)
                kept.append((make_shape(index), int(votes[index])))
        kept.sort(key=lambda item: -item[1])
        logger.debug("%s: %d edge pixel(s), max votes %d, %d candidate(s) kept",
                     type(self).__name__, len(xs), max_votes, len(kept))
        return HoughResult(shapes=tuple(kept), max_votes=max_votes, edges=edges)

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        """Render the retained shapes of :meth:`detect` onto the input."""
        result = self.detect(source, **kwargs)
        return render(source, [shape for shape, _ in result.shapes])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.DETECTION, description='Hough straight line detection')
class HoughLineDetector(_HoughDetector):
    """Straight line detector.

    Parameters
    ----------
    sigma : float
        Canny pre-smoothing standard deviation (> 0). Default 1.0.
    theta_step : float
        Angle step in degrees over ``[-90, 90]`` (> 0). Default 1.0.
    epsilon : float
        Membership tolerance in pixels (> 0). Default 1.0.
    max_percentage : float
        Candidates need at least this fraction of the maximum vote.
        Default 0.8.

    Examples
    --------
    >>> detector = HoughLineDetector(sigma=1.0, theta_step=1.0, epsilon=1.0,
    ...                              max_percentage=0.8)
    >>> result = detector.detect(image)
    >>> best_line, votes = result.shapes[0]
    >>> overlay = detector.apply(image)
    """

    theta_step: Annotated[float, Range(min=0.0), Desc('Angle step in degrees (> 0)')] = 1.0

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_positive(self.theta_step, 'theta_step')

    def _accumulate(self, xs, ys, source, params, progress):
        validate_positive(params['theta_step'], 'theta_step')
        d = max(source.width, source.height)
        sqrt2 = math.sqrt(2)
        thetas = np.radians(stepped_range(-90.0, 90.0, params['theta_step']))
        rhos = stepped_range(-d * sqrt2, d * sqrt2, sqrt2)
        epsilon = params['epsilon']
        votes = vote_lines(xs, ys, thetas, rhos, epsilon, progress)
        return [(
            votes,
            lambda index: StraightLine(float(thetas[index[0]]), float(rhos[index[1]]), epsilon),
        )]


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.DETECTION, description='Hough circle detection')
class HoughCircleDetector(_HoughDetector):
    """Circle detector over integer centers and radii.

    Parameters
    ----------
    sigma : float
        Canny pre-smoothing standard deviation (> 0). Default 1.0.
    epsilon : float
        Tolerance on ``r^2 - dx^2 - dy^2`` (> 0). Default 1.0.
    max_percentage : float
        Candidates need at least this fraction of the maximum vote.
        Default 0.8.
    """

    def _accumulate(self, xs, ys, source, params, progress):
        epsilon = params['epsilon']
        layers = []
        for radius, cxs, cys, votes in vote_circles(
            xs, ys, source.width, source.height, epsilon, progress,
        ):
            layers.append((
                votes,
                lambda index, r=radius, cx=cxs, cy=cys: Circle(
                    int(cx[index[0]]), int(cy[index[1]]), r, epsilon
                ),
            ))
        return layers
