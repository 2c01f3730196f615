# -*- coding: utf-8 -*-
"""
Pipeline - Sequential composition of image transforms.

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
from typing import Any, List, Sequence

# pixelab internal
from pixelab.exceptions import ValidationError
from pixelab.image import ImageBuffer
from pixelab.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)


class Pipeline(ImageTransform):
    """Sequential chain of image transforms.

    The output of each step is the input of the next. A pipeline is
    itself an ``ImageTransform`` and can be nested.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Ordered transforms. Must contain at least one.

    Examples
    --------
    >>> pipe = Pipeline([GaussianFilter(sigma=1.0), Normalize(), Negative()])
    >>> result = pipe.apply(image, progress_callback=lambda f: print(f"{f:.0%}"))
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[ImageTransform]) -> None:
        if not steps:
            raise ValidationError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, ImageTransform):
                raise ValidationError(
                    f"Step {i} is not an ImageTransform: {type(step).__name__}"
                )
        self._steps: List[ImageTransform] = list(steps)

    @property
    def steps(self) -> List[ImageTransform]:
        """Shallow copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline({[type(s).__name__ for s in self._steps]})"

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        """Apply all transforms in order.

        ``progress_callback`` is rescaled so that each step reports its
        share of the overall progress; other keyword arguments are
        forwarded to every step.
        """
        n = len(self._steps)
        outer_cb = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)
            step_kwargs = dict(kwargs)
            if outer_cb is not None:
                step_kwargs['progress_callback'] = (
                    lambda f, _b=i / n, _s=1.0 / n: outer_cb(_b + f * _s)
                )
            result = step.apply(result, **step_kwargs)
            if outer_cb is not None:
                outer_cb((i + 1) / n)
        return result
