# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for image processors.

``ImageProcessor`` is the common base of every processor. It warns once
per class when no ``@processor_version`` was declared, collects
``typing.Annotated`` tunable parameters into ``__param_specs__``,
generates a keyword-only ``__init__`` for them, and resolves per-call
overrides through ``**kwargs``. ``ImageTransform`` is the ABC for
processors mapping one ``ImageBuffer`` to a new one.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# pixelab internal
from pixelab.image import ImageBuffer
from pixelab.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all image processors.

    **Version checking**: concrete subclasses without
    ``@processor_version('x.y.z')`` trigger a ``UserWarning`` at first
    instantiation. The check runs in ``__new__`` so that class decorators
    have already been applied.

    **Tunable parameters**: subclasses declare parameters as
    ``typing.Annotated`` class fields using ``Range``, ``Options`` and
    ``Desc``. ``__init_subclass__`` collects them and auto-generates an
    ``__init__`` unless the subclass defines its own. At runtime
    ``_resolve_params(kwargs)`` merges instance values with keyword
    overrides and validates them.

    **Progress**: long-running processors call ``_report_progress`` with
    the ``progress_callback`` passed by the caller. An exception raised by
    the callback propagates and aborts the operation.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance parameter values with runtime *kwargs* overrides.

        Keys of *kwargs* that are not declared parameters (for example
        ``progress_callback`` or ``rng``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        ValidationError
            If a value has the wrong type or violates a constraint.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs else getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Call ``kwargs['progress_callback']`` with *fraction*, if given."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for image-to-image transforms.

    Implementations never modify *source*; they always return a new
    ``ImageBuffer``.
    """

    @abstractmethod
    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        """
        Apply the transform to *source*.

        Parameters
        ----------
        source : ImageBuffer
            Input image.
        **kwargs
            Per-call parameter overrides and ``progress_callback``.

        Returns
        -------
        ImageBuffer
            Transformed image.
        """
        ...


class BandwiseTransformMixin:
    """Mixin that applies a 2D transform to every band independently.

    Subclasses implement ``_apply_band(plane, **kwargs)`` on a read-only
    ``(width, height)`` array and return a new ``(width, height)`` array::

        class MyFilter(BandwiseTransformMixin, ImageTransform):
            def _apply_band(self, plane, **kwargs):
                ...
    """

    def apply(self, source: ImageBuffer, **kwargs: Any) -> ImageBuffer:
        return ImageBuffer.from_bands([
            self._apply_band(source.get_band(b), **kwargs)
            for b in range(source.bands)
        ])

    @abstractmethod
    def _apply_band(self, plane: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Transform one ``(width, height)`` band plane."""
        ...
