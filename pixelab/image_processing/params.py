# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative parameter constraints via typing.Annotated.

Constraint markers (``Range``, ``Options``, ``Desc``) are placed inside
``typing.Annotated`` class-body annotations on ``ImageProcessor``
subclasses. ``collect_param_specs`` turns them into ``ParamSpec`` records
and ``_make_init`` builds a keyword-only ``__init__`` from those records.

Usage
-----
::

    from typing import Annotated
    from pixelab.image_processing.params import Range, Options, Desc

    class MyFilter(ImageTransform):
        sigma: Annotated[float, Range(min=0.1), Desc('Gaussian sigma')] = 1.0
        operator: Annotated[str, Options('prewitt', 'sobel')] = 'sobel'

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
import inspect
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# pixelab internal
from pixelab.exceptions import ValidationError

Number = Union[int, float]


class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


class Range(ParamMeta):
    """Inclusive numeric range constraint.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self, min: Optional[Number] = None, max: Optional[Number] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        parts = [
            f"{k}={v!r}" for k, v in (('min', self.min), ('max', self.max))
            if v is not None
        ]
        return f"Range({', '.join(parts)})"


class Options(ParamMeta):
    """Discrete choice constraint."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable parameter description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


_SENTINEL = object()


class ParamSpec:
    """Resolved specification for a single tunable parameter.

    Attributes
    ----------
    name : str
        Parameter name (keyword-argument key).
    param_type : type
        Expected Python type.
    default : Any
        Default value, or ``None`` when the parameter is required.
    description : str
        Human-readable description.
    min_value, max_value : int, float, or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default',
        'description', 'min_value', 'max_value', 'choices',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        has_default: bool,
        description: str = '',
        min_value: Optional[Number] = None,
        max_value: Optional[Number] = None,
        choices: Optional[Tuple] = None,
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        """Whether this parameter has no default."""
        return not self._has_default

    def validate(self, value: Any) -> None:
        """Check *value* against the type, range and choices constraints.

        ``int`` values are accepted for ``float`` parameters; ``bool`` is
        rejected for numeric parameters.

        Raises
        ------
        ValidationError
            If *value* has the wrong type or violates a constraint.
        """
        if self.param_type in (int, float):
            allowed = (int, float) if self.param_type is float else (int,)
            if isinstance(value, bool) or not isinstance(value, allowed):
                raise ValidationError(
                    f"Parameter '{self.name}' must be "
                    f"{self.param_type.__name__}, got {type(value).__name__}"
                )
        elif self.param_type is not object and not isinstance(value, self.param_type):
            raise ValidationError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        text = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"required={self.required!r}"
        )
        if not self.required:
            text += f", default={self.default!r}"
        return text + ")"


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` class fields of *cls* into ``ParamSpec`` records.

    Fields are ordered parent-first, in declaration order within each
    class. Fields without a ``ParamMeta`` marker are ignored.

    Raises
    ------
    TypeError
        If a field carries both ``Range`` and ``Options``.
    """
    hints = get_type_hints(cls, include_extras=True)

    ordered = []
    for klass in reversed(cls.__mro__):
        for name in klass.__dict__.get('__annotations__', {}):
            if name in hints and name not in ordered:
                ordered.append(name)

    specs = []
    for name in ordered:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue

        range_meta = next((m for m in metas if isinstance(m, Range)), None)
        options_meta = next((m for m in metas if isinstance(m, Options)), None)
        desc_meta = next((m for m in metas if isinstance(m, Desc)), None)
        if range_meta and options_meta:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )

        default = getattr(cls, name, _SENTINEL)
        has_default = default is not _SENTINEL
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=default if has_default else None,
            has_default=has_default,
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
            choices=options_meta.choices if options_meta else None,
        ))
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` that validates and stores params.

    The generated initializer calls ``self.__post_init__()`` when the
    class defines one.
    """
    specs = param_specs

    def __init__(self, **kwargs):
        unexpected = set(kwargs) - {s.name for s in specs}
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif not spec.required:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            setattr(self, spec.name, value)

        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in specs:
        params.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=spec.default if not spec.required else inspect.Parameter.empty,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
