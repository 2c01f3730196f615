# -*- coding: utf-8 -*-
"""
Tunable Parameter Tests - Constraint markers, ParamSpec and generated __init__.

Dependencies
------------
pytest

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

import inspect
from typing import Annotated

import pytest

from pixelab.exceptions import ValidationError
from pixelab.image_processing.base import ImageTransform
from pixelab.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from pixelab.image_processing.versioning import processor_version


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:

    def test_range(self):
        r = Range(min=0.0, max=1.0)
        assert (r.min, r.max) == (0.0, 1.0)
        assert isinstance(r, ParamMeta)
        assert 'min=0.0' in repr(r)

    def test_range_defaults_none(self):
        r = Range()
        assert r.min is None and r.max is None

    def test_options(self):
        assert Options('a', 'b').choices == ('a', 'b')

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_desc(self):
        assert Desc('text').text == 'text'


# ---------------------------------------------------------------------------
# ParamSpec validation
# ---------------------------------------------------------------------------

class TestParamSpec:

    def test_required_when_no_default(self):
        spec = ParamSpec('mode', str, None, False)
        assert spec.required is True

    def test_int_accepted_as_float(self):
        ParamSpec('x', float, 0.5, True).validate(1)

    def test_bool_rejected_for_numeric(self):
        with pytest.raises(ValidationError):
            ParamSpec('x', int, 1, True).validate(True)

    def test_float_rejected_for_int(self):
        with pytest.raises(ValidationError, match="must be int"):
            ParamSpec('n', int, 1, True).validate(1.5)

    def test_wrong_type_raises(self):
        with pytest.raises(ValidationError, match="x"):
            ParamSpec('x', float, 0.5, True).validate('bad')

    def test_bounds_inclusive(self):
        spec = ParamSpec('x', float, 0.5, True, min_value=0.0, max_value=1.0)
        spec.validate(0.0)
        spec.validate(1.0)
        with pytest.raises(ValidationError, match="below minimum"):
            spec.validate(-0.1)
        with pytest.raises(ValidationError, match="above maximum"):
            spec.validate(1.1)

    def test_choices(self):
        spec = ParamSpec('m', str, 'a', True, choices=('a', 'b'))
        spec.validate('b')
        with pytest.raises(ValidationError, match="not in allowed choices"):
            spec.validate('c')

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            ParamSpec('x', float, 0.5, True, min_value=0.0).validate(-1.0)

    def test_repr(self):
        r = repr(ParamSpec('x', float, 0.5, True))
        assert 'required=False' in r
        assert 'default=0.5' in r


# ---------------------------------------------------------------------------
# collect_param_specs
# ---------------------------------------------------------------------------

class TestCollectParamSpecs:

    def test_plain_annotations_ignored(self):
        class C:
            a: int = 1
            b: Annotated[int, 'not a marker'] = 2
        assert collect_param_specs(C) == ()

    def test_parent_first_order(self):
        class Parent:
            first: Annotated[int, Desc('first')] = 1

        class Child(Parent):
            second: Annotated[float, Range(min=0.0)] = 2.0

        names = [s.name for s in collect_param_specs(Child)]
        assert names == ['first', 'second']

    def test_range_and_options_exclusive(self):
        class Bad:
            x: Annotated[int, Range(min=0), Options(1, 2)] = 1
        with pytest.raises(TypeError, match="mutually exclusive"):
            collect_param_specs(Bad)


# ---------------------------------------------------------------------------
# Generated __init__
# ---------------------------------------------------------------------------

@processor_version('1.0.0')
class _Tunable(ImageTransform):
    window_length: Annotated[int, Range(min=1), Desc('Window side')] = 3
    method: Annotated[str, Options('fast', 'exact')] = 'fast'

    def apply(self, source, **kwargs):
        return source


@processor_version('1.0.0')
class _WithPostInit(ImageTransform):
    sigma: Annotated[float, Range(min=0.0)] = 1.0

    def __post_init__(self):
        self.scaled = self.sigma * 2

    def apply(self, source, **kwargs):
        return source


class TestGeneratedInit:

    def test_defaults(self):
        t = _Tunable()
        assert t.window_length == 3
        assert t.method == 'fast'

    def test_overrides(self):
        t = _Tunable(window_length=5, method='exact')
        assert t.window_length == 5
        assert t.method == 'exact'

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            _Tunable(5)

    def test_unexpected_keyword_raises(self):
        with pytest.raises(TypeError, match="unexpected"):
            _Tunable(size=5)

    def test_invalid_value_raises(self):
        with pytest.raises(ValidationError):
            _Tunable(window_length=0)
        with pytest.raises(ValidationError):
            _Tunable(method='slow')

    def test_signature(self):
        params = inspect.signature(_Tunable.__init__).parameters
        assert params['window_length'].kind is inspect.Parameter.KEYWORD_ONLY
        assert params['window_length'].default == 3

    def test_post_init_called(self):
        assert _WithPostInit(sigma=2.5).scaled == 5.0

    def test_resolve_params_with_overrides(self):
        t = _Tunable()
        resolved = t._resolve_params({'window_length': 7, 'progress_callback': None})
        assert resolved == {'window_length': 7, 'method': 'fast'}

    def test_resolve_params_validates(self):
        with pytest.raises(ValidationError):
            _Tunable()._resolve_params({'window_length': -1})
