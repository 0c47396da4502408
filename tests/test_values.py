import math

import pytest

from lox.values import divide, is_equal, is_truthy, stringify, type_name


@pytest.mark.parametrize('value, expected', [
    (None, False),
    (False, False),
    (True, True),
    (0.0, True),
    ('', True),
    ('a', True),
])
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


def test_is_equal_same_kind():
    assert is_equal(2.0, 2.0)
    assert is_equal('a', 'a')
    assert is_equal(None, None)
    assert not is_equal('a', 'b')


def test_is_equal_never_crosses_kinds():
    assert not is_equal(True, 1.0)
    assert not is_equal(0.0, False)
    assert not is_equal(None, False)
    assert not is_equal('2', 2.0)


def test_nan_is_not_equal_to_itself():
    assert not is_equal(math.nan, math.nan)


@pytest.mark.parametrize('value, text', [
    (None, 'nil'),
    (True, 'true'),
    (False, 'false'),
    (7.0, '7'),
    (-0.0, '-0'),
    (2.5, '2.5'),
    (1e21, '1000000000000000000000'),
    (1.5e-7, '0.00000015'),
    (math.inf, 'inf'),
    (-math.inf, '-inf'),
    (math.nan, 'NaN'),
    ('text', 'text'),
])
def test_stringify(value, text):
    assert stringify(value) == text


def test_divide_by_zero():
    assert divide(1.0, 0.0) == math.inf
    assert divide(-1.0, 0.0) == -math.inf
    assert divide(1.0, -0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))
    assert divide(1.0, 4.0) == 0.25


def test_type_name():
    assert [type_name(v) for v in (None, True, 1.0, 's')] == ['Nil', 'Bool', 'Number', 'String']
