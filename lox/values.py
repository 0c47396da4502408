"""Runtime values for Lox.

Lox has four kinds of runtime value and each maps onto a Python type:

* Number -> ``float`` (always a double, even when written as ``2``)
* String -> ``str``
* Bool   -> ``bool``
* Nil    -> ``None``

The helpers below implement the language rules that depend on the kind
of a value: truthiness, equality and the textual form used by ``print``.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


def type_name(value: Any) -> str:
    if value is None:
        return 'Nil'
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    raise TypeError(f'not a Lox value: {value!r}')


def is_truthy(value: Any) -> bool:
    # Only nil and false are falsy; 0 and "" are truthy.
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Structural equality over the value kinds.

    Values of different kinds are never equal. This matters in Python
    because ``True == 1.0`` holds there but must not hold in Lox.
    """
    if a is None or b is None:
        return a is None and b is None
    if type(a) is not type(b):
        return False
    return a == b


def divide(left: float, right: float) -> float:
    """IEEE-754 division: dividing by zero yields an infinity or NaN."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def stringify(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    return str(value)
