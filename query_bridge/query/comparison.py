"""
Loose, type-coercing comparisons for filter and sort evaluation.

Records arrive with inferred, not declared, types, and the language model
may send ``"10"`` where a record holds ``10``. These helpers coerce
explicitly instead of relying on Python's operators:

- ``None`` and UNDEFINED (a missing field) equal each other and nothing else.
- Booleans behave as 0 and 1 against non-booleans.
- A string compared with a number is parsed as a number first.
- NaN (an unparseable string, a missing field in an ordering) is neither
  equal to nor ordered against anything.
- Two strings order lexicographically.
- Dicts and lists never match and never order.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional

from query_bridge.core.models import FilterCondition, Record
from query_bridge.schema.type_mappings import TypeMapper, UNDEFINED

NAN = float("nan")

_DECIMAL_LITERAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_PREFIXED_LITERAL = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY = re.compile(r"^([+-]?)Infinity$")


def _is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple, set))


def to_number(value: Any) -> float:
    """
    Convert a value to a number the way a loosely typed comparison would.

    Args:
        value: Record value or match value

    Returns:
        The numeric value, or NaN when there is none
    """
    if value is UNDEFINED:
        return NAN
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, Decimal):
        return float(value)
    if TypeMapper.is_number(value):
        return value
    if isinstance(value, str):
        return _parse_numeric_string(value)
    return NAN


def _parse_numeric_string(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL_LITERAL.match(text):
        return float(text)
    if _PREFIXED_LITERAL.match(text):
        return float(int(text, 0))
    infinity = _INFINITY.match(text)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    return NAN


def loose_equals(left: Any, right: Any) -> bool:
    """Type-coercing equality."""
    if _is_nullish(left) or _is_nullish(right):
        return _is_nullish(left) and _is_nullish(right)
    if _is_container(left) or _is_container(right):
        return False
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, bool) and isinstance(right, bool):
        return left == right
    return to_number(left) == to_number(right)


def _compare(left: Any, right: Any) -> Optional[int]:
    """Order two values: -1, 0 or 1, or None when they are unordered."""
    if _is_container(left) or _is_container(right):
        return None
    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)
    a, b = to_number(left), to_number(right)
    if math.isnan(a) or math.isnan(b):
        return None
    return (a > b) - (a < b)


def loose_less_than(left: Any, right: Any) -> bool:
    """Type-coercing ``<``."""
    return _compare(left, right) == -1


def loose_greater_than(left: Any, right: Any) -> bool:
    """Type-coercing ``>``."""
    return _compare(left, right) == 1


OPERATORS = {
    "equals": loose_equals,
    "notEquals": lambda left, right: not loose_equals(left, right),
    "greaterThan": loose_greater_than,
    "lessThan": loose_less_than,
}


def matches_condition(record: Record, condition: FilterCondition) -> bool:
    """
    Evaluate one filter condition against a record.

    An unrecognised operator always matches.
    """
    compare = OPERATORS.get(condition.operator)
    if compare is None:
        return True
    return compare(record.get(condition.field, UNDEFINED), condition.matchValue)
