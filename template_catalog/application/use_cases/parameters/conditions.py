"""Evaluation of dependency conditions against a source parameter value."""

from __future__ import annotations

import math
import operator as op
from collections.abc import Callable, Sequence
from typing import Any

from template_catalog.domain.entities import ParameterCondition

_ORDERINGS: dict[str, Callable[[Any, Any], bool]] = {
    "gt": op.gt,
    "lt": op.lt,
    "gte": op.ge,
    "lte": op.le,
}


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _values_equal(left: Any, right: Any) -> bool:
    # Booleans never compare equal to numbers even though ``True == 1``.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _comparable(left: Any, right: Any) -> bool:
    if _is_number(left) and _is_number(right):
        return True
    return isinstance(left, str) and isinstance(right, str)


def evaluate_condition(condition: ParameterCondition, source_value: Any) -> bool:
    """Return ``True`` when ``source_value`` satisfies ``condition``.

    Mismatched operand types never match; unknown operators never match
    either, since schema validation rejects them before resolution.
    """

    expected = condition.value
    operator = condition.operator

    if operator == "eq":
        return _values_equal(source_value, expected)
    if operator == "neq":
        return not _values_equal(source_value, expected)

    if source_value is None:
        return False

    ordering = _ORDERINGS.get(operator)
    if ordering is not None:
        if not _comparable(source_value, expected):
            return False
        return ordering(source_value, expected)

    if operator == "contains":
        if isinstance(source_value, str):
            return isinstance(expected, str) and expected in source_value
        if isinstance(source_value, Sequence) and not isinstance(source_value, bytes):
            return any(_values_equal(item, expected) for item in source_value)
        return False

    if operator in ("startsWith", "endsWith"):
        if not isinstance(source_value, str) or not isinstance(expected, str):
            return False
        if operator == "startsWith":
            return source_value.startswith(expected)
        return source_value.endswith(expected)

    return False


__all__ = ["evaluate_condition"]
