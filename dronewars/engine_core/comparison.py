"""
Stat Comparison - Evaluates the comparison operators used by card data.

Card restrictions and filters compare a drone stat against either a
literal value or another entity's stat:

    {"stat": "speed", "comparison": "GTE", "value": 5}

Supported operators: LT, LTE, EQ, GT, GTE.
Unknown operators never match.
"""

from __future__ import annotations
from enum import Enum
from typing import Any


class Comparison(str, Enum):
    """Comparison operators for stat filters."""
    LT = "LT"
    LTE = "LTE"
    EQ = "EQ"
    GT = "GT"
    GTE = "GTE"


def parse_comparison(value: str | None) -> Comparison | None:
    """Map a raw operator string to a Comparison, None if unknown."""
    if value is None:
        return None
    try:
        return Comparison(value)
    except ValueError:
        return None


def compare(left: Any, right: Any, op: str | Comparison) -> bool:
    """
    Perform a comparison operation.

    Returns False for unknown operators and for values that cannot be
    ordered against each other.
    """
    comparison = op if isinstance(op, Comparison) else parse_comparison(op)
    if comparison is None:
        return False
    try:
        if comparison == Comparison.LT:
            return left < right
        elif comparison == Comparison.LTE:
            return left <= right
        elif comparison == Comparison.EQ:
            return left == right
        elif comparison == Comparison.GT:
            return left > right
        elif comparison == Comparison.GTE:
            return left >= right
    except TypeError:
        return False
    return False
