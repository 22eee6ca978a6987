################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Floating-point comparison strategies

Two independent strategies are provided and must not be merged:

    * ``almost_equal`` compares under a caller-supplied relative-tolerance
      context. Values are equal when their difference is within the absolute
      tolerance, or within the relative tolerance scaled by the larger
      magnitude of the two operands.
    * ``approximately_equal`` uses a fixed heuristic: the difference must be
      within ``epsilon * max(1, |a|, |b|)``. The epsilon is a constant of the
      precision, not a parameter of the call site.

NaN is never equal to anything under either strategy. Infinities are only
equal to themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# Fixed epsilon of the approximate comparison for float32 values
APPROXIMATE_EPSILON_FLOAT: float = 1e-5

# Fixed epsilon of the approximate comparison for float64 values
APPROXIMATE_EPSILON_DOUBLE: float = 1e-9


@dataclass(frozen=True, slots=True)
class AlmostEqualContext:
    """Relative-tolerance context for almost-equal comparisons."""

    max_absolute_difference: float
    max_relative_difference: float

    def __post_init__(self) -> None:
        """Validate tolerance values."""
        if not math.isfinite(self.max_absolute_difference):
            raise ValueError("max_absolute_difference must be finite")
        if not math.isfinite(self.max_relative_difference):
            raise ValueError("max_relative_difference must be finite")
        if self.max_absolute_difference < 0.0:
            raise ValueError("max_absolute_difference must be >= 0")
        if self.max_relative_difference < 0.0:
            raise ValueError("max_relative_difference must be >= 0")


def almost_equal(context: AlmostEqualContext, a: float, b: float) -> bool:
    """Return True when two values are equal under a relative context.

    Args:
        context: Tolerances used for the comparison
        a: Left value
        b: Right value

    Returns:
        True if ``a`` and ``b`` are almost equal
    """
    if a == b:
        return True
    if math.isnan(a) or math.isnan(b):
        return False
    if math.isinf(a) or math.isinf(b):
        return False

    diff: float = abs(a - b)
    if diff <= context.max_absolute_difference:
        return True

    largest: float = max(abs(a), abs(b))
    return diff <= largest * context.max_relative_difference


def approximately_equal(
    a: float, b: float, epsilon: float = APPROXIMATE_EPSILON_DOUBLE
) -> bool:
    """Return True when two values are equal under the fixed heuristic.

    Args:
        a: Left value
        b: Right value
        epsilon: Precision constant, normally one of the module constants

    Returns:
        True if ``a`` and ``b`` are approximately equal
    """
    if a == b:
        return True
    if not (math.isfinite(a) and math.isfinite(b)):
        return False

    diff: float = abs(a - b)
    return diff <= epsilon * max(1.0, abs(a), abs(b))
