################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Scalar linear interpolation."""

from __future__ import annotations

from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain


def interpolate_linear(
    x0: Scalar, x1: Scalar, alpha: float, domain: ScalarDomain = FLOAT64
) -> Scalar:
    """Interpolate between two scalars.

    Computes ``(1 - alpha) * x0 + alpha * x1`` with the arithmetic of
    ``domain``, rounding once. The endpoints are returned unchanged for
    ``alpha`` of exactly 0 or 1, so rounding never moves them.

    Args:
        x0: Value at ``alpha = 0``
        x1: Value at ``alpha = 1``
        alpha: Interpolation parameter
        domain: Arithmetic used for the blend

    Returns:
        The interpolated value
    """
    if alpha == 0.0:
        return x0
    if alpha == 1.0:
        return x1
    return domain.interpolate(x0, x1, alpha)
