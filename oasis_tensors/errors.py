################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exception hierarchy for the tensor kernel."""


class TensorError(Exception):
    """Base exception for all tensor kernel errors."""


class ArithmeticOverflowError(TensorError, OverflowError):
    """Raised when a checked integer operation leaves the domain's range."""


class SingularMatrixError(TensorError, ValueError):
    """Raised when an inverse is required for a singular matrix."""


class UnsupportedDomainError(TensorError, TypeError):
    """Raised when a floating-only operation is requested on an integer domain."""


class DimensionError(TensorError, ValueError):
    """Raised when a dimension is invalid or two operands disagree."""
