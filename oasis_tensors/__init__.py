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
Small-dimension linear algebra

Vectors of 2, 3 or 4 components, square matrices up to 4x4 and quaternions
over float32, float64 and overflow-checked int32 and int64 scalars, in
immutable and mutable forms, with optional phantom coordinate-space tags.
"""

from oasis_tensors.config.tolerance_params import ToleranceParams
from oasis_tensors.errors import ArithmeticOverflowError
from oasis_tensors.errors import DimensionError
from oasis_tensors.errors import SingularMatrixError
from oasis_tensors.errors import TensorError
from oasis_tensors.errors import UnsupportedDomainError
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import FLOAT32
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import INT32
from oasis_tensors.numeric.scalar_domain import INT64
from oasis_tensors.numeric.scalar_domain import CheckedIntegerDomain
from oasis_tensors.numeric.scalar_domain import FloatDomain
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.tags import Tag
from oasis_tensors.types.matrices import MatrixI
from oasis_tensors.types.matrices import MatrixM
from oasis_tensors.types.matrices import PMatrixI
from oasis_tensors.types.matrices import PMatrixM
from oasis_tensors.types.quaternions import QuaternionI
from oasis_tensors.types.quaternions import QuaternionM
from oasis_tensors.types.vectors import PVectorI
from oasis_tensors.types.vectors import PVectorM
from oasis_tensors.types.vectors import VectorI
from oasis_tensors.types.vectors import VectorM


__all__ = [
    "FLOAT32",
    "FLOAT64",
    "INT32",
    "INT64",
    "AlmostEqualContext",
    "ArithmeticOverflowError",
    "CheckedIntegerDomain",
    "DimensionError",
    "FloatDomain",
    "MatrixI",
    "MatrixM",
    "PMatrixI",
    "PMatrixM",
    "PVectorI",
    "PVectorM",
    "QuaternionI",
    "QuaternionM",
    "ScalarDomain",
    "SingularMatrixError",
    "Tag",
    "TensorError",
    "ToleranceParams",
    "UnsupportedDomainError",
    "VectorI",
    "VectorM",
]
