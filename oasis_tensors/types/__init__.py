################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Immutable and mutable vector, matrix and quaternion types."""

from oasis_tensors.types.matrices import MatrixI
from oasis_tensors.types.matrices import MatrixM
from oasis_tensors.types.matrices import PMatrixI
from oasis_tensors.types.matrices import PMatrixM
from oasis_tensors.types.quaternions import QuaternionI
from oasis_tensors.types.quaternions import QuaternionM
from oasis_tensors.types.readable import MatrixReadable
from oasis_tensors.types.readable import QuaternionReadable
from oasis_tensors.types.readable import VectorReadable
from oasis_tensors.types.vectors import PVectorI
from oasis_tensors.types.vectors import PVectorM
from oasis_tensors.types.vectors import VectorI
from oasis_tensors.types.vectors import VectorM


__all__ = [
    "MatrixI",
    "MatrixM",
    "MatrixReadable",
    "PMatrixI",
    "PMatrixM",
    "PVectorI",
    "PVectorM",
    "QuaternionI",
    "QuaternionM",
    "QuaternionReadable",
    "VectorI",
    "VectorM",
    "VectorReadable",
]
