################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Read-only views accepted by ``copy_of`` and ``set_from``."""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable

from oasis_tensors.numeric.scalar_domain import Scalar


@runtime_checkable
class VectorReadable(Protocol):
    """Anything exposing vector components by index."""

    @property
    def dimension(self) -> int: ...

    def component(self, index: int) -> Scalar: ...

    def as_tuple(self) -> tuple[Scalar, ...]: ...


@runtime_checkable
class MatrixReadable(Protocol):
    """Anything exposing square-matrix elements by (row, column)."""

    @property
    def size(self) -> int: ...

    def get(self, row: int, column: int) -> Scalar: ...

    def as_tuple(self) -> tuple[Scalar, ...]:
        """Return the elements in column-major order."""
        ...


@runtime_checkable
class QuaternionReadable(Protocol):
    """Anything exposing quaternion components in (x, y, z, w) order."""

    @property
    def x(self) -> Scalar: ...

    @property
    def y(self) -> Scalar: ...

    @property
    def z(self) -> Scalar: ...

    @property
    def w(self) -> Scalar: ...
