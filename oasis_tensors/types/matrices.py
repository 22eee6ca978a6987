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
Square-matrix value types

Matrices are 2x2, 3x3 or 4x4 and store their elements column-major. Accessors
always take (row, column).

    * MatrixI / MatrixM: immutable / mutable, untagged
    * PMatrixI[T0, T1] / PMatrixM[T0, T1]: immutable / mutable, mapping
      vectors in coordinate space T0 to coordinate space T1

Tagged composition follows the column-vector convention: ``a.multiply(b)``
applies ``b`` first, so a ``PMatrixI[T1, T2]`` times a ``PMatrixI[T0, T1]``
is a ``PMatrixI[T0, T2]``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from typing import Generic
from typing import TypeVar
from typing import Union

import numpy as np
from numpy.typing import NDArray

from oasis_tensors.errors import DimensionError
from oasis_tensors.errors import SingularMatrixError
from oasis_tensors.kernel import matrix_ops
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.matrix_ops import Matrix
from oasis_tensors.kernel.vector_ops import Vector
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.tags import TagT0
from oasis_tensors.tags import TagT1
from oasis_tensors.tags import TagT2
from oasis_tensors.types.readable import MatrixReadable
from oasis_tensors.types.readable import VectorReadable
from oasis_tensors.types.vectors import PVectorI
from oasis_tensors.types.vectors import PVectorM
from oasis_tensors.types.vectors import VectorI
from oasis_tensors.types.vectors import VectorM
from oasis_tensors.types.vectors import check_same_domain


_MQ = TypeVar("_MQ", bound="_MatrixQueries")
_MI = TypeVar("_MI", bound="_MatrixIBase")
_MM = TypeVar("_MM", bound="_MatrixMBase")

VectorLike = Union[VectorReadable, Sequence[Scalar]]


def _size_of(length: int) -> int:
    n: int = math.isqrt(length)
    if n * n != length or n not in matrix_ops.SIZES:
        raise DimensionError(f"matrix must have 4, 9 or 16 elements, got {length}")
    return n


def _vector_components(v: VectorLike) -> Vector:
    if isinstance(v, VectorReadable):
        return v.as_tuple()
    return tuple(v)


def _view_vectors(
    domain: ScalarDomain, origin: VectorLike, target: VectorLike, up: VectorLike
) -> tuple[Vector, Vector, Vector]:
    return (
        vector_ops.coerce(domain, _vector_components(origin)),
        vector_ops.coerce(domain, _vector_components(target)),
        vector_ops.coerce(domain, _vector_components(up)),
    )


def _write_into(
    domain: ScalarDomain, components: Vector, out: Union[VectorM, PVectorM[Any]]
) -> None:
    check_same_domain(domain, out.domain)
    if out.dimension != len(components):
        raise DimensionError(
            f"expected a {len(components)}-component vector, got {out.dimension}"
        )
    for index, value in enumerate(components):
        out.set_unsafe(index, value)


class _MatrixQueries:
    """Read-only operations shared by all matrix types."""

    __slots__ = ()

    @property
    def domain(self) -> ScalarDomain:
        raise NotImplementedError

    def as_tuple(self) -> Matrix:
        """Return the elements in column-major order."""
        raise NotImplementedError

    @property
    def size(self) -> int:
        return _size_of(len(self.as_tuple()))

    def get(self, row: int, column: int) -> Scalar:
        """Return the element at (row, column).

        Raises:
            IndexError: If the row or column is out of range
        """
        return matrix_ops.get(self.as_tuple(), self.size, row, column)

    def get_unsafe(self, row: int, column: int) -> Scalar:
        """Return the element at (row, column) without bounds checking."""
        n: int = self.size
        return self.as_tuple()[matrix_ops.index_unsafe(n, row, column)]

    def row(self, r: int) -> VectorI:
        return VectorI(matrix_ops.row(self.as_tuple(), self.size, r), self.domain)

    def column(self, c: int) -> VectorI:
        return VectorI(matrix_ops.column(self.as_tuple(), self.size, c), self.domain)

    def row_into(self, r: int, out: VectorM) -> VectorM:
        """Write row ``r`` into a caller-supplied vector and return it."""
        _write_into(self.domain, matrix_ops.row(self.as_tuple(), self.size, r), out)
        return out

    def column_into(self, c: int, out: VectorM) -> VectorM:
        """Write column ``c`` into a caller-supplied vector and return it."""
        components: Vector = matrix_ops.column(self.as_tuple(), self.size, c)
        _write_into(self.domain, components, out)
        return out

    def as_rows(self) -> tuple[Vector, ...]:
        return matrix_ops.to_rows(self.as_tuple(), self.size)

    def as_array(self) -> NDArray[np.generic]:
        """Return a numpy (row, column) copy using the domain's dtype."""
        return np.array(self.as_rows(), dtype=self.domain.dtype)

    def determinant(self) -> Scalar:
        return matrix_ops.determinant(self.domain, self.as_tuple(), self.size)

    def trace(self) -> Scalar:
        return matrix_ops.trace(self.domain, self.as_tuple(), self.size)

    def almost_equal(
        self: _MQ, other: _MQ, context: AlmostEqualContext | None = None
    ) -> bool:
        check_same_domain(self.domain, other.domain)
        self._check_size(other)
        return matrix_ops.almost_equal(
            self.domain, context, self.as_tuple(), other.as_tuple(), self.size
        )

    def approximately_equal(self: _MQ, other: _MQ) -> bool:
        check_same_domain(self.domain, other.domain)
        self._check_size(other)
        return matrix_ops.approximately_equal(
            self.domain, self.as_tuple(), other.as_tuple(), self.size
        )

    def _check_size(self, other: _MatrixQueries) -> None:
        if other.size != self.size:
            raise DimensionError(
                f"matrix sizes differ: {self.size}x{self.size} and "
                f"{other.size}x{other.size}"
            )

    def _product(self, other: _MatrixQueries) -> Matrix:
        check_same_domain(self.domain, other.domain)
        self._check_size(other)
        return matrix_ops.multiply(
            self.domain, self.as_tuple(), other.as_tuple(), self.size
        )

    def _product_vector(self, v: VectorReadable) -> Vector:
        check_same_domain(self.domain, getattr(v, "domain", self.domain))
        return matrix_ops.multiply_vector(
            self.domain, self.as_tuple(), self.size, v.as_tuple()
        )

    def _inverse(self, context: AlmostEqualContext | None) -> Matrix | None:
        return matrix_ops.invert(self.domain, self.as_tuple(), self.size, context)

    def _inverse_or_raise(self, context: AlmostEqualContext | None) -> Matrix:
        inverse: Matrix | None = self._inverse(context)
        if inverse is None:
            raise SingularMatrixError(f"{self.size}x{self.size} matrix is singular")
        return inverse

    def _translated(self, v: VectorLike) -> Matrix:
        components: Vector = vector_ops.coerce(self.domain, _vector_components(v))
        return matrix_ops.translate_by_vector(
            self.domain, self.as_tuple(), self.size, components
        )


@dataclass(frozen=True, slots=True)
class _MatrixIBase(_MatrixQueries):
    components: Matrix
    domain: ScalarDomain = FLOAT64

    def __post_init__(self) -> None:
        """Validate the size and coerce elements into the domain."""
        _size_of(len(self.components))
        object.__setattr__(
            self,
            "components",
            tuple(self.domain.coerce(value) for value in self.components),
        )

    @classmethod
    def identity(cls: type[_MI], size: int, domain: ScalarDomain = FLOAT64) -> _MI:
        return cls(matrix_ops.identity(domain, size), domain)

    @classmethod
    def zero(cls: type[_MI], size: int, domain: ScalarDomain = FLOAT64) -> _MI:
        return cls(matrix_ops.zero(domain, size), domain)

    @classmethod
    def of_rows(
        cls: type[_MI],
        rows: Sequence[Sequence[Scalar]],
        domain: ScalarDomain = FLOAT64,
    ) -> _MI:
        """Construct a matrix from its rows."""
        return cls(matrix_ops.of_rows(domain, rows), domain)

    @classmethod
    def of_columns(
        cls: type[_MI],
        columns: Sequence[Sequence[Scalar]],
        domain: ScalarDomain = FLOAT64,
    ) -> _MI:
        """Construct a matrix from its columns."""
        return cls(matrix_ops.of_columns(domain, columns), domain)

    @classmethod
    def copy_of(
        cls: type[_MI], other: MatrixReadable, domain: ScalarDomain | None = None
    ) -> _MI:
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return cls(other.as_tuple(), target)

    @classmethod
    def make_rotation(
        cls: type[_MI],
        size: int,
        angle: float,
        axis: VectorLike,
        domain: ScalarDomain = FLOAT64,
    ) -> _MI:
        """Return a right-handed rotation of ``angle`` radians about ``axis``."""
        return cls(
            matrix_ops.make_rotation(domain, size, angle, _vector_components(axis)),
            domain,
        )

    @classmethod
    def make_translation(
        cls: type[_MI], v: VectorLike, domain: ScalarDomain = FLOAT64
    ) -> _MI:
        """Return a 3x3 (2D) or 4x4 (3D) homogeneous translation."""
        components: Vector = vector_ops.coerce(domain, _vector_components(v))
        return cls(matrix_ops.make_translation(domain, components), domain)

    @classmethod
    def look_at(
        cls: type[_MI],
        origin: VectorLike,
        target: VectorLike,
        up: VectorLike,
        domain: ScalarDomain = FLOAT64,
    ) -> _MI:
        """Return a 4x4 view matrix looking from ``origin`` towards ``target``."""
        return cls(
            matrix_ops.look_at(domain, *_view_vectors(domain, origin, target, up)),
            domain,
        )

    @classmethod
    def look_at_3x3(
        cls: type[_MI],
        origin: VectorLike,
        target: VectorLike,
        up: VectorLike,
        domain: ScalarDomain = FLOAT64,
    ) -> tuple[_MI, VectorI]:
        """Return the 3x3 view rotation and the translation ``-origin``."""
        rotation, translation = matrix_ops.look_at_3x3(
            domain, *_view_vectors(domain, origin, target, up)
        )
        return cls(rotation, domain), VectorI(translation, domain)

    def as_tuple(self) -> Matrix:
        return self.components

    def _make(self: _MI, components: Matrix) -> _MI:
        return type(self)(components, self.domain)

    def with_element(self: _MI, row: int, column: int, value: Scalar) -> _MI:
        return self._make(
            matrix_ops.with_element(self.components, self.size, row, column, value)
        )

    def with_row(self: _MI, r: int, v: VectorLike) -> _MI:
        return self._make(
            matrix_ops.with_row(self.components, self.size, r, _vector_components(v))
        )

    def with_column(self: _MI, c: int, v: VectorLike) -> _MI:
        return self._make(
            matrix_ops.with_column(
                self.components, self.size, c, _vector_components(v)
            )
        )

    def add(self: _MI, other: _MI) -> _MI:
        check_same_domain(self.domain, other.domain)
        self._check_size(other)
        return self._make(
            matrix_ops.add(self.domain, self.components, other.components, self.size)
        )

    def subtract(self: _MI, other: _MI) -> _MI:
        check_same_domain(self.domain, other.domain)
        self._check_size(other)
        return self._make(
            matrix_ops.subtract(
                self.domain, self.components, other.components, self.size
            )
        )

    def scale(self: _MI, r: float) -> _MI:
        return self._make(
            matrix_ops.scale(self.domain, self.components, self.size, r)
        )

    def exchange_rows(self: _MI, row_a: int, row_b: int) -> _MI:
        return self._make(
            matrix_ops.exchange_rows(self.components, self.size, row_a, row_b)
        )

    def scale_row(self: _MI, r: int, factor: float) -> _MI:
        return self._make(
            matrix_ops.scale_row(self.domain, self.components, self.size, r, factor)
        )

    def add_row_scaled(
        self: _MI, row_a: int, row_b: int, row_c: int, factor: float
    ) -> _MI:
        """Return a copy where ``row_c = row_a + row_b * factor``."""
        return self._make(
            matrix_ops.add_row_scaled(
                self.domain, self.components, self.size, row_a, row_b, row_c, factor
            )
        )

    def __add__(self: _MI, other: _MI) -> _MI:
        return self.add(other)

    def __sub__(self: _MI, other: _MI) -> _MI:
        return self.subtract(other)

    def __mul__(self: _MI, r: float) -> _MI:
        return self.scale(r)

    def __rmul__(self: _MI, r: float) -> _MI:
        return self.scale(r)


@dataclass(frozen=True, slots=True)
class MatrixI(_MatrixIBase):
    """Immutable untagged square matrix."""

    def multiply(self, other: MatrixI) -> MatrixI:
        """Return ``self other``; ``other`` acts first on a column vector."""
        return MatrixI(self._product(other), self.domain)

    def multiply_vector(self, v: VectorI) -> VectorI:
        return VectorI(self._product_vector(v), self.domain)

    def transpose(self) -> MatrixI:
        return MatrixI(matrix_ops.transpose(self.components, self.size), self.domain)

    def invert(self, context: AlmostEqualContext | None = None) -> MatrixI | None:
        """Return the inverse, or None if the matrix is singular."""
        inverse: Matrix | None = self._inverse(context)
        if inverse is None:
            return None
        return MatrixI(inverse, self.domain)

    def invert_or_raise(self, context: AlmostEqualContext | None = None) -> MatrixI:
        """Return the inverse or raise SingularMatrixError."""
        return MatrixI(self._inverse_or_raise(context), self.domain)

    def translate_by_vector(self, v: VectorLike) -> MatrixI:
        """Return ``self`` multiplied on the right by the translation of ``v``."""
        return MatrixI(self._translated(v), self.domain)

    def to_mutable(self) -> MatrixM:
        return MatrixM(self.components, self.domain)

    def __matmul__(self, other: MatrixI) -> MatrixI:
        return self.multiply(other)


@dataclass(frozen=True, slots=True)
class PMatrixI(_MatrixIBase, Generic[TagT0, TagT1]):
    """Immutable matrix mapping vectors in ``TagT0`` to ``TagT1``."""

    @classmethod
    def of_untagged(cls, m: MatrixI) -> PMatrixI[TagT0, TagT1]:
        return cls(m.components, m.domain)

    def untagged(self) -> MatrixI:
        return MatrixI(self.components, self.domain)

    def multiply(self, other: PMatrixI[TagT2, TagT0]) -> PMatrixI[TagT2, TagT1]:
        """Compose two transforms; ``other`` is applied first."""
        return PMatrixI(self._product(other), self.domain)

    def multiply_vector(self, v: PVectorI[TagT0]) -> PVectorI[TagT1]:
        """Map a vector from the source space to the destination space."""
        return PVectorI(self._product_vector(v), self.domain)

    def transpose(self) -> PMatrixI[TagT1, TagT0]:
        return PMatrixI(matrix_ops.transpose(self.components, self.size), self.domain)

    def invert(
        self, context: AlmostEqualContext | None = None
    ) -> PMatrixI[TagT1, TagT0] | None:
        """Return the inverse transform, or None if the matrix is singular."""
        inverse: Matrix | None = self._inverse(context)
        if inverse is None:
            return None
        return PMatrixI(inverse, self.domain)

    def invert_or_raise(
        self, context: AlmostEqualContext | None = None
    ) -> PMatrixI[TagT1, TagT0]:
        return PMatrixI(self._inverse_or_raise(context), self.domain)

    def translate_by_vector(self, v: PVectorI[TagT0]) -> PMatrixI[TagT0, TagT1]:
        """Return ``self`` after a translation by ``v`` in the source space."""
        return PMatrixI(self._translated(v), self.domain)

    def to_mutable(self) -> PMatrixM[TagT0, TagT1]:
        return PMatrixM(self.components, self.domain)

    def __matmul__(self, other: PMatrixI[TagT2, TagT0]) -> PMatrixI[TagT2, TagT1]:
        return self.multiply(other)


class _MatrixMBase(_MatrixQueries):
    __slots__ = ("_data", "_domain", "_size")

    def __init__(
        self, components: Sequence[Scalar], domain: ScalarDomain = FLOAT64
    ) -> None:
        self._size: int = _size_of(len(components))
        self._domain: ScalarDomain = domain
        self._data: list[Scalar] = [domain.coerce(value) for value in components]

    @classmethod
    def identity(cls: type[_MM], size: int, domain: ScalarDomain = FLOAT64) -> _MM:
        return cls(matrix_ops.identity(domain, size), domain)

    @classmethod
    def zero(cls: type[_MM], size: int, domain: ScalarDomain = FLOAT64) -> _MM:
        return cls(matrix_ops.zero(domain, size), domain)

    @classmethod
    def of_rows(
        cls: type[_MM],
        rows: Sequence[Sequence[Scalar]],
        domain: ScalarDomain = FLOAT64,
    ) -> _MM:
        return cls(matrix_ops.of_rows(domain, rows), domain)

    @classmethod
    def of_columns(
        cls: type[_MM],
        columns: Sequence[Sequence[Scalar]],
        domain: ScalarDomain = FLOAT64,
    ) -> _MM:
        return cls(matrix_ops.of_columns(domain, columns), domain)

    @classmethod
    def copy_of(
        cls: type[_MM], other: MatrixReadable, domain: ScalarDomain | None = None
    ) -> _MM:
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return cls(other.as_tuple(), target)

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    @property
    def size(self) -> int:
        return self._size

    def as_tuple(self) -> Matrix:
        return tuple(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _MatrixMBase) or type(other) is not type(self):
            return NotImplemented
        return self._domain == other._domain and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(components={tuple(self._data)!r}, "
            f"domain={self._domain!r})"
        )

    def _write(self: _MM, components: Matrix) -> _MM:
        self._data[:] = components
        return self

    def set(self: _MM, row: int, column: int, value: Scalar) -> _MM:
        """Set the element at (row, column).

        Raises:
            IndexError: If the row or column is out of range
        """
        coerced: Scalar = self._domain.coerce(value)
        return self._write(
            matrix_ops.with_element(self.as_tuple(), self._size, row, column, coerced)
        )

    def set_unsafe(self, row: int, column: int, value: Scalar) -> None:
        """Set an element without bounds or domain checking."""
        self._data[matrix_ops.index_unsafe(self._size, row, column)] = value

    def set_row(self: _MM, r: int, v: VectorLike) -> _MM:
        components: Vector = vector_ops.coerce(self._domain, _vector_components(v))
        return self._write(
            matrix_ops.with_row(self.as_tuple(), self._size, r, components)
        )

    def set_column(self: _MM, c: int, v: VectorLike) -> _MM:
        components: Vector = vector_ops.coerce(self._domain, _vector_components(v))
        return self._write(
            matrix_ops.with_column(self.as_tuple(), self._size, c, components)
        )

    def set_from(self: _MM, other: MatrixReadable) -> _MM:
        """Copy every element of a readable matrix of the same size."""
        if other.size != self._size:
            raise DimensionError(
                f"expected a {self._size}x{self._size} matrix, got "
                f"{other.size}x{other.size}"
            )
        return self._write(
            tuple(self._domain.coerce(value) for value in other.as_tuple())
        )

    def set_identity(self: _MM) -> _MM:
        return self._write(matrix_ops.identity(self._domain, self._size))

    def set_look_at_3x3(
        self: _MM,
        origin: VectorLike,
        target: VectorLike,
        up: VectorLike,
        translation_out: VectorM,
    ) -> _MM:
        """Set this 3x3 matrix to a view rotation, writing ``-origin`` out.

        Raises:
            DimensionError: If this matrix is not 3x3 or ``translation_out``
                is not a 3-vector; nothing is written
        """
        if self._size != 3:
            raise DimensionError(
                f"expected a 3x3 matrix, got {self._size}x{self._size}"
            )
        rotation, translation = matrix_ops.look_at_3x3(
            self._domain, *_view_vectors(self._domain, origin, target, up)
        )
        _write_into(self._domain, translation, translation_out)
        return self._write(rotation)

    def add_in_place(self: _MM, other: _MM) -> _MM:
        check_same_domain(self._domain, other._domain)
        self._check_size(other)
        return self._write(
            matrix_ops.add(self._domain, self.as_tuple(), other.as_tuple(), self._size)
        )

    def subtract_in_place(self: _MM, other: _MM) -> _MM:
        check_same_domain(self._domain, other._domain)
        self._check_size(other)
        return self._write(
            matrix_ops.subtract(
                self._domain, self.as_tuple(), other.as_tuple(), self._size
            )
        )

    def scale_in_place(self: _MM, r: float) -> _MM:
        return self._write(
            matrix_ops.scale(self._domain, self.as_tuple(), self._size, r)
        )

    def exchange_rows_in_place(self: _MM, row_a: int, row_b: int) -> _MM:
        return self._write(
            matrix_ops.exchange_rows(self.as_tuple(), self._size, row_a, row_b)
        )

    def scale_row_in_place(self: _MM, r: int, factor: float) -> _MM:
        return self._write(
            matrix_ops.scale_row(self._domain, self.as_tuple(), self._size, r, factor)
        )

    def add_row_scaled_in_place(
        self: _MM, row_a: int, row_b: int, row_c: int, factor: float
    ) -> _MM:
        """Set ``row_c = row_a + row_b * factor``."""
        return self._write(
            matrix_ops.add_row_scaled(
                self._domain,
                self.as_tuple(),
                self._size,
                row_a,
                row_b,
                row_c,
                factor,
            )
        )

    def __iadd__(self: _MM, other: _MM) -> _MM:
        return self.add_in_place(other)

    def __isub__(self: _MM, other: _MM) -> _MM:
        return self.subtract_in_place(other)

    def __imul__(self: _MM, r: float) -> _MM:
        return self.scale_in_place(r)


class MatrixM(_MatrixMBase):
    """Mutable untagged square matrix."""

    __slots__ = ()

    def multiply(self, other: MatrixM) -> MatrixM:
        """Return a new product ``self other``."""
        return MatrixM(self._product(other), self._domain)

    def multiply_in_place(self, other: MatrixM) -> MatrixM:
        """Replace ``self`` with ``self other``."""
        return self._write(self._product(other))

    def multiply_vector_into(self, v: VectorReadable, out: VectorM) -> VectorM:
        """Write ``M v`` into ``out`` and return it."""
        _write_into(self._domain, self._product_vector(v), out)
        return out

    def transpose_in_place(self) -> MatrixM:
        return self._write(matrix_ops.transpose(self.as_tuple(), self._size))

    def invert(self, context: AlmostEqualContext | None = None) -> MatrixM | None:
        """Return a new inverse, or None if the matrix is singular."""
        inverse: Matrix | None = self._inverse(context)
        if inverse is None:
            return None
        return MatrixM(inverse, self._domain)

    def invert_in_place(self, context: AlmostEqualContext | None = None) -> MatrixM:
        """Replace ``self`` with its inverse.

        Raises:
            SingularMatrixError: If the matrix is singular; ``self`` is
                left unchanged
        """
        return self._write(self._inverse_or_raise(context))

    def translate_by_vector_in_place(self, v: VectorLike) -> MatrixM:
        return self._write(self._translated(v))

    def to_immutable(self) -> MatrixI:
        return MatrixI(self.as_tuple(), self._domain)


class PMatrixM(_MatrixMBase, Generic[TagT0, TagT1]):
    """Mutable matrix mapping vectors in ``TagT0`` to ``TagT1``."""

    __slots__ = ()

    @classmethod
    def of_untagged(cls, m: MatrixM) -> PMatrixM[TagT0, TagT1]:
        return cls(m.as_tuple(), m.domain)

    def untagged(self) -> MatrixM:
        return MatrixM(self.as_tuple(), self._domain)

    def multiply(self, other: PMatrixM[TagT2, TagT0]) -> PMatrixM[TagT2, TagT1]:
        """Return a new composition; ``other`` is applied first."""
        return PMatrixM(self._product(other), self._domain)

    def multiply_vector_into(
        self, v: PVectorM[TagT0], out: PVectorM[TagT1]
    ) -> PVectorM[TagT1]:
        """Map ``v`` into the destination space, writing into ``out``."""
        _write_into(self._domain, self._product_vector(v), out)
        return out

    def transpose(self) -> PMatrixM[TagT1, TagT0]:
        transposed: Matrix = matrix_ops.transpose(self.as_tuple(), self._size)
        return PMatrixM(transposed, self._domain)

    def invert(
        self, context: AlmostEqualContext | None = None
    ) -> PMatrixM[TagT1, TagT0] | None:
        inverse: Matrix | None = self._inverse(context)
        if inverse is None:
            return None
        return PMatrixM(inverse, self._domain)

    def invert_or_raise(
        self, context: AlmostEqualContext | None = None
    ) -> PMatrixM[TagT1, TagT0]:
        return PMatrixM(self._inverse_or_raise(context), self._domain)

    def translate_by_vector_in_place(
        self, v: PVectorM[TagT0]
    ) -> PMatrixM[TagT0, TagT1]:
        return self._write(self._translated(v))

    def to_immutable(self) -> PMatrixI[TagT0, TagT1]:
        return PMatrixI(self.as_tuple(), self._domain)
