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
Square-matrix algebra over flat component tuples

Matrices are square with size ``n`` in {2, 3, 4} and are represented as flat
tuples in column-major order. Element (r, c) is stored at
``data[c * n + r]``, which matches the layout expected by OpenGL. Logical
indexing is always (row, column) regardless of the storage order.

Vectors are treated as columns: ``multiply_vector(m, v)`` computes ``M v``,
and ``multiply(a, b)`` applied to a vector is ``a (b v)``, so ``b`` acts
first.

All arithmetic goes through the scalar domain. Inversion and the rotation
builders are only defined over floating domains.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from oasis_tensors.errors import DimensionError
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.vector_ops import Vector
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.numeric.scalar_domain import require_floating


Matrix = tuple[Scalar, ...]

# Matrix sizes supported by the kernel
SIZES: tuple[int, ...] = (2, 3, 4)

_LOG: logging.Logger = logging.getLogger(__name__)


def validate_size(n: int) -> None:
    """Raise DimensionError unless ``n`` is a supported matrix size."""
    if n not in SIZES:
        raise DimensionError(f"matrix size must be 2, 3 or 4, got {n}")


def _validate_matrix(m: Sequence[Scalar], n: int, name: str = "m") -> None:
    validate_size(n)
    if len(m) != n * n:
        raise DimensionError(f"{name} must have length {n * n} for {n}x{n}")


def _validate_index(n: int, index: int, name: str) -> None:
    if index < 0 or index >= n:
        raise IndexError(f"{name} index {index} out of range for {n}x{n}")


def index_unsafe(n: int, row: int, column: int) -> int:
    """Return the storage index of (row, column) without bounds checking."""
    return column * n + row


def get(m: Matrix, n: int, row: int, column: int) -> Scalar:
    """Return the element at (row, column).

    Raises:
        IndexError: If the row or column is out of range
    """
    _validate_matrix(m, n)
    _validate_index(n, row, "row")
    _validate_index(n, column, "column")
    return m[column * n + row]


def with_element(m: Matrix, n: int, row: int, column: int, value: Scalar) -> Matrix:
    """Return a copy of ``m`` with the element at (row, column) replaced."""
    _validate_matrix(m, n)
    _validate_index(n, row, "row")
    _validate_index(n, column, "column")
    data: list[Scalar] = list(m)
    data[column * n + row] = value
    return tuple(data)


def row(m: Matrix, n: int, r: int) -> Vector:
    """Return row ``r`` as a vector."""
    _validate_matrix(m, n)
    _validate_index(n, r, "row")
    return tuple(m[c * n + r] for c in range(n))


def column(m: Matrix, n: int, c: int) -> Vector:
    """Return column ``c`` as a vector."""
    _validate_matrix(m, n)
    _validate_index(n, c, "column")
    return tuple(m[c * n : (c + 1) * n])


def with_row(m: Matrix, n: int, r: int, v: Vector) -> Matrix:
    """Return a copy of ``m`` with row ``r`` replaced by ``v``."""
    _validate_matrix(m, n)
    _validate_index(n, r, "row")
    if len(v) != n:
        raise DimensionError(f"row must have {n} components")
    data: list[Scalar] = list(m)
    for c in range(n):
        data[c * n + r] = v[c]
    return tuple(data)


def with_column(m: Matrix, n: int, c: int, v: Vector) -> Matrix:
    """Return a copy of ``m`` with column ``c`` replaced by ``v``."""
    _validate_matrix(m, n)
    _validate_index(n, c, "column")
    if len(v) != n:
        raise DimensionError(f"column must have {n} components")
    data: list[Scalar] = list(m)
    data[c * n : (c + 1) * n] = v
    return tuple(data)


def zero(domain: ScalarDomain, n: int) -> Matrix:
    validate_size(n)
    return (domain.zero(),) * (n * n)


def identity(domain: ScalarDomain, n: int) -> Matrix:
    validate_size(n)
    return tuple(
        domain.one() if r == c else domain.zero() for c in range(n) for r in range(n)
    )


def of_rows(domain: ScalarDomain, rows: Sequence[Sequence[Scalar]]) -> Matrix:
    """Build a matrix from a sequence of rows.

    Raises:
        DimensionError: If the rows do not form a supported square matrix
        ValueError: If a value is not representable in the domain
    """
    n: int = len(rows)
    validate_size(n)
    for values in rows:
        if len(values) != n:
            raise DimensionError(f"each row must have {n} components")
    return tuple(domain.coerce(rows[r][c]) for c in range(n) for r in range(n))


def of_columns(domain: ScalarDomain, columns: Sequence[Sequence[Scalar]]) -> Matrix:
    """Build a matrix from a sequence of columns."""
    n: int = len(columns)
    validate_size(n)
    for values in columns:
        if len(values) != n:
            raise DimensionError(f"each column must have {n} components")
    return tuple(domain.coerce(value) for values in columns for value in values)


def to_rows(m: Matrix, n: int) -> tuple[Vector, ...]:
    """Return the rows of ``m`` as a tuple of vectors."""
    return tuple(row(m, n, r) for r in range(n))


def add(domain: ScalarDomain, m0: Matrix, m1: Matrix, n: int) -> Matrix:
    _validate_matrix(m0, n, "m0")
    _validate_matrix(m1, n, "m1")
    return tuple(domain.add(a, b) for a, b in zip(m0, m1))


def subtract(domain: ScalarDomain, m0: Matrix, m1: Matrix, n: int) -> Matrix:
    _validate_matrix(m0, n, "m0")
    _validate_matrix(m1, n, "m1")
    return tuple(domain.subtract(a, b) for a, b in zip(m0, m1))


def scale(domain: ScalarDomain, m: Matrix, n: int, r: float) -> Matrix:
    _validate_matrix(m, n)
    return tuple(domain.scale(a, r) for a in m)


def transpose(m: Matrix, n: int) -> Matrix:
    _validate_matrix(m, n)
    return tuple(m[r * n + c] for c in range(n) for r in range(n))


def trace(domain: ScalarDomain, m: Matrix, n: int) -> Scalar:
    """Return the sum of the diagonal elements."""
    _validate_matrix(m, n)
    total: Scalar = domain.zero()
    for i in range(n):
        total = domain.add(total, m[i * n + i])
    return total


def multiply(domain: ScalarDomain, m0: Matrix, m1: Matrix, n: int) -> Matrix:
    """Multiply two matrices.

    Each element is ``sum_k m0[r][k] * m1[k][c]`` accumulated in ascending
    ``k``.

    Args:
        domain: Scalar domain of both matrices
        m0: Left matrix, applied second to a column vector
        m1: Right matrix, applied first to a column vector
        n: Matrix size

    Returns:
        The product ``m0 m1``

    Raises:
        DimensionError: If a matrix does not have size ``n``
    """
    _validate_matrix(m0, n, "m0")
    _validate_matrix(m1, n, "m1")
    out: list[Scalar] = [domain.zero()] * (n * n)
    for c in range(n):
        column_base: int = c * n
        for r in range(n):
            total: Scalar = domain.zero()
            for k in range(n):
                total = domain.add(
                    total, domain.multiply(m0[k * n + r], m1[column_base + k])
                )
            out[column_base + r] = total
    return tuple(out)


def multiply_vector(domain: ScalarDomain, m: Matrix, n: int, v: Vector) -> Vector:
    """Return the column-vector product ``M v``."""
    _validate_matrix(m, n)
    if len(v) != n:
        raise DimensionError(f"vector must have {n} components")
    out: list[Scalar] = []
    for r in range(n):
        total: Scalar = domain.zero()
        for k in range(n):
            total = domain.add(total, domain.multiply(m[k * n + r], v[k]))
        out.append(total)
    return tuple(out)


def exchange_rows(m: Matrix, n: int, row_a: int, row_b: int) -> Matrix:
    """Return a copy of ``m`` with two rows swapped."""
    first: Vector = row(m, n, row_a)
    second: Vector = row(m, n, row_b)
    return with_row(with_row(m, n, row_a, second), n, row_b, first)


def scale_row(domain: ScalarDomain, m: Matrix, n: int, r: int, factor: float) -> Matrix:
    """Return a copy of ``m`` with row ``r`` multiplied by ``factor``."""
    return with_row(m, n, r, vector_ops.scale(domain, row(m, n, r), factor))


def add_row_scaled(
    domain: ScalarDomain,
    m: Matrix,
    n: int,
    row_a: int,
    row_b: int,
    row_c: int,
    factor: float,
) -> Matrix:
    """Return a copy of ``m`` where ``row_c = row_a + row_b * factor``."""
    combined: Vector = vector_ops.add_scaled(
        domain, row(m, n, row_a), row(m, n, row_b), factor
    )
    return with_row(m, n, row_c, combined)


def determinant(domain: ScalarDomain, m: Matrix, n: int) -> Scalar:
    """Return the determinant of ``m``.

    Uses the closed form for 2x2 and cofactor expansion along the first row
    otherwise. Integer domains raise ArithmeticOverflowError if any
    intermediate product leaves the range.
    """
    _validate_matrix(m, n)
    return _determinant_rows(domain, [list(row(m, n, r)) for r in range(n)])


def _determinant_rows(domain: ScalarDomain, rows: list[list[Scalar]]) -> Scalar:
    size: int = len(rows)
    if size == 2:
        return domain.subtract(
            domain.multiply(rows[0][0], rows[1][1]),
            domain.multiply(rows[0][1], rows[1][0]),
        )
    total: Scalar = domain.zero()
    for c in range(size):
        minor: list[list[Scalar]] = [
            values[:c] + values[c + 1 :] for values in rows[1:]
        ]
        term: Scalar = domain.multiply(rows[0][c], _determinant_rows(domain, minor))
        if c % 2 == 0:
            total = domain.add(total, term)
        else:
            total = domain.subtract(total, term)
    return total


def invert(
    domain: ScalarDomain,
    m: Matrix,
    n: int,
    context: AlmostEqualContext | None = None,
) -> Matrix | None:
    """Return the inverse of ``m``, or None if it is singular.

    The matrix is singular when its determinant is zero or, relative to the
    Hadamard bound (the product of the row lengths), within the relative
    tolerance of ``context``. ``context`` defaults to the context of the
    domain. Uniformly scaled matrices are therefore invertible at any
    scale that does not underflow the determinant. 2x2 and 3x3
    matrices use the closed-form adjugate, 4x4 matrices use Gauss-Jordan
    elimination with partial pivoting.

    Raises:
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "invert")
    det: Scalar = determinant(domain, m, n)
    if _is_singular(domain, m, n, det, context):
        _LOG.debug("Matrix %dx%d is singular, determinant %s", n, n, det)
        return None
    if n == 2:
        return _invert_2x2(domain, m, det)
    if n == 3:
        return _invert_3x3(domain, m, det)
    return _invert_gauss_jordan(domain, m, n)


def _is_singular(
    domain: ScalarDomain,
    m: Matrix,
    n: int,
    det: Scalar,
    context: AlmostEqualContext | None,
) -> bool:
    if det == 0.0:
        return True
    ctx: AlmostEqualContext = domain.default_context() if context is None else context
    # |det| never exceeds the product of the row lengths
    bound: float = math.prod(math.hypot(*row(m, n, r)) for r in range(n))
    return abs(det) <= bound * ctx.max_relative_difference


def _invert_2x2(domain: ScalarDomain, m: Matrix, det: Scalar) -> Matrix:
    factor: float = 1.0 / det
    # Column-major (a, c, b, d) for rows (a b; c d)
    a, c, b, d = m
    adjugate: Matrix = (d, domain.negate(c), domain.negate(b), a)
    return tuple(domain.scale(value, factor) for value in adjugate)


def _invert_3x3(domain: ScalarDomain, m: Matrix, det: Scalar) -> Matrix:
    factor: float = 1.0 / det
    rows: list[list[Scalar]] = [list(row(m, 3, r)) for r in range(3)]
    out: list[Scalar] = [domain.zero()] * 9
    for r in range(3):
        for c in range(3):
            minor: list[list[Scalar]] = [
                values[:c] + values[c + 1 :]
                for i, values in enumerate(rows)
                if i != r
            ]
            cofactor: Scalar = _determinant_rows(domain, minor)
            if (r + c) % 2 == 1:
                cofactor = domain.negate(cofactor)
            # The adjugate is the transposed cofactor matrix, so the cofactor
            # of (r, c) lands at (c, r)
            out[r * 3 + c] = domain.scale(cofactor, factor)
    return tuple(out)


def _invert_gauss_jordan(domain: ScalarDomain, m: Matrix, n: int) -> Matrix | None:
    work: Matrix = m
    inverse: Matrix = identity(domain, n)
    for col in range(n):
        pivot_row: int = max(
            range(col, n), key=lambda r: domain.absolute(work[col * n + r])
        )
        pivot: Scalar = work[col * n + pivot_row]
        if pivot == 0.0:
            _LOG.debug("Matrix %dx%d has a zero pivot in column %d", n, n, col)
            return None
        if pivot_row != col:
            work = exchange_rows(work, n, col, pivot_row)
            inverse = exchange_rows(inverse, n, col, pivot_row)

        reciprocal: float = 1.0 / pivot
        work = scale_row(domain, work, n, col, reciprocal)
        inverse = scale_row(domain, inverse, n, col, reciprocal)

        for r in range(n):
            if r == col:
                continue
            factor: Scalar = work[col * n + r]
            if factor == 0.0:
                continue
            work = add_row_scaled(domain, work, n, r, col, r, -factor)
            inverse = add_row_scaled(domain, inverse, n, r, col, r, -factor)
    return inverse


def make_rotation(domain: ScalarDomain, n: int, angle: float, axis: Vector) -> Matrix:
    """Return a rotation about a unit axis.

    The rotation is right-handed: a positive angle turns counter-clockwise
    when looking down the axis towards the origin. The 4x4 form has the
    homogeneous row and column (0, 0, 0, 1).

    Args:
        domain: Floating scalar domain of the result
        n: Matrix size, 3 or 4
        angle: Rotation angle in radians
        axis: Unit rotation axis (x, y, z)

    Raises:
        DimensionError: If ``n`` is not 3 or 4 or the axis is not a 3-vector
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "make_rotation")
    if n not in (3, 4):
        raise DimensionError("rotation matrices must be 3x3 or 4x4")
    if len(axis) != 3:
        raise DimensionError("rotation axis must have 3 components")

    x: float = float(axis[0])
    y: float = float(axis[1])
    z: float = float(axis[2])
    s: float = math.sin(angle)
    c: float = math.cos(angle)
    t: float = 1.0 - c

    rows: list[list[float]] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return embed_3x3(domain, n, rows)


def embed_3x3(
    domain: ScalarDomain, n: int, rows: Sequence[Sequence[Scalar]]
) -> Matrix:
    """Place a 3x3 block in the top left of an n x n identity."""
    full: list[list[Scalar]] = [
        [
            rows[r][c] if r < 3 and c < 3 else (1.0 if r == c else 0.0)
            for c in range(n)
        ]
        for r in range(n)
    ]
    return of_rows(domain, full)


def make_translation(domain: ScalarDomain, v: Vector) -> Matrix:
    """Return a homogeneous translation matrix.

    A 2-vector gives a 3x3 matrix and a 3-vector gives a 4x4 matrix.

    Raises:
        DimensionError: If ``v`` does not have 2 or 3 components
    """
    if len(v) not in (2, 3):
        raise DimensionError("translation vector must have 2 or 3 components")
    n: int = len(v) + 1
    return with_column(identity(domain, n), n, n - 1, tuple(v) + (domain.one(),))


def translate_by_vector(domain: ScalarDomain, m: Matrix, n: int, v: Vector) -> Matrix:
    """Return ``m`` multiplied on the right by the translation of ``v``."""
    if len(v) != n - 1:
        raise DimensionError(f"translation vector must have {n - 1} components")
    return multiply(domain, m, make_translation(domain, v), n)


def look_at_3x3(
    domain: ScalarDomain, origin: Vector, target: Vector, up: Vector
) -> tuple[Matrix, Vector]:
    """Return the rotation and translation of a view from ``origin``.

    The viewer at ``origin`` faces ``target`` down its negative z axis, with
    ``up`` projected onto the view plane as its positive y axis. The rotation
    rows are the side, up and backward directions of the view. The
    translation is ``-origin``, so a world point ``p`` maps into the view as
    ``rotation * (p + translation)``.

    Raises:
        DimensionError: If an argument is not a 3-vector
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "look_at")
    for name, v in (("origin", origin), ("target", target), ("up", up)):
        if len(v) != 3:
            raise DimensionError(f"{name} must have 3 components")

    forward: Vector = vector_ops.normalize(
        domain, vector_ops.subtract(domain, target, origin)
    )
    side: Vector = vector_ops.normalize(
        domain, vector_ops.cross_product(domain, forward, up)
    )
    new_up: Vector = vector_ops.cross_product(domain, side, forward)
    back: Vector = vector_ops.negate(domain, forward)
    rotation: Matrix = of_rows(domain, [side, new_up, back])
    return rotation, vector_ops.negate(domain, origin)


def look_at(domain: ScalarDomain, origin: Vector, target: Vector, up: Vector) -> Matrix:
    """Return a 4x4 view matrix for a viewer at ``origin`` facing ``target``.

    This is the rotation of :func:`look_at_3x3` composed with its
    translation in one homogeneous matrix.

    Raises:
        DimensionError: If an argument is not a 3-vector
        UnsupportedDomainError: If the domain is not floating point
    """
    rotation_3x3, offset = look_at_3x3(domain, origin, target, up)
    rotation: Matrix = embed_3x3(domain, 4, to_rows(rotation_3x3, 3))
    translation: Matrix = make_translation(domain, offset)
    return multiply(domain, rotation, translation, 4)


def almost_equal(
    domain: ScalarDomain,
    context: AlmostEqualContext | None,
    m0: Matrix,
    m1: Matrix,
    n: int,
) -> bool:
    """Return True if all elements are almost equal under ``context``."""
    _validate_matrix(m0, n, "m0")
    _validate_matrix(m1, n, "m1")
    return all(domain.almost_equal(context, a, b) for a, b in zip(m0, m1))


def approximately_equal(domain: ScalarDomain, m0: Matrix, m1: Matrix, n: int) -> bool:
    _validate_matrix(m0, n, "m0")
    _validate_matrix(m1, n, "m1")
    return all(domain.approximately_equal(a, b) for a, b in zip(m0, m1))
