################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the column-major matrix kernel."""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pytest

from oasis_tensors.errors import ArithmeticOverflowError
from oasis_tensors.errors import DimensionError
from oasis_tensors.errors import UnsupportedDomainError
from oasis_tensors.kernel import matrix_ops
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.matrix_ops import Matrix
from oasis_tensors.kernel.vector_ops import Vector
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import FLOAT32
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import INT32
from oasis_tensors.numeric.scalar_domain import INT64


NON_SINGULAR_3X3: list[list[float]] = [
    [2.0, 0.0, 1.0],
    [1.0, 3.0, 2.0],
    [1.0, 1.0, 2.0],
]

# Zero in the top-left corner forces a row exchange
NEEDS_PIVOT_4X4: list[list[float]] = [
    [0.0, 2.0, 1.0, 0.0],
    [1.0, 0.0, 0.0, 3.0],
    [2.0, 1.0, 0.0, 1.0],
    [0.0, 0.0, 4.0, 1.0],
]


def _assert_inverse(m: Matrix, n: int) -> None:
    inverse: Optional[Matrix] = matrix_ops.invert(FLOAT64, m, n)
    assert inverse is not None
    product: Matrix = matrix_ops.multiply(FLOAT64, m, inverse, n)
    assert np.allclose(product, matrix_ops.identity(FLOAT64, n), atol=1e-12)
    product = matrix_ops.multiply(FLOAT64, inverse, m, n)
    assert np.allclose(product, matrix_ops.identity(FLOAT64, n), atol=1e-12)


def test_storage_is_column_major() -> None:
    """Checks element (r, c) is stored at c * n + r."""
    m: Matrix = matrix_ops.of_rows(FLOAT64, [[1.0, 2.0], [3.0, 4.0]])
    assert m == (1.0, 3.0, 2.0, 4.0)
    assert matrix_ops.get(m, 2, 0, 1) == 2.0
    assert matrix_ops.index_unsafe(2, 0, 1) == 2
    assert matrix_ops.row(m, 2, 0) == (1.0, 2.0)
    assert matrix_ops.column(m, 2, 0) == (1.0, 3.0)
    assert matrix_ops.of_columns(FLOAT64, [[1.0, 3.0], [2.0, 4.0]]) == m
    assert matrix_ops.to_rows(m, 2) == ((1.0, 2.0), (3.0, 4.0))


def test_element_access_bounds() -> None:
    """Checks checked accessors raise IndexError."""
    m: Matrix = matrix_ops.identity(FLOAT64, 3)
    with pytest.raises(IndexError):
        matrix_ops.get(m, 3, 3, 0)
    with pytest.raises(IndexError):
        matrix_ops.with_element(m, 3, 0, -1, 1.0)
    with pytest.raises(DimensionError):
        matrix_ops.get(m, 4, 0, 0)


def test_with_row_and_column() -> None:
    """Checks replacing a row and a column."""
    m: Matrix = matrix_ops.zero(FLOAT64, 2)
    m = matrix_ops.with_row(m, 2, 1, (5.0, 6.0))
    m = matrix_ops.with_column(m, 2, 0, (1.0, 2.0))
    assert matrix_ops.to_rows(m, 2) == ((1.0, 0.0), (2.0, 6.0))
    m = matrix_ops.with_element(m, 2, 0, 1, 9.0)
    assert matrix_ops.get(m, 2, 0, 1) == 9.0


def test_multiply_known_product() -> None:
    """Checks the row-by-column product."""
    a: Matrix = matrix_ops.of_rows(INT32, [[1, 2], [3, 4]])
    b: Matrix = matrix_ops.of_rows(INT32, [[5, 6], [7, 8]])
    product: Matrix = matrix_ops.multiply(INT32, a, b, 2)
    assert matrix_ops.to_rows(product, 2) == ((19, 22), (43, 50))


def test_multiply_applies_right_operand_first() -> None:
    """Checks (A B) v equals A (B v) under the column-vector convention."""
    a: Matrix = matrix_ops.of_rows(
        INT64, [[1, 2, 0], [0, 1, 3], [4, 0, 1]]
    )
    b: Matrix = matrix_ops.of_rows(
        INT64, [[2, 0, 1], [1, 1, 0], [0, 5, 2]]
    )
    v: Vector = (1, -2, 3)
    lhs: Vector = matrix_ops.multiply_vector(
        INT64, matrix_ops.multiply(INT64, a, b, 3), 3, v
    )
    rhs: Vector = matrix_ops.multiply_vector(
        INT64, a, 3, matrix_ops.multiply_vector(INT64, b, 3, v)
    )
    assert lhs == rhs


def test_add_subtract_scale_transpose_trace() -> None:
    """Checks element-wise operations, transpose and trace."""
    m: Matrix = matrix_ops.of_rows(FLOAT64, [[1.0, 2.0], [3.0, 4.0]])
    assert matrix_ops.add(FLOAT64, m, m, 2) == matrix_ops.scale(FLOAT64, m, 2, 2.0)
    assert matrix_ops.subtract(FLOAT64, m, m, 2) == matrix_ops.zero(FLOAT64, 2)
    assert matrix_ops.to_rows(matrix_ops.transpose(m, 2), 2) == (
        (1.0, 3.0),
        (2.0, 4.0),
    )
    assert matrix_ops.trace(FLOAT64, m, 2) == 5.0


def test_elementary_row_operations() -> None:
    """Checks row exchange, row scaling and scaled row addition."""
    m: Matrix = matrix_ops.of_rows(
        FLOAT64, [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 10.0]]
    )
    exchanged: Matrix = matrix_ops.exchange_rows(m, 3, 0, 2)
    assert matrix_ops.row(exchanged, 3, 0) == (7.0, 8.0, 10.0)
    assert matrix_ops.row(exchanged, 3, 2) == (1.0, 2.0, 3.0)
    scaled: Matrix = matrix_ops.scale_row(FLOAT64, m, 3, 1, 2.0)
    assert matrix_ops.row(scaled, 3, 1) == (8.0, 10.0, 12.0)
    combined: Matrix = matrix_ops.add_row_scaled(FLOAT64, m, 3, 0, 1, 2, 2.0)
    assert matrix_ops.row(combined, 3, 2) == (9.0, 12.0, 15.0)
    assert matrix_ops.row(combined, 3, 0) == (1.0, 2.0, 3.0)


def test_determinant() -> None:
    """Checks determinants by closed form and cofactor expansion."""
    assert matrix_ops.determinant(
        FLOAT64, matrix_ops.of_rows(FLOAT64, [[4.0, 7.0], [2.0, 6.0]]), 2
    ) == 10.0
    assert matrix_ops.determinant(
        FLOAT64, matrix_ops.of_rows(FLOAT64, NON_SINGULAR_3X3), 3
    ) == 6.0
    assert matrix_ops.determinant(
        INT32, matrix_ops.of_rows(INT32, NEEDS_PIVOT_4X4), 4
    ) == -39
    diagonal: Matrix = matrix_ops.of_rows(
        INT32, [[1, 0, 0, 0], [0, 2, 0, 0], [0, 0, 3, 0], [0, 0, 0, 4]]
    )
    assert matrix_ops.determinant(INT32, diagonal, 4) == 24


def test_determinant_integer_overflow() -> None:
    """Checks checked arithmetic inside the determinant."""
    big: int = 2**20
    m: Matrix = matrix_ops.of_rows(INT32, [[big, 0], [0, big]])
    with pytest.raises(ArithmeticOverflowError):
        matrix_ops.determinant(INT32, m, 2)


def test_invert_2x2() -> None:
    """Checks the closed-form 2x2 inverse."""
    m: Matrix = matrix_ops.of_rows(FLOAT64, [[4.0, 7.0], [2.0, 6.0]])
    inverse: Optional[Matrix] = matrix_ops.invert(FLOAT64, m, 2)
    assert inverse is not None
    assert np.allclose(
        matrix_ops.to_rows(inverse, 2), [[0.6, -0.7], [-0.2, 0.4]]
    )


def test_invert_3x3_and_4x4() -> None:
    """Checks M times its inverse is the identity."""
    _assert_inverse(matrix_ops.of_rows(FLOAT64, NON_SINGULAR_3X3), 3)
    _assert_inverse(matrix_ops.of_rows(FLOAT64, NEEDS_PIVOT_4X4), 4)
    transform: Matrix = matrix_ops.translate_by_vector(
        FLOAT64,
        matrix_ops.make_rotation(FLOAT64, 4, 0.7, (0.0, 0.6, 0.8)),
        4,
        (1.0, -2.0, 3.0),
    )
    _assert_inverse(transform, 4)


def test_invert_float32() -> None:
    """Checks inversion in single precision."""
    m: Matrix = matrix_ops.of_rows(FLOAT32, NEEDS_PIVOT_4X4)
    inverse: Optional[Matrix] = matrix_ops.invert(FLOAT32, m, 4)
    assert inverse is not None
    product: Matrix = matrix_ops.multiply(FLOAT32, m, inverse, 4)
    assert np.allclose(product, matrix_ops.identity(FLOAT32, 4), atol=1e-5)


def test_invert_singular_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    """Checks singular matrices have no inverse."""
    with caplog.at_level(logging.DEBUG, logger="oasis_tensors.kernel.matrix_ops"):
        assert (
            matrix_ops.invert(
                FLOAT64, matrix_ops.of_rows(FLOAT64, [[1.0, 2.0], [2.0, 4.0]]), 2
            )
            is None
        )
    assert "singular" in caplog.text
    singular_3x3: Matrix = matrix_ops.of_rows(
        FLOAT64, [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]
    )
    assert matrix_ops.invert(FLOAT64, singular_3x3, 3) is None
    singular_4x4: Matrix = matrix_ops.with_row(
        matrix_ops.of_rows(FLOAT64, NEEDS_PIVOT_4X4),
        4,
        3,
        (0.0, 2.0, 1.0, 0.0),
    )
    assert matrix_ops.invert(FLOAT64, singular_4x4, 4) is None


@pytest.mark.parametrize("n", [2, 3, 4])
def test_invert_small_uniform_scale(n: int) -> None:
    """Checks a uniformly scaled identity inverts at any scale."""
    for domain, factor in ((FLOAT32, 0.03), (FLOAT64, 0.0009), (FLOAT64, 1e-5)):
        m: Matrix = matrix_ops.scale(domain, matrix_ops.identity(domain, n), n, factor)
        inverse: Optional[Matrix] = matrix_ops.invert(domain, m, n)
        assert inverse is not None
        product: Matrix = matrix_ops.multiply(domain, m, inverse, n)
        assert np.allclose(product, matrix_ops.identity(domain, n), atol=1e-5)


def test_invert_nearly_dependent_rows_is_singular() -> None:
    """Checks a determinant that is rounding noise next to the rows is singular."""
    m: Matrix = matrix_ops.of_rows(FLOAT64, [[1.0, 2.0], [2.0, 4.000000000001]])
    assert matrix_ops.determinant(FLOAT64, m, 2) != 0.0
    assert matrix_ops.invert(FLOAT64, m, 2) is None
    exact: AlmostEqualContext = AlmostEqualContext(
        max_absolute_difference=0.0, max_relative_difference=0.0
    )
    assert matrix_ops.invert(FLOAT64, m, 2, exact) is not None


def test_invert_rejects_integer_domain() -> None:
    """Checks inversion is floating only."""
    with pytest.raises(UnsupportedDomainError):
        matrix_ops.invert(INT32, matrix_ops.identity(INT32, 2), 2)


def test_make_rotation_is_counter_clockwise() -> None:
    """Checks positive rotations follow the right-hand rule."""
    rz: Matrix = matrix_ops.make_rotation(FLOAT64, 3, math.pi / 2.0, (0.0, 0.0, 1.0))
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, rz, 3, (1.0, 0.0, 0.0)), (0.0, 1.0, 0.0)
    )
    rx: Matrix = matrix_ops.make_rotation(FLOAT64, 4, math.pi / 2.0, (1.0, 0.0, 0.0))
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, rx, 4, (0.0, 1.0, 0.0, 1.0)),
        (0.0, 0.0, 1.0, 1.0),
    )
    with pytest.raises(DimensionError):
        matrix_ops.make_rotation(FLOAT64, 2, 1.0, (0.0, 0.0, 1.0))


def test_make_translation() -> None:
    """Checks homogeneous translations in 2D and 3D."""
    t3: Matrix = matrix_ops.make_translation(FLOAT64, (1.0, 2.0, 3.0))
    assert matrix_ops.multiply_vector(FLOAT64, t3, 4, (0.0, 0.0, 0.0, 1.0)) == (
        1.0,
        2.0,
        3.0,
        1.0,
    )
    t2: Matrix = matrix_ops.make_translation(INT32, (4, -5))
    assert matrix_ops.multiply_vector(INT32, t2, 3, (1, 1, 1)) == (5, -4, 1)
    assert matrix_ops.translate_by_vector(
        INT32, matrix_ops.identity(INT32, 3), 3, (4, -5)
    ) == t2


def test_look_at() -> None:
    """Checks the view matrix moves the target onto the negative z axis."""
    view: Matrix = matrix_ops.look_at(
        FLOAT64, (0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    )
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, view, 4, (0.0, 0.0, 5.0, 1.0)),
        (0.0, 0.0, 0.0, 1.0),
    )
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, view, 4, (0.0, 0.0, 0.0, 1.0)),
        (0.0, 0.0, -5.0, 1.0),
    )
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, view, 4, (0.0, 1.0, 5.0, 1.0)),
        (0.0, 1.0, 0.0, 1.0),
    )


def test_look_at_3x3_splits_rotation_and_translation() -> None:
    """Checks the 3x3 view rotation and its translation."""
    origin: Vector = (1.0, 2.0, 3.0)
    rotation, translation = matrix_ops.look_at_3x3(
        FLOAT64, origin, (2.0, 2.0, 3.0), (0.0, 1.0, 0.0)
    )
    assert np.allclose(
        matrix_ops.to_rows(rotation, 3),
        [[0.0, 0.0, 1.0], [0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]],
    )
    assert translation == (-1.0, -2.0, -3.0)
    target_in_view: Vector = matrix_ops.multiply_vector(
        FLOAT64,
        rotation,
        3,
        vector_ops.add(FLOAT64, (2.0, 2.0, 3.0), translation),
    )
    assert np.allclose(target_in_view, (0.0, 0.0, -1.0))
    view: Matrix = matrix_ops.look_at(
        FLOAT64, origin, (2.0, 2.0, 3.0), (0.0, 1.0, 0.0)
    )
    assert np.allclose(
        matrix_ops.multiply_vector(FLOAT64, view, 4, (2.0, 2.0, 3.0, 1.0)),
        (0.0, 0.0, -1.0, 1.0),
    )


def test_look_at_3x3_rejects_bad_input() -> None:
    """Checks the 3x3 view needs 3-vectors and a floating domain."""
    with pytest.raises(DimensionError):
        matrix_ops.look_at_3x3(FLOAT64, (0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    with pytest.raises(UnsupportedDomainError):
        matrix_ops.look_at_3x3(INT32, (0, 0, 0), (1, 0, 0), (0, 1, 0))


def test_almost_equal() -> None:
    """Checks matrix comparison."""
    m: Matrix = matrix_ops.identity(FLOAT64, 3)
    nudged: Matrix = matrix_ops.with_element(m, 3, 1, 2, 1e-13)
    assert matrix_ops.almost_equal(FLOAT64, None, m, nudged, 3)
    far: Matrix = matrix_ops.with_element(m, 3, 1, 2, 1e-3)
    assert not matrix_ops.almost_equal(FLOAT64, None, m, far, 3)
    assert matrix_ops.approximately_equal(FLOAT64, m, nudged, 3)
