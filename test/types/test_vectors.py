################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the immutable, mutable and tagged vector types."""

from __future__ import annotations

import math

import numpy as np
import pytest

from oasis_tensors.errors import ArithmeticOverflowError
from oasis_tensors.errors import DimensionError
from oasis_tensors.numeric.scalar_domain import FLOAT32
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import INT32
from oasis_tensors.numeric.scalar_domain import INT64
from oasis_tensors.tags import Tag
from oasis_tensors.types import PVectorI
from oasis_tensors.types import PVectorM
from oasis_tensors.types import VectorI
from oasis_tensors.types import VectorM
from oasis_tensors.types import VectorReadable


class World(Tag):
    pass


class Body(Tag):
    pass


class _PlainVector:
    """Readable vector that is not one of the library types."""

    def __init__(self, *values: float) -> None:
        self._values: tuple[float, ...] = values

    @property
    def dimension(self) -> int:
        return len(self._values)

    def component(self, index: int) -> float:
        return self._values[index]

    def as_tuple(self) -> tuple[float, ...]:
        return self._values


def test_construction_and_access() -> None:
    """Checks constructors and component accessors."""
    v: VectorI = VectorI.of(1.0, 2.0, 3.0)
    assert v.dimension == 3
    assert len(v) == 3
    assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)
    assert list(v) == [1.0, 2.0, 3.0]
    assert v.component(2) == 3.0
    assert v.get_unsafe(1) == 2.0
    assert VectorI.zero(4) == VectorI.of(0.0, 0.0, 0.0, 0.0)


def test_component_out_of_range() -> None:
    """Checks checked access raises IndexError."""
    v: VectorI = VectorI.of(1.0, 2.0)
    with pytest.raises(IndexError):
        v.component(2)
    with pytest.raises(IndexError):
        v.z
    with pytest.raises(IndexError):
        v.with_component(-1, 0.0)
    with pytest.raises(IndexError):
        VectorM.of(1.0, 2.0).set_component(5, 0.0)


def test_dimension_is_validated() -> None:
    """Checks only 2, 3 and 4 components are accepted."""
    with pytest.raises(DimensionError):
        VectorI.of(1.0)
    with pytest.raises(DimensionError):
        VectorM.of(1.0, 2.0, 3.0, 4.0, 5.0)


def test_immutable_operations_return_new_values() -> None:
    """Checks immutable operations leave the receiver unchanged."""
    a: VectorI = VectorI.of(1.0, 2.0, 3.0)
    b: VectorI = VectorI.of(4.0, 5.0, 6.0)
    assert a + b == VectorI.of(5.0, 7.0, 9.0)
    assert b - a == VectorI.of(3.0, 3.0, 3.0)
    assert a * 2.0 == VectorI.of(2.0, 4.0, 6.0)
    assert 2.0 * a == a * 2.0
    assert -a == VectorI.of(-1.0, -2.0, -3.0)
    assert a.add_scaled(b, 0.5) == VectorI.of(3.0, 4.5, 6.0)
    assert (-a).absolute() == a
    assert a.dot_product(b) == 32.0
    assert a == VectorI.of(1.0, 2.0, 3.0)


def test_frozen() -> None:
    """Checks immutable vectors reject attribute assignment."""
    v: VectorI = VectorI.of(1.0, 2.0)
    with pytest.raises(AttributeError):
        v.components = (3.0, 4.0)  # type: ignore[misc]


def test_geometry() -> None:
    """Checks magnitude, distance, angle, cross product and projection."""
    v: VectorI = VectorI.of(3.0, 4.0)
    assert v.magnitude() == 5.0
    assert v.magnitude_squared() == 25.0
    assert v.distance(VectorI.of(0.0, 0.0)) == 5.0
    assert v.normalize().almost_equal(VectorI.of(0.6, 0.8))
    assert VectorI.of(1.0, 0.0).angle(VectorI.of(0.0, 2.0)) == pytest.approx(
        math.pi / 2.0
    )
    x: VectorI = VectorI.of(1.0, 0.0, 0.0)
    y: VectorI = VectorI.of(0.0, 1.0, 0.0)
    assert x.cross_product(y) == VectorI.of(0.0, 0.0, 1.0)
    assert VectorI.of(2.0, 2.0).projection(VectorI.of(1.0, 0.0)) == VectorI.of(
        2.0, 0.0
    )


def test_integer_projection() -> None:
    """Checks integer projection rounds the real result."""
    v: VectorI = VectorI.of(3, 4, domain=INT32)
    assert v.projection(VectorI.of(2, 0, domain=INT32)) == VectorI.of(
        3, 0, domain=INT32
    )


def test_ortho_normalize() -> None:
    """Checks Gram-Schmidt produces an orthonormal pair."""
    n0, n1 = VectorI.of(1.0, 1.0, 0.0).ortho_normalize(VectorI.of(1.0, 0.0, 0.0))
    assert n0.magnitude() == pytest.approx(1.0)
    assert n1.magnitude() == pytest.approx(1.0)
    assert n0.dot_product(n1) == pytest.approx(0.0, abs=1e-12)
    half: float = math.sqrt(0.5)
    assert n1.almost_equal(VectorI.of(half, -half, 0.0))


def test_ortho_normalize_parallel_gives_zero() -> None:
    """Checks a parallel second vector becomes exactly zero."""
    _, n1 = VectorI.of(1.0, 1.0, 0.0).ortho_normalize(VectorI.of(2.0, 2.0, 0.0))
    assert n1 == VectorI.zero(3)
    m0, m1 = VectorM.of(1.0, 1.0, 0.0).ortho_normalize(VectorM.of(2.0, 2.0, 0.0))
    assert m0.magnitude() == pytest.approx(1.0)
    assert m1.as_tuple() == (0.0, 0.0, 0.0)


def test_ortho_normalize_3() -> None:
    """Checks three vectors become an orthonormal basis of the same type."""
    n0, n1, n2 = VectorI.of(3.0, 0.0, 0.0).ortho_normalize_3(
        VectorI.of(1.0, 2.0, 0.0), VectorI.of(1.0, 1.0, -4.0)
    )
    assert n0.almost_equal(VectorI.of(1.0, 0.0, 0.0))
    assert n1.almost_equal(VectorI.of(0.0, 1.0, 0.0))
    assert n2.almost_equal(VectorI.of(0.0, 0.0, -1.0))
    m0, m1, m2 = VectorM.of(1.0, 1.0, 0.0).ortho_normalize_3(
        VectorM.of(0.0, 1.0, 1.0), VectorM.of(2.0, 2.0, 0.0)
    )
    assert isinstance(m2, VectorM)
    assert m0.dot_product(m1) == pytest.approx(0.0, abs=1e-12)
    assert m2.as_tuple() == (0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        VectorI.of(1.0, 0.0, 0.0).ortho_normalize_3(
            VectorI.of(0.0, 1.0, 0.0), VectorI.of(0.0, 0.0, 1.0, domain=FLOAT32)
        )


def test_clamp_variants() -> None:
    """Checks scalar and per-component clamping, preserving NaN."""
    v: VectorI = VectorI.of(-2.0, 0.5, 3.0)
    assert v.clamp(0.0, 1.0) == VectorI.of(0.0, 0.5, 1.0)
    assert v.clamp_minimum(0.0) == VectorI.of(0.0, 0.5, 3.0)
    assert v.clamp_maximum(1.0) == VectorI.of(-2.0, 0.5, 1.0)
    lower: VectorI = VectorI.of(-1.0, 1.0, 0.0)
    upper: VectorI = VectorI.of(0.0, 2.0, 2.0)
    assert v.clamp_by_vector(lower, upper) == VectorI.of(-1.0, 1.0, 2.0)
    assert v.clamp_minimum_by_vector(lower) == VectorI.of(-1.0, 1.0, 3.0)
    assert v.clamp_maximum_by_vector(upper) == VectorI.of(-2.0, 0.5, 2.0)
    clamped: VectorI = VectorI.of(math.nan, 5.0).clamp(0.0, 1.0)
    assert math.isnan(clamped.x)
    assert clamped.y == 1.0


def test_interpolate_linear_endpoints() -> None:
    """Checks interpolation is exact at alpha 0 and 1."""
    a: VectorI = VectorI.of(0.1, 0.2, 0.3)
    b: VectorI = VectorI.of(7.0, -3.0, 1e10)
    assert a.interpolate_linear(b, 0.0) == a
    assert a.interpolate_linear(b, 1.0) == b


def test_domains_must_match() -> None:
    """Checks operands of different domains are rejected."""
    with pytest.raises(ValueError):
        VectorI.of(1.0, 2.0, domain=FLOAT64).add(VectorI.of(1.0, 2.0, domain=FLOAT32))


def test_clamp_by_vector_domains_must_match() -> None:
    """Checks per-component bounds must share the vector domain."""
    v: VectorI = VectorI.of(1.0, 2.0)
    lo32: VectorI = VectorI.of(0.0, 0.0, domain=FLOAT32)
    hi32: VectorI = VectorI.of(5.0, 5.0, domain=FLOAT32)
    hi: VectorI = VectorI.of(5.0, 5.0)
    with pytest.raises(ValueError):
        v.clamp_by_vector(lo32, hi)
    with pytest.raises(ValueError):
        v.clamp_minimum_by_vector(lo32)
    with pytest.raises(ValueError):
        v.clamp_maximum_by_vector(hi32)
    m: VectorM = VectorM.of(1.0, 2.0)
    with pytest.raises(ValueError):
        m.clamp_by_vector_in_place(VectorM.of(0.0, 0.0), hi32.to_mutable())
    with pytest.raises(ValueError):
        m.clamp_minimum_by_vector_in_place(lo32.to_mutable())
    with pytest.raises(ValueError):
        m.clamp_maximum_by_vector_in_place(hi32.to_mutable())
    assert m.as_tuple() == (1.0, 2.0)


def test_float32_components_are_rounded() -> None:
    """Checks float32 vectors hold single-precision values."""
    v: VectorI = VectorI.of(0.1, 0.2, domain=FLOAT32)
    assert v.x == float(np.float32(0.1))
    assert v.as_array().dtype == np.float32
    assert VectorI.of(1, 2, domain=INT64).as_array().dtype == np.int64


def test_mutable_in_place_operations() -> None:
    """Checks in-place operations write into the receiver and return it."""
    v: VectorM = VectorM.of(1.0, 2.0, 3.0)
    result: VectorM = v.add_in_place(VectorM.of(1.0, 1.0, 1.0))
    assert result is v
    assert v.as_tuple() == (2.0, 3.0, 4.0)
    v *= 2.0
    assert v.as_tuple() == (4.0, 6.0, 8.0)
    v -= VectorM.of(4.0, 6.0, 7.0)
    assert v.as_tuple() == (0.0, 0.0, 1.0)
    v.cross_product_in_place(VectorM.of(1.0, 0.0, 0.0))
    assert v.as_tuple() == (0.0, 1.0, 0.0)
    v.set_component(0, 3.0).negate_in_place()
    assert v.as_tuple() == (-3.0, -1.0, 0.0)
    v.clamp_in_place(-2.0, 2.0).absolute_in_place()
    assert v.as_tuple() == (2.0, 1.0, 0.0)


def test_mutable_failure_leaves_buffer_unchanged() -> None:
    """Checks an overflowing in-place operation writes nothing."""
    v: VectorM = VectorM.of(1, 2**31 - 1, domain=INT32)
    with pytest.raises(ArithmeticOverflowError):
        v.add_in_place(VectorM.of(1, 1, domain=INT32))
    assert v.as_tuple() == (1, 2**31 - 1)
    with pytest.raises(ValueError):
        v.set_component(0, 0.5)
    assert v.x == 1


def test_set_from_and_copy_of() -> None:
    """Checks copying from any readable vector."""
    source: _PlainVector = _PlainVector(1.0, 2.0, 3.0)
    assert isinstance(source, VectorReadable)
    assert VectorI.copy_of(source) == VectorI.of(1.0, 2.0, 3.0)
    target: VectorM = VectorM.zero(3)
    target.set_from(source)
    assert target.as_tuple() == (1.0, 2.0, 3.0)
    with pytest.raises(DimensionError):
        target.set_from(_PlainVector(1.0, 2.0))
    assert VectorM.copy_of(VectorI.of(1, 2, domain=INT32)).domain == INT32
    assert VectorI.copy_of(VectorI.of(1.0, 2.0), domain=INT64) == VectorI.of(
        1, 2, domain=INT64
    )


def test_conversions() -> None:
    """Checks mutable and immutable conversions copy the data."""
    v: VectorI = VectorI.of(1.0, 2.0)
    m: VectorM = v.to_mutable()
    m.scale_in_place(3.0)
    assert v == VectorI.of(1.0, 2.0)
    assert m.to_immutable() == VectorI.of(3.0, 6.0)


def test_mutable_is_unhashable() -> None:
    """Checks mutable vectors cannot be dictionary keys."""
    with pytest.raises(TypeError):
        hash(VectorM.of(1.0, 2.0))
    assert hash(VectorI.of(1.0, 2.0)) == hash(VectorI.of(1.0, 2.0))


def test_mutable_equality_with_other_types() -> None:
    """Checks a mutable vector is never equal to a value of another type."""
    m: VectorM = VectorM.of(1.0, 2.0)
    assert m == VectorM.of(1.0, 2.0)
    assert m != VectorI.of(1.0, 2.0)
    assert m != (1.0, 2.0)
    assert m != "VectorM"
    assert m != PVectorM[World].of(1.0, 2.0)
    assert m.__eq__(object()) is NotImplemented


def test_tags_are_erased_at_runtime() -> None:
    """Checks tagged vectors compare by value regardless of tag."""
    in_world: PVectorI[World] = PVectorI[World].of(1.0, 2.0)
    in_body: PVectorI[Body] = PVectorI[Body].of(1.0, 2.0)
    assert in_world == in_body  # type: ignore[comparison-overlap]
    assert in_world.untagged() == VectorI.of(1.0, 2.0)
    assert PVectorI[World].of_untagged(VectorI.of(1.0, 2.0)) == in_world
    assert in_world != VectorI.of(1.0, 2.0)


def test_tagged_operations_keep_type() -> None:
    """Checks tagged operations return tagged values."""
    a: PVectorI[World] = PVectorI[World].of(1.0, 2.0, 3.0)
    b: PVectorI[World] = PVectorI[World].of(1.0, 1.0, 1.0)
    total: PVectorI[World] = a + b
    assert isinstance(total, PVectorI)
    assert total.untagged() == VectorI.of(2.0, 3.0, 4.0)
    mutable: PVectorM[World] = a.to_mutable()
    mutable.add_in_place(b.to_mutable())
    assert isinstance(mutable, PVectorM)
    assert mutable.to_immutable() == total
    assert PVectorM[World].of_untagged(VectorM.of(1.0, 2.0)).untagged() == (
        VectorM.of(1.0, 2.0)
    )
