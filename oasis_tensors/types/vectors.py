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
Vector value types

Four vector types share one kernel:

    * VectorI: immutable, untagged
    * PVectorI[T]: immutable, tagged with coordinate space T
    * VectorM: mutable, untagged
    * PVectorM[T]: mutable, tagged with coordinate space T

Immutable vectors are frozen dataclasses and every operation returns a new
value. Mutable vectors own a fixed-size buffer; ``*_in_place`` methods write
into it and return ``self``. A mutable operation computes its full result
before writing, so a failure leaves the buffer unchanged.

Binary operations require both operands to be the same type, which for the
tagged types means the same tag under a static type checker.
"""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from oasis_tensors.errors import DimensionError
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.vector_ops import Vector
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.tags import TagT
from oasis_tensors.types.readable import VectorReadable


_VQ = TypeVar("_VQ", bound="_VectorQueries")
_VI = TypeVar("_VI", bound="_VectorIBase")
_VM = TypeVar("_VM", bound="_VectorMBase")


def check_same_domain(a: ScalarDomain, b: ScalarDomain) -> None:
    """Raise ValueError if two operands use different scalar domains."""
    if a != b:
        raise ValueError(f"domains differ: {a.name} and {b.name}")


class _VectorQueries:
    """Read-only operations shared by all vector types."""

    __slots__ = ()

    @property
    def domain(self) -> ScalarDomain:
        raise NotImplementedError

    def as_tuple(self) -> Vector:
        """Return the components as a tuple."""
        raise NotImplementedError

    @property
    def dimension(self) -> int:
        return len(self.as_tuple())

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self.as_tuple())

    def component(self, index: int) -> Scalar:
        """Return a component by index.

        Raises:
            IndexError: If the index is out of range
        """
        components: Vector = self.as_tuple()
        if index < 0 or index >= len(components):
            raise IndexError(
                f"component {index} out of range for dimension {len(components)}"
            )
        return components[index]

    def get_unsafe(self, index: int) -> Scalar:
        """Return a component without bounds checking."""
        return self.as_tuple()[index]

    @property
    def x(self) -> Scalar:
        return self.component(0)

    @property
    def y(self) -> Scalar:
        return self.component(1)

    @property
    def z(self) -> Scalar:
        return self.component(2)

    @property
    def w(self) -> Scalar:
        return self.component(3)

    def as_array(self) -> NDArray[np.generic]:
        """Return a numpy copy of the components using the domain's dtype."""
        return np.array(self.as_tuple(), dtype=self.domain.dtype)

    def dot_product(self: _VQ, other: _VQ) -> Scalar:
        check_same_domain(self.domain, other.domain)
        return vector_ops.dot_product(self.domain, self.as_tuple(), other.as_tuple())

    def magnitude_squared(self) -> Scalar:
        return vector_ops.magnitude_squared(self.domain, self.as_tuple())

    def magnitude(self) -> Scalar:
        return vector_ops.magnitude(self.domain, self.as_tuple())

    def distance(self: _VQ, other: _VQ) -> Scalar:
        check_same_domain(self.domain, other.domain)
        return vector_ops.distance(self.domain, self.as_tuple(), other.as_tuple())

    def angle(self: _VQ, other: _VQ) -> float:
        """Return the angle to ``other`` in radians."""
        check_same_domain(self.domain, other.domain)
        return vector_ops.angle(self.domain, self.as_tuple(), other.as_tuple())

    def almost_equal(
        self: _VQ, other: _VQ, context: AlmostEqualContext | None = None
    ) -> bool:
        """Compare under ``context``, defaulting to the domain's context."""
        check_same_domain(self.domain, other.domain)
        return vector_ops.almost_equal(
            self.domain, context, self.as_tuple(), other.as_tuple()
        )

    def approximately_equal(self: _VQ, other: _VQ) -> bool:
        check_same_domain(self.domain, other.domain)
        return vector_ops.approximately_equal(
            self.domain, self.as_tuple(), other.as_tuple()
        )


@dataclass(frozen=True, slots=True)
class _VectorIBase(_VectorQueries):
    components: Vector
    domain: ScalarDomain = FLOAT64

    def __post_init__(self) -> None:
        """Validate and coerce components into the domain."""
        object.__setattr__(
            self, "components", vector_ops.coerce(self.domain, self.components)
        )

    @classmethod
    def of(cls: type[_VI], *values: Scalar, domain: ScalarDomain = FLOAT64) -> _VI:
        """Construct a vector from its components."""
        return cls(tuple(values), domain)

    @classmethod
    def zero(cls: type[_VI], size: int, domain: ScalarDomain = FLOAT64) -> _VI:
        return cls(vector_ops.zero(domain, size), domain)

    @classmethod
    def copy_of(
        cls: type[_VI], other: VectorReadable, domain: ScalarDomain | None = None
    ) -> _VI:
        """Construct a vector from any readable vector.

        The domain defaults to the source's domain when it has one.
        """
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return cls(other.as_tuple(), target)

    def as_tuple(self) -> Vector:
        return self.components

    def _make(self: _VI, components: Vector) -> _VI:
        return type(self)(components, self.domain)

    def with_component(self: _VI, index: int, value: Scalar) -> _VI:
        """Return a copy with one component replaced."""
        self.component(index)
        data: list[Scalar] = list(self.components)
        data[index] = value
        return self._make(tuple(data))

    def add(self: _VI, other: _VI) -> _VI:
        check_same_domain(self.domain, other.domain)
        return self._make(
            vector_ops.add(self.domain, self.components, other.components)
        )

    def subtract(self: _VI, other: _VI) -> _VI:
        check_same_domain(self.domain, other.domain)
        return self._make(
            vector_ops.subtract(self.domain, self.components, other.components)
        )

    def scale(self: _VI, r: float) -> _VI:
        return self._make(vector_ops.scale(self.domain, self.components, r))

    def add_scaled(self: _VI, other: _VI, r: float) -> _VI:
        """Return ``self + other * r``."""
        check_same_domain(self.domain, other.domain)
        return self._make(
            vector_ops.add_scaled(self.domain, self.components, other.components, r)
        )

    def absolute(self: _VI) -> _VI:
        return self._make(vector_ops.absolute(self.domain, self.components))

    def negate(self: _VI) -> _VI:
        return self._make(vector_ops.negate(self.domain, self.components))

    def normalize(self: _VI) -> _VI:
        return self._make(vector_ops.normalize(self.domain, self.components))

    def interpolate_linear(self: _VI, other: _VI, alpha: float) -> _VI:
        check_same_domain(self.domain, other.domain)
        return self._make(
            vector_ops.interpolate_linear(
                self.domain, self.components, other.components, alpha
            )
        )

    def projection(self: _VI, onto: _VI) -> _VI:
        """Return the projection of this vector onto ``onto``."""
        check_same_domain(self.domain, onto.domain)
        return self._make(
            vector_ops.projection(self.domain, self.components, onto.components)
        )

    def cross_product(self: _VI, other: _VI) -> _VI:
        check_same_domain(self.domain, other.domain)
        return self._make(
            vector_ops.cross_product(self.domain, self.components, other.components)
        )

    def clamp(self: _VI, minimum: Scalar, maximum: Scalar) -> _VI:
        return self._make(
            vector_ops.clamp(self.domain, self.components, minimum, maximum)
        )

    def clamp_by_vector(self: _VI, minimum: _VI, maximum: _VI) -> _VI:
        check_same_domain(self.domain, minimum.domain)
        check_same_domain(self.domain, maximum.domain)
        return self._make(
            vector_ops.clamp_by_vector(
                self.domain, self.components, minimum.components, maximum.components
            )
        )

    def clamp_minimum(self: _VI, minimum: Scalar) -> _VI:
        return self._make(
            vector_ops.clamp_minimum(self.domain, self.components, minimum)
        )

    def clamp_minimum_by_vector(self: _VI, minimum: _VI) -> _VI:
        check_same_domain(self.domain, minimum.domain)
        return self._make(
            vector_ops.clamp_minimum_by_vector(
                self.domain, self.components, minimum.components
            )
        )

    def clamp_maximum(self: _VI, maximum: Scalar) -> _VI:
        return self._make(
            vector_ops.clamp_maximum(self.domain, self.components, maximum)
        )

    def clamp_maximum_by_vector(self: _VI, maximum: _VI) -> _VI:
        check_same_domain(self.domain, maximum.domain)
        return self._make(
            vector_ops.clamp_maximum_by_vector(
                self.domain, self.components, maximum.components
            )
        )

    def ortho_normalize(
        self: _VI, other: _VI, context: AlmostEqualContext | None = None
    ) -> tuple[_VI, _VI]:
        """Return this vector and ``other`` orthonormalized by Gram-Schmidt.

        ``other`` becomes the zero vector when it is parallel to this one.
        """
        check_same_domain(self.domain, other.domain)
        n0, n1 = vector_ops.ortho_normalize(
            self.domain, self.components, other.components, context
        )
        return self._make(n0), self._make(n1)

    def ortho_normalize_3(
        self: _VI,
        second: _VI,
        third: _VI,
        context: AlmostEqualContext | None = None,
    ) -> tuple[_VI, _VI, _VI]:
        """Return this vector, ``second`` and ``third`` as an orthonormal set."""
        check_same_domain(self.domain, second.domain)
        check_same_domain(self.domain, third.domain)
        n0, n1, n2 = vector_ops.ortho_normalize_3(
            self.domain,
            self.components,
            second.components,
            third.components,
            context,
        )
        return self._make(n0), self._make(n1), self._make(n2)

    def __add__(self: _VI, other: _VI) -> _VI:
        return self.add(other)

    def __sub__(self: _VI, other: _VI) -> _VI:
        return self.subtract(other)

    def __neg__(self: _VI) -> _VI:
        return self.negate()

    def __mul__(self: _VI, r: float) -> _VI:
        return self.scale(r)

    def __rmul__(self: _VI, r: float) -> _VI:
        return self.scale(r)


@dataclass(frozen=True, slots=True)
class VectorI(_VectorIBase):
    """Immutable untagged vector of 2, 3 or 4 components."""

    def to_mutable(self) -> VectorM:
        return VectorM(self.components, self.domain)


@dataclass(frozen=True, slots=True)
class PVectorI(_VectorIBase, Generic[TagT]):
    """Immutable vector tagged with the coordinate space ``TagT``."""

    @classmethod
    def of_untagged(cls, v: VectorI) -> PVectorI[TagT]:
        """Attach a tag to an untagged vector."""
        return cls(v.components, v.domain)

    def untagged(self) -> VectorI:
        return VectorI(self.components, self.domain)

    def to_mutable(self) -> PVectorM[TagT]:
        return PVectorM(self.components, self.domain)


class _VectorMBase(_VectorQueries):
    __slots__ = ("_data", "_domain")

    def __init__(
        self, components: Sequence[Scalar], domain: ScalarDomain = FLOAT64
    ) -> None:
        self._domain: ScalarDomain = domain
        self._data: list[Scalar] = list(vector_ops.coerce(domain, components))

    @classmethod
    def of(cls: type[_VM], *values: Scalar, domain: ScalarDomain = FLOAT64) -> _VM:
        return cls(values, domain)

    @classmethod
    def zero(cls: type[_VM], size: int, domain: ScalarDomain = FLOAT64) -> _VM:
        return cls(vector_ops.zero(domain, size), domain)

    @classmethod
    def copy_of(
        cls: type[_VM], other: VectorReadable, domain: ScalarDomain | None = None
    ) -> _VM:
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return cls(other.as_tuple(), target)

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    def as_tuple(self) -> Vector:
        return tuple(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _VectorMBase) or type(other) is not type(self):
            return NotImplemented
        return self._domain == other._domain and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(components={tuple(self._data)!r}, "
            f"domain={self._domain!r})"
        )

    def _write(self: _VM, components: Vector) -> _VM:
        self._data[:] = components
        return self

    def set_component(self: _VM, index: int, value: Scalar) -> _VM:
        """Set one component, checking the index and the value."""
        self.component(index)
        self._data[index] = self._domain.coerce(value)
        return self

    def set_unsafe(self, index: int, value: Scalar) -> None:
        """Set one component without bounds or domain checking."""
        self._data[index] = value

    def set_from(self: _VM, other: VectorReadable) -> _VM:
        """Copy every component of a readable vector of the same dimension."""
        components: Vector = other.as_tuple()
        if len(components) != len(self._data):
            raise DimensionError(
                f"expected {len(self._data)} components, got {len(components)}"
            )
        return self._write(vector_ops.coerce(self._domain, components))

    def add_in_place(self: _VM, other: _VM) -> _VM:
        check_same_domain(self._domain, other._domain)
        return self._write(
            vector_ops.add(self._domain, self.as_tuple(), other.as_tuple())
        )

    def subtract_in_place(self: _VM, other: _VM) -> _VM:
        check_same_domain(self._domain, other._domain)
        return self._write(
            vector_ops.subtract(self._domain, self.as_tuple(), other.as_tuple())
        )

    def scale_in_place(self: _VM, r: float) -> _VM:
        return self._write(vector_ops.scale(self._domain, self.as_tuple(), r))

    def add_scaled_in_place(self: _VM, other: _VM, r: float) -> _VM:
        check_same_domain(self._domain, other._domain)
        return self._write(
            vector_ops.add_scaled(self._domain, self.as_tuple(), other.as_tuple(), r)
        )

    def absolute_in_place(self: _VM) -> _VM:
        return self._write(vector_ops.absolute(self._domain, self.as_tuple()))

    def negate_in_place(self: _VM) -> _VM:
        return self._write(vector_ops.negate(self._domain, self.as_tuple()))

    def normalize_in_place(self: _VM) -> _VM:
        return self._write(vector_ops.normalize(self._domain, self.as_tuple()))

    def interpolate_linear_in_place(self: _VM, other: _VM, alpha: float) -> _VM:
        check_same_domain(self._domain, other._domain)
        return self._write(
            vector_ops.interpolate_linear(
                self._domain, self.as_tuple(), other.as_tuple(), alpha
            )
        )

    def projection_in_place(self: _VM, onto: _VM) -> _VM:
        check_same_domain(self._domain, onto._domain)
        return self._write(
            vector_ops.projection(self._domain, self.as_tuple(), onto.as_tuple())
        )

    def cross_product_in_place(self: _VM, other: _VM) -> _VM:
        check_same_domain(self._domain, other._domain)
        return self._write(
            vector_ops.cross_product(self._domain, self.as_tuple(), other.as_tuple())
        )

    def clamp_in_place(self: _VM, minimum: Scalar, maximum: Scalar) -> _VM:
        return self._write(
            vector_ops.clamp(self._domain, self.as_tuple(), minimum, maximum)
        )

    def clamp_by_vector_in_place(self: _VM, minimum: _VM, maximum: _VM) -> _VM:
        check_same_domain(self._domain, minimum.domain)
        check_same_domain(self._domain, maximum.domain)
        return self._write(
            vector_ops.clamp_by_vector(
                self._domain, self.as_tuple(), minimum.as_tuple(), maximum.as_tuple()
            )
        )

    def clamp_minimum_in_place(self: _VM, minimum: Scalar) -> _VM:
        return self._write(
            vector_ops.clamp_minimum(self._domain, self.as_tuple(), minimum)
        )

    def clamp_minimum_by_vector_in_place(self: _VM, minimum: _VM) -> _VM:
        check_same_domain(self._domain, minimum.domain)
        return self._write(
            vector_ops.clamp_minimum_by_vector(
                self._domain, self.as_tuple(), minimum.as_tuple()
            )
        )

    def clamp_maximum_in_place(self: _VM, maximum: Scalar) -> _VM:
        return self._write(
            vector_ops.clamp_maximum(self._domain, self.as_tuple(), maximum)
        )

    def clamp_maximum_by_vector_in_place(self: _VM, maximum: _VM) -> _VM:
        check_same_domain(self._domain, maximum.domain)
        return self._write(
            vector_ops.clamp_maximum_by_vector(
                self._domain, self.as_tuple(), maximum.as_tuple()
            )
        )

    def ortho_normalize(
        self: _VM, other: _VM, context: AlmostEqualContext | None = None
    ) -> tuple[_VM, _VM]:
        """Return new orthonormalized copies of this vector and ``other``."""
        check_same_domain(self._domain, other._domain)
        n0, n1 = vector_ops.ortho_normalize(
            self._domain, self.as_tuple(), other.as_tuple(), context
        )
        return type(self)(n0, self._domain), type(self)(n1, self._domain)

    def ortho_normalize_3(
        self: _VM,
        second: _VM,
        third: _VM,
        context: AlmostEqualContext | None = None,
    ) -> tuple[_VM, _VM, _VM]:
        """Return new orthonormalized copies of three vectors."""
        check_same_domain(self._domain, second._domain)
        check_same_domain(self._domain, third._domain)
        n0, n1, n2 = vector_ops.ortho_normalize_3(
            self._domain, self.as_tuple(), second.as_tuple(), third.as_tuple(), context
        )
        return (
            type(self)(n0, self._domain),
            type(self)(n1, self._domain),
            type(self)(n2, self._domain),
        )

    def __iadd__(self: _VM, other: _VM) -> _VM:
        return self.add_in_place(other)

    def __isub__(self: _VM, other: _VM) -> _VM:
        return self.subtract_in_place(other)

    def __imul__(self: _VM, r: float) -> _VM:
        return self.scale_in_place(r)


class VectorM(_VectorMBase):
    """Mutable untagged vector of 2, 3 or 4 components."""

    __slots__ = ()

    def to_immutable(self) -> VectorI:
        return VectorI(self.as_tuple(), self._domain)


class PVectorM(_VectorMBase, Generic[TagT]):
    """Mutable vector tagged with the coordinate space ``TagT``."""

    __slots__ = ()

    @classmethod
    def of_untagged(cls, v: VectorM) -> PVectorM[TagT]:
        """Attach a tag to a copy of an untagged mutable vector."""
        return cls(v.as_tuple(), v.domain)

    def untagged(self) -> VectorM:
        return VectorM(self.as_tuple(), self._domain)

    def to_immutable(self) -> PVectorI[TagT]:
        return PVectorI(self.as_tuple(), self._domain)
