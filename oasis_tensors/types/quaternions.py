################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Quaternion value types in (x, y, z, w) order."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_tensors.errors import DimensionError
from oasis_tensors.kernel import quaternion_ops
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.quaternion_ops import Quaternion
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import FLOAT64
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.numeric.scalar_domain import require_floating
from oasis_tensors.types.matrices import MatrixI
from oasis_tensors.types.matrices import VectorLike
from oasis_tensors.types.readable import MatrixReadable
from oasis_tensors.types.readable import QuaternionReadable
from oasis_tensors.types.readable import VectorReadable
from oasis_tensors.types.vectors import check_same_domain


def _quaternion_components(
    domain: ScalarDomain, values: Sequence[Scalar]
) -> Quaternion:
    require_floating(domain, "quaternion")
    if len(values) != 4:
        raise DimensionError("quaternion must have 4 components (x, y, z, w)")
    return tuple(domain.coerce(value) for value in values)


def _readable_components(other: QuaternionReadable) -> Quaternion:
    return (other.x, other.y, other.z, other.w)


def _axis_components(axis: VectorLike) -> tuple[Scalar, ...]:
    if isinstance(axis, VectorReadable):
        return axis.as_tuple()
    return tuple(axis)


def _view_orientation(
    domain: ScalarDomain, origin: VectorLike, target: VectorLike, up: VectorLike
) -> Quaternion:
    return quaternion_ops.look_at(
        domain,
        vector_ops.coerce(domain, _axis_components(origin)),
        vector_ops.coerce(domain, _axis_components(target)),
        vector_ops.coerce(domain, _axis_components(up)),
    )


class _QuaternionQueries:
    """Read-only operations shared by both quaternion types."""

    __slots__ = ()

    @property
    def domain(self) -> ScalarDomain:
        raise NotImplementedError

    def as_tuple(self) -> Quaternion:
        """Return the components as (x, y, z, w)."""
        raise NotImplementedError

    @property
    def x(self) -> Scalar:
        return self.as_tuple()[0]

    @property
    def y(self) -> Scalar:
        return self.as_tuple()[1]

    @property
    def z(self) -> Scalar:
        return self.as_tuple()[2]

    @property
    def w(self) -> Scalar:
        return self.as_tuple()[3]

    def as_array(self) -> NDArray[np.generic]:
        return np.array(self.as_tuple(), dtype=self.domain.dtype)

    def dot_product(self, other: QuaternionReadable) -> Scalar:
        check_same_domain(self.domain, getattr(other, "domain", self.domain))
        return quaternion_ops.dot_product(
            self.domain, self.as_tuple(), _readable_components(other)
        )

    def magnitude_squared(self) -> Scalar:
        return quaternion_ops.magnitude_squared(self.domain, self.as_tuple())

    def magnitude(self) -> Scalar:
        return quaternion_ops.magnitude(self.domain, self.as_tuple())

    def is_negation_of(
        self, other: QuaternionReadable, context: AlmostEqualContext | None = None
    ) -> bool:
        """Return True if this quaternion is almost equal to ``-other``."""
        check_same_domain(self.domain, getattr(other, "domain", self.domain))
        return quaternion_ops.is_negation_of(
            self.domain, context, self.as_tuple(), _readable_components(other)
        )

    def almost_equal(
        self, other: QuaternionReadable, context: AlmostEqualContext | None = None
    ) -> bool:
        check_same_domain(self.domain, getattr(other, "domain", self.domain))
        return quaternion_ops.almost_equal(
            self.domain, context, self.as_tuple(), _readable_components(other)
        )

    def approximately_equal(self, other: QuaternionReadable) -> bool:
        check_same_domain(self.domain, getattr(other, "domain", self.domain))
        return all(
            self.domain.approximately_equal(a, b)
            for a, b in zip(self.as_tuple(), _readable_components(other))
        )

    def make_rotation_matrix_3x3(self) -> MatrixI:
        return MatrixI(
            quaternion_ops.make_rotation_matrix_3x3(self.domain, self.as_tuple()),
            self.domain,
        )

    def make_rotation_matrix_4x4(self) -> MatrixI:
        """Return the homogeneous rotation matrix of this unit quaternion."""
        return MatrixI(
            quaternion_ops.make_rotation_matrix_4x4(self.domain, self.as_tuple()),
            self.domain,
        )


@dataclass(frozen=True, slots=True)
class QuaternionI(_QuaternionQueries):
    """Immutable quaternion over a floating domain."""

    components: Quaternion
    domain: ScalarDomain = FLOAT64

    def __post_init__(self) -> None:
        """Validate and coerce components into the domain."""
        object.__setattr__(
            self, "components", _quaternion_components(self.domain, self.components)
        )

    @staticmethod
    def of(
        x: Scalar, y: Scalar, z: Scalar, w: Scalar, domain: ScalarDomain = FLOAT64
    ) -> QuaternionI:
        return QuaternionI((x, y, z, w), domain)

    @staticmethod
    def identity(domain: ScalarDomain = FLOAT64) -> QuaternionI:
        return QuaternionI(quaternion_ops.identity(domain), domain)

    @staticmethod
    def copy_of(
        other: QuaternionReadable, domain: ScalarDomain | None = None
    ) -> QuaternionI:
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return QuaternionI(_readable_components(other), target)

    @staticmethod
    def make_from_axis_angle(
        axis: VectorLike, angle: float, domain: ScalarDomain = FLOAT64
    ) -> QuaternionI:
        """Return the rotation of ``angle`` radians about a unit axis."""
        return QuaternionI(
            quaternion_ops.make_from_axis_angle(
                domain, _axis_components(axis), angle
            ),
            domain,
        )

    @staticmethod
    def make_from_rotation_matrix(
        m: MatrixReadable, domain: ScalarDomain | None = None
    ) -> QuaternionI:
        """Return the unit quaternion of a 3x3 or 4x4 rotation matrix."""
        target: ScalarDomain = (
            domain if domain is not None else getattr(m, "domain", FLOAT64)
        )
        return QuaternionI(
            quaternion_ops.make_from_rotation_matrix(target, m.as_tuple(), m.size),
            target,
        )

    @staticmethod
    def look_at(
        origin: VectorLike,
        target: VectorLike,
        up: VectorLike,
        domain: ScalarDomain = FLOAT64,
    ) -> QuaternionI:
        """Return the orientation of a view from ``origin`` facing ``target``."""
        return QuaternionI(_view_orientation(domain, origin, target, up), domain)

    def as_tuple(self) -> Quaternion:
        return self.components

    def add(self, other: QuaternionI) -> QuaternionI:
        check_same_domain(self.domain, other.domain)
        return QuaternionI(
            quaternion_ops.add(self.domain, self.components, other.components),
            self.domain,
        )

    def subtract(self, other: QuaternionI) -> QuaternionI:
        check_same_domain(self.domain, other.domain)
        return QuaternionI(
            quaternion_ops.subtract(self.domain, self.components, other.components),
            self.domain,
        )

    def scale(self, r: float) -> QuaternionI:
        return QuaternionI(
            quaternion_ops.scale(self.domain, self.components, r), self.domain
        )

    def negate(self) -> QuaternionI:
        return QuaternionI(
            quaternion_ops.negate(self.domain, self.components), self.domain
        )

    def conjugate(self) -> QuaternionI:
        return QuaternionI(
            quaternion_ops.conjugate(self.domain, self.components), self.domain
        )

    def normalize(self) -> QuaternionI:
        return QuaternionI(
            quaternion_ops.normalize(self.domain, self.components), self.domain
        )

    def interpolate_linear(self, other: QuaternionI, alpha: float) -> QuaternionI:
        check_same_domain(self.domain, other.domain)
        return QuaternionI(
            quaternion_ops.interpolate_linear(
                self.domain, self.components, other.components, alpha
            ),
            self.domain,
        )

    def multiply(self, other: QuaternionI) -> QuaternionI:
        """Return the Hamilton product; ``other`` rotates first."""
        check_same_domain(self.domain, other.domain)
        return QuaternionI(
            quaternion_ops.multiply(self.domain, self.components, other.components),
            self.domain,
        )

    def to_mutable(self) -> QuaternionM:
        return QuaternionM(self.components, self.domain)

    def __add__(self, other: QuaternionI) -> QuaternionI:
        return self.add(other)

    def __sub__(self, other: QuaternionI) -> QuaternionI:
        return self.subtract(other)

    def __neg__(self) -> QuaternionI:
        return self.negate()

    def __mul__(self, other: QuaternionI) -> QuaternionI:
        """Multiply two quaternions using the Hamilton product."""
        return self.multiply(other)


class QuaternionM(_QuaternionQueries):
    """Mutable quaternion over a floating domain."""

    __slots__ = ("_data", "_domain")

    def __init__(
        self,
        components: Sequence[Scalar] = (0.0, 0.0, 0.0, 1.0),
        domain: ScalarDomain = FLOAT64,
    ) -> None:
        self._domain: ScalarDomain = domain
        self._data: list[Scalar] = list(_quaternion_components(domain, components))

    @staticmethod
    def copy_of(
        other: QuaternionReadable, domain: ScalarDomain | None = None
    ) -> QuaternionM:
        target: ScalarDomain = (
            domain if domain is not None else getattr(other, "domain", FLOAT64)
        )
        return QuaternionM(_readable_components(other), target)

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    def as_tuple(self) -> Quaternion:
        return tuple(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuaternionM):
            return NotImplemented
        return self._domain == other._domain and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"QuaternionM(components={tuple(self._data)!r}, "
            f"domain={self._domain!r})"
        )

    def _write(self, components: Quaternion) -> QuaternionM:
        self._data[:] = components
        return self

    def set_components(
        self, x: Scalar, y: Scalar, z: Scalar, w: Scalar
    ) -> QuaternionM:
        return self._write(_quaternion_components(self._domain, (x, y, z, w)))

    def set_from(self, other: QuaternionReadable) -> QuaternionM:
        return self._write(
            _quaternion_components(self._domain, _readable_components(other))
        )

    def set_identity(self) -> QuaternionM:
        return self._write(quaternion_ops.identity(self._domain))

    def set_look_at(
        self, origin: VectorLike, target: VectorLike, up: VectorLike
    ) -> QuaternionM:
        """Set this quaternion to the orientation of a view facing ``target``."""
        return self._write(_view_orientation(self._domain, origin, target, up))

    def add_in_place(self, other: QuaternionReadable) -> QuaternionM:
        check_same_domain(self._domain, getattr(other, "domain", self._domain))
        return self._write(
            quaternion_ops.add(
                self._domain, self.as_tuple(), _readable_components(other)
            )
        )

    def subtract_in_place(self, other: QuaternionReadable) -> QuaternionM:
        check_same_domain(self._domain, getattr(other, "domain", self._domain))
        return self._write(
            quaternion_ops.subtract(
                self._domain, self.as_tuple(), _readable_components(other)
            )
        )

    def scale_in_place(self, r: float) -> QuaternionM:
        return self._write(quaternion_ops.scale(self._domain, self.as_tuple(), r))

    def negate_in_place(self) -> QuaternionM:
        return self._write(quaternion_ops.negate(self._domain, self.as_tuple()))

    def conjugate_in_place(self) -> QuaternionM:
        return self._write(quaternion_ops.conjugate(self._domain, self.as_tuple()))

    def normalize_in_place(self) -> QuaternionM:
        return self._write(quaternion_ops.normalize(self._domain, self.as_tuple()))

    def interpolate_linear_in_place(
        self, other: QuaternionReadable, alpha: float
    ) -> QuaternionM:
        check_same_domain(self._domain, getattr(other, "domain", self._domain))
        return self._write(
            quaternion_ops.interpolate_linear(
                self._domain, self.as_tuple(), _readable_components(other), alpha
            )
        )

    def multiply_in_place(self, other: QuaternionReadable) -> QuaternionM:
        """Replace ``self`` with the Hamilton product ``self other``."""
        check_same_domain(self._domain, getattr(other, "domain", self._domain))
        return self._write(
            quaternion_ops.multiply(
                self._domain, self.as_tuple(), _readable_components(other)
            )
        )

    def to_immutable(self) -> QuaternionI:
        return QuaternionI(self.as_tuple(), self._domain)
