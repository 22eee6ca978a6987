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
Quaternion algebra over plain component tuples

Quaternions are 4-tuples in (x, y, z, w) order with the scalar part last. The
identity rotation is (0, 0, 0, 1). Rotations are right-handed and the
conversion to matrices uses the column-vector convention of
:mod:`matrix_ops`, so a quaternion and the rotation matrix built from it
rotate vectors identically.

Quaternions are only defined over floating domains.
"""

from __future__ import annotations

import math

from oasis_tensors.errors import DimensionError
from oasis_tensors.kernel import matrix_ops
from oasis_tensors.kernel import vector_ops
from oasis_tensors.kernel.matrix_ops import Matrix
from oasis_tensors.kernel.vector_ops import Vector
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.numeric.scalar_domain import require_floating


Quaternion = tuple[Scalar, ...]


def _validate(q: Quaternion, name: str = "q") -> None:
    if len(q) != 4:
        raise DimensionError(f"{name} must have 4 components (x, y, z, w)")


def identity(domain: ScalarDomain) -> Quaternion:
    require_floating(domain, "quaternion")
    return (domain.zero(), domain.zero(), domain.zero(), domain.one())


def add(domain: ScalarDomain, q0: Quaternion, q1: Quaternion) -> Quaternion:
    require_floating(domain, "quaternion add")
    _validate(q0, "q0")
    return vector_ops.add(domain, q0, q1)


def subtract(domain: ScalarDomain, q0: Quaternion, q1: Quaternion) -> Quaternion:
    require_floating(domain, "quaternion subtract")
    _validate(q0, "q0")
    return vector_ops.subtract(domain, q0, q1)


def scale(domain: ScalarDomain, q: Quaternion, r: float) -> Quaternion:
    require_floating(domain, "quaternion scale")
    _validate(q)
    return vector_ops.scale(domain, q, r)


def negate(domain: ScalarDomain, q: Quaternion) -> Quaternion:
    require_floating(domain, "quaternion negate")
    _validate(q)
    return vector_ops.negate(domain, q)


def conjugate(domain: ScalarDomain, q: Quaternion) -> Quaternion:
    """Return the conjugate (-x, -y, -z, w)."""
    require_floating(domain, "quaternion conjugate")
    _validate(q)
    return (domain.negate(q[0]), domain.negate(q[1]), domain.negate(q[2]), q[3])


def dot_product(domain: ScalarDomain, q0: Quaternion, q1: Quaternion) -> Scalar:
    require_floating(domain, "quaternion dot product")
    _validate(q0, "q0")
    return vector_ops.dot_product(domain, q0, q1)


def magnitude_squared(domain: ScalarDomain, q: Quaternion) -> Scalar:
    return dot_product(domain, q, q)


def magnitude(domain: ScalarDomain, q: Quaternion) -> Scalar:
    return domain.sqrt(magnitude_squared(domain, q))


def normalize(domain: ScalarDomain, q: Quaternion) -> Quaternion:
    """Return ``q`` scaled to unit length; a zero quaternion is unchanged."""
    require_floating(domain, "quaternion normalize")
    _validate(q)
    return vector_ops.normalize(domain, q)


def interpolate_linear(
    domain: ScalarDomain, q0: Quaternion, q1: Quaternion, alpha: float
) -> Quaternion:
    """Component-wise linear interpolation, exact at 0 and 1."""
    require_floating(domain, "quaternion interpolate")
    _validate(q0, "q0")
    return vector_ops.interpolate_linear(domain, q0, q1, alpha)


def multiply(domain: ScalarDomain, q0: Quaternion, q1: Quaternion) -> Quaternion:
    """Return the Hamilton product ``q0 q1``.

    As a rotation the product applies ``q1`` first and then ``q0``.
    """
    require_floating(domain, "quaternion multiply")
    _validate(q0, "q0")
    _validate(q1, "q1")
    x0, y0, z0, w0 = q0
    x1, y1, z1, w1 = q1
    mul = domain.multiply
    add_ = domain.add
    sub = domain.subtract

    x: Scalar = sub(add_(add_(mul(w0, x1), mul(x0, w1)), mul(y0, z1)), mul(z0, y1))
    y: Scalar = add_(add_(sub(mul(w0, y1), mul(x0, z1)), mul(y0, w1)), mul(z0, x1))
    z: Scalar = add_(sub(add_(mul(w0, z1), mul(x0, y1)), mul(y0, x1)), mul(z0, w1))
    w: Scalar = sub(sub(sub(mul(w0, w1), mul(x0, x1)), mul(y0, y1)), mul(z0, z1))
    return (x, y, z, w)


def make_from_axis_angle(
    domain: ScalarDomain, axis: Vector, angle: float
) -> Quaternion:
    """Return the rotation of ``angle`` radians about a unit axis.

    The result is normalized.

    Raises:
        DimensionError: If the axis is not a 3-vector
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "make_from_axis_angle")
    if len(axis) != 3:
        raise DimensionError("rotation axis must have 3 components")
    half: float = angle * 0.5
    s: float = math.sin(half)
    q: Quaternion = (
        domain.coerce(axis[0] * s),
        domain.coerce(axis[1] * s),
        domain.coerce(axis[2] * s),
        domain.coerce(math.cos(half)),
    )
    return normalize(domain, q)


def _rotation_rows(domain: ScalarDomain, q: Quaternion) -> list[list[Scalar]]:
    _validate(q)
    x, y, z, w = q
    mul = domain.multiply
    add_ = domain.add
    sub = domain.subtract
    one: Scalar = domain.one()

    xx: Scalar = mul(x, x)
    yy: Scalar = mul(y, y)
    zz: Scalar = mul(z, z)
    xy: Scalar = mul(x, y)
    xz: Scalar = mul(x, z)
    yz: Scalar = mul(y, z)
    xw: Scalar = mul(x, w)
    yw: Scalar = mul(y, w)
    zw: Scalar = mul(z, w)

    return [
        [
            sub(one, domain.scale(add_(yy, zz), 2.0)),
            domain.scale(sub(xy, zw), 2.0),
            domain.scale(add_(xz, yw), 2.0),
        ],
        [
            domain.scale(add_(xy, zw), 2.0),
            sub(one, domain.scale(add_(xx, zz), 2.0)),
            domain.scale(sub(yz, xw), 2.0),
        ],
        [
            domain.scale(sub(xz, yw), 2.0),
            domain.scale(add_(yz, xw), 2.0),
            sub(one, domain.scale(add_(xx, yy), 2.0)),
        ],
    ]


def make_rotation_matrix_3x3(domain: ScalarDomain, q: Quaternion) -> Matrix:
    """Return the 3x3 rotation matrix of a unit quaternion."""
    require_floating(domain, "make_rotation_matrix_3x3")
    return matrix_ops.embed_3x3(domain, 3, _rotation_rows(domain, q))


def make_rotation_matrix_4x4(domain: ScalarDomain, q: Quaternion) -> Matrix:
    """Return the homogeneous 4x4 rotation matrix of a unit quaternion."""
    require_floating(domain, "make_rotation_matrix_4x4")
    return matrix_ops.embed_3x3(domain, 4, _rotation_rows(domain, q))


def make_from_rotation_matrix(domain: ScalarDomain, m: Matrix, n: int) -> Quaternion:
    """Return the unit quaternion of a 3x3 or 4x4 rotation matrix.

    Only the upper-left 3x3 block of a 4x4 matrix is read. The branch is
    chosen from the trace and the largest diagonal element to keep the
    square root argument well away from zero.

    Raises:
        DimensionError: If ``n`` is not 3 or 4
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "make_from_rotation_matrix")
    if n not in (3, 4):
        raise DimensionError("rotation matrices must be 3x3 or 4x4")

    r: list[list[float]] = [
        [float(matrix_ops.get(m, n, i, j)) for j in range(3)] for i in range(3)
    ]
    trace: float = r[0][0] + r[1][1] + r[2][2]

    x: float
    y: float
    z: float
    w: float
    s: float
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        w = 0.25 * s
        x = (r[2][1] - r[1][2]) / s
        y = (r[0][2] - r[2][0]) / s
        z = (r[1][0] - r[0][1]) / s
    elif r[0][0] > r[1][1] and r[0][0] > r[2][2]:
        s = math.sqrt(1.0 + r[0][0] - r[1][1] - r[2][2]) * 2.0
        w = (r[2][1] - r[1][2]) / s
        x = 0.25 * s
        y = (r[0][1] + r[1][0]) / s
        z = (r[0][2] + r[2][0]) / s
    elif r[1][1] > r[2][2]:
        s = math.sqrt(1.0 + r[1][1] - r[0][0] - r[2][2]) * 2.0
        w = (r[0][2] - r[2][0]) / s
        x = (r[0][1] + r[1][0]) / s
        y = 0.25 * s
        z = (r[1][2] + r[2][1]) / s
    else:
        s = math.sqrt(1.0 + r[2][2] - r[0][0] - r[1][1]) * 2.0
        w = (r[1][0] - r[0][1]) / s
        x = (r[0][2] + r[2][0]) / s
        y = (r[1][2] + r[2][1]) / s
        z = 0.25 * s

    q: Quaternion = (
        domain.coerce(x),
        domain.coerce(y),
        domain.coerce(z),
        domain.coerce(w),
    )
    return normalize(domain, q)


def look_at(
    domain: ScalarDomain, origin: Vector, target: Vector, up: Vector
) -> Quaternion:
    """Return the orientation of a view from ``origin`` facing ``target``.

    This is the rotation of :func:`matrix_ops.look_at_3x3` as a unit
    quaternion. The view translation is not represented.
    """
    rotation, _ = matrix_ops.look_at_3x3(domain, origin, target, up)
    return make_from_rotation_matrix(domain, rotation, 3)


def is_negation_of(
    domain: ScalarDomain,
    context: AlmostEqualContext | None,
    qa: Quaternion,
    qb: Quaternion,
) -> bool:
    """Return True if ``qa`` is almost equal to ``-qb`` component-wise.

    A quaternion and its negation describe the same rotation.
    """
    require_floating(domain, "is_negation_of")
    _validate(qa, "qa")
    _validate(qb, "qb")
    return all(
        domain.almost_equal(context, a, domain.negate(b)) for a, b in zip(qa, qb)
    )


def almost_equal(
    domain: ScalarDomain,
    context: AlmostEqualContext | None,
    qa: Quaternion,
    qb: Quaternion,
) -> bool:
    """Return True if all components are almost equal under ``context``."""
    _validate(qa, "qa")
    return vector_ops.almost_equal(domain, context, qa, qb)
