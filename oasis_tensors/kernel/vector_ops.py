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
Vector algebra over plain component tuples

Vectors are tuples of 2, 3 or 4 components ordered (x, y[, z][, w]). Every
function takes the scalar domain as its first argument and performs all
arithmetic through it, so the same code serves float32, float64 and the
checked integer domains. Functions are pure and return new tuples.

Operations that are only meaningful over the reals (normalize, angle,
ortho_normalize, ortho_normalize_3) raise UnsupportedDomainError for integer domains.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from oasis_tensors.errors import DimensionError
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.interpolation import interpolate_linear as _lerp
from oasis_tensors.numeric.scalar_domain import Scalar
from oasis_tensors.numeric.scalar_domain import ScalarDomain
from oasis_tensors.numeric.scalar_domain import require_floating


Vector = tuple[Scalar, ...]

# Vector sizes supported by the kernel
DIMENSIONS: tuple[int, ...] = (2, 3, 4)


def validate_dimension(size: int, name: str = "vector") -> None:
    """Raise DimensionError unless ``size`` is a supported vector size."""
    if size not in DIMENSIONS:
        raise DimensionError(f"{name} must have 2, 3 or 4 components, got {size}")


def _validate_pair(v0: Sequence[Scalar], v1: Sequence[Scalar]) -> None:
    validate_dimension(len(v0), "v0")
    if len(v1) != len(v0):
        raise DimensionError(
            f"vectors must have the same size, got {len(v0)} and {len(v1)}"
        )


def coerce(domain: ScalarDomain, values: Sequence[Scalar]) -> Vector:
    """Convert a sequence of numbers into a vector of the domain.

    Raises:
        DimensionError: If the sequence length is not 2, 3 or 4
        ValueError: If a value is not representable in the domain
    """
    validate_dimension(len(values))
    return tuple(domain.coerce(value) for value in values)


def zero(domain: ScalarDomain, size: int) -> Vector:
    """Return the zero vector of the given size."""
    validate_dimension(size)
    return (domain.zero(),) * size


def add(domain: ScalarDomain, v0: Vector, v1: Vector) -> Vector:
    """Return the component-wise sum ``v0 + v1``."""
    _validate_pair(v0, v1)
    return tuple(domain.add(a, b) for a, b in zip(v0, v1))


def subtract(domain: ScalarDomain, v0: Vector, v1: Vector) -> Vector:
    """Return the component-wise difference ``v0 - v1``."""
    _validate_pair(v0, v1)
    return tuple(domain.subtract(a, b) for a, b in zip(v0, v1))


def scale(domain: ScalarDomain, v: Vector, r: float) -> Vector:
    """Return ``v * r`` for a real factor ``r``."""
    validate_dimension(len(v))
    return tuple(domain.scale(a, r) for a in v)


def add_scaled(domain: ScalarDomain, v0: Vector, v1: Vector, r: float) -> Vector:
    """Return ``v0 + v1 * r``."""
    return add(domain, v0, scale(domain, v1, r))


def absolute(domain: ScalarDomain, v: Vector) -> Vector:
    validate_dimension(len(v))
    return tuple(domain.absolute(a) for a in v)


def negate(domain: ScalarDomain, v: Vector) -> Vector:
    validate_dimension(len(v))
    return tuple(domain.negate(a) for a in v)


def dot_product(domain: ScalarDomain, v0: Vector, v1: Vector) -> Scalar:
    """Return the dot product, accumulated in component order."""
    _validate_pair(v0, v1)
    total: Scalar = domain.zero()
    for a, b in zip(v0, v1):
        total = domain.add(total, domain.multiply(a, b))
    return total


def magnitude_squared(domain: ScalarDomain, v: Vector) -> Scalar:
    return dot_product(domain, v, v)


def magnitude(domain: ScalarDomain, v: Vector) -> Scalar:
    """Return the length of ``v``.

    Integer domains return the square root rounded to the nearest integer.
    """
    return domain.sqrt(magnitude_squared(domain, v))


def distance(domain: ScalarDomain, v0: Vector, v1: Vector) -> Scalar:
    """Return ``magnitude(v0 - v1)``."""
    return magnitude(domain, subtract(domain, v0, v1))


def normalize(domain: ScalarDomain, v: Vector) -> Vector:
    """Return ``v`` scaled to unit length.

    A vector whose squared magnitude is not positive is returned unchanged.

    Raises:
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "normalize")
    m: Scalar = magnitude_squared(domain, v)
    if m > 0.0:
        return scale(domain, v, 1.0 / domain.sqrt(m))
    return v


def interpolate_linear(
    domain: ScalarDomain, v0: Vector, v1: Vector, alpha: float
) -> Vector:
    """Return ``(1 - alpha) * v0 + alpha * v1``, exact at 0 and 1."""
    _validate_pair(v0, v1)
    if alpha == 0.0:
        return v0
    if alpha == 1.0:
        return v1
    return tuple(_lerp(a, b, alpha, domain) for a, b in zip(v0, v1))


def projection(domain: ScalarDomain, p: Vector, q: Vector) -> Vector:
    """Project ``p`` onto ``q``.

    Computes ``(dot(p, q) / magnitude_squared(q)) * q``. The ratio is taken
    as a real number for every domain. A zero ``q`` gives NaN components in
    floating domains and raises ZeroDivisionError in integer domains.
    """
    ratio: float = domain.divide_real(
        dot_product(domain, p, q), magnitude_squared(domain, q)
    )
    return scale(domain, q, ratio)


def _at_least(value: Scalar, minimum: Scalar) -> Scalar:
    # NaN components are kept
    return minimum if value < minimum else value


def _at_most(value: Scalar, maximum: Scalar) -> Scalar:
    return maximum if value > maximum else value


def clamp(
    domain: ScalarDomain, v: Vector, minimum: Scalar, maximum: Scalar
) -> Vector:
    """Clamp every component into ``[minimum, maximum]``."""
    validate_dimension(len(v))
    lo: Scalar = domain.coerce(minimum)
    hi: Scalar = domain.coerce(maximum)
    return tuple(_at_most(_at_least(a, lo), hi) for a in v)


def clamp_by_vector(
    domain: ScalarDomain, v: Vector, minimum: Vector, maximum: Vector
) -> Vector:
    """Clamp every component into the matching component range."""
    _validate_pair(v, minimum)
    _validate_pair(v, maximum)
    return tuple(
        _at_most(_at_least(a, lo), hi) for a, lo, hi in zip(v, minimum, maximum)
    )


def clamp_minimum(domain: ScalarDomain, v: Vector, minimum: Scalar) -> Vector:
    validate_dimension(len(v))
    lo: Scalar = domain.coerce(minimum)
    return tuple(_at_least(a, lo) for a in v)


def clamp_minimum_by_vector(domain: ScalarDomain, v: Vector, minimum: Vector) -> Vector:
    _validate_pair(v, minimum)
    return tuple(_at_least(a, lo) for a, lo in zip(v, minimum))


def clamp_maximum(domain: ScalarDomain, v: Vector, maximum: Scalar) -> Vector:
    validate_dimension(len(v))
    hi: Scalar = domain.coerce(maximum)
    return tuple(_at_most(a, hi) for a in v)


def clamp_maximum_by_vector(domain: ScalarDomain, v: Vector, maximum: Vector) -> Vector:
    _validate_pair(v, maximum)
    return tuple(_at_most(a, hi) for a, hi in zip(v, maximum))


def _orthogonal_remainder(
    domain: ScalarDomain,
    context: AlmostEqualContext,
    v: Vector,
    basis: Sequence[Vector],
) -> Vector:
    remainder: Vector = v
    for n in basis:
        remainder = subtract(
            domain, remainder, scale(domain, n, dot_product(domain, v, n))
        )
    # A remainder at rounding-noise level means v lies in the span of the basis
    limit: float = float(magnitude(domain, v)) * context.max_relative_difference
    if float(magnitude(domain, remainder)) <= limit:
        return zero(domain, len(v))
    return normalize(domain, remainder)


def ortho_normalize(
    domain: ScalarDomain,
    v0: Vector,
    v1: Vector,
    context: AlmostEqualContext | None = None,
) -> tuple[Vector, Vector]:
    """Orthonormalize two vectors with one Gram-Schmidt step.

    When ``v1`` is parallel to ``v0`` the remainder ``v1 - dot(v1, n0) * n0``
    is rounding noise. If its length is within the relative tolerance of
    ``context`` (the domain default when None) times ``|v1|``, the zero vector
    is returned for ``n1`` instead of a normalized noise direction.

    Returns:
        ``(n0, n1)`` where ``n0 = normalize(v0)`` and
        ``n1 = normalize(v1 - dot(v1, n0) * n0)``

    Raises:
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "ortho_normalize")
    _validate_pair(v0, v1)
    ctx: AlmostEqualContext = domain.default_context() if context is None else context
    n0: Vector = normalize(domain, v0)
    n1: Vector = _orthogonal_remainder(domain, ctx, v1, (n0,))
    return n0, n1


def ortho_normalize_3(
    domain: ScalarDomain,
    v0: Vector,
    v1: Vector,
    v2: Vector,
    context: AlmostEqualContext | None = None,
) -> tuple[Vector, Vector, Vector]:
    """Orthonormalize three vectors with Gram-Schmidt.

    ``n2`` is ``v2`` with its components along ``n0`` and ``n1`` removed,
    then normalized. Degenerate remainders give the zero vector as in
    :func:`ortho_normalize`.

    Raises:
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "ortho_normalize_3")
    _validate_pair(v0, v1)
    _validate_pair(v0, v2)
    ctx: AlmostEqualContext = domain.default_context() if context is None else context
    n0: Vector = normalize(domain, v0)
    n1: Vector = _orthogonal_remainder(domain, ctx, v1, (n0,))
    n2: Vector = _orthogonal_remainder(domain, ctx, v2, (n0, n1))
    return n0, n1, n2


def cross_product(domain: ScalarDomain, v0: Vector, v1: Vector) -> Vector:
    """Return the right-handed cross product of two 3-vectors.

    Raises:
        DimensionError: If either vector does not have 3 components
    """
    if len(v0) != 3 or len(v1) != 3:
        raise DimensionError("cross product requires 3-component vectors")
    x0, y0, z0 = v0
    x1, y1, z1 = v1
    return (
        domain.subtract(domain.multiply(y0, z1), domain.multiply(z0, y1)),
        domain.subtract(domain.multiply(z0, x1), domain.multiply(x0, z1)),
        domain.subtract(domain.multiply(x0, y1), domain.multiply(y0, x1)),
    )


def angle(domain: ScalarDomain, v0: Vector, v1: Vector) -> float:
    """Return the angle between two vectors in radians.

    The cosine is clamped to [-1, 1] before ``acos``. A zero-length operand
    gives NaN.

    Raises:
        UnsupportedDomainError: If the domain is not floating point
    """
    require_floating(domain, "angle")
    m0: Scalar = magnitude(domain, v0)
    m1: Scalar = magnitude(domain, v1)
    cosine: float = domain.divide_real(
        dot_product(domain, v0, v1), domain.multiply(m0, m1)
    )
    if math.isnan(cosine):
        return math.nan
    return math.acos(max(-1.0, min(1.0, cosine)))


def almost_equal(
    domain: ScalarDomain,
    context: AlmostEqualContext | None,
    v0: Vector,
    v1: Vector,
) -> bool:
    """Return True if all components are almost equal under ``context``."""
    _validate_pair(v0, v1)
    return all(domain.almost_equal(context, a, b) for a, b in zip(v0, v1))


def approximately_equal(domain: ScalarDomain, v0: Vector, v1: Vector) -> bool:
    """Return True if all components are approximately equal."""
    _validate_pair(v0, v1)
    return all(domain.approximately_equal(a, b) for a, b in zip(v0, v1))
