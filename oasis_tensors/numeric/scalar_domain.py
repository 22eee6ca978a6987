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
Numeric domain policy for the tensor kernel

A scalar domain supplies the primitive arithmetic used by every kernel
operation. All vectors, matrices and quaternions carry their domain, and the
kernel never performs arithmetic on components except through it.

Domains:
    * FLOAT32 and FLOAT64 follow IEEE-754 semantics and never raise. FLOAT32
      rounds the result of every primitive operation to binary32
    * INT32 and INT64 are checked: a result outside the representable range
      raises ArithmeticOverflowError instead of wrapping. Scaling by a
      non-integral factor rounds half away from zero before the range check

New domains, e.g. fixed point, participate by subclassing ScalarDomain.
"""

from __future__ import annotations

import logging
import math
import numbers
from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass
from dataclasses import replace
from fractions import Fraction
from typing import Union

import numpy as np

from oasis_tensors.config.tolerance_params import ToleranceParams
from oasis_tensors.errors import ArithmeticOverflowError
from oasis_tensors.errors import UnsupportedDomainError
from oasis_tensors.numeric.equality import APPROXIMATE_EPSILON_DOUBLE
from oasis_tensors.numeric.equality import APPROXIMATE_EPSILON_FLOAT
from oasis_tensors.numeric.equality import AlmostEqualContext
from oasis_tensors.numeric.equality import almost_equal
from oasis_tensors.numeric.equality import approximately_equal


Scalar = Union[int, float]

_LOG: logging.Logger = logging.getLogger(__name__)

_HALF: Fraction = Fraction(1, 2)

# Integer domains compare exactly
_EXACT_CONTEXT: AlmostEqualContext = AlmostEqualContext(
    max_absolute_difference=0.0,
    max_relative_difference=0.0,
)


class ScalarDomain(ABC):
    """Arithmetic rules for one element domain."""

    __slots__ = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the domain name, e.g. ``float32``."""

    @property
    @abstractmethod
    def floating(self) -> bool:
        """Return True for floating-point domains."""

    @property
    @abstractmethod
    def dtype(self) -> np.dtype:
        """Return the numpy dtype used when exporting components."""

    @abstractmethod
    def coerce(self, value: Scalar) -> Scalar:
        """Convert a number into a representable value of this domain."""

    @abstractmethod
    def add(self, a: Scalar, b: Scalar) -> Scalar:
        """Return ``a + b``."""

    @abstractmethod
    def subtract(self, a: Scalar, b: Scalar) -> Scalar:
        """Return ``a - b``."""

    @abstractmethod
    def multiply(self, a: Scalar, b: Scalar) -> Scalar:
        """Return ``a * b`` for two values of this domain."""

    @abstractmethod
    def scale(self, a: Scalar, r: float) -> Scalar:
        """Return ``a * r`` for a real factor ``r``."""

    @abstractmethod
    def interpolate(self, a: Scalar, b: Scalar, alpha: float) -> Scalar:
        """Return ``(1 - alpha) * a + alpha * b`` rounded once into this domain."""

    @abstractmethod
    def absolute(self, a: Scalar) -> Scalar:
        """Return ``|a|``."""

    @abstractmethod
    def negate(self, a: Scalar) -> Scalar:
        """Return ``-a``."""

    @abstractmethod
    def sqrt(self, a: Scalar) -> Scalar:
        """Return the square root of a non-negative value."""

    @abstractmethod
    def divide_real(self, a: Scalar, b: Scalar) -> float:
        """Return the real ratio ``a / b``."""

    @abstractmethod
    def default_context(self) -> AlmostEqualContext:
        """Return the context used when callers do not supply one."""

    @abstractmethod
    def almost_equal(
        self, context: AlmostEqualContext | None, a: Scalar, b: Scalar
    ) -> bool:
        """Compare two values under a relative-tolerance context."""

    @abstractmethod
    def approximately_equal(self, a: Scalar, b: Scalar) -> bool:
        """Compare two values with the fixed heuristic of this domain."""

    @abstractmethod
    def zero(self) -> Scalar:
        """Return the additive identity."""

    @abstractmethod
    def one(self) -> Scalar:
        """Return the multiplicative identity."""


@dataclass(frozen=True, slots=True)
class FloatDomain(ScalarDomain):
    """IEEE-754 floating-point domain of 32 or 64 bits."""

    bits: int
    context: AlmostEqualContext

    def __post_init__(self) -> None:
        """Validate the precision."""
        if self.bits not in (32, 64):
            raise ValueError("bits must be 32 or 64")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FloatDomain):
            return NotImplemented
        return self.bits == other.bits

    def __hash__(self) -> int:
        return hash(("float", self.bits))

    @property
    def name(self) -> str:
        return f"float{self.bits}"

    @property
    def floating(self) -> bool:
        return True

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.float32 if self.bits == 32 else np.float64)

    def with_context(self, context: AlmostEqualContext) -> FloatDomain:
        """Return this domain with a different default comparison context."""
        return replace(self, context=context)

    def coerce(self, value: Scalar) -> float:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(f"{value!r} is not a real number")
        return self._round(float(value))

    def add(self, a: Scalar, b: Scalar) -> float:
        return self._round(a + b)

    def subtract(self, a: Scalar, b: Scalar) -> float:
        return self._round(a - b)

    def multiply(self, a: Scalar, b: Scalar) -> float:
        return self._round(a * b)

    def scale(self, a: Scalar, r: float) -> float:
        return self._round(a * float(r))

    def interpolate(self, a: Scalar, b: Scalar, alpha: float) -> float:
        return self.add(self.scale(a, 1.0 - alpha), self.scale(b, alpha))

    def absolute(self, a: Scalar) -> float:
        return float(abs(a))

    def negate(self, a: Scalar) -> float:
        return float(-a)

    def sqrt(self, a: Scalar) -> float:
        if math.isnan(a) or a < 0.0:
            return math.nan
        return self._round(math.sqrt(a))

    def divide_real(self, a: Scalar, b: Scalar) -> float:
        if b == 0.0:
            if a == 0.0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return float(a) / float(b)

    def default_context(self) -> AlmostEqualContext:
        return self.context

    def almost_equal(
        self, context: AlmostEqualContext | None, a: Scalar, b: Scalar
    ) -> bool:
        return almost_equal(context if context is not None else self.context, a, b)

    def approximately_equal(self, a: Scalar, b: Scalar) -> bool:
        epsilon: float = (
            APPROXIMATE_EPSILON_FLOAT if self.bits == 32 else APPROXIMATE_EPSILON_DOUBLE
        )
        return approximately_equal(a, b, epsilon)

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def _round(self, value: float) -> float:
        if self.bits == 64:
            return value
        with np.errstate(over="ignore"):
            return float(np.float32(value))


@dataclass(frozen=True, slots=True)
class CheckedIntegerDomain(ScalarDomain):
    """Two's-complement integer domain with overflow-checked arithmetic."""

    bits: int

    def __post_init__(self) -> None:
        """Validate the width."""
        if self.bits not in (32, 64):
            raise ValueError("bits must be 32 or 64")

    @property
    def name(self) -> str:
        return f"int{self.bits}"

    @property
    def floating(self) -> bool:
        return False

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.int32 if self.bits == 32 else np.int64)

    @property
    def minimum(self) -> int:
        """Return the smallest representable value."""
        return -(1 << (self.bits - 1))

    @property
    def maximum(self) -> int:
        """Return the largest representable value."""
        return (1 << (self.bits - 1)) - 1

    def coerce(self, value: Scalar) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{value!r} is not an integer")
        if isinstance(value, numbers.Integral):
            return self._check("coerce", int(value), value)
        if isinstance(value, numbers.Real):
            real: float = float(value)
            if not real.is_integer():
                raise ValueError(f"{value!r} is not an integer")
            return self._check("coerce", int(real), value)
        raise ValueError(f"{value!r} is not an integer")

    def add(self, a: Scalar, b: Scalar) -> int:
        return self._check("add", int(a) + int(b), a, b)

    def subtract(self, a: Scalar, b: Scalar) -> int:
        return self._check("subtract", int(a) - int(b), a, b)

    def multiply(self, a: Scalar, b: Scalar) -> int:
        return self._check("multiply", int(a) * int(b), a, b)

    def scale(self, a: Scalar, r: float) -> int:
        if isinstance(r, numbers.Integral):
            return self._check("scale", int(a) * int(r), a, r)
        factor: float = float(r)
        if not math.isfinite(factor):
            _LOG.debug("Non-finite scale factor %s in %s", factor, self.name)
            raise ArithmeticOverflowError(
                f"scale of {a} by {factor} overflows {self.name}"
            )
        if factor.is_integer():
            return self._check("scale", int(a) * int(factor), a, r)
        product: Fraction = Fraction(int(a)) * Fraction(factor)
        return self._check("scale", _round_half_away(product), a, r)

    def interpolate(self, a: Scalar, b: Scalar, alpha: float) -> int:
        weight: float = float(alpha)
        if not math.isfinite(weight):
            _LOG.debug("Non-finite interpolation weight %s in %s", weight, self.name)
            raise ArithmeticOverflowError(
                f"interpolation of {a} and {b} by {weight} overflows {self.name}"
            )
        start: Fraction = Fraction(int(a))
        blend: Fraction = start + (Fraction(int(b)) - start) * Fraction(weight)
        return self._check("interpolate", _round_half_away(blend), a, b, alpha)

    def absolute(self, a: Scalar) -> int:
        return self._check("absolute", abs(int(a)), a)

    def negate(self, a: Scalar) -> int:
        return self._check("negate", -int(a), a)

    def sqrt(self, a: Scalar) -> int:
        value: int = int(a)
        if value < 0:
            raise ValueError("square root of a negative integer")
        root: int = math.isqrt(value)
        # Round to nearest: sqrt(x) >= root + 0.5 iff x > root^2 + root
        if value - root * root > root:
            root += 1
        return root

    def divide_real(self, a: Scalar, b: Scalar) -> float:
        if b == 0:
            raise ZeroDivisionError(f"division by zero in {self.name}")
        return int(a) / int(b)

    def default_context(self) -> AlmostEqualContext:
        return _EXACT_CONTEXT

    def almost_equal(
        self, context: AlmostEqualContext | None, a: Scalar, b: Scalar
    ) -> bool:
        return a == b

    def approximately_equal(self, a: Scalar, b: Scalar) -> bool:
        return a == b

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def _check(self, operation: str, result: int, *operands: object) -> int:
        if result < self.minimum or result > self.maximum:
            _LOG.debug(
                "Checked %s overflow in %s, operands %s", operation, self.name, operands
            )
            raise ArithmeticOverflowError(
                f"{operation} of {operands} overflows {self.name}"
            )
        return result


def require_floating(domain: ScalarDomain, operation: str) -> None:
    """Raise UnsupportedDomainError unless the domain is floating point."""
    if not domain.floating:
        raise UnsupportedDomainError(
            f"{operation} is not defined for the {domain.name} domain"
        )


def _round_half_away(value: Fraction) -> int:
    magnitude: int = math.floor(abs(value) + _HALF)
    return magnitude if value >= 0 else -magnitude


_DEFAULT_TOLERANCES: ToleranceParams = ToleranceParams.defaults()

FLOAT32: FloatDomain = FloatDomain(
    bits=32, context=_DEFAULT_TOLERANCES.context_for_bits(32)
)
FLOAT64: FloatDomain = FloatDomain(
    bits=64, context=_DEFAULT_TOLERANCES.context_for_bits(64)
)
INT32: CheckedIntegerDomain = CheckedIntegerDomain(bits=32)
INT64: CheckedIntegerDomain = CheckedIntegerDomain(bits=64)
