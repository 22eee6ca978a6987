################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tolerance configuration for floating-point comparisons."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from oasis_tensors.numeric.equality import AlmostEqualContext


# Absolute difference below which two float32 values are almost equal
FLOAT32_MAX_ABSOLUTE_DIFFERENCE: float = 1e-6
# Relative difference below which two float32 values are almost equal
FLOAT32_MAX_RELATIVE_DIFFERENCE: float = 1e-5

# Absolute difference below which two float64 values are almost equal
FLOAT64_MAX_ABSOLUTE_DIFFERENCE: float = 1e-12
# Relative difference below which two float64 values are almost equal
FLOAT64_MAX_RELATIVE_DIFFERENCE: float = 1e-9


@dataclass(frozen=True, slots=True)
class ToleranceParams:
    """Parameters for the almost-equal contexts of the floating domains.

    Responsibility:
        Hold the relative-tolerance contexts used by almost-equal
        comparisons and by the singular-matrix test of matrix inversion.

    Data contract:
        - float32_max_absolute_difference: absolute tolerance for float32.
        - float32_max_relative_difference: relative tolerance for float32.
        - float64_max_absolute_difference: absolute tolerance for float64.
        - float64_max_relative_difference: relative tolerance for float64.

    Determinism and edge cases:
        - Parameters are immutable once constructed.
        - Construction never reads the environment or any file.
        - Tolerances must be finite and non-negative.
    """

    float32_max_absolute_difference: float
    float32_max_relative_difference: float
    float64_max_absolute_difference: float
    float64_max_relative_difference: float

    @staticmethod
    def defaults() -> ToleranceParams:
        """Return the default tolerance set."""
        params: ToleranceParams = ToleranceParams(
            float32_max_absolute_difference=FLOAT32_MAX_ABSOLUTE_DIFFERENCE,
            float32_max_relative_difference=FLOAT32_MAX_RELATIVE_DIFFERENCE,
            float64_max_absolute_difference=FLOAT64_MAX_ABSOLUTE_DIFFERENCE,
            float64_max_relative_difference=FLOAT64_MAX_RELATIVE_DIFFERENCE,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> ToleranceParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: ToleranceParams = cls.defaults()
        result: ToleranceParams = cls(
            float32_max_absolute_difference=cls._as_float(
                "float32_max_absolute_difference",
                params.get(
                    "float32_max_absolute_difference",
                    defaults.float32_max_absolute_difference,
                ),
            ),
            float32_max_relative_difference=cls._as_float(
                "float32_max_relative_difference",
                params.get(
                    "float32_max_relative_difference",
                    defaults.float32_max_relative_difference,
                ),
            ),
            float64_max_absolute_difference=cls._as_float(
                "float64_max_absolute_difference",
                params.get(
                    "float64_max_absolute_difference",
                    defaults.float64_max_absolute_difference,
                ),
            ),
            float64_max_relative_difference=cls._as_float(
                "float64_max_relative_difference",
                params.get(
                    "float64_max_relative_difference",
                    defaults.float64_max_relative_difference,
                ),
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        for name in self._field_order():
            self._validate_tolerance(name, getattr(self, name))

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {name: getattr(self, name) for name in self._field_order()}

    def context_for_bits(self, bits: int) -> AlmostEqualContext:
        """Return the almost-equal context for a float precision in bits."""
        if bits == 32:
            return AlmostEqualContext(
                max_absolute_difference=self.float32_max_absolute_difference,
                max_relative_difference=self.float32_max_relative_difference,
            )
        if bits == 64:
            return AlmostEqualContext(
                max_absolute_difference=self.float64_max_absolute_difference,
                max_relative_difference=self.float64_max_relative_difference,
            )
        raise ValueError(f"unsupported float precision: {bits}")

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a float")
        return float(value)

    @staticmethod
    def _validate_tolerance(name: str, value: float) -> None:
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite")
        if value < 0.0:
            raise ValueError(f"{name} must be >= 0")

    @staticmethod
    def _field_order() -> list[str]:
        return [
            "float32_max_absolute_difference",
            "float32_max_relative_difference",
            "float64_max_absolute_difference",
            "float64_max_relative_difference",
        ]
