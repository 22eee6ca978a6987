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
Phantom coordinate-space tags

A tag is a class used only as a type argument, e.g. ``PVectorI[World]``. Tags
carry no state and are never stored on instances, so two values that differ
only by tag are equal at runtime. The distinction is enforced by a static
type checker: the type variables below are invariant, so a
``PVectorI[World]`` cannot be passed where a ``PVectorI[Body]`` is expected.

Example:
    class World(Tag):
        pass

    class Body(Tag):
        pass

    body_to_world: PMatrixI[Body, World]
    p_body: PVectorI[Body]
    p_world: PVectorI[World] = body_to_world.multiply_vector(p_body)
"""

from __future__ import annotations

from typing import TypeVar


class Tag:
    """Optional base class for coordinate-space tag types."""

    __slots__ = ()


# Tag of a vector or the single space of an operation
TagT = TypeVar("TagT")

# Source space of a tagged matrix
TagT0 = TypeVar("TagT0")

# Destination space of a tagged matrix
TagT1 = TypeVar("TagT1")

# Destination space of a matrix composition
TagT2 = TypeVar("TagT2")
