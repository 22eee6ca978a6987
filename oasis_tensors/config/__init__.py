################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration for the tensor kernel."""

from oasis_tensors.config.tolerance_params import ToleranceParams


__all__ = ["ToleranceParams"]
