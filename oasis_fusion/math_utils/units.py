################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numeric constants and guarded scalar functions."""

from __future__ import annotations

import math


class NumericConstants:
    """Thresholds shared by the fusion math layer."""

    # Squared-norm threshold below which a vector is treated as degenerate
    NORM_SQ_EPS: float = 1e-24
    # Half-angle sine threshold for axis-angle recovery
    AXIS_ANGLE_EPS: float = 1e-9


def asin_safe(value: float) -> float:
    """Return asin(value) with the argument clamped to [-1, 1]."""
    if value <= -1.0:
        return -0.5 * math.pi
    if value >= 1.0:
        return 0.5 * math.pi
    return math.asin(value)
