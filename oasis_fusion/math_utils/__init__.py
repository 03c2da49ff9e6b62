################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-size vector, matrix and quaternion math for sensor fusion."""

from __future__ import annotations

from oasis_fusion.math_utils.matrix import Matrix3
from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.math_utils.vector import Vector3


__all__ = [
    "Matrix3",
    "Quaternion",
    "Vector3",
]
