################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Attitude and heading reference system fusion engine."""

from __future__ import annotations

from oasis_fusion.ahrs.ahrs_state import AhrsState
from oasis_fusion.ahrs.fusion_ahrs import FusionAhrs


__all__ = [
    "AhrsState",
    "FusionAhrs",
]
