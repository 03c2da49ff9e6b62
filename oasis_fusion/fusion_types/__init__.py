################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Value types reported by the fusion engine."""

from __future__ import annotations

from oasis_fusion.fusion_types.ahrs_status import AhrsFlags
from oasis_fusion.fusion_types.ahrs_status import AhrsInternalStates
from oasis_fusion.fusion_types.euler_angles import EulerAngles


__all__ = [
    "AhrsFlags",
    "AhrsInternalStates",
    "EulerAngles",
]
