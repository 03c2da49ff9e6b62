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
Configuration for sensor fusion
"""

from __future__ import annotations

from oasis_fusion.config.ahrs_settings import AhrsSettings
from oasis_fusion.config.ahrs_settings import AhrsSettingsError
from oasis_fusion.config.ahrs_settings import Convention
from oasis_fusion.config.fusion_params import AhrsParams
from oasis_fusion.config.fusion_params import FusionParamsError
from oasis_fusion.config.fusion_params import OffsetParams
from oasis_fusion.config.fusion_yaml import FusionConfig
from oasis_fusion.config.fusion_yaml import FusionYamlError


__all__ = [
    "AhrsParams",
    "AhrsSettings",
    "AhrsSettingsError",
    "Convention",
    "FusionConfig",
    "FusionParamsError",
    "FusionYamlError",
    "OffsetParams",
]
