################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sensor calibration models for inertial and magnetic sensors."""

from __future__ import annotations

from oasis_fusion.calibration.sensor_calibration import InertialCalibration
from oasis_fusion.calibration.sensor_calibration import MagneticCalibration
from oasis_fusion.calibration.sensor_calibration import calibrate_inertial
from oasis_fusion.calibration.sensor_calibration import calibrate_magnetic


__all__ = [
    "InertialCalibration",
    "MagneticCalibration",
    "calibrate_inertial",
    "calibrate_magnetic",
]
