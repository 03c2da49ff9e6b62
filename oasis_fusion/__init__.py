################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sensor fusion for inertial and magnetic measurement units.

Public entry points:
    FusionAhrs: Orientation estimator from gyroscope, accelerometer and
        magnetometer samples
    GyroOffsetEstimator: Run-time gyroscope bias correction
    FusionSession: Calibration, bias correction and fusion of timestamped
        samples
"""

from __future__ import annotations

from oasis_fusion.ahrs.fusion_ahrs import FusionAhrs
from oasis_fusion.calibration.sensor_calibration import InertialCalibration
from oasis_fusion.calibration.sensor_calibration import MagneticCalibration
from oasis_fusion.calibration.sensor_calibration import calibrate_inertial
from oasis_fusion.calibration.sensor_calibration import calibrate_magnetic
from oasis_fusion.config.ahrs_settings import AhrsSettings
from oasis_fusion.config.ahrs_settings import Convention
from oasis_fusion.config.fusion_params import AhrsParams
from oasis_fusion.config.fusion_params import OffsetParams
from oasis_fusion.conversions import compass_heading
from oasis_fusion.conversions import quaternion_to_euler
from oasis_fusion.conversions import quaternion_to_matrix
from oasis_fusion.fusion_session import FusionSession
from oasis_fusion.fusion_types.ahrs_status import AhrsFlags
from oasis_fusion.fusion_types.ahrs_status import AhrsInternalStates
from oasis_fusion.fusion_types.euler_angles import EulerAngles
from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.models.gyro_offset import GyroOffsetEstimator


__all__ = [
    "AhrsFlags",
    "AhrsInternalStates",
    "AhrsParams",
    "AhrsSettings",
    "Convention",
    "EulerAngles",
    "FusionAhrs",
    "FusionSession",
    "GyroOffsetEstimator",
    "InertialCalibration",
    "MagneticCalibration",
    "OffsetParams",
    "Quaternion",
    "calibrate_inertial",
    "calibrate_magnetic",
    "compass_heading",
    "quaternion_to_euler",
    "quaternion_to_matrix",
]
