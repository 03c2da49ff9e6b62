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
Timestamped sensor fusion pipeline

A session owns the full per-sample chain for one IMU:

    raw sample -> calibration -> gyroscope offset -> AHRS

and converts absolute sample timestamps into the delta times the AHRS
engine integrates. The first sample is the time reference and integrates
over zero seconds.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from oasis_fusion.ahrs.fusion_ahrs import FusionAhrs
from oasis_fusion.calibration.sensor_calibration import InertialCalibration
from oasis_fusion.calibration.sensor_calibration import MagneticCalibration
from oasis_fusion.config.ahrs_settings import AhrsSettings
from oasis_fusion.config.fusion_params import AhrsParams
from oasis_fusion.config.fusion_params import OffsetParams
from oasis_fusion.config.fusion_yaml import FusionConfig
from oasis_fusion.conversions import quaternion_to_euler
from oasis_fusion.fusion_types.euler_angles import EulerAngles
from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import VectorLike
from oasis_fusion.models.gyro_offset import GyroOffsetEstimator


_LOG: logging.Logger = logging.getLogger(__name__)


class FusionSession:
    """
    Calibrate, de-bias and fuse timestamped IMU samples
    """

    def __init__(
        self,
        sample_rate_hz: float,
        settings: Optional[AhrsSettings] = None,
        *,
        gyroscope_calibration: Optional[InertialCalibration] = None,
        accelerometer_calibration: Optional[InertialCalibration] = None,
        magnetometer_calibration: Optional[MagneticCalibration] = None,
        ahrs_params: Optional[AhrsParams] = None,
        offset_params: Optional[OffsetParams] = None,
    ) -> None:
        self.gyroscope_calibration: InertialCalibration = (
            gyroscope_calibration or InertialCalibration()
        )
        self.accelerometer_calibration: InertialCalibration = (
            accelerometer_calibration or InertialCalibration()
        )
        self.magnetometer_calibration: MagneticCalibration = (
            magnetometer_calibration or MagneticCalibration()
        )

        self._offset: GyroOffsetEstimator = GyroOffsetEstimator(
            sample_rate_hz, offset_params
        )
        self._ahrs: FusionAhrs = FusionAhrs(ahrs_params, settings)
        self._last_timestamp_sec: Optional[float] = None

    @classmethod
    def from_config(cls, sample_rate_hz: float, config: FusionConfig) -> FusionSession:
        """
        Create a session from a parsed fusion YAML configuration
        """

        return cls(
            sample_rate_hz,
            config.ahrs_settings,
            gyroscope_calibration=config.gyroscope_calibration,
            accelerometer_calibration=config.accelerometer_calibration,
            magnetometer_calibration=config.magnetometer_calibration,
            ahrs_params=config.ahrs_params,
            offset_params=config.offset_params,
        )

    @property
    def ahrs(self) -> FusionAhrs:
        return self._ahrs

    @property
    def gyro_offset(self) -> GyroOffsetEstimator:
        return self._offset

    @property
    def last_timestamp_sec(self) -> Optional[float]:
        return self._last_timestamp_sec

    def reset(self) -> None:
        """
        Reset the AHRS, the offset estimator and the time reference
        """

        self._ahrs.reset()
        self._offset.reset()
        self._last_timestamp_sec = None

    def update(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        magnetometer: VectorLike,
        timestamp_sec: float,
    ) -> None:
        delta_time_sec: float = self._advance(timestamp_sec)
        gyr: Vector3 = self._offset.update(self.gyroscope_calibration.apply(gyroscope))
        acc: Vector3 = self.accelerometer_calibration.apply(accelerometer)
        mag: Vector3 = self.magnetometer_calibration.apply(magnetometer)
        self._ahrs.update(gyr, acc, mag, delta_time_sec)

    def update_no_magnetometer(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        timestamp_sec: float,
    ) -> None:
        delta_time_sec: float = self._advance(timestamp_sec)
        gyr: Vector3 = self._offset.update(self.gyroscope_calibration.apply(gyroscope))
        acc: Vector3 = self.accelerometer_calibration.apply(accelerometer)
        self._ahrs.update_no_magnetometer(gyr, acc, delta_time_sec)

    def update_external_heading(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        heading_deg: float,
        timestamp_sec: float,
    ) -> None:
        delta_time_sec: float = self._advance(timestamp_sec)
        gyr: Vector3 = self._offset.update(self.gyroscope_calibration.apply(gyroscope))
        acc: Vector3 = self.accelerometer_calibration.apply(accelerometer)
        self._ahrs.update_external_heading(gyr, acc, heading_deg, delta_time_sec)

    def euler(self) -> EulerAngles:
        return quaternion_to_euler(self._ahrs.quaternion)

    def quaternion(self) -> Quaternion:
        return self._ahrs.quaternion

    def earth_acceleration(self) -> Vector3:
        return self._ahrs.earth_acceleration

    def _advance(self, timestamp_sec: float) -> float:
        """
        Return the elapsed time since the previous sample, in seconds
        """

        timestamp: float = float(timestamp_sec)
        if not math.isfinite(timestamp):
            _LOG.warning("Ignoring non-finite sample timestamp")
            return 0.0
        if self._last_timestamp_sec is None:
            self._last_timestamp_sec = timestamp
            return 0.0

        delta_time_sec: float = timestamp - self._last_timestamp_sec
        if delta_time_sec < 0.0:
            _LOG.warning(
                "Non-monotonic sample timestamp %.6f after %.6f, integrating 0 s",
                timestamp,
                self._last_timestamp_sec,
            )
            delta_time_sec = 0.0
        self._last_timestamp_sec = timestamp
        return delta_time_sec
