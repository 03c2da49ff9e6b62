################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Mutable state of the AHRS fusion engine."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import zero3


@dataclass
class AhrsState:
    """State owned by one FusionAhrs instance.

    The rejection/recovery bookkeeping for the accelerometer and the
    magnetometer is kept in independent counters because both sources can be
    rejected or recovering at the same time.

    Attributes:
        quaternion: Orientation of the sensor frame in the earth frame
        accelerometer: Last accelerometer sample in g
        earth_acceleration: Last gravity-free acceleration in the earth frame
            in g
        initialising: True while the gain ramps down after a reset
        ramped_gain: Gain applied to the feedback terms
        ramped_gain_step: Ramped gain decrement per second
        angular_rate_recovery: True while re-initialising after the gyroscope
            range was exceeded
        angular_rate_overflow: True if the last gyroscope sample exceeded the
            gyroscope range
        half_accelerometer_feedback: Last accelerometer feedback, scaled by 0.5
        half_magnetometer_feedback: Last magnetometer feedback, scaled by 0.5
        accelerometer_ignored: The last update ignored the accelerometer
        acceleration_recovery_trigger: Rejection counter, in samples
        acceleration_recovery_timeout: Counter value that forces admission
        magnetometer_ignored: The last update ignored the magnetometer
        magnetic_recovery_trigger: Rejection counter, in samples
        magnetic_recovery_timeout: Counter value that forces admission
    """

    quaternion: Quaternion
    accelerometer: Vector3
    earth_acceleration: Vector3
    initialising: bool
    ramped_gain: float
    ramped_gain_step: float
    angular_rate_recovery: bool
    angular_rate_overflow: bool
    half_accelerometer_feedback: Vector3
    half_magnetometer_feedback: Vector3
    accelerometer_ignored: bool
    acceleration_recovery_trigger: int
    acceleration_recovery_timeout: int
    magnetometer_ignored: bool
    magnetic_recovery_trigger: int
    magnetic_recovery_timeout: int

    @classmethod
    def initial(
        cls,
        *,
        initial_gain: float,
        ramped_gain_step: float,
        recovery_trigger_period: int,
    ) -> AhrsState:
        """Return the state of a freshly reset engine."""
        return cls(
            quaternion=Quaternion.identity(),
            accelerometer=zero3(),
            earth_acceleration=zero3(),
            initialising=True,
            ramped_gain=initial_gain,
            ramped_gain_step=ramped_gain_step,
            angular_rate_recovery=False,
            angular_rate_overflow=False,
            half_accelerometer_feedback=zero3(),
            half_magnetometer_feedback=zero3(),
            accelerometer_ignored=False,
            acceleration_recovery_trigger=0,
            acceleration_recovery_timeout=recovery_trigger_period,
            magnetometer_ignored=False,
            magnetic_recovery_trigger=0,
            magnetic_recovery_timeout=recovery_trigger_period,
        )

    def reset(self, *, initial_gain: float, recovery_trigger_period: int) -> None:
        """Return every field to its initial value in place.

        ramped_gain_step depends only on the settings and is kept.
        """
        self.quaternion = Quaternion.identity()
        self.accelerometer = zero3()
        self.earth_acceleration = zero3()
        self.initialising = True
        self.ramped_gain = initial_gain
        self.angular_rate_recovery = False
        self.angular_rate_overflow = False
        self.half_accelerometer_feedback = zero3()
        self.half_magnetometer_feedback = zero3()
        self.accelerometer_ignored = False
        self.acceleration_recovery_trigger = 0
        self.acceleration_recovery_timeout = recovery_trigger_period
        self.magnetometer_ignored = False
        self.magnetic_recovery_trigger = 0
        self.magnetic_recovery_timeout = recovery_trigger_period

    @property
    def acceleration_recovery(self) -> bool:
        """Return True while the accelerometer is force-admitted."""
        return self.acceleration_recovery_trigger > self.acceleration_recovery_timeout

    @property
    def magnetic_recovery(self) -> bool:
        """Return True while the magnetometer is force-admitted."""
        return self.magnetic_recovery_trigger > self.magnetic_recovery_timeout
